"""
Tests for feature flags configuration and rollout management.

This module tests the feature flag system including:
- Feature flag creation and management
- Rollout phases restricting a flag to test users
- Environment variable overrides
"""

import logging

from selection_analysis.config.features import (
    DEFAULT_FEATURE_FLAGS,
    FEATURE_CATEGORIES,
    FEATURE_DESCRIPTIONS,
    FeatureFlag,
    FeatureFlags,
    RolloutConfig,
    RolloutPhase,
    clear_rollout,
    configure_rollout,
    create_feature_flag,
    get_feature_flag,
    get_feature_flags,
    is_feature_enabled,
    set_feature_flag,
)


class TestFeatureFlag:
    """Tests for FeatureFlag dataclass."""

    def test_create_feature_flag(self):
        """Test creating a feature flag with default values."""
        flag = FeatureFlag(
            name="test_feature",
            enabled=True,
            description="Test feature description",
        )

        assert flag.name == "test_feature"
        assert flag.enabled is True
        assert flag.category == "general"
        assert flag.rollout_config is None

    def test_enable_and_disable(self):
        """Test toggling a feature flag updates its timestamp."""
        flag = FeatureFlag(name="test_feature", enabled=False, description="Test feature")
        before = flag.last_modified

        flag.enable()
        assert flag.enabled is True
        assert flag.last_modified >= before

        flag.disable()
        assert flag.enabled is False

    def test_should_enable_for_user_no_rollout(self):
        """Test user-specific enablement without rollout config."""
        flag = FeatureFlag(name="test_feature", enabled=True, description="Test feature")

        assert flag.should_enable_for_user(user_id="u-1") is True
        assert flag.should_enable_for_user(user_id=None) is True

    def test_disabled_flag_ignores_rollout(self):
        """Test a disabled flag stays off even in full rollout."""
        flag = FeatureFlag(
            name="test_feature",
            enabled=False,
            description="Test feature",
            rollout_config=RolloutConfig("test_feature", RolloutPhase.FULL_ROLLOUT),
        )
        assert flag.should_enable_for_user(user_id="u-1") is False


class TestRolloutConfig:
    """Tests for RolloutConfig dataclass."""

    def test_is_in_phase(self):
        """Test checking if rollout is in a specific phase."""
        config = RolloutConfig(feature_name="test_feature", current_phase=RolloutPhase.TEST_USERS)

        assert config.is_in_phase(RolloutPhase.TEST_USERS) is True
        assert config.is_in_phase(RolloutPhase.FULL_ROLLOUT) is False

    def test_disabled_phase(self):
        """Test nobody gets the feature while disabled."""
        config = RolloutConfig("test_feature", RolloutPhase.DISABLED, test_user_ids={"u-1"})
        assert config.should_enable_for_user(user_id="u-1") is False

    def test_test_users_phase(self):
        """Test only listed users get the feature during the test phase."""
        config = RolloutConfig("test_feature", RolloutPhase.TEST_USERS, test_user_ids={"u-1"})

        assert config.should_enable_for_user(user_id="u-1") is True
        assert config.should_enable_for_user(user_id="u-2") is False
        assert config.should_enable_for_user(user_id=None) is False

    def test_full_rollout_phase(self):
        """Test everyone gets the feature in full rollout."""
        config = RolloutConfig("test_feature", RolloutPhase.FULL_ROLLOUT)
        assert config.should_enable_for_user(user_id=None) is True

    def test_get_phase_description(self):
        """Test getting human-readable phase descriptions."""
        config = RolloutConfig("test_feature", RolloutPhase.TEST_USERS)
        assert "test users" in config.get_phase_description()


class TestFeatureFlagManagement:
    """Tests for feature flag management functions."""

    def test_defaults(self):
        """Test analysis and content are on and detailed logging is off by default."""
        flags = get_feature_flags()

        assert flags["enable_selection_analysis"] is True
        assert flags["enable_educational_content"] is True
        assert flags["enable_detailed_analysis_logging"] is False

    def test_every_flag_is_described(self):
        """Test every default flag has a description and category."""
        assert set(DEFAULT_FEATURE_FLAGS) == set(FEATURE_DESCRIPTIONS) == set(FEATURE_CATEGORIES)

    def test_create_feature_flag_from_name(self):
        """Test creating feature flag from name."""
        flag = create_feature_flag(FeatureFlags.ENABLE_EDUCATIONAL_CONTENT, True)

        assert flag.enabled is True
        assert flag.description == FEATURE_DESCRIPTIONS["enable_educational_content"]
        assert flag.category == "content"

    def test_unknown_flag(self):
        """Test unknown flags are disabled with a generic description."""
        flag = get_feature_flag("does_not_exist")

        assert flag.enabled is False
        assert flag.description == "Feature flag: does_not_exist"
        assert is_feature_enabled("does_not_exist") is False

    def test_env_override(self, monkeypatch):
        """Test environment variables override defaults."""
        monkeypatch.setenv("APP_FEATURE_ENABLE_SELECTION_ANALYSIS", "off")
        monkeypatch.setenv("APP_FEATURE_ENABLE_DETAILED_ANALYSIS_LOGGING", "Yes")

        assert is_feature_enabled(FeatureFlags.ENABLE_SELECTION_ANALYSIS) is False
        assert is_feature_enabled(FeatureFlags.ENABLE_DETAILED_ANALYSIS_LOGGING) is True

    def test_set_feature_flag(self):
        """Test in-memory overrides."""
        set_feature_flag(FeatureFlags.ENABLE_SELECTION_ANALYSIS, False)
        assert is_feature_enabled(FeatureFlags.ENABLE_SELECTION_ANALYSIS) is False

        set_feature_flag(FeatureFlags.ENABLE_SELECTION_ANALYSIS, True)
        assert is_feature_enabled(FeatureFlags.ENABLE_SELECTION_ANALYSIS) is True

    def test_set_feature_flag_goes_through_flag(self, caplog):
        """Test overrides toggle a FeatureFlag and log its transition."""
        with caplog.at_level(logging.INFO, logger="selection_analysis.config.features"):
            flag = set_feature_flag(FeatureFlags.ENABLE_SELECTION_ANALYSIS, False)

        assert isinstance(flag, FeatureFlag)
        assert flag.enabled is False
        assert flag.category == "analysis"
        assert get_feature_flags()[FeatureFlags.ENABLE_SELECTION_ANALYSIS] is False
        assert "Feature flag 'enable_selection_analysis' disabled" in caplog.text

        with caplog.at_level(logging.INFO, logger="selection_analysis.config.features"):
            set_feature_flag("enable_unknown_feature", True)
        assert "Feature flag 'enable_unknown_feature' enabled" in caplog.text
        assert get_feature_flag("enable_unknown_feature").enabled is True


class TestRolloutManagement:
    """Tests for registering and clearing rollouts."""

    def test_configure_rollout(self):
        """Test a test-user rollout restricts an enabled flag."""
        config = configure_rollout(
            FeatureFlags.ENABLE_SELECTION_ANALYSIS,
            RolloutPhase.TEST_USERS,
            {"u-1"},
        )

        assert config.is_in_phase(RolloutPhase.TEST_USERS)
        assert get_feature_flag(FeatureFlags.ENABLE_SELECTION_ANALYSIS).rollout_config is config
        assert is_feature_enabled(FeatureFlags.ENABLE_SELECTION_ANALYSIS, "u-1") is True
        assert is_feature_enabled(FeatureFlags.ENABLE_SELECTION_ANALYSIS, "u-2") is False

    def test_rollout_cannot_enable_disabled_flag(self):
        """Test a rollout never overrides a disabled flag."""
        set_feature_flag(FeatureFlags.ENABLE_DETAILED_ANALYSIS_LOGGING, False)
        configure_rollout(FeatureFlags.ENABLE_DETAILED_ANALYSIS_LOGGING, RolloutPhase.FULL_ROLLOUT)

        assert is_feature_enabled(FeatureFlags.ENABLE_DETAILED_ANALYSIS_LOGGING, "u-1") is False

    def test_emergency_disable_via_rollout(self):
        """Test the disabled phase switches a feature off for everyone."""
        configure_rollout(FeatureFlags.ENABLE_SELECTION_ANALYSIS, RolloutPhase.DISABLED)
        assert is_feature_enabled(FeatureFlags.ENABLE_SELECTION_ANALYSIS, "u-1") is False

    def test_clear_rollout(self):
        """Test clearing a rollout restores the plain flag value."""
        configure_rollout(FeatureFlags.ENABLE_SELECTION_ANALYSIS, RolloutPhase.DISABLED)
        clear_rollout(FeatureFlags.ENABLE_SELECTION_ANALYSIS)
        clear_rollout(FeatureFlags.ENABLE_SELECTION_ANALYSIS)

        assert is_feature_enabled(FeatureFlags.ENABLE_SELECTION_ANALYSIS, "u-1") is True
