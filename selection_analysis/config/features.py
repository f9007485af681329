"""
Feature flags configuration for the selection analysis engine.

This module provides a centralized way to enable/disable features
of the engine. Feature flags allow for:
- Safe rollouts of the analysis to test users first
- Quick rollback when the analysis misbehaves in production

Feature flags can be controlled via:
1. Environment variables (APP_FEATURE_<FEATURE_NAME>=true/false)
2. In-memory overrides via set_feature_flag()
3. A rollout configuration restricting a flag to test users
"""

import os
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class RolloutPhase(Enum):
    """Enumeration of rollout phases for gradual feature deployment."""
    DISABLED = "disabled"
    TEST_USERS = "test_users"
    FULL_ROLLOUT = "full_rollout"


@dataclass
class RolloutConfig:
    """Configuration for gradual feature rollout strategy."""
    feature_name: str
    current_phase: RolloutPhase
    test_user_ids: set[str] = field(default_factory=set)

    def is_in_phase(self, phase: RolloutPhase) -> bool:
        """Check if rollout is in a specific phase."""
        return self.current_phase == phase

    def should_enable_for_user(self, user_id: Optional[str] = None) -> bool:
        """Determine if feature should be enabled for a specific user."""
        if self.current_phase == RolloutPhase.DISABLED:
            return False

        if self.current_phase == RolloutPhase.TEST_USERS:
            return user_id in self.test_user_ids if user_id else False

        return self.current_phase == RolloutPhase.FULL_ROLLOUT

    def get_phase_description(self) -> str:
        """Get human-readable description of current phase."""
        descriptions = {
            RolloutPhase.DISABLED: "Feature disabled for everyone",
            RolloutPhase.TEST_USERS: "Feature enabled for test users only",
            RolloutPhase.FULL_ROLLOUT: "Feature enabled for all users",
        }
        return descriptions.get(self.current_phase, "Unknown phase")


@dataclass
class FeatureFlag:
    """Individual feature flag with metadata and rollout configuration."""
    name: str
    enabled: bool
    description: str
    rollout_config: Optional[RolloutConfig] = None
    category: str = "general"
    last_modified: datetime = field(default_factory=datetime.now)

    def enable(self) -> None:
        """Enable the feature flag."""
        self.enabled = True
        self.last_modified = datetime.now()
        logger.info(f"Feature flag '{self.name}' enabled")

    def disable(self) -> None:
        """Disable the feature flag."""
        self.enabled = False
        self.last_modified = datetime.now()
        logger.info(f"Feature flag '{self.name}' disabled")

    def should_enable_for_user(self, user_id: Optional[str] = None) -> bool:
        """Determine if feature should be enabled for a specific user."""
        if not self.enabled:
            return False

        if self.rollout_config:
            return self.rollout_config.should_enable_for_user(user_id)

        return True


# Default feature flag values
DEFAULT_FEATURE_FLAGS = {
    # Selection analysis: score workout selections against the user profile
    "enable_selection_analysis": True,

    # Educational content: attach learning material to analysis results
    "enable_educational_content": True,

    # Detailed logging: log every factor score of every analysis
    "enable_detailed_analysis_logging": False,
}

# Feature flag descriptions
FEATURE_DESCRIPTIONS = {
    "enable_selection_analysis": "Score workout selections against the stored user profile",
    "enable_educational_content": "Attach educational content to selection analysis results",
    "enable_detailed_analysis_logging": "Log individual factor scores for every analysis",
}

# Feature flag categories
FEATURE_CATEGORIES = {
    "enable_selection_analysis": "analysis",
    "enable_educational_content": "content",
    "enable_detailed_analysis_logging": "monitoring",
}


def get_feature_flags() -> dict[str, Any]:
    """
    Get current feature flags configuration.

    Returns:
        Dictionary mapping feature names to their enabled/disabled status.

    Example:
        >>> flags = get_feature_flags()
        >>> if flags.get("enable_selection_analysis"):
        ...     analyze()
    """
    flags = dict(DEFAULT_FEATURE_FLAGS)

    # Override with environment variables
    for key in flags:
        env_var = f"APP_FEATURE_{key.upper()}"
        env_value = os.getenv(env_var)
        if env_value is not None:
            flags[key] = env_value.lower() in ("true", "1", "yes", "on")

    return flags


def create_feature_flag(name: str, enabled: bool = False) -> FeatureFlag:
    """
    Create a FeatureFlag instance from a name and enabled state.

    Args:
        name: Name of the feature flag.
        enabled: Whether the feature is enabled.

    Returns:
        A FeatureFlag instance with description, category and any
        registered rollout configuration.
    """
    description = FEATURE_DESCRIPTIONS.get(name, f"Feature flag: {name}")
    category = FEATURE_CATEGORIES.get(name, "general")

    return FeatureFlag(
        name=name,
        enabled=enabled,
        description=description,
        category=category,
        rollout_config=_rollout_configs.get(name),
    )


def get_feature_flag(name: str) -> FeatureFlag:
    """
    Get a FeatureFlag instance with current state.

    Args:
        name: Name of the feature flag.

    Returns:
        A FeatureFlag instance representing the current state.
    """
    flags = get_feature_flags()
    enabled = flags.get(name, False)

    return create_feature_flag(name, enabled)


def is_feature_enabled(feature_name: str, user_id: Optional[str] = None) -> bool:
    """
    Check if a specific feature is enabled for a user.

    Args:
        feature_name: Name of the feature flag to check.
        user_id: Optional user ID for user-specific feature checks.

    Returns:
        True if feature is enabled for the user, False otherwise.

    Example:
        >>> if is_feature_enabled("enable_selection_analysis", user_id="u-123"):
        ...     result = service.analyze_selections(profile, selections, context)
    """
    flags = get_feature_flags()
    enabled = flags.get(feature_name, False)

    if enabled and feature_name in _rollout_configs:
        return get_feature_flag(feature_name).should_enable_for_user(user_id)

    return enabled


def set_feature_flag(feature_name: str, enabled: bool) -> FeatureFlag:
    """
    Set a feature flag value (in-memory only).

    Args:
        feature_name: Name of the feature flag.
        enabled: Whether the feature should be enabled.

    Returns:
        The updated FeatureFlag.
    """
    flag = create_feature_flag(feature_name, DEFAULT_FEATURE_FLAGS.get(feature_name, False))
    if enabled:
        flag.enable()
    else:
        flag.disable()
    DEFAULT_FEATURE_FLAGS[feature_name] = flag.enabled
    return flag


# Rollout configuration storage
_rollout_configs: dict[str, RolloutConfig] = {}


def configure_rollout(
    feature_name: str,
    phase: RolloutPhase,
    test_user_ids: Optional[set[str]] = None,
) -> RolloutConfig:
    """
    Restrict a feature flag to a rollout phase.

    Args:
        feature_name: Name of the feature flag.
        phase: Rollout phase to apply.
        test_user_ids: Users that see the feature during TEST_USERS.

    Returns:
        The registered RolloutConfig.
    """
    config = RolloutConfig(
        feature_name=feature_name,
        current_phase=phase,
        test_user_ids=set(test_user_ids or ()),
    )
    _rollout_configs[feature_name] = config
    logger.info(f"Rollout for '{feature_name}' set to {phase.value}: {config.get_phase_description()}")
    return config


def clear_rollout(feature_name: str) -> None:
    """Remove any rollout restriction from a feature flag."""
    if _rollout_configs.pop(feature_name, None) is not None:
        logger.info(f"Rollout for '{feature_name}' cleared")


# Feature flag constants for type safety
class FeatureFlags:
    """Feature flag name constants."""

    ENABLE_SELECTION_ANALYSIS = "enable_selection_analysis"
    ENABLE_EDUCATIONAL_CONTENT = "enable_educational_content"
    ENABLE_DETAILED_ANALYSIS_LOGGING = "enable_detailed_analysis_logging"
