"""Tests for the feature-gated selection analysis service."""

import pytest

from selection_analysis.analysis.analyzer import SelectionAnalyzer
from selection_analysis.analysis.base import FactorStatus, SelectionAnalysisResult
from selection_analysis.analysis.service import (
    QUICK_MESSAGES,
    SelectionAnalysisService,
    create_selection_analysis_service,
)
from selection_analysis.config.features import (
    FeatureFlags,
    RolloutPhase,
    configure_rollout,
    set_feature_flag,
)
from selection_analysis.config.settings import Settings
from selection_analysis.schemas import AnalysisContext, WorkoutSelections


@pytest.fixture
def high_energy():
    return WorkoutSelections(focus="strength", energy=9, duration=30)


class TestAnalyzeSelections:
    """Full analysis through the facade."""

    def test_returns_result(self, service, profile, selections, context):
        result = service.analyze_selections(profile, selections, context)
        assert isinstance(result, SelectionAnalysisResult)

    def test_input_errors_degrade_to_none(self, service, selections):
        assert service.analyze_selections(None, selections) is None
        assert service.analyze_selections({"fitnessLevel": "elite"}, selections) is None

    def test_null_profile_fields_still_analyzed(self, service, selections):
        profile = {
            "fitnessLevel": "beginner",
            "goals": ["Build strength"],
            "preferences": {"workoutStyle": None},
            "basicLimitations": {"availableEquipment": None, "availableLocations": None},
        }
        result = service.analyze_selections(profile, selections)

        assert result is not None
        assert result.factors["equipment_optimization"].score == 0.5
        assert service.analyze_selections({"basicLimitations": None}, selections) is not None

    def test_data_quality_error_degrades_to_none(self, service, selections):
        service.update_config({"quality": {"min_data_quality": 0.95}})
        assert service.analyze_selections({"goals": []}, selections) is None

    def test_defects_propagate(self, clock, profile, selections):
        class Exploding(SelectionAnalyzer):
            def analyze_selections(self, *args, **kwargs):
                raise RuntimeError("bug")

        service = SelectionAnalysisService(Exploding(clock=clock), gate=lambda uid: True)
        with pytest.raises(RuntimeError):
            service.analyze_selections(profile, selections)


class TestGates:
    """Feature flags and rollouts decide who gets analysis."""

    def test_flag_disabled_returns_none(self, clock, profile, selections):
        service = SelectionAnalysisService(SelectionAnalyzer(clock=clock))
        set_feature_flag(FeatureFlags.ENABLE_SELECTION_ANALYSIS, False)

        assert service.is_enabled(profile) is False
        assert service.analyze_selections(profile, selections) is None
        assert service.get_quick_analysis(profile, selections) is None

    def test_rollout_to_test_users(self, clock, profile, beginner_profile, selections):
        service = SelectionAnalysisService(SelectionAnalyzer(clock=clock))
        configure_rollout(FeatureFlags.ENABLE_SELECTION_ANALYSIS, RolloutPhase.TEST_USERS, {"user-1"})

        assert service.analyze_selections(profile, selections) is not None
        assert service.analyze_selections(beginner_profile, selections) is None

    def test_user_id_read_from_dict_profile(self, clock, selections):
        service = SelectionAnalysisService(SelectionAnalyzer(clock=clock))
        configure_rollout(FeatureFlags.ENABLE_SELECTION_ANALYSIS, RolloutPhase.TEST_USERS, {"user-9"})

        assert service.is_enabled({"userId": "user-9"}) is True
        assert service.is_enabled({"user_id": "user-8"}) is False

    def test_content_gate_strips_educational_content(self, clock, beginner_profile, high_energy):
        open_service = SelectionAnalysisService(
            SelectionAnalyzer(clock=clock), gate=lambda uid: True, content_gate=lambda uid: True
        )
        closed_service = SelectionAnalysisService(
            SelectionAnalyzer(clock=clock), gate=lambda uid: True, content_gate=lambda uid: False
        )

        full = open_service.analyze_selections(beginner_profile, high_energy)
        stripped = closed_service.analyze_selections(beginner_profile, high_energy)

        assert stripped.educational_content == ()
        assert stripped.suggestions == full.suggestions
        assert stripped.overall_score == full.overall_score

    def test_educational_flag_drives_default_content_gate(self, clock, beginner_profile, high_energy):
        service = SelectionAnalysisService(SelectionAnalyzer(clock=clock))
        set_feature_flag(FeatureFlags.ENABLE_EDUCATIONAL_CONTENT, False)

        result = service.analyze_selections(beginner_profile, high_energy)
        assert result is not None
        assert result.educational_content == ()


class TestQuickAnalysis:
    """Condensed score, status and message."""

    def test_status_and_message_agree(self, service, profile, selections, context):
        quick = service.get_quick_analysis(profile, selections, context)
        full = service.analyze_selections(profile, selections, context)

        assert quick.score == full.overall_score
        assert quick.status == FactorStatus.for_score(quick.score)
        assert quick.message == QUICK_MESSAGES[quick.status]

    def test_top_suggestion_is_first_action(self, service, beginner_profile, high_energy):
        quick = service.get_quick_analysis(beginner_profile, high_energy)
        full = service.analyze_selections(beginner_profile, high_energy)

        assert full.suggestions
        assert quick.top_suggestion == full.suggestions[0].action

    def test_no_suggestions_gives_none(self, service, profile, selections, context):
        service.update_config({"content": {"max_suggestions": 0}})
        assert service.get_quick_analysis(profile, selections, context).top_suggestion is None

    def test_uses_configured_thresholds(self, service, profile, selections, context):
        service.update_config({"thresholds": {"excellent": 0.3, "good": 0.2, "warning": 0.1}})
        quick = service.get_quick_analysis(profile, selections, context)

        assert quick.status == FactorStatus.EXCELLENT
        assert quick.message == "Excellent selections! Your workout will be highly personalized."

    def test_to_dict(self, service, profile, selections, context):
        data = service.get_quick_analysis(profile, selections, context).to_dict()
        assert set(data) == {"score", "status", "message", "top_suggestion"}


class TestCreateContext:
    """Context factory defaults."""

    def test_defaults(self):
        ctx = SelectionAnalysisService.create_context()

        assert isinstance(ctx, AnalysisContext)
        assert ctx.generation_type == "detailed"
        assert ctx.user_experience == "beginner"
        assert ctx.previous_workouts is None
        assert ctx.environmental_factors.location == "indoor"

    def test_environment_passthrough(self):
        ctx = SelectionAnalysisService.create_context(
            generation_type="quick",
            time_of_day="morning",
            location="outdoor",
            weather="rainy",
        )
        assert ctx.generation_type == "quick"
        assert ctx.time_of_day == "morning"
        assert ctx.environmental_factors.weather == "rainy"


class TestLifecycle:
    """Management operations and shutdown."""

    def test_clear_cache(self, service, profile, selections):
        service.analyze_selections(profile, selections)
        assert service.analyzer.cache_size == 1
        service.clear_cache()
        assert service.analyzer.cache_size == 0

    def test_config_passthrough(self, service):
        updated = service.update_config({"content": {"max_suggestions": 2}})
        assert updated.max_suggestions == 2
        assert service.get_config().max_suggestions == 2

    def test_close_disables(self, clock, profile, selections):
        with SelectionAnalysisService.new_test_instance(clock=clock) as service:
            service.analyze_selections(profile, selections)
            assert service.is_enabled(profile)

        assert service.is_enabled(profile) is False
        assert service.analyzer.cache_size == 0
        assert service.analyze_selections(profile, selections) is None

    def test_close_is_idempotent(self, service):
        service.close()
        service.close()
        assert service.is_enabled() is False

    def test_create_from_settings(self, profile, selections, context):
        service = create_selection_analysis_service(Settings())

        assert service.get_config().version == "1.0.0"
        assert service.analyze_selections(profile, selections, context) is not None
