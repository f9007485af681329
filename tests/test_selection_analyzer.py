"""Tests for the SelectionAnalyzer aggregator."""

import pytest

from selection_analysis.analysis.analyzer import SelectionAnalyzer
from selection_analysis.analysis.analyzers import default_analyzers
from selection_analysis.analysis.base import FactorScore, FactorStatus
from selection_analysis.analysis.config_loader import ConfigValidationError, merge_config, DEFAULT_CONFIG
from selection_analysis.analysis.constants import FactorName
from selection_analysis.analysis.content import InsightType
from selection_analysis.analysis.exceptions import (
    AnalysisError,
    DataQualityError,
    ErrorType,
    InvalidUserProfileError,
    InvalidWorkoutOptionsError,
)
from selection_analysis.analysis.validators import assess_input_quality
from selection_analysis.schemas import UserProfile, WorkoutSelections


@pytest.fixture
def analyzer(clock):
    return SelectionAnalyzer(clock=clock)


class TestAnalyzeSelections:
    """End-to-end analysis."""

    def test_result_shape(self, analyzer, profile, selections, context):
        result = analyzer.analyze_selections(profile, selections, context)

        assert list(result.factors) == list(FactorName.ORDERED)
        assert all(0.0 <= f.score <= 1.0 for f in result.factors.values())
        assert len(result.suggestions) <= 5
        assert len(result.educational_content) <= 3
        assert result.metadata.version == "1.0.0"
        assert result.metadata.factor_weights == DEFAULT_CONFIG.factor_weights.as_dict()

    def test_overall_is_weighted_sum(self, analyzer, profile, selections, context):
        result = analyzer.analyze_selections(profile, selections, context)
        weights = result.metadata.factor_weights

        expected = sum(weights[name] * result.factors[name].score for name in FactorName.ORDERED)
        assert result.overall_score == pytest.approx(expected, abs=1e-6)

    def test_insights_sorted_with_overall(self, analyzer, profile, selections, context):
        result = analyzer.analyze_selections(profile, selections, context)
        priorities = [insight.priority for insight in result.insights]

        assert priorities == sorted(priorities)
        assert sum(1 for i in result.insights if i.factor == "overall") == 1

    def test_beginner_high_energy(self, analyzer, beginner_profile):
        selections = WorkoutSelections(focus="strength", energy=9, duration=30)
        result = analyzer.analyze_selections(beginner_profile, selections)

        assert result.factors[FactorName.INTENSITY_MATCH].status == FactorStatus.POOR
        assert "intensity-beginner-reduce" in [s.id for s in result.suggestions]
        assert any(i.title == "Intensity Too High for Experience" for i in result.insights)

    def test_weight_loss_with_strength_focus(self, analyzer):
        profile = UserProfile(fitness_level="intermediate", goals=["weight loss"])
        selections = WorkoutSelections(focus="strength", energy=5, duration=30)
        result = analyzer.analyze_selections(profile, selections)

        assert result.factors[FactorName.GOAL_ALIGNMENT].score < 0.5
        mismatch = [i for i in result.insights if i.title == "Selection-Goal Mismatch"]
        assert len(mismatch) == 1
        assert mismatch[0].type == InsightType.WARNING

    def test_empty_goals_and_equipment(self, analyzer):
        profile = UserProfile(fitness_level="intermediate", goals=[])
        result = analyzer.analyze_selections(profile, WorkoutSelections(focus="strength", energy=5, duration=30))

        goal = result.factors[FactorName.GOAL_ALIGNMENT]
        equipment = result.factors[FactorName.EQUIPMENT_OPTIMIZATION]
        assert goal.score == 0.5
        assert equipment.score == 0.5
        assert any(s.startswith("Complete your profile") for s in goal.suggestions)
        assert any(s.startswith("Complete your profile") for s in equipment.suggestions)

    def test_accepts_camel_case_dicts(self, analyzer):
        result = analyzer.analyze_selections(
            {"fitnessLevel": "advanced", "goals": ["strength"], "basicLimitations": {"injuries": []}},
            {"focus": "Strength", "energy": {"rating": 7}, "duration": {"duration": 45}},
            {"userExperience": "advanced", "timeOfDay": "morning"},
        )
        assert result.factors[FactorName.GOAL_ALIGNMENT].status in (FactorStatus.GOOD, FactorStatus.EXCELLENT)

    def test_defaults_recorded_as_warnings(self, analyzer, profile):
        result = analyzer.analyze_selections(profile, WorkoutSelections(focus="strength"))

        assert "No energy level selected, defaulting to 5" in result.metadata.warnings
        assert "No duration selected, defaulting to 30 minutes" in result.metadata.warnings
        assert result.metadata.data_quality == pytest.approx(0.8)


class TestInputErrors:
    """Invalid inputs raise typed errors."""

    def test_missing_profile(self, analyzer, selections):
        with pytest.raises(InvalidUserProfileError) as exc_info:
            analyzer.analyze_selections(None, selections)
        assert exc_info.value.error_type == ErrorType.INVALID_USER_PROFILE

    def test_missing_selections(self, analyzer, profile):
        with pytest.raises(InvalidWorkoutOptionsError):
            analyzer.analyze_selections(profile, None)

    def test_malformed_selections(self, analyzer, profile):
        with pytest.raises(InvalidWorkoutOptionsError) as exc_info:
            analyzer.analyze_selections(profile, {"energy": {"rating": 42}})
        assert exc_info.value.details["errors"]

    def test_malformed_profile(self, analyzer, selections):
        with pytest.raises(InvalidUserProfileError):
            analyzer.analyze_selections({"fitnessLevel": "elite"}, selections)

    def test_data_quality_floor(self, clock, selections):
        config = merge_config(DEFAULT_CONFIG, {"quality": {"min_data_quality": 0.9}})
        analyzer = SelectionAnalyzer(config=config, clock=clock)

        with pytest.raises(DataQualityError) as exc_info:
            analyzer.analyze_selections(UserProfile(), selections)
        assert exc_info.value.details["data_quality"] == pytest.approx(0.7)


class TestResultCache:
    """Caching by content hash of the inputs."""

    def test_cached_result_keeps_timestamp(self, analyzer, profile, selections, context, clock):
        first = analyzer.analyze_selections(profile, selections, context)
        clock.advance(60)
        second = analyzer.analyze_selections(profile, selections, context)

        assert second == first
        assert second.metadata.timestamp == first.metadata.timestamp
        assert analyzer.cache_size == 1

    def test_equal_inputs_share_entry(self, analyzer, profile, selections, context):
        analyzer.analyze_selections(profile, selections, context)
        analyzer.analyze_selections(profile.model_dump(), selections.model_dump(by_alias=True), context)
        assert analyzer.cache_size == 1

    def test_clear_cache_gives_fresh_timestamp(self, analyzer, profile, selections, context):
        first = analyzer.analyze_selections(profile, selections, context)
        analyzer.clear_cache()
        second = analyzer.analyze_selections(profile, selections, context)

        assert second.metadata.timestamp >= first.metadata.timestamp
        assert second is not first
        assert second.overall_score == first.overall_score

    def test_expired_entry_recomputed(self, analyzer, profile, selections, context, clock):
        analyzer.analyze_selections(profile, selections, context)
        clock.advance(301)
        analyzer.analyze_selections(profile, selections, context)
        assert analyzer.cache_size == 1

    def test_mutating_a_result_leaves_cache_intact(self, analyzer, profile, selections, context):
        first = analyzer.analyze_selections(profile, selections, context)
        first.factors.pop(FactorName.GOAL_ALIGNMENT)
        first.metadata.factor_weights.clear()

        second = analyzer.analyze_selections(profile, selections, context)

        assert list(second.factors) == list(FactorName.ORDERED)
        assert second.metadata.factor_weights == DEFAULT_CONFIG.factor_weights.as_dict()

    def test_caching_disabled(self, clock, profile, selections, context):
        config = merge_config(DEFAULT_CONFIG, {"cache": {"enabled": False}})
        analyzer = SelectionAnalyzer(config=config, clock=clock)

        analyzer.analyze_selections(profile, selections, context)
        assert analyzer.cache_size == 0


class TestConfigManagement:
    """get_config / update_config."""

    def test_get_config_is_a_copy(self, analyzer):
        assert analyzer.get_config() == analyzer.get_config()
        assert analyzer.get_config() is not analyzer.get_config()

    def test_update_weights_changes_overall_and_clears_cache(self, analyzer, profile, selections, context):
        before = analyzer.analyze_selections(profile, selections, context)
        analyzer.update_config({"factor_weights": {
            "goal_alignment": 1.0,
            "intensity_match": 0.0,
            "duration_fit": 0.0,
            "recovery_respect": 0.0,
            "equipment_optimization": 0.0,
        }})
        after = analyzer.analyze_selections(profile, selections, context)

        assert after.overall_score == pytest.approx(after.factors[FactorName.GOAL_ALIGNMENT].score)
        assert after.metadata.factor_weights["goal_alignment"] == 1.0
        assert after.overall_score != before.overall_score

    def test_update_with_weights_section(self, analyzer):
        updated = analyzer.update_config({"weights": {"duration_fit": 0.15, "recovery_respect": 0.2}})

        assert updated.factor_weights.duration_fit == 0.15
        assert updated.factor_weights.recovery_respect == 0.2

    def test_update_thresholds_keeps_weights(self, analyzer):
        updated = analyzer.update_config({"thresholds": {"excellent": 0.9}})
        assert updated.thresholds.excellent == 0.9
        assert updated.factor_weights == DEFAULT_CONFIG.factor_weights

    def test_strict_update_rejected(self, analyzer):
        with pytest.raises(ConfigValidationError):
            analyzer.update_config({"factor_weights": {"goal_alignment": 0.9}})
        assert analyzer.get_config().factor_weights.goal_alignment == 0.25

    def test_lenient_update_accepted(self, clock):
        analyzer = SelectionAnalyzer(strict=False, clock=clock)
        updated = analyzer.update_config({"factor_weights": {"goal_alignment": 0.9}})
        assert updated.factor_weights.goal_alignment == 0.9

    def test_max_suggestions_applied(self, analyzer, beginner_profile):
        analyzer.update_config({"content": {"max_suggestions": 1, "max_educational_content": 0}})
        result = analyzer.analyze_selections(
            beginner_profile, WorkoutSelections(focus="strength", energy=9, duration=60)
        )
        assert len(result.suggestions) == 1
        assert result.educational_content == ()


class TestAnalyzerContract:
    """Analyzer set and output contract."""

    def test_get_analyzers(self, analyzer):
        assert [a.name for a in analyzer.get_analyzers()] == list(FactorName.ORDERED)

    def test_requires_every_factor(self):
        with pytest.raises(ValueError):
            SelectionAnalyzer(analyzers=default_analyzers()[:4])

    def test_invalid_score_raises_analysis_error(self):
        with pytest.raises(AnalysisError):
            FactorScore(score=1.2, status=FactorStatus.EXCELLENT, reasoning="", impact="")

    def test_analyzer_errors_propagate(self, clock, profile, selections):
        analyzers = default_analyzers()

        class Broken(type(analyzers[0])):
            def analyze_facts(self, facts):
                raise AnalysisError("broken analyzer", analyzer=self.name)

        analyzers[0] = Broken()
        with pytest.raises(AnalysisError):
            SelectionAnalyzer(analyzers=analyzers, clock=clock).analyze_selections(profile, selections)


class TestInputQuality:
    """Data quality assessment."""

    def test_complete_inputs(self, profile, selections):
        assert assess_input_quality(profile, selections) == (1.0, [])

    def test_everything_missing(self):
        quality, warnings = assess_input_quality(UserProfile(), WorkoutSelections())
        assert quality == pytest.approx(0.4)
        assert warnings[:2] == ["Fitness level not specified", "No fitness goals specified"]
