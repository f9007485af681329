"""Tests for the insight, suggestion and educational content registries."""

from dataclasses import dataclass

import pytest

from selection_analysis.analysis.base import FactorScore, FactorStatus
from selection_analysis.analysis.conditions import ConditionContext
from selection_analysis.analysis.constants import FactorName
from selection_analysis.analysis.content import (
    ALL_EDUCATIONAL_CONTENT,
    ALL_SUGGESTIONS,
    InsightType,
    get_applicable_content,
    get_applicable_suggestions,
    get_beginner_content,
    get_content_by_category,
    get_low_score_content,
    get_low_score_suggestions,
    get_overall_insight,
    get_quick_fix_suggestions,
    get_suggestions_by_category,
    select_factor_insight,
    select_templates,
)
from selection_analysis.analysis.content.selection import rank_key

ALL_LOW = {name: 0.1 for name in FactorName.ORDERED}


def factor_score(score):
    return FactorScore(
        score=score,
        status=FactorStatus.for_score(score),
        reasoning="r",
        impact="i",
    )


@dataclass(frozen=True)
class Template:
    id: str
    priority: int
    impact: str | None = None
    conditions: tuple = ()


class TestSelectTemplates:
    """Filter, rank and truncate pipeline."""

    def test_priority_then_impact(self):
        templates = [
            Template("low-2", 2, "low"),
            Template("high-2", 2, "high"),
            Template("medium-1", 1, "medium"),
        ]
        selected = select_templates(templates, lambda t: True, 10)
        assert [t.id for t in selected] == ["medium-1", "high-2", "low-2"]

    def test_ties_keep_registration_order(self):
        templates = [Template("a", 1, "high"), Template("b", 1, "high"), Template("c", 1, "high")]
        assert [t.id for t in select_templates(templates, lambda t: True, 2)] == ["a", "b"]

    def test_zero_max_items(self):
        assert select_templates([Template("a", 1)], lambda t: True, 0) == []

    def test_missing_impact_sorts_last(self):
        assert rank_key(Template("x", 1)) > rank_key(Template("y", 1, "low"))


class TestSuggestions:
    """Tests for suggestion queries."""

    def test_registry_ids_unique(self):
        ids = [s.id for s in ALL_SUGGESTIONS]
        assert len(ids) == len(set(ids)) == 15

    def test_bounded_and_ordered(self, make_facts):
        facts = make_facts(
            profile={"fitness_level": "beginner", "goals": ["lose weight"]},
            selections={"focus": "strength", "energy": 9, "duration": 40},
            context={"previous_workouts": 4},
        )
        ctx = ConditionContext.build(ALL_LOW, facts=facts)

        selected = get_applicable_suggestions(ctx, max_items=3)
        assert len(selected) == 3
        keys = [rank_key(s) for s in selected]
        assert keys == sorted(keys)

    def test_beginner_high_energy_quick_fix(self, make_facts):
        facts = make_facts(
            profile={"fitness_level": "beginner"},
            selections={"focus": "strength", "energy": 9},
        )
        ctx = ConditionContext.build({FactorName.INTENSITY_MATCH: 0.42}, facts=facts)

        quick = get_quick_fix_suggestions(ctx)
        assert [s.id for s in quick] == ["intensity-beginner-reduce"]
        assert quick[0].category == "intensity"

    def test_no_suggestions_for_high_scores(self, make_facts):
        ctx = ConditionContext.build({name: 0.95 for name in FactorName.ORDERED}, facts=make_facts())
        assert get_applicable_suggestions(ctx) == []

    def test_by_category(self, make_facts):
        facts = make_facts(profile={"basic_limitations": {"available_equipment": ["Mat"]}})
        ctx = ConditionContext.build(ALL_LOW, facts=facts)

        equipment = get_suggestions_by_category("equipment", ctx)
        assert [s.id for s in equipment] == [
            "equipment-bodyweight-focus",
            "equipment-invest-basics",
            "equipment-space-optimize",
        ]

    def test_time_constraint_rule_reads_profile(self, make_facts):
        from selection_analysis.schemas import UserProfile

        profile = UserProfile(enhanced_limitations={"time_constraints": 30})
        ctx = ConditionContext.build({FactorName.DURATION_FIT: 0.65}, profile=profile, facts=make_facts())

        assert [s.id for s in get_suggestions_by_category("duration", ctx)] == ["duration-time-management"]

    def test_low_score_requires_low_factor(self, make_facts):
        facts = make_facts(profile={"enhanced_limitations": {"recovery_needs": {"sleep_hours": 5}}})
        borderline = ConditionContext.build({FactorName.RECOVERY_RESPECT: 0.65}, facts=facts)
        low = ConditionContext.build({FactorName.RECOVERY_RESPECT: 0.55}, facts=facts)

        assert [s.id for s in get_applicable_suggestions(borderline)] == ["recovery-sleep-optimize"]
        assert get_low_score_suggestions(borderline) == []
        assert [s.id for s in get_low_score_suggestions(low)] == ["recovery-sleep-optimize"]

    def test_to_dict(self):
        data = ALL_SUGGESTIONS[0].to_dict()
        assert data["id"] == ALL_SUGGESTIONS[0].id
        assert all(set(rule) == {"field", "operator", "value"} for rule in data["conditions"])


class TestEducationalContent:
    """Tests for educational content queries."""

    def test_registry_ids_unique(self):
        ids = [c.id for c in ALL_EDUCATIONAL_CONTENT]
        assert len(ids) == len(set(ids)) == 15

    def test_audience_filter(self, make_facts):
        facts = make_facts(profile={"fitness_level": "advanced"})
        ctx = ConditionContext.build(ALL_LOW, facts=facts)

        content = get_applicable_content(ctx, "advanced", max_items=20)
        assert all(c.target_audience in ("advanced", "all") for c in content)
        assert "selection-basics" in [c.id for c in content]

    def test_beginner_content(self, make_facts):
        ctx = ConditionContext.build(ALL_LOW, facts=make_facts(profile={"fitness_level": "novice"}))

        beginner = get_beginner_content(ctx)
        assert [c.id for c in beginner] == ["safety-beginner-guidance", "selection-progressive-disclosure"]

    def test_audience_alias(self, make_facts):
        ctx = ConditionContext.build(ALL_LOW, facts=make_facts(profile={"fitness_level": "novice"}))
        ids = [c.id for c in get_applicable_content(ctx, "novice", max_items=20)]
        assert "safety-beginner-guidance" in ids

    def test_goal_content_by_category(self, make_facts):
        facts = make_facts(profile={"goals": ["Cardio endurance", "more strength"]})
        ctx = ConditionContext.build({}, facts=facts)

        goals = get_content_by_category("goals", ctx, "intermediate")
        assert [c.id for c in goals] == ["goal-strength-building", "goal-endurance-building"]

    def test_low_score_content_skips_fact_only_rules(self, make_facts):
        ctx = ConditionContext.build(ALL_LOW, facts=make_facts(profile={"goals": ["lose weight"]}))
        content = get_low_score_content(ctx, "beginner", max_items=20)

        assert content
        assert "goal-weight-loss-science" not in [c.id for c in content]

    def test_max_items_respected(self, make_facts):
        ctx = ConditionContext.build(ALL_LOW, facts=make_facts())
        assert len(get_applicable_content(ctx, "beginner")) == 3
        assert get_applicable_content(ctx, "beginner", max_items=0) == []


class TestInsights:
    """Tests for per-factor and overall insights."""

    def test_weight_loss_strength_mismatch(self, make_facts):
        facts = make_facts(profile={"goals": ["weight loss"]}, selections={"focus": "strength"})
        insight = select_factor_insight(FactorName.GOAL_ALIGNMENT, factor_score(0.3), facts)

        assert insight.title == "Selection-Goal Mismatch"
        assert insight.id == "goal_alignment-weight_loss_strength"
        assert insight.type == InsightType.WARNING
        assert insight.actionable is True

    def test_goal_falls_back_to_any_key(self, make_facts):
        facts = make_facts(profile={"goals": ["lose weight"]}, selections={"focus": "yoga"})
        insight = select_factor_insight(FactorName.GOAL_ALIGNMENT, factor_score(0.6), facts)

        assert insight.title == "Moderate Intensity for Weight Loss"
        assert insight.type == InsightType.SUGGESTION

    def test_good_band_is_positive(self, make_facts):
        facts = make_facts(profile={"fitness_level": "intermediate"}, selections={"energy": 5})
        insight = select_factor_insight(FactorName.INTENSITY_MATCH, factor_score(0.8), facts)

        assert insight.title == "Perfect Intensity Match"
        assert insight.type == InsightType.POSITIVE
        assert insight.actionable is False

    def test_no_template_returns_none(self, make_facts):
        facts = make_facts(profile={"fitness_level": "advanced"}, selections={"energy": 9})
        assert select_factor_insight(FactorName.INTENSITY_MATCH, factor_score(0.3), facts) is None

    def test_duration_brackets(self, make_facts):
        facts = make_facts(profile={"fitness_level": "beginner"}, selections={"duration": 40})
        insight = select_factor_insight(FactorName.DURATION_FIT, factor_score(0.4), facts)
        assert insight.title == "Duration May Be Too Long"

    @pytest.mark.parametrize(
        "score,insight_id,priority",
        [
            (0.9, "excellent-overall", 1),
            (0.75, "good-overall", 2),
            (0.55, "moderate-overall", 3),
            (0.2, "poor-overall", 4),
        ],
    )
    def test_overall_insight(self, score, insight_id, priority):
        insight = get_overall_insight(score)
        assert insight.id == insight_id
        assert insight.priority == priority
        assert insight.factor == "overall"

    def test_overall_uses_given_thresholds(self):
        assert get_overall_insight(0.8, excellent=0.8, good=0.6, warning=0.4).id == "excellent-overall"
