"""Tests for the declarative condition engine."""

import pytest

from selection_analysis.analysis.conditions import (
    ConditionContext,
    ConditionOperator,
    ConditionRule,
    evaluate,
    evaluate_all,
    referenced_factors,
    resolve_path,
)


def ctx(scores=None, **sources):
    return ConditionContext(factor_scores=scores or {}, sources=sources)


class TestFactorRules:
    """Rules whose source field names a factor."""

    def test_lt_true_below_comparand(self):
        rule = ConditionRule("goal_alignment", "lt", 0.5)
        assert evaluate(rule, ctx({"goal_alignment": 0.3})) is True

    def test_lt_false_above_comparand(self):
        rule = ConditionRule("goal_alignment", "lt", 0.5)
        assert evaluate(rule, ctx({"goal_alignment": 0.6})) is False

    @pytest.mark.parametrize(
        "operator,expected",
        [("lt", False), ("lte", True), ("eq", True), ("gte", True), ("gt", False)],
    )
    def test_operators_at_boundary(self, operator, expected):
        rule = ConditionRule("duration_fit", operator, 0.7)
        assert evaluate(rule, ctx({"duration_fit": 0.7})) is expected

    def test_missing_factor_is_false(self):
        rule = ConditionRule("recovery_respect", "lt", 1.0)
        assert evaluate(rule, ctx({"goal_alignment": 0.1})) is False

    def test_enum_operator_accepted(self):
        rule = ConditionRule("intensity_match", ConditionOperator.GTE, 0.5)
        assert evaluate(rule, ctx({"intensity_match": 0.9})) is True


class TestPathRules:
    """Rules reading dotted paths from request data."""

    def test_nested_number(self):
        rule = ConditionRule("facts.energy_rating", "gt", 7)
        assert evaluate(rule, ctx(facts={"energy_rating": 9})) is True

    def test_string_equality(self):
        rule = ConditionRule("profile.fitness_level", "eq", "beginner")
        assert evaluate(rule, ctx(profile={"fitness_level": "beginner"})) is True
        assert evaluate(rule, ctx(profile={"fitness_level": "advanced"})) is False

    def test_bool_equality_is_type_sensitive(self):
        rule = ConditionRule("facts.goal.strength", "eq", True)
        assert evaluate(rule, ctx(facts={"goal": {"strength": True}})) is True
        assert evaluate(rule, ctx(facts={"goal": {"strength": 1}})) is False

    def test_missing_path_is_false(self):
        rule = ConditionRule("profile.enhanced_limitations.time_constraints", "lt", 45)
        assert evaluate(rule, ctx(profile={"enhanced_limitations": None})) is False

    def test_non_numeric_value_for_ordering_is_false(self):
        rule = ConditionRule("facts.focus", "lt", 3)
        assert evaluate(rule, ctx(facts={"focus": "strength"})) is False

    def test_non_scalar_value_for_eq_is_false(self):
        rule = ConditionRule("profile.goals", "eq", "strength")
        assert evaluate(rule, ctx(profile={"goals": ["strength"]})) is False

    def test_unknown_operator_is_false(self):
        rule = ConditionRule("goal_alignment", "between", 0.5)
        assert evaluate(rule, ctx({"goal_alignment": 0.5})) is False

    @pytest.mark.parametrize("operator", [["lt"], {"op": "lt"}, None, 3])
    def test_malformed_operator_is_false(self, operator):
        assert ConditionOperator.parse(operator) is None
        rule = ConditionRule("goal_alignment", operator, 0.5)
        assert evaluate(rule, ctx({"goal_alignment": 0.1})) is False

    def test_malformed_source_field_is_false(self):
        rule = ConditionRule(["facts", "energy_rating"], "gt", 3)
        assert evaluate(rule, ctx(facts={"energy_rating": 9})) is False
        assert evaluate_all([rule], ctx(facts={"energy_rating": 9})) is False


class TestResolvePath:
    """Tests for dotted path resolution."""

    def test_list_index(self):
        lookup = resolve_path({"goals": ["strength", "cardio"]}, "goals.1")
        assert lookup.found and lookup.value == "cardio"

    def test_out_of_range_index(self):
        assert not resolve_path({"goals": ["strength"]}, "goals.3").found

    def test_scalar_in_middle_of_path(self):
        assert not resolve_path({"age": 30}, "age.years").found

    def test_found_none_differs_from_missing(self):
        lookup = resolve_path({"age": None}, "age")
        assert lookup.found is True
        assert lookup.value is None


class TestRuleSets:
    """Tests for conjunctive rule sets."""

    def test_empty_rule_set_holds(self):
        assert evaluate_all((), ctx()) is True

    def test_all_rules_must_hold(self):
        rules = (
            ConditionRule("intensity_match", "lt", 0.5),
            ConditionRule("facts.energy_rating", "gt", 7),
        )
        assert evaluate_all(rules, ctx({"intensity_match": 0.4}, facts={"energy_rating": 9}))
        assert not evaluate_all(rules, ctx({"intensity_match": 0.4}, facts={"energy_rating": 5}))

    def test_referenced_factors_in_rule_order(self):
        rules = (
            ConditionRule("facts.energy_rating", "gt", 7),
            ConditionRule("duration_fit", "lt", 0.5),
            ConditionRule("goal_alignment", "lt", 0.5),
            ConditionRule("duration_fit", "gt", 0.1),
        )
        assert referenced_factors(rules) == ("duration_fit", "goal_alignment")


class TestContextBuild:
    """ConditionContext.build converts models to JSON-like data."""

    def test_models_are_dumped(self, profile, make_facts):
        facts = make_facts(selections={"focus": "Strength", "energy": 8})
        context = ConditionContext.build({"goal_alignment": 0.2}, profile=profile, facts=facts)

        assert evaluate(ConditionRule("profile.fitness_level", "eq", "intermediate"), context)
        assert evaluate(ConditionRule("facts.focus", "eq", "strength"), context)
        assert evaluate(ConditionRule("facts.energy_band", "eq", "high"), context)
