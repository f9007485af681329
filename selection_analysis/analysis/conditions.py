"""Declarative condition rules over factor scores and request data.

A ``ConditionRule`` compares one value against a scalar comparand. The value
comes either from the factor-score map (when ``source_field`` names a
factor) or from a dotted path resolved over JSON-like request data:

    ConditionRule("intensity_match", "lt", 0.5)
    ConditionRule("profile.fitness_level", "eq", "beginner")
    ConditionRule("facts.energy_rating", "gt", 7)

A rule set matches when every rule matches. Evaluation never raises:
missing paths, non-numeric operands and unknown operators all make a rule
false.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .constants import FactorName

logger = logging.getLogger(__name__)


class ConditionOperator(str, Enum):
    """Supported comparison operators."""

    LT = "lt"
    LTE = "lte"
    EQ = "eq"
    GTE = "gte"
    GT = "gt"

    @classmethod
    def parse(cls, value: ConditionOperator | str) -> ConditionOperator | None:
        """Return the operator for a value, or None if it is not supported."""
        if isinstance(value, cls):
            return value
        try:
            return cls._value2member_map_.get(value)  # type: ignore[return-value]
        except TypeError:
            # Unhashable values such as lists
            return None


@dataclass(frozen=True)
class ConditionRule:
    """Single scalar comparison.

    Attributes:
        source_field: Factor name or dotted path (e.g. "facts.energy_rating")
        operator: One of lt, lte, eq, gte, gt
        comparand: Scalar to compare against
    """

    source_field: str
    operator: ConditionOperator | str
    comparand: float | int | str | bool

    @property
    def reads_factor(self) -> bool:
        return FactorName.is_factor(self.source_field)

    def to_dict(self) -> dict[str, Any]:
        operator = self.operator.value if isinstance(self.operator, ConditionOperator) else self.operator
        return {"field": self.source_field, "operator": operator, "value": self.comparand}


# =============================================================================
# Path resolution
# =============================================================================

@dataclass(frozen=True)
class PathLookup:
    """Result of resolving a dotted path: either a found value or missing."""

    found: bool
    value: Any = None

    @classmethod
    def missing(cls) -> PathLookup:
        return _MISSING

    @classmethod
    def of(cls, value: Any) -> PathLookup:
        return cls(found=True, value=value)


_MISSING = PathLookup(found=False)


def to_json_like(value: Any) -> Any:
    """Convert pydantic models and tuples into plain dicts and lists."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return {str(k): to_json_like(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_like(v) for v in value]
    return value


def resolve_path(root: Any, path: str) -> PathLookup:
    """Resolve a dotted path through nested mappings and sequences.

    Sequence elements are addressed by integer segments ("goals.0").
    A missing key, an out-of-range index or a scalar in the middle of the
    path yields ``PathLookup.missing()``.

    Args:
        root: JSON-like value (dicts, lists, scalars)
        path: Dotted path; the empty path resolves to root itself

    Returns:
        PathLookup with ``found`` and ``value``
    """
    current = root
    if not path:
        return PathLookup.of(current)

    for segment in path.split("."):
        if isinstance(current, Mapping):
            if segment not in current:
                return PathLookup.missing()
            current = current[segment]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            try:
                index = int(segment)
            except ValueError:
                return PathLookup.missing()
            if not -len(current) <= index < len(current):
                return PathLookup.missing()
            current = current[index]
        else:
            return PathLookup.missing()
    return PathLookup.of(current)


# =============================================================================
# Context
# =============================================================================

@dataclass(frozen=True)
class ConditionContext:
    """Everything a rule may read.

    Attributes:
        factor_scores: Factor name to score
        sources: JSON-like roots addressed by the first path segment
            ("profile", "selections", "facts", "context", "overall_score")
    """

    factor_scores: Mapping[str, float]
    sources: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        factor_scores: Mapping[str, float],
        profile: Any = None,
        selections: Any = None,
        facts: Any = None,
        context: Any = None,
        overall_score: float | None = None,
    ) -> ConditionContext:
        """Bundle scores and request data, converting everything to JSON-like values."""
        sources: dict[str, Any] = {}
        if profile is not None:
            sources["profile"] = to_json_like(profile)
        if selections is not None:
            sources["selections"] = to_json_like(selections)
        if facts is not None:
            sources["facts"] = facts.to_dict() if hasattr(facts, "to_dict") else to_json_like(facts)
        if context is not None:
            sources["context"] = to_json_like(context)
        if overall_score is not None:
            sources["overall_score"] = overall_score
        return cls(factor_scores=dict(factor_scores), sources=sources)

    def lookup(self, source_field: str) -> PathLookup:
        if FactorName.is_factor(source_field):
            if source_field in self.factor_scores:
                return PathLookup.of(self.factor_scores[source_field])
            return PathLookup.missing()
        return resolve_path(self.sources, source_field)


# =============================================================================
# Evaluation
# =============================================================================

def _scalar_kind(value: Any) -> str | None:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return None


def _compare_numbers(operator: ConditionOperator, left: float, right: float) -> bool:
    if operator is ConditionOperator.LT:
        return left < right
    if operator is ConditionOperator.LTE:
        return left <= right
    if operator is ConditionOperator.GTE:
        return left >= right
    return left > right


def evaluate(rule: ConditionRule, context: ConditionContext) -> bool:
    """Evaluate one rule against a context.

    Args:
        rule: Rule to evaluate
        context: Factor scores and request data

    Returns:
        True if the rule holds. Missing values, non-numeric operands for
        ordering operators, non-scalar values for ``eq`` and unknown
        operators all return False.
    """
    operator = ConditionOperator.parse(rule.operator)
    if operator is None:
        logger.debug(f"Unknown operator '{rule.operator}' in rule on '{rule.source_field}'")
        return False
    if not isinstance(rule.source_field, str):
        logger.debug(f"Rule source field must be a string, got {rule.source_field!r}")
        return False

    lookup = context.lookup(rule.source_field)
    if not lookup.found:
        return False

    value = lookup.value
    value_kind = _scalar_kind(value)
    comparand_kind = _scalar_kind(rule.comparand)

    if operator is ConditionOperator.EQ:
        if value_kind is None or value_kind != comparand_kind:
            return False
        return value == rule.comparand

    if value_kind != "number" or comparand_kind != "number":
        return False
    return _compare_numbers(operator, value, rule.comparand)


def evaluate_all(rules: Iterable[ConditionRule], context: ConditionContext) -> bool:
    """Return True if every rule holds; an empty rule set always holds."""
    return all(evaluate(rule, context) for rule in rules)


def referenced_factors(rules: Iterable[ConditionRule]) -> tuple[str, ...]:
    """Return the factor names read by a rule set, in rule order."""
    factors: list[str] = []
    for rule in rules:
        if rule.reads_factor and rule.source_field not in factors:
            factors.append(rule.source_field)
    return tuple(factors)
