"""Shared filter, rank and truncate pipeline for content templates."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar

from ..conditions import ConditionContext, ConditionRule, evaluate_all, referenced_factors
from ..constants import LOW_SCORE_THRESHOLD, ImpactRank


class RankedTemplate(Protocol):
    priority: int
    conditions: tuple[ConditionRule, ...]


T = TypeVar("T", bound=RankedTemplate)


def rank_key(template: RankedTemplate) -> tuple[int, int]:
    """Sort key: priority ascending, then impact high > medium > low."""
    return (template.priority, ImpactRank.of(getattr(template, "impact", None)))


def select_templates(
    templates: Iterable[T],
    predicate: Callable[[T], bool],
    max_items: int,
) -> list[T]:
    """Filter templates, rank them and keep the first ``max_items``.

    The sort is stable, so templates that tie on priority and impact keep
    their registration order.

    Args:
        templates: Templates in registration order
        predicate: Filter applied to each template
        max_items: Maximum number of templates to return; 0 or less returns []

    Returns:
        Ranked list of at most ``max_items`` templates
    """
    if max_items <= 0:
        return []
    matches = [template for template in templates if predicate(template)]
    matches.sort(key=rank_key)
    return matches[:max_items]


def matches_conditions(template: RankedTemplate, ctx: ConditionContext) -> bool:
    return evaluate_all(template.conditions, ctx)


def reads_low_score(template: RankedTemplate, ctx: ConditionContext) -> bool:
    """Check whether any factor the template reads scores below LOW_SCORE_THRESHOLD."""
    for factor in referenced_factors(template.conditions):
        score = ctx.factor_scores.get(factor)
        if score is not None and score < LOW_SCORE_THRESHOLD:
            return True
    return False
