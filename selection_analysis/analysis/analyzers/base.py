"""Base class for factor analyzers.

A factor analyzer scores one aspect of how well workout selections fit a
user profile. Each analyzer is a set of weighted sub-criteria; the base
class runs them, combines their scores, derives the status band and renders
the band-specific reasoning and impact text.

Subclasses provide:
    - ``name``, ``description``, ``weight``: descriptive metadata. The
      aggregator's configured weights decide the overall score; ``weight``
      only documents the default.
    - ``criteria()``: ordered (weight, callable) pairs summing to 1.
    - ``REASONING`` / ``IMPACT``: text per status band.
    - optionally ``missing_profile_data()`` to short-circuit to a neutral
      score when the profile lacks the data the factor is about.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import ClassVar

from selection_analysis.schemas import AnalysisContext, UserProfile, WorkoutSelections

from ..base import CriterionResult, FactorScore, FactorStatus, clamp_score
from ..constants import NEUTRAL_SCORE
from ..inputs import SelectionFacts, extract_facts

logger = logging.getLogger(__name__)

Criterion = Callable[[SelectionFacts], CriterionResult]


def neutral_criterion(detail: str, suggestion: str) -> CriterionResult:
    """Neutral result for a sub-criterion whose profile data is missing."""
    return CriterionResult(score=NEUTRAL_SCORE, details=(detail,), suggestions=(suggestion,))


class CriterionBuilder:
    """Accumulates a sub-criterion score with its details and suggestions.

    Example:
        >>> c = CriterionBuilder(0.8)
        >>> c.adjust(-0.3, "High energy may be too much", "Try Moderate energy")
        >>> c.result().score
        0.5
    """

    def __init__(self, base: float) -> None:
        self.score = base
        self.details: list[str] = []
        self.suggestions: list[str] = []

    def adjust(self, delta: float, detail: str, suggestion: str | None = None) -> None:
        self.score += delta
        self.note(detail, suggestion)

    def note(self, detail: str, suggestion: str | None = None) -> None:
        self.details.append(detail)
        if suggestion and suggestion not in self.suggestions:
            self.suggestions.append(suggestion)

    def result(self) -> CriterionResult:
        return CriterionResult(
            score=round(clamp_score(self.score), 6),
            details=tuple(self.details),
            suggestions=tuple(self.suggestions),
        )


class FactorAnalyzer(ABC):
    """Abstract base for the five factor analyzers."""

    name: ClassVar[str]
    description: ClassVar[str]
    weight: ClassVar[float]

    REASONING: ClassVar[dict[FactorStatus, str]]
    IMPACT: ClassVar[dict[FactorStatus, str]]

    def __init__(self) -> None:
        total = sum(weight for weight, _ in self.criteria())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(
                f"{type(self).__name__} sub-criteria weights sum to {total}, expected 1.0"
            )

    @abstractmethod
    def criteria(self) -> Sequence[tuple[float, Criterion]]:
        """Return the weighted sub-criteria in evaluation order."""
        ...

    def missing_profile_data(self, facts: SelectionFacts) -> tuple[str, str] | None:
        """Return (detail, suggestion) when the whole factor cannot be judged."""
        return None

    def analyze(
        self,
        profile: UserProfile,
        selections: WorkoutSelections,
        context: AnalysisContext,
    ) -> FactorScore:
        """Score the selections for this factor.

        Args:
            profile: Stored user profile
            selections: Per-workout selections
            context: Request context

        Returns:
            FactorScore with status, reasoning, impact, details and suggestions
        """
        return self.analyze_facts(extract_facts(profile, selections, context))

    def analyze_facts(self, facts: SelectionFacts) -> FactorScore:
        """Score an already normalized request."""
        missing = self.missing_profile_data(facts)
        if missing is not None:
            detail, suggestion = missing
            logger.debug(f"{self.name}: missing profile data, using neutral score")
            return self._build(NEUTRAL_SCORE, facts, (detail,), (suggestion,))

        total = 0.0
        details: list[str] = []
        suggestions: list[str] = []
        for weight, criterion in self.criteria():
            result = criterion(facts)
            total += result.score * weight
            details.extend(result.details)
            for suggestion in result.suggestions:
                if suggestion not in suggestions:
                    suggestions.append(suggestion)

        score = round(clamp_score(total), 6)
        logger.debug(f"{self.name}: score={score:.3f}")
        return self._build(score, facts, tuple(details), tuple(suggestions))

    def _build(
        self,
        score: float,
        facts: SelectionFacts,
        details: tuple[str, ...],
        suggestions: tuple[str, ...],
    ) -> FactorScore:
        status = FactorStatus.for_score(score)
        text_args = self.text_arguments(facts)
        return FactorScore(
            score=score,
            status=status,
            reasoning=self.REASONING[status].format(**text_args),
            impact=self.IMPACT[status].format(**text_args),
            details=details,
            suggestions=suggestions,
        )

    def text_arguments(self, facts: SelectionFacts) -> dict[str, str]:
        """Values available to the REASONING and IMPACT templates."""
        return {
            "focus": facts.focus,
            "energy": facts.energy_band,
            "duration": f"{facts.duration_minutes:g}",
            "experience": facts.experience_level,
        }
