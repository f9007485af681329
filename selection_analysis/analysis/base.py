"""Result types for selection analysis.

This module defines the immutable value objects produced by the engine:
per-factor scores, the aggregated analysis result, its metadata, and the
condensed quick-analysis projection. All are frozen dataclasses with a
``to_dict()`` method for serialization.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from .constants import StatusThreshold
from .exceptions import AnalysisError

if TYPE_CHECKING:
    from .content.education import EducationalContentTemplate
    from .content.insights import Insight
    from .content.suggestions import SuggestionTemplate


class FactorStatus(str, Enum):
    """Qualitative band of a factor score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    WARNING = "warning"
    POOR = "poor"

    @classmethod
    def for_score(
        cls,
        score: float,
        excellent: float = StatusThreshold.EXCELLENT,
        good: float = StatusThreshold.GOOD,
        warning: float = StatusThreshold.WARNING,
    ) -> FactorStatus:
        """Map a score to its status band.

        Args:
            score: Score in [0, 1]
            excellent: Lower bound of the excellent band
            good: Lower bound of the good band
            warning: Lower bound of the warning band

        Returns:
            The matching FactorStatus
        """
        if score >= excellent:
            return cls.EXCELLENT
        if score >= good:
            return cls.GOOD
        if score >= warning:
            return cls.WARNING
        return cls.POOR


def clamp_score(value: float) -> float:
    """Clamp a score into [0, 1]."""
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class FactorScore:
    """Score of one analysis factor.

    Attributes:
        score: Weighted sub-criteria total in [0, 1]
        status: Status band derived from the fixed thresholds
        reasoning: One-sentence explanation of the score band
        impact: What the score means for the generated workout
        details: Ordered observations gathered by the sub-criteria
        suggestions: Short improvement hints gathered by the sub-criteria
    """

    score: float
    status: FactorStatus
    reasoning: str
    impact: str
    details: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.score, (int, float)) or math.isnan(self.score):
            raise AnalysisError(
                f"Factor score must be a number, got {self.score!r}",
                details={"score": repr(self.score)},
            )
        if not 0.0 <= self.score <= 1.0:
            raise AnalysisError(
                f"Factor score {self.score} outside [0, 1]",
                details={"score": self.score},
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "status": self.status.value,
            "reasoning": self.reasoning,
            "impact": self.impact,
            "details": list(self.details),
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class AnalysisMetadata:
    """Bookkeeping attached to every analysis result.

    Attributes:
        analysis_time_ms: Wall time spent computing the result
        factor_weights: Configured weights used for the overall score
        data_quality: Input completeness estimate in [0, 1]
        version: Engine version tag
        timestamp: When the result was computed (UTC)
        warnings: Input defaults applied while analyzing
    """

    analysis_time_ms: float
    factor_weights: dict[str, float]
    data_quality: float
    version: str
    timestamp: datetime
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "analysis_time_ms": self.analysis_time_ms,
            "factor_weights": dict(self.factor_weights),
            "data_quality": self.data_quality,
            "version": self.version,
            "timestamp": self.timestamp.isoformat(),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class SelectionAnalysisResult:
    """Complete analysis of one set of workout selections.

    Attributes:
        overall_score: Weighted sum of the five factor scores
        factors: Factor name to FactorScore, always the five canonical keys
        insights: Selected insights, highest priority first
        suggestions: Selected suggestion templates, ranked
        educational_content: Selected educational templates, ranked
        metadata: Timing, weights, data quality, version and timestamp
    """

    overall_score: float
    factors: dict[str, FactorScore]
    insights: tuple[Insight, ...]
    suggestions: tuple[SuggestionTemplate, ...]
    educational_content: tuple[EducationalContentTemplate, ...]
    metadata: AnalysisMetadata

    @property
    def factor_scores(self) -> dict[str, float]:
        """Factor name to numeric score."""
        return {name: factor.score for name, factor in self.factors.items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall_score": self.overall_score,
            "factors": {name: factor.to_dict() for name, factor in self.factors.items()},
            "insights": [insight.to_dict() for insight in self.insights],
            "suggestions": [suggestion.to_dict() for suggestion in self.suggestions],
            "educational_content": [content.to_dict() for content in self.educational_content],
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class CriterionResult:
    """Outcome of one weighted sub-criterion inside an analyzer."""

    score: float
    details: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class QuickAnalysis:
    """Condensed projection of a full analysis."""

    score: float
    status: FactorStatus
    message: str
    top_suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "status": self.status.value,
            "message": self.message,
            "top_suggestion": self.top_suggestion,
        }
