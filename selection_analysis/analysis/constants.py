"""Constants for selection analysis.

This module centralizes the magic numbers, thresholds, and names used
across the factor analyzers, content registries, and aggregator.

Constants are organized by functional area:
- Factor names: Canonical factor keys and their evaluation order
- Status thresholds: Fixed score bands for factor status
- Input bands: Energy and duration banding, experience mapping
- Content: Insight bands, impact ranking, content limits
"""

from __future__ import annotations

from typing import Final


ENGINE_VERSION: Final[str] = "1.0.0"


# =============================================================================
# Factor Names
# =============================================================================

class FactorName:
    """Canonical factor keys.

    ORDERED is the order analyzers run in and the key order of every
    result's factors map.
    """

    GOAL_ALIGNMENT = "goal_alignment"
    INTENSITY_MATCH = "intensity_match"
    DURATION_FIT = "duration_fit"
    RECOVERY_RESPECT = "recovery_respect"
    EQUIPMENT_OPTIMIZATION = "equipment_optimization"

    ORDERED: tuple[str, ...] = (
        GOAL_ALIGNMENT,
        INTENSITY_MATCH,
        DURATION_FIT,
        RECOVERY_RESPECT,
        EQUIPMENT_OPTIMIZATION,
    )

    ALL: frozenset[str] = frozenset(ORDERED)

    @staticmethod
    def is_factor(name: str) -> bool:
        """Check if a name is one of the five canonical factors."""
        return name in FactorName.ALL


# =============================================================================
# Score Bands
# =============================================================================

class StatusThreshold:
    """Fixed thresholds mapping a factor score to its status."""

    EXCELLENT = 0.85
    GOOD = 0.70
    WARNING = 0.50


class InsightBand:
    """Score bands used to key insight templates."""

    POOR = "poor"
    WARNING = "warning"
    GOOD = "good"

    POOR_BELOW = 0.5
    WARNING_BELOW = 0.7

    @staticmethod
    def for_score(score: float) -> str:
        """Map a score to its insight band.

        Args:
            score: Factor or overall score in [0, 1]

        Returns:
            "poor" below 0.5, "warning" below 0.7, otherwise "good"
        """
        if score < InsightBand.POOR_BELOW:
            return InsightBand.POOR
        if score < InsightBand.WARNING_BELOW:
            return InsightBand.WARNING
        return InsightBand.GOOD


NEUTRAL_SCORE: Final[float] = 0.5
LOW_SCORE_THRESHOLD: Final[float] = 0.6
WEIGHT_SUM_TOLERANCE: Final[float] = 1e-6


# =============================================================================
# Input Bands
# =============================================================================

class EnergyBand:
    """Energy rating (1-10) banding."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    LOW_MAX = 3
    MODERATE_MAX = 7
    DEFAULT_RATING = 5

    @staticmethod
    def for_rating(rating: int) -> str:
        if rating <= EnergyBand.LOW_MAX:
            return EnergyBand.LOW
        if rating <= EnergyBand.MODERATE_MAX:
            return EnergyBand.MODERATE
        return EnergyBand.HIGH


class DurationBand:
    """Workout duration banding in minutes."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    SHORT_MAX = 20
    MEDIUM_MAX = 45
    DEFAULT_MINUTES = 30

    @staticmethod
    def for_minutes(minutes: float) -> str:
        if minutes <= DurationBand.SHORT_MAX:
            return DurationBand.SHORT
        if minutes <= DurationBand.MEDIUM_MAX:
            return DurationBand.MEDIUM
        return DurationBand.LONG


class ExperienceLevel:
    """Normalized experience levels shared by profile and context inputs."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    RANK: dict[str, int] = {BEGINNER: 0, INTERMEDIATE: 1, ADVANCED: 2}

    ALIASES: dict[str, str] = {
        "beginner": BEGINNER,
        "novice": BEGINNER,
        "first-time": BEGINNER,
        "intermediate": INTERMEDIATE,
        "advanced": ADVANCED,
        "adaptive": ADVANCED,
    }

    @staticmethod
    def normalize(level: str | None) -> str:
        """Map a fitness level or experience label to beginner/intermediate/advanced.

        Unknown or missing labels map to beginner.
        """
        if not level:
            return ExperienceLevel.BEGINNER
        return ExperienceLevel.ALIASES.get(level.strip().lower(), ExperienceLevel.BEGINNER)

    @staticmethod
    def most_conservative(*levels: str) -> str:
        """Return the least experienced of the given normalized levels."""
        return min(levels, key=lambda level: ExperienceLevel.RANK.get(level, 0))


DEFAULT_FOCUS: Final[str] = "general"


# =============================================================================
# Content
# =============================================================================

class ImpactRank:
    """Sort rank for suggestion impact; lower sorts first."""

    ORDER: dict[str, int] = {"high": 0, "medium": 1, "low": 2}
    UNRANKED = 3

    @staticmethod
    def of(impact: str | None) -> int:
        if impact is None:
            return ImpactRank.UNRANKED
        return ImpactRank.ORDER.get(impact, ImpactRank.UNRANKED)


class ContentLimits:
    """Default maximum item counts for content queries."""

    MAX_SUGGESTIONS = 5
    MAX_CATEGORY_SUGGESTIONS = 3
    MAX_QUICK_FIXES = 3
    MAX_LOW_SCORE_SUGGESTIONS = 3

    MAX_EDUCATIONAL_CONTENT = 3
    MAX_CATEGORY_CONTENT = 2
    MAX_LOW_SCORE_CONTENT = 2
    MAX_BEGINNER_CONTENT = 2
