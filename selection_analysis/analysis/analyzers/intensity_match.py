"""Intensity match: is the selected energy level right for this user today?"""

from __future__ import annotations

from collections.abc import Sequence

from ..base import CriterionResult, FactorStatus
from ..constants import EnergyBand, ExperienceLevel, FactorName
from ..inputs import SelectionFacts
from .base import Criterion, CriterionBuilder, FactorAnalyzer

# (delta, detail, suggestion) per (level, energy band)
FITNESS_LEVEL_ADJUSTMENTS: dict[tuple[str, str], tuple[float, str, str | None]] = {
    (ExperienceLevel.BEGINNER, EnergyBand.HIGH): (
        -0.7,
        "High energy selection may be too intense for someone new to exercise",
        'Consider "Low Energy" or "Moderate" for a gentler introduction',
    ),
    (ExperienceLevel.BEGINNER, EnergyBand.LOW): (
        0.1, "Low energy selection is perfect for someone new to exercise", None,
    ),
    (ExperienceLevel.INTERMEDIATE, EnergyBand.HIGH): (
        -0.1, "High energy may be challenging but manageable with some experience", None,
    ),
    (ExperienceLevel.INTERMEDIATE, EnergyBand.LOW): (
        0.05, "Low energy selection is appropriate for your experience level", None,
    ),
    (ExperienceLevel.ADVANCED, EnergyBand.LOW): (
        -0.5,
        "Low energy selection may not provide sufficient challenge for advanced level",
        'Consider "High Energy" or "Moderate" for better challenge',
    ),
    (ExperienceLevel.ADVANCED, EnergyBand.HIGH): (
        0.1, "High energy selection is excellent for advanced fitness level", None,
    ),
}

EXPERIENCE_ADJUSTMENTS: dict[tuple[str, str], tuple[float, str, str | None]] = {
    (ExperienceLevel.BEGINNER, EnergyBand.HIGH): (
        -0.55,
        "High energy selection may be overwhelming for beginners",
        'Consider "Moderate" energy for better form and safety',
    ),
    (ExperienceLevel.BEGINNER, EnergyBand.LOW): (
        0.1, "Low energy selection allows focus on proper form and technique", None,
    ),
    (ExperienceLevel.INTERMEDIATE, EnergyBand.HIGH): (
        0.05, "High energy selection is appropriate for intermediate experience", None,
    ),
    (ExperienceLevel.INTERMEDIATE, EnergyBand.LOW): (
        -0.1, "Low energy may not provide enough challenge for intermediate level", None,
    ),
    (ExperienceLevel.ADVANCED, EnergyBand.LOW): (
        -0.3,
        "Low energy selection may not meet advanced training needs",
        'Consider "High Energy" for more challenging workouts',
    ),
    (ExperienceLevel.ADVANCED, EnergyBand.HIGH): (
        0.1, "High energy selection matches advanced training expectations", None,
    ),
}

TIME_OF_DAY_ADJUSTMENTS: dict[tuple[str, str], tuple[float, str, str | None]] = {
    ("morning", EnergyBand.HIGH): (0.1, "High energy selection is excellent for morning workouts", None),
    ("morning", EnergyBand.LOW): (
        -0.1,
        "Low energy selection may not provide enough morning energy boost",
        'Consider "Moderate" or "High Energy" for better morning activation',
    ),
    ("afternoon", EnergyBand.HIGH): (0.05, "High energy selection works well for afternoon workouts", None),
    ("afternoon", EnergyBand.LOW): (
        -0.05, "Low energy selection is acceptable for afternoon but may be too gentle", None,
    ),
    ("evening", EnergyBand.HIGH): (
        -0.2,
        "High energy selection may interfere with evening recovery and sleep",
        'Consider "Low Energy" or "Moderate" for better evening recovery',
    ),
    ("evening", EnergyBand.LOW): (0.1, "Low energy selection is perfect for evening workouts", None),
}


def _apply(
    table: dict[tuple[str, str], tuple[float, str, str | None]],
    key: tuple[str, str],
    c: CriterionBuilder,
    fallback: str,
) -> None:
    if key in table:
        delta, detail, suggestion = table[key]
        c.adjust(delta, detail, suggestion)
    else:
        c.note(fallback)


class IntensityMatchAnalyzer(FactorAnalyzer):
    """Scores the selected energy level against fitness level, experience,
    time of day, recovery load and stated preference (30/25/20/15/10)."""

    name = FactorName.INTENSITY_MATCH
    description = "Analyzes how well selected intensity matches user capacity and preferences"
    weight = 0.25

    REASONING = {
        FactorStatus.EXCELLENT: "Excellent intensity match! Your {energy} energy selection is well suited for your {experience} fitness level.",
        FactorStatus.GOOD: "Good intensity match. Your {energy} selection generally works well for your profile.",
        FactorStatus.WARNING: "Moderate intensity match. Your {energy} selection may need adjustment for optimal results.",
        FactorStatus.POOR: "Poor intensity match. Your {energy} selection may not be appropriate for your current fitness level and needs.",
    }
    IMPACT = {
        FactorStatus.EXCELLENT: "Your intensity selection will maximize workout effectiveness and enjoyment.",
        FactorStatus.GOOD: "Your intensity selection will provide good results with minor adjustments possible.",
        FactorStatus.WARNING: "Your intensity selection may limit workout effectiveness or cause unnecessary strain.",
        FactorStatus.POOR: "Your intensity selection may lead to poor results, injury risk, or lack of motivation.",
    }

    def criteria(self) -> Sequence[tuple[float, Criterion]]:
        return (
            (0.30, self.fitness_level_fit),
            (0.25, self.experience_fit),
            (0.20, self.time_of_day_fit),
            (0.15, self.recovery_load_fit),
            (0.10, self.preference_fit),
        )

    def fitness_level_fit(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(0.8)
        _apply(
            FITNESS_LEVEL_ADJUSTMENTS,
            (facts.experience_level, facts.energy_band),
            c,
            f"{facts.energy_band.capitalize()} energy suits a {facts.experience_level} fitness level",
        )
        return c.result()

    def experience_fit(self, facts: SelectionFacts) -> CriterionResult:
        """Uses the more conservative of profile level and stated experience."""
        c = CriterionBuilder(0.8)
        _apply(
            EXPERIENCE_ADJUSTMENTS,
            (facts.effective_experience, facts.energy_band),
            c,
            f"{facts.energy_band.capitalize()} energy is reasonable for {facts.effective_experience} experience",
        )
        return c.result()

    def time_of_day_fit(self, facts: SelectionFacts) -> CriterionResult:
        if facts.time_of_day is None:
            c = CriterionBuilder(0.7)
            c.note("Time of day not provided; intensity timing could not be assessed")
            return c.result()
        c = CriterionBuilder(0.8)
        _apply(
            TIME_OF_DAY_ADJUSTMENTS,
            (facts.time_of_day, facts.energy_band),
            c,
            f"{facts.energy_band.capitalize()} energy works for {facts.time_of_day} workouts",
        )
        return c.result()

    def recovery_load_fit(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(0.8)
        high = facts.energy_band == EnergyBand.HIGH

        if facts.previous_workouts >= 5:
            if high:
                c.adjust(
                    -0.3,
                    "High energy selection may not allow adequate recovery after recent workouts",
                    'Consider "Low Energy" or "Moderate" for better recovery',
                )
            elif facts.energy_band == EnergyBand.LOW:
                c.adjust(0.1, "Low energy selection supports recovery after recent workouts")
        elif facts.previous_workouts >= 3 and high:
            c.adjust(-0.1, "High energy selection is acceptable but monitor recovery needs")

        if facts.injury_count > 0 and high:
            c.adjust(
                -0.2,
                "High energy selection may aggravate existing injuries",
                'Consider "Low Energy" or "Moderate" for safer training with injuries',
            )
        return c.result()

    def preference_fit(self, facts: SelectionFacts) -> CriterionResult:
        preferred = facts.intensity_preference
        if not preferred:
            c = CriterionBuilder(0.7)
            c.note("No intensity preference on file")
            return c.result()

        c = CriterionBuilder(0.8)
        if facts.energy_band in preferred.lower():
            c.adjust(0.1, f"Your {facts.energy_band} selection matches your preferred energy level")
        else:
            c.adjust(
                -0.1,
                f"You typically prefer {preferred} workouts, but selected {facts.energy_band}",
                f"Consider {preferred} energy for workouts you enjoy more",
            )
        return c.result()
