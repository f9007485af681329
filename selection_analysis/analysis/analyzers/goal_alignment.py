"""Goal alignment: do the selections serve the user's fitness goals?"""

from __future__ import annotations

from collections.abc import Sequence

from ..base import CriterionResult, FactorStatus
from ..classifiers import (
    GOAL_RECOMMENDED_FOCUS,
    FocusCategory,
    GoalCategory,
    focus_classifier,
    goal_classifier,
)
from ..constants import EnergyBand, ExperienceLevel, FactorName
from ..inputs import SelectionFacts
from .base import Criterion, CriterionBuilder, FactorAnalyzer

# Energy adjustments per goal category: (low energy, high energy)
INTENSITY_GOAL_ADJUSTMENTS: dict[str, tuple[float, float]] = {
    GoalCategory.WEIGHT_LOSS: (-0.2, 0.1),
    GoalCategory.STRENGTH: (-0.1, 0.1),
    GoalCategory.CARDIO: (-0.3, 0.2),
}


class GoalAlignmentAnalyzer(FactorAnalyzer):
    """Scores goal-type match (40%), focus/experience fit (30%) and intensity/goal fit (30%)."""

    name = FactorName.GOAL_ALIGNMENT
    description = "Analyzes how well workout selections align with user fitness goals"
    weight = 0.25

    REASONING = {
        FactorStatus.EXCELLENT: "Excellent alignment! Your {focus} focus and {energy} energy selection support your fitness goals.",
        FactorStatus.GOOD: "Good alignment. Your selections generally support your goals, with room for minor optimizations.",
        FactorStatus.WARNING: "Moderate alignment. Some selections may not optimally support your goals. Consider the suggestions below.",
        FactorStatus.POOR: "Poor alignment. Your current selections may not effectively support your fitness goals. Review the suggestions for better results.",
    }
    IMPACT = {
        FactorStatus.EXCELLENT: "Your selections will maximize progress toward your fitness goals.",
        FactorStatus.GOOD: "Your selections will provide good progress, with some room for optimization.",
        FactorStatus.WARNING: "Your selections may slow progress toward your goals. Consider adjustments.",
        FactorStatus.POOR: "Your selections may significantly limit progress toward your goals.",
    }

    def criteria(self) -> Sequence[tuple[float, Criterion]]:
        return (
            (0.4, self.goal_type_match),
            (0.3, self.focus_experience_fit),
            (0.3, self.intensity_goal_fit),
        )

    def missing_profile_data(self, facts: SelectionFacts) -> tuple[str, str] | None:
        if not facts.goals:
            return (
                "No specific fitness goals set in profile",
                "Complete your profile by setting your primary fitness goals for better workout recommendations",
            )
        return None

    def goal_type_match(self, facts: SelectionFacts) -> CriterionResult:
        """Fraction of goals whose category the selected focus serves."""
        focus_categories = set(focus_classifier.categories(facts.focus))
        details: list[str] = []
        suggestions: list[str] = []
        matched = 0

        for goal in facts.goals:
            goal_categories = [
                c for c in goal_classifier.categories(goal) if c in FocusCategory.GOAL_TYPES
            ]
            served = [c for c in goal_categories if c in focus_categories]
            if served:
                matched += 1
                details.append(f'Goal "{goal}" aligns with {facts.focus} focus')
            else:
                details.append(f'Goal "{goal}" may not be optimally served by {facts.focus} focus')
                alternative = (
                    GOAL_RECOMMENDED_FOCUS[goal_categories[0]] if goal_categories else "General Fitness"
                )
                suggestion = f"Consider {alternative} for better goal alignment"
                if suggestion not in suggestions:
                    suggestions.append(suggestion)

        if matched == 0:
            suggestions.append("Your selected workout focus may not align with your primary goals")

        return CriterionResult(
            score=matched / len(facts.goals),
            details=tuple(details),
            suggestions=tuple(suggestions),
        )

    def focus_experience_fit(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(0.75)
        experience = facts.experience_level

        if experience == ExperienceLevel.BEGINNER and facts.focus_is(FocusCategory.ADVANCED):
            c.adjust(
                -0.3,
                f"{facts.focus} focus may be too advanced for beginner level",
                'Consider "General Fitness" or "Beginner Friendly" focus',
            )
        elif experience == ExperienceLevel.ADVANCED and facts.focus_is(FocusCategory.BEGINNER):
            c.adjust(
                -0.2,
                f"{facts.focus} focus may not provide enough challenge for advanced level",
                'Consider "Strength" or "High Intensity" focus for more challenge',
            )
        else:
            c.note(f"{facts.focus} focus is appropriate for your {experience} experience level")

        if facts.workout_style:
            preferred = facts.workout_style[0].lower()
            focus = facts.focus.lower()
            if preferred not in focus and focus not in preferred:
                c.adjust(
                    -0.1,
                    f"You typically prefer {facts.workout_style[0]} workouts, but selected {facts.focus}",
                )
        return c.result()

    def intensity_goal_fit(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(0.7)
        for category in facts.goal_categories:
            if category not in INTENSITY_GOAL_ADJUSTMENTS:
                continue
            low_delta, high_delta = INTENSITY_GOAL_ADJUSTMENTS[category]
            label = category.replace("_", " ")
            if facts.energy_band == EnergyBand.LOW:
                c.adjust(
                    low_delta,
                    f"Low energy selection may limit results for {label} goals",
                    'Consider "Moderate" or "High Energy" for better results' if low_delta <= -0.2 else None,
                )
            elif facts.energy_band == EnergyBand.HIGH:
                c.adjust(high_delta, f"High energy selection supports {label} goals")
        if not c.details:
            c.note(f"{facts.energy_band.capitalize()} energy is compatible with your goals")
        return c.result()
