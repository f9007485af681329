"""Recovery respect: do the selections leave room for recovery and limitations?"""

from __future__ import annotations

from collections.abc import Sequence

from ..base import CriterionResult, FactorStatus
from ..classifiers import ConditionCategory, FocusCategory, condition_classifier
from ..constants import DurationBand, EnergyBand, FactorName
from ..inputs import SelectionFacts
from .base import Criterion, CriterionBuilder, FactorAnalyzer, neutral_criterion

MISSING_INJURIES = (
    "Injury information not provided; recovery risks could not be assessed",
    "Complete your profile by listing any injuries or limitations (or confirming you have none)",
)

MIN_RESTORATIVE_SLEEP_HOURS = 6


class RecoveryRespectAnalyzer(FactorAnalyzer):
    """Scores injuries (35%), recent workout load (30%), age and sleep
    recovery capacity (20%) and health conditions (15%).

    Injuries are the one profile array where empty is not neutral: ``None``
    means the question was never answered and the injury criterion scores a
    neutral 0.5 with a completion suggestion, while ``[]`` is an explicit
    "no injuries" and the criterion scores 1.0.
    """

    name = FactorName.RECOVERY_RESPECT
    description = "Analyzes how well selections respect recovery needs and limitations"
    weight = 0.15

    REASONING = {
        FactorStatus.EXCELLENT: "Excellent recovery consideration! Your {energy} selection respects your recovery needs and limitations.",
        FactorStatus.GOOD: "Good recovery consideration. Your selections generally respect your recovery needs.",
        FactorStatus.WARNING: "Moderate recovery consideration. Some selections may not optimally respect your recovery needs.",
        FactorStatus.POOR: "Poor recovery consideration. Your selections may not adequately respect your recovery needs and could lead to overtraining or injury.",
    }
    IMPACT = {
        FactorStatus.EXCELLENT: "Your selections will support optimal recovery and long-term health.",
        FactorStatus.GOOD: "Your selections will generally support recovery with minor adjustments possible.",
        FactorStatus.WARNING: "Your selections may compromise recovery and increase injury risk.",
        FactorStatus.POOR: "Your selections may significantly impact recovery and increase injury risk.",
    }

    def criteria(self) -> Sequence[tuple[float, Criterion]]:
        return (
            (0.35, self.injury_fit),
            (0.30, self.recent_workout_load),
            (0.20, self.recovery_capacity),
            (0.15, self.health_condition_fit),
        )

    def injury_fit(self, facts: SelectionFacts) -> CriterionResult:
        if facts.injuries is None:
            return neutral_criterion(*MISSING_INJURIES)
        c = CriterionBuilder(1.0)
        if not facts.injuries:
            c.note("No injuries reported - selections are appropriate")
            return c.result()

        high = facts.energy_band == EnergyBand.HIGH
        for injury in facts.injuries:
            categories = condition_classifier.categories(injury)
            if ConditionCategory.JOINT in categories and (facts.focus_is(FocusCategory.HIGH_IMPACT) or high):
                c.adjust(
                    -0.3,
                    f"High-impact selection may aggravate {injury}",
                    'Consider "Low Impact" or "Moderate" energy for joint safety',
                )
            if ConditionCategory.BACK in categories and facts.focus_is(FocusCategory.STRENGTH):
                c.adjust(
                    -0.2,
                    f"Strength focus may strain {injury}",
                    'Consider "General Fitness" or "Flexibility" focus for back safety',
                )
            if ConditionCategory.CARDIOVASCULAR in categories and (facts.focus_is(FocusCategory.CARDIO) or high):
                c.adjust(
                    -0.4,
                    f"High-intensity cardio may stress {injury}",
                    'Consider "Low Energy" or "General Fitness" for cardiovascular safety',
                )
            if ConditionCategory.MOBILITY in categories and facts.focus_is(FocusCategory.COMPLEX):
                c.adjust(
                    -0.2,
                    f"Complex movements may challenge {injury}",
                    'Consider "Beginner Friendly" or "General Fitness" for better mobility',
                )
        if not c.details:
            c.note("Selections account for your reported injuries")
        return c.result()

    def recent_workout_load(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(1.0)
        workouts = facts.previous_workouts
        high = facts.energy_band == EnergyBand.HIGH

        if workouts >= 5:
            c.adjust(
                -0.4,
                "Very high workout frequency detected - recovery may be compromised",
                'Consider "Low Energy" or "Recovery" focus for better adaptation',
            )
        elif workouts >= 3:
            c.adjust(-0.2, "High workout frequency - monitor recovery needs")
            if high:
                c.adjust(
                    -0.1,
                    "High energy on top of frequent training adds recovery strain",
                    'Consider "Moderate" energy to support recovery',
                )
        elif workouts == 0:
            c.note("No recent workouts - recovery is not a concern")

        if workouts > 0 and high and facts.last_focus and facts.last_focus.lower() == facts.focus.lower():
            c.adjust(
                -0.2,
                "Repeating high-intensity focus may lead to overtraining",
                'Consider different focus or "Moderate" energy for variety',
            )

        if workouts >= 3 and facts.duration_band == DurationBand.LONG:
            c.adjust(
                -0.1,
                "Long duration with frequent workouts may limit recovery",
                'Consider "Medium" or "Short" duration for better recovery',
            )

        if not c.details:
            c.note("Recent workout load leaves room for this session")
        return c.result()

    def recovery_capacity(self, facts: SelectionFacts) -> CriterionResult:
        """Age brackets are checked from the oldest down."""
        c = CriterionBuilder(1.0)
        high = facts.energy_band == EnergyBand.HIGH
        high_impact = facts.focus_is(FocusCategory.HIGH_IMPACT)
        age = facts.age

        if age is None:
            c.note("Age not specified - assuming appropriate recovery capacity")
        elif age >= 65:
            if high:
                c.adjust(
                    -0.3,
                    "High energy selection may be too intense for your age",
                    'Consider "Low Energy" or "Moderate" for safer training',
                )
            if facts.focus_is(FocusCategory.COMPLEX):
                c.adjust(
                    -0.2,
                    "Complex movements may challenge balance and coordination",
                    'Consider "Beginner Friendly" or "General Fitness" for safety',
                )
        elif age >= 50:
            if high:
                c.adjust(
                    -0.2,
                    "High energy selection may require longer recovery at your age",
                    'Consider "Moderate" energy for better recovery',
                )
            if high_impact:
                c.adjust(
                    -0.1,
                    "High-impact focus may stress joints more at your age",
                    'Consider "Low Impact" or "General Fitness" for joint health',
                )
        elif age >= 40:
            if high and high_impact:
                c.adjust(-0.1, "High-intensity high-impact may require more recovery")

        if facts.sleep_hours is not None and facts.sleep_hours < MIN_RESTORATIVE_SLEEP_HOURS and high:
            c.adjust(
                -0.15,
                f"{facts.sleep_hours:g} hours of sleep may not support a high-energy session",
                "Prioritize 7-9 hours of sleep before intense training",
            )

        if not c.details:
            c.note("Selections suit your recovery capacity")
        return c.result()

    def health_condition_fit(self, facts: SelectionFacts) -> CriterionResult:
        if facts.injuries is None and not facts.health_conditions:
            return neutral_criterion(*MISSING_INJURIES)
        c = CriterionBuilder(1.0)
        if not facts.health_conditions:
            c.note("No health conditions reported - selections are appropriate")
            return c.result()

        energy = facts.energy_band
        for condition in facts.health_conditions:
            categories = condition_classifier.categories(condition)
            if ConditionCategory.RESPIRATORY in categories and (
                energy == EnergyBand.HIGH or facts.focus_is(FocusCategory.CARDIO)
            ):
                c.adjust(
                    -0.3,
                    f"High-intensity selection may stress {condition}",
                    'Consider "Low Energy" or "Moderate" for respiratory safety',
                )
            if ConditionCategory.METABOLIC in categories and energy == EnergyBand.LOW:
                c.adjust(
                    -0.1,
                    f"Low energy may not provide sufficient metabolic stimulus for {condition}",
                    'Consider "Moderate" energy for better metabolic health',
                )
            if ConditionCategory.NEUROLOGICAL in categories and facts.focus_is(FocusCategory.COMPLEX):
                c.adjust(
                    -0.2,
                    f"Complex movements may challenge {condition}",
                    'Consider "Simple" or "General Fitness" focus for safety',
                )
        if not c.details:
            c.note("Selections accommodate your health conditions")
        return c.result()
