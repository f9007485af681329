"""Duration fit: is the selected session length right for this user and workout?"""

from __future__ import annotations

from collections.abc import Sequence

from ..base import CriterionResult, FactorStatus
from ..classifiers import FocusCategory, GoalCategory
from ..constants import DurationBand, EnergyBand, ExperienceLevel, FactorName
from ..inputs import SelectionFacts
from .base import Criterion, CriterionBuilder, FactorAnalyzer, neutral_criterion

BEGINNER_COMFORT_MINUTES = 30

# Duration adjustments per goal category: (short delta, long delta, short suggestion)
GOAL_DURATION_ADJUSTMENTS: dict[str, tuple[float, float, str | None]] = {
    GoalCategory.WEIGHT_LOSS: (-0.2, 0.1, 'Consider "Medium" or "Long" duration for better weight loss results'),
    GoalCategory.STRENGTH: (-0.1, 0.05, None),
    GoalCategory.CARDIO: (-0.3, 0.2, 'Consider "Medium" or "Long" duration for better cardio development'),
    GoalCategory.FLEXIBILITY: (-0.1, 0.1, None),
}


class DurationFitAnalyzer(FactorAnalyzer):
    """Scores duration against fitness level (30%), goals (25%),
    workout type (25%) and time availability (20%)."""

    name = FactorName.DURATION_FIT
    description = "Analyzes how well selected duration fits user profile and goals"
    weight = 0.20

    REASONING = {
        FactorStatus.EXCELLENT: "Excellent duration fit! Your {duration}-minute selection is well suited for your {experience} level and {focus} focus.",
        FactorStatus.GOOD: "Good duration fit. Your {duration}-minute selection generally works well for your profile and goals.",
        FactorStatus.WARNING: "Moderate duration fit. Your {duration}-minute selection may need adjustment for optimal results.",
        FactorStatus.POOR: "Poor duration fit. Your {duration}-minute selection may not be appropriate for your current needs and goals.",
    }
    IMPACT = {
        FactorStatus.EXCELLENT: "Your duration selection will maximize workout effectiveness and goal achievement.",
        FactorStatus.GOOD: "Your duration selection will provide good results with minor optimizations possible.",
        FactorStatus.WARNING: "Your duration selection may limit workout effectiveness or goal progress.",
        FactorStatus.POOR: "Your duration selection may significantly impact workout quality and goal achievement.",
    }

    def criteria(self) -> Sequence[tuple[float, Criterion]]:
        return (
            (0.30, self.fitness_level_fit),
            (0.25, self.goal_fit),
            (0.25, self.workout_type_fit),
            (0.20, self.time_availability_fit),
        )

    def fitness_level_fit(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(0.8)
        level = facts.experience_level
        band = facts.duration_band

        if level == ExperienceLevel.BEGINNER:
            if band == DurationBand.LONG:
                c.adjust(
                    -0.4,
                    "Long duration may be overwhelming for someone new to exercise",
                    'Consider "Short" or "Medium" duration for easier adaptation',
                )
            elif facts.duration_minutes > BEGINNER_COMFORT_MINUTES:
                c.adjust(
                    -0.15,
                    f"Sessions over {BEGINNER_COMFORT_MINUTES} minutes can be hard to sustain as a beginner",
                    f"Consider {BEGINNER_COMFORT_MINUTES} minutes or less while building the habit",
                )
            elif band == DurationBand.SHORT:
                c.adjust(0.1, "Short duration is perfect for building exercise habits")
        elif level == ExperienceLevel.INTERMEDIATE:
            if band == DurationBand.LONG:
                c.adjust(-0.1, "Long duration is manageable with some experience")
            elif band == DurationBand.SHORT:
                c.adjust(0.05, "Short duration works well for your experience level")
        else:
            if band == DurationBand.SHORT:
                c.adjust(
                    -0.2,
                    "Short duration may not provide sufficient training stimulus for advanced level",
                    'Consider "Medium" or "Long" duration for better training effect',
                )
            elif band == DurationBand.LONG:
                c.adjust(0.1, "Long duration supports advanced training needs")

        if not c.details:
            c.note(f"{band.capitalize()} duration suits your {level} level")
        return c.result()

    def goal_fit(self, facts: SelectionFacts) -> CriterionResult:
        if not facts.goals:
            return neutral_criterion(
                "No specific goals set; duration could not be matched to goals",
                "Complete your profile by adding fitness goals to tailor session length",
            )

        c = CriterionBuilder(0.8)
        band = facts.duration_band
        for category in facts.goal_categories:
            short_delta, long_delta, suggestion = GOAL_DURATION_ADJUSTMENTS[category]
            label = category.replace("_", " ")
            if band == DurationBand.SHORT:
                c.adjust(short_delta, f"Short duration may limit progress on {label} goals", suggestion)
            elif band == DurationBand.LONG:
                c.adjust(long_delta, f"Long duration supports {label} goals")
        if not c.details:
            c.note(f"{band.capitalize()} duration is compatible with your goals")
        return c.result()

    def workout_type_fit(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(0.8)
        band = facts.duration_band
        high = facts.energy_band == EnergyBand.HIGH

        if facts.focus_is(FocusCategory.HIGH_INTENSITY):
            if band == DurationBand.LONG and high:
                c.adjust(
                    -0.3,
                    "Long duration with high energy may lead to overtraining",
                    'Consider "Medium" duration for high-intensity workouts',
                )
            elif band == DurationBand.SHORT and high:
                c.adjust(0.1, "Short duration is perfect for high-intensity training")
        elif facts.focus_is(FocusCategory.STRENGTH):
            if band == DurationBand.SHORT:
                c.adjust(
                    -0.2,
                    "Short duration may limit strength training effectiveness",
                    'Consider "Medium" or "Long" duration for strength training',
                )
            elif band == DurationBand.LONG:
                c.adjust(0.1, "Long duration supports comprehensive strength training")
        elif facts.focus_is(FocusCategory.CARDIO):
            if band == DurationBand.SHORT:
                c.adjust(
                    -0.3,
                    "Short duration may not provide sufficient cardio stimulus",
                    'Consider "Medium" or "Long" duration for cardio training',
                )
            elif band == DurationBand.LONG:
                c.adjust(0.2, "Long duration is excellent for cardio development")
        elif facts.focus_is(FocusCategory.FLEXIBILITY):
            if band == DurationBand.SHORT:
                c.adjust(-0.1, "Short duration may limit flexibility work")
            elif band == DurationBand.LONG:
                c.adjust(0.1, "Long duration allows for comprehensive flexibility work")

        if not c.details:
            c.note(f"{band.capitalize()} duration works for a {facts.focus} session")
        return c.result()

    def time_availability_fit(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(0.8)

        if facts.time_constraint:
            if facts.duration_minutes > facts.time_constraint:
                c.adjust(
                    -0.4,
                    f"{facts.duration_minutes:g} minutes exceeds your usual {facts.time_constraint}-minute window",
                    f"Choose {facts.time_constraint} minutes or less to fit your schedule",
                )
            else:
                c.adjust(0.1, "Duration fits within your available time")
            return c.result()

        if facts.experience_level == ExperienceLevel.BEGINNER and facts.duration_band == DurationBand.LONG:
            c.adjust(
                -0.1,
                "Long duration may be challenging to maintain for beginners",
                'Consider "Medium" duration for better consistency',
            )
        elif facts.experience_level == ExperienceLevel.ADVANCED and facts.duration_band == DurationBand.SHORT:
            c.adjust(
                -0.1,
                "Short duration may not meet advanced training needs",
                'Consider "Medium" or "Long" duration for better results',
            )
        else:
            c.note("No time constraint on file; duration looks sustainable")
        return c.result()
