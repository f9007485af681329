"""Equipment optimization: do the selections make good use of available equipment and space?"""

from __future__ import annotations

from collections.abc import Sequence

from ..base import CriterionResult, FactorStatus
from ..classifiers import (
    REQUIRED_EQUIPMENT,
    EquipmentCategory,
    FocusCategory,
    equipment_classifier,
    equipment_matches,
    location_classifier,
)
from ..constants import DEFAULT_FOCUS, FactorName
from ..inputs import SelectionFacts
from .base import Criterion, CriterionBuilder, FactorAnalyzer

# (coverage floor, delta, detail template); first matching row applies
COVERAGE_BANDS: tuple[tuple[float, float, str], ...] = (
    (0.8, 0.2, "Excellent equipment match for {focus} focus"),
    (0.6, 0.1, "Good equipment match for {focus} focus"),
    (0.4, -0.1, "Moderate equipment match for {focus} focus"),
    (0.0, -0.3, "Poor equipment match for {focus} focus"),
)

# Focus label suggested for each kind of equipment the user owns, in preference order
ALTERNATIVE_FOCUS: tuple[tuple[str, str], ...] = (
    (EquipmentCategory.STRENGTH, "Strength Training"),
    (EquipmentCategory.CARDIO, "Cardio"),
    (EquipmentCategory.FLEXIBILITY, "Flexibility"),
)


def alternative_focus(equipment: Sequence[str]) -> str:
    """Return the focus that best uses the given equipment."""
    for category, focus in ALTERNATIVE_FOCUS:
        if equipment_classifier.any_matches(equipment, category):
            return focus
    return "General Fitness"


class EquipmentOptimizationAnalyzer(FactorAnalyzer):
    """Scores required-equipment coverage (40%), selected equipment
    utilization (30%), space fit (20%) and equipment quality (10%)."""

    name = FactorName.EQUIPMENT_OPTIMIZATION
    description = "Analyzes how well selections optimize the use of available equipment"
    weight = 0.15

    REASONING = {
        FactorStatus.EXCELLENT: "Excellent equipment optimization! Your {focus} selection makes optimal use of your available equipment.",
        FactorStatus.GOOD: "Good equipment optimization. Your {focus} selection generally works well with your equipment.",
        FactorStatus.WARNING: "Moderate equipment optimization. Your {focus} selection may not optimally utilize your equipment.",
        FactorStatus.POOR: "Poor equipment optimization. Your {focus} selection may not work well with your available equipment.",
    }
    IMPACT = {
        FactorStatus.EXCELLENT: "Your selections will maximize the effectiveness of your available equipment.",
        FactorStatus.GOOD: "Your selections will generally work well with your equipment.",
        FactorStatus.WARNING: "Your selections may not optimally utilize your equipment.",
        FactorStatus.POOR: "Your selections may not work effectively with your available equipment.",
    }

    def criteria(self) -> Sequence[tuple[float, Criterion]]:
        return (
            (0.4, self.required_equipment_coverage),
            (0.3, self.equipment_utilization),
            (0.2, self.space_fit),
            (0.1, self.equipment_quality),
        )

    def missing_profile_data(self, facts: SelectionFacts) -> tuple[str, str] | None:
        if not facts.available_equipment:
            return (
                "No available equipment listed in profile",
                "Complete your profile by listing available equipment (or confirming bodyweight only)",
            )
        return None

    def required_equipment_coverage(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(0.8)
        available = facts.available_equipment
        required = REQUIRED_EQUIPMENT.get(facts.focus_category, ())

        if not required:
            c.adjust(0.1, f"{facts.focus} focus works well with your available equipment")
            return c.result()

        matched = [
            item for item in required
            if any(equipment_matches(owned, item) for owned in available)
        ]
        coverage = len(matched) / len(required)
        for floor, delta, detail in COVERAGE_BANDS:
            if coverage >= floor:
                suggestion = None
                if delta <= -0.3:
                    suggestion = f"Consider {alternative_focus(available)} for better equipment utilization"
                c.adjust(delta, detail.format(focus=facts.focus), suggestion)
                break

        for item in required:
            if item in matched:
                c.note(f"{item} available for {facts.focus} focus")
            else:
                c.note(f"{item} may be needed for optimal {facts.focus} training")
        return c.result()

    def equipment_utilization(self, facts: SelectionFacts) -> CriterionResult:
        """Selected items must be owned; the focus should use what is owned."""
        c = CriterionBuilder(0.8)
        available = facts.available_equipment

        missing = [
            item for item in facts.selected_equipment
            if not any(equipment_matches(owned, item) for owned in available)
        ]
        if missing:
            c.adjust(
                -0.15 * min(len(missing), 2),
                f"Selected equipment not in your profile: {', '.join(missing)}",
                "Select only equipment you have access to, or update your profile",
            )
        elif facts.selected_equipment:
            c.note("All selected equipment is available")

        if facts.focus_is(FocusCategory.STRENGTH):
            if equipment_classifier.any_matches(available, EquipmentCategory.STRENGTH):
                c.adjust(0.2, f"{facts.focus} focus optimally uses your strength equipment")
            else:
                c.adjust(
                    -0.2,
                    f"{facts.focus} focus may not utilize your equipment effectively",
                    'Consider "General Fitness" or "Bodyweight" for better equipment utilization',
                )
        elif facts.focus_is(FocusCategory.CARDIO):
            if equipment_classifier.any_matches(available, EquipmentCategory.CARDIO):
                c.adjust(0.2, f"{facts.focus} focus optimally uses your cardio equipment")
            else:
                c.adjust(
                    -0.1,
                    f"{facts.focus} focus may not utilize your equipment effectively",
                    'Consider "Strength" or "General Fitness" for better equipment utilization',
                )
        elif facts.focus_is(FocusCategory.FLEXIBILITY):
            if equipment_classifier.any_matches(available, EquipmentCategory.FLEXIBILITY):
                c.adjust(0.1, f"{facts.focus} focus uses your flexibility equipment well")
            else:
                c.note(f"{facts.focus} focus works well with minimal equipment")
        else:
            c.adjust(0.1, f"{facts.focus} focus adapts well to your available equipment")
        return c.result()

    def space_fit(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(0.8)
        large_space = facts.focus_is(FocusCategory.LARGE_SPACE)
        roomy = location_classifier.any_matches(facts.available_locations, "large_space")

        if large_space:
            if roomy:
                c.note(f"{facts.focus} focus has room at your available locations")
            else:
                c.adjust(
                    -0.2,
                    f"{facts.focus} focus may require significant space",
                    'Consider "Compact" or "General Fitness" for space-efficient workouts',
                )
            if equipment_classifier.any_matches(facts.available_equipment, EquipmentCategory.LARGE) and not roomy:
                c.adjust(-0.1, "Large equipment may limit workout space")
        elif facts.focus_is(FocusCategory.SPACE_EFFICIENT):
            c.adjust(0.1, f"{facts.focus} focus is space-efficient")

        if not facts.available_locations:
            c.note("No workout locations listed; space was not assessed against a location")
        return c.result()

    def equipment_quality(self, facts: SelectionFacts) -> CriterionResult:
        c = CriterionBuilder(0.8)
        available = facts.available_equipment

        if equipment_classifier.any_matches(available, EquipmentCategory.HIGH_QUALITY):
            if facts.focus_is(FocusCategory.STRENGTH):
                c.adjust(0.2, f"{facts.focus} focus optimally uses your high-quality equipment")
            else:
                c.adjust(
                    -0.1,
                    f"{facts.focus} focus may not utilize your high-quality equipment effectively",
                    'Consider "Strength" or "Advanced" focus for better equipment utilization',
                )
        elif equipment_classifier.any_matches(available, EquipmentCategory.BASIC):
            if facts.focus_category in (FocusCategory.FLEXIBILITY, DEFAULT_FOCUS):
                c.adjust(0.1, f"{facts.focus} focus works well with your basic equipment")

        if len(available) < 2:
            c.note("Limited equipment variety")
        return c.result()
