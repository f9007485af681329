"""Insight templates keyed by factor, score band and discriminator.

Every factor owns a ``{band: {key: InsightTemplate}}`` table. A discriminator
turns the request facts into candidate keys, most specific first; the first
key present in the band's table wins. Missing entries select nothing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..base import FactorScore
from ..constants import EnergyBand, FactorName, InsightBand, StatusThreshold
from ..inputs import SelectionFacts


class InsightType(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"
    SUGGESTION = "suggestion"
    EDUCATIONAL = "educational"


BAND_INSIGHT_TYPES: dict[str, InsightType] = {
    InsightBand.POOR: InsightType.WARNING,
    InsightBand.WARNING: InsightType.SUGGESTION,
    InsightBand.GOOD: InsightType.POSITIVE,
}

OVERALL = "overall"


@dataclass(frozen=True)
class InsightTemplate:
    title: str
    explanation: str
    suggestion: str | None = None
    learn_more: str | None = None
    priority: int = 3
    category: str = ""


@dataclass(frozen=True)
class Insight:
    """Short explanatory message tied to one factor (or the overall score).

    Attributes:
        id: "<factor>-<key>" for factor insights, "<band>-overall" otherwise
        type: positive, warning, suggestion or educational
        title: Display title
        message: Explanation text
        factor: Factor name or "overall"
        priority: Lower sorts first
        actionable: Whether the user should change something
        suggestion: Optional follow-up hint
        learn_more: Optional relative link
    """

    id: str
    type: InsightType
    title: str
    message: str
    factor: str
    priority: int
    actionable: bool
    suggestion: str | None = None
    learn_more: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "factor": self.factor,
            "priority": self.priority,
            "actionable": self.actionable,
            "suggestion": self.suggestion,
            "learn_more": self.learn_more,
        }


InsightTable = dict[str, dict[str, InsightTemplate]]


# =============================================================================
# Goal Alignment
# =============================================================================

GOAL_ALIGNMENT_INSIGHTS: InsightTable = {
    InsightBand.POOR: {
        "weight_loss_strength": InsightTemplate(
            title="Selection-Goal Mismatch",
            explanation=(
                "Strength training alone may not optimize calorie burn for weight loss. While building "
                "muscle is beneficial, cardio and HIIT workouts typically burn more calories during the session."
            ),
            suggestion=(
                "Consider 'Quick Sweat' or 'Cardio' focus for better weight loss results, "
                "or combine strength with cardio intervals."
            ),
            learn_more="/education/weight-loss-workout-selection",
            priority=1,
            category="goal",
        ),
        "strength_cardio": InsightTemplate(
            title="Goal-Focus Misalignment",
            explanation=(
                "Cardio workouts are excellent for heart health and endurance, but may not be the most "
                "efficient path to building strength and muscle mass."
            ),
            suggestion="Try 'Strength' or 'Power' focus for better muscle building results, or consider a balanced approach.",
            learn_more="/education/strength-training-basics",
            priority=1,
            category="goal",
        ),
        "flexibility_strength": InsightTemplate(
            title="Flexibility Goal Overlooked",
            explanation=(
                "Strength training is valuable, but it may not address your flexibility goals. "
                "Static stretching and mobility work are essential for improving range of motion."
            ),
            suggestion="Consider 'Flexibility' focus or add dedicated stretching sessions to your routine.",
            learn_more="/education/flexibility-training",
            priority=2,
            category="goal",
        ),
    },
    InsightBand.WARNING: {
        "weight_loss_any": InsightTemplate(
            title="Moderate Intensity for Weight Loss",
            explanation=(
                "Moderate intensity workouts can support weight loss, but higher intensity intervals "
                "often provide better results in less time."
            ),
            suggestion=(
                "Consider increasing intensity to 'High' for more efficient calorie burn, "
                "or extend your workout duration."
            ),
            learn_more="/education/intensity-for-weight-loss",
            priority=2,
            category="goal",
        ),
    },
    InsightBand.GOOD: {
        "strength_strength": InsightTemplate(
            title="Excellent Goal Alignment",
            explanation=(
                "Your strength focus perfectly matches your strength-building goals. This selection will "
                "effectively target muscle growth and strength development."
            ),
            suggestion="Consider progressive overload techniques to maximize your strength gains.",
            learn_more="/education/progressive-overload",
            priority=3,
            category="goal",
        ),
    },
}


def goal_alignment_keys(facts: SelectionFacts) -> list[str]:
    """Keys "<goal>_<focus category>" for each goal, then "<goal>_any"."""
    keys = [f"{goal}_{facts.focus_category}" for goal in facts.goal_categories]
    keys.extend(f"{goal}_any" for goal in facts.goal_categories)
    return keys


# =============================================================================
# Intensity Match
# =============================================================================

INTENSITY_MATCH_INSIGHTS: InsightTable = {
    InsightBand.POOR: {
        "beginner_high": InsightTemplate(
            title="Intensity Too High for Experience",
            explanation=(
                "High intensity workouts can be overwhelming for beginners and may lead to burnout or "
                "injury. It's important to build a foundation first."
            ),
            suggestion="Start with 'Low' or 'Moderate' intensity to build endurance and proper form before progressing.",
            learn_more="/education/beginner-workout-progression",
            priority=1,
            category="intensity",
        ),
        "advanced_low": InsightTemplate(
            title="Intensity Below Your Level",
            explanation=(
                "Low intensity workouts may not provide sufficient challenge for your fitness level, "
                "potentially limiting your progress and results."
            ),
            suggestion="Consider 'Moderate' or 'High' intensity to maintain progress and continue challenging your body.",
            learn_more="/education/advanced-workout-intensity",
            priority=1,
            category="intensity",
        ),
    },
    InsightBand.WARNING: {
        "intermediate_high": InsightTemplate(
            title="High Intensity Challenge",
            explanation=(
                "High intensity workouts can be effective but ensure you have adequate recovery time "
                "and proper form to prevent injury."
            ),
            suggestion="Monitor your recovery and consider alternating with moderate intensity sessions.",
            learn_more="/education/recovery-and-intensity",
            priority=2,
            category="intensity",
        ),
    },
    InsightBand.GOOD: {
        "intermediate_moderate": InsightTemplate(
            title="Perfect Intensity Match",
            explanation=(
                "Moderate intensity aligns well with your intermediate fitness level, providing "
                "effective training without overwhelming your system."
            ),
            suggestion="Consider gradually increasing intensity as you build confidence and strength.",
            learn_more="/education/intensity-progression",
            priority=3,
            category="intensity",
        ),
    },
}


def intensity_match_keys(facts: SelectionFacts) -> list[str]:
    return [f"{facts.experience_level}_{facts.energy_band}"]


# =============================================================================
# Duration Fit
# =============================================================================

DURATION_FIT_INSIGHTS: InsightTable = {
    InsightBand.POOR: {
        "beginner_over_30": InsightTemplate(
            title="Duration May Be Too Long",
            explanation=(
                "Workouts over 30 minutes can be challenging for beginners and may lead to fatigue or "
                "poor form. It's better to start shorter and build up."
            ),
            suggestion="Start with 20-30 minute sessions to build endurance and proper technique.",
            learn_more="/education/beginner-workout-duration",
            priority=1,
            category="duration",
        ),
        "advanced_under_20": InsightTemplate(
            title="Short Duration for Your Level",
            explanation=(
                "Workouts under 20 minutes may not provide sufficient training stimulus for your "
                "advanced fitness level, limiting your progress potential."
            ),
            suggestion="Consider 30-45 minute sessions for more comprehensive training and better results.",
            learn_more="/education/advanced-workout-planning",
            priority=1,
            category="duration",
        ),
    },
    InsightBand.WARNING: {
        "intermediate_over_30": InsightTemplate(
            title="Longer Workout Consideration",
            explanation=(
                "Longer workouts can be effective but ensure you have adequate time and energy to "
                "maintain quality throughout the session."
            ),
            suggestion="Consider breaking into shorter sessions if time or energy is limited.",
            learn_more="/education/workout-scheduling",
            priority=2,
            category="duration",
        ),
    },
    InsightBand.GOOD: {
        "intermediate_20_30": InsightTemplate(
            title="Optimal Duration Selection",
            explanation=(
                "20 to 30 minutes provides an excellent balance of training stimulus and time "
                "efficiency for your fitness level."
            ),
            suggestion="Focus on workout quality and intensity to maximize your sessions.",
            learn_more="/education/time-efficient-workouts",
            priority=3,
            category="duration",
        ),
    },
}


def duration_bracket(minutes: float) -> str:
    if minutes < 20:
        return "under_20"
    if minutes <= 30:
        return "20_30"
    return "over_30"


def duration_fit_keys(facts: SelectionFacts) -> list[str]:
    return [f"{facts.experience_level}_{duration_bracket(facts.duration_minutes)}"]


# =============================================================================
# Recovery Respect
# =============================================================================

RECOVERY_RESPECT_INSIGHTS: InsightTable = {
    InsightBand.POOR: {
        "injury_high": InsightTemplate(
            title="High Intensity with Injury Risk",
            explanation=(
                "High intensity workouts may aggravate existing injuries or limitations. It's crucial "
                "to prioritize safety and proper recovery."
            ),
            suggestion="Consider 'Low' or 'Moderate' intensity and focus on proper form and injury-safe movements.",
            learn_more="/education/workout-injury-prevention",
            priority=1,
            category="recovery",
        ),
        "high_frequency": InsightTemplate(
            title="Insufficient Recovery Time",
            explanation=(
                "Working out too soon after your last sessions may not allow adequate recovery, "
                "potentially leading to decreased performance or injury."
            ),
            suggestion="Consider taking a rest day or choosing a lighter, recovery-focused session.",
            learn_more="/education/recovery-timing",
            priority=1,
            category="recovery",
        ),
    },
    InsightBand.WARNING: {
        "age_over_40": InsightTemplate(
            title="Recovery Considerations",
            explanation=(
                "As we age, recovery becomes increasingly important. Consider incorporating more rest "
                "days and recovery-focused sessions."
            ),
            suggestion="Listen to your body and don't hesitate to take extra recovery time when needed.",
            learn_more="/education/aging-and-recovery",
            priority=2,
            category="recovery",
        ),
    },
    InsightBand.GOOD: {
        "proper_recovery": InsightTemplate(
            title="Excellent Recovery Awareness",
            explanation=(
                "Your selections show good awareness of recovery needs, which will help maintain "
                "long-term progress and prevent injury."
            ),
            suggestion="Continue monitoring your recovery and adjust intensity as needed.",
            learn_more="/education/recovery-monitoring",
            priority=3,
            category="recovery",
        ),
    },
}

HIGH_FREQUENCY_WORKOUTS = 3


def recovery_respect_keys(facts: SelectionFacts) -> list[str]:
    keys: list[str] = []
    if facts.injury_count > 0 and facts.energy_band == EnergyBand.HIGH:
        keys.append("injury_high")
    if facts.previous_workouts >= HIGH_FREQUENCY_WORKOUTS:
        keys.append("high_frequency")
    if facts.age is not None and facts.age > 40:
        keys.append("age_over_40")
    keys.append("proper_recovery")
    return keys


# =============================================================================
# Equipment Optimization
# =============================================================================

EQUIPMENT_OPTIMIZATION_INSIGHTS: InsightTable = {
    InsightBand.POOR: {
        "limited_equipment": InsightTemplate(
            title="Equipment Limitations",
            explanation=(
                "Your available equipment may limit the variety and effectiveness of your workouts. "
                "Consider bodyweight alternatives or equipment upgrades."
            ),
            suggestion=(
                "Explore bodyweight exercises or consider investing in basic equipment like "
                "resistance bands or dumbbells."
            ),
            learn_more="/education/bodyweight-workouts",
            priority=1,
            category="equipment",
        ),
        "space_constraints": InsightTemplate(
            title="Space Considerations",
            explanation=(
                "Limited space may restrict certain movements and exercises. "
                "Consider space-efficient alternatives."
            ),
            suggestion=(
                "Focus on exercises that work well in your available space, such as bodyweight "
                "movements or compact equipment."
            ),
            learn_more="/education/small-space-workouts",
            priority=1,
            category="equipment",
        ),
    },
    InsightBand.WARNING: {
        "equipment_variety": InsightTemplate(
            title="Equipment Variety Opportunity",
            explanation=(
                "While your current equipment works, adding variety could enhance your workouts "
                "and prevent plateaus."
            ),
            suggestion="Consider incorporating different equipment or exercise variations to keep your routine fresh.",
            learn_more="/education/workout-variety",
            priority=2,
            category="equipment",
        ),
    },
    InsightBand.GOOD: {
        "optimal_equipment": InsightTemplate(
            title="Excellent Equipment Utilization",
            explanation=(
                "Your equipment selection allows for effective, varied workouts that can support "
                "your fitness goals."
            ),
            suggestion="Continue exploring different exercises and variations with your available equipment.",
            learn_more="/education/equipment-workout-ideas",
            priority=3,
            category="equipment",
        ),
    },
}


def equipment_optimization_keys(facts: SelectionFacts) -> list[str]:
    keys: list[str] = []
    if len(facts.available_equipment) < 2:
        keys.append("limited_equipment")
    if not facts.available_locations:
        keys.append("space_constraints")
    keys.extend(("equipment_variety", "optimal_equipment"))
    return keys


# =============================================================================
# Registry
# =============================================================================

Discriminator = Callable[[SelectionFacts], list[str]]

INSIGHT_REGISTRY: dict[str, tuple[InsightTable, Discriminator]] = {
    FactorName.GOAL_ALIGNMENT: (GOAL_ALIGNMENT_INSIGHTS, goal_alignment_keys),
    FactorName.INTENSITY_MATCH: (INTENSITY_MATCH_INSIGHTS, intensity_match_keys),
    FactorName.DURATION_FIT: (DURATION_FIT_INSIGHTS, duration_fit_keys),
    FactorName.RECOVERY_RESPECT: (RECOVERY_RESPECT_INSIGHTS, recovery_respect_keys),
    FactorName.EQUIPMENT_OPTIMIZATION: (EQUIPMENT_OPTIMIZATION_INSIGHTS, equipment_optimization_keys),
}


def find_insight_template(
    factor: str,
    score: float,
    facts: SelectionFacts,
) -> tuple[str, InsightTemplate] | None:
    """Return (key, template) for a factor score, or None if nothing matches."""
    entry = INSIGHT_REGISTRY.get(factor)
    if entry is None:
        return None
    table, discriminator = entry
    band_templates = table.get(InsightBand.for_score(score), {})
    for key in discriminator(facts):
        template = band_templates.get(key)
        if template is not None:
            return key, template
    return None


def select_factor_insight(
    factor: str,
    factor_score: FactorScore,
    facts: SelectionFacts,
) -> Insight | None:
    """Build the insight for one factor, or None when no template applies."""
    found = find_insight_template(factor, factor_score.score, facts)
    if found is None:
        return None
    key, template = found
    band = InsightBand.for_score(factor_score.score)
    return Insight(
        id=f"{factor}-{key}",
        type=BAND_INSIGHT_TYPES[band],
        title=template.title,
        message=template.explanation,
        factor=factor,
        priority=template.priority,
        actionable=band != InsightBand.GOOD,
        suggestion=template.suggestion,
        learn_more=template.learn_more,
    )


# =============================================================================
# Overall
# =============================================================================

def get_overall_insight(
    overall_score: float,
    excellent: float = StatusThreshold.EXCELLENT,
    good: float = StatusThreshold.GOOD,
    warning: float = StatusThreshold.WARNING,
) -> Insight:
    """Build the overall-score insight using the configured thresholds."""
    if overall_score >= excellent:
        return Insight(
            id="excellent-overall",
            type=InsightType.POSITIVE,
            title="Excellent Selections!",
            message="Your workout selections are perfectly aligned with your profile and goals.",
            factor=OVERALL,
            priority=1,
            actionable=False,
        )
    if overall_score >= good:
        return Insight(
            id="good-overall",
            type=InsightType.POSITIVE,
            title="Good Selections",
            message="Your selections generally work well with your profile and goals.",
            factor=OVERALL,
            priority=2,
            actionable=False,
        )
    if overall_score >= warning:
        return Insight(
            id="moderate-overall",
            type=InsightType.WARNING,
            title="Room for Improvement",
            message="Some selections could be optimized for better results.",
            factor=OVERALL,
            priority=3,
            actionable=True,
        )
    return Insight(
        id="poor-overall",
        type=InsightType.WARNING,
        title="Consider Adjustments",
        message="Your selections may not optimally support your goals.",
        factor=OVERALL,
        priority=4,
        actionable=True,
    )
