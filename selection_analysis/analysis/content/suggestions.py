"""Suggestion templates and queries.

Each template carries a rule set; a template applies when every rule holds
for the current ``ConditionContext``. Templates are registered per factor
category and ranked by priority, then impact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..conditions import ConditionContext, ConditionRule
from ..constants import ContentLimits, FactorName
from .selection import matches_conditions, reads_low_score, select_templates


class SuggestionCategory:
    GOAL = "goal"
    INTENSITY = "intensity"
    DURATION = "duration"
    RECOVERY = "recovery"
    EQUIPMENT = "equipment"

    ALL: tuple[str, ...] = (GOAL, INTENSITY, DURATION, RECOVERY, EQUIPMENT)


@dataclass(frozen=True)
class SuggestionTemplate:
    """Actionable, pre-authored recommendation.

    Attributes:
        id: Stable template id
        action: Short imperative label
        description: One or two sentences explaining the change
        impact: high, medium or low
        estimated_score_increase: Expected gain in overall score if followed
        quick_fix: Whether the change can be made right now in the selection UI
        category: Factor category the suggestion improves
        time_required: immediate, 5min, 15min or 30min
        priority: Lower sorts first
        conditions: Rules that must all hold for the suggestion to apply
    """

    id: str
    action: str
    description: str
    impact: str
    estimated_score_increase: float
    quick_fix: bool
    category: str
    time_required: str
    priority: int
    conditions: tuple[ConditionRule, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "action": self.action,
            "description": self.description,
            "impact": self.impact,
            "estimated_score_increase": self.estimated_score_increase,
            "quick_fix": self.quick_fix,
            "category": self.category,
            "time_required": self.time_required,
            "priority": self.priority,
            "conditions": [rule.to_dict() for rule in self.conditions],
        }


# =============================================================================
# Goal Alignment
# =============================================================================

GOAL_ALIGNMENT_SUGGESTIONS: tuple[SuggestionTemplate, ...] = (
    SuggestionTemplate(
        id="goal-weight-loss-cardio",
        action="Switch to Cardio Focus",
        description="Cardio workouts burn more calories during the session, making them more effective for weight loss goals.",
        impact="high",
        estimated_score_increase=0.3,
        quick_fix=True,
        category=SuggestionCategory.GOAL,
        time_required="immediate",
        priority=1,
        conditions=(
            ConditionRule(FactorName.GOAL_ALIGNMENT, "lt", 0.5),
            ConditionRule("facts.goal.weight_loss", "eq", True),
            ConditionRule("facts.focus_category", "eq", "strength"),
        ),
    ),
    SuggestionTemplate(
        id="goal-strength-focus",
        action="Choose Strength Focus",
        description="Strength training is essential for building muscle mass and increasing metabolic rate.",
        impact="high",
        estimated_score_increase=0.25,
        quick_fix=True,
        category=SuggestionCategory.GOAL,
        time_required="immediate",
        priority=1,
        conditions=(
            ConditionRule(FactorName.GOAL_ALIGNMENT, "lt", 0.5),
            ConditionRule("facts.goal.strength", "eq", True),
            ConditionRule("facts.focus_category", "eq", "cardio"),
        ),
    ),
    SuggestionTemplate(
        id="goal-flexibility-session",
        action="Add Flexibility Session",
        description="Include dedicated flexibility training to improve range of motion and prevent injury.",
        impact="medium",
        estimated_score_increase=0.2,
        quick_fix=False,
        category=SuggestionCategory.GOAL,
        time_required="15min",
        priority=2,
        conditions=(
            ConditionRule(FactorName.GOAL_ALIGNMENT, "lt", 0.6),
            ConditionRule("facts.goal.flexibility", "eq", True),
        ),
    ),
)


# =============================================================================
# Intensity Match
# =============================================================================

INTENSITY_MATCH_SUGGESTIONS: tuple[SuggestionTemplate, ...] = (
    SuggestionTemplate(
        id="intensity-beginner-reduce",
        action="Reduce Intensity Level",
        description="Start with lower intensity to build proper form and endurance before progressing.",
        impact="high",
        estimated_score_increase=0.3,
        quick_fix=True,
        category=SuggestionCategory.INTENSITY,
        time_required="immediate",
        priority=1,
        conditions=(
            ConditionRule(FactorName.INTENSITY_MATCH, "lt", 0.5),
            ConditionRule("facts.experience_level", "eq", "beginner"),
            ConditionRule("facts.energy_rating", "gt", 7),
        ),
    ),
    SuggestionTemplate(
        id="intensity-advanced-increase",
        action="Increase Intensity Level",
        description="Higher intensity will provide the challenge needed for your advanced fitness level.",
        impact="high",
        estimated_score_increase=0.25,
        quick_fix=True,
        category=SuggestionCategory.INTENSITY,
        time_required="immediate",
        priority=1,
        conditions=(
            ConditionRule(FactorName.INTENSITY_MATCH, "lt", 0.5),
            ConditionRule("facts.experience_level", "eq", "advanced"),
            ConditionRule("facts.energy_rating", "lt", 4),
        ),
    ),
    SuggestionTemplate(
        id="intensity-progressive-overload",
        action="Implement Progressive Overload",
        description="Gradually increase intensity over time to continue making progress.",
        impact="medium",
        estimated_score_increase=0.15,
        quick_fix=False,
        category=SuggestionCategory.INTENSITY,
        time_required="30min",
        priority=2,
        conditions=(
            ConditionRule(FactorName.INTENSITY_MATCH, "lt", 0.7),
            ConditionRule("facts.experience_level", "eq", "intermediate"),
        ),
    ),
)


# =============================================================================
# Duration Fit
# =============================================================================

DURATION_FIT_SUGGESTIONS: tuple[SuggestionTemplate, ...] = (
    SuggestionTemplate(
        id="duration-beginner-shorten",
        action="Shorten Workout Duration",
        description="Start with shorter sessions to build endurance and maintain proper form.",
        impact="high",
        estimated_score_increase=0.25,
        quick_fix=True,
        category=SuggestionCategory.DURATION,
        time_required="immediate",
        priority=1,
        conditions=(
            ConditionRule(FactorName.DURATION_FIT, "lt", 0.5),
            ConditionRule("facts.experience_level", "eq", "beginner"),
            ConditionRule("facts.duration_minutes", "gt", 30),
        ),
    ),
    SuggestionTemplate(
        id="duration-advanced-extend",
        action="Extend Workout Duration",
        description="Longer sessions will provide sufficient training stimulus for your advanced level.",
        impact="high",
        estimated_score_increase=0.25,
        quick_fix=True,
        category=SuggestionCategory.DURATION,
        time_required="immediate",
        priority=1,
        conditions=(
            ConditionRule(FactorName.DURATION_FIT, "lt", 0.5),
            ConditionRule("facts.experience_level", "eq", "advanced"),
            ConditionRule("facts.duration_minutes", "lt", 20),
        ),
    ),
    SuggestionTemplate(
        id="duration-time-management",
        action="Optimize Time Management",
        description="Plan your workout schedule to accommodate longer sessions when needed.",
        impact="medium",
        estimated_score_increase=0.15,
        quick_fix=False,
        category=SuggestionCategory.DURATION,
        time_required="15min",
        priority=2,
        conditions=(
            ConditionRule(FactorName.DURATION_FIT, "lt", 0.7),
            ConditionRule("profile.enhanced_limitations.time_constraints", "lt", 45),
        ),
    ),
)


# =============================================================================
# Recovery Respect
# =============================================================================

RECOVERY_RESPECT_SUGGESTIONS: tuple[SuggestionTemplate, ...] = (
    SuggestionTemplate(
        id="recovery-injury-modify",
        action="Modify for Injury Safety",
        description="Choose lower intensity and injury-safe movements to prevent aggravating existing conditions.",
        impact="high",
        estimated_score_increase=0.3,
        quick_fix=True,
        category=SuggestionCategory.RECOVERY,
        time_required="immediate",
        priority=1,
        conditions=(
            ConditionRule(FactorName.RECOVERY_RESPECT, "lt", 0.5),
            ConditionRule("facts.injury_count", "gt", 0),
        ),
    ),
    SuggestionTemplate(
        id="recovery-rest-day",
        action="Take a Rest Day",
        description="Allow adequate recovery time to prevent overtraining and improve performance.",
        impact="high",
        estimated_score_increase=0.25,
        quick_fix=True,
        category=SuggestionCategory.RECOVERY,
        time_required="immediate",
        priority=1,
        conditions=(
            ConditionRule(FactorName.RECOVERY_RESPECT, "lt", 0.5),
            ConditionRule("facts.previous_workouts", "gt", 3),
        ),
    ),
    SuggestionTemplate(
        id="recovery-sleep-optimize",
        action="Optimize Sleep Schedule",
        description="Ensure adequate sleep to support recovery and muscle growth.",
        impact="medium",
        estimated_score_increase=0.15,
        quick_fix=False,
        category=SuggestionCategory.RECOVERY,
        time_required="30min",
        priority=2,
        conditions=(
            ConditionRule(FactorName.RECOVERY_RESPECT, "lt", 0.7),
            ConditionRule("facts.sleep_hours", "lt", 7),
        ),
    ),
)


# =============================================================================
# Equipment Optimization
# =============================================================================

EQUIPMENT_OPTIMIZATION_SUGGESTIONS: tuple[SuggestionTemplate, ...] = (
    SuggestionTemplate(
        id="equipment-bodyweight-focus",
        action="Focus on Bodyweight Exercises",
        description="Bodyweight exercises can be highly effective and require minimal equipment.",
        impact="high",
        estimated_score_increase=0.25,
        quick_fix=True,
        category=SuggestionCategory.EQUIPMENT,
        time_required="immediate",
        priority=1,
        conditions=(
            ConditionRule(FactorName.EQUIPMENT_OPTIMIZATION, "lt", 0.5),
            ConditionRule("facts.equipment_count", "lt", 2),
        ),
    ),
    SuggestionTemplate(
        id="equipment-invest-basics",
        action="Invest in Basic Equipment",
        description="Consider purchasing resistance bands or dumbbells for more workout variety.",
        impact="medium",
        estimated_score_increase=0.2,
        quick_fix=False,
        category=SuggestionCategory.EQUIPMENT,
        time_required="30min",
        priority=2,
        conditions=(
            ConditionRule(FactorName.EQUIPMENT_OPTIMIZATION, "lt", 0.6),
            ConditionRule("facts.equipment_count", "lt", 3),
        ),
    ),
    SuggestionTemplate(
        id="equipment-space-optimize",
        action="Optimize for Small Space",
        description="Choose exercises that work well in limited space without compromising effectiveness.",
        impact="medium",
        estimated_score_increase=0.15,
        quick_fix=False,
        category=SuggestionCategory.EQUIPMENT,
        time_required="15min",
        priority=2,
        conditions=(
            ConditionRule(FactorName.EQUIPMENT_OPTIMIZATION, "lt", 0.6),
            ConditionRule("facts.location_count", "lt", 2),
        ),
    ),
)


ALL_SUGGESTIONS: tuple[SuggestionTemplate, ...] = (
    *GOAL_ALIGNMENT_SUGGESTIONS,
    *INTENSITY_MATCH_SUGGESTIONS,
    *DURATION_FIT_SUGGESTIONS,
    *RECOVERY_RESPECT_SUGGESTIONS,
    *EQUIPMENT_OPTIMIZATION_SUGGESTIONS,
)


# =============================================================================
# Queries
# =============================================================================

def get_applicable_suggestions(
    ctx: ConditionContext,
    max_items: int = ContentLimits.MAX_SUGGESTIONS,
) -> list[SuggestionTemplate]:
    """Return every applicable suggestion, ranked, at most ``max_items``."""
    return select_templates(
        ALL_SUGGESTIONS,
        lambda template: matches_conditions(template, ctx),
        max_items,
    )


def get_suggestions_by_category(
    category: str,
    ctx: ConditionContext,
    max_items: int = ContentLimits.MAX_CATEGORY_SUGGESTIONS,
) -> list[SuggestionTemplate]:
    return select_templates(
        ALL_SUGGESTIONS,
        lambda template: template.category == category and matches_conditions(template, ctx),
        max_items,
    )


def get_quick_fix_suggestions(
    ctx: ConditionContext,
    max_items: int = ContentLimits.MAX_QUICK_FIXES,
) -> list[SuggestionTemplate]:
    """Return applicable suggestions that can be applied immediately."""
    return select_templates(
        ALL_SUGGESTIONS,
        lambda template: template.quick_fix and matches_conditions(template, ctx),
        max_items,
    )


def get_low_score_suggestions(
    ctx: ConditionContext,
    max_items: int = ContentLimits.MAX_LOW_SCORE_SUGGESTIONS,
) -> list[SuggestionTemplate]:
    """Return applicable suggestions that read at least one low-scoring factor."""
    return select_templates(
        ALL_SUGGESTIONS,
        lambda template: matches_conditions(template, ctx) and reads_low_score(template, ctx),
        max_items,
    )
