"""Educational content templates and queries.

Content is filtered by rule set and by audience: a template targets either
one normalized fitness level or "all".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..conditions import ConditionContext, ConditionRule
from ..constants import ContentLimits, ExperienceLevel, FactorName
from .selection import matches_conditions, reads_low_score, select_templates

AUDIENCE_ALL = "all"


class EducationCategory:
    SELECTION = "selection"
    FITNESS = "fitness"
    SAFETY = "safety"
    EQUIPMENT = "equipment"
    GOALS = "goals"


@dataclass(frozen=True)
class EducationalContentTemplate:
    """Longer-form learning material.

    Attributes:
        id: Stable template id
        title: Display title
        content: Body text
        category: selection, fitness, safety, equipment or goals
        priority: Lower sorts first
        learn_more_url: Relative link to the full article
        conditions: Rules that must all hold for the content to apply
        target_audience: beginner, intermediate, advanced or all
    """

    id: str
    title: str
    content: str
    category: str
    priority: int
    learn_more_url: str | None = None
    conditions: tuple[ConditionRule, ...] = ()
    target_audience: str = AUDIENCE_ALL

    def serves(self, audience: str | None) -> bool:
        return self.target_audience in (normalize_audience(audience), AUDIENCE_ALL)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "priority": self.priority,
            "learn_more_url": self.learn_more_url,
            "conditions": [rule.to_dict() for rule in self.conditions],
            "target_audience": self.target_audience,
        }


def normalize_audience(audience: str | None) -> str:
    """Map a raw fitness level ("novice", "adaptive", ...) to an audience."""
    return ExperienceLevel.normalize(audience)


SELECTION_EDUCATION: tuple[EducationalContentTemplate, ...] = (
    EducationalContentTemplate(
        id="selection-basics",
        title="Understanding Workout Selection",
        content=(
            "Your workout selections directly impact the effectiveness and safety of your training. "
            "Consider how each choice aligns with your goals, fitness level, and available resources."
        ),
        category=EducationCategory.SELECTION,
        priority=1,
        learn_more_url="/education/workout-selection-basics",
    ),
    EducationalContentTemplate(
        id="selection-progressive-disclosure",
        title="Progressive Workout Planning",
        content=(
            "Start with foundational movements and gradually increase complexity. This approach "
            "builds confidence, prevents injury, and ensures long-term progress."
        ),
        category=EducationCategory.SELECTION,
        priority=2,
        learn_more_url="/education/progressive-training",
        conditions=(ConditionRule("facts.experience_level", "eq", "beginner"),),
        target_audience=ExperienceLevel.BEGINNER,
    ),
)

FITNESS_EDUCATION: tuple[EducationalContentTemplate, ...] = (
    EducationalContentTemplate(
        id="fitness-goal-setting",
        title="Setting Realistic Fitness Goals",
        content=(
            "Effective goal setting involves creating specific, measurable, and achievable targets. "
            "Consider your current fitness level and available time when planning."
        ),
        category=EducationCategory.FITNESS,
        priority=1,
        learn_more_url="/education/goal-setting",
        conditions=(ConditionRule(FactorName.GOAL_ALIGNMENT, "lt", 0.7),),
    ),
    EducationalContentTemplate(
        id="fitness-intensity-understanding",
        title="Understanding Workout Intensity",
        content=(
            "Intensity refers to how hard you work during exercise. It should match your fitness "
            "level and goals, balancing challenge with safety."
        ),
        category=EducationCategory.FITNESS,
        priority=2,
        learn_more_url="/education/intensity-guide",
        conditions=(ConditionRule(FactorName.INTENSITY_MATCH, "lt", 0.7),),
    ),
    EducationalContentTemplate(
        id="fitness-duration-optimization",
        title="Optimizing Workout Duration",
        content=(
            "Workout duration should balance effectiveness with your available time. "
            "Quality often matters more than quantity."
        ),
        category=EducationCategory.FITNESS,
        priority=2,
        learn_more_url="/education/workout-duration",
        conditions=(ConditionRule(FactorName.DURATION_FIT, "lt", 0.7),),
    ),
)

SAFETY_EDUCATION: tuple[EducationalContentTemplate, ...] = (
    EducationalContentTemplate(
        id="safety-injury-prevention",
        title="Injury Prevention Fundamentals",
        content=(
            "Proper form, adequate warm-up, and listening to your body are essential for "
            "preventing injuries and maintaining long-term fitness."
        ),
        category=EducationCategory.SAFETY,
        priority=1,
        learn_more_url="/education/injury-prevention",
        conditions=(ConditionRule(FactorName.RECOVERY_RESPECT, "lt", 0.7),),
    ),
    EducationalContentTemplate(
        id="safety-recovery-importance",
        title="The Importance of Recovery",
        content=(
            "Recovery is when your body adapts and grows stronger. Adequate rest, sleep, "
            "and nutrition are crucial for progress."
        ),
        category=EducationCategory.SAFETY,
        priority=2,
        learn_more_url="/education/recovery-basics",
        conditions=(ConditionRule(FactorName.RECOVERY_RESPECT, "lt", 0.6),),
    ),
    EducationalContentTemplate(
        id="safety-beginner-guidance",
        title="Safe Progression for Beginners",
        content=(
            "Start slowly and focus on proper form. It's better to do fewer repetitions "
            "correctly than many with poor technique."
        ),
        category=EducationCategory.SAFETY,
        priority=1,
        learn_more_url="/education/beginner-safety",
        conditions=(ConditionRule("facts.experience_level", "eq", "beginner"),),
        target_audience=ExperienceLevel.BEGINNER,
    ),
)

EQUIPMENT_EDUCATION: tuple[EducationalContentTemplate, ...] = (
    EducationalContentTemplate(
        id="equipment-bodyweight-basics",
        title="Effective Bodyweight Training",
        content=(
            "Bodyweight exercises can be highly effective and require minimal equipment. "
            "Focus on proper form and progressive difficulty."
        ),
        category=EducationCategory.EQUIPMENT,
        priority=1,
        learn_more_url="/education/bodyweight-exercises",
        conditions=(
            ConditionRule(FactorName.EQUIPMENT_OPTIMIZATION, "lt", 0.6),
            ConditionRule("facts.equipment_count", "lt", 2),
        ),
    ),
    EducationalContentTemplate(
        id="equipment-space-optimization",
        title="Working Out in Small Spaces",
        content=(
            "Limited space doesn't mean limited results. Choose exercises that work well "
            "in your available area."
        ),
        category=EducationCategory.EQUIPMENT,
        priority=2,
        learn_more_url="/education/small-space-workouts",
        conditions=(
            ConditionRule(FactorName.EQUIPMENT_OPTIMIZATION, "lt", 0.6),
            ConditionRule("facts.location_count", "lt", 2),
        ),
    ),
    EducationalContentTemplate(
        id="equipment-investment-guide",
        title="Smart Equipment Investment",
        content=(
            "Consider your goals and space when choosing equipment. "
            "Start with versatile, affordable options."
        ),
        category=EducationCategory.EQUIPMENT,
        priority=3,
        learn_more_url="/education/equipment-guide",
        conditions=(ConditionRule(FactorName.EQUIPMENT_OPTIMIZATION, "lt", 0.5),),
    ),
)

GOAL_EDUCATION: tuple[EducationalContentTemplate, ...] = (
    EducationalContentTemplate(
        id="goal-weight-loss-science",
        title="Weight Loss Science",
        content=(
            "Weight loss requires a calorie deficit. Cardio burns more calories during exercise, "
            "while strength training increases metabolic rate long-term."
        ),
        category=EducationCategory.GOALS,
        priority=1,
        learn_more_url="/education/weight-loss-science",
        conditions=(ConditionRule("facts.goal.weight_loss", "eq", True),),
    ),
    EducationalContentTemplate(
        id="goal-strength-building",
        title="Building Strength and Muscle",
        content=(
            "Strength training with progressive overload is key to building muscle. "
            "Focus on compound movements and proper form."
        ),
        category=EducationCategory.GOALS,
        priority=1,
        learn_more_url="/education/strength-building",
        conditions=(ConditionRule("facts.goal.strength", "eq", True),),
    ),
    EducationalContentTemplate(
        id="goal-flexibility-mobility",
        title="Improving Flexibility and Mobility",
        content=(
            "Flexibility training improves range of motion and can prevent injury. "
            "Include both static and dynamic stretching."
        ),
        category=EducationCategory.GOALS,
        priority=1,
        learn_more_url="/education/flexibility-training",
        conditions=(ConditionRule("facts.goal.flexibility", "eq", True),),
    ),
    EducationalContentTemplate(
        id="goal-endurance-building",
        title="Building Endurance",
        content=(
            "Endurance training improves cardiovascular health and stamina. "
            "Gradually increase duration and intensity."
        ),
        category=EducationCategory.GOALS,
        priority=1,
        learn_more_url="/education/endurance-training",
        conditions=(ConditionRule("facts.goal.cardio", "eq", True),),
    ),
)


ALL_EDUCATIONAL_CONTENT: tuple[EducationalContentTemplate, ...] = (
    *SELECTION_EDUCATION,
    *FITNESS_EDUCATION,
    *SAFETY_EDUCATION,
    *EQUIPMENT_EDUCATION,
    *GOAL_EDUCATION,
)


# =============================================================================
# Queries
# =============================================================================

def get_applicable_content(
    ctx: ConditionContext,
    audience: str | None,
    max_items: int = ContentLimits.MAX_EDUCATIONAL_CONTENT,
) -> list[EducationalContentTemplate]:
    """Return applicable content for an audience, ranked, at most ``max_items``.

    Args:
        ctx: Factor scores and request data
        audience: User fitness level; normalized before matching
        max_items: Maximum number of templates

    Returns:
        Ranked templates whose rules hold and whose audience matches
    """
    return select_templates(
        ALL_EDUCATIONAL_CONTENT,
        lambda template: template.serves(audience) and matches_conditions(template, ctx),
        max_items,
    )


def get_content_by_category(
    category: str,
    ctx: ConditionContext,
    audience: str | None,
    max_items: int = ContentLimits.MAX_CATEGORY_CONTENT,
) -> list[EducationalContentTemplate]:
    return select_templates(
        ALL_EDUCATIONAL_CONTENT,
        lambda template: (
            template.category == category
            and template.serves(audience)
            and matches_conditions(template, ctx)
        ),
        max_items,
    )


def get_low_score_content(
    ctx: ConditionContext,
    audience: str | None,
    max_items: int = ContentLimits.MAX_LOW_SCORE_CONTENT,
) -> list[EducationalContentTemplate]:
    """Return applicable content that reads at least one low-scoring factor."""
    return select_templates(
        ALL_EDUCATIONAL_CONTENT,
        lambda template: (
            template.serves(audience)
            and matches_conditions(template, ctx)
            and reads_low_score(template, ctx)
        ),
        max_items,
    )


def get_beginner_content(
    ctx: ConditionContext,
    max_items: int = ContentLimits.MAX_BEGINNER_CONTENT,
) -> list[EducationalContentTemplate]:
    return select_templates(
        ALL_EDUCATIONAL_CONTENT,
        lambda template: (
            template.target_audience == ExperienceLevel.BEGINNER
            and matches_conditions(template, ctx)
        ),
        max_items,
    )
