"""Normalization of raw selections and profile data.

Analyzers, insight discriminators and content rules all read the same
scalar view of a request, ``SelectionFacts``, so defaults and banding are
decided in exactly one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from selection_analysis.schemas import AnalysisContext, UserProfile, WorkoutSelections

from .classifiers import FocusCategory, focus_classifier, goal_classifier
from .constants import DEFAULT_FOCUS, DurationBand, EnergyBand, ExperienceLevel


def get_focus(selections: WorkoutSelections) -> str:
    """Return the selected focus label, or "general" when none was chosen."""
    focus = selections.focus
    if isinstance(focus, str):
        return focus.strip() or DEFAULT_FOCUS
    if focus is not None:
        return focus.focus or focus.focus_label or DEFAULT_FOCUS
    return DEFAULT_FOCUS


def get_energy_rating(selections: WorkoutSelections) -> int | None:
    if selections.energy is None:
        return None
    return selections.energy.rating


def get_duration_minutes(selections: WorkoutSelections) -> float | None:
    if selections.duration is None:
        return None
    return selections.duration.duration


def classify_focus(focus: str) -> str:
    """Return the workout-type category of a focus label, or "general"."""
    for category in FocusCategory.GOAL_TYPES:
        if focus_classifier.matches(focus, category):
            return category
    return DEFAULT_FOCUS


def classify_goals(goals: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Return the distinct goal categories of a goal list, in goal order."""
    categories: list[str] = []
    for goal in goals:
        for category in goal_classifier.categories(goal):
            if category not in categories:
                categories.append(category)
    return tuple(categories)


def _last_focus(profile: UserProfile) -> str | None:
    history = profile.workout_history or {}
    last = history.get("last_focus") or history.get("lastFocus")
    return last if isinstance(last, str) else None


@dataclass(frozen=True)
class SelectionFacts:
    """Normalized scalar view of one analysis request.

    Attributes:
        fitness_level: Raw profile fitness level, if any
        experience_level: Fitness level normalized to beginner/intermediate/advanced
        effective_experience: More conservative of profile level and stated experience
        focus: Selected focus label ("general" when absent)
        focus_category: Workout type of the focus (strength/cardio/weight_loss/flexibility/general)
        energy_rating: Selected energy rating 1-10 (5 when absent)
        energy_band: low/moderate/high
        duration_minutes: Selected duration (30 when absent)
        duration_band: short/medium/long
        goal_categories: Distinct goal categories in goal order
    """

    fitness_level: str | None
    experience_level: str
    context_experience: str
    effective_experience: str
    focus: str
    focus_category: str
    energy_rating: int
    energy_band: str
    energy_defaulted: bool
    duration_minutes: float
    duration_band: str
    duration_defaulted: bool
    goals: tuple[str, ...]
    goal_categories: tuple[str, ...]
    injuries: tuple[str, ...] | None
    health_conditions: tuple[str, ...]
    available_equipment: tuple[str, ...]
    available_locations: tuple[str, ...]
    selected_equipment: tuple[str, ...]
    previous_workouts: int
    time_of_day: str | None
    age: int | None
    sleep_hours: float | None
    time_constraint: int | None
    workout_style: tuple[str, ...]
    intensity_preference: str | None
    last_focus: str | None = None

    @property
    def primary_goal_category(self) -> str | None:
        return self.goal_categories[0] if self.goal_categories else None

    @property
    def injury_count(self) -> int:
        return len(self.injuries) if self.injuries else 0

    def has_goal(self, category: str) -> bool:
        return category in self.goal_categories

    def focus_is(self, category: str) -> bool:
        """Check whether the focus label belongs to a focus category."""
        return focus_classifier.matches(self.focus, category)

    def to_dict(self) -> dict[str, Any]:
        """Scalar JSON-like view used by condition rules (``facts.*`` paths)."""
        return {
            "fitness_level": self.fitness_level,
            "experience_level": self.experience_level,
            "effective_experience": self.effective_experience,
            "focus": self.focus.lower(),
            "focus_category": self.focus_category,
            "energy_rating": self.energy_rating,
            "energy_band": self.energy_band,
            "duration_minutes": self.duration_minutes,
            "duration_band": self.duration_band,
            "goal_count": len(self.goals),
            "primary_goal_category": self.primary_goal_category,
            "goal": {
                category: category in self.goal_categories
                for category in FocusCategory.GOAL_TYPES
            },
            "injury_count": self.injury_count,
            "equipment_count": len(self.available_equipment),
            "location_count": len(self.available_locations),
            "selected_equipment_count": len(self.selected_equipment),
            "previous_workouts": self.previous_workouts,
            "time_of_day": self.time_of_day,
            "age": self.age,
            "sleep_hours": self.sleep_hours,
        }


def extract_facts(
    profile: UserProfile,
    selections: WorkoutSelections,
    context: AnalysisContext,
) -> SelectionFacts:
    """Build the normalized view of a request.

    Args:
        profile: Stored user profile
        selections: Per-workout selections
        context: Request context

    Returns:
        SelectionFacts with all documented defaults applied
    """
    focus = get_focus(selections)
    rating = get_energy_rating(selections)
    minutes = get_duration_minutes(selections)
    experience = ExperienceLevel.normalize(profile.fitness_level)
    context_experience = ExperienceLevel.normalize(context.user_experience)

    limitations = profile.basic_limitations
    enhanced = profile.enhanced_limitations
    recovery = enhanced.recovery_needs if enhanced else None

    health_conditions = list(limitations.injuries or [])
    if enhanced:
        health_conditions.extend(enhanced.mobility_limitations)

    energy_rating = rating if rating is not None else EnergyBand.DEFAULT_RATING
    duration_minutes = minutes if minutes is not None else float(DurationBand.DEFAULT_MINUTES)

    return SelectionFacts(
        fitness_level=profile.fitness_level,
        experience_level=experience,
        context_experience=context_experience,
        effective_experience=ExperienceLevel.most_conservative(experience, context_experience),
        focus=focus,
        focus_category=classify_focus(focus),
        energy_rating=energy_rating,
        energy_band=EnergyBand.for_rating(energy_rating),
        energy_defaulted=rating is None,
        duration_minutes=duration_minutes,
        duration_band=DurationBand.for_minutes(duration_minutes),
        duration_defaulted=minutes is None,
        goals=tuple(profile.goals),
        goal_categories=classify_goals(profile.goals),
        injuries=tuple(limitations.injuries) if limitations.injuries is not None else None,
        health_conditions=tuple(health_conditions),
        available_equipment=tuple(limitations.available_equipment),
        available_locations=tuple(limitations.available_locations),
        selected_equipment=tuple(selections.equipment),
        previous_workouts=context.previous_workouts or 0,
        time_of_day=context.time_of_day,
        age=profile.age,
        sleep_hours=recovery.sleep_hours if recovery else None,
        time_constraint=enhanced.time_constraints if enhanced else None,
        workout_style=tuple(profile.preferences.workout_style),
        intensity_preference=profile.preferences.intensity_preference,
        last_focus=_last_focus(profile),
    )
