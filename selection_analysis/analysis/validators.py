"""Input coercion and data-quality assessment.

Callers may pass pydantic models or raw (camelCase or snake_case) dicts.
Everything is coerced to the schema models here so analyzers only ever see
validated input.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from selection_analysis.schemas import AnalysisContext, UserProfile, WorkoutSelections

from .constants import DurationBand, EnergyBand
from .exceptions import InvalidUserProfileError, InvalidWorkoutOptionsError
from .inputs import get_duration_minutes, get_energy_rating

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Completeness penalties subtracted from a perfect 1.0
MISSING_FITNESS_LEVEL_PENALTY = 0.1
MISSING_GOALS_PENALTY = 0.2
MISSING_FOCUS_PENALTY = 0.1
MISSING_ENERGY_PENALTY = 0.1
MISSING_DURATION_PENALTY = 0.1


def _coerce(value: Any, model: type[ModelT]) -> ModelT:
    if isinstance(value, model):
        return value
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if not isinstance(value, Mapping):
        raise TypeError(f"Expected {model.__name__} or mapping, got {type(value).__name__}")
    return model.model_validate(value)


def coerce_profile(profile: UserProfile | Mapping[str, Any] | None) -> UserProfile:
    """Validate a user profile.

    Raises:
        InvalidUserProfileError: If the profile is missing or malformed
    """
    if profile is None:
        raise InvalidUserProfileError("User profile is required")
    try:
        return _coerce(profile, UserProfile)
    except (ValidationError, TypeError) as e:
        raise InvalidUserProfileError(
            f"Invalid user profile: {e}",
            details={"errors": _error_list(e)},
        ) from e


def coerce_selections(
    selections: WorkoutSelections | Mapping[str, Any] | None,
) -> WorkoutSelections:
    """Validate workout selections.

    Raises:
        InvalidWorkoutOptionsError: If the selections are missing or malformed
    """
    if selections is None:
        raise InvalidWorkoutOptionsError("Workout selections are required")
    try:
        return _coerce(selections, WorkoutSelections)
    except (ValidationError, TypeError) as e:
        raise InvalidWorkoutOptionsError(
            f"Invalid workout selections: {e}",
            details={"errors": _error_list(e)},
        ) from e


def coerce_context(context: AnalysisContext | Mapping[str, Any] | None) -> AnalysisContext:
    """Validate the request context; None means all defaults."""
    if context is None:
        return AnalysisContext()
    try:
        return _coerce(context, AnalysisContext)
    except (ValidationError, TypeError) as e:
        raise InvalidWorkoutOptionsError(
            f"Invalid analysis context: {e}",
            details={"errors": _error_list(e)},
        ) from e


def _has_focus(selections: WorkoutSelections) -> bool:
    focus = selections.focus
    if isinstance(focus, str):
        return bool(focus.strip())
    return focus is not None and bool(focus.focus or focus.focus_label)


def _error_list(error: Exception) -> list[str]:
    if isinstance(error, ValidationError):
        return [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in error.errors()
        ]
    return [str(error)]


def assess_input_quality(
    profile: UserProfile,
    selections: WorkoutSelections,
) -> tuple[float, list[str]]:
    """Estimate how complete the inputs are.

    Args:
        profile: Validated user profile
        selections: Validated workout selections

    Returns:
        Tuple of (data_quality in [0, 1], warnings describing missing data
        and the defaults applied)
    """
    quality = 1.0
    warnings: list[str] = []

    if not profile.fitness_level:
        quality -= MISSING_FITNESS_LEVEL_PENALTY
        warnings.append("Fitness level not specified")
    if not profile.goals:
        quality -= MISSING_GOALS_PENALTY
        warnings.append("No fitness goals specified")
    if not _has_focus(selections):
        quality -= MISSING_FOCUS_PENALTY
        warnings.append("No workout focus selected")
    if get_energy_rating(selections) is None:
        quality -= MISSING_ENERGY_PENALTY
        warnings.append(
            f"No energy level selected, defaulting to {EnergyBand.DEFAULT_RATING}"
        )
    if get_duration_minutes(selections) is None:
        quality -= MISSING_DURATION_PENALTY
        warnings.append(
            f"No duration selected, defaulting to {DurationBand.DEFAULT_MINUTES} minutes"
        )

    quality = round(max(0.0, quality), 6)
    if warnings:
        logger.debug(f"Input quality {quality:.2f}: {'; '.join(warnings)}")
    return quality, warnings
