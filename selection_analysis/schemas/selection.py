"""Pydantic schemas for selection analysis inputs.

Field names are snake_case; camelCase aliases let upstream JSON payloads
validate directly.
"""
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


FitnessLevel = Literal["beginner", "novice", "intermediate", "advanced", "adaptive"]
UserExperience = Literal["first-time", "beginner", "intermediate", "advanced"]
TimeOfDay = Literal["morning", "afternoon", "evening"]
GenerationType = Literal["quick", "detailed"]


class SelectionSchema(BaseModel):
    """Base schema accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ============== User Profile ==============

class ProfilePreferences(SelectionSchema):
    workout_style: list[str] = Field(default_factory=list)
    time_preference: str | None = None
    intensity_preference: str | None = None
    advanced_features: bool = False
    ai_assistance_level: str | None = None

    @field_validator("workout_style", mode="before")
    @classmethod
    def none_style_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class BasicLimitations(SelectionSchema):
    """Limitations captured during onboarding.

    ``None`` means the user never answered; an empty list is an explicit
    "none".
    """
    injuries: list[str] | None = None
    available_equipment: list[str] = Field(default_factory=list)
    available_locations: list[str] = Field(default_factory=list)

    @field_validator("available_equipment", "available_locations", mode="before")
    @classmethod
    def none_lists_to_empty(cls, v: Any) -> Any:
        """Treat null equipment or locations as not listed."""
        return [] if v is None else v


class RecoveryNeeds(SelectionSchema):
    rest_days: int | None = Field(default=None, ge=0, le=7)
    sleep_hours: float | None = Field(default=None, ge=0, le=24)
    hydration_level: str | None = None


class EnhancedLimitations(SelectionSchema):
    time_constraints: int | None = Field(default=None, ge=0)  # Minutes available per session
    equipment_constraints: list[str] = Field(default_factory=list)
    location_constraints: list[str] = Field(default_factory=list)
    recovery_needs: RecoveryNeeds | None = None
    mobility_limitations: list[str] = Field(default_factory=list)
    progression_rate: str | None = None

    @field_validator(
        "equipment_constraints", "location_constraints", "mobility_limitations", mode="before"
    )
    @classmethod
    def none_lists_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class UserProfile(SelectionSchema):
    """Stored user profile consumed by the analyzers."""
    user_id: str | None = None
    fitness_level: FitnessLevel | None = None
    goals: list[str] = Field(default_factory=list)
    preferences: ProfilePreferences = Field(default_factory=ProfilePreferences)
    basic_limitations: BasicLimitations = Field(default_factory=BasicLimitations)
    enhanced_limitations: EnhancedLimitations | None = None
    workout_history: dict[str, Any] | None = None
    learning_profile: dict[str, Any] | None = None
    age: int | None = Field(default=None, ge=0, le=120)
    weight: float | None = None
    height: float | None = None
    gender: str | None = None

    @field_validator("goals", mode="before")
    @classmethod
    def none_goals_to_empty(cls, v: Any) -> Any:
        """Treat a null goals list as no goals."""
        return [] if v is None else v

    @field_validator("preferences", "basic_limitations", mode="before")
    @classmethod
    def none_sections_to_defaults(cls, v: Any) -> Any:
        """Treat a null section as an unanswered one."""
        return {} if v is None else v


# ============== Workout Selections ==============

class FocusSelection(SelectionSchema):
    focus: str | None = None
    focus_label: str | None = None


class EnergySelection(SelectionSchema):
    rating: int | None = Field(default=None, ge=1, le=10)


class DurationSelection(SelectionSchema):
    duration: float | None = Field(default=None, gt=0)


class WorkoutSelections(SelectionSchema):
    """Per-workout choices made by the user."""
    focus: str | FocusSelection | None = None
    energy: EnergySelection | None = None
    duration: DurationSelection | None = None
    equipment: list[str] = Field(default_factory=list)

    @field_validator("energy", mode="before")
    @classmethod
    def wrap_bare_rating(cls, v: Any) -> Any:
        """Accept ``energy=7`` as shorthand for ``energy={"rating": 7}``."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return {"rating": v}
        return v

    @field_validator("duration", mode="before")
    @classmethod
    def wrap_bare_minutes(cls, v: Any) -> Any:
        """Accept ``duration=30`` as shorthand for ``duration={"duration": 30}``."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return {"duration": v}
        return v

    @field_validator("equipment", mode="before")
    @classmethod
    def none_equipment_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


# ============== Analysis Context ==============

class EnvironmentalFactors(SelectionSchema):
    location: str = "indoor"
    weather: str | None = None
    temperature: float | None = None
    noise_level: str | None = None


class AnalysisContext(SelectionSchema):
    """Per-request context supplied by the caller; never persisted."""
    generation_type: GenerationType = "detailed"
    user_experience: UserExperience = "beginner"
    previous_workouts: int | None = Field(default=None, ge=0)
    time_of_day: TimeOfDay | None = None
    environmental_factors: EnvironmentalFactors | None = None
