"""Pydantic input contracts for the selection analysis engine."""
from selection_analysis.schemas.selection import (
    AnalysisContext,
    BasicLimitations,
    DurationSelection,
    EnergySelection,
    EnhancedLimitations,
    EnvironmentalFactors,
    FocusSelection,
    ProfilePreferences,
    RecoveryNeeds,
    UserProfile,
    WorkoutSelections,
)

__all__ = [
    "AnalysisContext",
    "BasicLimitations",
    "DurationSelection",
    "EnergySelection",
    "EnhancedLimitations",
    "EnvironmentalFactors",
    "FocusSelection",
    "ProfilePreferences",
    "RecoveryNeeds",
    "UserProfile",
    "WorkoutSelections",
]
