"""The five factor analyzers, in canonical evaluation order."""

from .base import CriterionBuilder, FactorAnalyzer, neutral_criterion
from .duration_fit import DurationFitAnalyzer
from .equipment_optimization import EquipmentOptimizationAnalyzer
from .goal_alignment import GoalAlignmentAnalyzer
from .intensity_match import IntensityMatchAnalyzer
from .recovery_respect import RecoveryRespectAnalyzer


def default_analyzers() -> list[FactorAnalyzer]:
    """Return one instance of each analyzer, ordered as FactorName.ORDERED."""
    return [
        GoalAlignmentAnalyzer(),
        IntensityMatchAnalyzer(),
        DurationFitAnalyzer(),
        RecoveryRespectAnalyzer(),
        EquipmentOptimizationAnalyzer(),
    ]


__all__ = [
    "CriterionBuilder",
    "DurationFitAnalyzer",
    "EquipmentOptimizationAnalyzer",
    "FactorAnalyzer",
    "GoalAlignmentAnalyzer",
    "IntensityMatchAnalyzer",
    "RecoveryRespectAnalyzer",
    "default_analyzers",
    "neutral_criterion",
]
