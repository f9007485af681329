"""Selection analysis engine.

Scores how well ad-hoc workout selections fit a stored user profile and
explains the result with insights, suggestions and educational content.

Main exports:
    - SelectionAnalysisService: Feature-gated facade, degrades errors to None
    - create_selection_analysis_service: Build the service from settings
    - SelectionAnalyzer: Aggregator with result cache
    - SelectionAnalysisResult: Overall score, factor scores and content
    - FactorScore / FactorStatus: Per-factor score and status band
    - QuickAnalysis: Condensed score, status and message
    - ConditionRule / ConditionContext / evaluate: Declarative rule engine
    - YAMLConfigLoader / SelectionAnalysisConfig: Engine configuration
    - SelectionAnalysisError: Base of the engine's error taxonomy
"""
from .analyzer import SelectionAnalyzer
from .base import (
    AnalysisMetadata,
    FactorScore,
    FactorStatus,
    QuickAnalysis,
    SelectionAnalysisResult,
)
from .conditions import ConditionContext, ConditionRule, evaluate, evaluate_all
from .config_loader import (
    ConfigError,
    ConfigLoadError,
    ConfigNotFoundError,
    ConfigValidationError,
    DEFAULT_CONFIG,
    DEFAULT_CONFIG_PATH,
    FactorWeights,
    SelectionAnalysisConfig,
    StatusThresholds,
    YAMLConfigLoader,
    validate_config,
)
from .constants import FactorName
from .exceptions import (
    AnalysisError,
    AnalysisTimeoutError,
    DataQualityError,
    ErrorType,
    InvalidUserProfileError,
    InvalidWorkoutOptionsError,
    SelectionAnalysisError,
)
from .service import SelectionAnalysisService, create_selection_analysis_service

__all__ = [
    "AnalysisError",
    "AnalysisMetadata",
    "AnalysisTimeoutError",
    "ConditionContext",
    "ConditionRule",
    "ConfigError",
    "ConfigLoadError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_PATH",
    "DataQualityError",
    "ErrorType",
    "FactorName",
    "FactorScore",
    "FactorStatus",
    "FactorWeights",
    "InvalidUserProfileError",
    "InvalidWorkoutOptionsError",
    "QuickAnalysis",
    "SelectionAnalysisConfig",
    "SelectionAnalysisError",
    "SelectionAnalysisResult",
    "SelectionAnalysisService",
    "SelectionAnalyzer",
    "StatusThresholds",
    "YAMLConfigLoader",
    "create_selection_analysis_service",
    "evaluate",
    "evaluate_all",
    "validate_config",
]
