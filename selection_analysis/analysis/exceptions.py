"""Exception hierarchy for selection analysis.

Every error raised by the engine carries an ``ErrorType`` code so callers
at the service boundary can decide how to degrade.

Exception Hierarchy:
- SelectionAnalysisError (base)
  - InvalidUserProfileError (INVALID_USER_PROFILE)
  - InvalidWorkoutOptionsError (INVALID_WORKOUT_OPTIONS)
  - AnalysisError (ANALYSIS_ERROR)
  - AnalysisTimeoutError (TIMEOUT_ERROR, reserved for asynchronous callers)
  - DataQualityError (DATA_QUALITY_ERROR)

Configuration problems are reported through ``config_loader.ConfigError``.

Example:
    try:
        result = analyzer.analyze_selections(profile, selections, context)
    except InvalidUserProfileError as e:
        logger.warning(f"Profile rejected: {e}")
    except SelectionAnalysisError as e:
        logger.error(f"Selection analysis failed [{e.error_type.value}]: {e}")
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorType(str, Enum):
    """Error codes surfaced by the selection analysis engine."""

    INVALID_USER_PROFILE = "INVALID_USER_PROFILE"
    INVALID_WORKOUT_OPTIONS = "INVALID_WORKOUT_OPTIONS"
    ANALYSIS_ERROR = "ANALYSIS_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    DATA_QUALITY_ERROR = "DATA_QUALITY_ERROR"


# =============================================================================
# Base Exception
# =============================================================================

class SelectionAnalysisError(Exception):
    """Base exception for all selection analysis errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary with additional error context
        analyzer: Name of the analyzer involved, if any
        timestamp: When the error was raised (UTC)
    """

    error_type: ErrorType = ErrorType.ANALYSIS_ERROR

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        analyzer: str | None = None,
    ) -> None:
        """Initialize the selection analysis exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context
            analyzer: Optional analyzer name
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.analyzer = analyzer
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        """Return string representation."""
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for logs and API payloads."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
            "analyzer": self.analyzer,
            "timestamp": self.timestamp.isoformat(),
        }


# =============================================================================
# Input Exceptions
# =============================================================================

class InvalidUserProfileError(SelectionAnalysisError):
    """Raised when the user profile is missing or cannot be interpreted.

    Example:
        ```python
        if profile is None:
            raise InvalidUserProfileError("User profile is required")
        ```
    """

    error_type = ErrorType.INVALID_USER_PROFILE


class InvalidWorkoutOptionsError(SelectionAnalysisError):
    """Raised when the workout selections are missing or malformed."""

    error_type = ErrorType.INVALID_WORKOUT_OPTIONS


class DataQualityError(SelectionAnalysisError):
    """Raised when input completeness falls below the configured minimum.

    Example:
        ```python
        if quality < config.min_data_quality:
            raise DataQualityError(
                f"Data quality {quality:.2f} below minimum {config.min_data_quality:.2f}",
                details={"data_quality": quality, "warnings": warnings},
            )
        ```
    """

    error_type = ErrorType.DATA_QUALITY_ERROR


# =============================================================================
# Processing Exceptions
# =============================================================================

class AnalysisError(SelectionAnalysisError):
    """Raised when an analyzer violates its output contract.

    An analyzer is expected to default missing data itself; producing an
    out-of-range score is a defect, not a data problem.
    """

    error_type = ErrorType.ANALYSIS_ERROR


class AnalysisTimeoutError(SelectionAnalysisError):
    """Raised by callers that bound analysis time.

    The engine itself never times out; the type exists so asynchronous
    wrappers report timeouts with the same error taxonomy.
    """

    error_type = ErrorType.TIMEOUT_ERROR


# =============================================================================
# Utility Functions
# =============================================================================

def is_input_error(exception: Exception) -> bool:
    """Check if exception was caused by caller-supplied input.

    Args:
        exception: The exception to check

    Returns:
        True for invalid profile, invalid selections and data quality errors
    """
    return isinstance(
        exception,
        (InvalidUserProfileError, InvalidWorkoutOptionsError, DataQualityError),
    )
