"""Service facade for selection analysis.

Wraps a ``SelectionAnalyzer`` behind a feature gate. Domain errors degrade
to ``None`` so callers can render a workout without analysis; programming
defects still propagate.
"""

from __future__ import annotations

import dataclasses
import time
from collections.abc import Callable, Mapping
from typing import Any

from selection_analysis.config.features import FeatureFlags, is_feature_enabled
from selection_analysis.config.settings import Settings
from selection_analysis.core.logging import get_logger
from selection_analysis.schemas import (
    AnalysisContext,
    EnvironmentalFactors,
    UserProfile,
    WorkoutSelections,
)

from .analyzer import SelectionAnalyzer
from .base import FactorStatus, QuickAnalysis, SelectionAnalysisResult
from .config_loader import SelectionAnalysisConfig
from .exceptions import SelectionAnalysisError

logger = get_logger(__name__)

FeatureGate = Callable[[str | None], bool]

QUICK_MESSAGES: dict[FactorStatus, str] = {
    FactorStatus.EXCELLENT: "Excellent selections! Your workout will be highly personalized.",
    FactorStatus.GOOD: "Good selections. Your workout will be well-suited to your needs.",
    FactorStatus.WARNING: "Moderate selections. Consider the suggestions for better results.",
    FactorStatus.POOR: "Your selections may need adjustment for optimal results.",
}


def selection_analysis_gate(user_id: str | None) -> bool:
    """Default gate: the ``enable_selection_analysis`` feature flag."""
    return is_feature_enabled(FeatureFlags.ENABLE_SELECTION_ANALYSIS, user_id)


def educational_content_gate(user_id: str | None) -> bool:
    return is_feature_enabled(FeatureFlags.ENABLE_EDUCATIONAL_CONTENT, user_id)


def _always_open(user_id: str | None) -> bool:
    return True


def _user_id(profile: UserProfile | Mapping[str, Any] | None) -> str | None:
    if isinstance(profile, UserProfile):
        return profile.user_id
    if isinstance(profile, Mapping):
        user_id = profile.get("user_id") or profile.get("userId")
        return str(user_id) if user_id is not None else None
    return None


class SelectionAnalysisService:
    """Feature-gated entry point for selection analysis.

    Instances are created by the composition root, typically through
    ``create_selection_analysis_service()``; there is no module-level
    singleton.

    Example:
        >>> with SelectionAnalysisService.new_test_instance() as service:
        ...     quick = service.get_quick_analysis(profile, selections)
        >>> quick.status
        <FactorStatus.GOOD: 'good'>
    """

    def __init__(
        self,
        analyzer: SelectionAnalyzer,
        gate: FeatureGate = selection_analysis_gate,
        content_gate: FeatureGate = educational_content_gate,
    ) -> None:
        """Initialize the service.

        Args:
            analyzer: Aggregator doing the actual analysis
            gate: Decides per user whether analysis runs at all
            content_gate: Decides per user whether educational content is attached
        """
        self._analyzer = analyzer
        self._gate = gate
        self._content_gate = content_gate
        self._closed = False

    @classmethod
    def new_test_instance(
        cls,
        config: SelectionAnalysisConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        strict: bool = True,
    ) -> SelectionAnalysisService:
        """Create an isolated instance with its own cache and both gates open."""
        analyzer = SelectionAnalyzer(config=config, strict=strict, clock=clock)
        return cls(analyzer, gate=_always_open, content_gate=_always_open)

    @property
    def analyzer(self) -> SelectionAnalyzer:
        return self._analyzer

    def is_enabled(self, profile: UserProfile | Mapping[str, Any] | None = None) -> bool:
        """Check whether analysis runs for the profile's user."""
        return not self._closed and self._gate(_user_id(profile))

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze_selections(
        self,
        profile: UserProfile | Mapping[str, Any] | None,
        selections: WorkoutSelections | Mapping[str, Any] | None,
        context: AnalysisContext | Mapping[str, Any] | None = None,
    ) -> SelectionAnalysisResult | None:
        """Analyze workout selections.

        Args:
            profile: Stored user profile
            selections: Per-workout selections
            context: Request context; see ``create_context()``

        Returns:
            SelectionAnalysisResult, or None when the feature is disabled for
            the user or the analysis failed on its inputs
        """
        user_id = _user_id(profile)
        if not self.is_enabled(profile):
            logger.debug("selection_analysis_disabled", user_id=user_id)
            return None

        try:
            result = self._analyzer.analyze_selections(profile, selections, context)
        except SelectionAnalysisError as e:
            logger.error(
                "selection_analysis_unavailable",
                user_id=user_id,
                error_type=e.error_type.value,
                error=e.message,
                details=e.details,
            )
            return None

        if not self._content_gate(user_id):
            result = dataclasses.replace(result, educational_content=())
        return result

    def get_quick_analysis(
        self,
        profile: UserProfile | Mapping[str, Any] | None,
        selections: WorkoutSelections | Mapping[str, Any] | None,
        context: AnalysisContext | Mapping[str, Any] | None = None,
    ) -> QuickAnalysis | None:
        """Condense a full analysis into a score, status and one-line message.

        The status uses the configured overall thresholds.
        """
        result = self.analyze_selections(profile, selections, context)
        if result is None:
            return None

        thresholds = self._analyzer.get_config().thresholds
        status = FactorStatus.for_score(
            result.overall_score,
            thresholds.excellent,
            thresholds.good,
            thresholds.warning,
        )
        return QuickAnalysis(
            score=result.overall_score,
            status=status,
            message=QUICK_MESSAGES[status],
            top_suggestion=result.suggestions[0].action if result.suggestions else None,
        )

    # =========================================================================
    # Management
    # =========================================================================

    def get_config(self) -> SelectionAnalysisConfig:
        return self._analyzer.get_config()

    def update_config(self, partial: Mapping[str, Any]) -> SelectionAnalysisConfig:
        return self._analyzer.update_config(partial)

    def clear_cache(self) -> None:
        self._analyzer.clear_cache()

    @staticmethod
    def create_context(
        generation_type: str = "detailed",
        user_experience: str = "beginner",
        previous_workouts: int | None = None,
        time_of_day: str | None = None,
        location: str = "indoor",
        **environment: Any,
    ) -> AnalysisContext:
        """Build an analysis context with the usual defaults.

        Args:
            generation_type: "quick" or "detailed"
            user_experience: first-time, beginner, intermediate or advanced
            previous_workouts: Workouts completed recently
            time_of_day: morning, afternoon or evening
            location: Environment location
            **environment: Extra environmental factors (weather, temperature, noise_level)

        Returns:
            Validated AnalysisContext
        """
        return AnalysisContext(
            generation_type=generation_type,
            user_experience=user_experience,
            previous_workouts=previous_workouts,
            time_of_day=time_of_day,
            environmental_factors=EnvironmentalFactors(location=location, **environment),
        )

    def close(self) -> None:
        """Release the result cache; the service reports disabled afterwards."""
        if self._closed:
            return
        self._analyzer.clear_cache()
        self._closed = True
        logger.debug("selection_analysis_service_closed")

    def __enter__(self) -> SelectionAnalysisService:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_selection_analysis_service(
    settings: Settings | None = None,
    gate: FeatureGate = selection_analysis_gate,
) -> SelectionAnalysisService:
    """Build the service from application settings.

    Args:
        settings: Application settings. Defaults to ``get_settings()``.
        gate: Feature gate; defaults to the ``enable_selection_analysis`` flag

    Returns:
        SelectionAnalysisService backed by the configured YAML
    """
    analyzer = SelectionAnalyzer.from_settings(settings)
    logger.info(
        "selection_analysis_service_created",
        version=analyzer.get_config().version,
        caching=analyzer.get_config().cache.enabled,
    )
    return SelectionAnalysisService(analyzer, gate=gate)
