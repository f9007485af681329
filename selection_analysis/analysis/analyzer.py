"""Selection analyzer: runs the factor analyzers and assembles the result.

The aggregator validates inputs, scores the five factors in canonical order,
combines them with the configured weights, and attaches insights,
suggestions and educational content. Results are cached in memory by a
content hash of the inputs.
"""

from __future__ import annotations

import copy
import math
import threading
import time
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from selection_analysis.config.features import FeatureFlags, is_feature_enabled
from selection_analysis.config.settings import Settings, get_settings
from selection_analysis.core.cache import TTLCache, generate_cache_key
from selection_analysis.core.logging import get_logger
from selection_analysis.core.metrics import track_analysis, track_factor_score
from selection_analysis.schemas import AnalysisContext, UserProfile, WorkoutSelections

from .analyzers import FactorAnalyzer, default_analyzers
from .base import AnalysisMetadata, FactorScore, SelectionAnalysisResult, clamp_score
from .conditions import ConditionContext
from .config_loader import (
    DEFAULT_CONFIG,
    SelectionAnalysisConfig,
    load_selection_analysis_config,
    merge_config,
    validate_config,
)
from .constants import FactorName
from .content import (
    Insight,
    get_applicable_content,
    get_applicable_suggestions,
    get_overall_insight,
    select_factor_insight,
)
from .exceptions import AnalysisError, DataQualityError, SelectionAnalysisError
from .inputs import SelectionFacts, extract_facts
from .validators import assess_input_quality, coerce_context, coerce_profile, coerce_selections

logger = get_logger(__name__)

CACHE_NAME = "selection_analysis"


class SelectionAnalyzer:
    """Scores workout selections against a user profile.

    Example:
        >>> analyzer = SelectionAnalyzer()
        >>> result = analyzer.analyze_selections(profile, selections, context)
        >>> result.factors["intensity_match"].status
        <FactorStatus.POOR: 'poor'>
    """

    def __init__(
        self,
        config: SelectionAnalysisConfig | None = None,
        analyzers: Sequence[FactorAnalyzer] | None = None,
        strict: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the analyzer.

        Args:
            config: Engine configuration. Defaults to the built-in defaults.
            analyzers: Factor analyzers, one per canonical factor.
            strict: Reject invalid configurations instead of warning.
            clock: Monotonic clock for the result cache.

        Raises:
            ConfigValidationError: If ``strict`` and the configuration is invalid.
        """
        self._config = config or DEFAULT_CONFIG
        self._strict = strict
        validate_config(self._config, strict=strict)

        self._analyzers = list(analyzers) if analyzers is not None else default_analyzers()
        names = [analyzer.name for analyzer in self._analyzers]
        if sorted(names) != sorted(FactorName.ORDERED):
            raise ValueError(f"Expected one analyzer per factor {FactorName.ORDERED}, got {names}")

        self._lock = threading.RLock()
        self._cache: TTLCache[SelectionAnalysisResult] = TTLCache(
            ttl_seconds=self._config.cache.ttl_seconds,
            name=CACHE_NAME,
            clock=clock,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SelectionAnalyzer:
        """Build an analyzer from the YAML configuration named in settings."""
        settings = settings or get_settings()
        config = load_selection_analysis_config(settings)
        return cls(config=config, strict=settings.selection_analysis_strict_weights)

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze_selections(
        self,
        profile: UserProfile | Mapping[str, Any] | None,
        selections: WorkoutSelections | Mapping[str, Any] | None,
        context: AnalysisContext | Mapping[str, Any] | None = None,
    ) -> SelectionAnalysisResult:
        """Analyze workout selections.

        Args:
            profile: Stored user profile (model or raw dict)
            selections: Per-workout selections (model or raw dict)
            context: Request context; defaults when None

        Returns:
            SelectionAnalysisResult owned by the caller. With caching on, both
            misses and hits return a copy of the stored result, so a hit
            keeps the timestamp of the computation that filled the cache.

        Raises:
            InvalidUserProfileError: If the profile is missing or malformed
            InvalidWorkoutOptionsError: If the selections or context are malformed
            DataQualityError: If input completeness is below the configured minimum
            AnalysisError: If an analyzer produces an invalid score
        """
        start = time.perf_counter()
        try:
            profile = coerce_profile(profile)
            selections = coerce_selections(selections)
            context = coerce_context(context)

            with self._lock:
                config = self._config

            data_quality, warnings = assess_input_quality(profile, selections)
            if data_quality < config.min_data_quality:
                raise DataQualityError(
                    f"Data quality {data_quality:.2f} below minimum {config.min_data_quality:.2f}",
                    details={"data_quality": data_quality, "warnings": warnings},
                )

            def compute() -> SelectionAnalysisResult:
                return self._analyze(config, profile, selections, context, data_quality, warnings)

            if not config.cache.enabled:
                result = compute()
                track_analysis("success", time.perf_counter() - start)
                return result

            key = self._cache_key(profile, selections, context)
            result, hit = self._cache.get_or_compute(key, compute, config.cache.ttl_seconds)
        except SelectionAnalysisError as e:
            track_analysis("error", time.perf_counter() - start)
            logger.warning(
                "selection_analysis_failed",
                error_type=e.error_type.value,
                error=e.message,
            )
            raise

        # The cached result is never handed out; callers own their copy
        if hit:
            track_analysis("cache_hit", time.perf_counter() - start)
            logger.debug("selection_analysis_cache_hit", cache_key=key)
        else:
            track_analysis("success", time.perf_counter() - start)
        return copy.deepcopy(result)

    def _analyze(
        self,
        config: SelectionAnalysisConfig,
        profile: UserProfile,
        selections: WorkoutSelections,
        context: AnalysisContext,
        data_quality: float,
        warnings: list[str],
    ) -> SelectionAnalysisResult:
        start = time.perf_counter()
        facts = extract_facts(profile, selections, context)

        detailed = config.enable_detailed_logging or is_feature_enabled(
            FeatureFlags.ENABLE_DETAILED_ANALYSIS_LOGGING, profile.user_id
        )
        factors = self._score_factors(facts, detailed)
        weights = config.factor_weights.as_dict()
        overall = clamp_score(math.fsum(weights[name] * factors[name].score for name in FactorName.ORDERED))

        ctx = ConditionContext.build(
            {name: factor.score for name, factor in factors.items()},
            profile=profile,
            selections=selections,
            facts=facts,
            context=context,
            overall_score=overall,
        )
        insights = self._build_insights(config, factors, facts, overall)
        suggestions = get_applicable_suggestions(ctx, config.max_suggestions)
        educational_content = get_applicable_content(
            ctx, profile.fitness_level, config.max_educational_content
        )

        elapsed_ms = (time.perf_counter() - start) * 1000
        result = SelectionAnalysisResult(
            overall_score=overall,
            factors=factors,
            insights=tuple(insights),
            suggestions=tuple(suggestions),
            educational_content=tuple(educational_content),
            metadata=AnalysisMetadata(
                analysis_time_ms=elapsed_ms,
                factor_weights=weights,
                data_quality=data_quality,
                version=config.version,
                timestamp=datetime.now(timezone.utc),
                warnings=tuple(warnings),
            ),
        )

        logger.info(
            "selection_analysis_completed",
            user_id=profile.user_id,
            overall_score=round(overall, 3),
            insights=len(result.insights),
            suggestions=len(result.suggestions),
            data_quality=data_quality,
            analysis_time_ms=round(elapsed_ms, 2),
        )
        return result

    def _score_factors(self, facts: SelectionFacts, detailed: bool) -> dict[str, FactorScore]:
        scored: dict[str, FactorScore] = {}
        for analyzer in self._analyzers:
            factor = analyzer.analyze_facts(facts)
            if not isinstance(factor, FactorScore):
                raise AnalysisError(
                    f"Analyzer returned {type(factor).__name__}, expected FactorScore",
                    analyzer=analyzer.name,
                )
            scored[analyzer.name] = factor
            track_factor_score(analyzer.name, factor.score)
            log = logger.info if detailed else logger.debug
            log(
                "factor_scored",
                factor=analyzer.name,
                score=factor.score,
                status=factor.status.value,
            )
        return {name: scored[name] for name in FactorName.ORDERED}

    def _build_insights(
        self,
        config: SelectionAnalysisConfig,
        factors: dict[str, FactorScore],
        facts: SelectionFacts,
        overall: float,
    ) -> list[Insight]:
        insights: list[Insight] = []
        for name, factor in factors.items():
            insight = select_factor_insight(name, factor, facts)
            if insight is not None:
                insights.append(insight)
        thresholds = config.thresholds
        insights.append(
            get_overall_insight(overall, thresholds.excellent, thresholds.good, thresholds.warning)
        )
        return sorted(insights, key=lambda insight: insight.priority)

    @staticmethod
    def _cache_key(
        profile: UserProfile,
        selections: WorkoutSelections,
        context: AnalysisContext,
    ) -> str:
        return generate_cache_key(
            CACHE_NAME,
            profile.model_dump(mode="json"),
            selections.model_dump(mode="json"),
            context.model_dump(mode="json"),
        )

    # =========================================================================
    # Configuration and cache management
    # =========================================================================

    def get_config(self) -> SelectionAnalysisConfig:
        """Return a copy of the active configuration."""
        with self._lock:
            return copy.deepcopy(self._config)

    def update_config(self, partial: Mapping[str, Any]) -> SelectionAnalysisConfig:
        """Merge a partial configuration (YAML layout) into the active one.

        Sections are ``factor_weights`` (or ``weights``), ``thresholds``,
        ``cache``, ``content``, ``quality``, ``logging`` and ``metadata``.
        Weights and thresholds merge independently. The merged configuration
        is validated before it replaces the active one, and the result cache
        is cleared.

        Raises:
            ConfigValidationError: If ``strict`` and the merged configuration is invalid
        """
        with self._lock:
            updated = merge_config(self._config, partial)
            validate_config(updated, strict=self._strict)
            self._config = updated
            self._cache.ttl_seconds = updated.cache.ttl_seconds
            self._cache.clear()
        logger.info("selection_analysis_config_updated", sections=sorted(partial))
        return copy.deepcopy(updated)

    def clear_cache(self) -> None:
        self._cache.clear()

    def get_analyzers(self) -> list[FactorAnalyzer]:
        return list(self._analyzers)

    @property
    def cache_size(self) -> int:
        return len(self._cache)
