"""YAML configuration loader for the selection analysis engine.

The engine configuration (factor weights, status thresholds, cache and
content limits) lives in ``config/selection_analysis.yaml``. This module
loads it into frozen dataclasses, validates it, and supports merging
partial updates at runtime.

Validation runs in one of two modes:
- strict: any issue raises ``ConfigValidationError``
- lenient: each issue is logged as a warning and returned to the caller
"""

from __future__ import annotations

import dataclasses
import logging
import math
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

import yaml

from selection_analysis.config.settings import Settings, get_settings

from .constants import ENGINE_VERSION, WEIGHT_SUM_TOLERANCE, FactorName

PACKAGE_ROOT: Final[Path] = Path(__file__).parent.parent
DEFAULT_CONFIG_PATH: Final[Path] = PACKAGE_ROOT / "config" / "selection_analysis.yaml"

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base exception for configuration errors."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.path:
            return f"Config error in '{self.path}': {self.message}"
        return f"Config error: {self.message}"


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        issues: list[str] | None = None,
    ) -> None:
        self.issues = issues or []
        super().__init__(message, path)


class ConfigLoadError(ConfigError):
    """Raised when configuration fails to load."""

    pass


class ConfigNotFoundError(ConfigError):
    """Raised when configuration file is not found."""

    pass


# =============================================================================
# Configuration dataclasses
# =============================================================================

@dataclass(frozen=True)
class FactorWeights:
    """Weight of each factor in the overall score.

    These are the only weights used for aggregation; analyzer ``weight``
    attributes are descriptive.
    """

    goal_alignment: float = 0.25
    intensity_match: float = 0.25
    duration_fit: float = 0.20
    recovery_respect: float = 0.15
    equipment_optimization: float = 0.15

    def as_dict(self) -> dict[str, float]:
        """Weights keyed by factor name, in canonical order."""
        return {name: getattr(self, name) for name in FactorName.ORDERED}

    def total(self) -> float:
        return math.fsum(self.as_dict().values())


@dataclass(frozen=True)
class StatusThresholds:
    """Lower bounds of the excellent, good and warning bands of the overall score."""

    excellent: float = 0.85
    good: float = 0.70
    warning: float = 0.50


@dataclass(frozen=True)
class CacheSettings:
    enabled: bool = True
    ttl_seconds: float = 300.0


@dataclass(frozen=True)
class SelectionAnalysisConfig:
    """Complete engine configuration.

    Attributes:
        factor_weights: Weights for the overall score, summing to 1
        thresholds: Overall score bands
        cache: Result cache settings
        max_suggestions: Suggestions returned per analysis
        max_educational_content: Educational items returned per analysis
        min_data_quality: Inputs assessed below this are rejected
        enable_detailed_logging: Log every factor score at info level
        version: Version tag stamped into result metadata
        description: Free-text description
    """

    factor_weights: FactorWeights = field(default_factory=FactorWeights)
    thresholds: StatusThresholds = field(default_factory=StatusThresholds)
    cache: CacheSettings = field(default_factory=CacheSettings)
    max_suggestions: int = 5
    max_educational_content: int = 3
    min_data_quality: float = 0.0
    enable_detailed_logging: bool = False
    version: str = ENGINE_VERSION
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the YAML file layout."""
        return {
            "factor_weights": self.factor_weights.as_dict(),
            "thresholds": dataclasses.asdict(self.thresholds),
            "cache": dataclasses.asdict(self.cache),
            "content": {
                "max_suggestions": self.max_suggestions,
                "max_educational_content": self.max_educational_content,
            },
            "quality": {"min_data_quality": self.min_data_quality},
            "logging": {"detailed": self.enable_detailed_logging},
            "metadata": {"version": self.version, "description": self.description},
        }


DEFAULT_CONFIG: Final[SelectionAnalysisConfig] = SelectionAnalysisConfig()


# =============================================================================
# Conversion, merging and validation
# =============================================================================

_SECTIONS: Final[frozenset[str]] = frozenset(
    ("factor_weights", "thresholds", "cache", "content", "quality", "logging", "metadata")
)

# Accepted spellings of section names in updates and YAML
_SECTION_ALIASES: Final[dict[str, str]] = {"weights": "factor_weights"}


def _canonical_sections(raw: Mapping[str, Any]) -> dict[str, Any]:
    sections: dict[str, Any] = {}
    for key, value in raw.items():
        name = _SECTION_ALIASES.get(key, key)
        if name in sections:
            raise ConfigValidationError(f"Section '{name}' given more than once (as '{key}')")
        sections[name] = value
    return sections


def _section(raw: Mapping[str, Any], name: str, allowed: tuple[str, ...]) -> dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, Mapping):
        raise ConfigValidationError(f"Section '{name}' must be a mapping")
    unknown = sorted(set(value) - set(allowed))
    if unknown:
        raise ConfigValidationError(f"Unknown keys in '{name}': {', '.join(unknown)}")
    return dict(value)


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigValidationError(f"'{name}' must be a number, got {value!r}")
    return float(value)


def config_from_dict(raw: Mapping[str, Any] | None) -> SelectionAnalysisConfig:
    """Build a configuration from the YAML layout; missing keys take defaults.

    Args:
        raw: Parsed YAML mapping (or None for all defaults)

    Returns:
        SelectionAnalysisConfig (not yet validated)

    Raises:
        ConfigValidationError: On unknown sections or keys, or non-numeric values
    """
    raw = raw or {}
    if not isinstance(raw, Mapping):
        raise ConfigValidationError("Configuration root must be a mapping")
    raw = _canonical_sections(raw)
    unknown = sorted(set(raw) - _SECTIONS)
    if unknown:
        raise ConfigValidationError(f"Unknown configuration sections: {', '.join(unknown)}")

    defaults = DEFAULT_CONFIG
    weights_raw = _section(raw, "factor_weights", FactorName.ORDERED)
    thresholds_raw = _section(raw, "thresholds", ("excellent", "good", "warning"))
    cache_raw = _section(raw, "cache", ("enabled", "ttl_seconds"))
    content_raw = _section(raw, "content", ("max_suggestions", "max_educational_content"))
    quality_raw = _section(raw, "quality", ("min_data_quality",))
    logging_raw = _section(raw, "logging", ("detailed",))
    metadata_raw = _section(raw, "metadata", ("version", "description"))

    weights = FactorWeights(**{
        name: _number(weights_raw.get(name, default), f"factor_weights.{name}")
        for name, default in defaults.factor_weights.as_dict().items()
    })
    thresholds = StatusThresholds(**{
        name: _number(thresholds_raw.get(name, default), f"thresholds.{name}")
        for name, default in dataclasses.asdict(defaults.thresholds).items()
    })
    cache = CacheSettings(
        enabled=bool(cache_raw.get("enabled", defaults.cache.enabled)),
        ttl_seconds=_number(cache_raw.get("ttl_seconds", defaults.cache.ttl_seconds), "cache.ttl_seconds"),
    )

    return SelectionAnalysisConfig(
        factor_weights=weights,
        thresholds=thresholds,
        cache=cache,
        max_suggestions=int(_number(
            content_raw.get("max_suggestions", defaults.max_suggestions), "content.max_suggestions"
        )),
        max_educational_content=int(_number(
            content_raw.get("max_educational_content", defaults.max_educational_content),
            "content.max_educational_content",
        )),
        min_data_quality=_number(
            quality_raw.get("min_data_quality", defaults.min_data_quality), "quality.min_data_quality"
        ),
        enable_detailed_logging=bool(logging_raw.get("detailed", defaults.enable_detailed_logging)),
        version=str(metadata_raw.get("version", defaults.version)),
        description=str(metadata_raw.get("description", defaults.description)),
    )


def _deep_merge(base: dict[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(
    config: SelectionAnalysisConfig,
    partial: Mapping[str, Any],
) -> SelectionAnalysisConfig:
    """Deep-merge a partial update in the YAML layout into a configuration.

    Sections merge key by key, so updating ``factor_weights`` leaves
    ``thresholds`` untouched and updating one weight keeps the others.
    ``weights`` is accepted as another name for ``factor_weights``.

    Example:
        >>> merged = merge_config(DEFAULT_CONFIG, {"thresholds": {"good": 0.75}})
        >>> merged.thresholds.excellent, merged.thresholds.good
        (0.85, 0.75)
    """
    if not isinstance(partial, Mapping):
        raise ConfigValidationError("Configuration update must be a mapping")
    return config_from_dict(_deep_merge(config.to_dict(), _canonical_sections(partial)))


def validate_config(config: SelectionAnalysisConfig, strict: bool = True) -> list[str]:
    """Validate a configuration.

    Args:
        config: Configuration to check
        strict: Raise when any issue is found instead of logging warnings

    Returns:
        List of issues found (empty when valid). Only returned in lenient mode
        or when there are no issues.

    Raises:
        ConfigValidationError: In strict mode, when any issue is found
    """
    issues: list[str] = []

    weights = config.factor_weights.as_dict()
    for name, weight in weights.items():
        if not 0.0 <= weight <= 1.0:
            issues.append(f"Weight for {name} must be within [0, 1], got {weight}")
    total = config.factor_weights.total()
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        issues.append(f"Factor weights must sum to 1.0, got {total:.6f}")

    t = config.thresholds
    if not 1.0 >= t.excellent > t.good > t.warning >= 0.0:
        issues.append(
            f"Thresholds must satisfy 1 >= excellent > good > warning >= 0, "
            f"got {t.excellent}/{t.good}/{t.warning}"
        )
    if config.cache.ttl_seconds <= 0:
        issues.append(f"Cache TTL must be positive, got {config.cache.ttl_seconds}")
    if config.max_suggestions < 0:
        issues.append(f"max_suggestions must be >= 0, got {config.max_suggestions}")
    if config.max_educational_content < 0:
        issues.append(f"max_educational_content must be >= 0, got {config.max_educational_content}")
    if not 0.0 <= config.min_data_quality <= 1.0:
        issues.append(f"min_data_quality must be within [0, 1], got {config.min_data_quality}")
    if not config.version:
        issues.append("Version must be specified")

    if issues and strict:
        raise ConfigValidationError(
            f"Invalid selection analysis configuration: {'; '.join(issues)}",
            issues=issues,
        )
    for issue in issues:
        logger.warning(f"Selection analysis config issue: {issue}")
    return issues


# =============================================================================
# Loader
# =============================================================================

class YAMLConfigLoader:
    """Loads and validates the engine configuration from YAML.

    Provides thread-safe access to the loaded configuration and reloads it
    when the file's modification time changes.

    Example:
        >>> loader = YAMLConfigLoader()
        >>> loader.get_config().factor_weights.goal_alignment
        0.25
    """

    def __init__(self, config_path: Path | str | None = None, strict: bool = True) -> None:
        """Initialize the loader and load the configuration.

        Args:
            config_path: Path to the YAML file. Defaults to DEFAULT_CONFIG_PATH.
            strict: Reject invalid configurations instead of warning.

        Raises:
            ConfigNotFoundError: If the config file doesn't exist.
        """
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._strict = strict
        self._config: SelectionAnalysisConfig | None = None
        self._last_modified: float = 0.0
        self._lock = threading.RLock()

        if not self._config_path.exists():
            raise ConfigNotFoundError(
                f"Configuration file not found: {self._config_path}",
                path=str(self._config_path),
            )

        self.load_config()

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load_config(self) -> SelectionAnalysisConfig:
        """Load configuration from the YAML file.

        Raises:
            ConfigLoadError: If the file cannot be read or parsed.
            ConfigValidationError: If validation fails in strict mode.
        """
        with self._lock:
            logger.info(f"Loading selection analysis configuration from {self._config_path}")
            raw_config = self._load_yaml_file()
            try:
                config = config_from_dict(raw_config)
            except ConfigValidationError as e:
                raise ConfigValidationError(e.message, path=str(self._config_path)) from e
            validate_config(config, strict=self._strict)

            self._config = config
            self._last_modified = self._config_path.stat().st_mtime
            logger.info(f"Selection analysis configuration loaded (version {config.version})")
            return config

    def reload_config(self) -> SelectionAnalysisConfig:
        """Reload the configuration if the file changed since the last load."""
        with self._lock:
            if self._config is not None and not self._has_file_changed():
                logger.debug("Configuration file has not changed, skipping reload")
                return self._config
            return self.load_config()

    def get_config(self) -> SelectionAnalysisConfig:
        with self._lock:
            if self._config is None:
                raise ConfigLoadError("No configuration loaded")
            return self._config

    def _load_yaml_file(self) -> dict[str, Any]:
        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            raise ConfigNotFoundError(
                f"Configuration file not found: {self._config_path}",
                path=str(self._config_path),
            ) from e
        except yaml.YAMLError as e:
            raise ConfigLoadError(
                f"Failed to parse YAML: {e}", path=str(self._config_path)
            ) from e
        except OSError as e:
            raise ConfigLoadError(
                f"Failed to read file: {e}", path=str(self._config_path)
            ) from e

    def _has_file_changed(self) -> bool:
        try:
            return self._config_path.stat().st_mtime > self._last_modified
        except OSError:
            logger.warning(f"Failed to check file modification time for {self._config_path}")
            return False


def load_selection_analysis_config(settings: Settings | None = None) -> SelectionAnalysisConfig:
    """Load the engine configuration named by the application settings.

    Cache overrides in the settings take precedence over the YAML values.

    Args:
        settings: Application settings. Defaults to ``get_settings()``.

    Returns:
        Validated SelectionAnalysisConfig
    """
    settings = settings or get_settings()
    loader = YAMLConfigLoader(
        settings.selection_analysis_config_path,
        strict=settings.selection_analysis_strict_weights,
    )
    config = loader.get_config()

    overrides: dict[str, Any] = {}
    if settings.selection_analysis_enable_caching is not None:
        overrides["enabled"] = settings.selection_analysis_enable_caching
    if settings.selection_analysis_cache_ttl_seconds is not None:
        overrides["ttl_seconds"] = settings.selection_analysis_cache_ttl_seconds
    if overrides:
        config = merge_config(config, {"cache": overrides})
        validate_config(config, strict=settings.selection_analysis_strict_weights)
    return config
