"""Application configuration module.

This module organizes configuration into specialized files:

- **settings.py**: Environment-based settings (Pydantic BaseSettings)
  - Log format, engine config path, weight validation mode
  - Loaded from .env file via pydantic-settings

- **features.py**: Feature flags system
  - Test-user rollout support
  - In-memory flag management with environment overrides

- **selection_analysis.yaml**: Selection analysis engine configuration
  - Loaded via YAMLConfigLoader
  - Factor weights, status thresholds, cache and content limits
"""
from selection_analysis.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
