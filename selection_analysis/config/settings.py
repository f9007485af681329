"""Application configuration settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Selection Analysis"
    debug: bool = False

    # Logging
    log_json: bool = True

    # Selection analysis engine
    selection_analysis_config_path: str | None = None  # Defaults to the packaged YAML
    selection_analysis_strict_weights: bool = True  # Reject configs whose weights don't sum to 1
    selection_analysis_enable_caching: bool | None = None  # Overrides the YAML value when set
    selection_analysis_cache_ttl_seconds: float | None = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
