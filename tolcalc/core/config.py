"""Runtime settings for the tolerance service and CLI."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json|text

    # Web settings
    CORS_ORIGINS: list[str] = ["*"]
    ALLOWED_HOSTS: list[str] = ["*"]

    # Query defaults when a parameter is omitted
    DEFAULT_MODE: str = "fit"  # general|fit
    DEFAULT_DIMENSION: str = "3"
    DEFAULT_GENERAL_CLASS: str = "m"  # f|m|c|v
    DEFAULT_FIT_CATEGORY: str = "shaft"  # hole|shaft
    DEFAULT_FIT_CLASS: str = "h6"

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }


_settings_cache: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = Settings()
    return _settings_cache


def reset_settings_cache() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings_cache
    _settings_cache = None
