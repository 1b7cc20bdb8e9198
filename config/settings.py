"""
Runtime settings, read from environment variables.
"""

import logging
import os
from dataclasses import dataclass

from todoist.client import DEFAULT_API_BASE

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""


def _env_bool(name: str, default: bool = False) -> bool:
    return os.environ.get(name, str(default)).lower() == "true"


def _env_number(name: str, default, cast=int):
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


@dataclass
class Settings:
    """Server configuration."""

    todoist_api_key: str
    todoist_api_base: str = DEFAULT_API_BASE
    todoist_timeout: float = 15
    # Return MCP structuredContent natively instead of as a JSON text block.
    # Not every client supports it yet.
    use_structured_content: bool = False
    assignment_cache_ttl: float = 300
    max_concurrency: int = 10
    log_level: str = "INFO"


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Raises:
        ConfigError: If TODOIST_API_KEY is not set or a number is malformed
    """
    api_key = os.environ.get("TODOIST_API_KEY", "")
    if not api_key:
        raise ConfigError("TODOIST_API_KEY is not set")

    max_concurrency = _env_number("MAX_CONCURRENCY", 10)
    if max_concurrency < 1:
        raise ConfigError("MAX_CONCURRENCY must be at least 1")

    return Settings(
        todoist_api_key=api_key,
        todoist_api_base=os.environ.get("TODOIST_API_BASE", DEFAULT_API_BASE),
        todoist_timeout=_env_number("TODOIST_TIMEOUT", 15, float),
        use_structured_content=_env_bool("USE_STRUCTURED_CONTENT"),
        assignment_cache_ttl=_env_number("ASSIGNMENT_CACHE_TTL", 300, float),
        max_concurrency=max_concurrency,
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
