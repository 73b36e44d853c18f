"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Gemini (upstream generative-text API)
GEMINI_PROVIDER: str = "Google Gemini"
GEMINI_MODEL: str = "gemini-2.0-flash"
GEMINI_API_VERSION: str = "v1beta"
GEMINI_API_URL: str = (
    f"https://generativelanguage.googleapis.com/{GEMINI_API_VERSION}"
    f"/models/{GEMINI_MODEL}:generateContent"
)

# Generation parameters (fixed; not caller-configurable)
MAX_OUTPUT_TOKENS: int = 1000
TEMPERATURE: float = 0.7

# Upstream timeout (seconds)
DEFAULT_UPSTREAM_TIMEOUT: float = 30.0

# Server
DEFAULT_PORT: int = 3000


def env_number(name: str, default: int | float, cast: Callable[[str], int | float]) -> int | float:
    """Read a numeric env var; unset, empty or unparsable values give the default."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("[config] invalid %s=%r, using default %s", name, raw, default)
        return default


# From env. Empty key means simulated mode.
GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "").strip()
PORT: int = int(env_number("PORT", DEFAULT_PORT, int))
APP_ENV: str = os.getenv("APP_ENV", "development").strip() or "development"
UPSTREAM_TIMEOUT: float = float(env_number("GEMINI_TIMEOUT", DEFAULT_UPSTREAM_TIMEOUT, float))


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, read once at startup and never mutated."""

    api_key: str = ""
    api_url: str = GEMINI_API_URL
    port: int = DEFAULT_PORT
    environment: str = "development"
    timeout: float = DEFAULT_UPSTREAM_TIMEOUT

    @property
    def api_key_configured(self) -> bool:
        return bool(self.api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        api_key=GEMINI_API_KEY,
        port=PORT,
        environment=APP_ENV,
        timeout=UPSTREAM_TIMEOUT,
    )
