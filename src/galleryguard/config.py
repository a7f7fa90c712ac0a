"""Configuration management for galleryguard.

Values come from environment variables first and Streamlit secrets second,
so the same package runs under a plain asyncio host and inside Streamlit.
"""

import os
from typing import Any

try:
    import streamlit as st

    STREAMLIT_AVAILABLE = True
except ImportError:
    STREAMLIT_AVAILABLE = False

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_IMAGE_LOAD_TIMEOUT = 15.0
DEFAULT_FLASH_DWELL_SECONDS = 2.0
SUPPORTED_LOCALES = ("en", "pt")


class Config:
    """Centralized configuration lookup with typed casting."""

    def __init__(self):
        self._cache = {}

    def get(self, key: str, default: Any = None, cast_type: type = str) -> Any:
        """Get configuration value from environment variables or Streamlit secrets.

        Args:
            key: Configuration key
            default: Default value if not found
            cast_type: Type to cast the value to (str, int, bool, float)

        Returns:
            Configuration value cast to the specified type
        """
        cache_key = f"{key}:{cast_type.__name__}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        value = os.getenv(key)

        if value is None and STREAMLIT_AVAILABLE:
            try:
                value = st.secrets.get(key)
            except Exception:  # nosec B110
                # No secrets file or not running under Streamlit
                pass

        if value is None:
            value = default

        if value is not None:
            try:
                if cast_type is bool:
                    if isinstance(value, str):
                        value = value.lower() in ("true", "1", "yes", "on")
                    else:
                        value = bool(value)
                elif cast_type is not str:
                    value = cast_type(value)
            except (ValueError, TypeError) as e:
                logger.warning("config_cast_failed", key=key, cast_type=cast_type.__name__, error=str(e))
                value = default

        self._cache[cache_key] = value
        return value

    def get_required(self, key: str, cast_type: type = str) -> Any:
        """Get required configuration value.

        Raises:
            ValueError: If the required configuration is not found
        """
        value = self.get(key, cast_type=cast_type)
        if value is None:
            raise ValueError(f"Required configuration '{key}' not found")
        return value

    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.get("ENVIRONMENT", "development").lower() in ["development", "dev", "local"]

    def clear_cache(self):
        """Clear configuration cache."""
        self._cache.clear()


_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_env(key: str, default: Any = None, cast_type: type = str) -> Any:
    """Get a configuration value with type casting."""
    return get_config().get(key, default, cast_type)


def get_image_load_timeout() -> float:
    """Seconds allowed for fetching a single gallery image."""
    timeout = get_env("IMAGE_LOAD_TIMEOUT", DEFAULT_IMAGE_LOAD_TIMEOUT, float)
    return timeout if timeout and timeout > 0 else DEFAULT_IMAGE_LOAD_TIMEOUT


def get_flash_dwell_seconds() -> float:
    """How long the violation overlay stays up after a screenshot attempt."""
    dwell = get_env("FLASH_DWELL_SECONDS", DEFAULT_FLASH_DWELL_SECONDS, float)
    return dwell if dwell and dwell > 0 else DEFAULT_FLASH_DWELL_SECONDS


def get_protection_locale() -> str:
    """Locale used for protection notices."""
    locale = str(get_env("PROTECTION_LOCALE", "en")).lower()
    return locale if locale in SUPPORTED_LOCALES else "en"


def get_gallery_manifest_path() -> str | None:
    """Path of the gallery manifest the Streamlit host should display."""
    return get_env("GALLERY_MANIFEST")
