"""
Runtime configuration for the recipe ingestion pipeline.

Values come from the environment (optionally a ``.env`` file) and are
validated with a voluptuous schema. Use :func:`get_settings` to read them.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping

import voluptuous as vol
from dotenv import load_dotenv

from .const import (
    DEFAULT_MAX_INGREDIENT_LINES,
    DEFAULT_MAX_INSTRUCTION_LINES,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
)
from .exceptions import InvalidInputError

_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

ENV_TIMEOUT = "RECIPE_INGEST_TIMEOUT"
ENV_MAX_RETRIES = "RECIPE_INGEST_MAX_RETRIES"
ENV_MAX_RESPONSE_SIZE = "RECIPE_INGEST_MAX_RESPONSE_SIZE"
ENV_MAX_REDIRECTS = "RECIPE_INGEST_MAX_REDIRECTS"
ENV_MAX_INGREDIENT_LINES = "RECIPE_INGEST_MAX_INGREDIENT_LINES"
ENV_MAX_INSTRUCTION_LINES = "RECIPE_INGEST_MAX_INSTRUCTION_LINES"
ENV_LOG_LEVEL = "RECIPE_INGEST_LOG_LEVEL"
ENV_SCRAPERAPI_KEY = "SCRAPERAPI_KEY"

_ENV_KEYS = (
    ENV_TIMEOUT,
    ENV_MAX_RETRIES,
    ENV_MAX_RESPONSE_SIZE,
    ENV_MAX_REDIRECTS,
    ENV_MAX_INGREDIENT_LINES,
    ENV_MAX_INSTRUCTION_LINES,
    ENV_LOG_LEVEL,
    ENV_SCRAPERAPI_KEY,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(ENV_TIMEOUT, default=DEFAULT_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)),
        vol.Optional(ENV_MAX_RETRIES, default=DEFAULT_MAX_RETRIES): vol.All(
            vol.Coerce(int), vol.Range(min=1)),
        vol.Optional(ENV_MAX_RESPONSE_SIZE, default=DEFAULT_MAX_RESPONSE_SIZE): vol.All(
            vol.Coerce(int), vol.Range(min=1)),
        vol.Optional(ENV_MAX_REDIRECTS, default=DEFAULT_MAX_REDIRECTS): vol.All(
            vol.Coerce(int), vol.Range(min=0)),
        vol.Optional(ENV_MAX_INGREDIENT_LINES, default=DEFAULT_MAX_INGREDIENT_LINES): vol.All(
            vol.Coerce(int), vol.Range(min=0)),
        vol.Optional(ENV_MAX_INSTRUCTION_LINES, default=DEFAULT_MAX_INSTRUCTION_LINES): vol.All(
            vol.Coerce(int), vol.Range(min=0)),
        vol.Optional(ENV_LOG_LEVEL, default="INFO"): vol.All(
            vol.Upper, vol.In(_LOG_LEVELS)),
        vol.Optional(ENV_SCRAPERAPI_KEY, default=None): vol.Any(None, str),
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True)
class Settings:
    """Resolved pipeline settings.

    Attributes:
        timeout: Per-request timeout in seconds
        max_retries: Attempts made by the direct fetch before falling back
        max_response_size: Largest HTML body accepted, in bytes
        max_redirects: Redirects followed by the fetch session
        max_ingredient_lines: Line bound applied to extracted ingredients text
        max_instruction_lines: Line bound applied to extracted instructions text
        log_level: Level name used by :func:`setup_logging`
        scraperapi_key: Optional ScraperAPI key enabling the fetch fallback
    """

    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    max_response_size: int = DEFAULT_MAX_RESPONSE_SIZE
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    max_ingredient_lines: int = DEFAULT_MAX_INGREDIENT_LINES
    max_instruction_lines: int = DEFAULT_MAX_INSTRUCTION_LINES
    log_level: str = "INFO"
    scraperapi_key: str | None = None


def load_settings(environ: Mapping[str, Any] | None = None) -> Settings:
    """Build settings from an environment mapping.

    Args:
        environ: Mapping to read from, defaults to ``os.environ``

    Returns:
        Validated Settings

    Raises:
        InvalidInputError: If a value fails validation
    """
    if environ is None:
        environ = os.environ

    # Empty strings mean "unset"
    raw = {key: environ[key] for key in _ENV_KEYS
           if environ.get(key) not in ("", None)}

    try:
        values = SETTINGS_SCHEMA(raw)
    except vol.Invalid as e:
        _LOGGER.error("Invalid configuration: %s", e)
        raise InvalidInputError(f"Invalid configuration: {e}") from e

    return Settings(
        timeout=values[ENV_TIMEOUT],
        max_retries=values[ENV_MAX_RETRIES],
        max_response_size=values[ENV_MAX_RESPONSE_SIZE],
        max_redirects=values[ENV_MAX_REDIRECTS],
        max_ingredient_lines=values[ENV_MAX_INGREDIENT_LINES],
        max_instruction_lines=values[ENV_MAX_INSTRUCTION_LINES],
        log_level=values[ENV_LOG_LEVEL],
        scraperapi_key=values[ENV_SCRAPERAPI_KEY],
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, loading ``.env`` on first use."""
    load_dotenv()
    return load_settings()


def setup_logging(level: str | int | None = None) -> None:
    """Configure root logging for scripts and CLI entry points."""
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
