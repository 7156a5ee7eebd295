"""Exceptions raised by the recipe ingestion pipeline."""
from __future__ import annotations


class RecipeIngestError(Exception):
    """Base class for all recipe ingestion errors."""


class InvalidInputError(RecipeIngestError, ValueError):
    """Raised when an argument has no sensible fallback (e.g. a blank URL)."""


class FetchError(RecipeIngestError):
    """Raised when a page could not be fetched by any available method."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Failed to fetch {url}: {message}")
        self.url = url
