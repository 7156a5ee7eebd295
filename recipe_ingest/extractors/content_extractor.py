"""
Recipe content extraction engine.

Runs the extraction tiers in order of confidence (structured metadata,
CSS selectors, page title) and merges their results so that earlier tiers
always win.
"""
from __future__ import annotations

import logging
from typing import Sequence

from bs4 import BeautifulSoup

from ..models.recipe import ExtractedContent, Outcome
from .base import ContentStrategy
from .jsonld import JsonLdStrategy
from .selectors import SelectorStrategy, TitleFallbackStrategy

_LOGGER = logging.getLogger(__name__)


def merge_missing(base: ExtractedContent, partial: ExtractedContent) -> ExtractedContent:
    """Return base with its unset fields filled from partial.

    Fields already set on base are never overwritten.
    """
    updates = {
        name: value
        for name, value in partial.model_dump().items()
        if value is not None and getattr(base, name) is None
    }
    return base.model_copy(update=updates) if updates else base


class RecipeContentExtractor:
    """Extracts recipe text sections from HTML using ordered strategies."""

    def __init__(self, strategies: Sequence[ContentStrategy] | None = None) -> None:
        """Initialize the extractor.

        Args:
            strategies: Tiers to run in order, defaults to JSON-LD, selectors
                and title fallback
        """
        if strategies is None:
            strategies = (JsonLdStrategy(), SelectorStrategy(), TitleFallbackStrategy())
        self.strategies = tuple(strategies)

    def extract(self, html: str) -> Outcome[ExtractedContent]:
        """Extract title, ingredients, instructions and yield from HTML.

        Never raises for bad markup; problems are reported as warnings.

        Args:
            html: Raw HTML document

        Returns:
            Outcome wrapping the merged ExtractedContent
        """
        outcome = Outcome(ExtractedContent())
        if not html or not html.strip():
            outcome.warn("Empty HTML document")
            return outcome

        soup = BeautifulSoup(html, features="html.parser")

        for index, strategy in enumerate(self.strategies):
            # Everything found already, later tiers have nothing to add
            if index > 0 and outcome.value.is_complete:
                _LOGGER.debug("All sections found, skipping %s tier", strategy.name)
                continue

            result = strategy.extract(soup, outcome.value)
            outcome.warnings.extend(result.warnings)
            outcome.value = merge_missing(outcome.value, result.value)

        content = outcome.value
        _LOGGER.info("Extracted content - title: %s, ingredients: %s, instructions: %s, yield: %s",
                     content.title is not None,
                     content.ingredients_text is not None,
                     content.instructions_text is not None,
                     content.recipe_yield_text is not None)
        return outcome


_DEFAULT_EXTRACTOR = RecipeContentExtractor()


def extract_recipe_content_with_warnings(html: str) -> Outcome[ExtractedContent]:
    """Extract recipe content and keep the non-fatal warnings."""
    return _DEFAULT_EXTRACTOR.extract(html)


def extract_recipe_content(html: str) -> ExtractedContent:
    """Extract recipe content from raw HTML.

    Args:
        html: Raw HTML document

    Returns:
        ExtractedContent; sections that could not be found are None
    """
    return _DEFAULT_EXTRACTOR.extract(html).value
