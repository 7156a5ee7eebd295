"""
Recipe Ingestion Service.

This module orchestrates ingestion of a recipe URL: canonicalize the URL
into its cache key, fetch the page, extract the recipe sections, and bound
them for the downstream model-parsing step.
"""
from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..extractors.content_extractor import extract_recipe_content_with_warnings
from ..extractors.scraper import fetch_html
from ..models.recipe import FetchedRecipe
from ..text_utils import truncate_text_by_lines
from ..url_normalizer import add_default_scheme, create_url_cache_key

_LOGGER = logging.getLogger(__name__)


def fetch_and_extract(url: str, settings: Settings | None = None) -> FetchedRecipe:
    """Fetch a recipe page and extract its text sections.

    This function orchestrates the ingestion process:
    1. Normalizes the URL into its cache key
    2. Fetches the page HTML from the URL as given
    3. Runs the tiered content extraction
    4. Truncates ingredients and instructions to the configured line limits

    Args:
        url: Recipe website URL
        settings: Pipeline settings, defaults to :func:`get_settings`

    Returns:
        FetchedRecipe with the cache key, extracted content and warnings

    Raises:
        InvalidInputError: If the URL is blank or not allowed
        FetchError: If the page could not be fetched
    """
    if settings is None:
        settings = get_settings()

    cache_key = create_url_cache_key(url)
    _LOGGER.debug("Starting recipe ingestion for %s (cache key %s)", url, cache_key)

    # The cache key drops case and query details the site may need
    html = fetch_html(add_default_scheme(url.strip()), settings)
    outcome = extract_recipe_content_with_warnings(html)
    content = outcome.value

    updates = {}
    if content.ingredients_text is not None:
        updates['ingredients_text'] = truncate_text_by_lines(
            content.ingredients_text, settings.max_ingredient_lines)
    if content.instructions_text is not None:
        updates['instructions_text'] = truncate_text_by_lines(
            content.instructions_text, settings.max_instruction_lines)
    if updates:
        content = content.model_copy(update=updates)

    missing = content.missing_fields()
    if missing:
        _LOGGER.warning("Recipe page %s is missing: %s", cache_key, ", ".join(missing))

    _LOGGER.info("Extracted recipe '%s' from %s", content.title, cache_key)
    return FetchedRecipe(
        cache_key=cache_key,
        source_url=url,
        content=content,
        warnings=outcome.warnings,
    )
