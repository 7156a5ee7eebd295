"""
JSON-LD extraction tier.

Reads schema.org Recipe objects from ``application/ld+json`` script blocks.
The Recipe may be the block itself, an element of a top-level array, or a
node of an ``@graph`` collection.
"""
from __future__ import annotations

import json
import logging
from typing import Any

from bs4 import BeautifulSoup

from ..models.recipe import ExtractedContent, Outcome
from .base import ContentStrategy

_LOGGER = logging.getLogger(__name__)


def is_recipe(item: Any) -> bool:
    """Check if a JSON-LD item represents a Recipe."""
    if not isinstance(item, dict):
        return False
    item_type = item.get('@type')
    if isinstance(item_type, str):
        return item_type == 'Recipe'
    if isinstance(item_type, list):
        return 'Recipe' in item_type
    return False


def find_recipe(data: Any) -> dict[str, Any] | None:
    """Locate a Recipe object in a decoded JSON-LD payload."""
    candidates = data if isinstance(data, list) else [data]
    for item in candidates:
        if is_recipe(item):
            return item
        if isinstance(item, dict):
            graph = item.get('@graph')
            if isinstance(graph, list):
                found = next((node for node in graph if is_recipe(node)), None)
                if found:
                    return found
    return None


def _clean(value: Any) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    return None


def flatten_instructions(value: Any) -> list[str]:
    """Flatten recipeInstructions into step strings, in document order.

    Handles a plain string, a list of strings, HowToStep objects and
    HowToSection objects nesting further steps.
    """
    if isinstance(value, str):
        text = value.strip()
        return [text] if text else []

    if isinstance(value, list):
        steps = []
        for item in value:
            steps.extend(flatten_instructions(item))
        return steps

    if isinstance(value, dict):
        if 'itemListElement' in value:
            return flatten_instructions(value['itemListElement'])
        text = _clean(value.get('text'))
        return [text] if text else []

    return []


def _ingredients_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, list):
        lines = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return '\n'.join(lines) or None
    return None


def _yield_text(value: Any) -> str | None:
    if isinstance(value, list):
        parts = [str(item).strip() for item in value
                 if isinstance(item, (str, int, float)) and str(item).strip()]
        return ', '.join(parts) or None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return _clean(value)


def content_from_recipe(recipe: dict[str, Any]) -> ExtractedContent:
    """Map a schema.org Recipe object onto ExtractedContent."""
    steps = flatten_instructions(recipe.get('recipeInstructions'))
    return ExtractedContent(
        title=_clean(recipe.get('name')),
        ingredients_text=_ingredients_text(recipe.get('recipeIngredient')),
        instructions_text='\n'.join(steps) or None,
        recipe_yield_text=_yield_text(recipe.get('recipeYield')),
        prep_time=_clean(recipe.get('prepTime')),
        cook_time=_clean(recipe.get('cookTime')),
        total_time=_clean(recipe.get('totalTime')),
        description=_clean(recipe.get('description')),
    )


class JsonLdStrategy(ContentStrategy):
    """Extracts recipe sections from structured schema.org metadata."""

    name = "json-ld"

    def extract(self, soup: BeautifulSoup, current: ExtractedContent) -> Outcome[ExtractedContent]:
        outcome = Outcome(ExtractedContent())
        json_lds = soup.find_all('script', type='application/ld+json')
        _LOGGER.debug("Found %d JSON-LD scripts", len(json_lds))

        for idx, json_ld in enumerate(json_lds):
            raw = json_ld.string or json_ld.get_text()
            if not raw or not raw.strip():
                continue

            try:
                data = json.loads(raw)
            except json.JSONDecodeError as e:
                _LOGGER.warning("Ignoring malformed JSON-LD script %d: %s", idx, e)
                outcome.warn(f"Malformed JSON-LD block {idx}: {e}")
                continue

            recipe = find_recipe(data)
            if recipe:
                _LOGGER.debug("Found recipe data in JSON-LD script %d", idx)
                outcome.value = content_from_recipe(recipe)
                break

        return outcome
