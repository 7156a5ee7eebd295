"""Ingredient and yield scaling."""
from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from ..models.recipe import StructuredIngredient
from ..parsers.amounts import format_amount_number, parse_amount_string, parse_servings_value

_LOGGER = logging.getLogger(__name__)


def _is_valid_factor(factor: float) -> bool:
    return isinstance(factor, (int, float)) and math.isfinite(factor) and factor > 0


def _format_number(value: float) -> str:
    """Format a number without a trailing '.0'."""
    if value == int(value):
        return str(int(value))
    return str(value)


def scale_ingredient(ingredient: StructuredIngredient, factor: float) -> StructuredIngredient:
    """Return a copy of the ingredient with its amount multiplied by factor.

    The ingredient is returned as-is when the factor is 1 or invalid, or
    when its amount has no numeric value ("to taste"). The unit is kept.
    """
    if not _is_valid_factor(factor) or factor == 1:
        return ingredient

    original = parse_amount_string(ingredient.amount)
    if original is None or original <= 0:
        return ingredient

    scaled = format_amount_number(original * factor)
    _LOGGER.debug("Scaled %s: %s -> %s", ingredient.name, ingredient.amount, scaled)
    return ingredient.model_copy(update={'amount': scaled})


def scale_ingredients(
    ingredients: Iterable[StructuredIngredient],
    factor: float
) -> list[StructuredIngredient]:
    """Scale every ingredient by the same factor."""
    return [scale_ingredient(ingredient, factor) for ingredient in ingredients]


def scale_to_servings(
    ingredients: Iterable[StructuredIngredient],
    yield_text: str | None,
    target_servings: float
) -> list[StructuredIngredient]:
    """Scale ingredients from the servings in yield_text to target_servings.

    Args:
        ingredients: Ingredients to scale
        yield_text: Recipe yield, e.g. '4 servings' or 'Serves 6-8'
        target_servings: Target number of servings (can be fractional)

    Returns:
        Scaled ingredients, or the input unchanged when either count is unusable
    """
    ingredients = list(ingredients)
    original_servings = parse_servings_value(yield_text)

    if original_servings is None or original_servings <= 0:
        _LOGGER.warning("Cannot scale recipe: original servings not available or invalid")
        return ingredients

    if target_servings <= 0:
        _LOGGER.warning("Cannot scale recipe: target servings must be positive")
        return ingredients

    factor = target_servings / original_servings
    _LOGGER.info("Scaling ingredients from %s to %s servings (factor: %.2f)",
                 original_servings, target_servings, factor)
    return scale_ingredients(ingredients, factor)


def get_scaled_yield_text(yield_text: str | None, factor: float) -> str:
    """Describe the yield after scaling.

    Examples:
        >>> get_scaled_yield_text('4 servings', 2)
        '~8 (now 2x of 4 servings)'
        >>> get_scaled_yield_text('1 loaf', 1)
        '1 loaf'
    """
    if not _is_valid_factor(factor) or factor == 1:
        return yield_text or "Original quantity"

    original_display = yield_text or "original quantity"
    base_servings = parse_servings_value(yield_text)

    if base_servings and base_servings > 0:
        scaled = math.floor(base_servings * factor * 10 + 0.5) / 10
        shown = f"~{_format_number(scaled)}" if scaled > 0 else "a small amount"
        return f"{shown} (now {_format_number(factor)}x of {original_display})"

    return f"{_format_number(factor)}x of the {original_display}"
