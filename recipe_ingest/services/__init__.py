"""Services package."""
from .applied_changes import (
    format_ingredient_display_name,
    parse_ingredient_display_name,
    reconcile_ingredients,
    resolve_original_name,
)
from .coercion import (
    coerce_ingredient_groups_with_warnings,
    coerce_structured_ingredients_with_warnings,
    coerce_to_ingredient_groups,
    coerce_to_structured_ingredients,
    ingredients_to_groups,
)
from .recipe_service import fetch_and_extract
from .scaling import get_scaled_yield_text, scale_ingredient, scale_ingredients, scale_to_servings

__all__ = [
    "coerce_ingredient_groups_with_warnings",
    "coerce_structured_ingredients_with_warnings",
    "coerce_to_ingredient_groups",
    "coerce_to_structured_ingredients",
    "fetch_and_extract",
    "format_ingredient_display_name",
    "get_scaled_yield_text",
    "ingredients_to_groups",
    "parse_ingredient_display_name",
    "reconcile_ingredients",
    "resolve_original_name",
    "scale_ingredient",
    "scale_ingredients",
    "scale_to_servings",
]
