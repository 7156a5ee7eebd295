"""
Recipe ingestion and normalization pipeline.

Turns user-supplied recipe input (URLs, raw text, model output) into
canonical structured data: URL cache keys, extracted page sections,
parsed ingredient lines, coerced ingredient groups and reconciled edits.
"""
from __future__ import annotations

from .config import Settings, get_settings, load_settings, setup_logging
from .exceptions import FetchError, InvalidInputError, RecipeIngestError
from .extractors import (
    RecipeContentExtractor,
    extract_recipe_content,
    extract_recipe_content_with_warnings,
    fetch_html,
)
from .input_detection import detect_input_type, is_probably_url
from .models import (
    AppliedChange,
    DisplayIngredient,
    ExtractedContent,
    FetchedRecipe,
    IngredientDisplayState,
    IngredientGroup,
    Outcome,
    ParsedDisplayName,
    ParsedIngredient,
    StructuredIngredient,
    Substitution,
)
from .parsers import (
    DEFAULT_UNIT_TABLE,
    IngredientParser,
    UnitTable,
    format_amount_number,
    parse_amount_string,
    parse_ingredient_string,
    parse_servings_value,
)
from .services import (
    coerce_to_ingredient_groups,
    coerce_to_structured_ingredients,
    fetch_and_extract,
    format_ingredient_display_name,
    get_scaled_yield_text,
    ingredients_to_groups,
    parse_ingredient_display_name,
    reconcile_ingredients,
    resolve_original_name,
    scale_ingredient,
)
from .text_utils import preprocess_raw_recipe_text, strip_markdown_fences, truncate_text_by_lines
from .url_normalizer import are_urls_equivalent, create_url_cache_key, normalize_url

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_UNIT_TABLE",
    "AppliedChange",
    "DisplayIngredient",
    "ExtractedContent",
    "FetchError",
    "FetchedRecipe",
    "IngredientDisplayState",
    "IngredientGroup",
    "IngredientParser",
    "InvalidInputError",
    "Outcome",
    "ParsedDisplayName",
    "ParsedIngredient",
    "RecipeContentExtractor",
    "RecipeIngestError",
    "Settings",
    "StructuredIngredient",
    "Substitution",
    "UnitTable",
    "are_urls_equivalent",
    "coerce_to_ingredient_groups",
    "coerce_to_structured_ingredients",
    "create_url_cache_key",
    "detect_input_type",
    "extract_recipe_content",
    "extract_recipe_content_with_warnings",
    "fetch_and_extract",
    "fetch_html",
    "format_amount_number",
    "format_ingredient_display_name",
    "get_scaled_yield_text",
    "get_settings",
    "ingredients_to_groups",
    "is_probably_url",
    "load_settings",
    "normalize_url",
    "parse_amount_string",
    "parse_ingredient_display_name",
    "parse_ingredient_string",
    "parse_servings_value",
    "preprocess_raw_recipe_text",
    "reconcile_ingredients",
    "resolve_original_name",
    "scale_ingredient",
    "setup_logging",
    "strip_markdown_fences",
    "truncate_text_by_lines",
]
