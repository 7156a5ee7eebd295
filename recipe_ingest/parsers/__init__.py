"""Parsers package."""
from .amounts import format_amount_number, parse_amount_string, parse_servings_value
from .ingredient_parser import IngredientParser, parse_ingredient_string
from .unit_tables import DEFAULT_UNIT_TABLE, UnitTable

__all__ = [
    "DEFAULT_UNIT_TABLE",
    "IngredientParser",
    "UnitTable",
    "format_amount_number",
    "parse_amount_string",
    "parse_ingredient_string",
    "parse_servings_value",
]
