"""Models package."""
from .recipe import (
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

__all__ = [
    "AppliedChange",
    "DisplayIngredient",
    "ExtractedContent",
    "FetchedRecipe",
    "IngredientDisplayState",
    "IngredientGroup",
    "Outcome",
    "ParsedDisplayName",
    "ParsedIngredient",
    "StructuredIngredient",
    "Substitution",
]
