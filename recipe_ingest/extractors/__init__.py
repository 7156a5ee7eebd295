"""Extractors package."""
from .base import ContentStrategy
from .content_extractor import (
    RecipeContentExtractor,
    extract_recipe_content,
    extract_recipe_content_with_warnings,
    merge_missing,
)
from .jsonld import JsonLdStrategy
from .scraper import fetch_html
from .selectors import SelectorStrategy, TitleFallbackStrategy

__all__ = [
    "ContentStrategy",
    "JsonLdStrategy",
    "RecipeContentExtractor",
    "SelectorStrategy",
    "TitleFallbackStrategy",
    "extract_recipe_content",
    "extract_recipe_content_with_warnings",
    "fetch_html",
    "merge_missing",
]
