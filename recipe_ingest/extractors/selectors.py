"""
CSS-selector extraction tiers.

Heuristics for pages without usable structured metadata, covering the
markup of common recipe plugins (WP Recipe Maker, Tasty Recipes,
EasyRecipe) and generic class names.
"""
from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, NavigableString, Tag

from ..models.recipe import ExtractedContent, Outcome
from .base import ContentStrategy

_LOGGER = logging.getLogger(__name__)

INGREDIENT_SELECTORS = (
    '[itemprop="recipeIngredient"]',
    '.wprm-recipe-ingredient',
    '.tasty-recipes-ingredients li',
    '.easyrecipe-ingredient',
    '.recipe-ingredients li',
    '.ingredients li',
    '.ingredient-list li',
)

INSTRUCTION_ITEM_SELECTORS = (
    '.wprm-recipe-instructions li', '.wprm-recipe-instructions p',
    '.tasty-recipes-instructions li', '.tasty-recipes-instructions p',
    '.easyrecipe-instructions li', '.easyrecipe-instructions p',
    '.recipe-instructions li', '.recipe-instructions p',
    '.instructions li', '.instructions p',
    '.direction-list li', '.direction-list p',
    '[itemprop="recipeInstructions"] li', '[itemprop="recipeInstructions"] p',
    '[itemprop="recipeInstructions"]',
)

INSTRUCTION_BLOCK_SELECTORS = (
    '.wprm-recipe-instructions',
    '.tasty-recipes-instructions',
    '.easyrecipe-instructions-content',
    '.recipe-instructions',
    '.instructions',
    '.directions',
)

YIELD_SELECTORS = (
    '[itemprop="recipeYield"]',
    '.wprm-recipe-servings-with-unit',
    '.wprm-recipe-servings',
    '.tasty-recipes-yield',
    '.recipe-yield',
    '.recipe-servings',
    '.yield',
    '.servings',
)

YIELD_KEYWORD_RE = re.compile(r'\b(servings|yield|makes)\s*:', re.IGNORECASE)

_LEAF_TAGS = ('li', 'p')
_SKIP_PARENTS = ('script', 'style', 'noscript')


def _collapse(text: str) -> str:
    return ' '.join(text.split())


def _lines(text: str) -> list[str]:
    return [line for line in (_collapse(raw) for raw in text.splitlines()) if line]


def _join(items: dict[str, None]) -> str | None:
    return '\n'.join(items) or None


def extract_ingredients(soup: BeautifulSoup) -> str | None:
    """Collect de-duplicated ingredient lines from known containers."""
    collected: dict[str, None] = {}
    for selector in INGREDIENT_SELECTORS:
        for element in soup.select(selector):
            text = _collapse(element.get_text(' '))
            if text:
                collected.setdefault(text)
    return _join(collected)


def _is_container(element: Tag) -> bool:
    has_children = element.find(True) is not None
    return has_children and element.name not in _LEAF_TAGS


def extract_instructions(soup: BeautifulSoup) -> str | None:
    """Collect instruction steps, item selectors first, then whole blocks."""
    collected: dict[str, None] = {}

    for selector in INSTRUCTION_ITEM_SELECTORS:
        for element in soup.select(selector):
            if _is_container(element):
                for line in _lines(element.get_text()):
                    collected.setdefault(line)
            else:
                text = _collapse(element.get_text(' '))
                if text:
                    collected.setdefault(text)

    if not collected:
        for selector in INSTRUCTION_BLOCK_SELECTORS:
            for element in soup.select(selector):
                for line in _lines(element.get_text()):
                    collected.setdefault(line)
            if collected:
                break

    return _join(collected)


def _keyword_line(text_node: NavigableString) -> str | None:
    """Return the first line around a yield keyword that carries a value."""
    element = text_node.parent
    for _ in range(3):
        if element is None:
            break
        for line in _lines(element.get_text(' ')):
            keyword = YIELD_KEYWORD_RE.search(line)
            if keyword and line[keyword.end():].strip():
                return line
        element = element.parent
    return None


def extract_yield(soup: BeautifulSoup) -> str | None:
    """Find yield text via yield selectors, then "Servings:"-style labels."""
    for selector in YIELD_SELECTORS:
        for element in soup.select(selector):
            text = _collapse(element.get_text(' '))
            if text:
                return text

    for text_node in soup.find_all(string=YIELD_KEYWORD_RE):
        if text_node.parent is not None and text_node.parent.name in _SKIP_PARENTS:
            continue
        line = _keyword_line(text_node)
        if line:
            return line
    return None


class SelectorStrategy(ContentStrategy):
    """Fills missing ingredients, instructions and yield from CSS selectors."""

    name = "selectors"

    def extract(self, soup: BeautifulSoup, current: ExtractedContent) -> Outcome[ExtractedContent]:
        partial = ExtractedContent()
        if current.ingredients_text is None:
            partial.ingredients_text = extract_ingredients(soup)
        if current.instructions_text is None:
            partial.instructions_text = extract_instructions(soup)
        if current.recipe_yield_text is None:
            partial.recipe_yield_text = extract_yield(soup)

        _LOGGER.debug("Selector tier found ingredients=%s instructions=%s yield=%s",
                      partial.ingredients_text is not None,
                      partial.instructions_text is not None,
                      partial.recipe_yield_text is not None)
        return Outcome(partial)


class TitleFallbackStrategy(ContentStrategy):
    """Uses the page <title>, then the first <h1>, as the recipe title."""

    name = "title"

    def extract(self, soup: BeautifulSoup, current: ExtractedContent) -> Outcome[ExtractedContent]:
        if current.title is not None:
            return Outcome(ExtractedContent())

        for tag_name in ('title', 'h1'):
            element = soup.find(tag_name)
            if element:
                title = _collapse(element.get_text(' '))
                if title:
                    return Outcome(ExtractedContent(title=title))
        return Outcome(ExtractedContent())
