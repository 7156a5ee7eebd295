"""
Ingredient String Parser.

This module decomposes a free-text ingredient line such as
"1 1/2 cups flour, sifted" into amount, unit, name and preparation.
"""
from __future__ import annotations

import logging
import re

from ..const import VAGUE_AMOUNT_PLACEHOLDER
from ..models.recipe import ParsedIngredient
from .unit_tables import DEFAULT_UNIT_TABLE, UnitTable

_LOGGER = logging.getLogger(__name__)

UNICODE_FRACTION_CHARS = '¼½¾⅐⅑⅒⅓⅔⅕⅖⅗⅘⅙⅚⅛⅜⅝⅞'

# A bare number must not swallow the start of a range ("1 to 2", "1 - 2")
_NOT_RANGE = r'(?!(?:to\s+|[-–]\s*)\d)'

# End of an amount: all following whitespace, or the end of the line
_AMOUNT_END = r'(?:\s+(?!\s)|$)'

# Tried in order, first match wins
AMOUNT_PATTERNS = (
    # Mixed fractions: "1 1/2"
    re.compile(rf'^(\d+\s+\d+/\d+){_AMOUNT_END}'),
    # Simple fractions: "1/2"
    re.compile(rf'^(\d+/\d+){_AMOUNT_END}'),
    # Unicode fractions: "½", "1½", "1 ½"
    re.compile(rf'^(\d*\s*[{UNICODE_FRACTION_CHARS}]){_AMOUNT_END}'),
    # Decimals: "1.5", ".25"
    re.compile(rf'^(\d*\.\d+){_AMOUNT_END}{_NOT_RANGE}'),
    # Whole numbers: "2"
    re.compile(rf'^(\d+){_AMOUNT_END}{_NOT_RANGE}'),
    # Ranges: "1-2", "1 - 2", "2 to 3"
    re.compile(rf'^(\d+(?:\.\d+)?\s*[-–]\s*\d+(?:\.\d+)?|\d+(?:\.\d+)?\s+to\s+\d+(?:\.\d+)?){_AMOUNT_END}',
               re.IGNORECASE),
    # Approximate amounts: "about 1", "approximately 2.5"
    re.compile(rf'^((?:about|approximately)\s+\d+(?:\.\d+)?){_AMOUNT_END}', re.IGNORECASE),
)

# Present but uncountable quantities
VAGUE_QUANTITY_PATTERNS = (
    re.compile(r'^(a\s+pinch\s+of)\s+', re.IGNORECASE),
    re.compile(r'^(a\s+dash\s+of)\s+', re.IGNORECASE),
    re.compile(r'^(a\s+splash\s+of)\s+', re.IGNORECASE),
    re.compile(r'^(a\s+handful\s+of)\s+', re.IGNORECASE),
    re.compile(r'^(some)\s+', re.IGNORECASE),
)


class IngredientParser:
    """Parses ingredient lines against an injected unit table."""

    def __init__(self, unit_table: UnitTable = DEFAULT_UNIT_TABLE) -> None:
        self.unit_table = unit_table

    def _match_amount(self, text: str) -> tuple[str | None, str]:
        """Split a leading amount off text.

        Returns:
            Tuple of (amount or None, remaining text)
        """
        for pattern in AMOUNT_PATTERNS:
            match = pattern.match(text)
            if match:
                amount = ' '.join(match.group(1).split())
                return amount, text[match.end():].strip()

        for pattern in VAGUE_QUANTITY_PATTERNS:
            match = pattern.match(text)
            if match:
                _LOGGER.debug("Vague quantity '%s' normalized to %s",
                              match.group(1), VAGUE_AMOUNT_PLACEHOLDER)
                return VAGUE_AMOUNT_PLACEHOLDER, text[match.end():].strip()

        return None, text

    def _match_unit(self, text: str) -> tuple[str | None, str]:
        """Split a leading unit off text, leaving descriptors in place.

        Returns:
            Tuple of (standardized unit or None, remaining text)
        """
        match = self.unit_table.match(text)
        if not match:
            return None, text

        token = match.group(1)
        if self.unit_table.is_descriptor(token):
            # "2 large eggs": 'large' stays part of the name
            return None, text

        remaining = text[match.end():].strip()
        if not remaining:
            # "2 cloves" has no name left, so the token is the name
            return None, text
        return self.unit_table.standardize(token), remaining

    def parse(self, line: str) -> ParsedIngredient:
        """Parse a single ingredient line.

        Args:
            line: Raw ingredient text (e.g., '2 tablespoons olive oil, divided')

        Returns:
            ParsedIngredient with amount, unit, name and preparation. Lines
            without an amount keep the whole trimmed line as the name.
        """
        original = line.strip()

        main_part, comma, prep_part = original.partition(',')
        preparation = prep_part.strip() if comma else None

        amount, remaining = self._match_amount(main_part.strip())
        if amount is None:
            return ParsedIngredient(name=original, amount=None, unit=None,
                                    preparation=preparation)

        unit, remaining = self._match_unit(remaining)
        name = remaining.strip() or original

        return ParsedIngredient(name=name, amount=amount, unit=unit,
                                preparation=preparation)


_DEFAULT_PARSER = IngredientParser()


def parse_ingredient_string(line: str) -> ParsedIngredient:
    """Parse an ingredient line with the default unit table.

    Examples:
        >>> parse_ingredient_string('1 1/2 cups flour, sifted')
        ParsedIngredient(name='flour', amount='1 1/2', unit='cup', preparation='sifted')
    """
    return _DEFAULT_PARSER.parse(line)
