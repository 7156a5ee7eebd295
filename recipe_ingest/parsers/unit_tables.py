"""Unit and descriptor tables used by the ingredient parser."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# Raw unit token -> standardized unit
STANDARD_UNITS = {
    # Volume
    "cups": "cup",
    "cup": "cup",
    "c": "cup",
    "tablespoons": "tbsp",
    "tablespoon": "tbsp",
    "tbsp": "tbsp",
    "tbs": "tbsp",
    "T": "tbsp",
    "teaspoons": "tsp",
    "teaspoon": "tsp",
    "tsp": "tsp",
    "t": "tsp",
    "fluid ounces": "fl oz",
    "fluid ounce": "fl oz",
    "fl oz": "fl oz",
    "fl. oz": "fl oz",
    "pints": "pint",
    "pint": "pint",
    "pt": "pint",
    "quarts": "quart",
    "quart": "quart",
    "qt": "quart",
    "gallons": "gallon",
    "gallon": "gallon",
    "gal": "gallon",
    "liters": "L",
    "liter": "L",
    "litres": "L",
    "litre": "L",
    "l": "L",
    "L": "L",
    "milliliters": "mL",
    "milliliter": "mL",
    "millilitres": "mL",
    "millilitre": "mL",
    "ml": "mL",
    "mL": "mL",
    # Weight
    "ounces": "oz",
    "ounce": "oz",
    "oz": "oz",
    "pounds": "lb",
    "pound": "lb",
    "lbs": "lb",
    "lb": "lb",
    "grams": "g",
    "gram": "g",
    "g": "g",
    "kilograms": "kg",
    "kilogram": "kg",
    "kg": "kg",
    # Count units
    "cloves": "clove",
    "clove": "clove",
    "heads": "head",
    "head": "head",
    "bunches": "bunch",
    "bunch": "bunch",
    "pieces": "piece",
    "piece": "piece",
    "slices": "slice",
    "slice": "slice",
    "stalks": "stalk",
    "stalk": "stalk",
    "sprigs": "sprig",
    "sprig": "sprig",
    "leaves": "leaf",
    "leaf": "leaf",
    "cans": "can",
    "can": "can",
    "packages": "package",
    "package": "package",
    "pkg": "package",
    "bottles": "bottle",
    "bottle": "bottle",
    "jars": "jar",
    "jar": "jar",
    "containers": "container",
    "container": "container",
    "pinches": "pinch",
    "pinch": "pinch",
    "dashes": "dash",
    "dash": "dash",
}

# Size, texture and state words that look like units but belong to the name
DESCRIPTORS = frozenset({
    "small", "medium", "large", "extra large", "jumbo",
    "thin", "thick", "fine", "coarse", "rough",
    "fresh", "dried", "frozen", "canned", "whole",
    "half", "quarter", "ripe", "unripe", "green", "red",
    "diced", "chopped", "minced", "sliced", "ground",
})


@dataclass(frozen=True)
class UnitTable:
    """Immutable, versioned unit vocabulary.

    Attributes:
        units: Raw token -> standardized unit. Lookups try the exact token
            first, so case-sensitive keys like 'T' and 't' stay distinct.
        descriptors: Lower-case words that are matched like units but are
            returned to the ingredient name
        version: Identifier of this table revision
    """

    units: Mapping[str, str]
    descriptors: frozenset[str] = frozenset()
    version: str = "1"
    _pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "units", MappingProxyType(dict(self.units)))
        object.__setattr__(self, "descriptors",
                           frozenset(d.lower() for d in self.descriptors))
        tokens = {*self.units, *self.descriptors}
        # Longest first so 'fl oz' wins over 'fl', 'cups' over 'c'
        alternation = '|'.join(
            re.escape(token) for token in sorted(tokens, key=len, reverse=True))
        pattern = rf'^({alternation})\.?(?=\s|$)' if tokens else r'(?!)'
        object.__setattr__(self, "_pattern", re.compile(pattern, re.IGNORECASE))

    def match(self, text: str) -> re.Match | None:
        """Match a unit or descriptor token at the start of text."""
        return self._pattern.match(text)

    def standardize(self, token: str) -> str | None:
        """Return the standardized unit for a raw token, or None."""
        if token in self.units:
            return self.units[token]
        lowered = token.lower()
        if lowered in self.units:
            return self.units[lowered]
        return None

    def is_descriptor(self, token: str) -> bool:
        return token.lower() in self.descriptors


DEFAULT_UNIT_TABLE = UnitTable(units=STANDARD_UNITS, descriptors=DESCRIPTORS, version="1")
