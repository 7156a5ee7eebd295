"""
Amount and servings parsing.

Converts amount text ("1 1/2", "½", "2-3", "~4") to numbers and back to
cook-friendly fraction text.
"""
from __future__ import annotations

import logging
import math
import re
from fractions import Fraction

_LOGGER = logging.getLogger(__name__)

UNICODE_FRACTIONS = {
    '¼': 0.25, '½': 0.5, '¾': 0.75,
    '⅐': 1 / 7, '⅑': 1 / 9, '⅒': 0.1,
    '⅓': 1 / 3, '⅔': 2 / 3,
    '⅕': 0.2, '⅖': 0.4, '⅗': 0.6, '⅘': 0.8,
    '⅙': 1 / 6, '⅚': 5 / 6,
    '⅛': 0.125, '⅜': 0.375, '⅝': 0.625, '⅞': 0.875,
}

# Decimal part -> display fraction
COMMON_FRACTIONS = {
    0.125: '1/8',
    0.25: '1/4',
    1 / 3: '1/3',
    0.5: '1/2',
    2 / 3: '2/3',
    0.75: '3/4',
    0.875: '7/8',
}
FRACTION_PRECISION = 0.01
MAX_DENOMINATOR = 16

_APPROX_PREFIXES = ('~', 'approx.', 'approx ', 'about ', 'approximately ')
_SERVINGS_PREFIXES = ('makes ', 'about ', 'approx ', 'approx.', '~')

_MIXED_UNICODE_RE = re.compile(
    rf"^(\d+)\s*([{''.join(UNICODE_FRACTIONS)}])$")
_MIXED_RE = re.compile(r'^(\d+)\s+(\d+/\d+)$')
_FRACTION_RE = re.compile(r'^(\d+/\d+)$')
_RANGE_RE = re.compile(r'^(\d+(?:\.\d+)?)\s*(?:-|–|to)\s*\d+', re.IGNORECASE)
_LEADING_NUMBER_RE = re.compile(r'^(\d+(?:\.\d+)?|\.\d+)')
_SERVINGS_RE = re.compile(
    r'(\d+(?:\.\d+)?)(?:\s*(?:-|–|to)\s*(\d+(?:\.\d+)?))?', re.IGNORECASE)


def _parse_fraction(fraction_str: str) -> float | None:
    """Parse a fraction string like '1/2', None for a zero denominator."""
    numerator, _, denominator = fraction_str.partition('/')
    try:
        return float(numerator) / float(denominator)
    except (ValueError, ZeroDivisionError) as e:
        _LOGGER.debug("Failed to parse fraction '%s': %s", fraction_str, e)
        return None


def _strip_prefix(text: str, prefixes: tuple[str, ...]) -> str:
    lowered = text.lower()
    for prefix in prefixes:
        if lowered.startswith(prefix):
            return text[len(prefix):].strip()
    return text


def parse_amount_string(amount: str | None) -> float | None:
    """Parse amount text into a number.

    Args:
        amount: Amount text such as '2', '1 1/2', '½', '1-2' or '~3'

    Returns:
        The numeric value (first value of a range), or None for text such as
        'to taste'

    Examples:
        >>> parse_amount_string('1 1/2')
        1.5
        >>> parse_amount_string('2-3')
        2.0
    """
    if not isinstance(amount, str):
        return None

    text = _strip_prefix(amount.strip(), _APPROX_PREFIXES)
    if not text:
        return None

    if text in UNICODE_FRACTIONS:
        return UNICODE_FRACTIONS[text]

    match = _MIXED_UNICODE_RE.match(text)
    if match:
        return float(match.group(1)) + UNICODE_FRACTIONS[match.group(2)]

    match = _MIXED_RE.match(text)
    if match:
        fraction = _parse_fraction(match.group(2))
        if fraction is not None:
            return float(match.group(1)) + fraction

    match = _FRACTION_RE.match(text)
    if match:
        return _parse_fraction(match.group(1))

    match = _RANGE_RE.match(text)
    if match:
        return float(match.group(1))

    match = _LEADING_NUMBER_RE.match(text)
    if match:
        return float(match.group(1))

    return None


def _fraction_text(decimal_part: float) -> str:
    for value, text in COMMON_FRACTIONS.items():
        if abs(decimal_part - value) < FRACTION_PRECISION:
            return text

    fraction = Fraction(decimal_part).limit_denominator(MAX_DENOMINATOR)
    if fraction.numerator and abs(float(fraction) - decimal_part) < 1e-6:
        return f"{fraction.numerator}/{fraction.denominator}"

    # No reasonable fraction, fall back to two decimals without the leading zero
    return f"{decimal_part:.2f}".rstrip('0').rstrip('.').lstrip('0')


def format_amount_number(value: float | None) -> str | None:
    """Format a number as whole part plus a kitchen fraction.

    Examples:
        >>> format_amount_number(1.5)
        '1 1/2'
        >>> format_amount_number(0.333)
        '1/3'
        >>> format_amount_number(2.0)
        '2'
    """
    if value is None or value != value or value <= 0:
        return None

    whole = int(value)
    decimal_part = value - whole

    fraction = ''
    if decimal_part > FRACTION_PRECISION:
        if decimal_part > 1 - FRACTION_PRECISION:
            whole += 1
        else:
            fraction = _fraction_text(decimal_part)

    parts = [str(whole)] if whole > 0 else []
    if fraction:
        parts.append(fraction)
    return ' '.join(parts) or None


def parse_servings_value(yield_text: str | None) -> float | None:
    """Extract a servings count from yield text.

    Ranges are averaged and rounded ("6-8 servings" -> 7).
    """
    if not isinstance(yield_text, str):
        return None

    text = _strip_prefix(yield_text.strip().lower(), _SERVINGS_PREFIXES)
    if not text:
        return None

    match = _SERVINGS_RE.search(text)
    if not match:
        return None

    first = float(match.group(1))
    if match.group(2):
        return float(math.floor((first + float(match.group(2))) / 2 + 0.5))
    return first
