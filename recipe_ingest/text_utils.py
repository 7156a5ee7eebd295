"""Text helpers used around the model-parsing step."""
from __future__ import annotations

import logging
import re

from .const import DEFAULT_TRUNCATION_MARKER

_LOGGER = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r'^```(?:json)?', re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r'```$')


def truncate_text_by_lines(
    text: str | None,
    max_lines: int,
    marker: str = DEFAULT_TRUNCATION_MARKER
) -> str:
    """Bound text to a number of lines, appending a marker when cut.

    Text within the bound is returned unchanged, trailing blank lines included.

    Args:
        text: Text to bound (None or empty gives an empty string)
        max_lines: Maximum number of lines to keep
        marker: Text appended after a blank line when truncating

    Returns:
        The original text, or its first ``max_lines`` lines plus the marker

    Examples:
        >>> truncate_text_by_lines('a\\nb\\nc', 5)
        'a\\nb\\nc'
        >>> truncate_text_by_lines('a\\nb\\nc', 2, marker='[cut]')
        'a\\nb\\n\\n[cut]'
    """
    if not text:
        return ''

    max_lines = max(max_lines, 0)
    lines = text.split('\n')
    if len(lines) <= max_lines:
        return text

    _LOGGER.info("Truncating text from %d lines to %d lines",
                 len(lines), max_lines)
    return '\n'.join(lines[:max_lines]) + '\n\n' + marker


def preprocess_raw_recipe_text(text: str) -> str:
    """Trim, normalize newlines and collapse runs of blank lines."""
    processed = text.strip()
    processed = processed.replace('\r\n', '\n').replace('\r', '\n')
    return re.sub(r'\n{3,}', '\n\n', processed)


def strip_markdown_fences(text: str) -> str:
    """Remove a ```json / ``` fence wrapping model output.

    Text that is not fully fenced is returned as is so valid JSON is never
    altered.
    """
    if text.startswith('```') and text.endswith('```') and len(text) >= 6:
        _LOGGER.debug("Stripping markdown fences from model output")
        stripped = _FENCE_OPEN_RE.sub('', text, count=1)
        return _FENCE_CLOSE_RE.sub('', stripped, count=1).strip()
    return text
