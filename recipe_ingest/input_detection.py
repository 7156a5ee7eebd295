"""Classification of user-entered recipe input."""
from __future__ import annotations

import logging
import re
from typing import Literal
from urllib.parse import urlsplit

from .const import VIDEO_HOSTS

_LOGGER = logging.getLogger(__name__)

InputType = Literal["url", "video", "raw_text", "invalid"]

MIN_INPUT_LENGTH = 3
MIN_LETTER_RATIO = 0.65

_HTTP_RE = re.compile(r'^https?://', re.IGNORECASE)
_DOMAIN_RE = re.compile(
    r'^[^\s/$.?#].[^\s]*\.[a-zA-Z]{2,}(/[\w.-]*)*/?'
    r'(\?[\w%.-]+=[\w%.-]+(&[\w%.-]+=[\w%.-]+)*)?(#\w*)?$'
)


def is_probably_url(text: str) -> bool:
    """Cheap check for URL-shaped input (at most three lines)."""
    trimmed = text.strip()
    if _HTTP_RE.match(trimmed):
        return True
    return bool(_DOMAIN_RE.match(trimmed)) and len(text.split('\n')) <= 3


def _is_video_host(hostname: str) -> bool:
    host = hostname.lower()
    if host.startswith('www.'):
        host = host[4:]
    return any(host == video or host.endswith('.' + video) for video in VIDEO_HOSTS)


def detect_input_type(text: str) -> InputType:
    """Classify input as a recipe URL, a video URL, raw text or invalid.

    Args:
        text: The user's input

    Returns:
        One of 'url', 'video', 'raw_text' or 'invalid'
    """
    trimmed = text.strip()
    if len(trimmed) < MIN_INPUT_LENGTH:
        _LOGGER.debug("Input classified as invalid (too short: %d chars)", len(trimmed))
        return "invalid"

    candidate = trimmed if _HTTP_RE.match(trimmed) else 'https://' + trimmed
    try:
        hostname = urlsplit(candidate).hostname
    except ValueError as e:
        _LOGGER.debug("Input is not a URL: %s", e)
        hostname = None

    if hostname and not any(ch.isspace() for ch in hostname):
        labels = hostname.split('.')
        if len(labels) > 1 and all(labels):
            input_type: InputType = "video" if _is_video_host(hostname) else "url"
            _LOGGER.debug("Input classified as %s (host %s)", input_type, hostname)
            return input_type
        if _HTTP_RE.match(trimmed):
            # Explicit scheme with an undotted host, most likely a dish name
            _LOGGER.debug("Host %r is not a domain, treating input as raw text", hostname)
            return "raw_text"

    letters = sum(1 for ch in trimmed if ch.isascii() and ch.isalpha())
    letter_ratio = letters / len(trimmed)
    if letter_ratio < MIN_LETTER_RATIO:
        _LOGGER.debug("Input classified as invalid (letter ratio %.2f)", letter_ratio)
        return "invalid"

    return "raw_text"
