"""
URL canonicalization for recipe cache keys.

Different spellings of the same recipe page (tracking parameters, ``www.``,
fragments, default ports, trailing slashes) map to one canonical string.
"""
from __future__ import annotations

import logging
import re
from urllib.parse import parse_qsl, urlencode, urlsplit

from .const import TRACKING_PARAMS
from .exceptions import InvalidInputError

_LOGGER = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r'^https?://', re.IGNORECASE)
_ANY_SCHEME_RE = re.compile(r'^[a-z][a-z0-9+.-]*://', re.IGNORECASE)
_DEFAULT_PORTS = {"https": 443, "http": 80}


def add_default_scheme(url: str) -> str:
    """Prefix https:// onto a URL that carries no scheme."""
    if url.startswith('//'):
        url = 'https:' + url
    if not _ANY_SCHEME_RE.match(url):
        url = 'https://' + url
    return url


def _canonical_host(hostname: str) -> str:
    host = hostname.lower()
    while host.startswith('www.') and len(host) > 4:
        host = host[4:]
    return host


def _canonical_query(query: str) -> str:
    params = [(key, value)
              for key, value in parse_qsl(query, keep_blank_values=True)
              if key not in TRACKING_PARAMS]
    # sorted() is stable, so repeated keys keep their value order
    params.sort(key=lambda pair: pair[0])
    return urlencode(params)


def _canonical_path(path: str) -> str:
    if not path:
        return '/'
    stripped = path.rstrip('/')
    return stripped or '/'


def _fallback_cleanup(url: str) -> str:
    url = re.sub(r'#.*$', '', url)
    if url.endswith('/'):
        url = url[:-1]
    return url.lower()


def normalize_url(url: str) -> str:
    """Map a raw URL string to its canonical cache-key form.

    Args:
        url: URL as entered by the user, with or without a scheme

    Returns:
        The canonical URL string

    Raises:
        InvalidInputError: If url is not a string or is blank

    Examples:
        >>> normalize_url('WWW.Example.com/recipe/?utm_source=x&b=2&a=1#step-3')
        'https://example.com/recipe?a=1&b=2'
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidInputError("URL must be a non-empty string")

    candidate = add_default_scheme(url.strip())
    if not _SCHEME_RE.match(candidate):
        _LOGGER.warning("Unsupported URL scheme, returning cleaned input: %s", candidate)
        return _fallback_cleanup(candidate)

    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
        port = parts.port
        if not hostname or any(ch.isspace() for ch in hostname):
            raise ValueError(f"Invalid hostname in {candidate!r}")
    except ValueError as e:
        _LOGGER.warning("URL normalization failed, returning cleaned input: %s", e)
        return _fallback_cleanup(candidate)

    scheme = parts.scheme.lower()
    host = _canonical_host(hostname)
    if ':' in host:
        host = f"[{host}]"

    netloc = host
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        netloc = f"{host}:{port}"
    if parts.username:
        userinfo = parts.username
        if parts.password:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    path = _canonical_path(parts.path)
    query = _canonical_query(parts.query)

    normalized = f"{scheme}://{netloc}{path}"
    if query:
        normalized = f"{normalized}?{query}"
    return normalized


def are_urls_equivalent(url1: str, url2: str) -> bool:
    """Check whether two URLs share a canonical form.

    Normalization errors count as "not equivalent".
    """
    try:
        return normalize_url(url1) == normalize_url(url2)
    except InvalidInputError:
        return False


def create_url_cache_key(url: str) -> str:
    """Return the cache key for a recipe URL."""
    return normalize_url(url)
