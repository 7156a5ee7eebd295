"""
Web fetching utilities for recipe pages.

This module fetches raw HTML with a browser-emulating session, retrying
transient failures and falling back to ScraperAPI when a site blocks
direct requests.
"""
from __future__ import annotations

import ipaddress
import logging
import time
from urllib.parse import urlsplit

import cloudscraper
import requests

from ..config import Settings, get_settings
from ..const import ALLOWED_CONTENT_TYPES, SCRAPERAPI_ENDPOINT
from ..exceptions import FetchError, InvalidInputError

_LOGGER = logging.getLogger(__name__)


def validate_url(url: str) -> None:
    """Allow only http(s) URLs that do not target internal addresses.

    Raises:
        InvalidInputError: If the scheme or host is not allowed
    """
    parsed = urlsplit(url)
    if parsed.scheme not in ('http', 'https'):
        raise InvalidInputError("Only HTTP/HTTPS protocols allowed")
    if not parsed.hostname:
        raise InvalidInputError(f"URL has no host: {url}")

    try:
        ip = ipaddress.ip_address(parsed.hostname)
    except ValueError:
        return  # Hostname is not an IP

    if ip.is_private or ip.is_loopback or ip.is_link_local:
        raise InvalidInputError("Cannot access internal IP addresses")


def _read_limited(response: requests.Response, url: str, max_size: int) -> bytes:
    """Validate headers and download the body with a size limit."""
    content_type = response.headers.get('content-type', '').lower()
    if not any(allowed in content_type for allowed in ALLOWED_CONTENT_TYPES):
        _LOGGER.warning("Invalid content type for %s: %s", url, content_type)
        raise ValueError(
            f"Invalid content type: {content_type}. Only HTML/XHTML content is allowed.")

    content_length = response.headers.get('content-length')
    if content_length and int(content_length) > max_size:
        _LOGGER.warning("Response too large for %s: %s bytes", url, content_length)
        raise ValueError(
            f"Response size ({content_length} bytes) exceeds maximum allowed size ({max_size} bytes)")

    content = b''
    for chunk in response.iter_content(chunk_size=8192):
        content += chunk
        if len(content) > max_size:
            _LOGGER.warning("Response exceeded size limit while downloading from %s", url)
            raise ValueError(
                f"Response size exceeds maximum allowed size ({max_size} bytes)")
    return content


def _fetch_with_retry(session: requests.Session, url: str, settings: Settings) -> bytes:
    """Fetch URL with exponential backoff retry logic.

    Args:
        session: Requests session to use
        url: URL to fetch
        settings: Timeout, retry and size limits

    Returns:
        Response content as bytes

    Raises:
        requests.exceptions.RequestException: If all retries fail
        ValueError: If response is too large or invalid content type
    """
    max_retries = settings.max_retries
    for attempt in range(max_retries):
        try:
            _LOGGER.debug("Fetching %s (attempt %d/%d)", url, attempt + 1, max_retries)
            response = session.get(
                url,
                timeout=settings.timeout,
                allow_redirects=True,
                stream=True
            )
            response.raise_for_status()
            return _read_limited(response, url, settings.max_response_size)
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 403 and attempt < max_retries - 1:
                wait_time = 2 ** attempt
                _LOGGER.warning("Got 403 for %s, retrying after %ds", url, wait_time)
                time.sleep(wait_time)
                continue
            raise
        except requests.exceptions.RequestException as e:
            if attempt < max_retries - 1:
                wait_time = 2 ** attempt
                _LOGGER.warning("Error fetching %s: %s, retrying after %ds", url, e, wait_time)
                time.sleep(wait_time)
                continue
            raise

    raise requests.exceptions.RequestException(
        f"Failed to fetch {url} after {max_retries} attempts")


def _fetch_via_scraperapi(url: str, settings: Settings) -> bytes:
    """Fetch a page through ScraperAPI."""
    _LOGGER.info("Falling back to ScraperAPI for %s", url)
    response = requests.get(
        SCRAPERAPI_ENDPOINT,
        params={'api_key': settings.scraperapi_key, 'url': url, 'country_code': 'us'},
        timeout=settings.timeout * 2,
        stream=True,
    )
    response.raise_for_status()
    return _read_limited(response, url, settings.max_response_size)


def create_session(settings: Settings) -> requests.Session:
    """Create a cloudscraper session for better anti-bot protection."""
    session = cloudscraper.create_scraper(
        browser={
            'browser': 'chrome',
            'platform': 'windows',
            'desktop': True
        }
    )
    session.max_redirects = settings.max_redirects
    return session


def _decode(content: bytes) -> str:
    return content.decode('utf-8', errors='replace')


def fetch_html(url: str, settings: Settings | None = None) -> str:
    """Fetch the raw HTML of a recipe page.

    Args:
        url: The URL of the recipe website
        settings: Fetch settings, defaults to :func:`get_settings`

    Returns:
        The page HTML

    Raises:
        InvalidInputError: If the URL is empty or not allowed
        FetchError: If the direct fetch and any fallback both fail
    """
    if not url or not url.strip():
        raise InvalidInputError("URL cannot be empty")
    validate_url(url)

    if settings is None:
        settings = get_settings()

    _LOGGER.info("Fetching recipe page %s", url)
    session = create_session(settings)

    try:
        html = _fetch_with_retry(session, url, settings)
        _LOGGER.debug("Successfully fetched %d bytes from %s", len(html), url)
        return _decode(html)
    except (requests.exceptions.RequestException, ValueError) as e:
        _LOGGER.warning("Direct fetch failed for %s: %s", url, e)
        direct_error = e

    if not settings.scraperapi_key:
        raise FetchError(url, str(direct_error)) from direct_error

    try:
        html = _fetch_via_scraperapi(url, settings)
    except (requests.exceptions.RequestException, ValueError) as e:
        _LOGGER.error("ScraperAPI fallback failed for %s: %s", url, e)
        raise FetchError(url, f"{direct_error}; fallback: {e}") from e

    _LOGGER.debug("Fetched %d bytes from %s via ScraperAPI", len(html), url)
    return _decode(html)
