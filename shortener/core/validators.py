"""
Input Validators and Sanitizers

This module provides validation and sanitization functions for user inputs.
The datastore trusts its inputs, so every URL is checked here before it
reaches the service layer's datastore calls.

Validators return None when the input is acceptable and one of the error
message constants below otherwise.
"""

from typing import Optional
from urllib.parse import urlparse

from shortener.core.setting import settings

EMPTY_INPUT = "Input was empty."
EMPTY_URL = "URL cannot be empty."
URL_TOO_LARGE = "URL is too large."
INVALID_URL = "Invalid URL. Please provide an absolute URL (e.g. https://example.com)."
INVALID_SHORT_URL = "Invalid short URL."
URL_ALREADY_SHORTENED = "Invalid URL. Provided URL is shortened."


def sanitize_input(text: Optional[str]) -> Optional[str]:
    """
    Strip surrounding whitespace from user input.

    Returns:
        The trimmed text, or None if nothing is left
    """
    if text is None:
        return None
    text = text.strip()
    return text or None


def is_absolute_url(url: str) -> bool:
    """
    Check that a URL is absolute: it has a scheme and a network location,
    contains no whitespace and can be encoded as UTF-8.
    """
    if any(ch.isspace() for ch in url):
        return False
    try:
        url.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates, e.g. undecodable bytes read with surrogateescape
        return False
    try:
        result = urlparse(url)
    except ValueError:
        return False
    return bool(result.scheme) and bool(result.netloc)


def _check_common(url: Optional[str], max_length: int) -> Optional[str]:
    if not url or not url.strip():
        return EMPTY_URL
    if len(url) > max_length:
        return URL_TOO_LARGE
    if not is_absolute_url(url):
        return INVALID_URL
    return None


def validate_original_url(
    url: Optional[str],
    base_url: Optional[str] = None,
    base_domain: Optional[str] = None,
    max_length: Optional[int] = None,
) -> Optional[str]:
    """
    Validate a long URL that is about to be shortened.

    Args:
        url: The URL to validate
        base_url: Short URL prefix (defaults to settings.BASE_URL)
        base_domain: Short URL domain (defaults to settings.BASE_DOMAIN)
        max_length: Maximum allowed length (defaults to settings.MAX_URL_LENGTH)

    Returns:
        None if valid, otherwise an error message. URLs pointing at the
        shortener itself are rejected so codes never chain.
    """
    base_url = base_url or settings.BASE_URL
    base_domain = base_domain or settings.BASE_DOMAIN
    max_length = max_length or settings.MAX_URL_LENGTH

    error = _check_common(url, max_length)
    if error:
        return error

    lowered = url.lower()
    if base_url.lower() in lowered or base_domain.lower() in lowered:
        return URL_ALREADY_SHORTENED
    return None


def validate_short_url(
    url: Optional[str],
    base_url: Optional[str] = None,
    max_length: Optional[int] = None,
) -> Optional[str]:
    """
    Validate a short URL produced by this service.

    Returns:
        None if valid, otherwise an error message
    """
    base_url = base_url or settings.BASE_URL
    max_length = max_length or settings.MAX_URL_LENGTH

    error = _check_common(url, max_length)
    if error:
        return error

    if not url.startswith(base_url):
        return INVALID_SHORT_URL
    return None
