"""Validation utilities for short link targets."""

import re
from urllib.parse import urlparse

ALLOWED_SCHEMES = ("http", "https", "ftp")
DEFAULT_SCHEME = "https"

# scheme://, then a first character that cannot start a host, then no whitespace
URL_PATTERN = re.compile(r"^(https?|ftp)://[^\s/$.?#][^\s]*$", re.IGNORECASE)
SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def normalize_url(url: str) -> str:
    """
    Strip surrounding whitespace and prefix https:// when no scheme is given.

    Example:
        >>> normalize_url("  example.com/page ")
        'https://example.com/page'
    """
    if url is None:
        return url
    url = url.strip()
    if url and not SCHEME_PATTERN.match(url):
        return f"{DEFAULT_SCHEME}://{url}"
    return url


def is_valid_url(url: str) -> bool:
    """
    Check that a (normalized) URL can be shortened.

    Accepted: http, https or ftp scheme, a non-empty remainder, no embedded
    whitespace, and a host that urllib can parse out.
    """
    if not url or not isinstance(url, str):
        return False

    if not URL_PATTERN.match(url):
        return False

    try:
        result = urlparse(url)
    except ValueError:
        return False

    return result.scheme.lower() in ALLOWED_SCHEMES and bool(result.netloc)
