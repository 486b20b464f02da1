"""Validation utilities for the short link service."""

from typing import Tuple
from urllib.parse import urlparse

MAX_URL_LENGTH = 2048


def is_valid_url(url: str, require_http_scheme: bool = False) -> Tuple[bool, str]:
    """Validate a long URL submitted for shortening.

    Any non-empty string is accepted unless ``require_http_scheme`` is set,
    in which case the URL must be absolute http(s) with a host.

    Args:
        url: The URL to validate
        require_http_scheme: Enforce http/https scheme and a domain

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "url is required"

    if not require_http_scheme:
        return True, ""

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if result.scheme not in ("http", "https"):
        return False, "URL must use http or https protocol"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""
