"""URL building utilities for the short link service."""


def build_short_url(short_id: str, base_url: str) -> str:
    """Build complete short URL.

    Args:
        short_id: The short ID
        base_url: Base URL of the service (e.g., http://localhost:8001)

    Returns:
        Complete short URL
    """
    return f"{base_url.rstrip('/')}/{short_id}"
