"""
Input validation utilities.
"""
from typing import Optional
from urllib.parse import urlparse


def is_valid_url(url: str) -> bool:
    """
    Check if a string is an absolute HTTP/HTTPS URL.

    Args:
        url: URL string to validate

    Returns:
        True if URL is valid, False otherwise
    """
    if not url or not isinstance(url, str):
        return False

    try:
        result = urlparse(url.strip())
    except ValueError:
        return False
    return result.scheme in ("http", "https") and bool(result.netloc)


def validate_url(url: str) -> Optional[str]:
    """
    Validate and normalize a URL.

    Returns:
        Stripped URL if valid, None otherwise

    Examples:
        >>> validate_url(" https://example.com/p/1 ")
        'https://example.com/p/1'
        >>> validate_url("ftp://example.com") is None
        True
    """
    if not is_valid_url(url):
        return None
    return url.strip()
