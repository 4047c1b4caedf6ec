"""Helpers for working with fund page URLs."""

from typing import Optional
from urllib.parse import urlparse

from .errors import InvalidUrlError

DEFAULT_FILENAME_STEM = "unknown-fund"


def is_valid_url(url: str) -> bool:
    """Return True if ``url`` is an absolute URL with a scheme and a host."""
    if not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def validate_url(url: str) -> str:
    """Return the stripped URL, raising InvalidUrlError if it is not absolute."""
    if not is_valid_url(url):
        raise InvalidUrlError(f"Invalid URL format: {url!r}")
    return url.strip()


def url_slug(url: str) -> Optional[str]:
    """Return the last non-empty path segment of ``url``.

    Args:
        url: Page URL (e.g., "https://example.com/mf-holdings/some-fund-holdings/").

    Returns:
        The slug (e.g., "some-fund-holdings"), or None if the path is empty.
    """
    parts = [part for part in urlparse(url).path.split("/") if part]
    return parts[-1] if parts else None


def blob_filename(url: str) -> str:
    """Storage key for the snapshot of ``url``; the same URL always maps to the same key."""
    return f"{url_slug(url) or DEFAULT_FILENAME_STEM}.json"
