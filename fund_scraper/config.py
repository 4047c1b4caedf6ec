"""Configuration constants for the fund holdings scraper."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ViewMode(Enum):
    """Display modes of the holdings table, keyed by their on-page label."""

    SHARES = "Shares"
    HOLDINGS_PERCENT = "Holdings %"


@dataclass(frozen=True)
class ScraperConfig:
    """Configuration for the holdings page scraper."""

    VIEWPORT_WIDTH: int = 1920
    VIEWPORT_HEIGHT: int = 1080
    # None keeps Playwright's own default navigation timeout
    NAVIGATION_TIMEOUT_MS: Optional[int] = None
    SETTLE_DELAY_MS: int = 3000
    SELECTOR_TIMEOUT_MS: int = 5000
    DROPDOWN_OPEN_DELAY_MS: int = 1000
    VIEW_SWITCH_DELAY_MS: int = 2000

    TITLE_SELECTOR: str = "h1.text-2xl, h1"
    BREADCRUMB_SELECTOR: str = '[class*="breadcrumb"] a:last-child, nav a:last-child'
    FALLBACK_TITLE_SELECTOR: str = 'h2, h3, [class*="fund-name"]'
    GENERIC_TITLE_MARKER: str = "Insights"
    GENERIC_FUND_NAMES: tuple[str, ...] = (GENERIC_TITLE_MARKER,)

    VIEW_TOGGLE_SELECTOR: str = f'button:has-text("{ViewMode.SHARES.value}")'
    HOLDINGS_OPTION_SELECTOR: str = f'text="{ViewMode.HOLDINGS_PERCENT.value}"'


@dataclass(frozen=True)
class BlobConfig:
    """Configuration for the Vercel Blob store."""

    API_URL: str = "https://blob.vercel-storage.com"
    API_VERSION: str = "7"
    TOKEN: Optional[str] = None
    REQUEST_TIMEOUT_S: int = 30

    @classmethod
    def from_env(cls) -> "BlobConfig":
        return cls(
            API_URL=os.getenv("VERCEL_BLOB_API_URL", cls.API_URL),
            TOKEN=os.getenv("BLOB_READ_WRITE_TOKEN") or None,
        )


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the HTTP server."""

    API_KEY: Optional[str] = None
    ALLOWED_ORIGIN: str = "*"
    PORT: int = 3001
    SERVICE_NAME: str = "fund-scraper-server"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Build a config from ``API_KEY``, ``ALLOWED_ORIGIN`` and ``PORT``.

        An empty ``API_KEY`` counts as unset, which leaves ``/scrape`` open.
        """
        return cls(
            API_KEY=os.getenv("API_KEY") or None,
            ALLOWED_ORIGIN=os.getenv("ALLOWED_ORIGIN") or cls.ALLOWED_ORIGIN,
            PORT=int(os.getenv("PORT") or cls.PORT),
        )
