"""Page scrapers for fund holdings."""

from .base import BaseScraper
from .extractor import extract_table
from .holdings import HoldingsScraper, scrape_holdings, scrape_holdings_sync

__all__ = [
    "BaseScraper",
    "HoldingsScraper",
    "extract_table",
    "scrape_holdings",
    "scrape_holdings_sync",
]
