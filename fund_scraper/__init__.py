"""
Fund Holdings Scraper - Scrapes a mutual fund's monthly holdings table and stores it as JSON.

Exports:
    RawTable: Table cells as read from the page
    MonthEntry: Shares and holdings percentage of one stock in one month
    StockRecord: One stock with its monthly data
    FundSnapshot: Merged holdings of a fund, the persisted document
    ScrapeSummary: Result returned after a snapshot is stored
    HoldingsScraper: Playwright scraper for holdings pages
    scrape_holdings_sync: Scrape a URL and upload its snapshot
    create_app: Flask application factory
"""

from .config import BlobConfig, ScraperConfig, ServerConfig, ViewMode
from .errors import (
    ExtractionError,
    InvalidUrlError,
    NavigationError,
    NoTableFoundError,
    ScrapeError,
    UploadError,
    ViewSwitchError,
)
from .models import FundSnapshot, MonthEntry, RawTable, ScrapeSummary, StockRecord
from .scrapers import HoldingsScraper, scrape_holdings, scrape_holdings_sync
from .server import create_app

__all__ = [
    "BlobConfig",
    "ScraperConfig",
    "ServerConfig",
    "ViewMode",
    "ScrapeError",
    "InvalidUrlError",
    "NavigationError",
    "ExtractionError",
    "NoTableFoundError",
    "ViewSwitchError",
    "UploadError",
    "RawTable",
    "MonthEntry",
    "StockRecord",
    "FundSnapshot",
    "ScrapeSummary",
    "HoldingsScraper",
    "scrape_holdings",
    "scrape_holdings_sync",
    "create_app",
]
