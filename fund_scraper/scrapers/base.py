"""Abstract base class for fund holdings scrapers."""

from abc import ABC, abstractmethod

from ..models import FundSnapshot


class BaseScraper(ABC):
    """Abstract base class for fund holdings scrapers."""

    @abstractmethod
    async def fetch_snapshot(self, url: str) -> FundSnapshot:
        """Scrape the holdings page at ``url`` into a fund snapshot.

        Args:
            url: Absolute URL of the fund's holdings page.

        Returns:
            FundSnapshot with one StockRecord per table row.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources (browser, connections, etc.)."""
        pass
