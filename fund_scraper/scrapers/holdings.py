"""Scraper for monthly fund holdings pages with a Shares / Holdings % toggle."""

import asyncio
import logging
from typing import Optional

from playwright.async_api import Browser, Error as PlaywrightError, Page, async_playwright

from ..config import ScraperConfig, ViewMode
from ..errors import ExtractionError, NavigationError, ScrapeError, ViewSwitchError
from ..merge import merge_views, resolve_fund_name
from ..models import FundSnapshot, RawTable, ScrapeSummary
from ..storage import JSON_CONTENT_TYPE, BlobStore, VercelBlobStore
from ..urls import blob_filename, validate_url
from .base import BaseScraper
from .extractor import extract_table

logger = logging.getLogger(__name__)


class HoldingsScraper(BaseScraper):
    """Scraper for fetching a fund's monthly holdings table in both views."""

    def __init__(self, config: Optional[ScraperConfig] = None) -> None:
        self.config = config or ScraperConfig()
        self._browser: Optional[Browser] = None
        self._playwright = None

    async def _ensure_browser(self) -> Browser:
        if self._browser is None:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=True)
        return self._browser

    async def fetch_snapshot(self, url: str) -> FundSnapshot:
        url = validate_url(url)
        browser = await self._ensure_browser()
        page: Page = await browser.new_page(
            viewport={
                "width": self.config.VIEWPORT_WIDTH,
                "height": self.config.VIEWPORT_HEIGHT,
            }
        )

        try:
            await self._load(page, url)

            logger.info("Extracting %s data...", ViewMode.SHARES.value)
            shares = await extract_table(page, self.config)
            logger.info("Found %d rows in %s view", len(shares.rows), ViewMode.SHARES.value)

            holdings = await self._try_holdings_view(page)

            fund_name = resolve_fund_name(
                shares.fund_name, url, self.config.GENERIC_FUND_NAMES
            )
            return merge_views(shares, holdings, fund_name)
        finally:
            await page.close()

    async def _load(self, page: Page, url: str) -> None:
        logger.info("Navigating to %s", url)
        goto_options: dict = {"wait_until": "networkidle"}
        if self.config.NAVIGATION_TIMEOUT_MS is not None:
            goto_options["timeout"] = self.config.NAVIGATION_TIMEOUT_MS

        try:
            await page.goto(url, **goto_options)
        except PlaywrightError as e:
            raise NavigationError(f"Failed to load {url}: {e}") from e

        # Let client-side rendering finish after the network goes quiet
        await page.wait_for_timeout(self.config.SETTLE_DELAY_MS)

    async def _try_holdings_view(self, page: Page) -> Optional[RawTable]:
        """Holdings % table, or None if the page could not be switched to it."""
        logger.info("Switching to %s view...", ViewMode.HOLDINGS_PERCENT.value)
        try:
            holdings = await self._switch_to_holdings(page)
        except ViewSwitchError as e:
            logger.warning("Error switching views, continuing with shares only: %s", e)
            return None

        logger.info(
            "Found %d rows in %s view", len(holdings.rows), ViewMode.HOLDINGS_PERCENT.value
        )
        return holdings

    async def _switch_to_holdings(self, page: Page) -> RawTable:
        timeout = self.config.SELECTOR_TIMEOUT_MS
        try:
            toggle = await page.wait_for_selector(
                self.config.VIEW_TOGGLE_SELECTOR, timeout=timeout
            )
            if toggle is None:
                raise ViewSwitchError(f"'{ViewMode.SHARES.value}' toggle not found")
            await toggle.click()
            logger.debug("Opened view dropdown")
            await page.wait_for_timeout(self.config.DROPDOWN_OPEN_DELAY_MS)

            option = await page.wait_for_selector(
                self.config.HOLDINGS_OPTION_SELECTOR, timeout=timeout
            )
            if option is None:
                raise ViewSwitchError(
                    f"'{ViewMode.HOLDINGS_PERCENT.value}' option not found"
                )
            await option.click()
            logger.debug("Selected %s option", ViewMode.HOLDINGS_PERCENT.value)
            await page.wait_for_timeout(self.config.VIEW_SWITCH_DELAY_MS)

            return await extract_table(page, self.config)
        except (PlaywrightError, ExtractionError) as e:
            raise ViewSwitchError(str(e)) from e

    async def close(self) -> None:
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None


async def scrape_holdings(
    url: str,
    store: Optional[BlobStore] = None,
    config: Optional[ScraperConfig] = None,
    scraper: Optional[BaseScraper] = None,
) -> ScrapeSummary:
    """Scrape a holdings page and upload the merged snapshot as JSON.

    Args:
        url: Absolute URL of the fund's holdings page.
        store: Destination for the snapshot. Defaults to VercelBlobStore().
        config: Scraper configuration, used when ``scraper`` is not given.
        scraper: Scraper to use. It is closed before returning.

    Returns:
        ScrapeSummary describing the stored snapshot.

    Raises:
        ScrapeError: If any step fails. Nothing is uploaded in that case.
    """
    scraper = scraper or HoldingsScraper(config)

    try:
        url = validate_url(url)
        store = store or VercelBlobStore()
        snapshot = await scraper.fetch_snapshot(url)

        filename = blob_filename(url)
        blob_url = store.put(filename, snapshot.to_json().encode("utf-8"), JSON_CONTENT_TYPE)
    except ScrapeError:
        raise
    except Exception as e:
        raise ScrapeError(str(e) or type(e).__name__) from e
    finally:
        await scraper.close()

    logger.info("Successfully scraped data for: %s", snapshot.fund_name)
    logger.info("Total stocks: %d", snapshot.total_stocks)
    logger.info("Months available: %d", len(snapshot.months_available))
    logger.info("Data saved to blob: %s", blob_url)

    return ScrapeSummary(
        fund_name=snapshot.fund_name,
        total_stocks=snapshot.total_stocks,
        months_available=list(snapshot.months_available),
        filename=filename,
        blob_url=blob_url,
    )


def scrape_holdings_sync(
    url: str,
    store: Optional[BlobStore] = None,
    config: Optional[ScraperConfig] = None,
) -> ScrapeSummary:

    async def _run() -> ScrapeSummary:
        return await scrape_holdings(url, store=store, config=config)

    return asyncio.run(_run())
