"""Extraction of the holdings table from a rendered page."""

from typing import Optional

from playwright.async_api import Page

from ..config import ScraperConfig
from ..errors import NoTableFoundError
from ..models import RawTable

NO_TABLE_MESSAGE = "No table found on page"

# Runs in the page. Returns raw cell text; stripping and blank-row filtering
# happen in RawTable.from_page_result.
EXTRACT_TABLE_JS = """
(opts) => {
    let titleElement = document.querySelector(opts.titleSelector);
    if (titleElement && titleElement.innerText.includes(opts.genericMarker)) {
        titleElement =
            document.querySelector(opts.breadcrumbSelector) ||
            document.querySelector(opts.fallbackTitleSelector);
    }
    const fundName = titleElement ? titleElement.innerText.trim() : '';

    const table = document.querySelector('table');
    if (!table) {
        return { error: opts.noTableMessage };
    }

    const headerRow = table.querySelector('thead tr') || table.querySelector('tr');
    const headers = headerRow
        ? Array.from(headerRow.querySelectorAll('th, td')).map(c => c.innerText)
        : [];

    const rows = [];
    table.querySelectorAll('tr').forEach(row => {
        if (row.closest('thead') || row === headerRow) return;
        const cells = row.querySelectorAll('td, th');
        if (cells.length === 0) return;
        rows.push(Array.from(cells).map(c => c.innerText));
    });

    return { fund_name: fundName, headers: headers, rows: rows };
}
"""


async def extract_table(page: Page, config: Optional[ScraperConfig] = None) -> RawTable:
    """Read the first table on the page along with a best-effort fund name.

    Args:
        page: A loaded Playwright page.
        config: Selector configuration. Defaults to ScraperConfig().

    Returns:
        RawTable with stripped cells and no all-blank rows.

    Raises:
        NoTableFoundError: If the page has no table element.
    """
    config = config or ScraperConfig()
    result = await page.evaluate(
        EXTRACT_TABLE_JS,
        {
            "titleSelector": config.TITLE_SELECTOR,
            "breadcrumbSelector": config.BREADCRUMB_SELECTOR,
            "fallbackTitleSelector": config.FALLBACK_TITLE_SELECTOR,
            "genericMarker": config.GENERIC_TITLE_MARKER,
            "noTableMessage": NO_TABLE_MESSAGE,
        },
    )

    if not result or result.get("error"):
        raise NoTableFoundError((result or {}).get("error") or NO_TABLE_MESSAGE)

    return RawTable.from_page_result(result)
