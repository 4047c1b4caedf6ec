"""Merging of the Shares and Holdings % views into a fund snapshot."""

from typing import Iterable, Optional

from .config import ScraperConfig
from .models import FundSnapshot, MonthEntry, RawTable, StockRecord
from .urls import url_slug

UNKNOWN_FUND = "Unknown Fund"
UNKNOWN_STOCK = "Unknown"


def resolve_fund_name(
    extracted: str,
    url: str,
    generic_names: Iterable[str] = ScraperConfig.GENERIC_FUND_NAMES,
) -> str:
    """Pick the fund name to report for a page.

    Args:
        extracted: Name read from the page title, possibly empty.
        url: Page URL, used as a fallback source for the name.
        generic_names: Site-wide headings that are not fund names.

    Returns:
        The extracted name when it is usable, else the URL slug, else "Unknown Fund".
    """
    if extracted and extracted not in set(generic_names):
        return extracted
    return url_slug(url) or UNKNOWN_FUND


def merge_views(
    shares: RawTable,
    holdings: Optional[RawTable],
    fund_name: str,
) -> FundSnapshot:
    """Combine the two table views row by row and column by column.

    Rows are matched by position: row ``i`` of ``holdings`` is assumed to be the
    same stock as row ``i`` of ``shares``. Missing cells leave the value absent.
    """
    months = shares.months
    stocks: list[StockRecord] = []

    for i, row in enumerate(shares.rows):
        monthly_data = [
            MonthEntry(
                month=month,
                shares=shares.cell(i, j + 1),
                holdings_percentage=(
                    holdings.cell(i, j + 1) if holdings is not None else None
                ),
            )
            for j, month in enumerate(months)
        ]
        stocks.append(
            StockRecord(
                stock_name=(row[0] if row else "") or UNKNOWN_STOCK,
                monthly_data=monthly_data,
            )
        )

    return FundSnapshot(
        fund_name=fund_name,
        months_available=list(months),
        stocks=stocks,
        total_stocks=len(shares.rows),
    )
