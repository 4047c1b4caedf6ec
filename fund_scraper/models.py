"""Data models for scraped fund holdings."""

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class RawTable:
    """Table cells as read from the page, before any merging.

    ``headers[0]`` labels the stock-name column and ``headers[1:]`` are month
    labels. Rows may be ragged; a missing cell means the value is absent.
    """

    headers: list[str]
    rows: list[list[str]]
    fund_name: str = ""

    @classmethod
    def from_page_result(cls, result: dict[str, Any]) -> "RawTable":
        """Build a table from the object returned by the extraction script.

        Cells are stripped, and rows that are empty or have only blank cells
        are dropped.
        """
        headers = [str(h).strip() for h in result.get("headers") or []]
        rows: list[list[str]] = []
        for raw_row in result.get("rows") or []:
            row = [str(cell).strip() for cell in raw_row]
            if any(row):
                rows.append(row)

        return cls(
            headers=headers,
            rows=rows,
            fund_name=str(result.get("fund_name") or "").strip(),
        )

    @property
    def months(self) -> list[str]:
        return self.headers[1:]

    def cell(self, row: int, column: int) -> Optional[str]:
        """Return the cell at (row, column), or None if it does not exist."""
        if row >= len(self.rows):
            return None
        cells = self.rows[row]
        if column >= len(cells):
            return None
        return cells[column]


@dataclass(frozen=True)
class MonthEntry:
    month: str
    shares: Optional[str] = None
    holdings_percentage: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        """Absent values are left out rather than serialised as null."""
        data = {"month": self.month}
        if self.shares is not None:
            data["shares"] = self.shares
        if self.holdings_percentage is not None:
            data["holdings_percentage"] = self.holdings_percentage
        return data


@dataclass(frozen=True)
class StockRecord:
    """One stock with its per-month values.

    ``sector`` is always None; the source page does not expose it.
    """

    stock_name: str
    monthly_data: list[MonthEntry] = field(default_factory=list)
    sector: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "stock_name": self.stock_name,
            "sector": self.sector,
            "monthly_data": [entry.to_dict() for entry in self.monthly_data],
        }


@dataclass(frozen=True)
class FundSnapshot:
    """Merged holdings of one fund, as persisted to blob storage."""

    fund_name: str
    months_available: list[str]
    stocks: list[StockRecord]
    total_stocks: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "fund_name": self.fund_name,
            "months_available": list(self.months_available),
            "stocks": [stock.to_dict() for stock in self.stocks],
            "total_stocks": self.total_stocks,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class ScrapeSummary:
    """Result of a successful scrape and upload."""

    fund_name: str
    total_stocks: int
    months_available: list[str]
    filename: str
    blob_url: str
    success: bool = True

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {"success": data.pop("success"), **data}

    def __str__(self) -> str:
        return (
            f"{self.fund_name}: {self.total_stocks} stocks, "
            f"{len(self.months_available)} months -> {self.blob_url}"
        )
