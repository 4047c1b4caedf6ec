#!/usr/bin/env python3
import argparse
import logging
import sys
from dataclasses import replace

from dotenv import load_dotenv
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from fund_scraper import ScrapeError, ScrapeSummary, ServerConfig, scrape_holdings_sync
from fund_scraper.server import run_server
from fund_scraper.storage import LocalBlobStore

logger = logging.getLogger(__name__)
console = Console()

# Months shown in the summary table before eliding the middle
MAX_MONTHS_SHOWN = 12


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def summary_table(summary: ScrapeSummary) -> Table:
    """Build a Rich table describing a stored snapshot."""
    t = Table(title=summary.fund_name, box=box.ROUNDED, title_style="bold white")
    t.add_column("Field", style="cyan")
    t.add_column("Value")

    months = summary.months_available
    if len(months) > MAX_MONTHS_SHOWN:
        half = MAX_MONTHS_SHOWN // 2
        months = months[:half] + ["…"] + months[-half:]

    t.add_row("Stocks", str(summary.total_stocks))
    t.add_row("Months", ", ".join(months) or "[dim]none[/dim]")
    t.add_row("File", summary.filename)
    t.add_row("URL", f"[link={summary.blob_url}]{summary.blob_url}[/link]")
    return t


def cmd_scrape(args: argparse.Namespace) -> int:
    store = LocalBlobStore(args.output_dir) if args.output_dir else None

    try:
        with console.status(f"[bold]Scraping {args.url}...[/bold]"):
            summary = scrape_holdings_sync(args.url, store=store)
    except ScrapeError as e:
        console.print(f"[red]Scrape failed:[/red] {e}")
        return 1

    console.print(summary_table(summary))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    config = ServerConfig.from_env()
    if args.port is not None:
        config = replace(config, PORT=args.port)
    run_server(config)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fund-scraper",
        description="Scrape monthly fund holdings into JSON snapshots.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the HTTP server")
    serve.add_argument("--port", type=int, default=None, help="overrides PORT")
    serve.set_defaults(func=cmd_serve)

    scrape = sub.add_parser("scrape", help="scrape one holdings page")
    scrape.add_argument("url", help="holdings page URL")
    scrape.add_argument(
        "--output-dir",
        default=None,
        help="write the snapshot to this directory instead of blob storage",
    )
    scrape.set_defaults(func=cmd_scrape)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI application."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    console.print(Panel("[bold]Fund Holdings Scraper[/bold]", box=box.DOUBLE))
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
