"""Tests for the command line interface."""

from unittest.mock import patch

from cli import build_parser, main, summary_table
from fund_scraper.config import ServerConfig
from fund_scraper.errors import NoTableFoundError
from fund_scraper.models import ScrapeSummary
from fund_scraper.storage import LocalBlobStore

SUMMARY = ScrapeSummary(
    fund_name="Some Fund",
    total_stocks=3,
    months_available=[f"M{i}" for i in range(20)],
    filename="some-fund.json",
    blob_url="https://blob.example/some-fund.json",
)


class TestBuildParser:
    def test_scrape_args(self):
        args = build_parser().parse_args(["scrape", "https://x.com/f", "--output-dir", "out"])
        assert args.url == "https://x.com/f"
        assert args.output_dir == "out"

    def test_serve_port(self):
        args = build_parser().parse_args(["serve", "--port", "8080"])
        assert args.port == 8080


class TestSummaryTable:
    def test_columns_and_title(self):
        table = summary_table(SUMMARY)
        assert table.title == "Some Fund"
        assert table.row_count == 4


class TestMain:
    @patch("cli.scrape_holdings_sync")
    def test_scrape_success(self, mock_scrape):
        mock_scrape.return_value = SUMMARY
        assert main(["scrape", "https://x.com/some-fund"]) == 0
        mock_scrape.assert_called_once_with("https://x.com/some-fund", store=None)

    @patch("cli.scrape_holdings_sync")
    def test_scrape_to_directory(self, mock_scrape, tmp_path):
        mock_scrape.return_value = SUMMARY
        main(["scrape", "https://x.com/some-fund", "--output-dir", str(tmp_path)])
        store = mock_scrape.call_args.kwargs["store"]
        assert isinstance(store, LocalBlobStore)
        assert store.directory == tmp_path

    @patch("cli.scrape_holdings_sync")
    def test_scrape_failure(self, mock_scrape):
        mock_scrape.side_effect = NoTableFoundError("No table found on page")
        assert main(["scrape", "https://x.com/some-fund"]) == 1

    @patch("cli.run_server")
    def test_serve_port_override(self, mock_run, monkeypatch):
        monkeypatch.setenv("API_KEY", "secret")
        assert main(["serve", "--port", "9000"]) == 0
        config = mock_run.call_args.args[0]
        assert config.PORT == 9000
        assert config.API_KEY == "secret"

    @patch("cli.run_server")
    @patch("cli.ServerConfig.from_env")
    def test_serve_port_override_keeps_other_settings(self, mock_from_env, mock_run):
        mock_from_env.return_value = ServerConfig(
            API_KEY="secret", ALLOWED_ORIGIN="https://app.example", SERVICE_NAME="custom"
        )
        main(["serve", "--port", "9000"])
        config = mock_run.call_args.args[0]
        assert config == ServerConfig(
            API_KEY="secret",
            ALLOWED_ORIGIN="https://app.example",
            PORT=9000,
            SERVICE_NAME="custom",
        )
