"""
HTTP server exposing the holdings scraper.
Flask app with an API-key protected /scrape endpoint and a /health check.
"""

import hmac
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from flask import Flask, jsonify, request

from .config import ServerConfig
from .errors import InvalidUrlError
from .models import ScrapeSummary
from .scrapers.holdings import scrape_holdings_sync
from .urls import is_valid_url

logger = logging.getLogger(__name__)

ScrapeFunc = Callable[[str], ScrapeSummary]


def create_app(
    config: Optional[ServerConfig] = None,
    scrape_func: Optional[ScrapeFunc] = None,
) -> Flask:
    """Build the Flask application.

    Args:
        config: Server configuration. Defaults to ServerConfig.from_env().
        scrape_func: Callable run for each /scrape request. Defaults to
            scrape_holdings_sync, which opens its own browser per call.

    Returns:
        Configured Flask app.
    """
    config = config or ServerConfig.from_env()
    scrape_func = scrape_func or scrape_holdings_sync

    app = Flask(__name__)
    app.json.sort_keys = False
    app.config["SERVER_CONFIG"] = config

    @app.before_request
    def handle_preflight():
        if request.method == "OPTIONS":
            return "", 200
        return None

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = config.ALLOWED_ORIGIN
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, X-API-Key"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        return response

    @app.route("/health", methods=["GET"])
    def health():
        now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        return jsonify(
            status="ok",
            timestamp=now.replace("+00:00", "Z"),
            service=config.SERVICE_NAME,
        )

    @app.route("/scrape", methods=["POST"])
    def scrape():
        if not config.API_KEY:
            logger.warning("API_KEY not set; /scrape is unauthenticated")
        elif not hmac.compare_digest(
            request.headers.get("X-API-Key", "").encode("utf-8"),
            config.API_KEY.encode("utf-8"),
        ):
            logger.info("Unauthorized request - invalid API key")
            return jsonify(error="Unauthorized"), 401

        body = request.get_json(silent=True)
        url = body.get("url") if isinstance(body, dict) else None

        if not url:
            return jsonify(error="URL is required"), 400
        if not is_valid_url(url):
            return jsonify(error="Invalid URL format"), 400

        logger.info("Scraping request received for: %s", url)
        try:
            summary = scrape_func(url)
        except InvalidUrlError:
            return jsonify(error="Invalid URL format"), 400
        except Exception as e:
            logger.exception("Scraping error for %s", url)
            return jsonify(error=str(e) or "Failed to scrape data"), 500

        logger.info("Scraping completed successfully: %s", summary.fund_name)
        return jsonify(summary.to_dict())

    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(error):
        return jsonify(error="Not found"), 404

    return app


def run_server(config: Optional[ServerConfig] = None) -> None:
    """Run the development server on the configured port."""
    config = config or ServerConfig.from_env()
    app = create_app(config)

    logger.info("Fund scraper server running on port %d", config.PORT)
    logger.info("Health check: http://localhost:%d/health", config.PORT)
    if config.API_KEY:
        logger.info("API key protection: enabled")
    else:
        logger.warning("API key protection: DISABLED")
    logger.info("Allowed origin: %s", config.ALLOWED_ORIGIN)

    app.run(host="0.0.0.0", port=config.PORT, threaded=True)
