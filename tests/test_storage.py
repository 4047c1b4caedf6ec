"""Tests for blob storage backends."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from fund_scraper.config import BlobConfig
from fund_scraper.errors import UploadError
from fund_scraper.storage import LocalBlobStore, VercelBlobStore


def make_response(status: int = 200, payload=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


class TestBlobConfig:
    """Tests for BlobConfig."""

    def test_default_values(self):
        config = BlobConfig()
        assert config.API_URL == "https://blob.vercel-storage.com"
        assert config.TOKEN is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BLOB_READ_WRITE_TOKEN", "vercel_blob_rw_abc")
        monkeypatch.setenv("VERCEL_BLOB_API_URL", "https://blob.test")
        config = BlobConfig.from_env()
        assert config.TOKEN == "vercel_blob_rw_abc"
        assert config.API_URL == "https://blob.test"

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv("BLOB_READ_WRITE_TOKEN", raising=False)
        monkeypatch.delenv("VERCEL_BLOB_API_URL", raising=False)
        config = BlobConfig.from_env()
        assert config.TOKEN is None
        assert config.API_URL == "https://blob.vercel-storage.com"


class TestVercelBlobStore:
    """Tests for VercelBlobStore."""

    CONFIG = BlobConfig(API_URL="https://blob.test/", TOKEN="token-123")

    def test_put_sends_request(self):
        session = MagicMock()
        session.put.return_value = make_response(
            payload={"url": "https://store.public.blob.test/some-fund.json"}
        )
        store = VercelBlobStore(self.CONFIG, session=session)

        url = store.put("some-fund.json", b'{"a": 1}', "application/json")

        assert url == "https://store.public.blob.test/some-fund.json"
        args, kwargs = session.put.call_args
        assert args[0] == "https://blob.test/some-fund.json"
        assert kwargs["data"] == b'{"a": 1}'
        headers = kwargs["headers"]
        assert headers["Authorization"] == "Bearer token-123"
        assert headers["x-content-type"] == "application/json"
        assert headers["x-add-random-suffix"] == "0"
        assert headers["x-allow-overwrite"] == "1"
        assert kwargs["timeout"] == self.CONFIG.REQUEST_TIMEOUT_S

    def test_missing_token(self):
        session = MagicMock()
        store = VercelBlobStore(BlobConfig(TOKEN=None), session=session)
        with pytest.raises(UploadError, match="BLOB_READ_WRITE_TOKEN"):
            store.put("f.json", b"{}")
        session.put.assert_not_called()

    def test_http_error_status(self):
        session = MagicMock()
        session.put.return_value = make_response(status=403, text="Forbidden")
        store = VercelBlobStore(self.CONFIG, session=session)
        with pytest.raises(UploadError, match="403"):
            store.put("f.json", b"{}")

    def test_transport_error(self):
        session = MagicMock()
        session.put.side_effect = requests.ConnectionError("connection refused")
        store = VercelBlobStore(self.CONFIG, session=session)
        with pytest.raises(UploadError, match="connection refused"):
            store.put("f.json", b"{}")

    def test_response_without_url(self):
        session = MagicMock()
        session.put.return_value = make_response(payload={"pathname": "f.json"})
        store = VercelBlobStore(self.CONFIG, session=session)
        with pytest.raises(UploadError, match="did not include a URL"):
            store.put("f.json", b"{}")

    def test_response_not_json(self):
        session = MagicMock()
        session.put.return_value = make_response(payload=ValueError("not json"))
        store = VercelBlobStore(self.CONFIG, session=session)
        with pytest.raises(UploadError):
            store.put("f.json", b"{}")


class TestLocalBlobStore:
    """Tests for LocalBlobStore."""

    def test_writes_file(self, tmp_path):
        store = LocalBlobStore(tmp_path / "out")
        url = store.put("some-fund.json", b'{"fund_name": "x"}')

        path = tmp_path / "out" / "some-fund.json"
        assert json.loads(path.read_text()) == {"fund_name": "x"}
        assert url == path.resolve().as_uri()
        assert url.startswith("file://")

    def test_overwrites(self, tmp_path):
        store = LocalBlobStore(tmp_path)
        store.put("f.json", b"1")
        store.put("f.json", b"2")
        assert Path(tmp_path / "f.json").read_bytes() == b"2"

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = LocalBlobStore(blocker)
        with pytest.raises(UploadError):
            store.put("f.json", b"{}")
