"""Blob storage backends for fund snapshots."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import requests

from .config import BlobConfig
from .errors import UploadError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class BlobStore(ABC):
    """Abstract base class for snapshot storage."""

    @abstractmethod
    def put(self, key: str, body: bytes, content_type: str = JSON_CONTENT_TYPE) -> str:
        """Store ``body`` under ``key``, replacing any existing object.

        Args:
            key: Object name (e.g., "some-fund-holdings.json").
            body: Object contents.
            content_type: MIME type to store with the object.

        Returns:
            Publicly readable URL of the stored object.
        """
        pass


class VercelBlobStore(BlobStore):
    """Stores objects in Vercel Blob through its HTTP API.

    Objects are public, keep their exact name (no random suffix) and are
    overwritten on re-upload.
    """

    def __init__(
        self,
        config: Optional[BlobConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or BlobConfig.from_env()
        self._session = session or requests.Session()

    def put(self, key: str, body: bytes, content_type: str = JSON_CONTENT_TYPE) -> str:
        if not self.config.TOKEN:
            raise UploadError("BLOB_READ_WRITE_TOKEN is not configured")

        url = f"{self.config.API_URL.rstrip('/')}/{key.lstrip('/')}"
        headers = {
            "Authorization": f"Bearer {self.config.TOKEN}",
            "x-api-version": self.config.API_VERSION,
            "x-content-type": content_type,
            "x-add-random-suffix": "0",
            "x-allow-overwrite": "1",
        }

        try:
            response = self._session.put(
                url,
                data=body,
                headers=headers,
                timeout=self.config.REQUEST_TIMEOUT_S,
            )
        except requests.RequestException as e:
            raise UploadError(f"Blob upload failed: {e}") from e

        if not response.ok:
            raise UploadError(
                f"Blob upload failed with status {response.status_code}: {response.text}"
            )

        try:
            blob_url = response.json()["url"]
        except (ValueError, KeyError, TypeError) as e:
            raise UploadError("Blob upload response did not include a URL") from e

        logger.info("Uploaded %s (%d bytes) to %s", key, len(body), blob_url)
        return blob_url


class LocalBlobStore(BlobStore):
    """Writes objects to a local directory, for runs without blob credentials."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def put(self, key: str, body: bytes, content_type: str = JSON_CONTENT_TYPE) -> str:
        path = self.directory / key
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(body)
        except OSError as e:
            raise UploadError(f"Could not write {path}: {e}") from e

        logger.info("Wrote %s (%d bytes)", path, len(body))
        return path.resolve().as_uri()
