"""HTTP client for the Node.js distribution host."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import requests

from runnode_core import __version__
from runnode_core.errors import TransportError

from .types import ReleaseIndexEntry, parse_index_document

logger = logging.getLogger(__name__)

INDEX_PATH = "/index.json"
_CHUNK_SIZE = 1024 * 1024


def _safe_url(url: str) -> str:
    parsed = urlsplit(url)
    if parsed.password:
        return url.replace(parsed.netloc, parsed.netloc.replace(parsed.password, "***"))
    return url


class DistributionClient:
    """Fetches the release index and release archives from a dist mirror."""

    def __init__(self, base_url: str, *, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"User-Agent": f"run-node/{__version__}"}

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _get(self, url: str, *, stream: bool = False) -> requests.Response:
        logger.debug("GET %s stream=%s", _safe_url(url), stream)
        try:
            response = requests.get(url, headers=self.headers, timeout=self.timeout, stream=stream)
        except requests.RequestException as exc:
            raise TransportError(f"request to {_safe_url(url)} failed: {exc}") from exc
        if response.status_code >= 400:
            response.close()
            raise TransportError(f"GET {_safe_url(url)} failed: HTTP {response.status_code}")
        return response

    def fetch_index_document(self) -> list[Any]:
        url = self._url(INDEX_PATH)
        response = self._get(url)
        try:
            document = response.json()
        except ValueError as exc:
            raise TransportError(f"release index at {_safe_url(url)} is not valid JSON") from exc
        if not isinstance(document, list):
            raise TransportError(f"release index at {_safe_url(url)} is not a JSON array")
        return document

    def fetch_index(self) -> list[ReleaseIndexEntry]:
        document = self.fetch_index_document()
        entries = parse_index_document(document)
        skipped = len(document) - len(entries)
        if skipped:
            logger.debug("skipped %s malformed index entries", skipped)
        return entries

    def download(self, remote_path: str, out_path: Path) -> Path:
        url = self._url(remote_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        partial = out_path.with_name(out_path.name + ".part")
        response = self._get(url, stream=True)
        try:
            with open(partial, "wb") as handle:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        handle.write(chunk)
        except (requests.RequestException, OSError) as exc:
            raise TransportError(f"download of {_safe_url(url)} interrupted: {exc}") from exc
        finally:
            response.close()
        os.replace(partial, out_path)
        logger.debug("downloaded %s -> %s", _safe_url(url), out_path)
        return out_path
