"""
Document Loader: fetch raw book markup by document id, with caching.

Loaders return the document's markup, or None when the document does not
exist. Any other failure raises DocumentLoadError. DocumentCache memoizes
successful loads for its lifetime; not-found results and failures are
never cached, so a later query retries them.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import quote

import httpx

from scripture_search.config.constants import (
    DOCUMENT_ENCODING,
    DOCUMENT_ROOT,
    HTTP_TIMEOUT,
    HTTP_USER_AGENT,
)
from scripture_search.exceptions import DocumentLoadError

logger = logging.getLogger(__name__)


class DocumentLoader(Protocol):
    """Anything that can produce raw markup for a document id."""

    def load(self, document_id: str) -> Optional[str]: ...


# ---------------------------------------------------------------------------
# Filesystem source
# ---------------------------------------------------------------------------


class FileDocumentLoader:
    """Reads documents from a directory, one file per document id."""

    def __init__(self, root: str | Path = DOCUMENT_ROOT, encoding: str = DOCUMENT_ENCODING):
        self.root = Path(root)
        self.encoding = encoding

    def load(self, document_id: str) -> Optional[str]:
        path = self.root / document_id
        try:
            path.resolve().relative_to(self.root.resolve())
        except ValueError:
            logger.warning("Document id escapes document root: %s", document_id)
            return None
        if not path.is_file():
            logger.warning("Document not found on disk: %s", path)
            return None
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(f"Failed to read {path}: {e}") from e


# ---------------------------------------------------------------------------
# HTTP source
# ---------------------------------------------------------------------------


class HttpDocumentLoader:
    """Fetches documents relative to a base URL."""

    def __init__(self, base_url: str, timeout: float = HTTP_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def url_for(self, document_id: str) -> str:
        return f"{self.base_url}/{quote(document_id, safe='/,&')}"

    def load(self, document_id: str) -> Optional[str]:
        url = self.url_for(document_id)
        try:
            logger.info("Fetching document: %s", url)
            response = httpx.get(
                url,
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": HTTP_USER_AGENT},
            )
        except httpx.TimeoutException as e:
            logger.error("Document request timed out: %s", url)
            raise DocumentLoadError(
                f"Request timed out after {self.timeout}s: {url}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("Document fetch failed: %s (%s)", url, e)
            raise DocumentLoadError(f"Fetch failed for {url}: {e}") from e

        if response.status_code == 200:
            return response.text
        if response.status_code == 404:
            logger.warning("Document not found: %s", url)
            return None
        raise DocumentLoadError(f"HTTP {response.status_code} for {url}")


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


class DocumentCache:
    """
    Get-or-load cache in front of a DocumentLoader.

    Entries are written once per key. Concurrent callers asking for the
    same key wait on that key's lock only; loads of different keys never
    block each other.
    """

    def __init__(self, loader: DocumentLoader):
        self.loader = loader
        self._entries: dict[str, str] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, document_id: str) -> threading.Lock:
        with self._guard:
            lock = self._key_locks.get(document_id)
            if lock is None:
                lock = self._key_locks[document_id] = threading.Lock()
            return lock

    def get_or_load(self, document_id: str) -> Optional[str]:
        """
        Return cached markup, loading it on first use.

        Returns:
            Markup, or None when the loader reports not-found.

        Raises:
            DocumentLoadError: the loader failed; nothing is cached.
        """
        cached = self._entries.get(document_id)
        if cached is not None:
            logger.debug("Cache hit: %s", document_id)
            return cached

        with self._lock_for(document_id):
            cached = self._entries.get(document_id)
            if cached is not None:
                logger.debug("Cache hit: %s", document_id)
                return cached

            markup = self.loader.load(document_id)
            if markup is None:
                return None
            self._entries[document_id] = markup
            logger.debug("Cached %s (%d chars)", document_id, len(markup))
            return markup

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
