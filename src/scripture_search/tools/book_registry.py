"""
Book Registry: static alias table and corpus order.

Maps case-insensitive, user-typed book names to canonical document ids
and holds the fixed document order used by exhaustive keyword search.
Read-only after construction.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from scripture_search.config.constants import BOOK_ALIASES, CORPUS_DOCUMENTS
from scripture_search.exceptions import ConfigurationError
from scripture_search.utils import display_name_for, normalize_alias

logger = logging.getLogger(__name__)


class BookRegistry:
    """Alias -> document id lookup plus the corpus document order."""

    def __init__(
        self,
        aliases: Mapping[str, str],
        documents: Sequence[str],
    ):
        normalized = {normalize_alias(k): v for k, v in aliases.items()}
        corpus = tuple(documents)

        if len(set(corpus)) != len(corpus):
            raise ConfigurationError("Corpus document list contains duplicates")
        missing = sorted({v for v in normalized.values()} - set(corpus))
        if missing:
            raise ConfigurationError(
                f"Aliased documents missing from corpus list: {', '.join(missing)}"
            )

        self._aliases = MappingProxyType(normalized)
        self._documents = corpus

    @classmethod
    def default(cls) -> BookRegistry:
        """Registry built from config/constants.py."""
        return cls(BOOK_ALIASES, CORPUS_DOCUMENTS)

    @property
    def documents(self) -> tuple[str, ...]:
        """All document ids in corpus order."""
        return self._documents

    def resolve(self, name: str) -> Optional[str]:
        """Return the document id for a book name or alias, or None."""
        return self._aliases.get(normalize_alias(name))

    def display_name(self, document_id: str) -> str:
        return display_name_for(document_id)

    def aliases_for(self, document_id: str) -> list[str]:
        return sorted(a for a, d in self._aliases.items() if d == document_id)

    def list_books(self) -> list[dict]:
        """
        Describe every corpus document, in corpus order.

        Returns:
            list of dicts with keys: document_id, display_name, aliases.
        """
        return [
            {
                "document_id": doc_id,
                "display_name": self.display_name(doc_id),
                "aliases": self.aliases_for(doc_id),
            }
            for doc_id in self._documents
        ]

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)
