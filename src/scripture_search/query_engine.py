"""
Query Engine: citation lookup and keyword search over the corpus.

Provides two query modes:
- Citation lookup: load one document, extract one chapter, filter by range
- Keyword search: load every corpus document in order, extract all verses,
  match case-insensitively, highlight

Documents come from an injected DocumentCache. Extraction and matching
are pure; only loading touches I/O. A document that cannot be loaded or
walked during keyword search is skipped and recorded, never fatal.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from scripture_search.config.constants import SEARCH_PREFETCH_WORKERS
from scripture_search.exceptions import (
    DocumentNotFoundError,
    ErrorSeverity,
    InvalidQueryError,
    ProcessingError,
    ScriptureSearchException,
)
from scripture_search.schemas.citation import Citation
from scripture_search.schemas.verse_output import PageView, SearchResult, VerseRecord
from scripture_search.tools.book_registry import BookRegistry
from scripture_search.tools.document_loader import DocumentCache
from scripture_search.tools.highlighter import contains_term, highlight_text, term_matcher
from scripture_search.tools.verse_extractor import extract_page, extract_verses

logger = logging.getLogger(__name__)


class QueryEngine:
    """Answers citation and keyword queries against one registry + cache."""

    def __init__(
        self,
        registry: BookRegistry,
        cache: DocumentCache,
        max_workers: int = SEARCH_PREFETCH_WORKERS,
    ):
        self.registry = registry
        self.cache = cache
        self.max_workers = max(1, max_workers)

    # -----------------------------------------------------------------------
    # Citation lookup
    # -----------------------------------------------------------------------

    def lookup(self, citation: Citation) -> list[VerseRecord]:
        """
        Return the cited verses, in document order.

        Raises:
            DocumentNotFoundError: the cited book's document could not be loaded.
        """
        markup = self.cache.get_or_load(citation.document_id)
        if markup is None:
            raise DocumentNotFoundError(citation.document_id)

        verses = extract_verses(
            markup, target_chapter=citation.chapter, document_id=citation.document_id,
        )
        matching = [v for v in verses if citation.contains(v.verse)]
        logger.info(
            "Lookup %s: %d of %d chapter verses in range",
            citation.label, len(matching), len(verses),
        )
        return matching

    # -----------------------------------------------------------------------
    # Keyword search
    # -----------------------------------------------------------------------

    def _load_for_search(self, document_id: str) -> tuple[Optional[str], Optional[ProcessingError]]:
        try:
            markup = self.cache.get_or_load(document_id)
        except ScriptureSearchException as e:
            logger.warning("Skipping %s: %s", document_id, e.message)
            return None, ProcessingError.from_exception(
                document_id, e.error_code, e, ErrorSeverity.WARNING,
            )
        except Exception as e:
            logger.exception("Unexpected failure loading %s", document_id)
            return None, ProcessingError.from_exception(
                document_id, type(e).__name__, e, ErrorSeverity.CRITICAL,
            )
        if markup is None:
            logger.warning("Skipping %s: not found", document_id)
            return None, ProcessingError(
                source=document_id,
                error_type="DocumentNotFoundError",
                message=f"Document not found: {document_id}",
                severity=ErrorSeverity.WARNING,
            )
        return markup, None

    def _load_all(self) -> list[tuple[Optional[str], Optional[ProcessingError]]]:
        """Load every corpus document; result list is in corpus order."""
        documents = self.registry.documents
        if self.max_workers == 1:
            return [self._load_for_search(doc_id) for doc_id in documents]
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="doc-loader",
        ) as pool:
            return list(pool.map(self._load_for_search, documents))

    def search_detailed(self, term: str) -> tuple[list[SearchResult], list[ProcessingError]]:
        """
        Keyword search, also returning the documents that were skipped.

        Raises:
            InvalidQueryError: the term is blank.
        """
        if not term or not term.strip():
            raise InvalidQueryError("Search term must not be blank")

        matcher = term_matcher(term)
        results: list[SearchResult] = []
        skipped: list[ProcessingError] = []

        for document_id, (markup, error) in zip(self.registry.documents, self._load_all()):
            if error is not None:
                skipped.append(error)
                continue

            try:
                verses = extract_verses(markup, document_id=document_id)
            except ScriptureSearchException as e:
                logger.warning("Skipping %s: %s", document_id, e.message)
                skipped.append(ProcessingError.from_exception(
                    document_id, e.error_code, e, ErrorSeverity.WARNING,
                ))
                continue

            display_name = self.registry.display_name(document_id)
            for verse in verses:
                if not contains_term(verse.text, matcher):
                    continue
                results.append(
                    SearchResult(
                        document_id=document_id,
                        display_name=display_name,
                        chapter=verse.chapter,
                        verse=verse.verse,
                        page_index=verse.page_index,
                        text=verse.text,
                        highlighted_text=highlight_text(verse.text, matcher),
                    )
                )

        logger.info(
            "Keyword search %r: %d results, %d documents skipped",
            term, len(results), len(skipped),
        )
        return results, skipped

    def search(self, term: str) -> list[SearchResult]:
        """Keyword search in corpus order. See search_detailed()."""
        results, _ = self.search_detailed(term)
        return results

    # -----------------------------------------------------------------------
    # Page view
    # -----------------------------------------------------------------------

    def page_view(
        self,
        document_id: str,
        page_index: int,
        chapter: Optional[str] = None,
    ) -> Optional[PageView]:
        """
        Full page content for a selected result.

        Returns:
            PageView, or None if the page index is out of range.

        Raises:
            DocumentNotFoundError: the document could not be loaded.
        """
        markup = self.cache.get_or_load(document_id)
        if markup is None:
            raise DocumentNotFoundError(document_id)

        paragraphs = extract_page(markup, page_index)
        if paragraphs is None:
            logger.warning("Page %d not found in %s", page_index, document_id)
            return None

        display_name = self.registry.display_name(document_id)
        title = (
            f"{display_name} - Chapter {chapter}"
            if chapter
            else f"{display_name} - Page {page_index + 1}"
        )
        return PageView(
            document_id=document_id,
            display_name=display_name,
            page_index=page_index,
            title=title,
            paragraphs=paragraphs,
        )
