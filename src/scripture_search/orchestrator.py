"""
Orchestrator: the single query entry point.

    query -> validate -> parse citation -> citation lookup
                                        -> (not a citation) keyword search

This is the error boundary. Blank input becomes an invalid-query outcome,
a cited book that is missing or fails to load becomes a "not found"
outcome, and any unexpected failure is logged and turned into a generic
retry message. Nothing raised below this point escapes run_query().
"""

from __future__ import annotations

import logging
from typing import Optional

from scripture_search.config.constants import DOCUMENT_ROOT, SEARCH_PREFETCH_WORKERS
from scripture_search.exceptions import (
    DocumentLoadError,
    DocumentNotFoundError,
    InvalidQueryError,
)
from scripture_search.query_engine import QueryEngine
from scripture_search.schemas.citation import Citation
from scripture_search.schemas.query_output import QueryOutcome, SkippedDocument
from scripture_search.tools.book_registry import BookRegistry
from scripture_search.tools.citation_parser import parse_citation
from scripture_search.tools.document_loader import (
    DocumentCache,
    DocumentLoader,
    FileDocumentLoader,
    HttpDocumentLoader,
)
from scripture_search.utils import pluralize

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please enter a search query or Bible reference"
SEARCH_FAILED_MESSAGE = "Error during search. Please try again."


def create_engine(
    document_root: Optional[str] = None,
    base_url: Optional[str] = None,
    registry: Optional[BookRegistry] = None,
    loader: Optional[DocumentLoader] = None,
    max_workers: int = SEARCH_PREFETCH_WORKERS,
) -> QueryEngine:
    """
    Build a QueryEngine with its own document cache.

    Loader precedence: explicit ``loader``, then ``base_url`` (HTTP),
    then ``document_root`` (filesystem, default DOCUMENT_ROOT).
    """
    if loader is None:
        if base_url:
            loader = HttpDocumentLoader(base_url)
        else:
            loader = FileDocumentLoader(document_root or DOCUMENT_ROOT)
    return QueryEngine(
        registry=registry or BookRegistry.default(),
        cache=DocumentCache(loader),
        max_workers=max_workers,
    )


def _citation_outcome(query: str, citation: Citation, engine: QueryEngine) -> QueryOutcome:
    try:
        verses = engine.lookup(citation)
    except (DocumentNotFoundError, DocumentLoadError) as e:
        logger.warning(
            "Cited book could not be loaded: %s (%s)", citation.document_id, e.message,
        )
        return QueryOutcome(
            query=query,
            mode="citation",
            status="book_not_found",
            header=f'Book "{citation.display_name}" not found',
            citation=citation,
        )

    if not verses:
        return QueryOutcome(
            query=query,
            mode="citation",
            status="no_matches",
            header=f"No verses found for {citation.label}",
            citation=citation,
        )

    return QueryOutcome(
        query=query,
        mode="citation",
        status="ok",
        header=f"Found {pluralize(len(verses), 'verse')} for {citation.label}",
        citation=citation,
        verses=verses,
    )


def _keyword_outcome(query: str, term: str, engine: QueryEngine) -> QueryOutcome:
    results, errors = engine.search_detailed(term)
    skipped = [SkippedDocument(document_id=e.source, reason=e.message) for e in errors]

    if not results:
        return QueryOutcome(
            query=query,
            mode="keyword",
            status="no_matches",
            header=f'No results found for "{term}"',
            skipped=skipped,
        )

    return QueryOutcome(
        query=query,
        mode="keyword",
        status="ok",
        header=f'Found {pluralize(len(results), "result")} for "{term}"',
        results=results,
        skipped=skipped,
    )


def run_query(query: str, engine: QueryEngine) -> QueryOutcome:
    """
    Answer one free-text query.

    Args:
        query: Citation ("Mathiu 10:13-15") or keyword ("love").
        engine: Engine holding the registry and document cache.

    Returns:
        QueryOutcome; never raises for bad input or failed documents.
    """
    try:
        term = query.strip() if query else ""
        if not term:
            raise InvalidQueryError(EMPTY_QUERY_MESSAGE)

        citation = parse_citation(term, engine.registry)
        if citation is not None:
            logger.info("Citation query: %s", citation.label)
            return _citation_outcome(query, citation, engine)

        logger.info("Keyword query: %r", term)
        return _keyword_outcome(query, term, engine)

    except InvalidQueryError as e:
        return QueryOutcome(
            query=query or "",
            mode="none",
            status="invalid_query",
            header=e.message,
        )
    except Exception:
        logger.exception("Search failed for query %r", query)
        return QueryOutcome(
            query=query or "",
            mode="none",
            status="failed",
            header=SEARCH_FAILED_MESSAGE,
        )
