"""
Tests for the query entry point in orchestrator.py.

Covers mode selection, user-visible outcome messages, and the error
boundary that keeps every failure inside a QueryOutcome.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from scripture_search.orchestrator import (
    EMPTY_QUERY_MESSAGE,
    SEARCH_FAILED_MESSAGE,
    create_engine,
    run_query,
)
from scripture_search.query_engine import QueryEngine
from scripture_search.tools.document_loader import (
    DocumentCache,
    FileDocumentLoader,
    HttpDocumentLoader,
)
from tests.fixtures.conftest import (
    SAMPLE_LOVE,
    SAMPLE_MATHIU,
    SAMPLE_NO_LOVE,
    FakeLoader,
    _make_registry,
)


def _make_engine(documents: dict[str, str] | None = None) -> QueryEngine:
    if documents is None:
        documents = {
            "Mathiu.html": SAMPLE_MATHIU,
            "Mark.html": SAMPLE_NO_LOVE,
            "Pitor.htm": SAMPLE_LOVE,
        }
    return QueryEngine(_make_registry(), DocumentCache(FakeLoader(documents)))


@pytest.mark.unit
class TestCitationMode:

    def test_found(self):
        outcome = run_query("Mathiu 10:13-15", _make_engine())
        assert outcome.mode == "citation"
        assert outcome.status == "ok"
        assert outcome.header == "Found 3 verses for Mathiu 10:13-15"
        assert [v.verse for v in outcome.verses] == ["13", "14", "15"]
        assert outcome.results == []

    def test_single_verse_header(self):
        outcome = run_query("mathiu 10:16", _make_engine())
        assert outcome.header == "Found 1 verse for Mathiu 10:16-16"

    def test_no_verses(self):
        outcome = run_query("Mathiu 10:40-41", _make_engine())
        assert outcome.status == "no_matches"
        assert outcome.header == "No verses found for Mathiu 10:40-41"
        assert outcome.citation is not None

    def test_book_document_missing(self):
        outcome = run_query("Peter 1:1", _make_engine({}))
        assert outcome.mode == "citation"
        assert outcome.status == "book_not_found"
        assert outcome.header == 'Book "Pitor" not found'

    def test_book_document_fails_to_load(self):
        engine = QueryEngine(
            _make_registry(),
            DocumentCache(FakeLoader({"Mathiu.html": SAMPLE_MATHIU}, failing={"Mathiu.html"})),
        )
        outcome = run_query("Mathiu 10:13", engine)
        assert outcome.status == "book_not_found"
        assert outcome.header == 'Book "Mathiu" not found'
        assert "Mathiu.html" not in engine.cache


@pytest.mark.unit
class TestKeywordMode:

    def test_found(self):
        outcome = run_query("  love ", _make_engine())
        assert outcome.mode == "keyword"
        assert outcome.status == "ok"
        assert outcome.header == 'Found 2 results for "love"'
        assert [r.document_id for r in outcome.results] == ["Pitor.htm", "Pitor.htm"]

    def test_no_results(self):
        outcome = run_query("zebra", _make_engine())
        assert outcome.status == "no_matches"
        assert outcome.header == 'No results found for "zebra"'

    def test_unregistered_book_falls_back_to_keyword(self):
        outcome = run_query("Genesis 1:1", _make_engine())
        assert outcome.mode == "keyword"
        assert outcome.citation is None
        assert outcome.header == 'No results found for "Genesis 1:1"'

    def test_skipped_documents_reported(self):
        outcome = run_query("love", _make_engine())
        assert [s.document_id for s in outcome.skipped] == ["John1,2&3.html"]


@pytest.mark.unit
class TestErrorBoundary:

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query(self, query):
        outcome = run_query(query, _make_engine())
        assert outcome.status == "invalid_query"
        assert outcome.mode == "none"
        assert outcome.header == EMPTY_QUERY_MESSAGE

    def test_unexpected_failure_becomes_generic_message(self, caplog):
        engine = _make_engine()
        with patch.object(engine, "lookup", side_effect=RuntimeError("disk on fire")):
            with caplog.at_level(logging.ERROR):
                outcome = run_query("Mathiu 10:13", engine)
        assert outcome.status == "failed"
        assert outcome.header == SEARCH_FAILED_MESSAGE
        assert "disk on fire" in caplog.text

    def test_engine_usable_after_failure(self):
        engine = _make_engine()
        with patch.object(engine, "search_detailed", side_effect=RuntimeError("boom")):
            assert run_query("love", engine).status == "failed"
        assert run_query("love", engine).status == "ok"


@pytest.mark.unit
class TestCreateEngine:

    def test_filesystem_default(self, tmp_path):
        engine = create_engine(document_root=str(tmp_path))
        assert isinstance(engine.cache.loader, FileDocumentLoader)
        assert engine.cache.loader.root == tmp_path

    def test_base_url_selects_http(self):
        engine = create_engine(base_url="https://example.org/books")
        assert isinstance(engine.cache.loader, HttpDocumentLoader)

    def test_explicit_loader_wins(self):
        loader = FakeLoader({})
        engine = create_engine(base_url="https://example.org", loader=loader)
        assert engine.cache.loader is loader

    def test_engines_do_not_share_cache(self):
        assert create_engine().cache is not create_engine().cache
