#!/usr/bin/env python3
"""
CLI entry point for Scripture Search.

Usage:
    # Citation lookup
    python run_search.py "Mathiu 10:13-15" --documents books/

    # Keyword search across every book
    python run_search.py "love" --documents books/ -v

    # Documents served over HTTP, with the page around the first hit
    python run_search.py "Mark 3:16-18" --base-url https://example.org/books --page

    # List books and their aliases
    python run_search.py --books
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from scripture_search.config.constants import (
    ENV_DOCUMENT_ROOT,
    ENV_DOCUMENT_URL,
    SEARCH_PREFETCH_WORKERS,
)
from scripture_search.exceptions import ScriptureSearchException
from scripture_search.orchestrator import create_engine, run_query
from scripture_search.schemas.query_output import QueryOutcome
from scripture_search.schemas.verse_output import PageView
from scripture_search.tools.highlighter import escape_text
from scripture_search.utils import truncate_preview


def _print_outcome(outcome: QueryOutcome) -> None:
    print(outcome.header)
    if outcome.citation is not None:
        name = outcome.citation.display_name
        for v in outcome.verses:
            print(f"  {name} {v.chapter}:{v.verse}  {escape_text(truncate_preview(v.text))}")
    for r in outcome.results:
        print(f"  {r.display_name} {r.chapter}:{r.verse}  {truncate_preview(r.highlighted_text)}")
    for s in outcome.skipped:
        print(f"  (skipped {s.document_id}: {s.reason})")


def _first_page(engine, outcome: QueryOutcome) -> Optional[PageView]:
    hits = outcome.verses or outcome.results
    if not hits:
        return None
    first = hits[0]
    return engine.page_view(first.document_id, first.page_index, chapter=first.chapter)


def _print_page(view: PageView) -> None:
    print(f"\n{view.title}\n")
    for para in view.paragraphs:
        print(para)
        print()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Scripture Search: look up a citation or search every book for a keyword.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  python run_search.py "Mathiu 10:13-15"\n'
            '  python run_search.py "love" --documents books/\n'
            "  python run_search.py --books\n"
        ),
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help='Citation ("Book C:V" or "Book C:V1-V2") or keyword',
    )
    parser.add_argument(
        "--documents", "-d",
        default=None,
        help=f"Directory holding the book documents (env: {ENV_DOCUMENT_ROOT})",
    )
    parser.add_argument(
        "--base-url", "-u",
        default=None,
        help=f"Fetch documents over HTTP from this base URL (env: {ENV_DOCUMENT_URL})",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=SEARCH_PREFETCH_WORKERS,
        help="Parallel document loads for keyword search (default: 1)",
    )
    parser.add_argument(
        "--page",
        action="store_true",
        help="Also print the full page around the first hit",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the outcome as JSON",
    )
    parser.add_argument(
        "--books",
        action="store_true",
        help="List the books and aliases the registry knows",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    _env_path = Path(__file__).parent / ".env"
    if _env_path.exists():
        load_dotenv(_env_path)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        engine = create_engine(
            document_root=args.documents or os.environ.get(ENV_DOCUMENT_ROOT),
            base_url=args.base_url or os.environ.get(ENV_DOCUMENT_URL),
            max_workers=args.workers,
        )
    except ScriptureSearchException as e:
        print(f"\nError: {e.message}", file=sys.stderr)
        return 1

    if args.books:
        for book in engine.registry.list_books():
            aliases = ", ".join(book["aliases"]) or "-"
            print(f"  {book['display_name']:<14} {book['document_id']:<20} {aliases}")
        return 0

    outcome = run_query(args.query or "", engine)

    view = None
    if args.page and outcome.status == "ok":
        try:
            view = _first_page(engine, outcome)
        except ScriptureSearchException as e:
            logging.getLogger(__name__).error("Page view failed: %s", e.message)

    if args.json:
        payload = outcome.model_dump(mode="json")
        if args.page:
            payload["page"] = view.model_dump(mode="json") if view is not None else None
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        _print_outcome(outcome)
        if view is not None:
            _print_page(view)

    if outcome.status in ("invalid_query", "failed"):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
