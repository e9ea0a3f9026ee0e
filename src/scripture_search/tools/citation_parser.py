"""
Citation Parser: turn a query string into a structured Citation.

Recognizes "Book Chapter:Verse" and "Book Chapter:VerseStart-VerseEnd"
(e.g. "Mathiu 10:13-15"). Anything else, including a well-formed citation
naming a book the registry does not know, is not a citation and the
caller falls back to keyword search.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from scripture_search.config.constants import CITATION_PATTERN
from scripture_search.schemas.citation import Citation
from scripture_search.tools.book_registry import BookRegistry
from scripture_search.utils import normalize_alias

logger = logging.getLogger(__name__)

_CITATION_RE = re.compile(CITATION_PATTERN, re.ASCII)


def parse_citation(query: str, registry: BookRegistry) -> Optional[Citation]:
    """
    Parse a citation query.

    Args:
        query: Raw user input.
        registry: Book registry used to resolve the book name.

    Returns:
        Citation on success; None when the query is not a citation.
    """
    match = _CITATION_RE.fullmatch(query.strip())
    if not match:
        return None

    book_input = normalize_alias(match.group(1))
    document_id = registry.resolve(book_input)
    if document_id is None:
        logger.warning("Book not found: %s", book_input)
        return None

    verse_start = int(match.group(3))
    verse_end = int(match.group(4)) if match.group(4) else verse_start
    if verse_end < verse_start:
        logger.warning(
            "Reversed verse range in %r, treating as keyword query", query.strip(),
        )
        return None

    return Citation(
        document_id=document_id,
        display_name=registry.display_name(document_id),
        chapter=match.group(2),
        verse_start=verse_start,
        verse_end=verse_end,
    )
