"""
Verse Extractor: walk a book's markup and produce ordered VerseRecords.

Document structure:
    <div class="page">                      one page container
      <p><b>3.</b><br/>                     bold digits mark a chapter
         1* In the beginning ...<br/>       "N*" starts a verse line
         2* And the earth ...</p>
    </div>

The walk is a left-to-right fold over (page, paragraph, line). The chapter
accumulator starts unset on every page, so verses on a page that precede
its first chapter marker are never emitted, with or without a target
chapter. Pure function: no I/O, no shared state.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from scripture_search.config.constants import (
    CHAPTER_MARKER_PATTERN,
    HTML_PARSER,
    LINE_BREAK_PATTERN,
    PAGE_SELECTOR,
    VERSE_MARKER_PATTERN,
)
from scripture_search.exceptions import ExtractionError
from scripture_search.schemas.verse_output import VerseRecord

logger = logging.getLogger(__name__)

_CHAPTER_RE = re.compile(CHAPTER_MARKER_PATTERN)
_VERSE_RE = re.compile(VERSE_MARKER_PATTERN)
_LINE_BREAK_RE = re.compile(LINE_BREAK_PATTERN, re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")


# ---------------------------------------------------------------------------
# Markup helpers
# ---------------------------------------------------------------------------


def _parse_pages(raw_markup: str) -> list[Tag]:
    """Parse markup and return the page containers in document order."""
    try:
        soup = BeautifulSoup(raw_markup, HTML_PARSER)
        return soup.select(PAGE_SELECTOR)
    except Exception as e:
        raise ExtractionError(f"Could not parse document markup: {e}") from e


def strip_tags(fragment: str) -> str:
    """Remove all tags from a markup fragment, decode entities, trim."""
    return html.unescape(_TAG_RE.sub("", fragment)).strip()


def chapter_marker(paragraph: Tag) -> Optional[str]:
    """
    Return the chapter number announced by a paragraph, if any.

    The first bold span holding only text, whose trimmed text is digits
    optionally followed by periods/whitespace, wins ("3", "3.", "12. ").
    Bold spans with nested tags never qualify. Later bold spans in the
    same paragraph are not consulted.
    """
    for bold in paragraph.find_all("b"):
        if bold.find(True) is not None:
            continue
        match = _CHAPTER_RE.fullmatch(bold.get_text().strip())
        if match:
            return match.group(1)
    return None


def split_lines(paragraph: Tag) -> list[str]:
    """Split a paragraph's inner markup on line-break tags."""
    return _LINE_BREAK_RE.split(paragraph.decode_contents())


# ---------------------------------------------------------------------------
# Fold
# ---------------------------------------------------------------------------


def _verses_in_paragraph(
    paragraph: Tag,
    chapter: str,
    page_index: int,
    document_id: str,
) -> list[VerseRecord]:
    records: list[VerseRecord] = []
    for line in split_lines(paragraph):
        text = strip_tags(line)
        if not text:
            continue
        match = _VERSE_RE.match(text)
        if not match:
            continue
        records.append(
            VerseRecord(
                document_id=document_id,
                chapter=chapter,
                verse=match.group(1),
                text=text,
                page_index=page_index,
                raw_span=line,
            )
        )
    return records


def _fold_paragraph(
    chapter: Optional[str],
    paragraph: Tag,
    page_index: int,
    document_id: str,
    target_chapter: Optional[str],
) -> tuple[Optional[str], list[VerseRecord]]:
    """One fold step: update the chapter accumulator, emit eligible verses."""
    chapter = chapter_marker(paragraph) or chapter
    if chapter is None:
        return chapter, []
    if target_chapter is not None and chapter != target_chapter:
        return chapter, []
    return chapter, _verses_in_paragraph(paragraph, chapter, page_index, document_id)


def _fold_page(
    page: Tag,
    page_index: int,
    document_id: str,
    target_chapter: Optional[str],
) -> list[VerseRecord]:
    chapter: Optional[str] = None
    records: list[VerseRecord] = []
    for paragraph in page.find_all("p"):
        chapter, emitted = _fold_paragraph(
            chapter, paragraph, page_index, document_id, target_chapter,
        )
        records.extend(emitted)
    return records


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_verses(
    raw_markup: str,
    target_chapter: Optional[str] = None,
    *,
    document_id: str,
) -> list[VerseRecord]:
    """
    Extract verse records from one document.

    Args:
        raw_markup: The document's HTML.
        target_chapter: Only emit verses of this chapter; None emits all
            verses that follow a chapter marker on their page.
        document_id: Stamped on every record.

    Returns:
        Records in page, paragraph, line order. No sorting, no dedup.

    Raises:
        ExtractionError: markup could not be parsed.
    """
    records: list[VerseRecord] = []
    for page_index, page in enumerate(_parse_pages(raw_markup)):
        records.extend(_fold_page(page, page_index, document_id, target_chapter))
    logger.debug(
        "Extracted %d verses from %s (chapter=%s)",
        len(records), document_id, target_chapter or "*",
    )
    return records


def extract_page(raw_markup: str, page_index: int) -> Optional[list[str]]:
    """
    Return the inner markup of every paragraph on one page.

    Returns:
        List of paragraph markup strings, or None if the page does not exist.
    """
    if page_index < 0:
        return None
    pages = _parse_pages(raw_markup)
    if page_index >= len(pages):
        return None
    return [p.decode_contents() for p in pages[page_index].find_all("p")]
