"""
Utility functions for Scripture Search.

Provides alias normalization and document-id naming helpers.
"""

from __future__ import annotations

from scripture_search.config.constants import DOCUMENT_EXTENSIONS, PREVIEW_MAX_CHARS


def normalize_alias(name: str) -> str:
    """Normalize a user-typed book name for registry lookup."""
    return name.strip().lower()


def display_name_for(document_id: str) -> str:
    """
    Derive the human-readable book name from a document id.

    Example:
        "Mathiu.html" -> "Mathiu"
        "Pitor.htm"   -> "Pitor"
    """
    for ext in DOCUMENT_EXTENSIONS:
        if document_id.endswith(ext):
            return document_id[: -len(ext)]
    return document_id


def format_range(chapter: str, verse_start: int, verse_end: int) -> str:
    """Render "C:S-E" the way result headers show a citation."""
    return f"{chapter}:{verse_start}-{verse_end}"


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def truncate_preview(text: str, max_chars: int = PREVIEW_MAX_CHARS) -> str:
    return text[:max_chars]
