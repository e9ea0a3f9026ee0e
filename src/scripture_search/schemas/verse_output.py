"""
Verse Extractor and Query Engine — Output Schema

Defines VerseRecord (one extracted verse), SearchResult (one keyword hit),
and PageView (the full page around a selected verse).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class VerseRecord(BaseModel):
    """One extracted, addressable verse."""

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(..., min_length=1)
    chapter: str = Field(..., pattern=r"^[0-9]+$")
    verse: str = Field(..., pattern=r"^[0-9]+$")
    text: str = Field(..., min_length=1, description="Tag-stripped line, verse marker retained")
    page_index: int = Field(..., ge=0, description="Zero-based page container index")
    raw_span: str = Field(..., min_length=1, description="Original un-stripped line fragment")


class SearchResult(BaseModel):
    """A keyword hit with every occurrence of the term highlighted."""

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    chapter: str = Field(..., pattern=r"^[0-9]+$")
    verse: str = Field(..., pattern=r"^[0-9]+$")
    page_index: int = Field(..., ge=0)
    text: str = Field(..., min_length=1, description="Plain verse text the hit was found in")
    highlighted_text: str = Field(..., min_length=1, description="Escaped text with highlight markers")


class PageView(BaseModel):
    """Full page content for one (document, page) pair."""

    document_id: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    page_index: int = Field(..., ge=0)
    title: str = Field(..., min_length=1, description="e.g. 'Mathiu - Chapter 10'")
    paragraphs: list[str] = Field(default_factory=list, description="Inner markup per paragraph")
