"""
Query Entry Point — Output Schema

QueryOutcome is the single value returned for one free-text query,
whichever mode (citation lookup or keyword search) answered it.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from scripture_search.schemas.citation import Citation
from scripture_search.schemas.verse_output import SearchResult, VerseRecord


class SkippedDocument(BaseModel):
    """A document a keyword search could not load."""

    document_id: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1)


class QueryOutcome(BaseModel):
    """Top-level result of run_query()."""

    query: str = Field(..., description="Query as typed")
    mode: Literal["citation", "keyword", "none"] = Field(...)
    status: Literal["ok", "no_matches", "book_not_found", "invalid_query", "failed"] = Field(...)
    header: str = Field(..., min_length=1, description="User-visible summary line")
    citation: Optional[Citation] = Field(None)
    verses: list[VerseRecord] = Field(default_factory=list)
    results: list[SearchResult] = Field(default_factory=list)
    skipped: list[SkippedDocument] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_mode_payload(self) -> QueryOutcome:
        if self.mode == "citation" and self.citation is None:
            raise ValueError("Citation outcome must carry the parsed citation")
        if self.mode != "citation" and self.verses:
            raise ValueError("Only citation outcomes carry verse records")
        if self.mode != "keyword" and self.results:
            raise ValueError("Only keyword outcomes carry search results")
        if self.status == "ok" and not (self.verses or self.results):
            raise ValueError("An 'ok' outcome must have at least one hit")
        return self

    @property
    def hit_count(self) -> int:
        return len(self.verses) + len(self.results)
