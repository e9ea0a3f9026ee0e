"""
Citation Parser — Output Schema

A structured book + chapter + verse-range reference resolved from user input.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from scripture_search.utils import format_range


class Citation(BaseModel):
    """A resolved "Book Chapter:VerseStart-VerseEnd" reference."""

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(..., min_length=1, description="Canonical document id e.g. Mathiu.html")
    display_name: str = Field(..., min_length=1, description="Human-readable book name")
    chapter: str = Field(..., pattern=r"^[0-9]+$", description="Chapter as a decimal string")
    verse_start: int = Field(..., ge=0)
    verse_end: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_range(self) -> Citation:
        if self.verse_start > self.verse_end:
            raise ValueError(
                f"verse_start ({self.verse_start}) must not exceed verse_end ({self.verse_end})"
            )
        return self

    @property
    def label(self) -> str:
        """e.g. 'Mathiu 10:13-15'."""
        return f"{self.display_name} {format_range(self.chapter, self.verse_start, self.verse_end)}"

    def contains(self, verse: str) -> bool:
        """Numeric inclusive range check for an extracted verse number."""
        return self.verse_start <= int(verse) <= self.verse_end
