"""
Shared test fixtures for Scripture Search tests.

Provides sample book markup, an in-memory fake loader, and factory
helpers following the _make_*() pattern.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from scripture_search.exceptions import DocumentLoadError
from scripture_search.tools.book_registry import BookRegistry


# ---------------------------------------------------------------------------
# Sample markup
# ---------------------------------------------------------------------------

# One page, one paragraph, chapter "3." with two verses
SAMPLE_SINGLE_PAGE = """
<html><body>
<div class="page">
  <p><b>3.</b><br>1* In the beginning<br>2* And the earth</p>
</div>
</body></html>
"""

# Chapter 10, verses 12-16, split across two paragraphs of one page
SAMPLE_MATHIU = """
<html><body>
<div class="page">
  <p><b>9.</b><br/>35* Jesus went about all the cities<br/>36* He had compassion</p>
  <p><b>10.</b><br/>12* And when ye come into an house, salute it.<br/>
     13* And if the house be worthy, let your peace come upon it.<br/>
     14* And whosoever shall not receive you</p>
  <p>15* Verily I say unto you<br/>16* Behold, I send you forth</p>
</div>
<div class="page">
  <p>17* But beware of men, this page has no marker yet</p>
  <p><b>11</b><br/>1* And it came to pass</p>
</div>
</body></html>
"""

# Verses appear before the first chapter marker on the second page
SAMPLE_PRE_MARKER = """
<div class="page">
  <p><b>1.</b><br/>1* First verse of chapter one<br/>2* Second verse</p>
</div>
<div class="page">
  <p>3* Orphan verse before any marker on this page</p>
  <p><b>2.</b><br/>1* First verse of chapter two</p>
</div>
"""

SAMPLE_LOVE = """
<div class="page">
  <p><b>1.</b><br/>1* God so LOVED the world<br/>2* Love is patient &amp; kind
  <br/>3* Nothing to see here</p>
</div>
"""

SAMPLE_NO_LOVE = """
<div class="page">
  <p><b>1.</b><br/>1* The beginning of the gospel<br/>2* As it is written</p>
</div>
"""


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeLoader:
    """In-memory loader. Missing ids are not-found; ids in ``failing`` raise."""

    def __init__(self, documents: dict[str, str], failing: Optional[set[str]] = None):
        self.documents = dict(documents)
        self.failing = set(failing or ())
        self.calls: list[str] = []

    def load(self, document_id: str) -> Optional[str]:
        self.calls.append(document_id)
        if document_id in self.failing:
            raise DocumentLoadError(f"Transient failure for {document_id}")
        return self.documents.get(document_id)


def _make_registry(**overrides) -> BookRegistry:
    defaults = {
        "aliases": {
            "mathiu": "Mathiu.html",
            "mark": "Mark.html",
            "pitor": "Pitor.htm",
            "peter": "Pitor.htm",
            "john1,2&3": "John1,2&3.html",
        },
        "documents": ["Mark.html", "Mathiu.html", "Pitor.htm", "John1,2&3.html"],
    }
    return BookRegistry(**(defaults | overrides))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_books(directory: Path) -> Path:
    """Write a few sample books to ``directory`` and return it."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "Mathiu.html").write_text(SAMPLE_MATHIU, encoding="utf-8")
    (directory / "Mark.html").write_text(SAMPLE_NO_LOVE, encoding="utf-8")
    (directory / "Pitor.htm").write_text(SAMPLE_LOVE, encoding="utf-8")
    return directory

