"""
Centralized configuration constants for Scripture Search.

All alias tables, markup patterns, and configuration defaults live here.
"""

from __future__ import annotations

from pathlib import Path

# Project root: the directory holding src/
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent

# ---------------------------------------------------------------------------
# Book Registry
# ---------------------------------------------------------------------------

# Normalized (trimmed, lower-cased) alias -> canonical document id
BOOK_ALIASES: dict[str, str] = {
    "mathiu": "Mathiu.html",
    "mark": "Mark.html",
    "luk": "Luk.html",
    "luke": "Luk.html",
    "john": "John.html",
    "phurkimo": "Phurkimo.html",
    "sangho": "Sangho.html",
    "jakob": "Jakob.html",
    "james": "Jakob.html",
    "pitor": "Pitor.htm",
    "peter": "Pitor.htm",
    "pitor2": "Pitor2.html",
    "john1,2&3": "John1,2&3.html",
    "jud": "Jud.html",
    "jude": "Jud.html",
    "aron": "Aron.html",
    "rom": "Rom.html",
    "romans": "Rom.html",
    "korinth1": "Korinth1.html",
    "korinth2": "Korinth2.html",
    "galasia": "Galasia.html",
    "ephesus": "Ephesus.html",
    "philippi": "Philippi.html",
    "kolose": "Kolose.html",
    "thesalonika1": "Thesalonika1.html",
    "thesalonika2": "Thesalonika2.html",
    "timothi1": "Timothi1.html",
    "timothi2": "Timothi2.html",
    "titus": "Titus.html",
    "philemon": "Philemon.html",
    "hibru": "Hibru.html",
    "kapeklang": "Kapeklang.html",
}

# Corpus order used by keyword search
CORPUS_DOCUMENTS: list[str] = [
    "Aron.html", "Ephesus.html", "Galasia.html", "Hibru.html", "Jakob.html",
    "John.html", "John1,2&3.html", "Jud.html", "Kapeklang.html", "Kolose.html",
    "Korinth1.html", "Korinth2.html", "Luk.html", "Mark.html", "Mathiu.html",
    "Philemon.html", "Philippi.html", "Phurkimo.html", "Pitor.htm", "Pitor2.html",
    "Rom.html", "Sangho.html", "Thesalonika1.html", "Thesalonika2.html",
    "Timothi1.html", "Timothi2.html", "Titus.html",
]

# Stripped from a document id to form its display name
DOCUMENT_EXTENSIONS: tuple[str, ...] = (".html", ".htm")

# ---------------------------------------------------------------------------
# Citation grammar and markup conventions
# ---------------------------------------------------------------------------

# "Mathiu 10:13-15", "Mark 3:16", "John1,2&3 1:4"
CITATION_PATTERN: str = r"([a-zA-Z0-9,&\s]+?)\s+(\d+):(\d+)(?:-(\d+))?"

# Bold span content that marks a chapter: "3", "3.", "12. "
CHAPTER_MARKER_PATTERN: str = r"([0-9]+)[.\s]*"

# Line prefix that marks a verse: "1* In the beginning"
VERSE_MARKER_PATTERN: str = r"([0-9]+)\*"

# Line separator inside a paragraph
LINE_BREAK_PATTERN: str = r"<br\s*/?>"

PAGE_SELECTOR: str = "div.page"

# HTML5 tree builder: an open <p> closes when the next one starts
HTML_PARSER: str = "html5lib"

# ---------------------------------------------------------------------------
# Highlighting and presentation
# ---------------------------------------------------------------------------

HIGHLIGHT_OPEN: str = '<span class="highlight">'
HIGHLIGHT_CLOSE: str = "</span>"
PREVIEW_MAX_CHARS: int = 250

# ---------------------------------------------------------------------------
# Document loading
# ---------------------------------------------------------------------------

DOCUMENT_ROOT: str = str(_PROJECT_ROOT / "books")
DOCUMENT_ENCODING: str = "utf-8"
HTTP_TIMEOUT: float = 15.0              # Seconds per document fetch
HTTP_USER_AGENT: str = "ScriptureSearch/0.1 (document-loader)"
SEARCH_PREFETCH_WORKERS: int = 1        # >1 loads documents on a thread pool

# Environment variables read by the CLI
ENV_DOCUMENT_ROOT: str = "SCRIPTURE_DOCUMENT_ROOT"
ENV_DOCUMENT_URL: str = "SCRIPTURE_DOCUMENT_URL"
