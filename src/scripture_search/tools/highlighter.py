"""
Highlighter: case-insensitive term matching and safe highlight markup.

Matching compares ``str.lower()`` of the term against ``str.lower()`` of
the text, so a verse is a hit exactly when the lower-cased term is a
substring of the lower-cased verse. Highlight spans are mapped back onto
the original text, keeping its casing inside the marker. Every segment,
matched or not, is HTML-escaped.
"""

from __future__ import annotations

import html
from dataclasses import dataclass

from scripture_search.config.constants import HIGHLIGHT_CLOSE, HIGHLIGHT_OPEN


def _lower_with_offsets(text: str) -> tuple[str, list[int]]:
    """
    Lower-case ``text`` and map each lowered position to its source index.

    str.lower() never shortens a code point, so equal lengths mean the
    positions line up one to one. Otherwise (e.g. "İ" -> "i̇") the text
    is lowered per character to keep the mapping.
    """
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered, list(range(len(text)))
    pieces: list[str] = []
    origin: list[int] = []
    for index, char in enumerate(text):
        low = char.lower()
        pieces.append(low)
        origin.extend([index] * len(low))
    return "".join(pieces), origin


@dataclass(frozen=True)
class TermMatcher:
    """Literal, lower-case matcher for one search term."""

    needle: str

    def contains(self, text: str) -> bool:
        return self.needle in text.lower()

    def spans(self, text: str) -> list[tuple[int, int]]:
        """Non-overlapping (start, end) spans of the term in ``text``."""
        if not self.needle:
            return []
        lowered, origin = _lower_with_offsets(text)
        found: list[tuple[int, int]] = []
        start = lowered.find(self.needle)
        while start != -1:
            end = start + len(self.needle)
            found.append((origin[start], origin[end - 1] + 1))
            start = lowered.find(self.needle, end)
        return found


def term_matcher(term: str) -> TermMatcher:
    """Build the matcher for a search term."""
    return TermMatcher(needle=term.lower())


def contains_term(text: str, matcher: TermMatcher) -> bool:
    return matcher.contains(text)


def escape_text(text: str) -> str:
    return html.escape(text, quote=False)


def highlight_text(text: str, matcher: TermMatcher) -> str:
    """
    Wrap every match of ``matcher`` in the highlight marker.

    Example (term "love"):
        "God is Love & <light>" ->
        'God is <span class="highlight">Love</span> &amp; &lt;light&gt;'
    """
    parts: list[str] = []
    cursor = 0
    for start, end in matcher.spans(text):
        parts.append(escape_text(text[cursor:start]))
        parts.append(HIGHLIGHT_OPEN + escape_text(text[start:end]) + HIGHLIGHT_CLOSE)
        cursor = end
    parts.append(escape_text(text[cursor:]))
    return "".join(parts)


def remove_highlights(highlighted: str) -> str:
    """Inverse of highlight_text: drop markers and unescape."""
    return html.unescape(highlighted.replace(HIGHLIGHT_OPEN, "").replace(HIGHLIGHT_CLOSE, ""))
