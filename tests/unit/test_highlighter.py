"""
Tool tests for highlighter.py.

Tests case-insensitive matching, escaping of every segment, and that
removing the markers restores the original text.
"""

from __future__ import annotations

import pytest

from scripture_search.tools.highlighter import (
    contains_term,
    escape_text,
    highlight_text,
    remove_highlights,
    term_matcher,
)


@pytest.mark.tool
class TestHighlightText:

    def test_single_match_keeps_original_casing(self):
        out = highlight_text("God so LOVED the world", term_matcher("love"))
        assert out == 'God so <span class="highlight">LOVE</span>D the world'

    def test_every_occurrence_wrapped(self):
        out = highlight_text("love, Love, lOvE", term_matcher("LOVE"))
        assert out.count('<span class="highlight">') == 3

    def test_unmatched_segments_escaped(self):
        out = highlight_text("bread & <wine> love", term_matcher("love"))
        assert out == 'bread &amp; &lt;wine&gt; <span class="highlight">love</span>'

    def test_term_itself_escaped(self):
        out = highlight_text("use <b> here", term_matcher("<b>"))
        assert out == 'use <span class="highlight">&lt;b&gt;</span> here'

    def test_regex_metacharacters_are_literal(self):
        matcher = term_matcher("a.c")
        assert not contains_term("abc", matcher)
        assert highlight_text("x a.c y", matcher) == 'x <span class="highlight">a.c</span> y'

    def test_no_match_is_just_escaped(self):
        assert highlight_text("a < b", term_matcher("zzz")) == escape_text("a < b")


@pytest.mark.tool
class TestContainsTerm:

    @pytest.mark.parametrize("text, term, expected", [
        ("God so LOVED the world", "love", True),
        ("beloved", "LOVE", True),
        ("charity", "love", False),
        ("1* In the beginning", "1*", True),
        ("1* ΟΔΟΣ", "σ", False),
        ("1* ΟΔΟΣ ΕΣΤΙ", "σ", True),
    ])
    def test_containment_matches_lowercase_substring(self, text, term, expected):
        assert contains_term(text, term_matcher(term)) is expected
        assert (term.lower() in text.lower()) is expected

    def test_final_sigma_follows_str_lower(self):
        text = "ΟΔΟΣ ΕΣΤΙ"
        out = highlight_text(text, term_matcher("σ"))
        assert out == 'ΟΔΟΣ Ε<span class="highlight">Σ</span>ΤΙ'

    def test_length_changing_lowercase_keeps_offsets(self):
        out = highlight_text("İstanbul love", term_matcher("love"))
        assert out == 'İstanbul <span class="highlight">love</span>'


@pytest.mark.tool
class TestRoundTrip:

    @pytest.mark.parametrize("text, term", [
        ("God so LOVED the world", "love"),
        ('He said "peace" & <left>', "e"),
        ('<span class="highlight">x</span> literal', "x"),
        ("nothing matches here", "zzz"),
        ("a&amp;b", "&"),
    ])
    def test_remove_highlights_restores_text(self, text, term):
        assert remove_highlights(highlight_text(text, term_matcher(term))) == text
