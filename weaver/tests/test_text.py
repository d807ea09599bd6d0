"""
Tests for text cleanup, truncation and snippets.
"""

from weaver.text import clean_text, create_snippet, truncate_at_boundary


class TestCleanText:
    """Tests for HTML stripping."""

    def test_strips_tags_and_decodes_entities(self):
        assert clean_text("<p>Tom &amp; Jerry</p>") == "Tom & Jerry"

    def test_collapses_whitespace(self):
        assert clean_text("  one\n\n two\tthree  ") == "one two three"

    def test_empty_input(self):
        assert clean_text(None) == ""
        assert clean_text("") == ""

    def test_inline_tags_do_not_split_words(self):
        assert clean_text("<p>Hello <b>wor</b>ld.</p>") == "Hello world."
        assert clean_text("<p>US-<b>China</b> trade</p>") == "US-China trade"


class TestTruncateAtBoundary:
    """Tests for boundary-aware truncation."""

    def test_short_text_unchanged(self):
        assert truncate_at_boundary("Short text.", 2000) == "Short text."

    def test_keeps_sentence_past_seventy_percent(self):
        """A '.' at index 1799 of a 2500-char text gives exactly 1800 chars."""
        text = "a" * 1799 + "." + "b" * 700
        result = truncate_at_boundary(text, 2000)
        assert len(result) == 1800
        assert result.endswith(".")

    def test_ignores_early_sentence_and_uses_paragraph(self):
        text = "a" * 100 + "." + "b" * 1100 + "\n" + "c" * 1000
        result = truncate_at_boundary(text, 2000)
        assert result == "a" * 100 + "." + "b" * 1100

    def test_falls_back_to_word_boundary(self):
        text = ("word " * 500).strip()
        result = truncate_at_boundary(text, 103)
        assert len(result) <= 103
        assert not result.endswith(" ")
        assert result.endswith("word")

    def test_hard_cut_without_boundaries(self):
        assert truncate_at_boundary("x" * 50, 10) == "x" * 10


class TestCreateSnippet:
    """Tests for article card snippets."""

    def test_short_text_is_cleaned_only(self):
        assert create_snippet("<b>Hello</b> world") == "Hello world"

    def test_link_markup_keeps_punctuation_attached(self):
        assert create_snippet('Read <a href="x">more</a>.') == "Read more."

    def test_word_boundary_gets_ellipsis(self):
        text = "lorem ipsum " * 40
        snippet = create_snippet(text)
        assert snippet.endswith("...")
        assert len(snippet) <= 203

    def test_sentence_boundary_has_no_ellipsis(self):
        text = "a " * 80 + "end." + " more words" * 20
        snippet = create_snippet(text)
        assert snippet.endswith("end.")
