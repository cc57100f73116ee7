"""Tests for document text statistics."""
from __future__ import annotations

from quiz_extractor.stats import text_stats


class TestTextStats:
    def test_empty(self):
        s = text_stats("")
        assert s.word_count == 0
        assert s.character_count == 0
        assert s.page_count == 0

    def test_counts(self):
        s = text_stats("Thủ đô  của\nViệt Nam")
        assert s.word_count == 5
        assert s.character_count == len("Thủ đô  của\nViệt Nam")
        assert s.page_count == 1

    def test_page_rounding(self):
        assert text_stats(" ".join(["từ"] * 250)).page_count == 1
        assert text_stats(" ".join(["từ"] * 251)).page_count == 2

    def test_custom_words_per_page(self):
        assert text_stats("a b c d e", words_per_page=2).page_count == 3
