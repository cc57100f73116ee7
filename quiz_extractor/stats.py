"""Word, character and page counts for extracted document text."""
from __future__ import annotations

import math

from quiz_extractor.models import TextStats

WORDS_PER_PAGE = 250


def text_stats(text: str, words_per_page: int = WORDS_PER_PAGE) -> TextStats:
    word_count = len(text.split())
    return TextStats(
        word_count=word_count,
        character_count=len(text),
        # Rough estimate; documents arrive as plain text with no page breaks
        page_count=math.ceil(word_count / max(1, words_per_page)),
    )
