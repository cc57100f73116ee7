from __future__ import annotations


class ExtractionError(Exception):
    """Base class for errors raised by the question extractor in strict mode."""


class SegmentError(ExtractionError):
    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Segment {index}: {reason}")
