"""Shared test fixtures."""
from __future__ import annotations

import pytest

from quiz_extractor.db import Database
from quiz_extractor.models import Answer, Question

ARITHMETIC = (
    "Đoạn văn câu hỏi: What is 2+2?Select one a. 3b. 4c. 5d. 6"
    "Đáp án đúng là: bVì: Basic additionTham khảo: Arithmetic 101"
)


@pytest.fixture
def arithmetic_text():
    """Single question run together without line breaks."""
    return ARITHMETIC


@pytest.fixture
def quiz_text():
    """Three question blocks after a preamble; the third has no "Select one"."""
    return """\
Bài kiểm tra giữa kỳ
Môn: Tổng hợp

Câu hỏi 1
Đoạn văn câu hỏi: Thủ đô của Việt Nam là gì?
Select one:
a. Hà Nội
b. Huế
c. Đà Nẵng
d. Hồ Chí Minh
Phản hồi
Đáp án đúng là: a. Hà Nội
Vì: Hà Nội là thủ đô từ năm 1976.
Tham khảo: Sách giáo khoa Địa lý 12
Câu hỏi 2
Đoạn văn câu hỏi - Số nguyên tố nhỏ nhất là số nào?
Select one:
a. 0
b. 1
c. 2
d. 3
Phản hồi
Đáp án đúng là: c
Vì: 2 là số nguyên tố chẵn duy nhất.
Câu hỏi 3
Đoạn văn câu hỏi: Câu này bị thiếu phần lựa chọn
"""


@pytest.fixture
def tmp_db():
    """Create a fresh in-memory database."""
    db = Database(":memory:")
    yield db
    db.close()


@pytest.fixture
def sample_question():
    """A valid Question object."""
    return Question(
        prompt="What is 2+2?",
        answers=(
            Answer("3"),
            Answer("4", is_correct=True),
            Answer("5"),
            Answer("6"),
        ),
        correct_answer="b",
        explanation="Basic addition",
        reference="Arithmetic 101",
    )
