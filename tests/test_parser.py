# -*- coding: utf-8 -*-
"""Tests for turning OCR text into course records."""
import pytest

from transcript_server.models import GRADE_VOCABULARY, NO_GRADE, CourseRecord
from transcript_server.parser import parse_grade_line, parse_grade_lines


@pytest.mark.parametrize(
    "line, expected",
    [
        ("AP Calculus BC - A-", CourseRecord("AP Calculus BC", "A-")),
        ("Spanish 2 - B+", CourseRecord("Spanish 2", "B+")),
        ("Biology - F   ", CourseRecord("Biology", "F")),
        ("World History -A", CourseRecord("World History", "A")),
        ("Chemistry - C-", CourseRecord("Chemistry", "C-")),
    ],
)
def test_trailing_grade_is_split_off(line: str, expected: CourseRecord) -> None:
    """Lines ending in "- <grade>" yield the trimmed name and the grade token."""
    assert parse_grade_line(line) == expected


def test_hyphenated_course_name_splits_at_last_dash() -> None:
    """A dash inside the course name is not mistaken for the separator."""
    assert parse_grade_line("Pre-Calculus - B") == CourseRecord("Pre-Calculus", "B")


def test_line_without_trailing_grade_gets_sentinel() -> None:
    """Letters that merely appear inside the name are not grades."""
    assert parse_grade_line("English Literature") == CourseRecord("English Literature", NO_GRADE)
    assert parse_grade_line("Art A") == CourseRecord("Art A", NO_GRADE)
    assert parse_grade_line("Chemistry - Excellent") == CourseRecord("Chemistry - Excellent", NO_GRADE)
    assert parse_grade_line("History - AB") == CourseRecord("History - AB", NO_GRADE)


def test_course_name_leading_character_is_capitalized() -> None:
    """OCR often loses the capital on the first letter."""
    assert parse_grade_line("  algebra 2 - A") == CourseRecord("Algebra 2", "A")
    assert parse_grade_line("physics") == CourseRecord("Physics", NO_GRADE)


def test_blank_lines_are_skipped_and_order_is_kept() -> None:
    """Whitespace-only lines never produce records."""
    text = "Algebra 1 - B\n\n   \r\nAP English Language - A+\r\nStudy Hall\n"

    records = parse_grade_lines(text)

    assert records == [
        CourseRecord("Algebra 1", "B"),
        CourseRecord("AP English Language", "A+"),
        CourseRecord("Study Hall", NO_GRADE),
    ]


def test_empty_text_yields_no_records() -> None:
    assert parse_grade_lines("") == []
    assert parse_grade_lines("\n \n\t\n") == []


def test_modified_grades_come_before_bare_letters() -> None:
    """The grade alternation tries "B-" before "B"."""
    for letter in "ABCD":
        assert GRADE_VOCABULARY.index(f"{letter}+") < GRADE_VOCABULARY.index(letter)
        assert GRADE_VOCABULARY.index(f"{letter}-") < GRADE_VOCABULARY.index(letter)
    assert parse_grade_line("Geometry - B-") == CourseRecord("Geometry", "B-")
