"""Turns OCR output into (course, grade) records."""
from __future__ import annotations

import re

from .models import GRADE_VOCABULARY, NO_GRADE, CourseRecord

# Modified grades ("B+") sit before the bare letter in GRADE_VOCABULARY, so the
# alternation tries them first.
_GRADE_ALTERNATION = "|".join(re.escape(g) for g in GRADE_VOCABULARY)
GRADE_LINE_PATTERN = re.compile(rf"^(.*)-\s*({_GRADE_ALTERNATION})\s*$")


def _normalize_course_name(name: str) -> str:
    name = name.strip()
    return name[:1].upper() + name[1:]


def parse_grade_line(line: str) -> CourseRecord:
    """
    Parse one transcript line of the form "<course> - <grade>".

    Lines without a trailing grade keep the whole text as the course name and
    get the "N/A" grade.
    """
    line = line.strip()
    match = GRADE_LINE_PATTERN.match(line)
    if match and match.group(1).strip():
        return CourseRecord(
            course=_normalize_course_name(match.group(1)),
            grade=match.group(2),
        )
    return CourseRecord(course=_normalize_course_name(line), grade=NO_GRADE)


def parse_grade_lines(text: str) -> list[CourseRecord]:
    """
    Parse raw multi-line OCR text into course records, preserving line order.

    :param text: Recognized transcript text, one course per line.
    :return: One CourseRecord per non-blank line.
    """
    return [
        parse_grade_line(line)
        for line in (text or "").splitlines()
        if line.strip()
    ]
