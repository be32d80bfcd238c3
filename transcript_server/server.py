from __future__ import annotations

import typing as t

from fastmcp import FastMCP

from study_planner.segmenter import segment_study_plan
from .course_impact import calculate_course_impact
from .models import CourseImpact, CourseRecord, EstimatedScores, PotentialGain, StudyDay
from .ocr_utils import extract_transcript_text
from .parser import parse_grade_lines
from .scoring import estimate_sat_scores, find_untaken_high_impact_courses


mcp = FastMCP("TranscriptServer")


# -----------------------------
# MCP Tool Implementation
# -----------------------------

@mcp.tool()
def recognize_transcript(path_or_url: str) -> str:
    """
    Run OCR over a transcript image or PDF and return the recognized text.
    """
    return extract_transcript_text(path_or_url)


@mcp.tool()
def parse_transcript_text(text: str) -> list[CourseRecord]:
    """
    Parse recognized transcript text into (course, grade) records.

    Lines look like "AP Calculus BC - A-"; lines without a trailing grade get "N/A".
    """
    return parse_grade_lines(text)


@mcp.tool()
def estimate_scores(courses: list[CourseRecord]) -> EstimatedScores:
    """Estimate SAT Math and English baselines from taken courses."""
    return estimate_sat_scores(courses)


@mcp.tool()
def find_untaken_courses(courses: list[CourseRecord]) -> list[PotentialGain]:
    """List high-impact courses missing from the transcript and the points each could add."""
    return find_untaken_high_impact_courses(courses)


@mcp.tool()
def course_impact(course: str, grade: str) -> t.Optional[CourseImpact]:
    """
    SAT impact of one completed course given a numeric grade (0-100).

    Returns None when the course is not related to any SAT section.
    """
    return calculate_course_impact(course, grade)


@mcp.tool()
def segment_plan(plan: str) -> list[StudyDay]:
    """Split study plan text into day-by-day task lists."""
    return segment_study_plan(plan)


if __name__ == "__main__":
    # Run as an MCP server over stdio
    mcp.run()
