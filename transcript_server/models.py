"""
Data models for transcript parsing and SAT estimation.

This module contains all the dataclasses used to represent parsed transcript
records, score estimates and the static course/section catalogs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple


# Type literals for commonly used values
Subject = Literal["Math", "English"]

GRADE_VOCABULARY: Tuple[str, ...] = (
    "A+", "A-", "A",
    "B+", "B-", "B",
    "C+", "C-", "C",
    "D+", "D-", "D",
    "F",
)
NO_GRADE = "N/A"


@dataclass(frozen=True)
class CourseRecord:
    """
    One transcript line, e.g.:
    - "AP Calculus BC - A-"
    """
    course: str
    grade: str = NO_GRADE       # letter grade from GRADE_VOCABULARY or "N/A"


@dataclass(frozen=True)
class EstimatedScores:
    """Baseline SAT section estimates, each within [400, 800]."""
    math: int
    english: int


@dataclass(frozen=True)
class HighImpactCourseRule:
    """
    Catalog entry for a course known to move SAT scores.
    """
    match_keywords: Tuple[str, ...]
    display_name: str
    math_points: Optional[int] = None
    english_points: Optional[int] = None


@dataclass(frozen=True)
class PotentialGain:
    """Estimated points available from a catalog course not yet taken."""
    course_name: str
    subject: Subject
    points: int


@dataclass(frozen=True)
class SATResource:
    """
    One SAT section with its practice playlist and the courses that feed it.
    """
    section: str
    playlist_url: str
    related_courses: Tuple[str, ...]
    description: str
    weight: float
    topics: Tuple[str, ...]


@dataclass
class CourseImpact:
    """
    How much a completed course is expected to help on the SAT.
    """
    course: str
    impact: int                                 # 20..100 tier from the numeric grade
    potential_score_increase: float             # capped at 160
    related_topics: List[str] = field(default_factory=list)
    khan_academy_links: List[str] = field(default_factory=list)
    sat_sections: List[str] = field(default_factory=list)


@dataclass
class Task:
    """A single study task; `completed` is toggled by the user."""
    description: str
    completed: bool = False
    khan_academy_link: Optional[str] = None


@dataclass
class StudyDay:
    """
    One day-sized block of a generated study plan.
    """
    date: str                                   # "Day 1: Linear equations"
    tasks: List[Task] = field(default_factory=list)
