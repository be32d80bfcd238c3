"""
Heuristic SAT baselines and untaken high-impact courses.

The point values are a fixed, auditable proxy model: identical course lists
always produce identical estimates.
"""
from __future__ import annotations

import re
import typing as t

from .models import CourseRecord, EstimatedScores, HighImpactCourseRule, PotentialGain


BASELINE_MATH = 500
BASELINE_ENGLISH = 510
MIN_SECTION_SCORE = 400
MAX_SECTION_SCORE = 800

_CALCULUS_WORD = re.compile(r"\bcalculus\b")


HIGH_IMPACT_COURSES: tuple[HighImpactCourseRule, ...] = (
    HighImpactCourseRule(("algebra",), "Algebra", math_points=20),
    HighImpactCourseRule(("pre-calculus", "precalculus"), "Pre-Calculus", math_points=50),
    HighImpactCourseRule(("calculus",), "Calculus", math_points=200),
    HighImpactCourseRule(("physics",), "Physics", math_points=30),
    HighImpactCourseRule(("ap english", "ap lang"), "AP English Language", english_points=170),
    HighImpactCourseRule(("ap lit",), "AP Literature", english_points=90),
    HighImpactCourseRule(("journalism", "writing"), "Journalism / Writing", english_points=30),
)


def _math_points(name: str) -> int:
    points = 0
    if "pre-calculus" in name or "precalculus" in name:
        points += 50
    elif _CALCULUS_WORD.search(name):
        points += 200
    elif "algebra" in name:
        points += 20

    # Physics stacks with whichever math rule applied above
    if "physics" in name:
        points += 30
    return points


def _english_points(name: str) -> int:
    if "ap lit" in name:
        return 90
    if "ap english" in name or "ap lang" in name:
        return 170
    if "journalism" in name or "writing" in name:
        return 30
    if "english" in name:
        return 10
    return 0


def _clamp(score: int) -> int:
    return min(MAX_SECTION_SCORE, max(MIN_SECTION_SCORE, score))


def estimate_sat_scores(courses: t.Iterable[CourseRecord]) -> EstimatedScores:
    """
    Estimate SAT Math and English baselines from the courses a student took.

    Args:
        courses: Parsed transcript records. Grades are not considered.

    Returns:
        EstimatedScores with both sections clamped to [400, 800].
    """
    math = BASELINE_MATH
    english = BASELINE_ENGLISH
    for record in courses:
        name = record.course.lower()
        math += _math_points(name)
        english += _english_points(name)
    return EstimatedScores(math=_clamp(math), english=_clamp(english))


def _is_taken(rule: HighImpactCourseRule, taken_names: list[str]) -> bool:
    return any(
        keyword in name
        for keyword in rule.match_keywords
        for name in taken_names
    )


def find_untaken_high_impact_courses(
    courses: t.Iterable[CourseRecord],
    catalog: t.Sequence[HighImpactCourseRule] = HIGH_IMPACT_COURSES,
) -> list[PotentialGain]:
    """
    List the score gains still available from catalog courses not on the transcript.

    A rule counts as taken when any of its keywords appears (case-insensitive
    substring) in any taken course name. Output follows catalog order.
    """
    taken_names = [record.course.lower() for record in courses]
    gains: list[PotentialGain] = []
    for rule in catalog:
        if _is_taken(rule, taken_names):
            continue
        if rule.math_points:
            gains.append(PotentialGain(rule.display_name, "Math", rule.math_points))
        if rule.english_points:
            gains.append(PotentialGain(rule.display_name, "English", rule.english_points))
    return gains
