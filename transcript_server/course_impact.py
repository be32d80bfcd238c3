"""Maps completed courses to the SAT sections they prepare for."""
from __future__ import annotations

import math
import re
import typing as t

from .models import CourseImpact, SATResource


MAX_POTENTIAL_INCREASE = 160

SAT_RESOURCES: tuple[SATResource, ...] = (
    SATResource(
        section="Reading & Writing",
        playlist_url="https://www.youtube.com/watch?v=zpE-CfCvXiE&list=PL6dL3ACWCL8c_Vw8F0-97LPMr927tkAFV",
        related_courses=("English", "Literature", "Writing"),
        description="Comprehensive playlist covering SAT Reading and Writing sections",
        weight=0.8,
        topics=("Reading Comprehension", "Writing Skills", "Grammar"),
    ),
    SATResource(
        section="Heart of Algebra",
        playlist_url="https://www.youtube.com/watch?v=fmt6mKBQhVg&list=PL6dL3ACWCL8ebFVL96B5PPrFv4gxckJu8",
        related_courses=("Algebra 1", "Algebra 2"),
        description="Focused playlist for Heart of Algebra SAT section",
        weight=0.7,
        topics=("Linear Equations", "Systems of Equations", "Functions"),
    ),
    SATResource(
        section="Passport to Advanced Math",
        playlist_url="https://www.youtube.com/watch?v=zpE-CfCvXiE&list=PL6dL3ACWCL8c_Vw8F0-97LPMr927tkAFV",
        related_courses=("Algebra 2", "Precalculus"),
        description="Advanced math topics for SAT",
        weight=0.6,
        topics=("Quadratic Equations", "Polynomials", "Rational Expressions"),
    ),
    SATResource(
        section="Problem Solving & Data Analysis",
        playlist_url="https://www.youtube.com/watch?v=zpE-CfCvXiE&list=PL6dL3ACWCL8c_Vw8F0-97LPMr927tkAFV",
        related_courses=("Algebra 1", "Algebra 2", "Geometry", "Statistics"),
        description="Data analysis and problem-solving skills",
        weight=0.5,
        topics=("Data Analysis", "Statistics", "Probability"),
    ),
    SATResource(
        section="Additional Topics in Math",
        playlist_url="https://www.youtube.com/watch?v=q9_L7aTmbZw&list=PL6dL3ACWCL8cIVmBrzwD8JEy2i9jZUWgA",
        related_courses=("Geometry", "Algebra 2", "Precalculus"),
        description="Geometry, complex numbers, and trigonometry",
        weight=0.4,
        topics=("Geometry", "Trigonometry", "Complex Numbers"),
    ),
)

# Topic keyword -> SAT section, checked in this order
TOPIC_TO_SECTION: tuple[tuple[str, str], ...] = (
    ("Reading", "Reading & Writing"),
    ("Writing", "Reading & Writing"),
    ("Grammar", "Reading & Writing"),
    ("Algebra", "Heart of Algebra"),
    ("Equations", "Heart of Algebra"),
    ("Functions", "Heart of Algebra"),
    ("Data", "Problem Solving & Data Analysis"),
    ("Statistics", "Problem Solving & Data Analysis"),
    ("Probability", "Problem Solving & Data Analysis"),
    ("Geometry", "Additional Topics in Math"),
    ("Trigonometry", "Additional Topics in Math"),
    ("Complex Numbers", "Additional Topics in Math"),
)

_RESOURCES_BY_SECTION = {resource.section: resource for resource in SAT_RESOURCES}
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_grade_value(grade: str) -> float:
    """
    Read the leading integer of a numeric grade ("92.5" -> 92).

    Returns NaN when the string does not start with a number.
    """
    match = _LEADING_INT.match(grade or "")
    if not match:
        return math.nan
    return float(match.group(1))


def impact_tier(grade_value: float) -> int:
    """Bucket a 0-100 grade into an impact tier; NaN lands in the lowest tier."""
    if grade_value >= 90:
        return 100
    if grade_value >= 80:
        return 80
    if grade_value >= 70:
        return 60
    if grade_value >= 60:
        return 40
    return 20


def calculate_course_impact(course: str, grade: str) -> t.Optional[CourseImpact]:
    """
    Estimate how much a completed course contributes to SAT readiness.

    Args:
        course: Course name, matched exactly against each section's related courses.
        grade: Numeric grade as text. Unparseable grades count as the lowest tier.

    Returns:
        A CourseImpact, or None if the course maps to no SAT section.
    """
    impact = impact_tier(parse_grade_value(grade))

    potential_increase = 0.0
    sat_sections: list[str] = []
    related_topics: list[str] = []
    links: list[str] = []

    for resource in SAT_RESOURCES:
        if course not in resource.related_courses:
            continue
        potential_increase += impact * resource.weight
        sat_sections.append(resource.section)
        links.append(resource.playlist_url)
        related_topics.extend(resource.topics)

    if not sat_sections:
        return None

    return CourseImpact(
        course=course,
        impact=impact,
        potential_score_increase=min(potential_increase, MAX_POTENTIAL_INCREASE),
        related_topics=related_topics,
        khan_academy_links=links,
        sat_sections=sat_sections,
    )


def section_for_topic(fragment: str) -> t.Optional[str]:
    """Return the SAT section whose topic keyword first appears in `fragment`."""
    lowered = fragment.lower()
    for keyword, section in TOPIC_TO_SECTION:
        if keyword.lower() in lowered:
            return section
    return None


def khan_academy_recommendations(topics: t.Iterable[str]) -> list[str]:
    """
    Map exact topic names to their section playlists.

    :param topics: Topic names such as "Grammar" or "Probability".
    :return: Unique playlist URLs in first-seen order.
    """
    lookup = dict(TOPIC_TO_SECTION)
    recommendations: list[str] = []
    for topic in topics:
        section = lookup.get(topic)
        if section is None:
            continue
        url = _RESOURCES_BY_SECTION[section].playlist_url
        if url not in recommendations:
            recommendations.append(url)
    return recommendations


def playlist_for_section(section: str) -> t.Optional[str]:
    resource = _RESOURCES_BY_SECTION.get(section)
    return resource.playlist_url if resource else None
