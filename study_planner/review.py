"""Assembles what the review page shows from a saved StudyPlanData."""
from __future__ import annotations

from dataclasses import dataclass, field

from transcript_server.course_impact import calculate_course_impact
from transcript_server.models import CourseImpact, StudyDay

from .segmenter import segment_study_plan
from .storage import StudyPlanData


@dataclass
class PlanReview:
    course_impacts: list[CourseImpact] = field(default_factory=list)
    days: list[StudyDay] = field(default_factory=list)


def build_review(data: StudyPlanData) -> PlanReview:
    """
    Compute the course-impact summary and segment the plan.

    Courses with no SAT relevance are dropped from the summary.
    """
    impacts = [
        calculate_course_impact(record.course, record.grade)
        for record in data.courses_and_grades
    ]
    return PlanReview(
        course_impacts=[impact for impact in impacts if impact is not None],
        days=segment_study_plan(data.plan),
    )
