# -*- coding: utf-8 -*-
"""Tests for the saved studyPlanData blob, the ?plan= parameter and the review page."""
import json

from study_planner.review import build_review
from study_planner.storage import (
    LEGACY_SCHEMA_VERSION,
    SCHEMA_VERSION,
    StudyPlanData,
    decode_plan_param,
    dump_study_plan_data,
    encode_plan_param,
    load_study_plan_data,
)
from transcript_server.models import CourseRecord


def test_dump_writes_versioned_browser_layout() -> None:
    raw = dump_study_plan_data([CourseRecord("Algebra 1", "B")], "Day 1: Algebra")

    assert json.loads(raw) == {
        "version": SCHEMA_VERSION,
        "coursesAndGrades": [{"course": "Algebra 1", "grade": "B"}],
        "plan": "Day 1: Algebra",
    }


def test_saved_blob_reads_back() -> None:
    courses = [CourseRecord("Statistics", "95"), CourseRecord("Chemistry", "N/A")]

    data = load_study_plan_data(dump_study_plan_data(courses, "plan text"))

    assert data == StudyPlanData(courses_and_grades=courses, plan="plan text", version=SCHEMA_VERSION)


def test_unversioned_blob_is_read_as_legacy() -> None:
    """Blobs saved before versioning stored numeric grades as numbers."""
    raw = json.dumps({"coursesAndGrades": [{"course": "Geometry", "grade": 88}], "plan": "x"})

    data = load_study_plan_data(raw)

    assert data is not None
    assert data.version == LEGACY_SCHEMA_VERSION
    assert data.courses_and_grades == [CourseRecord("Geometry", "88")]


def test_missing_or_unreadable_blob_is_none() -> None:
    assert load_study_plan_data(None) is None
    assert load_study_plan_data("") is None
    assert load_study_plan_data("{not json") is None
    assert load_study_plan_data("[1, 2]") is None
    assert load_study_plan_data(json.dumps({"coursesAndGrades": 5, "plan": "x"})) is None
    assert load_study_plan_data(json.dumps({"coursesAndGrades": {"course": "Geometry"}})) is None
    assert load_study_plan_data(json.dumps({"coursesAndGrades": [], "plan": ["Day 1"]})) is None


def test_newer_schema_is_not_guessed_at() -> None:
    raw = json.dumps({"version": SCHEMA_VERSION + 1, "coursesAndGrades": [], "plan": "x"})
    assert load_study_plan_data(raw) is None


def test_plan_query_parameter_decodes() -> None:
    assert decode_plan_param("Day%201%3A%20Algebra%0ASolve%20for%20x") == "Day 1: Algebra\nSolve for x"
    assert decode_plan_param(encode_plan_param("50% more practice\n\nDay 2")) == "50% more practice\n\nDay 2"
    assert decode_plan_param(None) is None
    assert decode_plan_param("") is None


def test_review_filters_irrelevant_courses() -> None:
    data = StudyPlanData(
        courses_and_grades=[
            CourseRecord("Statistics", "95"),
            CourseRecord("Chemistry", "90"),
            CourseRecord("English", "A"),
        ],
        plan="Day 1: Data\nProbability: 10 questions",
    )

    review = build_review(data)

    assert [impact.course for impact in review.course_impacts] == ["Statistics", "English"]
    assert review.course_impacts[1].impact == 20
    assert review.days[0].date == "Day 1: Data"
    assert review.days[0].tasks[0].khan_academy_link is not None
