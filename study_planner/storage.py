"""
The client-held `studyPlanData` blob and the `?plan=` query parameter.

The review page gets its input one of two ways: the JSON blob saved under
STORAGE_KEY after a plan is generated, or the plan text passed URL-encoded in
the query string. Neither is validated beyond what is needed to render it.
"""
from __future__ import annotations

import json
import logging
import typing as t
from dataclasses import dataclass, field
from urllib.parse import quote, unquote

from transcript_server.models import NO_GRADE, CourseRecord

logger = logging.getLogger(__name__)

STORAGE_KEY = "studyPlanData"
# Blobs written before versioning have no "version" key and the same layout
LEGACY_SCHEMA_VERSION = 0
SCHEMA_VERSION = 1


@dataclass
class StudyPlanData:
    """Courses the plan was generated from, plus the plan text itself."""
    courses_and_grades: t.List[CourseRecord] = field(default_factory=list)
    plan: str = ""
    version: int = SCHEMA_VERSION


def to_storage_dict(data: StudyPlanData) -> dict[str, t.Any]:
    return {
        "version": SCHEMA_VERSION,
        "coursesAndGrades": [
            {"course": record.course, "grade": record.grade}
            for record in data.courses_and_grades
        ],
        "plan": data.plan,
    }


def dump_study_plan_data(courses: t.Iterable[CourseRecord], plan: str) -> str:
    """Serialize the review-page state to the JSON stored under STORAGE_KEY."""
    data = StudyPlanData(courses_and_grades=list(courses), plan=plan)
    return json.dumps(to_storage_dict(data))


def from_storage_dict(payload: t.Any) -> t.Optional[StudyPlanData]:
    """
    Build StudyPlanData from a decoded blob.

    Returns None for payloads that are not objects, have mistyped fields or
    come from a newer schema.
    """
    if not isinstance(payload, dict):
        return None

    version = payload.get("version", LEGACY_SCHEMA_VERSION)
    if not isinstance(version, int) or version > SCHEMA_VERSION:
        logger.warning("Ignoring %s with unsupported version %r", STORAGE_KEY, version)
        return None

    courses_payload = payload.get("coursesAndGrades", []) or []
    plan = payload.get("plan", "") or ""
    if not isinstance(courses_payload, list) or not isinstance(plan, str):
        logger.warning("Ignoring malformed %s blob", STORAGE_KEY)
        return None

    courses: list[CourseRecord] = []
    for item in courses_payload:
        if not isinstance(item, dict):
            continue
        # Older pages stored numeric grades; keep them as text
        grade = item.get("grade", NO_GRADE)
        courses.append(
            CourseRecord(
                course=str(item.get("course", "") or ""),
                grade=NO_GRADE if grade is None else str(grade),
            )
        )

    return StudyPlanData(courses_and_grades=courses, plan=plan, version=version)


def load_study_plan_data(raw: t.Optional[str]) -> t.Optional[StudyPlanData]:
    """
    Read the blob saved under STORAGE_KEY.

    :param raw: The stored JSON string, or None when nothing was saved.
    :return: StudyPlanData, or None when the blob is missing or unreadable.
    """
    if not raw:
        return None
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring malformed %s blob", STORAGE_KEY)
        return None
    return from_storage_dict(payload)


def encode_plan_param(plan: str) -> str:
    return quote(plan, safe="")


def decode_plan_param(value: t.Optional[str]) -> t.Optional[str]:
    """URL-decode the `plan` query parameter; None or empty means no plan."""
    if not value:
        return None
    return unquote(value)
