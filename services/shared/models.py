"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models in
transcript_server.models, plus the request/response bodies of the transcript
and study plan services.
"""
from __future__ import annotations

import typing as t
from dataclasses import asdict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from transcript_server import models as domain


Subject = t.Literal["Math", "English"]

# Shown in place of a plan whenever generation fails
PLAN_FAILURE_TEXT = "Failed to generate study plan."


class CourseRecord(BaseModel):
    """A parsed (course, grade) pair."""
    # Saved blobs from older pages carry numeric grades
    model_config = ConfigDict(coerce_numbers_to_str=True)

    course: str
    grade: str = domain.NO_GRADE

    @field_validator("grade", mode="before")
    @classmethod
    def _missing_grade(cls, value: t.Any) -> t.Any:
        return domain.NO_GRADE if value is None else value


class EstimatedScores(BaseModel):
    math: int
    english: int


class PotentialGain(BaseModel):
    """Points available from a high-impact course the student has not taken."""
    course_name: str
    subject: Subject
    points: int


class CourseImpact(BaseModel):
    course: str
    impact: int
    potential_score_increase: float
    related_topics: list[str] = Field(default_factory=list)
    khan_academy_links: list[str] = Field(default_factory=list)
    sat_sections: list[str] = Field(default_factory=list)


class Task(BaseModel):
    description: str
    completed: bool = False
    khan_academy_link: t.Optional[str] = None


class StudyDay(BaseModel):
    """One segmented day of a study plan."""
    date: str
    tasks: list[Task] = Field(default_factory=list)


class StudyPlanData(BaseModel):
    """
    Review-page state stored client side under "studyPlanData".
    Wire names follow the browser payload.
    """
    model_config = ConfigDict(populate_by_name=True)

    version: int = 1
    courses_and_grades: list[CourseRecord] = Field(default_factory=list, alias="coursesAndGrades")
    plan: str = ""


# Request/Response Models for API endpoints
class AnalyzeTranscriptRequest(BaseModel):
    """Request model for analyzing recognized transcript text."""
    text: str


class AnalyzeTranscriptResponse(BaseModel):
    courses: list[CourseRecord] = Field(default_factory=list)
    scores: EstimatedScores
    potential_gains: list[PotentialGain] = Field(default_factory=list)


class UploadTranscriptResponse(BaseModel):
    """Response model for OCR of an uploaded transcript."""
    text: str


class CourseImpactRequest(BaseModel):
    course: str
    grade: str


class GeneratePlanRequest(BaseModel):
    """Request model for generating a study plan."""
    model_config = ConfigDict(populate_by_name=True)

    courses_and_grades: list[CourseRecord] = Field(default_factory=list, alias="coursesAndGrades")


class GeneratePlanResponse(BaseModel):
    """Plan text; `generated` is False when the text is the failure sentinel."""
    plan: str
    generated: bool = True


class SegmentPlanRequest(BaseModel):
    plan: str


class SegmentPlanResponse(BaseModel):
    days: list[StudyDay] = Field(default_factory=list)


class PlanQueryReviewResponse(BaseModel):
    """Decoded `?plan=` text as given, plus its day-by-day segmentation."""
    plan: t.Optional[str] = None
    days: list[StudyDay] = Field(default_factory=list)


class ReviewRequest(BaseModel):
    """Request model for rendering the review page from a saved blob."""
    model_config = ConfigDict(populate_by_name=True)

    study_plan_data: StudyPlanData = Field(alias="studyPlanData")


class ReviewResponse(BaseModel):
    course_impacts: list[CourseImpact] = Field(default_factory=list)
    days: list[StudyDay] = Field(default_factory=list)


# Conversions between the dataclass domain models and the REST models
def to_domain_courses(records: t.Iterable[CourseRecord]) -> list[domain.CourseRecord]:
    return [domain.CourseRecord(course=r.course, grade=r.grade) for r in records]


def from_domain(model_cls: type[BaseModel], obj: t.Any) -> BaseModel:
    """Convert a domain dataclass into the Pydantic model of the same shape."""
    return model_cls(**asdict(obj))
