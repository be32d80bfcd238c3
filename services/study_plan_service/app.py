"""
FastAPI service for study plan operations.

This service turns a student's parsed courses into a personalized SAT study
plan via an OpenAI-compatible chat-completion API (OpenRouter by default), and
segments plan text into day-by-day tasks for the review page. Plan generation
can take 10-60 seconds depending on the upstream model.
"""
from __future__ import annotations

import logging
import os
import typing as t
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query
from openai import AsyncOpenAI

from prompts import render_prompt
from services.shared.models import (
    CourseImpact as PydanticCourseImpact,
    CourseRecord as PydanticCourseRecord,
    GeneratePlanRequest,
    GeneratePlanResponse,
    PLAN_FAILURE_TEXT,
    PlanQueryReviewResponse,
    ReviewRequest,
    ReviewResponse,
    SegmentPlanRequest,
    SegmentPlanResponse,
    StudyDay as PydanticStudyDay,
    from_domain,
    to_domain_courses,
)
from study_planner.review import build_review
from study_planner.segmenter import segment_study_plan
from study_planner.storage import StudyPlanData, decode_plan_param

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
STUDY_PLAN_MODEL = os.getenv("STUDY_PLAN_MODEL", "mistralai/mixtral-8x7b-instruct")

# Global async OpenAI client - will be initialized on startup
client: AsyncOpenAI = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    global client

    # Startup: Initialize async client against the OpenRouter endpoint
    api_key = os.getenv("OPENROUTER_API_KEY")
    if not api_key:
        raise RuntimeError("OPENROUTER_API_KEY environment variable is not set.")
    client = AsyncOpenAI(
        api_key=api_key,
        base_url=OPENROUTER_BASE_URL,
        default_headers={"X-Title": "SAT Plan Generator"},
    )

    yield

    await client.close()


app = FastAPI(
    title="Study Plan Service",
    description="REST API for LLM-generated SAT study plans and plan segmentation",
    version="1.0.0",
    lifespan=lifespan,
)


def format_courses_for_prompt(courses: t.Iterable[PydanticCourseRecord]) -> str:
    """Render courses as the "<course> - <grade>" lines the prompt expects."""
    return "\n".join(f"{c.course} - {c.grade}" for c in courses)


def build_study_plan_prompt(courses: t.Iterable[PydanticCourseRecord]) -> str:
    return render_prompt("study_plan_prompt", courses_text=format_courses_for_prompt(courses))


def _days_to_pydantic(days) -> list[PydanticStudyDay]:
    return [from_domain(PydanticStudyDay, day) for day in days]


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "study-plan-service"}


@app.post("/api/generate-plan", response_model=GeneratePlanResponse)
async def generate_plan(request: GeneratePlanRequest) -> GeneratePlanResponse:
    """
    Generate a 7-day study plan from the student's courses and grades.

    Upstream failures never surface as HTTP errors: the response carries the
    failure sentinel with `generated=False` so callers can show it as-is.
    """
    prompt = build_study_plan_prompt(request.courses_and_grades)

    try:
        completion = await client.chat.completions.create(
            model=STUDY_PLAN_MODEL,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.7,
        )
        content = completion.choices[0].message.content if completion.choices else None
    except Exception:
        logger.exception("Study plan generation failed")
        return GeneratePlanResponse(plan=PLAN_FAILURE_TEXT, generated=False)

    if not content or not content.strip():
        logger.warning("Model %s returned an empty study plan", STUDY_PLAN_MODEL)
        return GeneratePlanResponse(plan=PLAN_FAILURE_TEXT, generated=False)

    return GeneratePlanResponse(plan=content, generated=True)


@app.post("/study-plan/segment", response_model=SegmentPlanResponse)
async def segment_plan(request: SegmentPlanRequest) -> SegmentPlanResponse:
    """Split plan text into day-by-day task lists."""
    return SegmentPlanResponse(days=_days_to_pydantic(segment_study_plan(request.plan)))


@app.get("/review", response_model=PlanQueryReviewResponse)
async def review_from_query(plan: t.Optional[str] = Query(default=None)) -> PlanQueryReviewResponse:
    """
    Review page fed through the `?plan=` query parameter.

    The query string is already URL-decoded once by the framework; the value is
    decoded again because the page encodes the plan before navigating. The
    decoded text is returned as is alongside its segmentation.
    """
    plan_text = decode_plan_param(plan)
    if plan_text is None:
        return PlanQueryReviewResponse(plan=None, days=[])
    return PlanQueryReviewResponse(
        plan=plan_text,
        days=_days_to_pydantic(segment_study_plan(plan_text)),
    )


@app.post("/review", response_model=ReviewResponse)
async def review_from_saved_data(request: ReviewRequest) -> ReviewResponse:
    """
    Review page fed from the saved `studyPlanData` blob: course impacts plus plan days.
    """
    try:
        saved = request.study_plan_data
        review = build_review(
            StudyPlanData(
                courses_and_grades=to_domain_courses(saved.courses_and_grades),
                plan=saved.plan,
                version=saved.version,
            )
        )
        return ReviewResponse(
            course_impacts=[from_domain(PydanticCourseImpact, i) for i in review.course_impacts],
            days=_days_to_pydantic(review.days),
        )

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error building review: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8002)
