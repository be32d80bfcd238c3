"""
MCP wrapper for the study plan service.

This module makes HTTP calls to the distributed study plan service and exposes
them as MCP tools. Plan generation never raises: transport and HTTP errors
resolve to the failure sentinel so callers always have something to show.
"""
from __future__ import annotations

import logging
import os
import typing as t
from dataclasses import asdict, dataclass

import httpx
from fastmcp import FastMCP

# Import original dataclass models for MCP interface compatibility
from transcript_server.models import CourseRecord, StudyDay, Task
# Import Pydantic models for HTTP serialization
from services.shared.models import (
    CourseRecord as PydanticCourseRecord,
    GeneratePlanRequest,
    GeneratePlanResponse,
    PLAN_FAILURE_TEXT,
    SegmentPlanRequest,
    SegmentPlanResponse,
)

logger = logging.getLogger(__name__)

mcp = FastMCP("StudyPlanMCPWrapper")

# Service URL - configurable via environment variable
STUDY_PLAN_SERVICE_URL = os.getenv("STUDY_PLAN_SERVICE_URL", "http://localhost:8002")

# Timeout settings (in seconds)
GENERATE_PLAN_TIMEOUT = 120.0  # LLM round trip through OpenRouter
SEGMENT_TIMEOUT = 30.0  # pure text processing


@dataclass
class StudyPlanResult:
    """Plan text plus whether it came from the model or is the failure sentinel."""
    plan: str
    generated: bool

    @property
    def failed(self) -> bool:
        return not self.generated


def _http_client(timeout: float) -> httpx.Client:
    return httpx.Client(timeout=timeout)


def _generate_study_plan(courses: t.Sequence[CourseRecord]) -> StudyPlanResult:
    """
    Request a personalized study plan for the given courses.

    Args:
        courses: Parsed transcript records.

    Returns:
        StudyPlanResult; on any failure the plan is the fixed sentinel text.
    """
    request = GeneratePlanRequest(
        courses_and_grades=[PydanticCourseRecord(**asdict(c)) for c in courses]
    )
    try:
        with _http_client(GENERATE_PLAN_TIMEOUT) as client:
            response = client.post(
                f"{STUDY_PLAN_SERVICE_URL}/api/generate-plan",
                json=request.model_dump(by_alias=True),
            )
            response.raise_for_status()
        result = GeneratePlanResponse(**response.json())

    except httpx.TimeoutException:
        logger.warning("Study plan generation timed out after %s seconds", GENERATE_PLAN_TIMEOUT)
        return StudyPlanResult(plan=PLAN_FAILURE_TEXT, generated=False)
    except httpx.HTTPStatusError as e:
        logger.warning("HTTP error from study plan service: %s %s", e.response.status_code, e.response.text)
        return StudyPlanResult(plan=PLAN_FAILURE_TEXT, generated=False)
    except Exception:
        logger.exception("Error calling study plan service")
        return StudyPlanResult(plan=PLAN_FAILURE_TEXT, generated=False)

    return StudyPlanResult(plan=result.plan, generated=result.generated)


def _segment_study_plan(plan: str) -> list[StudyDay]:
    """
    Segment plan text through the service.

    Unlike plan generation, errors here are raised to the caller.
    """
    try:
        with _http_client(SEGMENT_TIMEOUT) as client:
            response = client.post(
                f"{STUDY_PLAN_SERVICE_URL}/study-plan/segment",
                json=SegmentPlanRequest(plan=plan).model_dump(),
            )
            response.raise_for_status()

        result = SegmentPlanResponse(**response.json())
        return [
            StudyDay(date=day.date, tasks=[Task(**task.model_dump()) for task in day.tasks])
            for day in result.days
        ]

    except httpx.TimeoutException:
        raise RuntimeError(f"Plan segmentation timed out after {SEGMENT_TIMEOUT} seconds")
    except httpx.HTTPStatusError as e:
        raise RuntimeError(f"HTTP error from study plan service: {e.response.status_code} {e.response.text}")
    except Exception as e:
        raise RuntimeError(f"Error calling study plan service: {str(e)}")


# MCP tool wrappers that call the raw functions
@mcp.tool()
def generate_study_plan(courses: list[CourseRecord]) -> str:
    """Generate a 7-day SAT study plan from the student's courses and grades."""
    return _generate_study_plan(courses).plan


@mcp.tool()
def segment_study_plan(plan: str) -> list[StudyDay]:
    """Split a study plan into day-by-day task lists."""
    return _segment_study_plan(plan)
