"""
FastAPI service for transcript operations.

This service exposes the transcript_server core as REST API endpoints: OCR of
an uploaded transcript, parsing/scoring of recognized text, and per-course SAT
impact. None of these involve an LLM; OCR is the only slow step.
"""
from __future__ import annotations

import asyncio
import logging
import typing as t
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, HTTPException, UploadFile

from services.shared.models import (
    AnalyzeTranscriptRequest,
    AnalyzeTranscriptResponse,
    CourseImpact as PydanticCourseImpact,
    CourseImpactRequest,
    CourseRecord as PydanticCourseRecord,
    EstimatedScores as PydanticEstimatedScores,
    PotentialGain as PydanticPotentialGain,
    UploadTranscriptResponse,
    from_domain,
)
from transcript_server.course_impact import calculate_course_impact
from transcript_server.ocr_utils import TranscriptExtractionError, extract_transcript_text_from_content
from transcript_server.parser import parse_grade_lines
from transcript_server.scoring import estimate_sat_scores, find_untaken_high_impact_courses

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    # Tesseract is invoked per request; nothing to set up
    yield


app = FastAPI(
    title="Transcript Service",
    description="REST API for transcript OCR, course parsing and SAT score estimation",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "transcript-service"}


@app.post("/upload", response_model=UploadTranscriptResponse)
async def upload_transcript(file: UploadFile = File(...)) -> UploadTranscriptResponse:
    """
    Recognize the text of an uploaded transcript image or PDF.

    OCR is blocking, so it runs in a worker thread.
    """
    content = await file.read()
    try:
        text = await asyncio.to_thread(
            extract_transcript_text_from_content, content, file.filename or ""
        )
    except TranscriptExtractionError as e:
        raise HTTPException(status_code=415, detail=str(e))
    except Exception as e:
        logger.exception("OCR failed for %s", file.filename)
        raise HTTPException(status_code=500, detail=f"Error recognizing transcript: {str(e)}")

    return UploadTranscriptResponse(text=text)


@app.post("/transcript/analyze", response_model=AnalyzeTranscriptResponse)
async def analyze_transcript(request: AnalyzeTranscriptRequest) -> AnalyzeTranscriptResponse:
    """
    Parse recognized text into courses, then estimate scores and untaken-course gains.
    """
    try:
        courses = parse_grade_lines(request.text)
        scores = estimate_sat_scores(courses)
        gains = find_untaken_high_impact_courses(courses)

        return AnalyzeTranscriptResponse(
            courses=[from_domain(PydanticCourseRecord, c) for c in courses],
            scores=from_domain(PydanticEstimatedScores, scores),
            potential_gains=[from_domain(PydanticPotentialGain, g) for g in gains],
        )

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error analyzing transcript: {str(e)}")


@app.post("/course-impact", response_model=t.Optional[PydanticCourseImpact])
async def course_impact(request: CourseImpactRequest) -> t.Optional[PydanticCourseImpact]:
    """
    SAT impact of one completed course.

    Returns null when the course feeds no SAT section; that is not an error.
    """
    impact = calculate_course_impact(request.course, request.grade)
    if impact is None:
        return None
    return from_domain(PydanticCourseImpact, impact)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
