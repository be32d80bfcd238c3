"""
Upload session state for the transcript → study plan flow.

The controller owns one UploadSession and moves it forward only through the
event methods below. Every upload gets a new id; OCR or plan results that
arrive for an older upload are dropped, so a new upload simply wins.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from enum import Enum

from transcript_server.models import CourseRecord, EstimatedScores, PotentialGain
from transcript_server.ocr_utils import OCR_FAILURE_TEXT
from transcript_server.parser import parse_grade_lines
from transcript_server.scoring import estimate_sat_scores, find_untaken_high_impact_courses
from services.shared.models import PLAN_FAILURE_TEXT


class SessionState(str, Enum):
    IDLE = "idle"
    RECOGNIZING = "recognizing"
    RECOGNIZED = "recognized"
    GENERATING_PLAN = "generating_plan"
    PLAN_READY = "plan_ready"
    PLAN_FAILED = "plan_failed"


class InvalidTransition(RuntimeError):
    """Raised when an event is not allowed in the session's current state."""

    def __init__(self, event: str, state: SessionState) -> None:
        super().__init__(f"Cannot handle '{event}' while {state.value}")
        self.event = event
        self.state = state


@dataclass
class UploadSession:
    """Everything shown for the current upload, derived from scratch per upload."""
    state: SessionState = SessionState.IDLE
    upload_id: int = 0
    file_name: str = ""
    extracted_text: str = ""
    ocr_error: t.Optional[str] = None
    courses: list[CourseRecord] = field(default_factory=list)
    scores: t.Optional[EstimatedScores] = None
    potential_gains: list[PotentialGain] = field(default_factory=list)
    plan: str = ""

    @property
    def is_processing(self) -> bool:
        return self.state in (SessionState.RECOGNIZING, SessionState.GENERATING_PLAN)

    def _require(self, event: str, *allowed: SessionState) -> None:
        if self.state not in allowed:
            raise InvalidTransition(event, self.state)

    def file_selected(self, file_name: str) -> int:
        """
        Start a new upload from any state, discarding everything derived so far.

        Returns:
            The id that OCR and plan events for this upload must carry.
        """
        self.upload_id += 1
        self.state = SessionState.RECOGNIZING
        self.file_name = file_name
        self.extracted_text = ""
        self.ocr_error = None
        self.courses = []
        self.scores = None
        self.potential_gains = []
        self.plan = ""
        return self.upload_id

    def ocr_resolved(self, upload_id: int, text: str) -> bool:
        """Parse recognized text and compute scores and untaken-course gains."""
        if upload_id != self.upload_id:
            return False
        self._require("ocr_resolved", SessionState.RECOGNIZING)

        self.extracted_text = text
        self.courses = parse_grade_lines(text)
        self.scores = estimate_sat_scores(self.courses)
        self.potential_gains = find_untaken_high_impact_courses(self.courses)
        self.state = SessionState.RECOGNIZED
        return True

    def ocr_failed(self, upload_id: int, error: str = "") -> bool:
        """
        Show the OCR failure text instead of a stuck spinner.

        The failure text is not parsed, so there are no courses or scores.
        """
        if upload_id != self.upload_id:
            return False
        self._require("ocr_failed", SessionState.RECOGNIZING)

        self.extracted_text = OCR_FAILURE_TEXT
        self.ocr_error = error or None
        self.state = SessionState.RECOGNIZED
        return True

    @property
    def can_generate_plan(self) -> bool:
        return self.state == SessionState.RECOGNIZED and bool(self.courses)

    def plan_requested(self, upload_id: int) -> bool:
        if upload_id != self.upload_id:
            return False
        if not self.can_generate_plan:
            raise InvalidTransition("plan_requested", self.state)
        self.state = SessionState.GENERATING_PLAN
        return True

    def plan_resolved(self, upload_id: int, plan: str) -> bool:
        if upload_id != self.upload_id:
            return False
        self._require("plan_resolved", SessionState.GENERATING_PLAN)
        self.plan = plan
        self.state = SessionState.PLAN_READY
        return True

    def plan_failed(self, upload_id: int) -> bool:
        if upload_id != self.upload_id:
            return False
        self._require("plan_failed", SessionState.GENERATING_PLAN)
        self.plan = PLAN_FAILURE_TEXT
        self.state = SessionState.PLAN_FAILED
        return True
