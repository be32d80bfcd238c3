# -*- coding: utf-8 -*-
"""Tests for the transcript REST service."""
import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from services.transcript_service.app import app
from transcript_server import ocr_utils


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


def _png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), "white").save(buffer, format="PNG")
    return buffer.getvalue()


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "transcript-service"}


def test_analyze_transcript_text(client: TestClient) -> None:
    response = client.post(
        "/transcript/analyze",
        json={"text": "AP Calculus BC - A\nAP English Language - B+\nStudy Hall\n"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["courses"] == [
        {"course": "AP Calculus BC", "grade": "A"},
        {"course": "AP English Language", "grade": "B+"},
        {"course": "Study Hall", "grade": "N/A"},
    ]
    assert body["scores"] == {"math": 700, "english": 680}
    gained = [(g["course_name"], g["subject"]) for g in body["potential_gains"]]
    assert ("Calculus", "Math") not in gained
    assert ("AP English Language", "English") not in gained
    assert ("Pre-Calculus", "Math") in gained


def test_course_impact_endpoint(client: TestClient) -> None:
    response = client.post("/course-impact", json={"course": "Statistics", "grade": "95"})

    assert response.status_code == 200
    body = response.json()
    assert body["impact"] == 100
    assert body["potential_score_increase"] == pytest.approx(50)
    assert body["sat_sections"] == ["Problem Solving & Data Analysis"]


def test_course_impact_null_for_unrelated_course(client: TestClient) -> None:
    response = client.post("/course-impact", json={"course": "Chemistry", "grade": "90"})

    assert response.status_code == 200
    assert response.json() is None


def test_upload_runs_ocr(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    recognized: list[str] = []

    def fake_image_to_string(image) -> str:
        recognized.append(image.mode)
        return "Algebra 2 - B\n"

    monkeypatch.setattr(ocr_utils.pytesseract, "image_to_string", fake_image_to_string)

    response = client.post("/upload", files={"file": ("transcript.png", _png_bytes(), "image/png")})

    assert response.status_code == 200
    assert response.json() == {"text": "Algebra 2 - B\n"}
    assert recognized == ["L"]


def test_upload_rejects_unreadable_file(client: TestClient) -> None:
    response = client.post("/upload", files={"file": ("notes.txt", b"just some text", "text/plain")})

    assert response.status_code == 415
    assert "notes.txt" in response.json()["detail"]
