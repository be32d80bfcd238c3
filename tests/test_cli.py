# -*- coding: utf-8 -*-
"""Tests for the command line controller."""
import io
import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from PIL import Image

from orchestrator.run import cli
from study_planner.storage import dump_study_plan_data
from transcript_server import ocr_utils
from transcript_server.models import CourseRecord


@pytest.fixture()
def transcript_png(tmp_path: Path) -> Path:
    path = tmp_path / "transcript.png"
    buffer = io.BytesIO()
    Image.new("RGB", (30, 30), "white").save(buffer, format="PNG")
    path.write_bytes(buffer.getvalue())
    return path


def test_analyze_without_plan_saves_blob(
        tmp_path: Path, transcript_png: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        ocr_utils.pytesseract, "image_to_string",
        lambda image: "AP Calculus BC - A\nEnglish 10 - B\n",
    )
    out_file = tmp_path / "studyPlanData.json"

    result = CliRunner().invoke(cli, ["analyze", str(transcript_png), "--no-plan", "--save", str(out_file)])

    assert result.exit_code == 0, result.output
    assert "700" in result.output
    saved = json.loads(out_file.read_text(encoding="utf-8"))
    assert saved["coursesAndGrades"][0] == {"course": "AP Calculus BC", "grade": "A"}
    assert saved["plan"] == ""


def test_analyze_reports_ocr_failure(transcript_png: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(image) -> str:
        raise RuntimeError("tesseract is not installed")

    monkeypatch.setattr(ocr_utils.pytesseract, "image_to_string", broken)

    result = CliRunner().invoke(cli, ["analyze", str(transcript_png), "--no-plan"])

    assert result.exit_code == 0, result.output
    assert ocr_utils.OCR_FAILURE_TEXT in result.output


def test_review_from_plan_query() -> None:
    result = CliRunner().invoke(cli, ["review", "--plan-query", "Day%201%3A%20Algebra%0ASolve%20equations"])

    assert result.exit_code == 0, result.output
    assert "Day 1: Algebra" in result.output
    assert "Solve equations" in result.output


def test_review_from_saved_blob(tmp_path: Path) -> None:
    data_file = tmp_path / "studyPlanData.json"
    data_file.write_text(
        dump_study_plan_data([CourseRecord("Statistics", "95")], "Day 1: Data\nProbability drills"),
        encoding="utf-8",
    )

    result = CliRunner().invoke(cli, ["review", "--data", str(data_file)])

    assert result.exit_code == 0, result.output
    assert "Statistics" in result.output
    assert "Probability drills" in result.output


def test_review_without_input_fails() -> None:
    result = CliRunner().invoke(cli, ["review"])

    assert result.exit_code == 1
    assert "No study plan found" in result.output


def test_review_prints_query_plan_as_given() -> None:
    result = CliRunner().invoke(
        cli, ["review", "--plan-query", "Here%20is%20your%20plan!%0A%0A1.%20Algebra%0ASolve%20x"]
    )

    assert result.exit_code == 0, result.output
    assert "Here is your plan!" in result.output
    assert "1. Algebra" in result.output
    assert "Day 2: Algebra" in result.output
