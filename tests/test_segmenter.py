# -*- coding: utf-8 -*-
"""Tests for splitting generated study plans into days and tasks."""
from study_planner.segmenter import resource_link_for_task, segment_study_plan, topic_from_header
from transcript_server.course_impact import SAT_RESOURCES

HEART_OF_ALGEBRA = SAT_RESOURCES[1].playlist_url
READING_WRITING = SAT_RESOURCES[0].playlist_url
ADDITIONAL_TOPICS = SAT_RESOURCES[4].playlist_url

PLAN = (
    "Day 1: Algebra Review\n"
    "Linear equations: practice 20 problems\n"
    "Grammar, punctuation: review comma rules\n"
    "\n"
    "Day 2: Reading\n"
    "Read two passages\n"
    "\n"
    "\n"
    "3. Geometry\n"
    "Trigonometry: unit circle\n"
)


def test_blocks_become_numbered_days() -> None:
    days = segment_study_plan(PLAN)

    assert [day.date for day in days] == [
        "Day 1: Algebra Review",
        "Day 2: Reading",
        "Day 3: Geometry",
    ]


def test_task_lines_carry_resource_links() -> None:
    days = segment_study_plan(PLAN)

    first = days[0].tasks
    assert [task.description for task in first] == [
        "Linear equations: practice 20 problems",
        "Grammar, punctuation: review comma rules",
    ]
    assert [task.khan_academy_link for task in first] == [HEART_OF_ALGEBRA, READING_WRITING]
    assert all(task.completed is False for task in first)

    assert days[1].tasks[0].khan_academy_link is None
    assert days[2].tasks[0].khan_academy_link == ADDITIONAL_TOPICS


def test_header_markers_are_stripped_case_insensitively() -> None:
    assert topic_from_header("Day 4: Mixed practice") == "Mixed practice"
    assert topic_from_header("DAY 12:   Timed test") == "Timed test"
    assert topic_from_header("7. Vocabulary") == "Vocabulary"
    assert topic_from_header("Weekend review") == "Weekend review"


def test_missing_topic_uses_default_label() -> None:
    days = segment_study_plan("Day 5:\nFull practice test")

    assert days[0].date == "Day 1: Study Plan"
    assert days[0].tasks[0].description == "Full practice test"


def test_empty_and_whitespace_blocks_are_ignored() -> None:
    assert segment_study_plan("") == []
    assert segment_study_plan("\n\n   \n\n") == []

    days = segment_study_plan("\n\nIntro only\n\n \t\n\nDay 2: Essays\r\nOutline one essay\r\n")
    assert [day.date for day in days] == ["Day 1: Intro only", "Day 2: Essays"]
    assert days[0].tasks == []
    assert days[1].tasks[0].description == "Outline one essay"


def test_blank_lines_inside_tasks_are_dropped() -> None:
    days = segment_study_plan("Day 1: Math\n  Solve systems of equations  \n   \n")
    assert [task.description for task in days[0].tasks] == ["Solve systems of equations"]


def test_link_lookup_only_reads_text_before_colon() -> None:
    assert resource_link_for_task("Warm up: read about geometry") is None
    assert resource_link_for_task("Vocabulary, Data tables: 15 minutes") is not None
    assert resource_link_for_task("Essay outline") is None


def test_segmentation_is_idempotent() -> None:
    assert segment_study_plan(PLAN) == segment_study_plan(PLAN)


def test_whitespace_only_line_does_not_start_a_new_day() -> None:
    """Only an empty line separates days; a line of spaces stays inside the block."""
    days = segment_study_plan("Day 1: Math\nSolve equations\n   \nReview mistakes\n\nDay 2: Reading\nOne passage")

    assert [day.date for day in days] == ["Day 1: Math", "Day 2: Reading"]
    assert [task.description for task in days[0].tasks] == ["Solve equations", "Review mistakes"]
