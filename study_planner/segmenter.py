"""
Splits an LLM-written study plan into day-by-day task lists.

Model output is unconstrained text, so everything here is best effort: missing
day markers, odd casing and empty blocks all produce a usable (possibly empty)
result instead of an error.
"""
from __future__ import annotations

import re
import typing as t

from transcript_server.course_impact import playlist_for_section, section_for_topic
from transcript_server.models import StudyDay, Task


DEFAULT_TOPIC = "Study Plan"

_BLOCK_SEPARATOR = re.compile(r"\n\n")
_DAY_MARKER = re.compile(r"^(day\s+[0-9]+:\s*|[0-9]+\.\s*)", re.IGNORECASE)


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def topic_from_header(header: str) -> str:
    """Strip a leading "Day N:" or "N." marker from a block header."""
    return _DAY_MARKER.sub("", header.strip(), count=1).strip()


def resource_link_for_task(description: str) -> t.Optional[str]:
    """
    Pick a practice playlist for a task line.

    Only the text before the first colon is considered; it is split on commas
    and the first fragment naming a known topic decides the section.
    """
    lead = description.split(":", 1)[0]
    for fragment in lead.split(","):
        section = section_for_topic(fragment.strip())
        if section:
            return playlist_for_section(section)
    return None


def segment_study_plan(plan: str) -> list[StudyDay]:
    """
    Segment plan text into StudyDay entries.

    Args:
        plan: Plan text whose day blocks are separated by blank lines.

    Returns:
        One StudyDay per non-empty block, numbered in order of appearance.
    """
    days: list[StudyDay] = []
    for block in _BLOCK_SEPARATOR.split(_normalize_newlines(plan or "")):
        if not block.strip():
            continue

        lines = block.strip("\n").split("\n")
        topic = topic_from_header(lines[0])
        tasks = [
            Task(
                description=line.strip(),
                completed=False,
                khan_academy_link=resource_link_for_task(line.strip()),
            )
            for line in lines[1:]
            if line.strip()
        ]
        days.append(StudyDay(date=f"Day {len(days) + 1}: {topic or DEFAULT_TOPIC}", tasks=tasks))
    return days
