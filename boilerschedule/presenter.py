"""
Text output of a filtered schedule.

One block per meeting:

    30100 - Software Engineering I
    Section: 1 | Type: Lecture
    Meets on: Monday, Wednesday from 09:30 for 1h15m
    Location: LWSN B151
    Instructors: Jane Doe

The section number restarts for every class and counts meetings across
that class's sections.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from rich import box
from rich.console import Console
from rich.table import Table


def _safe_str(x: Any) -> str:
    return "" if x is None else str(x)


def format_start_time(value: Any) -> str:
    """
    "09:30:00" -> "09:30"
    """
    parts = _safe_str(value).split(":")
    return ":".join(parts[:2])


def format_duration(value: Any) -> str:
    """
    "PT1H15M" -> "1h15m"
    """
    return _safe_str(value).replace("PT", "").lower()


def format_location(meeting: dict[str, Any]) -> str:
    room = meeting.get("Room") or {}
    building = room.get("Building") or {}
    code = _safe_str(building.get("ShortCode")).strip() or "Unknown Building"
    number = _safe_str(room.get("Number")).strip() or "Unknown Room"
    return f"{code} {number}"


def format_instructors(meeting: dict[str, Any]) -> str:
    names = [_safe_str(i.get("Name")).strip() for i in meeting.get("Instructors") or []]
    return ", ".join(n for n in names if n) or "TBA"


def format_meeting(course: dict[str, Any], section: dict[str, Any], meeting: dict[str, Any], ordinal: int) -> str:
    days = meeting.get("DaysOfWeek")
    if isinstance(days, (list, tuple)):
        days = ", ".join(_safe_str(d) for d in days)

    return (
        f"{_safe_str(course.get('Number'))} - {_safe_str(course.get('Title'))}\n"
        f"Section: {ordinal} | Type: {_safe_str(section.get('Type'))}\n"
        f"Meets on: {_safe_str(days)} from {format_start_time(meeting.get('StartTime'))} "
        f"for {format_duration(meeting.get('Duration'))}\n"
        f"Location: {format_location(meeting)}\n"
        f"Instructors: {format_instructors(meeting)}\n"
    )


def iter_schedule_blocks(courses: list[dict[str, Any]]) -> Iterator[str]:
    for course in courses:
        for cls in course.get("Classes") or []:
            i = 0
            for section in cls.get("Sections") or []:
                for meeting in section.get("Meetings") or []:
                    i += 1
                    yield format_meeting(course, section, meeting, i)


def count_meetings(course: dict[str, Any]) -> int:
    return sum(
        len(section.get("Meetings") or [])
        for cls in course.get("Classes") or []
        for section in cls.get("Sections") or []
    )


def summary_table(courses: list[dict[str, Any]]) -> Table:
    table = Table(title="Courses", box=box.SIMPLE)
    table.add_column("Course", style="bold cyan")
    table.add_column("Title")
    table.add_column("Meetings", justify="right")
    for course in courses:
        table.add_row(
            _safe_str(course.get("Number")),
            _safe_str(course.get("Title")) or "(no title)",
            str(count_meetings(course)),
        )
    return table


def print_schedule(courses: list[dict[str, Any]], console: Optional[Console] = None) -> int:
    """
    Print all meeting blocks followed by a summary table.
    Returns the number of printed blocks.
    """
    out = console or Console()
    out.print("Schedule:")
    n = 0
    # markup off: titles may contain [brackets]
    for block in iter_schedule_blocks(courses):
        out.print(block, markup=False, highlight=False)
        n += 1
    if courses:
        out.print(summary_table(courses))
    return n
