"""
Course filtering (raw catalog JSON -> current lecture meetings).

Two passes over the course list:

Stage A (screen_courses):
    keep a course if its level (Number / 100) lies in [min_level, max_level]
    and ANY of its sections is running right now (any section type).

Stage B (rebuild_course):
    keep only running Lecture sections, and in them only meetings that pass
    check_meeting(). Empty sections, classes and courses are dropped.

Nothing here mutates the input: rebuilt courses/classes/sections are new
dicts, meeting dicts are passed through untouched. Order is preserved.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from boilerschedule.model import ExclusionReason, MeetingCheck, ScheduleConfig


logger = logging.getLogger(__name__)

LECTURE = "Lecture"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _utc_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or date-time from the API.

    Values without an offset are read as UTC (a bare date is UTC midnight).
    Returns None for missing or unparseable values.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        when = datetime.fromisoformat(text)
    except ValueError:
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return when


def is_current(item: dict[str, Any], now: datetime) -> bool:
    """
    True if StartDate < now < EndDate (both bounds exclusive).
    """
    start = parse_timestamp(item.get("StartDate"))
    end = parse_timestamp(item.get("EndDate"))
    if start is None or end is None:
        return False
    return start < now < end


def course_level(course: dict[str, Any]) -> Optional[float]:
    """
    Course number divided by 100 (30100 -> 301.0), None if not numeric.
    """
    try:
        return float(course.get("Number")) / 100
    except (TypeError, ValueError):
        return None


def day_tokens(value: Any) -> list[str]:
    """
    Split DaysOfWeek ("Monday, Wednesday" or ["Monday", "Wednesday"]) into tokens.
    """
    if isinstance(value, str):
        parts: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = value
    else:
        return []
    return [str(p).strip() for p in parts if str(p).strip()]


def parse_start_hour(value: Any) -> Optional[int]:
    """
    Hour of a "HH:MM:SS" start time. None if there is no colon
    or the hour part is not a number.
    """
    if not isinstance(value, str) or ":" not in value:
        return None
    head = value.split(":", 1)[0].strip()
    # isdigit() alone lets "²" through
    if not (head.isascii() and head.isdigit()):
        return None
    return int(head)


# ---------------------------------------------------------------------------
# Meeting level
# ---------------------------------------------------------------------------


def check_meeting(meeting: dict[str, Any], config: ScheduleConfig, now: datetime) -> MeetingCheck:
    """
    Check one meeting against the configuration. First failing rule wins.
    """
    if meeting.get("Type") != LECTURE:
        return MeetingCheck(meeting, ExclusionReason.NOT_LECTURE)

    if not is_current(meeting, _utc_now(now)):
        return MeetingCheck(meeting, ExclusionReason.NOT_CURRENT)

    tokens = day_tokens(meeting.get("DaysOfWeek"))
    if not tokens:
        return MeetingCheck(meeting, ExclusionReason.MISSING_DAYS)
    wanted = set(config.day_list)
    if not any(t in wanted for t in tokens):
        return MeetingCheck(meeting, ExclusionReason.NO_MATCHING_DAY)

    hour = parse_start_hour(meeting.get("StartTime"))
    if hour is None:
        return MeetingCheck(meeting, ExclusionReason.BAD_START_TIME)
    if hour < (config.after_time or 0):
        return MeetingCheck(meeting, ExclusionReason.TOO_EARLY)

    return MeetingCheck(meeting)


# ---------------------------------------------------------------------------
# Course level
# ---------------------------------------------------------------------------


def _in_level_range(course: dict[str, Any], config: ScheduleConfig) -> bool:
    level = course_level(course)
    if level is None:
        return False
    return config.min_level <= level <= config.max_level


def _has_current_section(course: dict[str, Any], now: datetime) -> bool:
    for cls in course.get("Classes") or []:
        for section in cls.get("Sections") or []:
            if is_current(section, now):
                return True
    return False


def _current_lectures(course: dict[str, Any], now: datetime) -> Iterable[tuple[dict[str, Any], dict[str, Any]]]:
    """
    Yield (class, section) for every running Lecture section, in order.
    """
    for cls in course.get("Classes") or []:
        for section in cls.get("Sections") or []:
            if section.get("Type") == LECTURE and is_current(section, now):
                yield cls, section


def screen_courses(
    raw_courses: Iterable[dict[str, Any]], config: ScheduleConfig, now: Optional[datetime] = None
) -> list[dict[str, Any]]:
    """
    Stage A: level range + "offered right now" check.
    """
    now = _utc_now(now)
    return [c for c in raw_courses if _in_level_range(c, config) and _has_current_section(c, now)]


def rebuild_course(
    course: dict[str, Any], config: ScheduleConfig, now: Optional[datetime] = None
) -> Optional[dict[str, Any]]:
    """
    Stage B: rebuild one course with matching lecture meetings only.
    Returns None if nothing is left.
    """
    now = _utc_now(now)

    classes: list[dict[str, Any]] = []
    for cls in course.get("Classes") or []:
        sections: list[dict[str, Any]] = []
        for section in cls.get("Sections") or []:
            if section.get("Type") != LECTURE or not is_current(section, now):
                continue
            checks = [check_meeting(m, config, now) for m in section.get("Meetings") or []]
            meetings = [c.meeting for c in checks if c.kept]
            if meetings:
                sections.append({**section, "Meetings": meetings})
        if sections:
            classes.append({**cls, "Sections": sections})

    if not classes:
        return None
    return {**course, "Classes": classes}


def filter_courses(
    raw_courses: Iterable[dict[str, Any]], config: ScheduleConfig, now: Optional[datetime] = None
) -> list[dict[str, Any]]:
    """
    Run both stages and return the surviving courses.
    """
    now = _utc_now(now)

    screened = screen_courses(raw_courses, config, now)
    logger.debug("%d courses in level range and currently offered", len(screened))

    out: list[dict[str, Any]] = []
    for course in screened:
        rebuilt = rebuild_course(course, config, now)
        if rebuilt is not None:
            out.append(rebuilt)
    return out


def exclusion_report(
    raw_courses: Iterable[dict[str, Any]], config: ScheduleConfig, now: Optional[datetime] = None
) -> Counter:
    """
    Count why meetings of running lecture sections were dropped
    (only courses that pass Stage A are looked at).
    """
    now = _utc_now(now)
    reasons: Counter = Counter()
    for course in screen_courses(raw_courses, config, now):
        for _cls, section in _current_lectures(course, now):
            for meeting in section.get("Meetings") or []:
                check = check_meeting(meeting, config, now)
                if not check.kept:
                    reasons[check.reason] += 1
    return reasons
