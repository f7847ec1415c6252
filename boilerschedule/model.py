"""
Central data model definitions used across the project.

Courses themselves stay plain JSON dicts exactly as the catalog API returns
them (Course -> Classes -> Sections -> Meetings), so a saved courses.json keeps
every field. This module only defines:
- the configuration record that drives one run
- the typed outcome of checking a single meeting against that configuration
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, List


WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

DEFAULT_SUBJECT = "CS"
DEFAULT_MIN_LEVEL = 100
DEFAULT_MAX_LEVEL = 900
DEFAULT_DAYS = "all"
DEFAULT_AFTER_TIME = 7


@dataclass(frozen=True)
class ScheduleConfig:
    """
    Search and filter settings for one run (one subject, one term).
    """

    subject: str = DEFAULT_SUBJECT
    min_level: int = DEFAULT_MIN_LEVEL
    max_level: int = DEFAULT_MAX_LEVEL
    days: str = DEFAULT_DAYS
    after_time: int = DEFAULT_AFTER_TIME

    @property
    def day_list(self) -> List[str]:
        """
        Weekday tokens a meeting must hit. "all" means Monday to Friday.
        """
        if self.days.strip().lower() == "all":
            return list(WEEKDAYS)
        return [d.strip() for d in self.days.split(",") if d.strip()]


class ExclusionReason(Enum):
    NOT_LECTURE = "not a lecture"
    NOT_CURRENT = "not running today"
    MISSING_DAYS = "no meeting days"
    NO_MATCHING_DAY = "no matching day"
    BAD_START_TIME = "malformed start time"
    TOO_EARLY = "starts too early"


@dataclass(frozen=True)
class MeetingCheck:
    """
    Result of checking one meeting: kept when reason is None.
    """

    meeting: dict[str, Any]
    reason: Optional[ExclusionReason] = None

    @property
    def kept(self) -> bool:
        return self.reason is None
