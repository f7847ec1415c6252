"""
Term and level helpers.

The catalog only carries Spring and Fall terms:
    January - May       -> "Spring <year>"
    June - July         -> not offered (UnsupportedTermError)
    August - December   -> "Fall <year>"
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from boilerschedule.errors import UnsupportedTermError
from boilerschedule.model import ScheduleConfig


def current_term(today: Optional[date] = None) -> str:
    """
    Return the term label for the given day (default: today).
    """
    day = today or date.today()
    if 1 <= day.month <= 5:
        return f"Spring {day.year}"
    if 6 <= day.month <= 7:
        raise UnsupportedTermError("summer term not offered by data source")
    return f"Fall {day.year}"


def level_range(min_level: int, max_level: int) -> list[int]:
    """
    Expand a level range in steps of 100 (both ends included).
    Empty if min_level > max_level.
    """
    return list(range(min_level, max_level + 1, 100))


def describe_search(config: ScheduleConfig, term: str) -> str:
    levels = ",".join(str(x) for x in level_range(config.min_level, config.max_level))
    return f"Searching for {config.subject} courses in {term} with levels {levels}"
