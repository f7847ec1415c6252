"""
Catalog client for the public Purdue course API (https://api.purdue.io).

One GET against the OData Courses endpoint returns every course of a subject,
with classes, sections, meetings, instructors and rooms already expanded.
The response includes historical terms; filters.py narrows it down.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from boilerschedule.errors import NetworkError


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# URLs & query
# ---------------------------------------------------------------------------

COURSES_URL = "https://api.purdue.io/odata/Courses"

EXPAND = "Classes($expand=Sections($expand=Meetings($expand=Instructors,Room($expand=Building))))"


def build_params(subject: str) -> dict[str, str]:
    """
    OData query parameters for all courses of one subject (e.g. "CS").
    """
    return {
        "$expand": EXPAND,
        "$filter": f"Subject/Abbreviation eq '{subject}'",
    }


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def fetch_courses(subject: str, timeout: float = 30, session: Any = None) -> list[dict[str, Any]]:
    """
    Fetch the raw course list for a subject.

    Raises NetworkError if the request fails or the body is not
    a JSON object with a "value" list.
    """
    http = session or requests
    params = build_params(subject)
    logger.debug("GET %s params=%s", COURSES_URL, params)

    try:
        resp = http.get(COURSES_URL, params=params, timeout=timeout)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as exc:
        raise NetworkError(f"Catalog request failed: {exc}") from exc
    except ValueError as exc:
        raise NetworkError(f"Catalog returned invalid JSON: {exc}") from exc

    courses = payload.get("value") if isinstance(payload, dict) else None
    if not isinstance(courses, list):
        raise NetworkError("Catalog response has no course list")

    logger.debug("catalog returned %d courses for %s", len(courses), subject)
    return courses
