"""
Persistence of a filtered schedule.

This module manages the file:

    courses.json   (in the working directory by default)

It holds the filtered course list exactly as the catalog API shaped it,
indented for humans. The static viewer (server.py) reads the same file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


DEFAULT_COURSES_FILE = "courses.json"


def save_courses(courses: list[dict[str, Any]], path: str | Path = DEFAULT_COURSES_FILE) -> Path:
    """
    Write courses as indented JSON. Creates parent directories if needed.

    Write errors are not caught: losing the artifact should stop the run.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(courses, indent=2, ensure_ascii=False), encoding="utf-8")
    return out


def load_courses(path: str | Path = DEFAULT_COURSES_FILE) -> list[dict[str, Any]]:
    """
    Load a previously saved course list.

    Returns an empty list if the file does not exist or is invalid.
    """
    courses_path = Path(path)

    if not courses_path.exists():
        return []

    try:
        data = json.loads(courses_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return []

    if not isinstance(data, list):
        return []
    # ignore anything that is not a course object
    return [c for c in data if isinstance(c, dict)]
