"""
Settings file handling (SETTINGS.env).

The file is a flat list of KEY=value lines:

    SUBJECT_NAME=CS
    MIN_COURSE_LEVEL=100
    MAX_COURSE_LEVEL=900
    DAYS=all
    AFTER_TIME=7

Unset or empty keys fall back to the defaults in model.py. On first run
(or with --wizard) the user is asked for each value and the answers are saved.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from dotenv import dotenv_values
from rich.console import Console

from boilerschedule.errors import SettingsError
from boilerschedule.model import (
    DEFAULT_AFTER_TIME,
    DEFAULT_DAYS,
    DEFAULT_MAX_LEVEL,
    DEFAULT_MIN_LEVEL,
    DEFAULT_SUBJECT,
    ScheduleConfig,
)


DEFAULT_SETTINGS_FILE = "SETTINGS.env"


def _str_value(values: dict[str, Optional[str]], key: str, default: str) -> str:
    raw = values.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _int_value(values: dict[str, Optional[str]], key: str, default: int) -> int:
    raw = _str_value(values, key, str(default))
    try:
        return int(raw)
    except ValueError:
        raise SettingsError(f"{key} must be a whole number, got {raw!r}") from None


def load_settings(path: str | Path = DEFAULT_SETTINGS_FILE) -> ScheduleConfig:
    """
    Read the settings file into a ScheduleConfig.

    A missing file gives the defaults. Raises SettingsError for
    non-numeric levels or an after-time outside 0-23.
    """
    settings_path = Path(path)
    values = dotenv_values(settings_path) if settings_path.exists() else {}

    after_time = _int_value(values, "AFTER_TIME", DEFAULT_AFTER_TIME)
    if not 0 <= after_time <= 23:
        raise SettingsError(f"AFTER_TIME must be an hour between 0 and 23, got {after_time}")

    return ScheduleConfig(
        subject=_str_value(values, "SUBJECT_NAME", DEFAULT_SUBJECT),
        min_level=_int_value(values, "MIN_COURSE_LEVEL", DEFAULT_MIN_LEVEL),
        max_level=_int_value(values, "MAX_COURSE_LEVEL", DEFAULT_MAX_LEVEL),
        days=_str_value(values, "DAYS", DEFAULT_DAYS),
        after_time=after_time,
    )


def settings_text(config: ScheduleConfig) -> str:
    return (
        f"SUBJECT_NAME={config.subject}\n"
        f"MIN_COURSE_LEVEL={config.min_level}\n"
        f"MAX_COURSE_LEVEL={config.max_level}\n"
        f"DAYS={config.days}\n"
        f"AFTER_TIME={config.after_time}\n"
    )


def save_settings(config: ScheduleConfig, path: str | Path = DEFAULT_SETTINGS_FILE) -> None:
    settings_path = Path(path)
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(settings_text(config), encoding="utf-8")


# ---------------------------------------------------------------------------
# Wizard
# ---------------------------------------------------------------------------


WIZARD_QUESTIONS = [
    ("SUBJECT_NAME", "Enter subject name e.g CS,ECE", DEFAULT_SUBJECT),
    ("MIN_COURSE_LEVEL", "Min course level?", str(DEFAULT_MIN_LEVEL)),
    ("MAX_COURSE_LEVEL", "Max course level?", str(DEFAULT_MAX_LEVEL)),
    ("DAYS", "Day that the course meets, or all?", DEFAULT_DAYS),
    ("AFTER_TIME", "Only show courses that start after what 24-hour time?", str(DEFAULT_AFTER_TIME)),
]


def run_wizard(ask: Callable[[str], str]) -> dict[str, str]:
    """
    Ask every question once. A blank answer keeps the default shown in ().
    """
    answers: dict[str, str] = {}
    for key, question, default in WIZARD_QUESTIONS:
        answer = (ask(f"{question} ({default}) ") or "").strip()
        answers[key] = answer or default
    return answers


def _write_answers(answers: dict[str, str], path: Path) -> None:
    lines = [f"{key}={answers[key]}" for key, _q, _d in WIZARD_QUESTIONS]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def resolve_settings(
    path: str | Path = DEFAULT_SETTINGS_FILE,
    wizard: bool = False,
    ask: Optional[Callable[[str], str]] = None,
    console: Optional[Console] = None,
) -> ScheduleConfig:
    """
    Return the run configuration, creating the settings file first if needed.

    With wizard=True an existing file is replaced.
    """
    out = console or Console()
    settings_path = Path(path)

    if wizard and settings_path.exists():
        settings_path.unlink()

    if not settings_path.exists():
        save_settings(ScheduleConfig(), settings_path)
        out.print(f"Created default {settings_path.name} file")
        out.print("Configuration creation wizard (CTRL+C to cancel):")

        answers = run_wizard(ask or out.input)
        _write_answers(answers, settings_path)
        out.print(f"Configuration saved to {settings_path.name}")

    return load_settings(settings_path)
