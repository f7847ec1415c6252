"""
Exceptions raised by boilerschedule.

Each one is fatal for a CLI run; cli.main() turns them into exit code 1.
Malformed meeting data is not an error, see model.ExclusionReason.
"""

from __future__ import annotations


class BoilerScheduleError(Exception):
    """Base class for all errors of this package."""


class UnsupportedTermError(BoilerScheduleError):
    """The current month falls into the summer break (not in the catalog)."""


class NetworkError(BoilerScheduleError):
    """The catalog request failed or returned something that is not a course list."""


class SettingsError(BoilerScheduleError):
    """The settings file holds a value that cannot be used."""
