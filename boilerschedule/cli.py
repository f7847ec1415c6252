"""
CLI (Command Line Interface).

One run goes through the whole pipeline:

    settings -> term -> fetch catalog -> filter -> save / print / serve

Examples:

    boilerschedule                      # ask before saving and serving
    boilerschedule --save --no-serve    # no questions asked
    boilerschedule --wizard             # re-create SETTINGS.env
    boilerschedule --from-file courses.json --no-serve

Note:
- The filtering rules live in boilerschedule/filters.py
- Errors from settings, term or network end the run with exit code 1
"""

from __future__ import annotations

import argparse
import logging
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from boilerschedule.catalog import fetch_courses
from boilerschedule.errors import BoilerScheduleError
from boilerschedule.filters import exclusion_report, filter_courses
from boilerschedule.presenter import print_schedule
from boilerschedule.server import DEFAULT_PORT, prepare_viewer, serve
from boilerschedule.settings import DEFAULT_SETTINGS_FILE, resolve_settings
from boilerschedule.storage import DEFAULT_COURSES_FILE, load_courses, save_courses
from boilerschedule.terms import current_term, describe_search


logger = logging.getLogger(__name__)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """
    Log through rich to stderr. WARNING by default, DEBUG with -v.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _ask_yes(question: str, decided: Optional[bool]) -> bool:
    """
    Return the flag if one was given, otherwise ask. Blank, "y" and "yes" mean yes.
    """
    if decided is not None:
        return decided
    answer = console.input(question).strip().lower()
    return answer in ("", "y", "yes")


def _fetch_and_filter(args: argparse.Namespace) -> list[dict[str, Any]]:
    config = resolve_settings(args.settings, wizard=args.wizard, console=console)
    term = current_term()

    console.print(describe_search(config, term))

    raw = fetch_courses(config.subject)
    console.print(f"Found {len(raw)} courses (including historical) in {config.subject}")

    now = datetime.now(timezone.utc)
    courses = filter_courses(raw, config, now)
    console.print(f"After filtering, {len(courses)} courses remain.")

    if logger.isEnabledFor(logging.DEBUG):
        for reason, n in exclusion_report(raw, config, now).most_common():
            logger.debug("excluded %d meetings: %s", n, reason.value)

    out_path = Path(args.out)
    if _ask_yes(f"Save courses to {out_path.name}? y/n (y) ", args.save):
        console.print(f"Saving to {out_path.name}")
        save_courses(courses, out_path)

    return courses


def _load_saved(args: argparse.Namespace) -> list[dict[str, Any]]:
    courses = load_courses(args.from_file)
    console.print(f"Loaded {len(courses)} courses from {args.from_file}")
    return courses


def _run(args: argparse.Namespace) -> int:
    try:
        courses = _load_saved(args) if args.from_file else _fetch_and_filter(args)
    except BoilerScheduleError as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1

    print_schedule(courses, console)

    if _ask_yes("Open browser to view courses? y/n (y) ", args.serve):
        console.print("Starting local server...")
        # served folder holds the page and these courses only
        with tempfile.TemporaryDirectory(prefix="boilerschedule-viewer-") as d:
            root = prepare_viewer(d, courses)
            serve(root, port=args.port, open_browser=not args.no_browser, console=console)

    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser.
    """
    parser = argparse.ArgumentParser(
        prog="boilerschedule",
        description="Show this term's lecture schedule from the Purdue course catalog",
    )
    parser.add_argument(
        "--settings", type=str, default=DEFAULT_SETTINGS_FILE, help="Settings file (default: SETTINGS.env)"
    )
    parser.add_argument("--wizard", action="store_true", help="Re-create the settings file interactively")

    parser.add_argument("--save", dest="save", action="store_true", help="Save courses without asking")
    parser.add_argument("--no-save", dest="save", action="store_false", help="Do not save courses")
    parser.add_argument("--out", type=str, default=DEFAULT_COURSES_FILE, help="Output JSON file (default: courses.json)")

    parser.add_argument("--serve", dest="serve", action="store_true", help="Start the viewer without asking")
    parser.add_argument("--no-serve", dest="serve", action="store_false", help="Do not start the viewer")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Viewer port (default: 3000)")
    parser.add_argument("--no-browser", action="store_true", help="Serve without opening a browser")

    parser.add_argument("--from-file", type=str, default=None, help="Show a saved courses.json instead of fetching")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    parser.set_defaults(save=None, serve=None)
    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, runs the pipeline,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    raise SystemExit(_run(args))
