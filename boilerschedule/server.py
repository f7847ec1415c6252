"""
Local viewer: a tiny static file server for courses.json + index.html.

The served folder holds only those two files (see prepare_viewer), never
the working directory.

    http://localhost:3000/   -> index.html from the serving root

Rules:
- paths that resolve outside the serving root are answered with 403
- content type comes from the file extension
- a missing file is 404, any other read error is 500 (server keeps running)
"""

from __future__ import annotations

import logging
import shutil
import threading
import webbrowser
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Any, Optional
from urllib.parse import unquote, urlsplit

from rich.console import Console

from boilerschedule.storage import save_courses


logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
BUNDLED_INDEX = PACKAGE_DIR / "web" / "index.html"

DEFAULT_PORT = 3000

VIEWER_DATA_FILE = "courses.json"

CONTENT_TYPES = {
    ".html": "text/html",
    ".js": "application/javascript",
    ".css": "text/css",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpg",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lower(), "text/html")


def resolve_request_path(root: Path, url_path: str) -> Optional[Path]:
    """
    Map a request path to a file below root. "/" means index.html.

    Returns None if the result would escape root.
    """
    path = unquote(urlsplit(url_path).path)
    if path in ("", "/"):
        path = "/index.html"

    base = root.resolve()
    candidate = (base / path.lstrip("/")).resolve()
    if candidate != base and base not in candidate.parents:
        return None
    return candidate


def prepare_viewer(root: str | Path, courses: list[dict[str, Any]]) -> Path:
    """
    Fill root with exactly what the page needs: the bundled index.html
    and the courses it shows, saved as courses.json (the name the page fetches).
    """
    site = Path(root)
    site.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(BUNDLED_INDEX, site / "index.html")
    save_courses(courses, site / VIEWER_DATA_FILE)
    return site


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


class ViewerHandler(BaseHTTPRequestHandler):
    root: Path = Path(".")

    def do_GET(self) -> None:
        file_path = resolve_request_path(self.root, self.path)
        if file_path is None:
            self._send_text(403, "Forbidden")
            return

        try:
            content = file_path.read_bytes()
        except FileNotFoundError:
            self._send_text(404, "File not found")
            return
        except OSError as exc:
            logger.warning("could not read %s: %s", file_path, exc)
            self._send_text(500, "Server error")
            return

        self.send_response(200)
        self.send_header("Content-Type", content_type_for(file_path))
        self.send_header("Content-Length", str(len(content)))
        self.end_headers()
        self.wfile.write(content)

    def _send_text(self, status: int, text: str) -> None:
        body = text.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(root: str | Path, port: int = DEFAULT_PORT, host: str = "localhost") -> HTTPServer:
    """
    Build (but do not start) a server for files below root. Port 0 picks a free port.
    """
    handler = type("BoundViewerHandler", (ViewerHandler,), {"root": Path(root).resolve()})
    return HTTPServer((host, port), handler)


def serve(
    root: str | Path,
    port: int = DEFAULT_PORT,
    open_browser: bool = True,
    console: Optional[Console] = None,
) -> None:
    """
    Serve root until Ctrl+C. Optionally opens the default browser after 1 second.
    """
    out = console or Console()
    server = make_server(root, port)
    url = f"http://localhost:{server.server_port}/"

    out.print(f"Server running at {url}")
    out.print("Press Ctrl+C to stop the server")

    if open_browser:
        timer = threading.Timer(1.0, webbrowser.open, args=(url,))
        timer.daemon = True
        timer.start()

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        out.print("\nShutting down server...")
    finally:
        server.server_close()
    out.print("Server closed")
