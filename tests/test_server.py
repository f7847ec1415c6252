"""
Tests for the local viewer server.

Path handling is tested directly; one test starts a real server
on a free port (port 0) and talks to it over HTTP.
"""

import io
import json
import tempfile
import threading
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests
from rich.console import Console

from boilerschedule.server import (
    BUNDLED_INDEX,
    VIEWER_DATA_FILE,
    content_type_for,
    make_server,
    prepare_viewer,
    resolve_request_path,
    serve,
)


class TestPaths(unittest.TestCase):
    def test_root_maps_to_index(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            root = Path(d)
            self.assertEqual(resolve_request_path(root, "/"), (root / "index.html").resolve())
            self.assertEqual(resolve_request_path(root, "/?x=1"), (root / "index.html").resolve())
            self.assertEqual(resolve_request_path(root, "/courses.json"), (root / "courses.json").resolve())

    def test_traversal_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            root = Path(d) / "site"
            root.mkdir()
            self.assertIsNone(resolve_request_path(root, "/../secret.txt"))
            self.assertIsNone(resolve_request_path(root, "/%2e%2e/secret.txt"))
            self.assertIsNotNone(resolve_request_path(root, "/sub/../index.html"))

    def test_content_types(self) -> None:
        self.assertEqual(content_type_for(Path("a.json")), "application/json")
        self.assertEqual(content_type_for(Path("a.js")), "application/javascript")
        self.assertEqual(content_type_for(Path("a.CSS")), "text/css")
        self.assertEqual(content_type_for(Path("a.jpg")), "image/jpg")
        self.assertEqual(content_type_for(Path("README")), "text/html")

    def test_prepare_viewer_writes_page_and_courses_only(self) -> None:
        courses = [{"Number": "30100", "Title": "Software Engineering I", "Classes": []}]
        with tempfile.TemporaryDirectory() as d:
            site = prepare_viewer(Path(d) / "site", courses)

            self.assertEqual(sorted(p.name for p in site.iterdir()), ["courses.json", "index.html"])
            self.assertEqual((site / "index.html").read_bytes(), BUNDLED_INDEX.read_bytes())
            self.assertEqual(json.loads((site / "courses.json").read_text(encoding="utf-8")), courses)

    def test_bundled_page_fetches_the_viewer_data_file(self) -> None:
        page = BUNDLED_INDEX.read_text(encoding="utf-8")
        self.assertIn(f'fetch("{VIEWER_DATA_FILE}")', page)


class TestServer(unittest.TestCase):
    def test_serves_files_and_errors(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            root = Path(d)
            (root / "index.html").write_text("<h1>hi</h1>", encoding="utf-8")
            (root / "courses.json").write_text("[]", encoding="utf-8")
            (root / "folder").mkdir()

            server = make_server(root, port=0, host="127.0.0.1")
            thread = threading.Thread(target=server.serve_forever, daemon=True)
            thread.start()
            base = f"http://127.0.0.1:{server.server_port}"
            try:
                index = requests.get(base + "/", timeout=5)
                data = requests.get(base + "/courses.json", timeout=5)
                missing = requests.get(base + "/nope.css", timeout=5)
                folder = requests.get(base + "/folder", timeout=5)
            finally:
                server.shutdown()
                server.server_close()

        self.assertEqual(index.status_code, 200)
        self.assertEqual(index.headers["Content-Type"], "text/html")
        self.assertEqual(index.text, "<h1>hi</h1>")
        self.assertEqual(data.headers["Content-Type"], "application/json")
        self.assertEqual(data.json(), [])
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.text, "File not found")
        self.assertEqual(folder.status_code, 500)

    def test_serve_stops_on_ctrl_c(self) -> None:
        fake = MagicMock()
        fake.server_port = 3000
        fake.serve_forever.side_effect = KeyboardInterrupt
        buf = io.StringIO()

        with patch("boilerschedule.server.make_server", return_value=fake):
            serve(".", open_browser=False, console=Console(file=buf))

        fake.server_close.assert_called_once()
        out = buf.getvalue()
        self.assertIn("Server running at http://localhost:3000/", out)
        self.assertIn("Shutting down server...", out)
        self.assertIn("Server closed", out)


if __name__ == "__main__":
    unittest.main()
