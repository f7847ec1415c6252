"""
Unit tests for saving/loading the filtered schedule.

Storage contract:
- save writes indented JSON and creates parent directories
- load returns [] for a missing or invalid file
"""

import json
import tempfile
import unittest
from pathlib import Path

from boilerschedule.storage import load_courses, save_courses


class TestStorage(unittest.TestCase):
    def test_load_missing_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "missing.json"
            self.assertEqual(load_courses(p), [])

    def test_load_invalid_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "courses.json"
            p.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_courses(p), [])
            p.write_text('{"value": []}', encoding="utf-8")
            self.assertEqual(load_courses(p), [])

    def test_save_writes_indented_json(self) -> None:
        courses = [{"Number": "30100", "Title": "Software Engineering I", "Classes": []}]
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "out" / "courses.json"
            written = save_courses(courses, p)

            self.assertEqual(written, p)
            text = p.read_text(encoding="utf-8")
            self.assertIn('\n  {\n    "Number": "30100"', text)
            self.assertEqual(json.loads(text), courses)
            self.assertEqual(load_courses(p), courses)


if __name__ == "__main__":
    unittest.main()
