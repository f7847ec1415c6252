"""
Unit tests for the catalog client. No real network access: requests is mocked.
"""

import unittest
from unittest.mock import MagicMock, patch

import requests

from boilerschedule.catalog import COURSES_URL, build_params, fetch_courses
from boilerschedule.errors import NetworkError


def fake_response(payload=None, json_error=None, http_error=None) -> MagicMock:
    resp = MagicMock()
    if http_error is not None:
        resp.raise_for_status.side_effect = http_error
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


class TestBuildParams(unittest.TestCase):
    def test_subject_filter_and_expand(self) -> None:
        params = build_params("ECE")
        self.assertEqual(params["$filter"], "Subject/Abbreviation eq 'ECE'")
        self.assertIn("Meetings($expand=Instructors,Room($expand=Building))", params["$expand"])


class TestFetchCourses(unittest.TestCase):
    def test_returns_value_list(self) -> None:
        courses = [{"Number": "18000", "Title": "Problem Solving"}]
        with patch("boilerschedule.catalog.requests.get", return_value=fake_response({"value": courses})) as get:
            out = fetch_courses("CS")

        self.assertEqual(out, courses)
        args, kwargs = get.call_args
        self.assertEqual(args[0], COURSES_URL)
        self.assertEqual(kwargs["params"], build_params("CS"))

    def test_uses_given_session(self) -> None:
        session = MagicMock()
        session.get.return_value = fake_response({"value": []})
        self.assertEqual(fetch_courses("CS", session=session), [])
        session.get.assert_called_once()

    def test_connection_error_becomes_network_error(self) -> None:
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("offline")
        with self.assertRaises(NetworkError):
            fetch_courses("CS", session=session)

    def test_http_error_becomes_network_error(self) -> None:
        session = MagicMock()
        session.get.return_value = fake_response(http_error=requests.HTTPError("503"))
        with self.assertRaises(NetworkError):
            fetch_courses("CS", session=session)

    def test_invalid_json_becomes_network_error(self) -> None:
        session = MagicMock()
        session.get.return_value = fake_response(json_error=ValueError("Expecting value"))
        with self.assertRaises(NetworkError):
            fetch_courses("CS", session=session)

    def test_payload_without_course_list(self) -> None:
        session = MagicMock()
        session.get.return_value = fake_response({"error": "nope"})
        with self.assertRaises(NetworkError):
            fetch_courses("CS", session=session)


if __name__ == "__main__":
    unittest.main()
