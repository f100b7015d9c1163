import io
import json
import unittest
import urllib.error
from unittest import mock

import config
import sheets


class _Resp(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class ValuesUrlTests(unittest.TestCase):
    def test_builds_range_url_with_key(self):
        url = sheets.values_url("Awards!A:C", sheet_id="abc", api_key="k 1")
        self.assertEqual(url, f"{config.SHEETS_BASE_URL}/abc/values/Awards!A:C?key=k+1")

    def test_omits_key_when_blank(self):
        url = sheets.values_url("Sheet 1!A:D", sheet_id="abc", api_key="")
        self.assertEqual(url, f"{config.SHEETS_BASE_URL}/abc/values/Sheet%201!A:D")


class FetchValuesTests(unittest.TestCase):
    def test_returns_decoded_body(self):
        body = {"range": "Awards!A1:C3", "values": [["Award"], ["Best", "Sam"]]}
        with mock.patch("urllib.request.urlopen",
                        return_value=_Resp(json.dumps(body).encode())) as urlopen:
            self.assertEqual(sheets.fetch_values("Awards!A:C", timeout=2), body)
        _, kwargs = urlopen.call_args
        self.assertEqual(kwargs["timeout"], 2)

    def test_http_error_wrapped(self):
        err = urllib.error.HTTPError("u", 403, "Forbidden", {}, io.BytesIO(b"denied"))
        with mock.patch("urllib.request.urlopen", side_effect=err):
            with self.assertRaises(sheets.SheetsError) as cm:
                sheets.fetch_values("Awards!A:C")
        self.assertIn("403", str(cm.exception))

    def test_network_error_wrapped(self):
        with mock.patch("urllib.request.urlopen",
                        side_effect=urllib.error.URLError("unreachable")):
            with self.assertRaises(sheets.SheetsError):
                sheets.fetch_values("Awards!A:C")

    def test_timeout_wrapped(self):
        with mock.patch("urllib.request.urlopen", side_effect=TimeoutError("slow")):
            with self.assertRaises(sheets.SheetsError):
                sheets.fetch_values("Awards!A:C")

    def test_bad_json_and_wrong_shape(self):
        for raw in (b"<html>", b"[1, 2]"):
            with mock.patch("urllib.request.urlopen", return_value=_Resp(raw)):
                with self.assertRaises(sheets.SheetsError):
                    sheets.fetch_values("Awards!A:C")


if __name__ == "__main__":
    unittest.main()
