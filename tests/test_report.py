"""Tests for the text report CLI."""
import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from apptime import report
from apptime.store import save


class TestReport(unittest.TestCase):

    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "usage_daily.json")
        save({
            "2024-01-01": {"a.exe": 10, "b.exe": 30},
            "2024-02-01": {"code": 7200, "firefox": 600},
        }, self.path)

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _run(self, *args: str) -> str:
        out = io.StringIO()
        with redirect_stdout(out):
            code = report.main(["--file", self.path, *args])
        self.assertEqual(code, 0)
        return out.getvalue()

    def test_defaults_to_latest_month(self) -> None:
        text = self._run()
        self.assertIn("== 2024-02 ==", text)
        self.assertIn("-- 2024-02-01  total 02:10:00 --", text)
        self.assertLess(text.index("code"), text.index("firefox"))

    def test_selected_date(self) -> None:
        text = self._run("--date", "2024-01-01", "--top", "1")
        self.assertIn("== 2024-01 ==", text)
        self.assertIn("Top 1:", text)
        self.assertIn("b.exe", text)

    def test_empty_log(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = report.main(["--file", os.path.join(self.tmpdir.name, "none.json")])
        self.assertEqual(code, 0)
        self.assertIn("No usage recorded yet.", out.getvalue())

    def test_invalid_month(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = report.main(["--file", self.path, "--month", "2024-1"])
        self.assertEqual(code, 2)


if __name__ == "__main__":
    unittest.main()
