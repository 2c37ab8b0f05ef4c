"""Unit tests for foreground lookup and platform backends."""
import os
import shutil
import subprocess
import sys
import tempfile
import unittest
from unittest.mock import MagicMock, patch

import psutil

from apptime.platform.generic import GenericPlatform
from apptime.platform.windows import WindowsPlatform
from apptime.platform.x11 import X11Platform
from apptime.sampler import ForegroundSampler, normalize_app_id


class TestNormalize(unittest.TestCase):

    def test_paths_reduced_to_basename(self) -> None:
        self.assertEqual(normalize_app_id("/usr/lib/firefox/firefox"), "firefox")
        self.assertEqual(normalize_app_id("C:\\Program Files\\App\\App.exe"), "App.exe")
        self.assertEqual(normalize_app_id("  code \n"), "code")

    def test_empty_is_none(self) -> None:
        self.assertIsNone(normalize_app_id(None))
        self.assertIsNone(normalize_app_id(""))
        self.assertIsNone(normalize_app_id("   "))
        self.assertIsNone(normalize_app_id("/usr/bin/"))


class TestForegroundSampler(unittest.TestCase):

    def test_returns_normalized_name(self) -> None:
        platform = MagicMock()
        platform.get_foreground_executable.return_value = "C:\\Windows\\explorer.exe"
        sampler = ForegroundSampler(platform)
        self.assertEqual(sampler.current_foreground_app(), "explorer.exe")

    def test_platform_error_is_none(self) -> None:
        """Process vanishing mid-lookup is a skipped tick, not an error."""
        platform = MagicMock()
        platform.get_foreground_executable.side_effect = ProcessLookupError("exited")
        self.assertIsNone(ForegroundSampler(platform).current_foreground_app())

    def test_no_window_is_none(self) -> None:
        self.assertIsNone(ForegroundSampler(GenericPlatform()).current_foreground_app())


class TestProcessName(unittest.TestCase):
    """pid -> name resolution shared by every backend."""

    def setUp(self) -> None:
        self.platform = X11Platform()

    @patch("apptime.platform.base.psutil.Process")
    def test_name(self, mock_process: MagicMock) -> None:
        mock_process.return_value.name.return_value = "code"
        self.assertEqual(self.platform._process_name(4242), "code")  # pyright: ignore[reportPrivateUsage]
        mock_process.assert_called_once_with(4242)

    @patch("apptime.platform.base.psutil.Process")
    def test_gone_or_denied_is_none(self, mock_process: MagicMock) -> None:
        for error in (
            psutil.NoSuchProcess(4242),
            psutil.ZombieProcess(4242),
            psutil.AccessDenied(4242),
        ):
            mock_process.side_effect = error
            self.assertIsNone(self.platform._process_name(4242))  # pyright: ignore[reportPrivateUsage]

    @patch("apptime.platform.base.psutil.Process")
    def test_pid_zero_is_none(self, mock_process: MagicMock) -> None:
        self.assertIsNone(self.platform._process_name(0))  # pyright: ignore[reportPrivateUsage]
        mock_process.assert_not_called()

    @unittest.skipUnless(sys.platform.startswith("linux") and shutil.which("sleep"), "needs Linux and sleep")
    def test_replaced_binary_keeps_name(self) -> None:
        """A program whose executable was deleted after start keeps its plain name."""
        with tempfile.TemporaryDirectory() as tmpdir:
            exe = os.path.join(tmpdir, "myapp")
            shutil.copy(shutil.which("sleep") or "", exe)
            os.chmod(exe, 0o755)
            try:
                proc = subprocess.Popen([exe, "30"])
            except OSError as e:
                self.skipTest(f"cannot execute from temp dir: {e}")
            try:
                os.remove(exe)
                name = self.platform._process_name(proc.pid)  # pyright: ignore[reportPrivateUsage]
                self.assertEqual(normalize_app_id(name), "myapp")
            finally:
                proc.kill()
                proc.wait()


class TestX11Platform(unittest.TestCase):
    """xdotool lookups with subprocess mocked out."""

    def setUp(self) -> None:
        self.platform = X11Platform()

    @patch("apptime.platform.base.psutil.Process")
    @patch("apptime.platform.x11.subprocess.check_output")
    def test_window_to_process_name(self, mock_output: MagicMock, mock_process: MagicMock) -> None:
        mock_output.side_effect = [b"62914563\n", b"4242\n"]
        mock_process.return_value.name.return_value = "code"

        self.assertEqual(self.platform.get_foreground_executable(), "code")
        mock_output.assert_any_call(
            ["xdotool", "getwindowpid", "62914563"],
            stderr=subprocess.DEVNULL,
            timeout=X11Platform.COMMAND_TIMEOUT
        )
        mock_process.assert_called_once_with(4242)

    @patch("apptime.platform.x11.subprocess.check_output")
    def test_no_active_window(self, mock_output: MagicMock) -> None:
        mock_output.side_effect = subprocess.CalledProcessError(1, ["xdotool"])
        self.assertIsNone(self.platform.get_foreground_executable())

    @patch("apptime.platform.x11.subprocess.check_output")
    def test_xdotool_missing(self, mock_output: MagicMock) -> None:
        mock_output.side_effect = FileNotFoundError("xdotool")
        self.assertIsNone(self.platform.get_foreground_executable())

    @patch("apptime.platform.x11.subprocess.check_output")
    def test_xdotool_hangs(self, mock_output: MagicMock) -> None:
        """A stuck xdotool call gives up instead of blocking the tick."""
        mock_output.side_effect = subprocess.TimeoutExpired(["xdotool"], X11Platform.COMMAND_TIMEOUT)
        self.assertIsNone(self.platform.get_foreground_executable())
        for call in mock_output.call_args_list:
            self.assertIn("timeout", call.kwargs)

    @patch("apptime.platform.x11.subprocess.check_output")
    def test_window_without_pid(self, mock_output: MagicMock) -> None:
        mock_output.side_effect = [b"62914563\n", b"\n"]
        self.assertIsNone(self.platform.get_foreground_executable())

    @patch("apptime.platform.base.psutil.Process", side_effect=psutil.NoSuchProcess(4242))
    @patch("apptime.platform.x11.subprocess.check_output")
    def test_process_exited_between_steps(self, mock_output: MagicMock, mock_process: MagicMock) -> None:
        mock_output.side_effect = [b"62914563\n", b"4242\n"]
        self.assertIsNone(self.platform.get_foreground_executable())


class TestWindowsPlatform(unittest.TestCase):
    """user32 calls replaced by a mocked windll."""

    def setUp(self) -> None:
        self.platform = WindowsPlatform()
        self.windll_patcher = patch("apptime.platform.windows.ctypes.windll", create=True)
        self.mock_windll = self.windll_patcher.start()
        self.user32 = self.mock_windll.user32
        self.user32.GetForegroundWindow.return_value = 0x1234

    def tearDown(self) -> None:
        self.windll_patcher.stop()

    def _set_pid(self, pid: int) -> None:
        def fill(hwnd: int, ref: object) -> int:
            ref._obj.value = pid  # type: ignore[attr-defined]
            return 1
        self.user32.GetWindowThreadProcessId.side_effect = fill

    @patch("apptime.platform.base.psutil.Process")
    def test_foreground_process_name(self, mock_process: MagicMock) -> None:
        self._set_pid(4242)
        mock_process.return_value.name.return_value = "notepad.exe"

        self.assertEqual(self.platform.get_foreground_executable(), "notepad.exe")
        mock_process.assert_called_once_with(4242)

    @patch("apptime.platform.base.psutil.Process")
    def test_no_foreground_window(self, mock_process: MagicMock) -> None:
        self.user32.GetForegroundWindow.return_value = 0
        self.assertIsNone(self.platform.get_foreground_executable())
        self.user32.GetWindowThreadProcessId.assert_not_called()
        mock_process.assert_not_called()

    @patch("apptime.platform.base.psutil.Process")
    def test_pid_zero(self, mock_process: MagicMock) -> None:
        self._set_pid(0)
        self.assertIsNone(self.platform.get_foreground_executable())
        mock_process.assert_not_called()

    @patch("apptime.platform.base.psutil.Process")
    def test_access_denied_or_gone(self, mock_process: MagicMock) -> None:
        self._set_pid(4)
        for error in (psutil.AccessDenied(4), psutil.NoSuchProcess(4)):
            mock_process.side_effect = error
            self.assertIsNone(self.platform.get_foreground_executable())

    def test_user32_failure(self) -> None:
        self.user32.GetForegroundWindow.side_effect = OSError("no desktop")
        self.assertIsNone(self.platform.get_foreground_executable())


if __name__ == "__main__":
    unittest.main()
