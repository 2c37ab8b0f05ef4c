"""X11 implementation using xdotool."""
import subprocess
from typing import Optional
from .base import PlatformBase


class X11Platform(PlatformBase):
    """Linux/BSD desktops running an X server."""

    WINDOW_COMMANDS = {
        "get_id": ["xdotool", "getactivewindow"],
        "get_pid": ["xdotool", "getwindowpid"],
    }
    COMMAND_TIMEOUT: float = 0.5  # seconds

    @property
    def name(self) -> str:
        return "X11"

    @property
    def supports_window_tracking(self) -> bool:
        return self._is_x11() and self._check_command("xdotool")

    def get_foreground_executable(self) -> Optional[str]:
        """Resolve active window -> pid -> process name."""
        try:
            window_id = subprocess.check_output(
                self.WINDOW_COMMANDS["get_id"],
                stderr=subprocess.DEVNULL,
                timeout=self.COMMAND_TIMEOUT
            ).decode().strip()
            if not window_id:
                return None

            pid = subprocess.check_output(
                self.WINDOW_COMMANDS["get_pid"] + [window_id],
                stderr=subprocess.DEVNULL,
                timeout=self.COMMAND_TIMEOUT
            ).decode().strip()
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
            return None

        if not pid.isdigit():
            return None
        return self._process_name(int(pid))
