"""Windows implementation using user32 through ctypes."""
import ctypes
from typing import Any, Optional
from .base import PlatformBase


class WindowsPlatform(PlatformBase):
    """Foreground lookup via GetForegroundWindow."""

    @property
    def name(self) -> str:
        return "Windows"

    @property
    def supports_window_tracking(self) -> bool:
        return hasattr(ctypes, "windll")

    def get_foreground_executable(self) -> Optional[str]:
        try:
            windll: Any = getattr(ctypes, "windll")
            user32 = windll.user32

            hwnd = user32.GetForegroundWindow()
            if not hwnd:
                return None

            pid = ctypes.c_ulong()
            user32.GetWindowThreadProcessId(hwnd, ctypes.byref(pid))
        except (AttributeError, OSError):
            return None
        return self._process_name(pid.value)
