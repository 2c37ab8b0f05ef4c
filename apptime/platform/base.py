"""Base platform abstraction."""
import os
import subprocess
from abc import ABC, abstractmethod
from typing import Optional

import psutil


class PlatformBase(ABC):
    """Abstract base for platform-specific foreground window lookup."""

    @abstractmethod
    def get_foreground_executable(self) -> Optional[str]:
        """
        Return the executable name owning the focused window.

        Returns None when there is no focused window or the lookup fails.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Platform name for logging."""
        pass

    @property
    @abstractmethod
    def supports_window_tracking(self) -> bool:
        """Whether platform supports foreground window lookup."""
        pass

    # Shared helpers
    def _process_name(self, pid: int) -> Optional[str]:
        """Process name for a pid, None if it exited or is not accessible."""
        if pid <= 0:
            return None
        try:
            return psutil.Process(pid).name() or None
        except (psutil.NoSuchProcess, psutil.ZombieProcess, psutil.AccessDenied):
            return None

    def _check_command(self, cmd: str) -> bool:
        """Check if command exists."""
        try:
            subprocess.run(["which", cmd], capture_output=True, check=True)
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False

    def _is_x11(self) -> bool:
        """Check if running on X11."""
        session_type = os.environ.get("XDG_SESSION_TYPE", "").lower()
        return session_type == "x11" or os.environ.get("DISPLAY") is not None
