"""Platform detection and factory."""
import os
import sys
from typing import Optional
from ..config import log
from .base import PlatformBase
from .windows import WindowsPlatform
from .x11 import X11Platform
from .generic import GenericPlatform


_platform_instance: Optional[PlatformBase] = None


def detect_platform() -> PlatformBase:
    """
    Detect the windowing system and return the matching platform instance.

    Detection order:
    1. Windows
    2. X11 session (DISPLAY or XDG_SESSION_TYPE=x11)
    3. Fallback to generic implementation
    """
    global _platform_instance

    if _platform_instance is not None:
        return _platform_instance

    if sys.platform == "win32":
        _platform_instance = WindowsPlatform()
    elif os.environ.get("XDG_SESSION_TYPE", "").lower() == "x11" or os.environ.get("DISPLAY"):
        _platform_instance = X11Platform()
    else:
        _platform_instance = GenericPlatform()

    log(f"Detected platform: {_platform_instance.name}")
    if not _platform_instance.supports_window_tracking:
        log("Foreground window lookup unavailable, no usage will be recorded")
    return _platform_instance


def get_platform() -> PlatformBase:
    """Get current platform instance (cached)."""
    return detect_platform()


__all__ = ["PlatformBase", "get_platform", "detect_platform"]
