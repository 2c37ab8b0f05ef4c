"""
apptime/sampler.py

Foreground application lookup.
"""
import ntpath
import posixpath
from typing import Optional
from .config import debug_log
from .platform import PlatformBase, get_platform


def normalize_app_id(executable: Optional[str]) -> Optional[str]:
    """
    Reduce an executable path or name to its base name.

    Both separators are handled so Windows paths normalize the same way
    on any host.
    """
    if not executable:
        return None
    name = ntpath.basename(posixpath.basename(executable.strip())).strip()
    return name or None


class ForegroundSampler:
    """
    Answers "which application owns the focused window right now".

    Any platform failure yields None; the caller just skips that tick.
    """

    def __init__(self, platform: Optional[PlatformBase] = None) -> None:
        self._platform = platform

    @property
    def platform(self) -> PlatformBase:
        if self._platform is None:
            self._platform = get_platform()
        return self._platform

    def current_foreground_app(self) -> Optional[str]:
        try:
            executable = self.platform.get_foreground_executable()
        except Exception as e:
            # Process exited between lookup steps, permission denied, ...
            debug_log(f"Foreground lookup error: {e}")
            return None
        return normalize_app_id(executable)
