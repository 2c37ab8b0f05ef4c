"""Fallback for sessions without a supported window lookup."""
from typing import Optional
from .base import PlatformBase


class GenericPlatform(PlatformBase):
    """Wayland and unknown environments: nothing is attributed."""

    @property
    def name(self) -> str:
        return "Generic"

    @property
    def supports_window_tracking(self) -> bool:
        return False

    def get_foreground_executable(self) -> Optional[str]:
        return None
