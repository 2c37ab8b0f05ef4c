"""
Data models for the application.
"""
import datetime
from dataclasses import dataclass
from typing import Dict, Union

# app identifier -> accumulated seconds
DayRecord = Dict[str, int]
# date key (YYYY-MM-DD) -> DayRecord
UsageLog = Dict[str, DayRecord]

DATE_KEY_FORMAT = "%Y-%m-%d"


def date_key(when: Union[datetime.datetime, datetime.date]) -> str:
    """Return the YYYY-MM-DD bucket for a timestamp."""
    return when.strftime(DATE_KEY_FORMAT)


def month_key(when: Union[str, datetime.datetime, datetime.date]) -> str:
    """Return the YYYY-MM bucket for a date key or timestamp."""
    if isinstance(when, str):
        return when[:7]
    return when.strftime("%Y-%m")


def is_date_key(value: str) -> bool:
    """True if value is a valid YYYY-MM-DD string."""
    try:
        datetime.datetime.strptime(value, DATE_KEY_FORMAT)
    except (TypeError, ValueError):
        return False
    return len(value) == 10


def is_month_key(value: str) -> bool:
    """True if value is a valid YYYY-MM string."""
    try:
        datetime.datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        return False
    return len(value) == 7


def format_duration(seconds: int) -> str:
    """Format seconds as HH:MM:SS (hours not wrapped at 24)."""
    hours, rem = divmod(max(int(seconds), 0), 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


@dataclass
class AppUsage:
    """One application's time for a single day."""
    app: str
    seconds: int

    @property
    def time_string(self) -> str:
        return format_duration(self.seconds)

    def to_dict(self) -> Dict[str, object]:
        return {"app": self.app, "seconds": self.seconds, "time": self.time_string}
