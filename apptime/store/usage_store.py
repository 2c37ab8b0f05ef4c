"""Persistent day -> app -> seconds log."""
import copy
import json
import os
import threading
from typing import Any, Optional
from ..config import DATA_FILE, debug_log
from ..models import DayRecord, UsageLog, is_date_key


def record_tick(log: UsageLog, date: str, app_id: str) -> None:
    """Add one second of usage for app_id on date."""
    day = log.setdefault(date, {})
    day[app_id] = day.get(app_id, 0) + 1


def merge(log: UsageLog, other: UsageLog) -> UsageLog:
    """Add every count in other into log, in place."""
    for date, apps in other.items():
        day = log.setdefault(date, {})
        for app_id, seconds in apps.items():
            day[app_id] = day.get(app_id, 0) + seconds
    return log


def _parse_log(raw: Any) -> UsageLog:
    """
    Validate a decoded JSON document.

    Raises ValueError if the document isn't a date -> app mapping at all.
    Individual bad counts are dropped.
    """
    if not isinstance(raw, dict):
        raise ValueError("usage log must be a JSON object")

    log: UsageLog = {}
    for date, apps in raw.items():
        if not is_date_key(date) or not isinstance(apps, dict):
            raise ValueError(f"invalid day entry: {date!r}")
        day: DayRecord = {}
        for app_id, seconds in apps.items():
            if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 0:
                debug_log(f"Dropping bad count {date}/{app_id}: {seconds!r}")
                continue
            day[str(app_id)] = seconds
        log[date] = day
    return log


def load(path: str = DATA_FILE) -> UsageLog:
    """
    Read the usage log from disk.

    Returns an empty log if the file is missing, unreadable or malformed.
    """
    if not os.path.exists(path):
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return _parse_log(json.load(f))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValueError) as e:
        print(f"Failed to load usage log {path}, starting fresh: {e}")
        return {}


def save(log: UsageLog, path: str = DATA_FILE) -> bool:
    """
    Overwrite the usage log on disk.

    Returns False (after printing the error) instead of raising.
    """
    tmp_path = path + ".tmp"
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(log, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
        return True
    except (OSError, TypeError, ValueError) as e:
        print(f"Failed to save usage log {path}: {e}")
        try:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        except OSError:
            pass
        return False


def _unsaved(log: UsageLog, persisted: UsageLog) -> UsageLog:
    """Counts in log beyond what persisted already holds."""
    pending: UsageLog = {}
    for date, apps in log.items():
        day = pending.setdefault(date, {})
        saved = persisted.get(date, {})
        for app_id, seconds in apps.items():
            extra = seconds - saved.get(app_id, 0)
            if extra > 0:
                day[app_id] = extra
    return pending


class UsageStore:
    """
    Owns the in-memory usage log.

    The tracking loop is the only writer; readers get snapshot copies.
    The store remembers what the file held at the last load or save, so
    reloading only re-applies ticks that have not been written yet.
    """

    def __init__(self, path: str = DATA_FILE, log: Optional[UsageLog] = None) -> None:
        self.path = path
        self._log: UsageLog = log if log is not None else {}
        # file contents as of the last load/save
        self._persisted: UsageLog = {}
        self._lock = threading.Lock()

    def load(self) -> UsageLog:
        """Replace memory with the on-disk log plus unsaved ticks; return a snapshot."""
        loaded = load(self.path)
        with self._lock:
            pending = _unsaved(self._log, self._persisted)
            self._persisted = copy.deepcopy(loaded)
            self._log = merge(loaded, pending)
            return copy.deepcopy(self._log)

    def save(self) -> bool:
        with self._lock:
            data = copy.deepcopy(self._log)
        if not save(data, self.path):
            return False
        with self._lock:
            self._persisted = data
        return True

    def ensure_day(self, date: str) -> None:
        with self._lock:
            self._log.setdefault(date, {})

    def record_tick(self, date: str, app_id: str) -> None:
        with self._lock:
            record_tick(self._log, date, app_id)

    def snapshot(self) -> UsageLog:
        """Deep copy of the current log, safe to read from any thread."""
        with self._lock:
            return copy.deepcopy(self._log)

    def day(self, date: str) -> DayRecord:
        with self._lock:
            return dict(self._log.get(date, {}))
