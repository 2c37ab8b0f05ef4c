"""Read-only aggregations over usage log snapshots."""
import threading
from typing import Any, Dict, List, Optional, Tuple
from ..config import CHART_MIN_CEILING, settings
from ..events import Event, EventBus, MonthAddedContext, event_bus
from ..models import UsageLog, month_key
from ..store import UsageStore


def months_available(log: UsageLog) -> List[str]:
    """Distinct month keys present in the log, ascending."""
    return sorted({month_key(date) for date in log})


def daily_totals(log: UsageLog, month: str) -> List[Tuple[str, int]]:
    """(date, total seconds) for every recorded day of a month, ascending."""
    return [
        (date, sum(log[date].values()))
        for date in sorted(log)
        if month_key(date) == month
    ]


def day_detail(log: UsageLog, date: str) -> List[Tuple[str, int]]:
    """
    Full per-app breakdown for a day, most used first.

    sorted() is stable, so equal counts keep the day's first-seen order.
    """
    apps = log.get(date, {})
    return sorted(apps.items(), key=lambda x: x[1], reverse=True)


def top_n(log: UsageLog, date: str, n: int) -> List[Tuple[str, int]]:
    """The n most used apps of a day."""
    if n <= 0:
        return []
    return day_detail(log, date)[:n]


class QueryService:
    """
    Query layer bound to a live store.

    Reads go through store snapshots. The month list is cached and kept
    current by MONTH_ADDED events from the tracking loop.
    """

    def __init__(self, store: UsageStore, bus: EventBus = event_bus) -> None:
        self.store = store
        self._months: Optional[List[str]] = None
        self._lock = threading.Lock()
        self._bus = bus
        bus.subscribe(Event.MONTH_ADDED, self._on_month_added)

    def _on_month_added(self, ctx: MonthAddedContext) -> None:
        with self._lock:
            if self._months is not None and ctx.month not in self._months:
                self._months = sorted(self._months + [ctx.month])

    def close(self) -> None:
        """Stop listening for month rollover."""
        self._bus.unsubscribe(Event.MONTH_ADDED, self._on_month_added)

    def invalidate(self) -> None:
        """Drop the cached month list (e.g. after reloading the store)."""
        with self._lock:
            self._months = None

    def months(self) -> List[str]:
        with self._lock:
            if self._months is None:
                self._months = months_available(self.store.snapshot())
            return list(self._months)

    def latest_month(self) -> Optional[str]:
        months = self.months()
        return months[-1] if months else None

    def adjacent_month(self, month: str, step: int) -> Optional[str]:
        """Previous (step=-1) or next (step=1) month with data, or None."""
        months = self.months()
        if month not in months:
            return None
        idx = months.index(month) + step
        if 0 <= idx < len(months):
            return months[idx]
        return None

    def daily_totals(self, month: str) -> List[Tuple[str, int]]:
        return daily_totals(self.store.snapshot(), month)

    def day_detail(self, date: str) -> List[Tuple[str, int]]:
        return day_detail({date: self.store.day(date)}, date)

    def top_apps(self, date: str, limit: Optional[int] = None) -> List[Tuple[str, int]]:
        if limit is None:
            limit = settings.top_apps_limit
        return top_n({date: self.store.day(date)}, date, limit)

    def day_total(self, date: str) -> int:
        return sum(self.store.day(date).values())

    def default_date(self, month: str, selected: Optional[str] = None) -> Optional[str]:
        """
        Date to show details for.

        Keeps the selection if it falls in the month, otherwise the month's
        latest recorded day.
        """
        if selected and month_key(selected) == month:
            return selected
        dates = [date for date, _ in self.daily_totals(month)]
        return dates[-1] if dates else None

    def chart_ceiling(self, month: str) -> float:
        """Upper bound for a bar chart of the month's daily totals."""
        totals = [total for _, total in self.daily_totals(month)]
        peak = max(totals) if totals else 0
        return max(float(CHART_MIN_CEILING), peak * 1.1)

    def month_summary(self, month: str) -> Dict[str, Any]:
        totals = self.daily_totals(month)
        peak = max((total for _, total in totals), default=0)
        return {
            "month": month,
            "days": [{"date": date, "seconds": total} for date, total in totals],
            "max_seconds": peak,
            "ceiling": max(float(CHART_MIN_CEILING), peak * 1.1),
            "prev": self.adjacent_month(month, -1),
            "next": self.adjacent_month(month, 1),
        }
