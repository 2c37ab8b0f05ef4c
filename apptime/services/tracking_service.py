"""
Background sampling loop.

Every tick attributes one second to the focused application and keeps
the day/month buckets current.
"""
import datetime
import threading
import time
from typing import Callable, List, Optional
from ..config import TICK_INTERVAL, debug_log, log, settings
from ..events import (
    DayChangedContext,
    Event,
    EventBus,
    EventContext,
    MonthAddedContext,
    event_bus,
)
from ..models import date_key, month_key
from ..sampler import ForegroundSampler
from ..store import UsageStore
from .query_service import months_available


class TrackingLoop:
    """
    One-second sampling task with explicit start/stop.

    step() runs a single tick and is what tests drive directly; run()
    repeats it until the stop event is set.
    """

    def __init__(
        self,
        store: UsageStore,
        sampler: Optional[ForegroundSampler] = None,
        bus: EventBus = event_bus,
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
        save_interval: Optional[int] = None,
        tick_interval: float = TICK_INTERVAL,
    ) -> None:
        self.store = store
        self.sampler = sampler if sampler is not None else ForegroundSampler()
        self.bus = bus
        self.clock = clock
        self.save_interval = save_interval if save_interval is not None else settings.save_interval_seconds
        self.tick_interval = tick_interval

        self.known_months: List[str] = months_available(store.snapshot())
        self.current_date: Optional[str] = None
        self.ticks = 0
        self.skipped_ticks = 0

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_save: Optional[datetime.datetime] = None
        self._started = False

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def step(self, now: Optional[datetime.datetime] = None) -> Optional[str]:
        """Run one tick. Returns the app credited, or None if skipped."""
        if now is None:
            now = self.clock()
        today = date_key(now)
        month = month_key(now)

        if self.current_date is not None and today != self.current_date:
            log(f"day_change {self.current_date} -> {today}")
            self.bus.emit(Event.DAY_CHANGED, DayChangedContext(self.current_date, today))
        self.current_date = today
        self.store.ensure_day(today)

        try:
            app_id = self.sampler.current_foreground_app()
        except Exception as e:
            debug_log(f"Sampler error: {e}")
            app_id = None

        self.ticks += 1
        if app_id:
            self.store.record_tick(today, app_id)
        else:
            self.skipped_ticks += 1
        debug_log(f"tick {today} app={app_id}")

        if month not in self.known_months:
            self.known_months.append(month)
            log(f"month_added {month}")
            self.bus.emit(Event.MONTH_ADDED, MonthAddedContext(month, list(self.known_months)))

        self._maybe_save(now)
        return app_id

    def _maybe_save(self, now: datetime.datetime) -> None:
        if self._last_save is None:
            self._last_save = now
            return
        if (now - self._last_save).total_seconds() >= self.save_interval:
            self.store.save()
            self._last_save = now

    def _seconds_to_next_tick(self) -> float:
        """Time left until the next tick boundary."""
        return self.tick_interval - (time.time() % self.tick_interval)

    def run(self) -> None:
        """Tick until stop() is requested."""
        if not self._started:
            self._started = True
            self.bus.emit(Event.TRACKER_STARTED, EventContext())
        while not self._stop_event.is_set():
            try:
                self.step()
            except Exception as e:
                print(f"Tick error: {e}")
            self._stop_event.wait(self._seconds_to_next_tick())

    def start(self) -> None:
        """Run the loop on a background thread."""
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run, name="apptime-tracker", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """
        Stop ticking and flush the store.

        Safe to call more than once; every call saves.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        self.store.save()
        if self._started:
            self._started = False
            debug_log(f"stopped after {self.ticks} ticks ({self.skipped_ticks} skipped)")
            self.bus.emit(Event.TRACKER_STOPPED, EventContext())
