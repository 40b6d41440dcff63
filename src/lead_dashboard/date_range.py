from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

MAX_RANGE_DAYS = 60
WIRE_DATE_FORMAT = "%Y/%m/%d"


def _as_date(value: Optional[date]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive ``[start, end]`` window selected on a dashboard.

    ``start`` missing means "no lower bound". ``end`` missing means "now" once
    the range is put on the wire. Instances built directly are unchecked; use
    :func:`normalize` to obtain one that honours the ordering and span limits.
    """

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _as_date(self.start))
        object.__setattr__(self, "end", _as_date(self.end))

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def span_days(self) -> Optional[int]:
        if not self.is_complete:
            return None
        return (self.end - self.start).days

    def as_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }


def format_wire_date(value: date) -> str:
    """Render a date the way the backend expects it (``yyyy/MM/dd``)."""
    return value.strftime(WIRE_DATE_FORMAT)


def normalize(candidate: Optional[DateRange]) -> Optional[DateRange]:
    if candidate is None:
        return None

    start, end = candidate.start, candidate.end
    if start is not None and end is not None:
        if start > end:
            start, end = end, start
        if (end - start).days >= MAX_RANGE_DAYS:
            end = start + timedelta(days=MAX_RANGE_DAYS - 1)
    return DateRange(start=start, end=end)


def trailing_range(today: Optional[date] = None, days: int = MAX_RANGE_DAYS) -> DateRange:
    """The widest allowed window that ends on ``today``."""
    end = today or date.today()
    return DateRange(start=end - timedelta(days=days - 1), end=end)


RangeListener = Callable[[Optional[DateRange]], None]


class RangeController:
    """
    Single owner of the active date range for one dashboard.

    Every accepted change notifies the listener, which is the only place a new
    fetch gets triggered. With ``debounce_seconds`` set and an event loop
    running, bursts of proposals (dragging across a calendar) collapse into a
    single notification carrying the last range.
    """

    def __init__(
        self,
        initial: Optional[DateRange] = None,
        on_change: Optional[RangeListener] = None,
        debounce_seconds: float = 0.0,
    ) -> None:
        self._current = normalize(initial)
        self._listeners: List[RangeListener] = []
        if on_change is not None:
            self._listeners.append(on_change)
        self.debounce_seconds = max(0.0, debounce_seconds)
        self._pending: Optional[asyncio.TimerHandle] = None

    @property
    def current(self) -> Optional[DateRange]:
        return self._current

    def propose(self, candidate: Optional[DateRange]) -> Optional[DateRange]:
        normalized = normalize(candidate)
        if normalized == self._current:
            return normalized
        self._current = normalized
        self._schedule(normalized)
        return normalized

    def refresh(self) -> None:
        self._schedule(self._current)

    def cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule(self, date_range: Optional[DateRange]) -> None:
        self.cancel_pending()
        if self.debounce_seconds <= 0:
            self._notify(date_range)
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._notify(date_range)
            return
        self._pending = loop.call_later(self.debounce_seconds, self._fire_pending, date_range)

    def _fire_pending(self, date_range: Optional[DateRange]) -> None:
        self._pending = None
        self._notify(date_range)

    def _notify(self, date_range: Optional[DateRange]) -> None:
        logger.debug("Active dashboard range changed to %s", date_range)
        for listener in self._listeners:
            listener(date_range)
