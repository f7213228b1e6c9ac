"""Clock abstraction used by streak logic."""

from datetime import date, datetime, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def now(self) -> datetime: ...

    def local_date(self, value: datetime) -> date: ...


class SystemClock:
    """Wall clock with calendar-day comparisons in a single timezone.

    Args:
        tz: Timezone whose midnight bounds a calendar day. ``None`` uses the
            device-local timezone.
    """

    def __init__(self, tz: tzinfo | None = None):
        self._tz = tz

    @classmethod
    def from_name(cls, name: str | None) -> "SystemClock":
        return cls(ZoneInfo(name) if name else None)

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now().astimezone()
        return datetime.now(self._tz)

    def local_date(self, value: datetime) -> date:
        """Calendar date of ``value`` in this clock's timezone.

        Naive datetimes are taken to already be local.
        """
        if value.tzinfo is None:
            return value.date()
        if self._tz is None:
            return value.astimezone().date()
        return value.astimezone(self._tz).date()


def calendar_days_between(clock: Clock, earlier: datetime, later: datetime) -> int:
    """Whole calendar days from ``earlier`` to ``later`` in the clock's zone.

    Counted on dates, so a day that is 23 or 25 hours long still counts as one.
    """
    return (clock.local_date(later) - clock.local_date(earlier)).days
