import datetime as dt
from typing import Callable, NamedTuple
from zoneinfo import ZoneInfo

from salonbook.scheduling.grid import slot_time

UTC = dt.timezone.utc


def _system_now() -> dt.datetime:
    return dt.datetime.now(UTC)


class LocalNow(NamedTuple):
    """Current business-local date and time-of-day."""

    date: dt.date
    hour: int
    minute: int


class BusinessClock:
    """Single source of business-local "now" and civil/instant conversions.

    Every conversion goes through ``zoneinfo``; no code path offsets hours by
    hand. ``now_source`` must return an aware datetime and is called on each
    ``now()``, so nothing here is cached between requests.
    """

    def __init__(
        self,
        timezone: str,
        now_source: Callable[[], dt.datetime] = _system_now,
    ) -> None:
        self._timezone_name = timezone
        self._tz = ZoneInfo(timezone)
        self._now_source = now_source

    @property
    def timezone_name(self) -> str:
        return self._timezone_name

    def utcnow(self) -> dt.datetime:
        return self._now_source().astimezone(UTC)

    def now(self) -> LocalNow:
        local = self.to_local(self._now_source())
        return LocalNow(local.date(), local.hour, local.minute)

    def today(self) -> dt.date:
        return self.now().date

    def is_today(self, date: dt.date) -> bool:
        return date == self.today()

    def to_local(self, instant: dt.datetime) -> dt.datetime:
        if instant.tzinfo is None:
            raise ValueError("Expected an aware datetime")
        return instant.astimezone(self._tz)

    def to_instant(self, date: dt.date, label: str) -> dt.datetime:
        """Return the UTC instant at which slot ``label`` starts on ``date``."""
        local = dt.datetime.combine(date, slot_time(label), tzinfo=self._tz)
        return local.astimezone(UTC)

    def to_storage_range(self, date: dt.date) -> tuple[dt.datetime, dt.datetime]:
        """Map a civil date to the half-open UTC interval covering that local day.

        On DST transition days the interval is 23 or 25 hours long.
        """
        start = dt.datetime.combine(date, dt.time.min, tzinfo=self._tz)
        end = dt.datetime.combine(date + dt.timedelta(days=1), dt.time.min, tzinfo=self._tz)
        return start.astimezone(UTC), end.astimezone(UTC)
