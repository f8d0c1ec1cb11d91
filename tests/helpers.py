import datetime as dt
from zoneinfo import ZoneInfo

from salonbook.domain.models import AppointmentRequest

BUSINESS_TZ = "America/Chicago"
CHICAGO = ZoneInfo(BUSINESS_TZ)

# Tuesday 2026-03-10, 14:05 in Chicago (CDT, UTC-5).
TODAY = dt.date(2026, 3, 10)
TOMORROW = TODAY + dt.timedelta(days=1)


def local(date: dt.date, hour: int, minute: int = 0, second: int = 0) -> dt.datetime:
    """Aware business-local datetime."""
    return dt.datetime(date.year, date.month, date.day, hour, minute, second, tzinfo=CHICAGO)


class FrozenTime:
    """Callable time source whose value tests can move."""

    def __init__(self, value: dt.datetime) -> None:
        self.value = value

    def __call__(self) -> dt.datetime:
        return self.value


def make_request(
    date: dt.date = TOMORROW, time: str = "11:00", **overrides: str
) -> AppointmentRequest:
    fields: dict[str, object] = {
        "name": "Jane Doe",
        "phone_number": "5551234567",
        "email": "Jane.Doe@Example.com",
        "date": date,
        "time": time,
    }
    fields.update(overrides)
    return AppointmentRequest(**fields)  # type: ignore[arg-type]
