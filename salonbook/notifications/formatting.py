import datetime as dt

from salonbook.scheduling.grid import slot_time


def date_to_us_long(date: dt.date) -> str:
    """Convert ``date(2026, 3, 22)`` → ``March 22, 2026`` for email bodies."""
    return f"{date.strftime('%B')} {date.day}, {date.year}"


def slot_to_12h(label: str) -> str:
    """Convert the grid label ``"14:30"`` → ``2:30 PM``.

    No leading zero on the hour (``9:00 AM`` not ``09:00 AM``).
    """
    time = slot_time(label)
    hour = time.hour % 12 or 12
    period = "AM" if time.hour < 12 else "PM"
    return f"{hour}:{time.strftime('%M')} {period}"
