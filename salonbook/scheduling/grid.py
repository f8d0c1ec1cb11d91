import datetime as dt

from salonbook.domain.exceptions import InvalidSlotLabelError

# Changing business hours means changing this list.
SLOT_GRID: tuple[str, ...] = (
    "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
    "12:00", "12:30", "13:00", "13:30", "14:00", "14:30",
    "15:00", "15:30", "16:00", "16:30", "17:00", "17:30",
)  # fmt: skip

_GRID_TIMES: dict[str, dt.time] = {
    label: dt.time(int(label[:2]), int(label[3:])) for label in SLOT_GRID
}


def parse_slot_label(value: object) -> str:
    """Return ``value`` if it is a canonical ``HH:MM`` grid label.

    Only the exact grid spelling is accepted (``"9:00"`` and ``"09:00:00"``
    are rejected).
    """
    if not isinstance(value, str) or value not in _GRID_TIMES:
        raise InvalidSlotLabelError(value)
    return value


def slot_time(label: str) -> dt.time:
    """Convert a grid label to its start time, e.g. ``"14:30"`` → ``time(14, 30)``."""
    return _GRID_TIMES[parse_slot_label(label)]
