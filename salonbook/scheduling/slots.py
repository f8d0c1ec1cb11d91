import datetime as dt
from collections.abc import Iterable

from loguru import logger

from salonbook.domain.exceptions import SlotAlreadyBookedError, SlotInPastError
from salonbook.domain.models import BookedEntry
from salonbook.scheduling.clock import BusinessClock, LocalNow
from salonbook.scheduling.grid import SLOT_GRID, parse_slot_label, slot_time


def _held_labels(booked_entries: Iterable[BookedEntry]) -> set[str]:
    # A slot is held if any entry for it is not cancelled.
    return {entry.time for entry in booked_entries if entry.status.holds_slot}


def _has_passed(label: str, now: LocalNow) -> bool:
    start = slot_time(label)
    return (start.hour, start.minute) <= (now.hour, now.minute)


class SlotCalculator:
    """Decides which grid slots are offerable on a given civil date.

    Stateless apart from the injected clock; callers supply the booked
    entries for the date, freshly read from the store.
    """

    def __init__(self, clock: BusinessClock) -> None:
        self._clock = clock

    @property
    def clock(self) -> BusinessClock:
        return self._clock

    def available_slots(
        self, date: dt.date, booked_entries: Iterable[BookedEntry]
    ) -> list[str]:
        held = _held_labels(booked_entries)
        remaining = [label for label in SLOT_GRID if label not in held]

        if not self._clock.is_today(date):
            return remaining

        now = self._clock.now()
        return [label for label in remaining if not _has_passed(label, now)]

    def ensure_bookable(
        self, date: dt.date, label: object, booked_entries: Iterable[BookedEntry]
    ) -> str:
        """Check a single slot right before it is committed.

        Returns the canonical label.

        Raises:
            InvalidSlotLabelError: If ``label`` is not on the grid.
            SlotInPastError: If ``date`` is today and the slot has started.
            SlotAlreadyBookedError: If a non-cancelled entry holds the slot.
        """
        label = parse_slot_label(label)

        if self._clock.is_today(date) and _has_passed(label, self._clock.now()):
            logger.warning("Rejected booking for passed slot {} on {}", label, date)
            raise SlotInPastError(date, label)

        if label in _held_labels(booked_entries):
            logger.warning("Rejected booking for held slot {} on {}", label, date)
            raise SlotAlreadyBookedError(date, label)

        return label
