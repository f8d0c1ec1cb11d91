import datetime as dt

import pytest

from salonbook.domain.exceptions import InvalidSlotLabelError
from salonbook.scheduling.grid import SLOT_GRID, parse_slot_label, slot_time


class TestSlotGrid:
    def test_runs_from_nine_to_five_thirty_every_half_hour(self) -> None:
        assert len(SLOT_GRID) == 18
        assert SLOT_GRID[0] == "09:00"
        assert SLOT_GRID[-1] == "17:30"

        times = [slot_time(label) for label in SLOT_GRID]
        gaps = {
            dt.datetime.combine(dt.date.min, b) - dt.datetime.combine(dt.date.min, a)
            for a, b in zip(times, times[1:])
        }
        assert gaps == {dt.timedelta(minutes=30)}

    def test_is_sorted(self) -> None:
        assert list(SLOT_GRID) == sorted(SLOT_GRID)


class TestParseSlotLabel:
    @pytest.mark.parametrize("label", ["09:00", "12:30", "17:30"])
    def test_accepts_grid_labels(self, label: str) -> None:
        assert parse_slot_label(label) == label

    @pytest.mark.parametrize(
        "label",
        ["9:00", "09:00:00", "08:30", "18:00", "09:15", "", "noon", None, 930],
        ids=[
            "no-leading-zero",
            "with-seconds",
            "before-opening",
            "after-closing",
            "off-cadence",
            "empty",
            "word",
            "none",
            "int",
        ],
    )
    def test_rejects_anything_else(self, label: object) -> None:
        with pytest.raises(InvalidSlotLabelError) as exc_info:
            parse_slot_label(label)

        assert exc_info.value.reason == "invalid_slot_label"


class TestSlotTime:
    def test_converts_label(self) -> None:
        assert slot_time("14:30") == dt.time(14, 30)

    def test_rejects_unknown_label(self) -> None:
        with pytest.raises(InvalidSlotLabelError):
            slot_time("14:45")
