import datetime as dt

import pytest

from salonbook.scheduling.clock import BusinessClock
from tests.helpers import BUSINESS_TZ, TODAY, TOMORROW, FrozenTime, local

UTC = dt.timezone.utc


class TestNow:
    def test_reports_business_local_date_and_time(self, clock: BusinessClock) -> None:
        now = clock.now()

        assert now.date == TODAY
        assert (now.hour, now.minute) == (14, 5)

    def test_converts_from_utc_source(self) -> None:
        # 04:30 UTC on the 11th is still 23:30 on the 10th in Chicago.
        clock = BusinessClock(
            BUSINESS_TZ, now_source=lambda: dt.datetime(2026, 3, 11, 4, 30, tzinfo=UTC)
        )

        assert clock.now() == (TODAY, 23, 30)
        assert clock.is_today(TODAY)
        assert not clock.is_today(TOMORROW)

    def test_is_re_evaluated_on_every_call(
        self, clock: BusinessClock, frozen_time: FrozenTime
    ) -> None:
        assert clock.today() == TODAY

        frozen_time.value = local(TOMORROW, 0, 1)

        assert clock.today() == TOMORROW
        assert clock.is_today(TOMORROW)

    def test_utcnow_is_aware_utc(self, clock: BusinessClock) -> None:
        assert clock.utcnow() == dt.datetime(2026, 3, 10, 19, 5, tzinfo=UTC)
        assert clock.utcnow().utcoffset() == dt.timedelta(0)


class TestToStorageRange:
    def test_covers_the_local_day(self, clock: BusinessClock) -> None:
        start, end = clock.to_storage_range(TODAY)

        assert start == dt.datetime(2026, 3, 10, 5, 0, tzinfo=UTC)
        assert end == dt.datetime(2026, 3, 11, 5, 0, tzinfo=UTC)

    def test_spring_forward_day_is_23_hours(self, clock: BusinessClock) -> None:
        start, end = clock.to_storage_range(dt.date(2026, 3, 8))

        assert start == dt.datetime(2026, 3, 8, 6, 0, tzinfo=UTC)
        assert end - start == dt.timedelta(hours=23)

    def test_fall_back_day_is_25_hours(self, clock: BusinessClock) -> None:
        start, end = clock.to_storage_range(dt.date(2026, 11, 1))

        assert end - start == dt.timedelta(hours=25)

    def test_consecutive_days_share_a_boundary(self, clock: BusinessClock) -> None:
        _, end_today = clock.to_storage_range(TODAY)
        start_tomorrow, _ = clock.to_storage_range(TOMORROW)

        assert end_today == start_tomorrow

    def test_every_slot_falls_inside_its_own_day(self, clock: BusinessClock) -> None:
        start, end = clock.to_storage_range(TODAY)

        assert start <= clock.to_instant(TODAY, "09:00") < end
        assert start <= clock.to_instant(TODAY, "17:30") < end


class TestConversions:
    def test_to_instant(self, clock: BusinessClock) -> None:
        assert clock.to_instant(TODAY, "14:30") == dt.datetime(2026, 3, 10, 19, 30, tzinfo=UTC)

    def test_to_instant_in_winter_uses_standard_offset(self, clock: BusinessClock) -> None:
        assert clock.to_instant(dt.date(2026, 1, 15), "09:00") == dt.datetime(
            2026, 1, 15, 15, 0, tzinfo=UTC
        )

    def test_to_local_round_trips_instant(self, clock: BusinessClock) -> None:
        instant = clock.to_instant(TODAY, "10:30")

        assert clock.to_local(instant) == local(TODAY, 10, 30)

    def test_to_local_rejects_naive_datetime(self, clock: BusinessClock) -> None:
        with pytest.raises(ValueError, match="aware"):
            clock.to_local(dt.datetime(2026, 3, 10, 12, 0))
