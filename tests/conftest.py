import pytest

from salonbook.booking.service import BookingService
from salonbook.notifications.adapters.fake import RecordingEmailSender
from salonbook.notifications.notifier import AppointmentNotifier
from salonbook.scheduling.clock import BusinessClock
from salonbook.scheduling.slots import SlotCalculator
from salonbook.store.adapters.memory import InMemoryAppointmentStore
from tests.helpers import BUSINESS_TZ, TODAY, FrozenTime, local


@pytest.fixture
def frozen_time() -> FrozenTime:
    return FrozenTime(local(TODAY, 14, 5))


@pytest.fixture
def clock(frozen_time: FrozenTime) -> BusinessClock:
    return BusinessClock(BUSINESS_TZ, now_source=frozen_time)


@pytest.fixture
def calculator(clock: BusinessClock) -> SlotCalculator:
    return SlotCalculator(clock)


@pytest.fixture
def store() -> InMemoryAppointmentStore:
    return InMemoryAppointmentStore()


@pytest.fixture
def sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def notifier(sender: RecordingEmailSender) -> AppointmentNotifier:
    return AppointmentNotifier(
        sender, business_name="Salon Elegance", admin_address="admin@salon.test"
    )


@pytest.fixture
def service(
    store: InMemoryAppointmentStore,
    calculator: SlotCalculator,
    notifier: AppointmentNotifier,
) -> BookingService:
    return BookingService(store, calculator, notifier, max_advance_days=30)
