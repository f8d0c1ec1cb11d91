class BookingError(Exception):
    """Base exception for all booking-related errors.

    ``reason`` is a stable, machine-readable code surfaced to API clients.
    """

    reason: str = "booking_error"


class InvalidSlotLabelError(BookingError):
    """Raised when a time label is not part of the daily slot grid."""

    reason = "invalid_slot_label"

    def __init__(self, label: object) -> None:
        self.label = label
        super().__init__(f"'{label}' is not a bookable time slot")


class SlotInPastError(BookingError):
    """Raised when the requested slot has already started today."""

    reason = "slot_in_past"

    def __init__(self, date: object, label: str) -> None:
        self.date = date
        self.label = label
        super().__init__(f"The {label} slot on {date} has already passed")


class SlotAlreadyBookedError(BookingError):
    """Raised when a non-cancelled appointment already holds the slot."""

    reason = "slot_taken"

    def __init__(self, date: object, label: str) -> None:
        self.date = date
        self.label = label
        super().__init__(
            f"The {label} slot on {date} is already booked. Please select another time."
        )


class DateOutOfRangeError(BookingError):
    """Raised when a date falls outside the booking window."""

    reason = "date_out_of_range"

    def __init__(self, date: object, earliest: object, latest: object) -> None:
        self.date = date
        self.earliest = earliest
        self.latest = latest
        super().__init__(f"Date {date} is outside the booking window {earliest} to {latest}")


class AppointmentNotFoundError(BookingError):
    """Raised when no appointment exists with the given ID."""

    reason = "not_found"

    def __init__(self, appointment_id: str) -> None:
        self.appointment_id = appointment_id
        super().__init__("Appointment not found")


class StoreUnavailableError(BookingError):
    """Raised when the appointment store cannot be read or written."""

    reason = "store_unavailable"


class NotificationError(Exception):
    """Raised when an email notification cannot be delivered."""

    def __init__(self, reason: str, recipient: str | None = None) -> None:
        self.reason = reason
        self.recipient = recipient
        super().__init__(f"Failed to send notification: {reason}")
