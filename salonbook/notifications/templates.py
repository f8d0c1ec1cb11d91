from html import escape

from pydantic import BaseModel, ConfigDict

from salonbook.domain.models import Appointment
from salonbook.notifications.formatting import date_to_us_long, slot_to_12h


class EmailMessage(BaseModel):
    """A rendered email ready to hand to an EmailSender."""

    model_config = ConfigDict(frozen=True)

    to: str
    subject: str
    html: str


_WRAPPER = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #7c3aed;">{heading}</h2>
  {body}
</div>
"""

_DETAILS = """
  <div style="background-color: #f3f4f6; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <h3 style="margin-top: 0;">{title}</h3>
    {rows}
  </div>
"""


def _row(label: str, value: str) -> str:
    return f"<p><strong>{label}:</strong> {escape(value)}</p>"


def _schedule_rows(appointment: Appointment) -> list[str]:
    return [
        _row("Date", date_to_us_long(appointment.date)),
        _row("Time", slot_to_12h(appointment.time)),
    ]


def _notes_row(label: str, appointment: Appointment) -> list[str]:
    return [_row(label, appointment.notes)] if appointment.notes else []


def _render(heading: str, title: str, rows: list[str], before: str, after: str) -> str:
    details = _DETAILS.format(title=title, rows="\n    ".join(rows))
    return _WRAPPER.format(heading=heading, body=f"{before}{details}{after}")


def customer_confirmation(appointment: Appointment, business_name: str) -> EmailMessage:
    """Acknowledge a new booking request to the customer."""
    before = (
        f"<p>Dear {escape(appointment.name)},</p>"
        f"<p>Your appointment has been successfully booked with {escape(business_name)}!</p>"
    )
    rows = [
        *_schedule_rows(appointment),
        _row("Status", "Pending Confirmation"),
        *_notes_row("Notes", appointment),
    ]
    after = (
        "<p>We will review your appointment and send you a confirmation email shortly.</p>"
        "<p>If you need to make any changes, please contact us.</p>"
        f"<p>Thank you for choosing {escape(business_name)}!</p>"
    )
    return EmailMessage(
        to=appointment.email,
        subject=f"Appointment Confirmation - {business_name}",
        html=_render("Appointment Confirmation", "Appointment Details:", rows, before, after),
    )


def admin_notification(
    appointment: Appointment, business_name: str, admin_address: str
) -> EmailMessage:
    """Tell staff that a new booking request is waiting for review."""
    rows = [
        _row("Name", appointment.name),
        _row("Phone", appointment.phone_number),
        _row("Email", appointment.email),
        *_schedule_rows(appointment),
        *_notes_row("Notes", appointment),
    ]
    after = (
        "<p>Please review and confirm this appointment.</p>"
        f"<p>Appointment ID: {escape(appointment.appointment_id)}</p>"
    )
    return EmailMessage(
        to=admin_address,
        subject=f"New Appointment Request - {business_name}",
        html=_render(
            "New Appointment Request",
            "Customer Details:",
            rows,
            "<p>A new appointment has been requested:</p>",
            after,
        ),
    )


def status_update(appointment: Appointment, business_name: str) -> EmailMessage:
    """Tell the customer their appointment moved to a new status."""
    status = appointment.status.value.capitalize()
    before = (
        f"<p>Dear {escape(appointment.name)},</p>"
        "<p>Your appointment status has been updated:</p>"
    )
    rows = [
        *_schedule_rows(appointment),
        _row("New Status", status),
        *_notes_row("Admin Notes", appointment),
    ]
    after = (
        "<p>If you have any questions, please contact us.</p>"
        f"<p>Thank you for choosing {escape(business_name)}!</p>"
    )
    return EmailMessage(
        to=appointment.email,
        subject=f"Appointment {status} - {business_name}",
        html=_render("Appointment Status Update", "Updated Details:", rows, before, after),
    )
