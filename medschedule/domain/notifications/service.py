"""Notification service - Renders lifecycle notifications and serves the inboxes"""

import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ...config import NOTIFICATION_LIST_LIMIT
from ...errors import NotFound, Unauthorized
from ...models import Appointment, Doctor, Notification, Patient
from ...shared.context import CallerContext
from ...shared.guards import require_identity
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

# event -> (recipient type, title, message template)
NOTIFICATION_TEMPLATES = {
    "appointment_request": (
        "doctor",
        "New Appointment Request",
        "{patient_name} has requested an appointment on {date} at {time}",
    ),
    "appointment_confirmed": (
        "patient",
        "Appointment Confirmed",
        "Your appointment with Dr. {doctor_name} on {date} at {time} has been confirmed",
    ),
    "appointment_cancelled": (
        "patient",
        "Appointment Cancelled",
        "Your appointment with Dr. {doctor_name} on {date} at {time} has been cancelled",
    ),
    "appointment_reminder": (
        "patient",
        "Appointment Reminder",
        "Reminder: You have an appointment with Dr. {doctor_name} tomorrow at {time}",
    ),
}


def render_notification(event: str, appointment: Appointment, patient: Patient, doctor: Doctor) -> dict:
    """Build the notification fields for a lifecycle event"""
    recipient_type, title, template = NOTIFICATION_TEMPLATES[event]
    return {
        "recipient_id": doctor.user_id if recipient_type == "doctor" else patient.patient_id,
        "recipient_type": recipient_type,
        "title": title,
        "message": template.format(
            patient_name=patient.name,
            doctor_name=doctor.name,
            date=appointment.appointment_date,
            time=appointment.appointment_time,
        ),
        "type": event,
        "appointment_id": appointment.id,
    }


def create_appointment_notification(
    db: Session, appointment_id: int, event: str
) -> Optional[Notification]:
    """
    Write the notification for one lifecycle event.

    Runs in the worker, possibly more than once and after the appointment has
    been deleted. Missing appointment, patient or doctor means there is nothing
    to notify about and the job ends quietly.
    """
    if event not in NOTIFICATION_TEMPLATES:
        logger.error(f"❌ Unknown notification type {event!r} for appointment {appointment_id}")
        return None

    appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
    if not appointment:
        logger.info(f"ℹ️ Appointment {appointment_id} no longer exists - skipping {event}")
        return None

    patient = db.query(Patient).filter(Patient.id == appointment.patient_id).first()
    doctor = db.query(Doctor).filter(Doctor.id == appointment.doctor_id).first()
    if not patient or not doctor:
        logger.info(f"ℹ️ Appointment {appointment_id} lost its patient or doctor - skipping {event}")
        return None

    notification = NotificationRepository.create_notification(
        db, **render_notification(event, appointment, patient, doctor)
    )
    logger.info(
        f"🔔 {event} notification {notification.id} stored for "
        f"{notification.recipient_type} {notification.recipient_id}"
    )
    return notification


def send_appointment_reminders(db: Session, today: Optional[date] = None) -> dict:
    """
    Write reminders for every scheduled appointment dated tomorrow.

    Appointments that already have a reminder are skipped, so a retried run
    only fills in what the failed one missed.
    """
    today = today or date.today()
    tomorrow = (today + timedelta(days=1)).isoformat()

    appointment_ids = [
        row.id
        for row in db.query(Appointment.id)
        .filter(Appointment.status == "scheduled", Appointment.appointment_date == tomorrow)
        .all()
    ]

    already_reminded = {
        row.appointment_id
        for row in db.query(Notification.appointment_id)
        .filter(
            Notification.type == "appointment_reminder",
            Notification.appointment_id.in_(appointment_ids),
        )
        .all()
    }

    sent = 0
    for appointment_id in appointment_ids:
        if appointment_id in already_reminded:
            continue
        if create_appointment_notification(db, appointment_id, "appointment_reminder"):
            sent += 1

    return {"date": tomorrow, "checked": len(appointment_ids), "sent": sent}


class NotificationService:
    """Service layer for the doctor and patient notification inboxes"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    def get_notifications_for_doctor(self, ctx: CallerContext) -> list[Notification]:
        if not ctx.is_authenticated:
            return []
        return self.repo.get_notifications_for_recipient(
            self.db, ctx.user_id, "doctor", NOTIFICATION_LIST_LIMIT
        )

    def get_notifications_for_patient(self, public_id: str) -> list[Notification]:
        return self.repo.get_notifications_for_recipient(
            self.db, public_id, "patient", NOTIFICATION_LIST_LIMIT
        )

    def mark_notification_as_read(
        self, ctx: CallerContext, notification_id: int, patient_id: Optional[str] = None
    ) -> Notification:
        """
        Flip the read flag.

        Doctor notifications require the matching account. Patients have no
        accounts of their own, so their notifications are scoped by the public
        patient identifier the caller already holds.
        """
        require_identity(ctx)

        notification = self.repo.get_notification_by_id(self.db, notification_id)
        if not notification:
            raise NotFound("Notification not found")

        if notification.recipient_type == "doctor":
            if notification.recipient_id != ctx.user_id:
                raise Unauthorized()
        elif notification.recipient_id != patient_id:
            raise Unauthorized()

        return self.repo.mark_as_read(self.db, notification)
