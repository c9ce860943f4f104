"""
Appointment service - Appointment lifecycle workflow

Appointment statuses: pending → scheduled → completed, with cancelled reachable
from pending and scheduled. completed and cancelled are terminal.

Every creation and every change to scheduled or cancelled queues exactly one
notification job after the appointment write has committed. The job is handed
to a background task, so the response never waits on the queue.
"""

import logging
from typing import Optional

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from ...errors import InvalidTransition, NotFound
from ...models import Appointment, Doctor, Patient
from ...services.notification_dispatch import NotificationDispatcher
from ...shared.context import CallerContext
from ...shared.guards import find_caller_doctor, require_doctor_owner, require_identity
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentStatusUpdate

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    # pending -> pending lets a doctor save notes on a request without deciding it
    "pending": {"pending", "scheduled", "cancelled"},
    "scheduled": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}

# Status reached -> notification sent to the patient
STATUS_NOTIFICATIONS = {
    "scheduled": "appointment_confirmed",
    "cancelled": "appointment_cancelled",
}


def initial_status(requested_by: str) -> str:
    return "scheduled" if requested_by == "doctor" else "pending"


def creation_notification(requested_by: str) -> str:
    return "appointment_confirmed" if requested_by == "doctor" else "appointment_request"


def check_transition(current: str, requested: str) -> None:
    if requested not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidTransition(current, requested)


class AppointmentService:
    """Service layer for the appointment lifecycle"""

    def __init__(
        self, db: Session, dispatcher: NotificationDispatcher, background_tasks: BackgroundTasks
    ):
        self.db = db
        self.dispatcher = dispatcher
        self.background_tasks = background_tasks
        self.repo = AppointmentRepository()

    def _queue_notification(self, appointment_id: int, event: str) -> None:
        self.background_tasks.add_task(self.dispatcher.enqueue, appointment_id, event)

    def create_appointment(self, ctx: CallerContext, data: AppointmentCreate) -> Appointment:
        """
        Create an appointment for a patient.

        The doctor always comes from the patient record. Doctor-created
        appointments start scheduled and need the caller to own the patient's
        doctor; patient requests start pending.
        """
        require_identity(ctx)

        patient = self.repo.get_patient(self.db, data.patientId)
        if not patient:
            raise NotFound("Patient not found")

        doctor = self.repo.get_doctor(self.db, patient.doctor_id)
        if not doctor:
            raise NotFound("Doctor not found")

        if data.requestedBy == "doctor":
            require_doctor_owner(self.db, ctx, doctor.id)

        appointment = self.repo.create_appointment(
            self.db,
            patient_id=patient.id,
            doctor_id=patient.doctor_id,
            appointment_date=data.appointmentDate,
            appointment_time=data.appointmentTime,
            type=data.type,
            notes=data.notes,
            requested_by=data.requestedBy,
            status=initial_status(data.requestedBy),
        )
        logger.info(
            f"📅 Appointment {appointment.id} created by {data.requestedBy} "
            f"for patient {patient.patient_id} ({appointment.status})"
        )

        self._queue_notification(appointment.id, creation_notification(data.requestedBy))
        return appointment

    def get_appointments_by_doctor(
        self, ctx: CallerContext
    ) -> list[tuple[Appointment, Optional[Patient]]]:
        """Caller's appointments, each paired with its patient"""
        doctor = find_caller_doctor(self.db, ctx)
        if not doctor:
            return []

        return [
            (appointment, self.repo.get_patient(self.db, appointment.patient_id))
            for appointment in self.repo.get_appointments_by_doctor(self.db, doctor.id)
        ]

    def get_appointments_by_patient(
        self, public_id: str
    ) -> list[tuple[Appointment, Optional[Doctor]]]:
        """A patient's appointment history by public identifier, each paired with its doctor"""
        patient = self.repo.get_patient_by_public_id(self.db, public_id)
        if not patient:
            return []

        return [
            (appointment, self.repo.get_doctor(self.db, appointment.doctor_id))
            for appointment in self.repo.get_appointments_by_patient(self.db, patient.id)
        ]

    def get_owned_appointment(self, ctx: CallerContext, appointment_id: int) -> Appointment:
        require_identity(ctx)
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise NotFound("Appointment not found")
        require_doctor_owner(self.db, ctx, appointment.doctor_id)
        return appointment

    def update_appointment_status(
        self, ctx: CallerContext, appointment_id: int, data: AppointmentStatusUpdate
    ) -> Appointment:
        """
        Move an appointment to a new status.

        notes, diagnosis and prescription are merged whatever status is
        reached; nothing restricts clinical fields to completed visits.
        """
        appointment = self.get_owned_appointment(ctx, appointment_id)
        previous = appointment.status
        check_transition(previous, data.status)

        appointment = self.repo.update_appointment(
            self.db,
            appointment,
            status=data.status,
            notes=data.notes,
            diagnosis=data.diagnosis,
            prescription=data.prescription,
        )
        logger.info(f"🔄 Appointment {appointment.id} transitioned: {previous} → {data.status}")

        event = STATUS_NOTIFICATIONS.get(data.status)
        if event and previous != data.status:
            self._queue_notification(appointment.id, event)
        return appointment

    def delete_appointment(self, ctx: CallerContext, appointment_id: int) -> dict:
        """Delete an appointment in any status; confirmation is up to the client"""
        appointment = self.get_owned_appointment(ctx, appointment_id)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"🗑️ Appointment {appointment_id} deleted")
        return {"message": "Appointment deleted"}
