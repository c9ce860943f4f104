"""Patient service - Business logic for patient records"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import NotFound, Unauthorized
from ...models import Patient
from ...shared.context import CallerContext
from ...shared.guards import find_caller_doctor, require_doctor_owner, require_identity
from .repository import PatientRepository
from .schemas import PatientBase, PatientCreate, PatientUpdate

logger = logging.getLogger(__name__)


def _patient_fields(data: PatientBase) -> dict:
    return {
        "name": data.name,
        "phone": data.phone,
        "email": data.email,
        "date_of_birth": data.dateOfBirth,
        "address": data.address,
        "medical_notes": data.medicalNotes,
    }


class PatientService:
    """Service layer for patient business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PatientRepository()

    def create_patient(self, ctx: CallerContext, data: PatientCreate) -> Patient:
        """Create a patient owned by the caller's doctor profile"""
        user_id = require_identity(ctx)

        doctor = find_caller_doctor(self.db, ctx)
        if not doctor:
            raise NotFound("Doctor profile not found")

        patient = self.repo.create_patient(
            self.db, doctor.id, created_by=user_id, **_patient_fields(data)
        )
        logger.info(f"🧑 Patient {patient.patient_id} created for doctor {doctor.id}")
        return patient

    def get_patients_by_doctor(self, ctx: CallerContext) -> list[Patient]:
        doctor = find_caller_doctor(self.db, ctx)
        if not doctor:
            return []
        return self.repo.get_patients_by_doctor(self.db, doctor.id)

    def get_patient_by_public_id(self, public_id: str) -> Optional[Patient]:
        return self.repo.get_patient_by_public_id(self.db, public_id)

    def get_owned_patient(self, ctx: CallerContext, patient_id: int) -> Patient:
        """Load a patient the caller's doctor profile owns"""
        require_identity(ctx)
        patient = self.repo.get_patient_by_id(self.db, patient_id)
        if not patient:
            # Same answer as a foreign patient so ids cannot be probed
            raise Unauthorized()
        require_doctor_owner(self.db, ctx, patient.doctor_id)
        return patient

    def update_patient(self, ctx: CallerContext, patient_id: int, data: PatientUpdate) -> Patient:
        patient = self.get_owned_patient(ctx, patient_id)
        return self.repo.update_patient(self.db, patient, **_patient_fields(data))

    def delete_patient(self, ctx: CallerContext, patient_id: int) -> dict:
        """Delete a patient and every appointment referencing them"""
        patient = self.get_owned_patient(ctx, patient_id)
        public_id = patient.patient_id

        removed = self.repo.delete_patient_with_appointments(self.db, patient)
        logger.info(f"🗑️ Patient {public_id} deleted with {removed} appointment(s)")
        return {"message": "Patient deleted", "deletedAppointments": removed}
