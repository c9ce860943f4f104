"""Patient repository - Database operations for patients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment, Patient


class PatientRepository:
    """Repository for patient database operations"""

    @staticmethod
    def get_patients_by_doctor(db: Session, doctor_id: int) -> list[Patient]:
        return (
            db.query(Patient)
            .filter(Patient.doctor_id == doctor_id)
            .order_by(Patient.id.asc())
            .all()
        )

    @staticmethod
    def get_patient_by_id(db: Session, patient_id: int) -> Optional[Patient]:
        return db.query(Patient).filter(Patient.id == patient_id).first()

    @staticmethod
    def get_patient_by_public_id(db: Session, public_id: str) -> Optional[Patient]:
        """Get a patient by the identifier printed on their card"""
        return db.query(Patient).filter(Patient.patient_id == public_id).first()

    @staticmethod
    def create_patient(db: Session, doctor_id: int, created_by: str, **patient_data) -> Patient:
        patient = Patient(doctor_id=doctor_id, created_by=created_by, **patient_data)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def update_patient(db: Session, patient: Patient, **updates) -> Patient:
        for key, value in updates.items():
            if hasattr(patient, key):
                setattr(patient, key, value)

        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def delete_patient_with_appointments(db: Session, patient: Patient) -> int:
        """
        Delete every appointment of a patient, then the patient.
        Returns the number of appointments removed.
        """
        appointments = db.query(Appointment).filter(Appointment.patient_id == patient.id).all()
        for appointment in appointments:
            db.delete(appointment)
        db.flush()

        db.delete(patient)
        db.commit()
        return len(appointments)
