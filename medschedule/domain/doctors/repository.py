"""Doctor repository - Database operations for doctor profiles"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Doctor


class DoctorRepository:
    """Repository for doctor database operations"""

    @staticmethod
    def get_doctor_by_id(db: Session, doctor_id: int) -> Optional[Doctor]:
        return db.query(Doctor).filter(Doctor.id == doctor_id).first()

    @staticmethod
    def get_doctor_by_user_id(db: Session, user_id: str) -> Optional[Doctor]:
        """Get the doctor profile linked to an account"""
        return db.query(Doctor).filter(Doctor.user_id == user_id).first()

    @staticmethod
    def create_doctor(db: Session, user_id: str, **doctor_data) -> Doctor:
        doctor = Doctor(user_id=user_id, **doctor_data)
        db.add(doctor)
        db.commit()
        db.refresh(doctor)
        return doctor

    @staticmethod
    def update_doctor(db: Session, doctor: Doctor, **updates) -> Doctor:
        """Update a doctor with provided fields"""
        for key, value in updates.items():
            if hasattr(doctor, key):
                setattr(doctor, key, value)

        db.commit()
        db.refresh(doctor)
        return doctor
