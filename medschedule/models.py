import secrets
import string
import time

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

BASE36_ALPHABET = string.digits + string.ascii_lowercase

APPOINTMENT_STATUSES = ("pending", "scheduled", "completed", "cancelled")
REQUESTERS = ("doctor", "patient")
RECIPIENT_TYPES = ("doctor", "patient")
NOTIFICATION_TYPES = (
    "appointment_request",
    "appointment_confirmed",
    "appointment_cancelled",
    "appointment_reminder",
)


def one_of(table: str, column: str, values: tuple) -> CheckConstraint:
    """CHECK constraint limiting a string column to a fixed set of values"""
    allowed = ", ".join(f"'{value}'" for value in values)
    return CheckConstraint(f"{column} IN ({allowed})", name=f"ck_{table}_{column}")


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_patient_id() -> str:
    """Generate a human-readable patient identifier like ``PM1X2Y3Z4ABC123``.

    Millisecond timestamp plus a random suffix, both base36. There is no
    collision check against existing rows.
    """
    timestamp = to_base36(int(time.time() * 1000))
    random_part = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(6))
    return f"P{timestamp}{random_part}".upper()


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), unique=True, index=True, nullable=False)  # Firebase UID
    name = Column(String(255), nullable=False)
    specialization = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    clinic_address = Column(String(500), nullable=True)
    working_hours_start = Column(String(5), nullable=False, default="09:00")
    working_hours_end = Column(String(5), nullable=False, default="17:00")
    working_days = Column(JSON, default=list, nullable=False)  # ["monday", "tuesday", ...]
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    patients = relationship("Patient", back_populates="doctor")


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(
        String(32), unique=True, index=True, nullable=False, default=generate_patient_id
    )  # Public identifier the patient logs in with
    doctor_id = Column(Integer, ForeignKey("doctors.id"), index=True, nullable=False)
    created_by = Column(String(255), nullable=False)  # Firebase UID of the creating account
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(255), nullable=True)
    date_of_birth = Column(String(10), nullable=True)
    address = Column(String(500), nullable=True)
    medical_notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    doctor = relationship("Doctor", back_populates="patients")
    appointments = relationship("Appointment", back_populates="patient")


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        one_of("appointments", "status", APPOINTMENT_STATUSES),
        one_of("appointments", "requested_by", REQUESTERS),
    )

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), index=True, nullable=False)
    # Copied from the patient at creation time
    doctor_id = Column(Integer, ForeignKey("doctors.id"), index=True, nullable=False)
    appointment_date = Column(String(10), nullable=False)  # YYYY-MM-DD
    appointment_time = Column(String(5), nullable=False)  # HH:MM
    type = Column(String(100), nullable=False)  # consultation, follow-up, check-up, emergency, ...
    status = Column(String(20), nullable=False, default="pending")
    notes = Column(Text, nullable=True)
    diagnosis = Column(Text, nullable=True)
    prescription = Column(Text, nullable=True)
    requested_by = Column(String(20), nullable=False)  # doctor, patient
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    patient = relationship("Patient", back_populates="appointments")
    doctor = relationship("Doctor")


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        one_of("notifications", "recipient_type", RECIPIENT_TYPES),
        one_of("notifications", "type", NOTIFICATION_TYPES),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(String(255), index=True, nullable=False)  # Firebase UID or public patient ID
    recipient_type = Column(String(20), nullable=False)  # doctor, patient
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    # No foreign key: the appointment may be deleted while its notifications live on
    appointment_id = Column(Integer, index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
