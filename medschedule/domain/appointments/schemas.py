"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_date_string, validate_time_string
from ..doctors.schemas import DoctorResponse
from ..patients.schemas import PatientResponse

AppointmentStatus = Literal["pending", "scheduled", "completed", "cancelled"]


class AppointmentCreate(BaseModel):
    """Schema for creating an appointment; the doctor is taken from the patient"""

    patientId: int
    appointmentDate: str
    appointmentTime: str
    type: str = Field(..., min_length=1, description="consultation, follow-up, check-up, emergency or free text")
    notes: Optional[str] = None
    requestedBy: Literal["doctor", "patient"]

    @field_validator("appointmentDate")
    @classmethod
    def check_date(cls, v):
        return validate_date_string(v)

    @field_validator("appointmentTime")
    @classmethod
    def check_time(cls, v):
        return validate_time_string(v)


class AppointmentStatusUpdate(BaseModel):
    """Schema for a status change; clinical fields are merged whatever the status"""

    status: AppointmentStatus
    notes: Optional[str] = None
    diagnosis: Optional[str] = None
    prescription: Optional[str] = None


class AppointmentResponse(BaseModel):
    id: int
    patientId: int
    doctorId: int
    appointmentDate: str
    appointmentTime: str
    type: str
    status: AppointmentStatus
    notes: Optional[str] = None
    diagnosis: Optional[str] = None
    prescription: Optional[str] = None
    requestedBy: Literal["doctor", "patient"]
    created_at: Optional[datetime] = None
    patient: Optional[PatientResponse] = None
    doctor: Optional[DoctorResponse] = None

    @classmethod
    def from_model(cls, appointment, patient=None, doctor=None) -> "AppointmentResponse":
        return cls(
            id=appointment.id,
            patientId=appointment.patient_id,
            doctorId=appointment.doctor_id,
            appointmentDate=appointment.appointment_date,
            appointmentTime=appointment.appointment_time,
            type=appointment.type,
            status=appointment.status,
            notes=appointment.notes,
            diagnosis=appointment.diagnosis,
            prescription=appointment.prescription,
            requestedBy=appointment.requested_by,
            created_at=appointment.created_at,
            patient=PatientResponse.from_model(patient) if patient else None,
            doctor=DoctorResponse.from_model(doctor) if doctor else None,
        )
