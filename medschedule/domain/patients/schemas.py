"""Patient domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import validate_date_string, validate_email


class PatientBase(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None
    dateOfBirth: Optional[str] = None
    address: Optional[str] = None
    medicalNotes: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("dateOfBirth")
    @classmethod
    def check_date_of_birth(cls, v):
        if v:
            return validate_date_string(v)
        return v


class PatientCreate(PatientBase):
    """Schema for creating a patient under the caller's doctor profile"""


class PatientUpdate(PatientBase):
    """Schema for replacing a patient's details"""


class PatientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    patientId: str
    doctorId: int
    name: str
    phone: str
    email: Optional[str] = None
    dateOfBirth: Optional[str] = None
    address: Optional[str] = None
    medicalNotes: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, patient) -> "PatientResponse":
        return cls(
            id=patient.id,
            patientId=patient.patient_id,
            doctorId=patient.doctor_id,
            name=patient.name,
            phone=patient.phone,
            email=patient.email,
            dateOfBirth=patient.date_of_birth,
            address=patient.address,
            medicalNotes=patient.medical_notes,
            created_at=patient.created_at,
        )
