"""Doctor domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import validate_time_string, validate_weekdays


class WorkingHours(BaseModel):
    """Daily hours; end may be earlier than start for overnight shifts"""

    start: str = "09:00"
    end: str = "17:00"

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, v):
        return validate_time_string(v)


class DoctorProfileBase(BaseModel):
    name: str = Field(..., min_length=1)
    specialization: str = Field(..., min_length=1)
    phone: Optional[str] = None
    clinicAddress: Optional[str] = None
    workingHours: WorkingHours
    workingDays: list[str]

    @field_validator("workingDays")
    @classmethod
    def validate_days(cls, v):
        return validate_weekdays(v)


class DoctorProfileCreate(DoctorProfileBase):
    """Schema for creating the caller's doctor profile"""


class DoctorProfileUpdate(DoctorProfileBase):
    """Schema for replacing a doctor profile"""


class DoctorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    userId: str
    name: str
    specialization: str
    phone: Optional[str] = None
    clinicAddress: Optional[str] = None
    workingHours: WorkingHours
    workingDays: list[str]
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, doctor) -> "DoctorResponse":
        return cls(
            id=doctor.id,
            userId=doctor.user_id,
            name=doctor.name,
            specialization=doctor.specialization,
            phone=doctor.phone,
            clinicAddress=doctor.clinic_address,
            workingHours=WorkingHours(
                start=doctor.working_hours_start, end=doctor.working_hours_end
            ),
            workingDays=doctor.working_days or [],
            created_at=doctor.created_at,
        )
