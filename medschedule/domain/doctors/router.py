"""Doctor router - FastAPI endpoints for doctor profiles"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_caller_context
from ...database import get_db
from ...shared.context import CallerContext
from .schemas import DoctorProfileCreate, DoctorProfileUpdate, DoctorResponse
from .service import DoctorService

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def get_doctor_service(db: Session = Depends(get_db)) -> DoctorService:
    """Dependency injection for DoctorService"""
    return DoctorService(db)


@router.post("", response_model=DoctorResponse)
async def create_doctor_profile(
    data: DoctorProfileCreate,
    ctx: CallerContext = Depends(get_caller_context),
    service: DoctorService = Depends(get_doctor_service),
):
    """Create the doctor profile for the signed-in account"""
    return DoctorResponse.from_model(service.create_doctor_profile(ctx, data))


@router.get("/me", response_model=Optional[DoctorResponse])
async def get_doctor_profile(
    ctx: CallerContext = Depends(get_caller_context),
    service: DoctorService = Depends(get_doctor_service),
):
    """Get the signed-in account's doctor profile (null if none)"""
    doctor = service.get_doctor_profile(ctx)
    return DoctorResponse.from_model(doctor) if doctor else None


@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(
    doctor_id: int,
    service: DoctorService = Depends(get_doctor_service),
):
    return DoctorResponse.from_model(service.get_doctor_by_id(doctor_id))


@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor_profile(
    doctor_id: int,
    data: DoctorProfileUpdate,
    ctx: CallerContext = Depends(get_caller_context),
    service: DoctorService = Depends(get_doctor_service),
):
    """Update a doctor profile (owner only)"""
    return DoctorResponse.from_model(service.update_doctor_profile(ctx, doctor_id, data))
