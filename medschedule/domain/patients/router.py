"""Patient router - FastAPI endpoints for patient records"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_caller_context
from ...database import get_db
from ...shared.context import CallerContext
from .schemas import PatientCreate, PatientResponse, PatientUpdate
from .service import PatientService

router = APIRouter(prefix="/patients", tags=["Patients"])


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    """Dependency injection for PatientService"""
    return PatientService(db)


@router.get("", response_model=list[PatientResponse])
async def get_patients(
    ctx: CallerContext = Depends(get_caller_context),
    service: PatientService = Depends(get_patient_service),
):
    """Get all patients of the signed-in doctor"""
    return [PatientResponse.from_model(p) for p in service.get_patients_by_doctor(ctx)]


@router.post("", response_model=PatientResponse)
async def create_patient(
    data: PatientCreate,
    ctx: CallerContext = Depends(get_caller_context),
    service: PatientService = Depends(get_patient_service),
):
    """Create a patient and assign their public identifier"""
    return PatientResponse.from_model(service.create_patient(ctx, data))


@router.get("/public/{public_id}", response_model=Optional[PatientResponse])
async def get_patient_by_public_id(
    public_id: str,
    service: PatientService = Depends(get_patient_service),
):
    """Patient portal lookup by public identifier (null if unknown)"""
    patient = service.get_patient_by_public_id(public_id)
    return PatientResponse.from_model(patient) if patient else None


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    ctx: CallerContext = Depends(get_caller_context),
    service: PatientService = Depends(get_patient_service),
):
    return PatientResponse.from_model(service.update_patient(ctx, patient_id, data))


@router.delete("/{patient_id}")
async def delete_patient(
    patient_id: int,
    ctx: CallerContext = Depends(get_caller_context),
    service: PatientService = Depends(get_patient_service),
):
    """Delete a patient together with all of their appointments"""
    return service.delete_patient(ctx, patient_id)
