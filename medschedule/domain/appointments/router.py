"""Appointment router - FastAPI endpoints for the appointment lifecycle"""

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from ...auth import get_caller_context
from ...database import get_db
from ...services.notification_dispatch import NotificationDispatcher, get_notification_dispatcher
from ...shared.context import CallerContext
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentStatusUpdate
from .service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db, dispatcher, background_tasks)


@router.post("", response_model=AppointmentResponse)
async def create_appointment(
    data: AppointmentCreate,
    ctx: CallerContext = Depends(get_caller_context),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Create an appointment (doctor booking or patient request)"""
    appointment = service.create_appointment(ctx, data)
    return AppointmentResponse.from_model(appointment)


@router.get("/doctor", response_model=list[AppointmentResponse])
async def get_doctor_appointments(
    ctx: CallerContext = Depends(get_caller_context),
    service: AppointmentService = Depends(get_appointment_service),
):
    """All appointments of the signed-in doctor with patient details"""
    return [
        AppointmentResponse.from_model(appointment, patient=patient)
        for appointment, patient in service.get_appointments_by_doctor(ctx)
    ]


@router.get("/patient/{patient_id}", response_model=list[AppointmentResponse])
async def get_patient_appointments(
    patient_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Appointment history for a public patient identifier with doctor details"""
    return [
        AppointmentResponse.from_model(appointment, doctor=doctor)
        for appointment, doctor in service.get_appointments_by_patient(patient_id)
    ]


@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: int,
    data: AppointmentStatusUpdate,
    ctx: CallerContext = Depends(get_caller_context),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Approve, reject, complete or cancel an appointment"""
    appointment = service.update_appointment_status(ctx, appointment_id, data)
    return AppointmentResponse.from_model(appointment)


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: int,
    ctx: CallerContext = Depends(get_caller_context),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.delete_appointment(ctx, appointment_id)
