"""Notification router - Doctor and patient inboxes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_caller_context
from ...database import get_db
from ...shared.context import CallerContext
from .schemas import NotificationResponse
from .service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Dependency injection for NotificationService"""
    return NotificationService(db)


@router.get("/doctor", response_model=list[NotificationResponse])
async def get_doctor_notifications(
    ctx: CallerContext = Depends(get_caller_context),
    service: NotificationService = Depends(get_notification_service),
):
    """Latest notifications for the signed-in doctor, newest first"""
    return [NotificationResponse.from_model(n) for n in service.get_notifications_for_doctor(ctx)]


@router.get("/patient/{patient_id}", response_model=list[NotificationResponse])
async def get_patient_notifications(
    patient_id: str,
    service: NotificationService = Depends(get_notification_service),
):
    """Latest notifications for a patient, by public patient identifier"""
    return [
        NotificationResponse.from_model(n)
        for n in service.get_notifications_for_patient(patient_id)
    ]


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_doctor_notification_read(
    notification_id: int,
    ctx: CallerContext = Depends(get_caller_context),
    service: NotificationService = Depends(get_notification_service),
):
    return NotificationResponse.from_model(service.mark_notification_as_read(ctx, notification_id))


@router.post("/patient/{patient_id}/{notification_id}/read", response_model=NotificationResponse)
async def mark_patient_notification_read(
    patient_id: str,
    notification_id: int,
    ctx: CallerContext = Depends(get_caller_context),
    service: NotificationService = Depends(get_notification_service),
):
    return NotificationResponse.from_model(
        service.mark_notification_as_read(ctx, notification_id, patient_id=patient_id)
    )
