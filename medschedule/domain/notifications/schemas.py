"""Notification domain schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

NotificationType = Literal[
    "appointment_request",
    "appointment_confirmed",
    "appointment_cancelled",
    "appointment_reminder",
]


class NotificationResponse(BaseModel):
    id: int
    recipientId: str
    recipientType: Literal["doctor", "patient"]
    title: str
    message: str
    type: NotificationType
    isRead: bool
    appointmentId: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, notification) -> "NotificationResponse":
        return cls(
            id=notification.id,
            recipientId=notification.recipient_id,
            recipientType=notification.recipient_type,
            title=notification.title,
            message=notification.message,
            type=notification.type,
            isRead=notification.is_read,
            appointmentId=notification.appointment_id,
            created_at=notification.created_at,
        )
