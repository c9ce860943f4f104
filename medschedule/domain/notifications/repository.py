"""Notification repository - Database operations for notifications"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Notification


class NotificationRepository:
    """Repository for notification database operations"""

    @staticmethod
    def get_notifications_for_recipient(
        db: Session, recipient_id: str, recipient_type: str, limit: int
    ) -> list[Notification]:
        """Most recent notifications for a recipient, newest first"""
        return (
            db.query(Notification)
            .filter(
                Notification.recipient_id == recipient_id,
                Notification.recipient_type == recipient_type,
            )
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_notification_by_id(db: Session, notification_id: int) -> Optional[Notification]:
        return db.query(Notification).filter(Notification.id == notification_id).first()

    @staticmethod
    def create_notification(db: Session, **notification_data) -> Notification:
        notification = Notification(is_read=False, **notification_data)
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    def mark_as_read(db: Session, notification: Notification) -> Notification:
        notification.is_read = True
        db.commit()
        db.refresh(notification)
        return notification
