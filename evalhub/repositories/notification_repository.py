"""Notification repository."""
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session

from evalhub.models.notification import Notification


class NotificationRepository:
    """Notification data access layer."""

    def __init__(self, db: Session):
        self.db = db

    def bulk_add(self, notifications: List[Notification]) -> List[Notification]:
        """Stage many notifications (not committed)."""
        if notifications:
            self.db.add_all(notifications)
            self.db.flush()
        return notifications

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        return self.db.query(Notification).filter(Notification.id == notification_id).first()

    def get_for_user(self, user_id: int, limit: int = 100, unread_only: bool = False) -> List[Notification]:
        """Get a user's notifications, newest first."""
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read == False)  # noqa: E712
        return (
            query.order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .all()
        )

    def get_unread_count(self, user_id: int) -> int:
        """Count a user's unread notifications."""
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read == False)  # noqa: E712
            .count()
        )

    def mark_read(self, notification_id: int) -> Optional[Notification]:
        """Mark a single notification as read."""
        notification = self.get_by_id(notification_id)
        if notification:
            notification.read = True
            notification.read_at = datetime.now(timezone.utc)
            self.db.commit()
            self.db.refresh(notification)
        return notification

    def delete_by_form(self, form_id: int) -> int:
        """Delete all notifications of a form. Returns rows deleted (not committed)."""
        return (
            self.db.query(Notification)
            .filter(Notification.form_id == form_id)
            .delete(synchronize_session=False)
        )

    def delete_all(self) -> int:
        return self.db.query(Notification).delete(synchronize_session=False)
