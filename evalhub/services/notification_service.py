"""Notification service."""
import logging
from datetime import datetime, timezone
from typing import List
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from evalhub.repositories.notification_repository import NotificationRepository
from evalhub.models.assignment import Assignment, ParticipantType
from evalhub.models.form import Form
from evalhub.models.notification import Notification

logger = logging.getLogger(__name__)

NOTIFICATION_FETCH_LIMIT = 100


class NotificationService:
    """Notification business logic."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository(db)

    @staticmethod
    def build_for_assignment(form: Form, assignment: Assignment) -> Notification:
        if assignment.participant_type == ParticipantType.SUBJECT:
            notif_type = "enhanced_self_evaluation"
            title = "New Self-Evaluation Request"
            message = f"You have been requested to complete a self-evaluation: {form.title}"
        else:
            notif_type = "enhanced_peer_evaluation"
            title = f"Evaluation Request for {assignment.subject_name}"
            message = f"You have been requested to evaluate {assignment.subject_name} for: {form.title}"

        return Notification(
            user_id=assignment.participant_id,
            type=notif_type,
            title=title,
            message=message,
            assignment_id=assignment.id,
            form_id=form.id,
            token=assignment.token,
            read=False,
            created_at=assignment.created_at or datetime.now(timezone.utc),
        )

    def notify_assignments(self, form: Form, assignments: List[Assignment]) -> List[Notification]:
        """
        Stage one notification per assignment when the form asks for it.

        Assignments must already be flushed (ids assigned). Not committed.
        """
        if not form.notify_on_completion:
            return []
        notifications = [self.build_for_assignment(form, a) for a in assignments]
        self.repo.bulk_add(notifications)
        logger.info("Queued %d notifications for form %s", len(notifications), form.id)
        return notifications

    def get_user_notifications(self, user_id: int, unread_only: bool = False) -> List[Notification]:
        return self.repo.get_for_user(user_id, limit=NOTIFICATION_FETCH_LIMIT, unread_only=unread_only)

    def get_unread_count(self, user_id: int) -> int:
        return self.repo.get_unread_count(user_id)

    def mark_read(self, notification_id: int) -> Notification:
        notification = self.repo.mark_read(notification_id)
        if not notification:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Notification not found",
            )
        return notification
