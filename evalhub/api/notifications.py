"""Notifications router."""
from typing import Annotated, List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from evalhub.core.database import get_db
from evalhub.services.notification_service import NotificationService
from evalhub.schemas.notification import NotificationResponse, UnreadCountResponse
from evalhub.api.dependencies import parse_user_id

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("/{user_id}", response_model=List[NotificationResponse])
def list_notifications(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
    unread_only: bool = Query(False),
):
    """A user's latest notifications, newest first."""
    uid = parse_user_id(user_id)
    if uid is None:
        return []
    return NotificationService(db).get_user_notifications(uid, unread_only=unread_only)


@router.get("/{user_id}/unread-count", response_model=UnreadCountResponse)
def get_unread_count(user_id: str, db: Annotated[Session, Depends(get_db)]):
    """Unread count, used for the badge."""
    uid = parse_user_id(user_id)
    if uid is None:
        return UnreadCountResponse(count=0)
    return UnreadCountResponse(count=NotificationService(db).get_unread_count(uid))


@router.put("/{notification_id}/read")
def mark_read(notification_id: int, db: Annotated[Session, Depends(get_db)]):
    NotificationService(db).mark_read(notification_id)
    return {"success": True}
