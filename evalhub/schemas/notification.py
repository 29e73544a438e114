"""Notification schemas."""
from typing import Optional
from datetime import datetime

from evalhub.schemas.base import CamelModel


class NotificationResponse(CamelModel):
    id: int
    user_id: int
    type: str
    title: str
    message: str
    assignment_id: Optional[int] = None
    form_id: Optional[int] = None
    token: Optional[str] = None
    read: bool
    read_at: Optional[datetime] = None
    created_at: datetime


class UnreadCountResponse(CamelModel):
    count: int
