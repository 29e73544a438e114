"""Notification model."""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.sql import func

from evalhub.core.database import Base


class Notification(Base):
    """Evaluation request addressed to one participant, carrying their link token."""
    __tablename__ = "notifications"

    id            = Column(Integer, primary_key=True, index=True)
    user_id       = Column(Integer, nullable=False)
    type          = Column(String(50), nullable=False)          # enhanced_self_evaluation, enhanced_peer_evaluation
    title         = Column(String(255), nullable=False)
    message       = Column(Text, nullable=False)
    assignment_id = Column(Integer, ForeignKey("enhanced_assignments.id", ondelete="SET NULL"), nullable=True)
    form_id       = Column(Integer, ForeignKey("forms.id", ondelete="CASCADE"), nullable=True, index=True)
    token         = Column(String(64), nullable=True)
    read          = Column(Boolean, default=False, nullable=False)
    read_at       = Column(DateTime(timezone=True), nullable=True)
    created_at    = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_notifications_user_read_created", "user_id", "read", "created_at"),
    )
