"""Evaluation form model."""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum

from evalhub.core.database import Base


class FormStatus(str, Enum):
    ACTIVE = "active"
    DRAFT = "draft"


class FormType(str, Enum):
    ENHANCED = "enhanced"
    # Plain document with no subject matrix; never generates assignments
    BASIC = "basic"


class Form(Base):
    """
    Evaluation form - a subject matrix plus role-scoped questions.

    subject_matrix (JSON, ordered):
        [{subject_id, subject_name, subject_email,
          evaluators: [{evaluator_id, evaluator_name, evaluator_email, position}]}]
    questions (JSON, ordered):
        [{id, text, type, required, can_subject_answer, evaluator_positions, options}]

    Edits replace the whole document and regenerate assignments.
    """

    __tablename__ = "forms"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    due_date = Column(DateTime(timezone=True), nullable=True)
    allow_late_submissions = Column(Boolean, default=False, nullable=False)
    allow_multiple_responses = Column(Boolean, default=False, nullable=False)
    notify_on_completion = Column(Boolean, default=True, nullable=False)
    form_type = Column(String(20), default=FormType.ENHANCED.value, nullable=False)
    subject_matrix = Column(JSON, nullable=False, default=list)
    questions = Column(JSON, nullable=False, default=list)
    status = Column(String(20), default=FormStatus.ACTIVE.value, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    creator = relationship("User", back_populates="created_forms")

    __table_args__ = (
        Index("idx_forms_creator_created", "created_by", "created_at"),
    )

    def __repr__(self):
        return f"<Form(id={self.id}, title={self.title}, status={self.status})>"
