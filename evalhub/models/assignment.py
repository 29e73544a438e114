"""Assignment models."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum

from evalhub.core.database import Base


class ParticipantType(str, Enum):
    """Role of the participant holding an assignment."""
    SUBJECT = "subject"
    EVALUATOR = "evaluator"


class AssignmentStatus(str, Enum):
    """Assignment status - flips once, when the first response is stored."""
    PENDING = "pending"
    COMPLETED = "completed"


class Assignment(Base):
    """
    Assignment model - one participant's tokenized slot in a form.

    Flow:
      Form created/updated  →  one subject assignment per subject and one
      evaluator assignment per (subject, evaluator)  →  status: pending
      Participant submits via /enhanced-evaluate/{token}  →  status: completed

    The token is the only public identifier of the assignment.
    """

    __tablename__ = "enhanced_assignments"

    id = Column(Integer, primary_key=True, index=True)
    form_id = Column(Integer, ForeignKey("forms.id", ondelete="CASCADE"), nullable=False, index=True)
    participant_type = Column(
        SQLEnum(ParticipantType, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    participant_id = Column(Integer, nullable=False)
    participant_name = Column(String, nullable=True)
    participant_email = Column(String, nullable=True)
    # Evaluator assignments only: who is being evaluated and from which position
    subject_id = Column(Integer, nullable=True)
    subject_name = Column(String, nullable=True)
    subject_email = Column(String, nullable=True)
    evaluator_position = Column(Integer, nullable=True)
    assigned_questions = Column(JSON, nullable=False, default=list)
    token = Column(String(64), unique=True, index=True, nullable=False)
    status = Column(
        SQLEnum(AssignmentStatus, values_callable=lambda x: [e.value for e in x]),
        default=AssignmentStatus.PENDING,
        nullable=False,
    )
    due_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    form = relationship("Form")

    __table_args__ = (
        Index("idx_assignments_form_participant", "form_id", "participant_id"),
    )

    def __repr__(self):
        return (
            f"<Assignment(id={self.id}, form_id={self.form_id}, "
            f"type={self.participant_type}, status={self.status})>"
        )
