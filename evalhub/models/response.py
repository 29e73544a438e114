"""Evaluation response model."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from evalhub.core.database import Base


class EvaluationResponse(Base):
    """
    One participant's answers for one assignment.

    Participant and subject identity are copied from the assignment at
    submission time. Re-submissions overwrite `responses` in place; no
    history is kept.
    """

    __tablename__ = "enhanced_responses"

    id = Column(Integer, primary_key=True, index=True)
    form_id = Column(Integer, ForeignKey("forms.id", ondelete="CASCADE"), nullable=False, index=True)
    assignment_id = Column(
        Integer, ForeignKey("enhanced_assignments.id", ondelete="CASCADE"), nullable=False
    )
    participant_type = Column(String(20), nullable=False)
    participant_id = Column(Integer, nullable=False)
    participant_name = Column(String, nullable=True)
    participant_email = Column(String, nullable=True)
    evaluator_position = Column(Integer, nullable=True)
    subject_id = Column(Integer, nullable=True)
    subject_name = Column(String, nullable=True)
    subject_email = Column(String, nullable=True)
    responses = Column(JSON, nullable=False, default=dict)  # question id -> answer value
    token = Column(String(64), nullable=False)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    assignment = relationship("Assignment")

    __table_args__ = (
        UniqueConstraint("assignment_id", name="uq_responses_assignment"),
        Index("idx_responses_assignment_participant", "assignment_id", "participant_id"),
    )

    def __repr__(self):
        return f"<EvaluationResponse(id={self.id}, assignment_id={self.assignment_id})>"
