"""Assignment schemas."""
from typing import List, Optional
from datetime import datetime

from evalhub.models.assignment import AssignmentStatus, ParticipantType
from evalhub.schemas.base import CamelModel


class AssignmentResponse(CamelModel):
    """Assignment as exposed to creators and to the token holder."""
    id: int
    form_id: int
    participant_type: ParticipantType
    participant_id: int
    participant_name: Optional[str] = None
    participant_email: Optional[str] = None
    subject_id: Optional[int] = None
    subject_name: Optional[str] = None
    subject_email: Optional[str] = None
    evaluator_position: Optional[int] = None
    assigned_questions: List[str] = []
    token: str
    status: AssignmentStatus
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
