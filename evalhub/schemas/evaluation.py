"""Evaluation (token holder) schemas."""
from typing import Any, Dict, List, Optional
from datetime import datetime

from evalhub.schemas.base import CamelModel
from evalhub.schemas.assignment import AssignmentResponse
from evalhub.schemas.form import FormResponse


class EvaluationSubmit(CamelModel):
    """Answers keyed by question id."""
    responses: Dict[str, Any] = {}


class ParticipantEntry(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    position: Optional[int] = None
    status: Optional[str] = None


class ParticipantInfo(CamelModel):
    """Who else takes part in this subject's evaluation."""
    subjects: List[ParticipantEntry] = []
    evaluators: List[ParticipantEntry] = []


class ExistingResponse(CamelModel):
    responses: Dict[str, Any]
    submitted_at: datetime
    status: str = "completed"


class EvaluationView(CamelModel):
    """Everything a participant needs to fill in (or revisit) their evaluation."""
    form: FormResponse
    assignment: AssignmentResponse
    participant_info: ParticipantInfo
    allow_multiple_responses: bool = False
    token: str
    existing_response: Optional[ExistingResponse] = None


class SubmitResult(CamelModel):
    success: bool = True
    message: str
    response_id: int
    updated: bool


class ResponseRecord(CamelModel):
    """Stored response as returned by analytics endpoints."""
    id: int
    form_id: int
    assignment_id: int
    participant_type: str
    participant_id: int
    participant_name: Optional[str] = None
    participant_email: Optional[str] = None
    evaluator_position: Optional[int] = None
    subject_id: Optional[int] = None
    subject_name: Optional[str] = None
    subject_email: Optional[str] = None
    responses: Dict[str, Any] = {}
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    submitted_at: datetime
    updated_at: Optional[datetime] = None
