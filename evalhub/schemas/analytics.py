"""Analytics / dashboard schemas."""
from typing import Any, Dict, List, Optional
from datetime import datetime

from evalhub.schemas.base import CamelModel
from evalhub.schemas.assignment import AssignmentResponse
from evalhub.schemas.evaluation import ResponseRecord
from evalhub.schemas.form import QuestionDefinition
from evalhub.schemas.user import UserResponse


class EnrichedResponse(ResponseRecord):
    """Response joined with the submitter's directory profile."""
    user: Optional[UserResponse] = None
    user_name: str = "Unknown User"


class AssignmentSummaryRow(CamelModel):
    """One row per assignment, left-joined with its response."""
    assignment_id: int
    participant_name: Optional[str] = None
    participant_type: str
    participant_email: Optional[str] = None
    subject_name: Optional[str] = None
    evaluator_position: Optional[int] = None
    status: str
    has_response: bool
    response: Optional[EnrichedResponse] = None


class CompletionStats(CamelModel):
    total_assigned: int
    completed: int
    pending: int
    completion_rate: float


class QuestionBreakdown(CamelModel):
    question_id: str
    text: str = ""
    type: str = "text"
    response_count: int
    total_assignments: int
    response_rate: float


class FormResponsesReport(CamelModel):
    assignments: List[AssignmentResponse]
    responses: List[EnrichedResponse]
    summary: List[AssignmentSummaryRow]
    stats: CompletionStats
    by_user: Dict[str, List[EnrichedResponse]]
    by_question: List[QuestionBreakdown]


# Per-user dashboard
class CreatedFormRow(CamelModel):
    id: int
    title: str
    description: str = ""
    created_at: datetime
    updated_at: Optional[datetime] = None
    status: str
    questions: List[QuestionDefinition] = []
    form_type: str = "enhanced"


class AssignedFormRow(CamelModel):
    form_id: int
    form_title: str
    assignment_id: int
    my_role: str
    my_token: str
    my_status: str
    allow_multiple_responses: bool = False
    due_date: Optional[datetime] = None
    form_type: str = "enhanced"
    subject_name: Optional[str] = None
    evaluator_position: Optional[int] = None


class AssignedSummary(CamelModel):
    total: int = 0
    pending: int = 0
    completed: int = 0


class CreatedSummary(CamelModel):
    forms_created: int = 0
    assignments: int = 0
    total_participants: int = 0
    completed_participants: int = 0
    pending_participants: int = 0


class UserFormsOverview(CamelModel):
    created_forms: List[CreatedFormRow] = []
    assigned_forms: List[AssignedFormRow] = []
    assigned_summary: AssignedSummary = AssignedSummary()
    created_summary: CreatedSummary = CreatedSummary()


class DashboardStats(CamelModel):
    total_forms: int
    total_users: int
    total_evaluations: int
    pending_evaluations: int
    total_assignments: int
    completion_rate: float


class ClearDataResult(CamelModel):
    success: bool = True
    message: str
    collections: List[str]
    deleted: Dict[str, Any]
