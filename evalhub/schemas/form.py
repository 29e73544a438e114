"""Form schemas."""
from pydantic import AliasChoices, Field
from typing import Any, List, Optional
from datetime import datetime

from evalhub.schemas.base import CamelModel
from evalhub.schemas.user import CreatorSummary


# Subject matrix
class EvaluatorEntry(CamelModel):
    """An evaluator slot under a subject."""
    evaluator_id: int
    evaluator_name: str = Field(
        "", validation_alias=AliasChoices("evaluatorName", "evaluator_name", "name"),
        serialization_alias="evaluatorName",
    )
    evaluator_email: str = Field(
        "", validation_alias=AliasChoices("evaluatorEmail", "evaluator_email", "email"),
        serialization_alias="evaluatorEmail",
    )
    position: int


class SubjectEntry(CamelModel):
    """A person being evaluated, with their evaluators by position."""
    subject_id: int
    subject_name: str = ""
    subject_email: str = ""
    evaluators: List[EvaluatorEntry] = []


# Questions
class QuestionDefinition(CamelModel):
    """A question scoped to the roles that may answer it."""
    id: Optional[str] = None
    text: str = ""
    type: str = "text"
    required: bool = True
    can_subject_answer: bool = False
    evaluator_positions: List[int] = []
    options: List[Any] = []


# Requests
class EnhancedFormPayload(CamelModel):
    """
    Create / replace payload for an enhanced form.

    Presence of title, questions, subjectMatrix and createdBy is checked by
    the service so that a missing field is a 400, not a 422.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    allow_late_submissions: Optional[bool] = None
    allow_multiple_responses: Optional[bool] = None
    notify_on_completion: Optional[bool] = None
    subject_matrix: Optional[List[SubjectEntry]] = None
    questions: Optional[List[QuestionDefinition]] = None
    created_by: Optional[int] = None
    status: Optional[str] = None


# Responses
class FormResponse(CamelModel):
    """Full form document."""
    id: int
    title: str
    description: str = ""
    due_date: Optional[datetime] = None
    allow_late_submissions: bool = False
    allow_multiple_responses: bool = False
    notify_on_completion: bool = True
    form_type: str = "enhanced"
    subject_matrix: List[SubjectEntry] = []
    questions: List[QuestionDefinition] = []
    status: str
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    creator: Optional[CreatorSummary] = None


class FormCreatedSummary(CamelModel):
    """Counts reported after creating a form."""
    id: int
    title: str
    description: str = ""
    form_type: str
    questions_count: int
    subjects_count: int
    total_assignments: int
    subject_assignments: int
    evaluator_assignments: int
    created_at: datetime


class FormCreateResult(CamelModel):
    success: bool = True
    form: FormCreatedSummary
    warnings: List[str] = []
    message: str = "Enhanced form created successfully"


class FormRegenerateResult(CamelModel):
    success: bool = True
    message: str = "Form updated successfully"
    assignments_created: int


class FormUpdateResult(CamelModel):
    """Result of a basic (non-enhanced) form update."""
    success: bool = True
    form: FormResponse
