"""Database models."""
from evalhub.models.user import User
from evalhub.models.form import Form, FormStatus, FormType
from evalhub.models.assignment import Assignment, AssignmentStatus, ParticipantType
from evalhub.models.response import EvaluationResponse
from evalhub.models.notification import Notification

__all__ = [
    "User",
    "Form",
    "FormStatus",
    "FormType",
    "Assignment",
    "AssignmentStatus",
    "ParticipantType",
    "EvaluationResponse",
    "Notification",
]
