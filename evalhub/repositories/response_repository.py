"""Response repository."""
from typing import Optional, List
from sqlalchemy.orm import Session

from evalhub.models.response import EvaluationResponse


class ResponseRepository:
    """Evaluation response data access layer."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, response: EvaluationResponse) -> EvaluationResponse:
        """Stage a new response and assign its id (not committed)."""
        self.db.add(response)
        self.db.flush()
        return response

    def get_by_id(self, response_id: int) -> Optional[EvaluationResponse]:
        """Get response by ID."""
        return self.db.query(EvaluationResponse).filter(EvaluationResponse.id == response_id).first()

    def get_by_assignment(self, assignment_id: int) -> Optional[EvaluationResponse]:
        """Get the response stored for an assignment, if any."""
        return (
            self.db.query(EvaluationResponse)
            .filter(EvaluationResponse.assignment_id == assignment_id)
            .first()
        )

    def get_by_assignments(self, assignment_ids: List[int]) -> List[EvaluationResponse]:
        """Get all responses linked to the given assignments."""
        if not assignment_ids:
            return []
        return (
            self.db.query(EvaluationResponse)
            .filter(EvaluationResponse.assignment_id.in_(assignment_ids))
            .order_by(EvaluationResponse.submitted_at, EvaluationResponse.id)
            .all()
        )

    def assignment_ids_with_response(self, assignment_ids: List[int]) -> set:
        """Subset of the given assignment ids that have a stored response."""
        if not assignment_ids:
            return set()
        rows = (
            self.db.query(EvaluationResponse.assignment_id)
            .filter(EvaluationResponse.assignment_id.in_(assignment_ids))
            .all()
        )
        return {r.assignment_id for r in rows}

    def delete_by_form(self, form_id: int) -> int:
        """Delete all responses of a form. Returns rows deleted (not committed)."""
        return (
            self.db.query(EvaluationResponse)
            .filter(EvaluationResponse.form_id == form_id)
            .delete(synchronize_session=False)
        )

    def delete_all(self) -> int:
        return self.db.query(EvaluationResponse).delete(synchronize_session=False)

    def count(self) -> int:
        return self.db.query(EvaluationResponse).count()
