"""Assignment repository."""
from datetime import datetime, timezone
from typing import Optional, List
from sqlalchemy.orm import Session

from evalhub.models.assignment import Assignment, AssignmentStatus


class AssignmentRepository:
    """Assignment data access layer."""

    def __init__(self, db: Session):
        self.db = db

    def bulk_add(self, assignments: List[Assignment]) -> List[Assignment]:
        """Stage many assignments and assign their ids (not committed)."""
        if assignments:
            self.db.add_all(assignments)
            self.db.flush()
        return assignments

    def get_by_id(self, assignment_id: int) -> Optional[Assignment]:
        """Get assignment by ID."""
        return self.db.query(Assignment).filter(Assignment.id == assignment_id).first()

    def get_by_token(self, token: str) -> Optional[Assignment]:
        """Get assignment by its public token."""
        return self.db.query(Assignment).filter(Assignment.token == token).first()

    def get_by_form(self, form_id: int) -> List[Assignment]:
        """Get all assignments for a form in generation order."""
        return (
            self.db.query(Assignment)
            .filter(Assignment.form_id == form_id)
            .order_by(Assignment.id)
            .all()
        )

    def get_by_forms(self, form_ids: List[int]) -> List[Assignment]:
        if not form_ids:
            return []
        return self.db.query(Assignment).filter(Assignment.form_id.in_(form_ids)).all()

    def get_by_participant(self, participant_id: int) -> List[Assignment]:
        """Get every assignment held by a user, across forms."""
        return (
            self.db.query(Assignment)
            .filter(Assignment.participant_id == participant_id)
            .order_by(Assignment.created_at.desc(), Assignment.id.desc())
            .all()
        )

    def get_for_subject(self, form_id: int, subject_id: int) -> List[Assignment]:
        """Get the evaluator assignments targeting one subject of a form."""
        return (
            self.db.query(Assignment)
            .filter(
                Assignment.form_id == form_id,
                Assignment.subject_id == subject_id,
            )
            .order_by(Assignment.id)
            .all()
        )

    def mark_completed(self, assignment: Assignment) -> Assignment:
        """Flip status to completed (not committed)."""
        now = datetime.now(timezone.utc)
        assignment.status = AssignmentStatus.COMPLETED
        assignment.completed_at = now
        assignment.updated_at = now
        self.db.flush()
        return assignment

    def delete_by_form(self, form_id: int) -> int:
        """Delete all assignments of a form. Returns rows deleted (not committed)."""
        return (
            self.db.query(Assignment)
            .filter(Assignment.form_id == form_id)
            .delete(synchronize_session=False)
        )

    def delete_all(self) -> int:
        return self.db.query(Assignment).delete(synchronize_session=False)

    def count(self, status: Optional[AssignmentStatus] = None) -> int:
        query = self.db.query(Assignment)
        if status is not None:
            query = query.filter(Assignment.status == status)
        return query.count()
