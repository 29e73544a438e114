"""Evaluation service - everything reachable with an assignment token."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from evalhub.core.config import settings
from evalhub.repositories.assignment_repository import AssignmentRepository
from evalhub.repositories.form_repository import FormRepository
from evalhub.repositories.response_repository import ResponseRepository
from evalhub.models.assignment import Assignment, AssignmentStatus, ParticipantType
from evalhub.models.form import Form
from evalhub.models.response import EvaluationResponse
from evalhub.schemas.assignment import AssignmentResponse
from evalhub.schemas.evaluation import (
    EvaluationView,
    ExistingResponse,
    ParticipantEntry,
    ParticipantInfo,
    SubmitResult,
)
from evalhub.schemas.form import FormResponse

logger = logging.getLogger(__name__)

ALREADY_COMPLETED = "This evaluation has already been completed"


def _describe(assignment: Assignment) -> str:
    role = assignment.participant_type.value
    if assignment.evaluator_position:
        role = f"{role} position {assignment.evaluator_position}"
    return f"{assignment.participant_email} ({role})"


class EvaluationService:
    """Resolves tokens and records submissions."""

    def __init__(self, db: Session):
        self.db = db
        self.assignment_repo = AssignmentRepository(db)
        self.form_repo = FormRepository(db)
        self.response_repo = ResponseRepository(db)

    def _load(self, token: str) -> Tuple[Assignment, Form]:
        assignment = self.assignment_repo.get_by_token(token)
        if not assignment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Invalid evaluation link",
            )

        form = self.form_repo.get_by_id(assignment.form_id)
        if not form:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Form not found",
            )
        return assignment, form

    def _participant_info(self, assignment: Assignment) -> ParticipantInfo:
        if assignment.participant_type == ParticipantType.SUBJECT:
            subject_id = assignment.participant_id
            subjects = []
        else:
            subject_id = assignment.subject_id
            subjects = [ParticipantEntry(name=assignment.subject_name, email=assignment.subject_email)]

        evaluators = [
            ParticipantEntry(
                name=peer.participant_name,
                email=peer.participant_email,
                position=peer.evaluator_position,
                status=peer.status.value,
            )
            for peer in self.assignment_repo.get_for_subject(assignment.form_id, subject_id)
            if peer.participant_type == ParticipantType.EVALUATOR and peer.id != assignment.id
        ]
        return ParticipantInfo(subjects=subjects, evaluators=evaluators)

    def resolve(self, token: str) -> EvaluationView:
        """
        Load the form as seen by the token holder.

        Questions are narrowed to the assignment's assigned ids, keeping form
        order. A previously stored response is included so the client can
        show or edit it.

        Raises:
            HTTPException: 404 for an unknown token or a vanished form
        """
        assignment, form = self._load(token)

        form_view = FormResponse.model_validate(form)
        assigned = set(assignment.assigned_questions or [])
        form_view.questions = [q for q in form_view.questions if q.id in assigned]

        existing = None
        stored = self.response_repo.get_by_assignment(assignment.id)
        if stored:
            existing = ExistingResponse(
                responses=stored.responses or {},
                submitted_at=stored.submitted_at,
            )

        logger.info(
            "Resolved token for %s: %d of %d questions, status %s",
            _describe(assignment), len(form_view.questions), len(form.questions or []),
            assignment.status.value,
        )

        return EvaluationView(
            form=form_view,
            assignment=AssignmentResponse.model_validate(assignment),
            participant_info=self._participant_info(assignment),
            allow_multiple_responses=bool(form.allow_multiple_responses),
            token=token,
            existing_response=existing,
        )

    def submit(
        self,
        token: str,
        answers: Dict[str, Any],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> SubmitResult:
        """
        Store (or overwrite) the token holder's answers.

        Raises:
            HTTPException: 404 for an unknown token, 409 when the assignment
                cannot take another submission
        """
        assignment, form = self._load(token)
        now = datetime.now(timezone.utc)

        existing = self.response_repo.get_by_assignment(assignment.id)
        if existing:
            if settings.ENFORCE_SINGLE_RESPONSE and not form.allow_multiple_responses:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ALREADY_COMPLETED)

            existing.responses = answers
            existing.submitted_at = now
            existing.updated_at = now
            existing.ip_address = ip_address
            existing.user_agent = user_agent
            self.db.commit()

            logger.info("Evaluation updated by %s", _describe(assignment))
            return SubmitResult(
                message="Evaluation updated successfully",
                response_id=existing.id,
                updated=True,
            )

        if assignment.status == AssignmentStatus.COMPLETED:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ALREADY_COMPLETED)

        is_subject = assignment.participant_type == ParticipantType.SUBJECT
        record = EvaluationResponse(
            form_id=assignment.form_id,
            assignment_id=assignment.id,
            participant_type=assignment.participant_type.value,
            participant_id=assignment.participant_id,
            participant_name=assignment.participant_name,
            participant_email=assignment.participant_email,
            evaluator_position=assignment.evaluator_position,
            subject_id=assignment.participant_id if is_subject else assignment.subject_id,
            subject_name=assignment.participant_name if is_subject else assignment.subject_name,
            subject_email=assignment.participant_email if is_subject else assignment.subject_email,
            responses=answers,
            token=token,
            ip_address=ip_address,
            user_agent=user_agent,
            submitted_at=now,
        )

        try:
            self.response_repo.add(record)
            self.assignment_repo.mark_completed(assignment)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Duplicate submission rejected for assignment %s", assignment.id)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ALREADY_COMPLETED)
        except Exception:
            self.db.rollback()
            raise

        logger.info("Evaluation submitted by %s", _describe(assignment))
        return SubmitResult(
            message="Evaluation submitted successfully",
            response_id=record.id,
            updated=False,
        )
