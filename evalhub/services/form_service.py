"""Form service."""
import logging
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from evalhub.repositories.form_repository import FormRepository
from evalhub.repositories.assignment_repository import AssignmentRepository
from evalhub.repositories.response_repository import ResponseRepository
from evalhub.repositories.notification_repository import NotificationRepository
from evalhub.repositories.user_repository import UserRepository
from evalhub.services.assignment_generator import build_assignments, coverage_warnings, normalize_questions
from evalhub.services.notification_service import NotificationService
from evalhub.models.assignment import Assignment, ParticipantType
from evalhub.models.form import Form, FormStatus, FormType
from evalhub.schemas.form import (
    EnhancedFormPayload,
    FormCreateResult,
    FormCreatedSummary,
    FormRegenerateResult,
    FormResponse,
    FormUpdateResult,
)

logger = logging.getLogger(__name__)

BASIC_UPDATE_FIELDS = (
    "title",
    "description",
    "due_date",
    "allow_late_submissions",
    "allow_multiple_responses",
    "notify_on_completion",
    "status",
)


class FormService:
    """Form business logic: definition store plus assignment regeneration."""

    def __init__(self, db: Session):
        self.db = db
        self.form_repo = FormRepository(db)
        self.assignment_repo = AssignmentRepository(db)
        self.response_repo = ResponseRepository(db)
        self.notif_repo = NotificationRepository(db)
        self.user_repo = UserRepository(db)
        self.notifications = NotificationService(db)

    def create_enhanced_form(self, form_data: EnhancedFormPayload,
                             session_user_id: Optional[int] = None) -> FormCreateResult:
        """
        Create a form, fan out its assignments and notify participants.

        Everything is written in one transaction.

        Raises:
            HTTPException: 400 on missing fields or empty matrix, 404 if the creator is unknown
        """
        created_by = form_data.created_by if form_data.created_by is not None else session_user_id
        if (
            not form_data.title
            or form_data.questions is None
            or form_data.subject_matrix is None
            or created_by is None
        ):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Title, questions, subjectMatrix, and createdBy are required",
            )

        if len(form_data.subject_matrix) == 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="At least one subject is required",
            )

        creator = self.user_repo.get_by_id(created_by)
        if not creator:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Creator not found",
            )

        now = datetime.now(timezone.utc)
        form = Form(
            title=form_data.title,
            description=form_data.description or "",
            due_date=form_data.due_date,
            allow_late_submissions=bool(form_data.allow_late_submissions),
            allow_multiple_responses=bool(form_data.allow_multiple_responses),
            notify_on_completion=form_data.notify_on_completion is not False,
            form_type=FormType.ENHANCED.value,
            subject_matrix=[s.model_dump() for s in form_data.subject_matrix],
            questions=normalize_questions(form_data.questions),
            status=FormStatus.ACTIVE.value,
            created_by=creator.id,
            created_at=now,
            updated_at=now,
        )
        warnings = coverage_warnings(form.subject_matrix, form.questions)
        for warning in warnings:
            logger.warning("Form '%s': %s", form.title, warning)

        try:
            self.form_repo.add(form)
            assignments = self.assignment_repo.bulk_add(build_assignments(form, now))
            self.notifications.notify_assignments(form, assignments)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        evaluator_count = sum(
            1 for a in assignments if a.participant_type == ParticipantType.EVALUATOR
        )
        logger.info(
            "Created form %s '%s': %d subjects, %d questions, %d assignments",
            form.id, form.title, len(form.subject_matrix), len(form.questions), len(assignments),
        )

        return FormCreateResult(
            form=FormCreatedSummary(
                id=form.id,
                title=form.title,
                description=form.description,
                form_type=form.form_type,
                questions_count=len(form.questions),
                subjects_count=len(form.subject_matrix),
                total_assignments=len(assignments),
                subject_assignments=len(assignments) - evaluator_count,
                evaluator_assignments=evaluator_count,
                created_at=form.created_at,
            ),
            warnings=warnings,
        )

    def update_enhanced_form(self, form_id: int, form_data: EnhancedFormPayload) -> FormRegenerateResult:
        """
        Replace a form's definition and regenerate all of its assignments.

        Old assignments, their responses and their notifications are removed
        and new tokens are issued, all in one transaction.

        Raises:
            HTTPException: 404 if the form is missing, 400 if matrix or questions are missing
        """
        form = self.get_form(form_id)

        if form_data.subject_matrix is None or form_data.questions is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Questions and subjectMatrix are required",
            )

        now = datetime.now(timezone.utc)
        try:
            form.title = form_data.title or form.title
            form.description = form_data.description or ""
            form.due_date = form_data.due_date
            if form_data.allow_late_submissions is not None:
                form.allow_late_submissions = form_data.allow_late_submissions
            if form_data.allow_multiple_responses is not None:
                form.allow_multiple_responses = form_data.allow_multiple_responses
            if form_data.notify_on_completion is not None:
                form.notify_on_completion = form_data.notify_on_completion
            if form_data.status:
                form.status = form_data.status
            form.subject_matrix = [s.model_dump() for s in form_data.subject_matrix]
            form.questions = normalize_questions(form_data.questions)
            form.updated_at = now

            assignments = self._regenerate_assignments(form, now)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Updated form %s with %d new assignments", form.id, len(assignments))
        return FormRegenerateResult(assignments_created=len(assignments))

    def _regenerate_assignments(self, form: Form, now: datetime) -> List[Assignment]:
        """Drop everything hanging off the form's old assignments and build new ones (not committed)."""
        self.notif_repo.delete_by_form(form.id)
        discarded = self.response_repo.delete_by_form(form.id)
        removed = self.assignment_repo.delete_by_form(form.id)
        if discarded:
            logger.warning(
                "Form %s regeneration discarded %d submitted responses", form.id, discarded
            )
        logger.info("Form %s: removed %d old assignments", form.id, removed)

        assignments = self.assignment_repo.bulk_add(build_assignments(form, now))
        self.notifications.notify_assignments(form, assignments)
        return assignments

    def update_form(self, form_id: int, form_data: EnhancedFormPayload):
        """
        Generic update: enhanced forms are replaced and regenerated. Basic
        forms (imported or legacy rows) have no subject matrix, so only their
        top-level fields are patched and no assignment is touched.
        """
        form = self.get_form(form_id)
        if form.form_type == FormType.ENHANCED.value:
            return self.update_enhanced_form(form_id, form_data)

        changes = form_data.model_dump(exclude_unset=True, include=set(BASIC_UPDATE_FIELDS))
        for key, value in changes.items():
            setattr(form, key, value)
        form.updated_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(form)
        return FormUpdateResult(form=FormResponse.model_validate(form))

    def get_form(self, form_id: int) -> Form:
        """
        Get form by ID.

        Raises:
            HTTPException: If form not found
        """
        form = self.form_repo.get_by_id(form_id)

        if not form:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Form not found"
            )

        return form

    def get_forms(self) -> List[Form]:
        """Get all forms, newest first."""
        return self.form_repo.get_all()

    def delete_form(self, form_id: int) -> dict:
        """
        Delete a form with its assignments, responses and notifications.

        Only rows whose form id matches are touched.

        Raises:
            HTTPException: If form not found
        """
        form = self.get_form(form_id)

        try:
            deleted = {
                "notifications": self.notif_repo.delete_by_form(form_id),
                "responses": self.response_repo.delete_by_form(form_id),
                "assignments": self.assignment_repo.delete_by_form(form_id),
            }
            self.form_repo.delete(form)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Deleted form %s (%s)", form_id, deleted)
        return deleted

    def duplicate_form(self, form_id: int) -> Form:
        """
        Copy a form's definition into a new draft. No assignments are issued.

        Raises:
            HTTPException: If form not found
        """
        original = self.get_form(form_id)
        now = datetime.now(timezone.utc)

        copy = Form(
            title=f"{original.title} (Copy)",
            description=original.description,
            due_date=original.due_date,
            allow_late_submissions=original.allow_late_submissions,
            allow_multiple_responses=original.allow_multiple_responses,
            notify_on_completion=original.notify_on_completion,
            form_type=original.form_type,
            subject_matrix=list(original.subject_matrix or []),
            questions=list(original.questions or []),
            status=FormStatus.DRAFT.value,
            created_by=original.created_by,
            created_at=now,
            updated_at=now,
        )
        self.form_repo.add(copy)
        self.db.commit()
        self.db.refresh(copy)

        logger.info("Duplicated form %s as %s", form_id, copy.id)
        return copy
