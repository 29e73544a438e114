"""
Analytics service.

Read-only views over forms, assignments and responses: the per-form
response report, a user's own dashboard and the global counters. The
pivots (`completion_stats`, `group_by_user`, `question_breakdown`) are
plain functions so they can be checked without a database.
"""
import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from evalhub.repositories.assignment_repository import AssignmentRepository
from evalhub.repositories.form_repository import FormRepository
from evalhub.repositories.response_repository import ResponseRepository
from evalhub.repositories.user_repository import UserRepository
from evalhub.services.form_service import FormService
from evalhub.models.assignment import Assignment, AssignmentStatus
from evalhub.models.form import FormType
from evalhub.schemas.analytics import (
    AssignedFormRow,
    AssignedSummary,
    AssignmentSummaryRow,
    CompletionStats,
    CreatedFormRow,
    CreatedSummary,
    DashboardStats,
    EnrichedResponse,
    FormResponsesReport,
    QuestionBreakdown,
    UserFormsOverview,
)
from evalhub.schemas.assignment import AssignmentResponse
from evalhub.schemas.user import UserResponse

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Unknown User"
UNKNOWN_FORM = "Unknown Form"


def percentage(part: int, total: int) -> float:
    """Percent rounded to one decimal; 0 when there is nothing to divide by."""
    if not total:
        return 0.0
    return round(part / total * 100, 1)


def has_answer(value: Any) -> bool:
    """An answer counts unless it is missing, an empty string or an empty list."""
    return value is not None and value != "" and value != []


def completion_stats(total_assigned: int, responses_count: int) -> CompletionStats:
    return CompletionStats(
        total_assigned=total_assigned,
        completed=responses_count,
        pending=max(0, total_assigned - responses_count),
        completion_rate=percentage(responses_count, total_assigned),
    )


def group_by_user(responses: Sequence[EnrichedResponse]) -> Dict[str, List[EnrichedResponse]]:
    """Group responses by participant email."""
    grouped: Dict[str, List[EnrichedResponse]] = defaultdict(list)
    for response in responses:
        grouped[response.participant_email or ""].append(response)
    return dict(grouped)


def question_breakdown(questions: Sequence[Dict[str, Any]],
                       responses: Sequence[EnrichedResponse],
                       total_assignments: int) -> List[QuestionBreakdown]:
    """Per question: how many responses answer it, relative to all assignments."""
    rows = []
    for question in questions:
        qid = question.get("id")
        answered = sum(1 for r in responses if has_answer((r.responses or {}).get(qid)))
        rows.append(QuestionBreakdown(
            question_id=qid,
            text=question.get("text") or "",
            type=question.get("type") or "text",
            response_count=answered,
            total_assignments=total_assignments,
            response_rate=percentage(answered, total_assignments),
        ))
    return rows


class AnalyticsService:
    """Aggregated views for creators and dashboards."""

    def __init__(self, db: Session):
        self.db = db
        self.form_repo = FormRepository(db)
        self.assignment_repo = AssignmentRepository(db)
        self.response_repo = ResponseRepository(db)
        self.user_repo = UserRepository(db)

    def form_assignments(self, form_id: int) -> List[Assignment]:
        """Raw assignment list of a form (404 if the form is missing)."""
        FormService(self.db).get_form(form_id)
        return self.assignment_repo.get_by_form(form_id)

    def form_responses_report(self, form_id: int) -> FormResponsesReport:
        """
        Every assignment of the form joined with its response.

        Responses are matched by assignment id, so responses left behind by a
        regenerated matrix never show up here.
        """
        form = FormService(self.db).get_form(form_id)
        assignments = self.assignment_repo.get_by_form(form_id)
        stored = self.response_repo.get_by_assignments([a.id for a in assignments])
        users = self.user_repo.get_map(r.participant_id for r in stored)

        responses = []
        for record in stored:
            user = users.get(record.participant_id)
            enriched = EnrichedResponse.model_validate(record)
            enriched.user = UserResponse.model_validate(user) if user else None
            enriched.user_name = user.name if user else UNKNOWN_USER
            responses.append(enriched)

        by_assignment = {r.assignment_id: r for r in responses}
        summary = [
            AssignmentSummaryRow(
                assignment_id=a.id,
                participant_name=a.participant_name,
                participant_type=a.participant_type.value,
                participant_email=a.participant_email,
                subject_name=a.subject_name or a.participant_name,
                evaluator_position=a.evaluator_position,
                status=a.status.value,
                has_response=a.id in by_assignment,
                response=by_assignment.get(a.id),
            )
            for a in assignments
        ]

        logger.info(
            "Form %s report: %d assignments, %d responses", form_id, len(assignments), len(responses)
        )

        return FormResponsesReport(
            assignments=[AssignmentResponse.model_validate(a) for a in assignments],
            responses=responses,
            summary=summary,
            stats=completion_stats(len(assignments), len(responses)),
            by_user=group_by_user(responses),
            by_question=question_breakdown(form.questions or [], responses, len(assignments)),
        )

    def user_forms(self, user_id: Optional[int]) -> UserFormsOverview:
        """Forms a user created and the assignments they hold."""
        if user_id is None:
            return UserFormsOverview()

        created = self.form_repo.get_by_creator(user_id)
        mine = self.assignment_repo.get_by_participant(user_id)
        answered = self.response_repo.assignment_ids_with_response([a.id for a in mine])
        forms = {f.id: f for f in self.form_repo.get_many(list({a.form_id for a in mine}))}

        assigned_rows = []
        for assignment in mine:
            form = forms.get(assignment.form_id)
            assigned_rows.append(AssignedFormRow(
                form_id=assignment.form_id,
                form_title=form.title if form else UNKNOWN_FORM,
                assignment_id=assignment.id,
                my_role=assignment.participant_type.value,
                my_token=assignment.token,
                my_status="completed" if assignment.id in answered else "pending",
                allow_multiple_responses=bool(form and form.allow_multiple_responses),
                due_date=assignment.due_date or (form.due_date if form else None),
                form_type=FormType.ENHANCED.value,
                subject_name=assignment.subject_name,
                evaluator_position=assignment.evaluator_position,
            ))

        completed = sum(1 for row in assigned_rows if row.my_status == "completed")
        assigned_summary = AssignedSummary(
            total=len(assigned_rows),
            completed=completed,
            pending=max(0, len(assigned_rows) - completed),
        )

        return UserFormsOverview(
            created_forms=[
                CreatedFormRow(
                    id=f.id,
                    title=f.title,
                    description=f.description or "",
                    created_at=f.created_at,
                    updated_at=f.updated_at,
                    status=f.status,
                    questions=f.questions or [],
                    form_type=f.form_type or FormType.ENHANCED.value,
                )
                for f in created
            ],
            assigned_forms=assigned_rows,
            assigned_summary=assigned_summary,
            created_summary=self._created_summary([f.id for f in created]),
        )

    def _created_summary(self, form_ids: List[int]) -> CreatedSummary:
        """
        Participation across the given forms.

        A participant counts as completed once every assignment they hold in
        these forms has a response.
        """
        assignments = self.assignment_repo.get_by_forms(form_ids)
        answered = self.response_repo.assignment_ids_with_response([a.id for a in assignments])

        outstanding: Dict[int, bool] = {}
        for assignment in assignments:
            pending = assignment.id not in answered
            outstanding[assignment.participant_id] = outstanding.get(assignment.participant_id, False) or pending

        done = sum(1 for is_pending in outstanding.values() if not is_pending)
        return CreatedSummary(
            forms_created=len(form_ids),
            assignments=len(assignments),
            total_participants=len(outstanding),
            completed_participants=done,
            pending_participants=len(outstanding) - done,
        )

    def dashboard_stats(self) -> DashboardStats:
        """Global counters."""
        total_assignments = self.assignment_repo.count()
        completed = self.assignment_repo.count(AssignmentStatus.COMPLETED)

        return DashboardStats(
            total_forms=self.form_repo.count(),
            total_users=self.user_repo.count(),
            total_evaluations=self.response_repo.count(),
            pending_evaluations=self.assignment_repo.count(AssignmentStatus.PENDING),
            total_assignments=total_assignments,
            completion_rate=percentage(completed, total_assignments),
        )
