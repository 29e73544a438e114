"""
Assignment fan-out for enhanced forms.

A form's subject matrix and question list are turned into one assignment
per subject (self-evaluation) and one per (subject, evaluator) pair. Each
assignment carries the ids of the questions its role may answer:

- subject:              questions with ``can_subject_answer``
- evaluator at pos. p:  questions whose ``evaluator_positions`` contain p

Functions here are pure; they operate on the stored (snake_case) form
documents and never touch the session.
"""
import random
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from evalhub.models.assignment import Assignment, AssignmentStatus, ParticipantType
from evalhub.models.form import Form
from evalhub.schemas.form import QuestionDefinition

TOKEN_BYTES = 32
_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_token() -> str:
    """64 hex chars from 32 random bytes."""
    return secrets.token_hex(TOKEN_BYTES)


def new_question_id() -> str:
    """Client-style question id: ``q_<epoch millis>_<9 base36 chars>``."""
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(9))
    return f"q_{int(time.time() * 1000)}_{suffix}"


def normalize_questions(questions: Iterable[QuestionDefinition]) -> List[Dict[str, Any]]:
    """Fill in missing ids and dump questions to their stored shape."""
    stored = []
    for question in questions:
        data = question.model_dump()
        if not data.get("id"):
            data["id"] = new_question_id()
        stored.append(data)
    return stored


def subject_question_ids(questions: Sequence[Dict[str, Any]]) -> List[str]:
    """Ids of questions a subject may answer, in form order."""
    return [q["id"] for q in questions if q.get("can_subject_answer")]


def evaluator_question_ids(questions: Sequence[Dict[str, Any]], position: int) -> List[str]:
    """Ids of questions an evaluator at ``position`` may answer, in form order."""
    return [q["id"] for q in questions if position in (q.get("evaluator_positions") or [])]


def build_assignments(form: Form, now: Optional[datetime] = None) -> List[Assignment]:
    """
    Build (unsaved) assignments for every participant of ``form``.

    Subjects come first, each followed by its evaluators, so the result has
    exactly ``len(subjects) + sum(len(evaluators))`` entries.
    """
    now = now or datetime.now(timezone.utc)
    questions = form.questions or []
    subject_ids = subject_question_ids(questions)
    assignments: List[Assignment] = []

    for subject in form.subject_matrix or []:
        assignments.append(Assignment(
            form_id=form.id,
            participant_type=ParticipantType.SUBJECT,
            participant_id=subject["subject_id"],
            participant_name=subject.get("subject_name"),
            participant_email=subject.get("subject_email"),
            assigned_questions=list(subject_ids),
            token=generate_token(),
            status=AssignmentStatus.PENDING,
            due_date=form.due_date,
            created_at=now,
            updated_at=now,
        ))

        for evaluator in subject.get("evaluators") or []:
            position = evaluator["position"]
            assignments.append(Assignment(
                form_id=form.id,
                participant_type=ParticipantType.EVALUATOR,
                participant_id=evaluator["evaluator_id"],
                participant_name=evaluator.get("evaluator_name"),
                participant_email=evaluator.get("evaluator_email"),
                subject_id=subject["subject_id"],
                subject_name=subject.get("subject_name"),
                subject_email=subject.get("subject_email"),
                evaluator_position=position,
                assigned_questions=evaluator_question_ids(questions, position),
                token=generate_token(),
                status=AssignmentStatus.PENDING,
                due_date=form.due_date,
                created_at=now,
                updated_at=now,
            ))

    return assignments


def coverage_warnings(subject_matrix: Sequence[Dict[str, Any]],
                      questions: Sequence[Dict[str, Any]]) -> List[str]:
    """
    Report gaps between the matrix and the questions.

    None of these block form creation; they flag participants who would get
    an empty form and questions nobody will see.
    """
    warnings: List[str] = []
    positions = sorted({
        e["position"]
        for s in subject_matrix
        for e in (s.get("evaluators") or [])
    })

    for question in questions:
        label = question.get("text") or question.get("id")
        targets = question.get("evaluator_positions") or []
        if not question.get("can_subject_answer") and not targets:
            warnings.append(f"Question '{label}' cannot be answered by anyone")
        for position in targets:
            if position not in positions:
                warnings.append(
                    f"Question '{label}' targets evaluator position {position}, which no subject has"
                )

    for position in positions:
        if not evaluator_question_ids(questions, position):
            warnings.append(f"Evaluator position {position} has no questions assigned")

    return warnings
