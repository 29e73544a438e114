"""Forms router: definitions, regeneration and per-form analytics."""
from typing import Annotated, List, Union
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from evalhub.core.database import get_db
from evalhub.services.form_service import FormService
from evalhub.services.analytics_service import AnalyticsService
from evalhub.schemas.form import (
    EnhancedFormPayload,
    FormCreateResult,
    FormRegenerateResult,
    FormResponse,
    FormUpdateResult,
)
from evalhub.schemas.assignment import AssignmentResponse
from evalhub.schemas.analytics import FormResponsesReport
from evalhub.api.dependencies import OptionalSession

router = APIRouter(prefix="/forms", tags=["Forms"])


@router.post("/enhanced", response_model=FormCreateResult)
def create_enhanced_form(
    form_data: EnhancedFormPayload,
    db: Annotated[Session, Depends(get_db)],
    session: OptionalSession,
):
    """
    Create an enhanced form and issue one tokenized assignment per
    participant.

    `createdBy` falls back to the bearer token's user when omitted.
    """
    service = FormService(db)
    return service.create_enhanced_form(
        form_data, session_user_id=session.user_id if session else None
    )


@router.put("/enhanced/{form_id}", response_model=FormRegenerateResult)
def update_enhanced_form(
    form_id: int,
    form_data: EnhancedFormPayload,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Replace a form's matrix and questions.

    All assignments are regenerated with new tokens; earlier responses and
    notifications for this form are discarded.
    """
    return FormService(db).update_enhanced_form(form_id, form_data)


@router.get("", response_model=List[FormResponse])
def list_forms(db: Annotated[Session, Depends(get_db)]):
    """All forms, newest first, with creator details."""
    return FormService(db).get_forms()


@router.get("/{form_id}", response_model=FormResponse)
def get_form(form_id: int, db: Annotated[Session, Depends(get_db)]):
    return FormService(db).get_form(form_id)


@router.put("/{form_id}", response_model=Union[FormRegenerateResult, FormUpdateResult])
def update_form(
    form_id: int,
    form_data: EnhancedFormPayload,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a form. Enhanced forms go through full regeneration."""
    return FormService(db).update_form(form_id, form_data)


@router.delete("/{form_id}")
def delete_form(form_id: int, db: Annotated[Session, Depends(get_db)]):
    """Delete a form and everything issued for it."""
    deleted = FormService(db).delete_form(form_id)
    return {"success": True, "deleted": deleted}


@router.post("/{form_id}/duplicate", response_model=FormResponse)
def duplicate_form(form_id: int, db: Annotated[Session, Depends(get_db)]):
    """Copy a form as a draft. The copy has no assignments."""
    return FormService(db).duplicate_form(form_id)


@router.get("/{form_id}/assignments", response_model=List[AssignmentResponse])
def get_form_assignments(form_id: int, db: Annotated[Session, Depends(get_db)]):
    return AnalyticsService(db).form_assignments(form_id)


@router.get("/{form_id}/responses", response_model=FormResponsesReport)
def get_form_responses(form_id: int, db: Annotated[Session, Depends(get_db)]):
    """Assignments joined with responses, plus completion and per-question stats."""
    return AnalyticsService(db).form_responses_report(form_id)
