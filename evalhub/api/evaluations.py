"""Token-holder router (no login; the token is the credential)."""
from typing import Annotated
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from evalhub.core.config import settings
from evalhub.core.database import get_db
from evalhub.core.limiter import limiter
from evalhub.services.evaluation_service import EvaluationService
from evalhub.schemas.evaluation import EvaluationSubmit, EvaluationView, SubmitResult

router = APIRouter(prefix="/enhanced-evaluate", tags=["Evaluations"])


@router.get("/{token}", response_model=EvaluationView)
@limiter.limit(settings.EVALUATION_RATE_LIMIT)
def get_evaluation(
    request: Request,
    token: str,
    db: Annotated[Session, Depends(get_db)],
):
    """Form narrowed to the token holder's questions, plus any earlier answers."""
    return EvaluationService(db).resolve(token)


@router.post("/{token}", response_model=SubmitResult)
@limiter.limit(settings.EVALUATION_RATE_LIMIT)
def submit_evaluation(
    request: Request,
    token: str,
    body: EvaluationSubmit,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Submit answers keyed by question id.

    A second submission for the same token overwrites the first.
    """
    return EvaluationService(db).submit(
        token,
        body.responses,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
