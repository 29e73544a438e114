"""Admin maintenance router."""
import logging
from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from evalhub.core.database import get_db
from evalhub.services.admin_service import AdminService
from evalhub.schemas.analytics import ClearDataResult
from evalhub.api.dependencies import CurrentSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.delete("/clear-data", response_model=ClearDataResult)
def clear_data(
    db: Annotated[Session, Depends(get_db)],
    session: CurrentSession,
):
    """
    Wipe all forms, assignments, responses and notifications.

    Users are kept. Requires a signed-in user.
    """
    logger.warning("Evaluation data clear requested by %s", session.email)
    return AdminService(db).clear_evaluation_data()
