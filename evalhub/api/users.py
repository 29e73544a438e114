"""User directory router."""
from typing import Annotated, List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from evalhub.core.database import get_db
from evalhub.services.user_service import UserService
from evalhub.services.analytics_service import AnalyticsService
from evalhub.schemas.user import UserResponse
from evalhub.schemas.analytics import UserFormsOverview
from evalhub.api.dependencies import parse_user_id

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserResponse])
def list_users(db: Annotated[Session, Depends(get_db)]):
    """List the whole directory (used to build subject matrices)."""
    return UserService(db).get_users()


@router.get("/{user_id}/forms", response_model=UserFormsOverview)
def get_user_forms(user_id: str, db: Annotated[Session, Depends(get_db)]):
    """
    Forms the user created and every assignment they hold.

    An id that is not a number yields the empty overview.
    """
    return AnalyticsService(db).user_forms(parse_user_id(user_id))
