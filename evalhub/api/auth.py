"""Authentication router."""
from typing import Annotated
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from evalhub.core.config import settings
from evalhub.core.database import get_db
from evalhub.core.limiter import limiter
from evalhub.services.auth_service import AuthService
from evalhub.schemas.user import LoginResponse, UserLogin, UserResponse
from evalhub.services.user_service import UserService
from evalhub.api.dependencies import CurrentSession

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(
    request: Request,
    body: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Login with email and password.

    Returns the directory profile and a bearer token for session-only
    endpoints.
    """
    return AuthService(db).login(body.email, body.password)


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    session: CurrentSession,
    db: Annotated[Session, Depends(get_db)],
):
    """Profile of the bearer token's user."""
    return UserService(db).get_user(session.user_id)
