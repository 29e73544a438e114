"""Authentication service."""
import logging
from datetime import timedelta
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from evalhub.core.security import verify_password, create_access_token
from evalhub.core.config import settings
from evalhub.repositories.user_repository import UserRepository
from evalhub.models.user import User
from evalhub.schemas.user import LoginResponse, UserLoginResponse

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication business logic."""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user by email and password.

        Returns:
            User if authentication successful, None otherwise
        """
        user = self.user_repo.get_by_email(email)

        if not user:
            return None

        if not verify_password(password, user.hashed_password):
            return None

        return user

    def login(self, email: str, password: str) -> LoginResponse:
        """
        Login user and return a session token with the profile.

        Raises:
            HTTPException: If authentication fails
        """
        user = self.authenticate_user(email, password)

        if not user:
            logger.info("Failed login for %s", email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )

        access_token = create_access_token(
            data={"sub": str(user.id), "email": user.email},
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

        return LoginResponse(
            token=access_token,
            user=UserLoginResponse(
                id=user.id,
                name=user.name,
                email=user.email,
                department=user.department or "",
                job_title=user.job_title or "",
            ),
        )
