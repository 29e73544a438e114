"""API dependencies for authentication."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from evalhub.core.database import get_db
from evalhub.core.security import decode_access_token
from evalhub.repositories.user_repository import UserRepository

# Security scheme; missing credentials are handled per dependency
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthSession:
    """Signed-in user as resolved from the bearer token."""
    user_id: int
    email: str
    name: str
    expires_at: datetime


def _session_from_token(token: str, db: Session) -> AuthSession:
    payload = decode_access_token(token)

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials"
        )

    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    return AuthSession(
        user_id=user.id,
        email=user.email,
        name=user.name,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def get_current_session(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: Annotated[Session, Depends(get_db)]
) -> AuthSession:
    """
    Dependency to get the current session.

    Extracts JWT from Bearer token, validates it, and checks the user still exists.

    Raises:
        HTTPException: If token missing, invalid or user not found
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _session_from_token(credentials.credentials, db)


def get_optional_session(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: Annotated[Session, Depends(get_db)]
) -> Optional[AuthSession]:
    """Like get_current_session, but anonymous requests get None. A bad token is still a 401."""
    if credentials is None:
        return None
    return _session_from_token(credentials.credentials, db)


CurrentSession = Annotated[AuthSession, Depends(get_current_session)]
OptionalSession = Annotated[Optional[AuthSession], Depends(get_optional_session)]


def parse_user_id(raw: str) -> Optional[int]:
    """Path user ids that are not integers match nobody."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None
