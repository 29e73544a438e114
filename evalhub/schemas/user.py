"""User schemas."""
from pydantic import EmailStr
from typing import Optional
from datetime import datetime

from evalhub.schemas.base import CamelModel


# Authentication schemas
class UserLogin(CamelModel):
    """Login request."""
    email: EmailStr
    password: str


class UserLoginResponse(CamelModel):
    """User data in login response."""
    id: int
    name: str
    email: str
    department: str = ""
    job_title: str = ""


class LoginResponse(CamelModel):
    """Login response: profile plus a signed session token."""
    success: bool = True
    user: UserLoginResponse
    token: str
    token_type: str = "bearer"


# Directory schemas
class UserResponse(CamelModel):
    """Directory entry (never includes the password hash)."""
    id: int
    name: str
    email: str
    department: str = ""
    job_title: str = ""
    created_at: Optional[datetime] = None


class CreatorSummary(CamelModel):
    """Creator details embedded in form payloads."""
    name: str
    email: str
    department: str = ""
