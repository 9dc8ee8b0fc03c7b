"""
Authentication Pydantic schemas.

Defines request and response schemas for authentication endpoints.
"""

from pydantic import Field
from datetime import datetime
from typing import Optional
from backend.app.models.enums import UserRole
from backend.app.schemas.base import CamelModel


class UserRegister(CamelModel):
    """
    Schema for user registration.

    Used by POST /auth/register endpoint. ``role`` is free text here; the
    service falls back to ``user`` for anything unrecognized.
    """
    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    email: str = Field(..., min_length=3, max_length=255, description="User email address")
    password: str = Field(..., min_length=1, description="Password")
    role: Optional[str] = Field(default=None, description="admin, user, driver or pilot")
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None, max_length=500)


class UserLogin(CamelModel):
    """Schema for user login. Used by POST /auth/login endpoint."""
    email: str = Field(..., description="Registered email")
    password: str = Field(..., description="Password")


class ProfileUpdate(CamelModel):
    """Schema for PUT /auth/profile. Omitted fields are left unchanged."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None, max_length=500)


class AuthUser(CamelModel):
    """User block returned alongside a token."""
    id: int
    name: str
    email: str
    role: UserRole


class TokenResponse(CamelModel):
    """
    Schema for token response.

    Returned by successful login/register operations.
    """
    message: str
    token: str = Field(..., description="JWT access token")
    user: AuthUser


class UserResponse(CamelModel):
    """
    Schema for user profile response. Never carries the password hash.
    """
    id: int
    name: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime
    last_login: Optional[datetime] = None


class ProfileUpdateResponse(CamelModel):
    message: str
    user: UserResponse
