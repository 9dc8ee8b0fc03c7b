"""
Authentication API endpoints.

Provides register, login and profile endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.db.session import get_db
from backend.app.schemas.auth import (
    UserRegister,
    UserLogin,
    ProfileUpdate,
    TokenResponse,
    UserResponse,
    ProfileUpdateResponse,
)
from backend.app.core.jwt import TokenService, get_token_service
from backend.app.core.dependencies import get_current_user
from backend.app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service)
):
    """
    Register a new user and return a token (registration doubles as login).

    Unknown or missing roles default to ``user``.
    """
    return await AuthService.register(db, tokens, user_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service)
):
    """
    Login with email and password and return a fresh token.

    Unknown email and wrong password produce the same 400 response.
    """
    return await AuthService.login(db, tokens, credentials)


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Get the authenticated user's profile (password omitted).

    Raises:
        404: If the user behind the token no longer exists
    """
    return await AuthService.get_profile(db, current_user["user_id"])


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update name, phone and address."""
    user = await AuthService.update_profile(db, current_user["user_id"], profile_data)
    return ProfileUpdateResponse(message="Profile updated successfully", user=user)
