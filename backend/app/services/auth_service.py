"""
Authentication Service.

Registration, login and profile management on top of the credential store.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from backend.app.core.exceptions import (
    DuplicateIdentityError,
    InvalidCredentialsError,
    ResourceNotFoundError,
)
from backend.app.core.jwt import TokenService
from backend.app.core.security import get_password_hash, verify_password
from backend.app.models.enums import UserRole
from backend.app.models.user import User
from backend.app.schemas.auth import (
    AuthUser,
    ProfileUpdate,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)

logger = logging.getLogger(__name__)


def _issue_for(tokens: TokenService, user: User) -> str:
    return tokens.issue(user_id=user.id, email=user.email, role=user.role.value)


class AuthService:

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    async def register(db: AsyncSession, tokens: TokenService, data: UserRegister) -> TokenResponse:
        """
        Create an identity and log it in.

        Raises:
            DuplicateIdentityError: email already registered
        """
        if await AuthService.get_by_email(db, data.email):
            raise DuplicateIdentityError()

        user = User(
            name=data.name,
            email=data.email,
            hashed_password=get_password_hash(data.password),
            role=UserRole.coerce(data.role),
            phone=data.phone,
            address=data.address,
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # Concurrent registration won the unique constraint
            await db.rollback()
            raise DuplicateIdentityError()
        await db.refresh(user)

        logger.info("Registered user id=%s role=%s", user.id, user.role.value)

        return TokenResponse(
            message="User registered successfully",
            token=_issue_for(tokens, user),
            user=AuthUser.model_validate(user),
        )

    @staticmethod
    async def login(db: AsyncSession, tokens: TokenService, credentials: UserLogin) -> TokenResponse:
        """
        Verify credentials and issue a fresh token.

        Unknown email and wrong password raise the same error.
        """
        user = await AuthService.get_by_email(db, credentials.email)

        if not user:
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not verify_password(credentials.password, user.hashed_password):
            logger.warning("Login failed: bad password for user id=%s", user.id)
            raise InvalidCredentialsError()

        user.last_login = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(user)

        logger.info("User id=%s logged in", user.id)

        return TokenResponse(
            message="Login successful",
            token=_issue_for(tokens, user),
            user=AuthUser.model_validate(user),
        )

    @staticmethod
    async def get_profile(db: AsyncSession, user_id: int) -> UserResponse:
        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise ResourceNotFoundError("User", user_id)
        return UserResponse.model_validate(user)

    @staticmethod
    async def update_profile(db: AsyncSession, user_id: int, data: ProfileUpdate) -> UserResponse:
        """Update name, phone and address. Omitted fields are kept."""
        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise ResourceNotFoundError("User", user_id)

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(user, field, value)

        await db.commit()
        await db.refresh(user)
        return UserResponse.model_validate(user)
