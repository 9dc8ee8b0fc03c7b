"""
Authentication dependencies for FastAPI.

This module provides the auth gate used by every protected route.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from backend.app.core.exceptions import AuthenticationError
from backend.app.core.jwt import TokenService, get_token_service

# HTTP Bearer security scheme (missing header is handled below, not by FastAPI)
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service)
) -> dict:
    """
    FastAPI dependency for JWT authentication.

    1. Rejects requests without a bearer token (401)
    2. Verifies signature and expiry (403 on failure)
    3. Attaches the claims to ``request.state.user``

    The identity is not re-read from the database, so a token stays valid
    for its whole lifetime even if the user's role changes.

    Returns:
        Claims dict with user_id, email and role
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    claims = tokens.verify(credentials.credentials)
    request.state.user = claims
    return claims
