"""
JWT token service for authentication.

Issues and verifies the signed, time-limited session tokens carried in the
``Authorization: Bearer`` header. The token is the only source of truth for
the caller's role; verification never touches the database.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import ExpiredSignatureError, JWTError, jwt
from backend.app.core.config import Settings, settings
from backend.app.core.exceptions import TokenExpiredError, TokenInvalidError

REQUIRED_CLAIMS = ("user_id", "email", "role")


class TokenService:
    """
    Signs and verifies access tokens with the configured key.

    Example payload:
        {
            "sub": "a@x.com",
            "user_id": 123,
            "email": "a@x.com",
            "role": "admin",
            "iat": 1234567890,
            "exp": 1234654290,
            "jti": "0b6f..."
        }
    """

    def __init__(self, config: Settings):
        self._secret_key = config.secret_key
        self._algorithm = config.algorithm
        self.lifetime = timedelta(minutes=config.access_token_expire_minutes)

    def issue(self, user_id: int, email: str, role: str, issued_at: Optional[datetime] = None) -> str:
        """
        Create a signed token for an identity.

        Args:
            user_id: Identity primary key
            email: Identity email
            role: Role value (admin, user, driver, pilot)
            issued_at: Issuance time, defaults to now. Expiry is always
                issued_at + lifetime.

        Returns:
            Encoded JWT token string
        """
        issued_at = issued_at or datetime.now(timezone.utc)
        to_encode = {
            "sub": email,
            "user_id": user_id,
            "email": email,
            "role": role,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.lifetime).timestamp()),
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Decode and validate a token.

        Returns:
            Claims dict with user_id, email and role

        Raises:
            TokenExpiredError: the embedded expiry has passed
            TokenInvalidError: bad signature or malformed payload
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError:
            raise TokenInvalidError()

        if any(payload.get(claim) is None for claim in REQUIRED_CLAIMS):
            raise TokenInvalidError()

        return {claim: payload[claim] for claim in REQUIRED_CLAIMS}


token_service = TokenService(settings)


def get_token_service() -> TokenService:
    """FastAPI dependency returning the process-wide token service."""
    return token_service
