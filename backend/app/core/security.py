"""
Password hashing utilities.

Passwords are hashed with bcrypt (cost factor from settings) through passlib.
The raw password only lives for the duration of these calls.
"""

from passlib.context import CryptContext
from backend.app.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.password_hash_rounds,
)


def get_password_hash(password: str) -> str:
    """Return a salted one-way hash of ``password``."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a stored hash."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)
