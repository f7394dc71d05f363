"""
Security: password hashing, JWT and opaque id generation.
Challenge: Secure auth, no plain-text passwords, token validation.
"""

import secrets
import string
from datetime import datetime, timezone, timedelta
from typing import Any

from jose import jwt
from passlib.context import CryptContext

from app.config import get_settings

settings = get_settings()
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

PUBLIC_ID_ALPHABET = string.ascii_letters + string.digits + "_-"
PUBLIC_ID_LENGTH = 21


def new_public_id() -> str:
    """Opaque, non-sequential identifier for rows and sessions."""
    return "".join(secrets.choice(PUBLIC_ID_ALPHABET) for _ in range(PUBLIC_ID_LENGTH))


def hash_password(password: str) -> str:
    """One-way hash for storage. Never store plain passwords."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison for login."""
    return pwd_context.verify(plain, hashed)


def create_access_token(subject: str, extra: dict[str, Any] | None = None) -> str:
    """Create JWT for authenticated user. Subject is the user's public id."""
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.jwt_expire_minutes)
    to_encode = {
        "iss": settings.jwt_issuer,
        "sub": subject,
        "user_id": subject,
        "iat": now,
        "exp": expire,
        "jti": new_public_id(),
    }
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT (signature, exp, iss). A token without exp is rejected.
    Raises jose.ExpiredSignatureError or jose.JWTError; callers decide how to report them.
    """
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
        issuer=settings.jwt_issuer,
        options={"require_exp": True},
    )
