"""
JWT token issuance / verification and password hashing (bcrypt).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from storerate.core.config import settings
from storerate.schemas.token import TokenClaims

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

_ALGORITHM = settings.ALGORITHM
_SECRET = settings.SECRET_KEY


# ── Passwords ───────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


# ── JWT tokens ──────────────────────────────────────────────────────
def create_access_token(
    user_id: int,
    email: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a token carrying the caller's id, email and role."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS))
    return jwt.encode(
        {"id": user_id, "email": email, "role": role, "iat": now, "exp": expire},
        _SECRET,
        algorithm=_ALGORITHM,
    )


def decode_access_token(token: str) -> TokenClaims | None:
    """Return the verified claims, or ``None`` for a bad signature,
    malformed payload or expired token."""
    try:
        payload = jwt.decode(token, _SECRET, algorithms=[_ALGORITHM])
    except JWTError:
        return None
    try:
        return TokenClaims.model_validate(payload)
    except PydanticValidationError:
        return None
