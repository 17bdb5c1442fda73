"""
FastAPI dependencies — the authorization gate and the database session.

Every protected route declares its allow-list with a ``RoleGate``; the
gate verifies the bearer token, checks the role and hands the verified
claims to the handler.  Nothing is looked up or stored per session.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.core.exceptions import Forbidden, InvalidToken, Unauthenticated
from storerate.core.security import decode_access_token
from storerate.db.session import async_session_factory
from storerate.models.user import ROLE_ADMIN, ROLE_OWNER, ROLE_USER, VALID_ROLES
from storerate.schemas.token import TokenClaims

# auto_error=False so a missing header maps to our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Auth dependencies ───────────────────────────────────────────────
async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenClaims:
    """Verify the ``Authorization: Bearer`` token and return its claims."""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise InvalidToken()
    return claims


class RoleGate:
    """Dependency that admits only the listed roles."""

    def __init__(self, *roles: str) -> None:
        unknown = set(roles) - set(VALID_ROLES)
        if unknown:
            raise ValueError(f"Unknown roles in allow-list: {sorted(unknown)}")
        self.allowed = frozenset(roles)

    async def __call__(self, claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if claims.role not in self.allowed:
            raise Forbidden()
        return claims


require_any_role = RoleGate(*VALID_ROLES)
require_admin = RoleGate(ROLE_ADMIN)
require_user = RoleGate(ROLE_USER)
require_owner = RoleGate(ROLE_OWNER)
