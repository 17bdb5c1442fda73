"""Pydantic schemas for JWT tokens."""

from __future__ import annotations

from pydantic import BaseModel


class TokenClaims(BaseModel):
    """Identity carried by a verified access token."""

    id: int
    email: str
    role: str
    exp: int
    iat: int | None = None
