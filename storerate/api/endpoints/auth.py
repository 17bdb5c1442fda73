"""
Auth endpoints — signup, login, password change and the caller's profile.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.deps import get_db, require_any_role
from storerate.core.security import create_access_token
from storerate.models.user import ROLE_USER, User
from storerate.schemas.token import TokenClaims
from storerate.schemas.user import (AuthResponse, LoginRequest, MessageResponse,
                                    PasswordUpdate, SignupRequest, UserPublic,
                                    UserRead)
from storerate.services import credentials

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(message: str, user: User) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=create_access_token(user.id, user.email, user.role),
        user=UserPublic.model_validate(user),
    )


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Register a normal user account and log it in."""
    user = await credentials.create_user(
        db,
        name=body.name,
        email=body.email,
        password=body.password,
        address=body.address,
        role=ROLE_USER,
    )
    return _auth_response("User created successfully", user)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Exchange email and password for a 24-hour access token."""
    user = await credentials.authenticate(db, body.email, body.password)
    return _auth_response("Login successful", user)


@router.patch("/update-password", response_model=MessageResponse)
async def update_password(
    body: PasswordUpdate,
    db: AsyncSession = Depends(get_db),
    claims: TokenClaims = Depends(require_any_role),
) -> MessageResponse:
    await credentials.change_password(db, claims.id, body.oldPassword, body.newPassword)
    return MessageResponse(message="Password updated successfully")


@router.get("/me", response_model=UserRead)
async def read_current_user(
    db: AsyncSession = Depends(get_db),
    claims: TokenClaims = Depends(require_any_role),
) -> User:
    """Return profile of the currently authenticated user."""
    return await credentials.get_user(db, claims.id)
