"""
Admin endpoints — platform counts, account and store management.

Every route here is gated to the ``admin`` role.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.deps import get_db, require_admin
from storerate.core.validation import MAX_ID
from storerate.schemas.store import (AdminStoreRow, DashboardCounts,
                                     StoreCreate, StoreCreatedResponse,
                                     StoreRead)
from storerate.schemas.token import TokenClaims
from storerate.schemas.user import (UserCreate, UserCreatedResponse, UserDetail,
                                    UserPublic, UserRead)
from storerate.services import credentials, directory

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/dashboard", response_model=DashboardCounts)
async def dashboard(
    db: AsyncSession = Depends(get_db),
    _admin: TokenClaims = Depends(require_admin),
) -> DashboardCounts:
    """Total users, stores and submitted ratings."""
    return await directory.dashboard_counts(db)


# ── Users ───────────────────────────────────────────────────────────
@router.post("/users", response_model=UserCreatedResponse, status_code=201)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    _admin: TokenClaims = Depends(require_admin),
) -> UserCreatedResponse:
    """Create an account with an explicit role."""
    user = await credentials.create_user(
        db,
        name=body.name,
        email=body.email,
        password=body.password,
        address=body.address,
        role=body.role,
    )
    return UserCreatedResponse(
        message="User created successfully",
        user=UserPublic.model_validate(user),
    )


@router.get("/users", response_model=list[UserRead])
async def list_users(
    name: str | None = Query(default=None),
    email: str | None = Query(default=None),
    role: str | None = Query(default=None),
    sort: str | None = Query(default=None, description="field:asc|desc"),
    db: AsyncSession = Depends(get_db),
    _admin: TokenClaims = Depends(require_admin),
) -> list[UserRead]:
    return await directory.list_users(db, name=name, email=email, role=role, sort=sort)


@router.get("/users/{user_id}", response_model=UserDetail)
async def get_user(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
    _admin: TokenClaims = Depends(require_admin),
) -> UserDetail:
    """One account; owners also carry their store's rating summary."""
    return await directory.get_user_detail(db, user_id)


# ── Stores ──────────────────────────────────────────────────────────
@router.post("/stores", response_model=StoreCreatedResponse, status_code=201)
async def create_store(
    body: StoreCreate,
    db: AsyncSession = Depends(get_db),
    _admin: TokenClaims = Depends(require_admin),
) -> StoreCreatedResponse:
    store = await directory.create_store(
        db,
        name=body.name,
        email=body.email,
        address=body.address,
        owner_id=body.owner_id,
    )
    return StoreCreatedResponse(
        message="Store created successfully",
        store=StoreRead.model_validate(store),
    )


@router.get("/stores", response_model=list[AdminStoreRow])
async def list_stores(
    name: str | None = Query(default=None),
    email: str | None = Query(default=None),
    sort: str | None = Query(default=None, description="field:asc|desc"),
    db: AsyncSession = Depends(get_db),
    _admin: TokenClaims = Depends(require_admin),
) -> list[AdminStoreRow]:
    """Stores with owner name and live average rating."""
    return await directory.list_stores(db, name=name, email=email, sort=sort)
