"""
Normal-user endpoints — store search and rating submission.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.deps import get_db, require_user
from storerate.core.validation import MAX_ID
from storerate.schemas.rating import (RatingRead, RatingResponse, RatingSubmit,
                                      RatingUpdate)
from storerate.schemas.store import UserStoreRow
from storerate.schemas.token import TokenClaims
from storerate.services import directory, ratings

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/stores", response_model=list[UserStoreRow])
async def list_stores(
    name: str | None = Query(default=None),
    address: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
    claims: TokenClaims = Depends(require_user),
) -> list[UserStoreRow]:
    """All stores with their average rating and the caller's own rating."""
    return await directory.list_stores(db, name=name, address=address, viewer_id=claims.id)


@router.post("/ratings", response_model=RatingResponse)
async def submit_rating(
    body: RatingSubmit,
    db: AsyncSession = Depends(get_db),
    claims: TokenClaims = Depends(require_user),
) -> RatingResponse:
    """Rate a store; a repeat submission replaces the earlier rating."""
    rating = await ratings.submit_rating(db, claims.id, body.store_id, body.rating)
    return RatingResponse(
        message="Rating submitted successfully",
        rating=RatingRead.model_validate(rating),
    )


@router.patch("/ratings/{store_id}", response_model=RatingResponse)
async def update_rating(
    body: RatingUpdate,
    store_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
    claims: TokenClaims = Depends(require_user),
) -> RatingResponse:
    """Change a rating the caller already submitted (404 if none)."""
    rating = await ratings.update_rating(db, claims.id, store_id, body.rating)
    return RatingResponse(
        message="Rating updated successfully",
        rating=RatingRead.model_validate(rating),
    )
