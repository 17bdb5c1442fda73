"""
Store-owner endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.deps import get_db, require_owner
from storerate.core.exceptions import NotFound
from storerate.schemas.rating import OwnerDashboard
from storerate.schemas.token import TokenClaims
from storerate.services import directory, ratings

router = APIRouter(prefix="/owner", tags=["owner"])


@router.get("/dashboard", response_model=OwnerDashboard)
async def dashboard(
    db: AsyncSession = Depends(get_db),
    claims: TokenClaims = Depends(require_owner),
) -> OwnerDashboard:
    """The owner's store aggregate and everyone who rated it, newest first."""
    store_info = await directory.owner_store_summary(db, claims.id)
    if store_info is None:
        raise NotFound("No store found for this owner")

    raters = await ratings.list_raters(db, store_info.id)
    return OwnerDashboard(storeInfo=store_info, raters=raters)
