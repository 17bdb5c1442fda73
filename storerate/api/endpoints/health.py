"""Public liveness check."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.deps import get_db

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: str
    db: bool


@router.get("/health", response_model=HealthResponse)
async def health(db: AsyncSession = Depends(get_db)) -> HealthResponse:
    """Report database reachability."""
    try:
        await db.execute(select(1))
    except SQLAlchemyError as e:
        logger.error("Health check DB failure: %s", e)
        return HealthResponse(status="degraded", db=False)
    return HealthResponse(status="ok", db=True)
