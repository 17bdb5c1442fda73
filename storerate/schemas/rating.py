"""Pydantic schemas for rating submissions and the owner dashboard."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from storerate.core.validation import MAX_ID


class RatingSubmit(BaseModel):
    store_id: int = Field(..., ge=1, le=MAX_ID)
    rating: int = Field(..., ge=1, le=5, strict=True)


class RatingUpdate(BaseModel):
    rating: int = Field(..., ge=1, le=5, strict=True)


class RatingRead(BaseModel):
    id: int
    user_id: int
    store_id: int
    rating: int
    created_at: datetime

    model_config = {"from_attributes": True}


class RatingResponse(BaseModel):
    message: str
    rating: RatingRead


class StoreAggregate(BaseModel):
    average: float
    count: int


class Rater(BaseModel):
    user_id: int
    name: str
    email: str
    rating: int
    created_at: datetime


class OwnerStoreInfo(BaseModel):
    id: int
    name: str
    email: str
    address: str | None = None
    average_rating: float
    rating_count: int


class OwnerDashboard(BaseModel):
    storeInfo: OwnerStoreInfo
    raters: list[Rater]
