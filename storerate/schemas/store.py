"""Pydantic schemas for stores and their live rating aggregates."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from storerate.core.validation import (MAX_ID, check_address, check_email,
                                       check_name)


class StoreCreate(BaseModel):
    name: str
    email: str
    address: str | None = None
    owner_id: int | None = Field(default=None, ge=1, le=MAX_ID)

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return check_name(v)

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("address")
    @classmethod
    def _address(cls, v: str | None) -> str | None:
        return check_address(v)


class StoreRead(BaseModel):
    id: int
    name: str
    email: str
    address: str | None = None
    owner_id: int | None = None

    model_config = {"from_attributes": True}


class StoreCreatedResponse(BaseModel):
    message: str
    store: StoreRead


class AdminStoreRow(StoreRead):
    owner_name: str | None = None
    average_rating: float
    rating_count: int


class UserStoreRow(StoreRead):
    average_rating: float
    rating_count: int
    user_rating: int | None = None


class DashboardCounts(BaseModel):
    usersCount: int
    storesCount: int
    ratingsCount: int
