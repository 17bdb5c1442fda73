"""Pydantic schemas for accounts, authentication and the user directory."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from storerate.core.validation import (check_address, check_email, check_name,
                                       check_password)
from storerate.models.user import VALID_ROLES


class _AccountFields(BaseModel):
    name: str
    email: str
    password: str
    address: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return check_name(v)

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        return check_password(v)

    @field_validator("address")
    @classmethod
    def _address(cls, v: str | None) -> str | None:
        return check_address(v)


class SignupRequest(_AccountFields):
    pass


class UserCreate(_AccountFields):
    role: str

    @field_validator("role")
    @classmethod
    def _validate_role(cls, v: str) -> str:
        if v not in VALID_ROLES:
            raise ValueError(f"Role must be one of: {', '.join(VALID_ROLES)}")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def _not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Password required")
        return v


class PasswordUpdate(BaseModel):
    oldPassword: str
    newPassword: str

    @field_validator("oldPassword")
    @classmethod
    def _old_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Old password required")
        return v

    @field_validator("newPassword")
    @classmethod
    def _new_password(cls, v: str) -> str:
        return check_password(v)


class UserPublic(BaseModel):
    id: int
    name: str
    email: str
    role: str

    model_config = {"from_attributes": True}


class UserRead(UserPublic):
    address: str | None = None


class OwnerStoreSummary(BaseModel):
    store_id: int
    store_name: str
    average_rating: float
    rating_count: int


class UserDetail(UserRead):
    storeInfo: OwnerStoreSummary | None = None


class AuthResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserPublic


class UserCreatedResponse(BaseModel):
    message: str
    user: UserPublic


class MessageResponse(BaseModel):
    message: str
    success: bool = True
