"""
Credential store — account creation, login verification and password changes.

Every function takes the caller's AsyncSession as its storage handle.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.core.exceptions import (Conflict, InvalidCredentials, NotFound,
                                       ValidationError)
from storerate.core.security import get_password_hash, verify_password
from storerate.core.validation import (check_address, check_email, check_name,
                                       check_password)
from storerate.models.user import VALID_ROLES, User

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
    address: str | None = None,
) -> User:
    """Hash the password and insert a new account.

    The pre-check gives a friendly error; the unique index on ``email``
    turns a concurrent duplicate into the same ``Conflict``.
    """
    try:
        name = check_name(name)
        email = check_email(email)
        check_password(password)
        address = check_address(address)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    if role not in VALID_ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(VALID_ROLES)}")

    if await get_user_by_email(db, email) is not None:
        raise Conflict("User already exists")

    user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        address=address,
        role=role,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise Conflict("User already exists") from exc
    await db.refresh(user)
    logger.info("Account %d created with role %s", user.id, user.role)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    """Return the account for valid credentials.

    Unknown email and wrong password raise the same error.
    """
    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        raise InvalidCredentials()
    return user


async def change_password(
    db: AsyncSession, user_id: int, old_password: str, new_password: str
) -> None:
    user = await db.get(User, user_id)
    if user is None or not verify_password(old_password, user.hashed_password):
        raise InvalidCredentials("Invalid old password")
    try:
        check_password(new_password)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    user.hashed_password = get_password_hash(new_password)
    await db.commit()
    logger.info("Password changed for account %d", user_id)
