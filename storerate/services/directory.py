"""
Directory — search, filter and sort over users and stores.

Store rows are joined with a per-store aggregate subquery so each row
carries its live average and count without fanning out the join.
"""

from __future__ import annotations

import logging

from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from storerate.core.exceptions import Conflict, NotFound, ValidationError
from storerate.core.validation import (check_address, check_email, check_name,
                                       parse_sort)
from storerate.models.rating import Rating
from storerate.models.store import Store
from storerate.models.user import ROLE_OWNER, User
from storerate.schemas.rating import OwnerStoreInfo
from storerate.schemas.store import AdminStoreRow, DashboardCounts, UserStoreRow
from storerate.schemas.user import OwnerStoreSummary, UserDetail, UserRead
from storerate.services.ratings import count_ratings

logger = logging.getLogger(__name__)

USER_SORT_FIELDS = {"name", "email", "role"}
STORE_SORT_FIELDS = {"name", "email", "average_rating"}


def _ordering(sort: str | None, allowed: set[str]) -> tuple[str, str] | None:
    try:
        return parse_sort(sort, allowed)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def _store_aggregates():
    return (
        select(
            Rating.store_id.label("store_id"),
            func.avg(Rating.rating).label("average_rating"),
            func.count(Rating.id).label("rating_count"),
        )
        .group_by(Rating.store_id)
        .subquery()
    )


# ── Users ───────────────────────────────────────────────────────────
async def list_users(
    db: AsyncSession,
    *,
    name: str | None = None,
    email: str | None = None,
    role: str | None = None,
    sort: str | None = None,
) -> list[UserRead]:
    ordering = _ordering(sort, USER_SORT_FIELDS)

    stmt = select(User)
    if name:
        stmt = stmt.where(User.name.contains(name, autoescape=True))
    if email:
        stmt = stmt.where(User.email == email.strip().lower())
    if role:
        stmt = stmt.where(User.role == role)

    if ordering is not None:
        field, direction = ordering
        column = getattr(User, field)
        stmt = stmt.order_by(column.desc() if direction == "desc" else column.asc())
    stmt = stmt.order_by(User.id)

    result = await db.execute(stmt)
    return [UserRead.model_validate(u) for u in result.scalars().all()]


async def owner_store_summary(db: AsyncSession, owner_id: int) -> OwnerStoreInfo | None:
    """The owner's store with its aggregate; first store by id if several."""
    agg = _store_aggregates()
    result = await db.execute(
        select(
            Store,
            func.coalesce(agg.c.average_rating, 0).label("average_rating"),
            func.coalesce(agg.c.rating_count, 0).label("rating_count"),
        )
        .outerjoin(agg, agg.c.store_id == Store.id)
        .where(Store.owner_id == owner_id)
        .order_by(Store.id)
        .limit(1)
    )
    row = result.first()
    if row is None:
        return None
    store = row.Store
    return OwnerStoreInfo(
        id=store.id,
        name=store.name,
        email=store.email,
        address=store.address,
        average_rating=float(row.average_rating),
        rating_count=row.rating_count,
    )


async def get_user_detail(db: AsyncSession, user_id: int) -> UserDetail:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")

    detail = UserDetail.model_validate(user)
    if user.role == ROLE_OWNER:
        info = await owner_store_summary(db, user.id)
        if info is not None:
            detail.storeInfo = OwnerStoreSummary(
                store_id=info.id,
                store_name=info.name,
                average_rating=info.average_rating,
                rating_count=info.rating_count,
            )
    return detail


# ── Stores ──────────────────────────────────────────────────────────
async def create_store(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    address: str | None = None,
    owner_id: int | None = None,
) -> Store:
    try:
        name = check_name(name)
        email = check_email(email)
        address = check_address(address)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    if owner_id is not None:
        owner = await db.get(User, owner_id)
        if owner is None or owner.role != ROLE_OWNER:
            raise ValidationError("owner_id must reference an existing store owner")

    existing = await db.execute(select(Store.id).where(Store.email == email))
    if existing.scalar_one_or_none() is not None:
        raise Conflict("Store email already exists")

    store = Store(name=name, email=email, address=address, owner_id=owner_id)
    db.add(store)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise Conflict("Store email already exists") from exc
    await db.refresh(store)
    logger.info("Store %d created (owner %s)", store.id, owner_id)
    return store


async def list_stores(
    db: AsyncSession,
    *,
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    sort: str | None = None,
    viewer_id: int | None = None,
) -> list[AdminStoreRow] | list[UserStoreRow]:
    """Stores with live aggregates.

    With ``viewer_id`` each row also carries that viewer's own rating
    (``None`` where they have not rated), and rows default to name order.
    """
    ordering = _ordering(sort, STORE_SORT_FIELDS)
    agg = _store_aggregates()
    average = func.coalesce(agg.c.average_rating, 0).label("average_rating")
    count = func.coalesce(agg.c.rating_count, 0).label("rating_count")

    stmt = (
        select(Store, User.name.label("owner_name"), average, count)
        .outerjoin(agg, agg.c.store_id == Store.id)
        .outerjoin(User, User.id == Store.owner_id)
    )
    mine = None
    if viewer_id is not None:
        mine = aliased(Rating)
        stmt = stmt.add_columns(mine.rating.label("user_rating")).outerjoin(
            mine, and_(mine.store_id == Store.id, mine.user_id == viewer_id)
        )

    if name:
        stmt = stmt.where(Store.name.contains(name, autoescape=True))
    if email:
        stmt = stmt.where(Store.email == email.strip().lower())
    if address:
        stmt = stmt.where(Store.address.contains(address, autoescape=True))

    if ordering is not None:
        field, direction = ordering
        column = average if field == "average_rating" else getattr(Store, field)
        stmt = stmt.order_by(column.desc() if direction == "desc" else column.asc())
    elif viewer_id is not None:
        stmt = stmt.order_by(Store.name)
    stmt = stmt.order_by(Store.id)

    result = await db.execute(stmt)
    rows = result.all()

    if mine is None:
        return [
            AdminStoreRow(
                id=r.Store.id,
                name=r.Store.name,
                email=r.Store.email,
                address=r.Store.address,
                owner_id=r.Store.owner_id,
                owner_name=r.owner_name,
                average_rating=float(r.average_rating),
                rating_count=r.rating_count,
            )
            for r in rows
        ]
    return [
        UserStoreRow(
            id=r.Store.id,
            name=r.Store.name,
            email=r.Store.email,
            address=r.Store.address,
            owner_id=r.Store.owner_id,
            average_rating=float(r.average_rating),
            rating_count=r.rating_count,
            user_rating=r.user_rating,
        )
        for r in rows
    ]


async def dashboard_counts(db: AsyncSession) -> DashboardCounts:
    users = await db.execute(select(func.count(User.id)))
    stores = await db.execute(select(func.count(Store.id)))
    return DashboardCounts(
        usersCount=users.scalar() or 0,
        storesCount=stores.scalar() or 0,
        ratingsCount=await count_ratings(db),
    )
