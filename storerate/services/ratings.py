"""
Rating ledger — one score per (user, store), plus live aggregates.

Writes go through a single ``INSERT ... ON CONFLICT DO UPDATE`` (or a
single ``UPDATE``), so concurrent identical submissions cannot create a
second row or lose an update.  Aggregates are computed on every read.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.core.exceptions import (InvalidRating, NotFound, StorageError,
                                       StoreNotFound)
from storerate.core.validation import check_rating
from storerate.models.rating import Rating
from storerate.models.store import Store
from storerate.models.user import User
from storerate.schemas.rating import Rater, StoreAggregate

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _validated(value: int) -> int:
    try:
        return check_rating(value)
    except ValueError as exc:
        raise InvalidRating(str(exc)) from exc


async def _load(db: AsyncSession, user_id: int, store_id: int) -> Rating:
    result = await db.execute(
        select(Rating)
        .where(Rating.user_id == user_id, Rating.store_id == store_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def _write_rating(
    db: AsyncSession,
    user_id: int,
    store_id: int,
    value: int,
    *,
    must_exist: bool,
) -> Rating:
    now = datetime.now(timezone.utc)

    if must_exist:
        result = await db.execute(
            update(Rating)
            .where(Rating.user_id == user_id, Rating.store_id == store_id)
            .values(rating=value, created_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFound("Rating not found")
    else:
        dialect = db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise StorageError(f"Rating upsert is not supported on {dialect}")
        stmt = insert(Rating).values(
            user_id=user_id, store_id=store_id, rating=value, created_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "store_id"],
            set_={"rating": stmt.excluded.rating, "created_at": stmt.excluded.created_at},
        )
        await db.execute(stmt)

    await db.commit()
    return await _load(db, user_id, store_id)


async def submit_rating(db: AsyncSession, user_id: int, store_id: int, value: int) -> Rating:
    """Insert the caller's rating for a store, replacing any earlier one."""
    value = _validated(value)
    if await db.get(Store, store_id) is None:
        raise StoreNotFound()

    rating = await _write_rating(db, user_id, store_id, value, must_exist=False)
    logger.info("User %d rated store %d: %d", user_id, store_id, value)
    return rating


async def update_rating(db: AsyncSession, user_id: int, store_id: int, value: int) -> Rating:
    """Change an existing rating; ``NotFound`` if the caller never rated the store."""
    value = _validated(value)
    rating = await _write_rating(db, user_id, store_id, value, must_exist=True)
    logger.info("User %d updated rating for store %d: %d", user_id, store_id, value)
    return rating


async def aggregate_for(db: AsyncSession, store_id: int) -> StoreAggregate:
    """Mean and count of a store's ratings; a store nobody rated averages 0."""
    result = await db.execute(
        select(func.avg(Rating.rating), func.count(Rating.id)).where(
            Rating.store_id == store_id
        )
    )
    average, count = result.one()
    return StoreAggregate(average=float(average or 0), count=count or 0)


async def list_raters(db: AsyncSession, store_id: int) -> list[Rater]:
    """Everyone who rated the store, most recent first."""
    result = await db.execute(
        select(User.id, User.name, User.email, Rating.rating, Rating.created_at)
        .join(User, User.id == Rating.user_id)
        .where(Rating.store_id == store_id)
        .order_by(Rating.created_at.desc(), Rating.id.desc())
    )
    return [
        Rater(
            user_id=r.id,
            name=r.name,
            email=r.email,
            rating=r.rating,
            created_at=r.created_at,
        )
        for r in result.all()
    ]


async def count_ratings(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Rating.id)))
    return result.scalar() or 0
