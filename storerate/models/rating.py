"""
Rating model — one 1-5 star score per (user, store) pair.

The unique constraint is what the upsert in ``services.ratings`` keys on.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (CheckConstraint, Column, DateTime, ForeignKey, Index,
                        Integer, UniqueConstraint)
from sqlalchemy.orm import relationship

from storerate.db.base import Base


class Rating(Base):
    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "store_id", name="uq_rating_user_store"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_rating_range"),
        Index("ix_ratings_store_id", "store_id"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    user_id: int = Column(  # type: ignore[assignment]
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    store_id: int = Column(  # type: ignore[assignment]
        Integer, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False
    )
    rating: int = Column(Integer, nullable=False)  # type: ignore[assignment]
    # Refreshed on every write, so it doubles as "last rated at".
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User", back_populates="ratings")
    store = relationship("Store", back_populates="ratings")
