"""
Store model — a rateable business, optionally linked to an owner account.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from storerate.db.base import Base


class Store(Base):
    __tablename__ = "stores"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    name: str = Column(String(60), nullable=False, index=True)  # type: ignore[assignment]
    email: str = Column(String(320), unique=True, nullable=False)  # type: ignore[assignment]
    address: str | None = Column(String(400), nullable=True)  # type: ignore[assignment]
    owner_id: int | None = Column(  # type: ignore[assignment]
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    owner = relationship("User", back_populates="stores")
    ratings = relationship(
        "Rating",
        back_populates="store",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
