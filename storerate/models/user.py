"""
User model — credentials & role-based access control.
"""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Integer, String
from sqlalchemy.orm import relationship

from storerate.db.base import Base

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLE_OWNER = "owner"
VALID_ROLES = (ROLE_ADMIN, ROLE_USER, ROLE_OWNER)


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'user', 'owner')", name="ck_users_role"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    name: str = Column(String(60), nullable=False)  # type: ignore[assignment]
    email: str = Column(String(320), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    hashed_password: str = Column(String(128), nullable=False)  # type: ignore[assignment]
    address: str | None = Column(String(400), nullable=True)  # type: ignore[assignment]
    role: str = Column(  # type: ignore[assignment]
        String(20),
        nullable=False,
        default=ROLE_USER,
        server_default=ROLE_USER,
    )  # admin | user | owner

    ratings = relationship(
        "Rating",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    stores = relationship("Store", back_populates="owner", passive_deletes=True)
