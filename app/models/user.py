"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base


class Role(enum.StrEnum):
    """Closed set of account roles. ADMIN's extra rights live in the role policy."""

    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'USER' or 'ADMIN'. The watch list is owned by the user and deleted with it.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)

    watch_list = relationship(
        "WatchListItem",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WatchListItem.id",
    )
