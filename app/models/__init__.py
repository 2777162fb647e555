"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.user import Role, User
from app.models.watch_list_item import WatchListItem

__all__ = ["Base", "Role", "User", "WatchListItem"]
