"""ORM model for watch-list entries owned by a user."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class WatchListItem(Base):
    """
    One movie or TV entry on a user's watch list.

    Entries have no identity outside their owning user; deleting the user deletes them.
    """

    __tablename__ = "watch_list_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    kind = Column(String(16), nullable=False)
    external_id = Column(String(255), nullable=False)
    title = Column(String(1024), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    user = relationship("User", back_populates="watch_list")
