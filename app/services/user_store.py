"""User store: persistence of users and their watch lists behind a small protocol.

The service layer depends only on UserStoreProtocol so tests can pass a
MagicMock or an alternative backend. SqlAlchemyUserStore is the production
implementation; every database error leaves the session rolled back. Integrity
violations become the failure the operation names (duplicate username, owner
gone); everything else is re-raised as StoreFailureError.
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models import Role, User, WatchListItem
from app.schemas.watchlist import WatchItemCreate
from app.services.errors import (
    InvalidInputError,
    NotFoundError,
    StoreFailureError,
    UserServiceError,
)

logger = logging.getLogger(__name__)

# users.id is a 32-bit INTEGER column.
MAX_USER_ID = 2**31 - 1


class UserStoreProtocol(Protocol):
    """Interface for user and watch-list data access."""

    def get(self, user_id: str) -> User | None: ...

    def get_by_username(self, username: str) -> User | None: ...

    def list_all(self) -> list[User]: ...

    def create(self, username: str, password_hash: str, role: Role) -> User: ...

    def update(self, user: User, username: str, role: Role) -> User: ...

    def delete(self, user: User) -> None: ...

    def add_watch_item(self, user: User, item: WatchItemCreate) -> WatchListItem: ...


def parse_user_id(user_id: str) -> int | None:
    """Return the integer primary key for a path id, or None if it cannot name a row."""
    if not user_id or not user_id.isdigit():
        return None
    value = int(user_id)
    if value < 1 or value > MAX_USER_ID:
        return None
    return value


def _username_taken() -> UserServiceError:
    return InvalidInputError("Username already exists")


# The owning user was deleted between load and insert.
def _owner_gone() -> UserServiceError:
    return NotFoundError("User not found")


class SqlAlchemyUserStore:
    """UserStoreProtocol backed by a SQLAlchemy session (one per request)."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def _guard(
        self,
        action: str,
        on_conflict: Callable[[], UserServiceError] | None = None,
    ) -> Iterator[None]:
        """Roll back and translate DB errors; on_conflict builds the error for an integrity violation."""
        try:
            yield
        except IntegrityError as e:
            self._session.rollback()
            if on_conflict is None:
                logger.exception("User store constraint violation during %s", action)
                raise StoreFailureError("User store unavailable") from e
            logger.warning("User store constraint violation during %s", action)
            raise on_conflict() from e
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.exception("User store failure during %s", action)
            raise StoreFailureError("User store unavailable") from e

    def get(self, user_id: str) -> User | None:
        pk = parse_user_id(user_id)
        if pk is None:
            return None
        with self._guard("get"):
            return (
                self._session.query(User)
                .options(selectinload(User.watch_list))
                .filter(User.id == pk)
                .first()
            )

    def get_by_username(self, username: str) -> User | None:
        with self._guard("get_by_username"):
            return self._session.query(User).filter(User.username == username).first()

    def list_all(self) -> list[User]:
        with self._guard("list_all"):
            return (
                self._session.query(User)
                .options(selectinload(User.watch_list))
                .order_by(User.id)
                .all()
            )

    def create(self, username: str, password_hash: str, role: Role) -> User:
        with self._guard("create", _username_taken):
            user = User(username=username, password_hash=password_hash, role=role.value)
            self._session.add(user)
            self._session.commit()
            self._session.refresh(user)
            return user

    def update(self, user: User, username: str, role: Role) -> User:
        with self._guard("update", _username_taken):
            user.username = username
            user.role = role.value
            self._session.commit()
            self._session.refresh(user)
            return user

    def delete(self, user: User) -> None:
        with self._guard("delete"):
            self._session.delete(user)
            self._session.commit()

    def add_watch_item(self, user: User, item: WatchItemCreate) -> WatchListItem:
        with self._guard("add_watch_item", _owner_gone):
            entry = WatchListItem(
                user_id=user.id,
                kind=item.kind,
                external_id=item.external_id,
                title=item.title,
            )
            self._session.add(entry)
            self._session.commit()
            self._session.refresh(entry)
            self._session.expire(user, ["watch_list"])
            return entry
