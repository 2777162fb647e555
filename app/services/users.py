"""Access-controlled user service: role policy, mutation policy and user store combined.

Every operation takes the requester's IdentityClaim explicitly and checks the
role policy before reading the store, so permission is always decided before
existence. Failures are raised as UserServiceError subclasses.
"""

import logging
from collections.abc import Callable

from app.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN, hash_password
from app.models import Role, User, WatchListItem
from app.schemas.auth import IdentityClaim
from app.schemas.watchlist import WatchItemCreate
from app.services.errors import InvalidInputError, NotFoundError
from app.services.mutation_policy import apply_user_edit
from app.services.role_policy import Operation, authorize
from app.services.user_store import UserStoreProtocol

logger = logging.getLogger(__name__)


class UserService:
    """User management and watch-list operations for one request."""

    def __init__(
        self,
        store: UserStoreProtocol,
        password_hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self._store = store
        self._hash_password = password_hasher

    def _load(self, user_id: str) -> User:
        user = self._store.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def list_all(self, claim: IdentityClaim | None) -> list[User]:
        """Return every user. ADMIN only."""
        authorize(claim, Operation.LIST_USERS)
        return self._store.list_all()

    def get_by_id(self, claim: IdentityClaim | None, user_id: str) -> User:
        """Return one user, including the watch list."""
        authorize(claim, Operation.GET_USER, user_id)
        return self._load(user_id)

    def create(self, username: str | None, password: str | None) -> User:
        """
        Create a regular account. No identity is required and the role is
        always USER, whatever the caller asked for.
        """
        authorize(None, Operation.CREATE_USER)
        username = username.strip() if isinstance(username, str) else ""
        if not username:
            raise InvalidInputError("Username is required")
        if not isinstance(password, str) or not password:
            raise InvalidInputError("Password is required")
        if len(username) > USERNAME_MAX_LEN:
            raise InvalidInputError("Invalid username length")
        if len(password) > PASSWORD_MAX_LEN:
            raise InvalidInputError("Invalid password length")
        if self._store.get_by_username(username) is not None:
            raise InvalidInputError("Username already exists")

        user = self._store.create(username, self._hash_password(password), Role.USER)
        logger.info("User created: user_id=%s", user.id)
        return user

    def edit(
        self,
        claim: IdentityClaim | None,
        user_id: str,
        username: str | None = None,
        role: object = None,
    ) -> User:
        """Update username and/or role under the mutation policy. The password hash is never touched."""
        authorize(claim, Operation.EDIT_USER, user_id)
        user = self._load(user_id)
        edit = apply_user_edit(
            requester_role=claim.role,
            requested_username=username.strip() if username else None,
            requested_role=role,
            current_username=user.username,
            current_role=user.role,
        )
        if len(edit.username) > USERNAME_MAX_LEN:
            raise InvalidInputError("Invalid username length")
        if edit.username != user.username:
            other = self._store.get_by_username(edit.username)
            if other is not None and other.id != user.id:
                raise InvalidInputError("Username already exists")

        updated = self._store.update(user, edit.username, edit.role)
        logger.info(
            "User updated: user_id=%s by=%s role=%s",
            updated.id,
            claim.user_id,
            edit.role.value,
        )
        return updated

    def delete(self, claim: IdentityClaim | None, user_id: str) -> None:
        """Hard-delete a user and their watch list. ADMIN only."""
        authorize(claim, Operation.DELETE_USER, user_id)
        user = self._load(user_id)
        self._store.delete(user)
        logger.info("User deleted: user_id=%s by=%s", user_id, claim.user_id)

    def add_watch_item(
        self,
        claim: IdentityClaim | None,
        user_id: str,
        item: WatchItemCreate,
    ) -> str:
        """Append item to the user's watch list and return the new entry's id."""
        authorize(claim, Operation.ADD_WATCH_ITEM, user_id)
        user = self._load(user_id)
        entry = self._store.add_watch_item(user, item)
        logger.info("Watch-list entry added: user_id=%s entry_id=%s", user_id, entry.id)
        return str(entry.id)

    def get_watch_list(self, claim: IdentityClaim | None, user_id: str) -> list[WatchListItem]:
        authorize(claim, Operation.GET_WATCH_LIST, user_id)
        return list(self._load(user_id).watch_list)
