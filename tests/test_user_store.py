"""Unit tests for app.services.user_store: id parsing and error translation."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError

from app.models import Role, WatchListItem
from app.schemas.watchlist import WatchItemCreate
from app.services.errors import InvalidInputError, NotFoundError, StoreFailureError
from app.services.user_store import MAX_USER_ID, SqlAlchemyUserStore, parse_user_id
from tests.support import add_user, make_session_factory


class TestParseUserId(unittest.TestCase):
    def test_digits(self) -> None:
        self.assertEqual(parse_user_id("7"), 7)
        self.assertEqual(parse_user_id("007"), 7)

    def test_unusable_ids(self) -> None:
        for raw in ("", "0", "abc", "-1", str(MAX_USER_ID + 1)):
            with self.subTest(raw=raw):
                self.assertIsNone(parse_user_id(raw))


class TestErrorTranslation(unittest.TestCase):
    """Database errors roll the session back and surface as service errors."""

    def test_operational_error_becomes_store_failure(self) -> None:
        session = MagicMock()
        session.query.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        store = SqlAlchemyUserStore(session)
        with self.assertRaises(StoreFailureError):
            store.list_all()
        session.rollback.assert_called_once()

    def test_integrity_error_becomes_invalid_input(self) -> None:
        session = MagicMock()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("unique"))
        store = SqlAlchemyUserStore(session)
        with self.assertRaises(InvalidInputError):
            store.create("bob", "hash", Role.USER)
        session.rollback.assert_called_once()

    def test_integrity_error_on_watch_item_means_owner_gone(self) -> None:
        session = MagicMock()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("foreign key"))
        store = SqlAlchemyUserStore(session)
        user = MagicMock(id=7)
        with self.assertRaises(NotFoundError):
            store.add_watch_item(user, WatchItemCreate(kind="movie", external_id="603"))
        session.rollback.assert_called_once()

    def test_integrity_error_on_update_is_duplicate_username(self) -> None:
        session = MagicMock()
        session.commit.side_effect = IntegrityError("UPDATE", {}, Exception("unique"))
        store = SqlAlchemyUserStore(session)
        with self.assertRaises(InvalidInputError):
            store.update(MagicMock(), "carol", Role.USER)

    def test_unparseable_id_skips_query(self) -> None:
        session = MagicMock()
        store = SqlAlchemyUserStore(session)
        self.assertIsNone(store.get("abc"))
        session.query.assert_not_called()


class TestConcurrentDelete(unittest.TestCase):
    """A user deleted by another session after being loaded is reported as not found."""

    def test_add_watch_item_after_owner_deleted(self) -> None:
        session_factory = make_session_factory()
        setup = session_factory()
        bob_id = add_user(setup, "bob").id
        setup.close()

        reader = session_factory()
        deleter = session_factory()
        try:
            store = SqlAlchemyUserStore(reader)
            bob = store.get(str(bob_id))
            SqlAlchemyUserStore(deleter).delete(SqlAlchemyUserStore(deleter).get(str(bob_id)))

            with self.assertRaises(NotFoundError):
                store.add_watch_item(bob, WatchItemCreate(kind="movie", external_id="603"))
            self.assertEqual(reader.query(WatchListItem).count(), 0)
        finally:
            reader.close()
            deleter.close()


if __name__ == "__main__":
    unittest.main()
