"""Unit tests for app.services.role_policy: per-operation allow/deny table."""

import unittest

from app.models import Role
from app.services.errors import ForbiddenError
from app.services.role_policy import (
    DENY_ADMIN_ONLY,
    DENY_NOT_AUTHENTICATED,
    DENY_NOT_OWNER,
    Operation,
    authorize,
    decide,
)
from tests.support import claim

SELF_OR_ADMIN_OPS = (
    Operation.GET_USER,
    Operation.EDIT_USER,
    Operation.ADD_WATCH_ITEM,
    Operation.GET_WATCH_LIST,
)
ADMIN_ONLY_OPS = (Operation.LIST_USERS, Operation.DELETE_USER)


class TestAdminOnlyOperations(unittest.TestCase):
    """List and delete require ADMIN, whatever the target."""

    def test_admin_allowed(self) -> None:
        for op in ADMIN_ONLY_OPS:
            with self.subTest(op=op):
                self.assertTrue(decide(claim("1", Role.ADMIN), op, "9").allowed)

    def test_user_denied_even_for_self(self) -> None:
        for op in ADMIN_ONLY_OPS:
            with self.subTest(op=op):
                decision = decide(claim("7", Role.USER), op, "7")
                self.assertFalse(decision.allowed)
                self.assertEqual(decision.reason, DENY_ADMIN_ONLY)


class TestSelfOrAdminOperations(unittest.TestCase):
    """Get/edit/watch-list operations: ADMIN on anyone, USER on self only."""

    def test_user_on_self_allowed(self) -> None:
        for op in SELF_OR_ADMIN_OPS:
            with self.subTest(op=op):
                self.assertTrue(decide(claim("7", Role.USER), op, "7").allowed)

    def test_user_on_other_denied(self) -> None:
        for op in SELF_OR_ADMIN_OPS:
            with self.subTest(op=op):
                decision = decide(claim("7", Role.USER), op, "9")
                self.assertFalse(decision.allowed)
                self.assertEqual(decision.reason, DENY_NOT_OWNER)

    def test_admin_on_other_allowed(self) -> None:
        for op in SELF_OR_ADMIN_OPS:
            with self.subTest(op=op):
                self.assertTrue(decide(claim("1", Role.ADMIN), op, "9").allowed)

    def test_ids_compared_as_strings(self) -> None:
        self.assertFalse(decide(claim("7", Role.USER), Operation.GET_USER, "07").allowed)

    def test_missing_target_denied_for_user(self) -> None:
        self.assertFalse(decide(claim("7", Role.USER), Operation.GET_USER, None).allowed)


class TestCreateAndMissingClaim(unittest.TestCase):
    def test_create_needs_no_claim(self) -> None:
        self.assertTrue(decide(None, Operation.CREATE_USER).allowed)

    def test_missing_claim_denied_elsewhere(self) -> None:
        for op in SELF_OR_ADMIN_OPS + ADMIN_ONLY_OPS:
            with self.subTest(op=op):
                decision = decide(None, op, "1")
                self.assertFalse(decision.allowed)
                self.assertEqual(decision.reason, DENY_NOT_AUTHENTICATED)


class TestAuthorize(unittest.TestCase):
    def test_raises_forbidden_with_reason(self) -> None:
        with self.assertRaises(ForbiddenError) as ctx:
            authorize(claim("7", Role.USER), Operation.GET_USER, "9")
        self.assertEqual(ctx.exception.message, DENY_NOT_OWNER)

    def test_returns_none_when_allowed(self) -> None:
        self.assertIsNone(authorize(claim("7", Role.USER), Operation.GET_USER, "7"))


if __name__ == "__main__":
    unittest.main()
