"""Unit tests for password hashing, access tokens and the bearer-token dependency."""

import unittest
from unittest.mock import patch

import jwt
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from app.api.v1.auth import get_current_claim
from app.core import security
from app.core.config import settings
from app.core.security import create_access_token, decode_access_token, hash_password, verify_password
from app.models import Role


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def _signed(payload: dict) -> str:
    return jwt.encode(payload, settings.JWT_SECRET.get_secret_value(), algorithm=settings.JWT_ALGORITHM)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_verifies(self) -> None:
        with patch.object(security, "BCRYPT_ROUNDS", 4):
            hashed = hash_password("secret")
        self.assertNotEqual(hashed, "secret")
        self.assertTrue(verify_password("secret", hashed))
        self.assertFalse(verify_password("wrong", hashed))

    def test_garbage_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("secret", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    def test_claims_round_trip(self) -> None:
        payload = decode_access_token(create_access_token(sub=7, role=Role.USER))
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["role"], "USER")

    def test_role_written_as_enum_value(self) -> None:
        payload = decode_access_token(create_access_token(sub="3", role=Role("ADMIN")))
        self.assertEqual(payload["role"], "ADMIN")

    def test_unknown_role_not_issued(self) -> None:
        with self.assertRaises(ValueError):
            create_access_token(sub=3, role="GOD")

    def test_wrong_secret_rejected(self) -> None:
        token = jwt.encode({"sub": "1", "role": "ADMIN"}, "other-secret", algorithm="HS256")
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token)


class TestGetCurrentClaim(unittest.TestCase):
    def test_valid_token_gives_claim(self) -> None:
        claim = get_current_claim(_bearer(create_access_token(sub=7, role=Role.ADMIN)))
        self.assertEqual(claim.user_id, "7")
        self.assertEqual(claim.role, Role.ADMIN)

    def test_missing_credentials_401(self) -> None:
        with self.assertRaises(HTTPException) as ctx:
            get_current_claim(None)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_unknown_role_401(self) -> None:
        with self.assertRaises(HTTPException) as ctx:
            get_current_claim(_bearer(_signed({"sub": "7", "role": "GOD"})))
        self.assertEqual(ctx.exception.status_code, 401)

    def test_missing_sub_401(self) -> None:
        with self.assertRaises(HTTPException) as ctx:
            get_current_claim(_bearer(_signed({"role": "USER"})))
        self.assertEqual(ctx.exception.status_code, 401)


if __name__ == "__main__":
    unittest.main()
