"""Test environment: must run before any app import triggers Settings()."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-for-unit-tests")
os.environ.setdefault("APP_ENV", "dev")
