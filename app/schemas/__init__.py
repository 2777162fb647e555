"""Pydantic request/response schemas."""

from app.schemas.auth import IdentityClaim, LoginRequest, TokenResponse
from app.schemas.health import HealthResponse
from app.schemas.user import (
    UserCreateRequest,
    UserResponse,
    UsersListResponse,
    UserUpdateRequest,
)
from app.schemas.watchlist import (
    WatchItemCreate,
    WatchItemCreatedResponse,
    WatchItemRequest,
    WatchListItemResponse,
    WatchListResponse,
)

__all__ = [
    "HealthResponse",
    "IdentityClaim",
    "LoginRequest",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
    "UsersListResponse",
    "WatchItemCreate",
    "WatchItemCreatedResponse",
    "WatchItemRequest",
    "WatchListItemResponse",
    "WatchListResponse",
]
