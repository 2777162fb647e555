"""Request/response schemas for user management endpoints."""

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from app.models.user import Role
from app.schemas.watchlist import WatchListItemResponse


class UserCreateRequest(BaseModel):
    """
    Body for account creation.

    Fields are optional here so that missing values reach the service and are
    reported as invalid input (400). Any other key, including role, is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")


class UserUpdateRequest(BaseModel):
    """Body for editing a user. Omitted or empty username keeps the current one; omitted role keeps the current one."""

    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(default=None, description="New username")
    # Any JSON value is accepted here; the mutation policy rejects anything that is not a role name (400).
    role: JsonValue = Field(default=None, description="New role (USER or ADMIN)")


class UserResponse(BaseModel):
    """Public user information (no password hash)."""

    id: str
    username: str
    role: Role
    watch_list: list[WatchListItemResponse] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=str(user.id),
            username=user.username,
            role=Role(user.role),
            watch_list=[WatchListItemResponse.from_item(i) for i in user.watch_list],
        )


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserResponse]
