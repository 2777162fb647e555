"""Request/response schemas for auth endpoints and the verified identity claim."""

from pydantic import BaseModel, ConfigDict, Field

from app.models.user import Role


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class IdentityClaim(BaseModel):
    """Verified requester identity taken from the access token. Immutable per request."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    role: Role
