"""User management and watch-list endpoints. Authorization is decided by UserService."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_claim
from app.core.database import get_db
from app.schemas.auth import IdentityClaim
from app.schemas.user import (
    UserCreateRequest,
    UserResponse,
    UsersListResponse,
    UserUpdateRequest,
)
from app.schemas.watchlist import (
    WatchItemCreate,
    WatchItemCreatedResponse,
    WatchItemKind,
    WatchItemRequest,
    WatchListItemResponse,
    WatchListResponse,
)
from app.services.errors import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    StoreFailureError,
    UserServiceError,
)
from app.services.user_store import SqlAlchemyUserStore
from app.services.users import UserService

router = APIRouter()

UserId = Annotated[str, Path(pattern=r"^[0-9]{1,24}$", description="User id")]
Claim = Annotated[IdentityClaim, Depends(get_current_claim)]

_STATUS_BY_ERROR: dict[type[UserServiceError], int] = {
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StoreFailureError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def get_user_service(db: Annotated[Session, Depends(get_db)]) -> UserService:
    """Dependency: user service bound to this request's DB session."""
    return UserService(SqlAlchemyUserStore(db))


Service = Annotated[UserService, Depends(get_user_service)]


def _http_error(e: UserServiceError) -> HTTPException:
    code = _STATUS_BY_ERROR.get(type(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(status_code=code, detail=e.message)


@router.get("", response_model=UsersListResponse)
def list_users(claim: Claim, service: Service) -> UsersListResponse:
    """List all users (admin only)."""
    try:
        users = service.list_all(claim)
    except UserServiceError as e:
        raise _http_error(e) from e
    return UsersListResponse(users=[UserResponse.from_user(u) for u in users])


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: UserId, claim: Claim, service: Service) -> UserResponse:
    """Get one user. Users may only read their own record; admins may read any."""
    try:
        user = service.get_by_id(claim, user_id)
    except UserServiceError as e:
        raise _http_error(e) from e
    return UserResponse.from_user(user)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreateRequest, service: Service) -> UserResponse:
    """Register a new account. No token required; the account is always a regular USER."""
    try:
        user = service.create(body.username, body.password)
    except UserServiceError as e:
        raise _http_error(e) from e
    return UserResponse.from_user(user)


@router.patch("/{user_id}", response_model=UserResponse)
def edit_user(
    user_id: UserId,
    body: UserUpdateRequest,
    claim: Claim,
    service: Service,
) -> UserResponse:
    """
    Edit username and/or role. Users may edit only themselves and can never
    grant themselves ADMIN. Returns the updated user with 200.
    """
    try:
        user = service.edit(claim, user_id, username=body.username, role=body.role)
    except UserServiceError as e:
        raise _http_error(e) from e
    return UserResponse.from_user(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: UserId, claim: Claim, service: Service) -> Response:
    """Delete a user and their watch list (admin only)."""
    try:
        service.delete(claim, user_id)
    except UserServiceError as e:
        raise _http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _add_watch_item(
    service: UserService,
    claim: IdentityClaim,
    user_id: str,
    kind: WatchItemKind,
    body: WatchItemRequest,
) -> WatchItemCreatedResponse:
    item = WatchItemCreate(kind=kind, external_id=body.external_id, title=body.title)
    try:
        entry_id = service.add_watch_item(claim, user_id, item)
    except UserServiceError as e:
        raise _http_error(e) from e
    return WatchItemCreatedResponse(id=entry_id)


@router.post(
    "/{user_id}/watchlist/movie",
    response_model=WatchItemCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_movie_to_watch_list(
    user_id: UserId,
    body: WatchItemRequest,
    claim: Claim,
    service: Service,
) -> WatchItemCreatedResponse:
    """Add a movie to the user's watch list; returns the new entry id."""
    return _add_watch_item(service, claim, user_id, "movie", body)


@router.post(
    "/{user_id}/watchlist/tv",
    response_model=WatchItemCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_tv_to_watch_list(
    user_id: UserId,
    body: WatchItemRequest,
    claim: Claim,
    service: Service,
) -> WatchItemCreatedResponse:
    """Add a TV show to the user's watch list; returns the new entry id."""
    return _add_watch_item(service, claim, user_id, "tv", body)


@router.get("/{user_id}/watchlist", response_model=WatchListResponse)
def get_watch_list(user_id: UserId, claim: Claim, service: Service) -> WatchListResponse:
    try:
        items = service.get_watch_list(claim, user_id)
    except UserServiceError as e:
        raise _http_error(e) from e
    return WatchListResponse(items=[WatchListItemResponse.from_item(i) for i in items])
