"""Mutation policy for user edits: role-escalation guard and effective field values."""

from dataclasses import dataclass

from app.models.user import Role
from app.services.errors import ForbiddenError, InvalidInputError

ROLE_VALUES = frozenset(r.value for r in Role)


@dataclass(frozen=True)
class UserEdit:
    """Field values to persist for an edited user."""

    username: str
    role: Role


def apply_user_edit(
    requester_role: Role,
    requested_username: str | None,
    requested_role: object,
    current_username: str,
    current_role: str,
) -> UserEdit:
    """
    Validate an edit request and compute the resulting (username, role).

    A USER can never request ADMIN, even on their own record. A requested role
    must be one of Role's string values (anything else, numbers included, is
    invalid input); None means keep the current role. An empty or
    missing username keeps the current username. ADMIN may set any valid role.
    """
    if requester_role == Role.USER and requested_role == Role.ADMIN.value:
        raise ForbiddenError("Not enough permissions: role escalation")
    if requested_role is not None and (
        not isinstance(requested_role, str) or requested_role not in ROLE_VALUES
    ):
        raise InvalidInputError("Invalid role")

    username = requested_username if requested_username else current_username
    role = Role(requested_role) if requested_role is not None else Role(current_role)
    return UserEdit(username=username, role=role)
