"""Role policy: allow/deny per operation from the identity claim and target id only.

Pure and side-effect free. It never looks at stored data, so a denied caller
cannot learn whether the target exists.
"""

import enum
from dataclasses import dataclass

from app.models.user import Role
from app.schemas.auth import IdentityClaim
from app.services.errors import ForbiddenError


class Operation(enum.StrEnum):
    """Operations gated by the role policy."""

    LIST_USERS = "list_users"
    GET_USER = "get_user"
    CREATE_USER = "create_user"
    EDIT_USER = "edit_user"
    DELETE_USER = "delete_user"
    ADD_WATCH_ITEM = "add_watch_item"
    GET_WATCH_LIST = "get_watch_list"


@dataclass(frozen=True)
class Decision:
    """Outcome of a policy check; reason is set only on deny."""

    allowed: bool
    reason: str | None = None


ALLOW = Decision(allowed=True)

DENY_NOT_AUTHENTICATED = "Not authenticated"
DENY_ADMIN_ONLY = "Admin access required"
DENY_NOT_OWNER = "Not enough permissions"


def _admin_only(claim: IdentityClaim, target_id: str | None) -> Decision:
    if claim.role == Role.ADMIN:
        return ALLOW
    return Decision(allowed=False, reason=DENY_ADMIN_ONLY)


def _admin_or_self(claim: IdentityClaim, target_id: str | None) -> Decision:
    if claim.role == Role.ADMIN:
        return ALLOW
    if claim.role == Role.USER and target_id is not None and claim.user_id == target_id:
        return ALLOW
    return Decision(allowed=False, reason=DENY_NOT_OWNER)


# ADMIN passes every rule in this table; USER passes only the self-targeted ones.
_RULES = {
    Operation.LIST_USERS: _admin_only,
    Operation.GET_USER: _admin_or_self,
    Operation.EDIT_USER: _admin_or_self,
    Operation.DELETE_USER: _admin_only,
    Operation.ADD_WATCH_ITEM: _admin_or_self,
    Operation.GET_WATCH_LIST: _admin_or_self,
}


def decide(
    claim: IdentityClaim | None,
    operation: Operation,
    target_id: str | None = None,
) -> Decision:
    """
    Decide whether the requester may perform operation on target_id.

    Account creation is open to anyone (claim may be None). Every other
    operation requires a claim and is decided by the rule table.
    """
    if operation == Operation.CREATE_USER:
        return ALLOW
    if claim is None:
        return Decision(allowed=False, reason=DENY_NOT_AUTHENTICATED)
    return _RULES[operation](claim, target_id)


def authorize(
    claim: IdentityClaim | None,
    operation: Operation,
    target_id: str | None = None,
) -> None:
    """Raise ForbiddenError with the deny reason unless decide() allows."""
    decision = decide(claim, operation, target_id)
    if not decision.allowed:
        raise ForbiddenError(decision.reason or DENY_NOT_OWNER)
