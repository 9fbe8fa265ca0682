"""Per-resource ownership predicates, independent of route role gates."""

from collections.abc import Iterable

from portal.core.exceptions import Forbidden
from portal.core.roles import Role
from portal.schemas.auth import CurrentUser


def ensure_owner(owner_id: int | None, current_user: CurrentUser) -> None:
    """Raise Forbidden unless current_user owns the resource."""
    if owner_id is None or owner_id != current_user.id:
        raise Forbidden("Only the author can modify this resource")


def ensure_owner_or_roles(
    owner_id: int | None,
    current_user: CurrentUser,
    roles: Iterable[Role],
) -> None:
    """Owners always pass; otherwise the caller's role must be in roles."""
    if owner_id is not None and owner_id == current_user.id:
        return
    if current_user.role in {r.value for r in roles}:
        return
    raise Forbidden("Only the owner or an administrator can modify this resource")
