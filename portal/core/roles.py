"""Account roles and the named role sets that gate routes."""

from enum import Enum


class Role(str, Enum):
    USER = "user"
    DEV_TESTER = "dev_tester"
    DEVELOPER = "developer"
    STAFF = "staff"
    ADMIN = "admin"
    CEO = "ceo"


# Route access is set membership, not a hierarchy walk.
STAFF_ROLES = frozenset({Role.DEV_TESTER, Role.DEVELOPER, Role.STAFF, Role.ADMIN, Role.CEO})
DEVELOPER_ROLES = frozenset({Role.DEVELOPER, Role.ADMIN, Role.CEO})
ADMIN_ROLES = frozenset({Role.ADMIN, Role.CEO})

# Privilege rank; only used when one account assigns a role to another.
ROLE_RANK: dict[Role, int] = {
    Role.USER: 0,
    Role.DEV_TESTER: 1,
    Role.DEVELOPER: 2,
    Role.STAFF: 3,
    Role.ADMIN: 4,
    Role.CEO: 5,
}


def role_rank(role: str) -> int:
    """Rank for a stored role string; unknown roles rank below everything."""
    try:
        return ROLE_RANK[Role(role)]
    except ValueError:
        return -1
