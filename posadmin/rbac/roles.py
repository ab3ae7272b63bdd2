"""
Role definitions.

Roles form a strict ladder:  SUPERADMIN > ADMIN > CASHIER
  - SUPERADMIN manages every account and may create any role
  - ADMIN manages the cashiers it created and may create only cashiers
  - CASHIER manages nothing

A stored role outside this set is read as "unknown" (None), never coerced
into one of the three.
"""

from enum import Enum
from typing import Optional


class Role(str, Enum):
    SUPERADMIN = "SUPERADMIN"
    ADMIN = "ADMIN"
    CASHIER = "CASHIER"


# ── Which roles each role may create ─────────────────────────────
CREATABLE_ROLES: dict[Role, frozenset[Role]] = {
    Role.SUPERADMIN: frozenset({Role.SUPERADMIN, Role.ADMIN, Role.CASHIER}),
    Role.ADMIN: frozenset({Role.CASHIER}),
    Role.CASHIER: frozenset(),
}


def parse_role(value) -> Optional[Role]:
    """Return the Role for `value`, or None when it is absent or unrecognised."""
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value)
    except ValueError:
        return None


def can_create(creator: Optional[Role], target: Role) -> bool:
    """True when an account with role `creator` may create a `target` account."""
    if creator is None:
        return False
    return target in CREATABLE_ROLES[creator]
