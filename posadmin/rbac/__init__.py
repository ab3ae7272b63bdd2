from .roles import Role, CREATABLE_ROLES, parse_role, can_create
from .policy import AccessDecision, evaluate_access, home_path, is_public_path
from .decorators import require_role

__all__ = [
    "Role",
    "CREATABLE_ROLES",
    "parse_role",
    "can_create",
    "AccessDecision",
    "evaluate_access",
    "home_path",
    "is_public_path",
    "require_role",
]
