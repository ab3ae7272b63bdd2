"""
Path-based access policy.

Maps (path, role, authenticated?) to either "allow" or "redirect to X".
The evaluator is a pure function; the middleware supplies the role.

Evaluation order (first match wins):
  1. public paths            → allow
  2. no identity             → /auth/login
  3. /dashboard/superadmin*  → SUPERADMIN only
  4. /dashboard/admin*       → ADMIN, SUPERADMIN
  5. /dashboard/cashier*     → CASHIER, ADMIN, SUPERADMIN
  6. /dashboard, /protected  → role's home
  7. anything else           → allow
"""

from dataclasses import dataclass
from typing import Optional

from .roles import Role


LOGIN_PATH = "/auth/login"
SUPERADMIN_HOME = "/dashboard/superadmin"
ADMIN_HOME = "/dashboard/admin"
CASHIER_HOME = "/dashboard/cashier"

# Bare entry points that only ever redirect
ENTRY_PATHS = frozenset({"/dashboard", "/protected"})

# Paths that skip all identity / role checks
PUBLIC_PREFIXES = (
    "/auth",
    "/static",
)
PUBLIC_PATHS = frozenset(
    {
        "/",
        "/health",
        "/favicon.ico",
        "/openapi.json",
        "/api/docs",
        "/api/docs/oauth2-redirect",
    }
)
PUBLIC_SUFFIXES = (".svg",)


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of a policy evaluation: allow, or redirect to `redirect_to`."""

    allowed: bool
    redirect_to: Optional[str] = None

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(allowed=True)

    @classmethod
    def redirect(cls, target: str) -> "AccessDecision":
        return cls(allowed=False, redirect_to=target)


def is_public_path(path: str) -> bool:
    if path in PUBLIC_PATHS:
        return True
    if path.startswith(PUBLIC_PREFIXES):
        return True
    return path.endswith(PUBLIC_SUFFIXES)


def home_path(role: Optional[Role]) -> str:
    """Dashboard a role lands on. Unknown roles land on the cashier area."""
    if role is Role.SUPERADMIN:
        return SUPERADMIN_HOME
    if role is Role.ADMIN:
        return ADMIN_HOME
    return CASHIER_HOME


def evaluate_access(
    path: str,
    role: Optional[Role],
    authenticated: bool,
) -> AccessDecision:
    """Decide whether a request for `path` proceeds or is redirected."""
    if is_public_path(path):
        return AccessDecision.allow()

    if not authenticated:
        return AccessDecision.redirect(LOGIN_PATH)

    if path.startswith(SUPERADMIN_HOME):
        if role is Role.SUPERADMIN:
            return AccessDecision.allow()
        if role is Role.ADMIN:
            return AccessDecision.redirect(ADMIN_HOME)
        # CASHIER and unknown both fall to the least privileged area
        return AccessDecision.redirect(CASHIER_HOME)

    if path.startswith(ADMIN_HOME):
        if role in (Role.ADMIN, Role.SUPERADMIN):
            return AccessDecision.allow()
        return AccessDecision.redirect(CASHIER_HOME)

    if path.startswith(CASHIER_HOME):
        if role is None:
            # No tier below cashier to fall back to
            return AccessDecision.redirect(LOGIN_PATH)
        return AccessDecision.allow()

    if path in ENTRY_PATHS:
        return AccessDecision.redirect(home_path(role))

    return AccessDecision.allow()
