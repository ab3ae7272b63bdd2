"""
Declarative role guards for route handlers.

Usage:
    @router.get("/accounts")
    @require_role(Role.SUPERADMIN)
    async def list_accounts(request: Request):
        ...
"""

from functools import wraps

from fastapi import HTTPException, status
from starlette.requests import Request

from posadmin.utils.exceptions import AuthenticationError, ForbiddenError
from .roles import Role


def require_role(*roles: Role):
    """
    Decorator that checks the viewer placed on request.state by the
    RoleAccessMiddleware holds one of `roles`.

    Must be applied AFTER the route decorator.
    """

    allowed = frozenset(roles)

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request: Request | None = kwargs.get("request")
            if request is None:
                for arg in args:
                    if isinstance(arg, Request):
                        request = arg
                        break

            if request is None:
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail="Request object not found in handler",
                )

            viewer = getattr(request.state, "viewer", None)
            if viewer is None:
                raise AuthenticationError("Not authenticated")

            if viewer.role not in allowed:
                needed = ", ".join(sorted(r.value for r in allowed))
                raise ForbiddenError(f"Permission denied. Requires one of: {needed}")

            return await func(*args, **kwargs)

        return wrapper

    return decorator
