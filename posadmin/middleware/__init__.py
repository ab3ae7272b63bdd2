"""
Role access middleware.

Runs on every request:
  1. Public paths pass straight through
  2. Resolve the session token (cookie, then Bearer header) to an identity
  3. Read the identity's profile once (role + is_active)
  4. Set request.state.viewer
  5. Apply the path policy: continue, or redirect
"""

from typing import Optional

from pymongo.errors import PyMongoError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse

from posadmin.auth.context import Viewer
from posadmin.auth.service import IdentityProvider
from posadmin.config import settings
from posadmin.rbac.policy import evaluate_access, is_public_path
from posadmin.utils import Logger, error_response
from posadmin.utils.exceptions import ServiceUnavailableError

logger = Logger("access")


def extract_token(request: Request) -> Optional[str]:
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token

    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


class RoleAccessMiddleware(BaseHTTPMiddleware):
    """Single middleware that resolves the viewer and enforces the path policy."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # ── Preflight + public routes ────────────────────────────
        if request.method == "OPTIONS" or is_public_path(path):
            return await call_next(request)

        # ── Viewer ───────────────────────────────────────────────
        try:
            viewer = await self._resolve_viewer(request)
        except PyMongoError as exc:
            logger.error(f"Viewer lookup failed on {path}: {exc}")
            unavailable = ServiceUnavailableError()
            return error_response(unavailable.detail, code=unavailable.status_code)

        request.state.viewer = viewer

        # ── Policy ───────────────────────────────────────────────
        decision = evaluate_access(
            path,
            viewer.role if viewer else None,
            authenticated=viewer is not None,
        )
        if not decision.allowed:
            logger.debug(f"{request.method} {path} -> {decision.redirect_to}")
            return RedirectResponse(url=decision.redirect_to)

        return await call_next(request)

    @staticmethod
    async def _resolve_viewer(request: Request) -> Optional[Viewer]:
        identities = IdentityProvider(request.app.state.identity_store)
        identity = await identities.get_user(extract_token(request))
        if identity is None:
            return None

        profile = await request.app.state.profile_store.get(identity.id)
        if profile is not None and not profile.is_active:
            logger.info(f"Session of deactivated account {identity.id} refused")
            return None
        return Viewer(identity=identity, profile=profile)
