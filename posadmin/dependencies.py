"""
Request-scoped dependencies.

Stores live on `app.state` (set by create_app); services are built per
request from them. The viewer comes from RoleAccessMiddleware.
"""

from fastapi import Request

from posadmin.accounts.service import AccountService
from posadmin.accounts.store import ProfileStore
from posadmin.auth.context import Viewer
from posadmin.auth.service import AuthService, IdentityProvider
from posadmin.utils.exceptions import AuthenticationError


def get_profile_store(request: Request) -> ProfileStore:
    return request.app.state.profile_store


def get_identity_provider(request: Request) -> IdentityProvider:
    return IdentityProvider(request.app.state.identity_store)


def get_account_service(request: Request) -> AccountService:
    return AccountService(get_profile_store(request), get_identity_provider(request))


def get_auth_service(request: Request) -> AuthService:
    return AuthService(get_identity_provider(request), get_profile_store(request))


def get_viewer(request: Request) -> Viewer:
    viewer = getattr(request.state, "viewer", None)
    if viewer is None:
        raise AuthenticationError("Not authenticated")
    return viewer
