"""
Auth Routes — public sign-in / sign-up / sign-out.

Endpoints:
    GET    /login      Sign-in form metadata
    POST   /login      Authenticate, set the session cookie, return the token
    POST   /sign-up    Self registration (default role, no creator)
    POST   /logout     Clear the session cookie
"""

from fastapi import APIRouter, Depends

from posadmin.accounts.service import AccountService
from posadmin.config import settings
from posadmin.dependencies import get_account_service, get_auth_service
from posadmin.rbac.roles import Role, parse_role
from posadmin.utils import success_response
from posadmin.utils.exceptions import ForbiddenError
from .schemas import LoginRequest, SignUpRequest
from .service import AuthService

auth_router = APIRouter()


@auth_router.get("/login")
async def login_form():
    return success_response(
        data={
            "fields": ["email", "password"],
            "sign_up_enabled": settings.allow_self_signup,
        },
        message="Sign in",
    )


@auth_router.post("/login")
async def login(
    body: LoginRequest,
    svc: AuthService = Depends(get_auth_service),
):
    """Authenticate user and return JWT + profile data."""
    result = await svc.authenticate(email=body.email, password=body.password)
    response = success_response(data=result.model_dump(), message="Login successful")
    response.set_cookie(
        key=settings.session_cookie_name,
        value=result.access_token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return response


@auth_router.post("/sign-up")
async def sign_up(
    body: SignUpRequest,
    svc: AccountService = Depends(get_account_service),
):
    if not settings.allow_self_signup:
        raise ForbiddenError("Self registration is disabled")

    role = parse_role(settings.default_signup_role) or Role.CASHIER
    profile = await svc.register(
        fullname=body.fullname,
        email=body.email,
        password=body.password,
        role=role,
    )
    return success_response(
        data=profile.model_dump(mode="json"), message="Account created", code=201
    )


@auth_router.post("/logout")
async def logout():
    response = success_response(message="Signed out")
    response.delete_cookie(settings.session_cookie_name)
    return response
