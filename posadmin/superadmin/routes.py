"""
Superadmin Routes — system overview and management of every account.

Endpoints:
    GET    /                              Profile counts per role
    GET    /accounts                      List all accounts (search + pages)
    POST   /accounts                      Create an account of any role
    PUT    /accounts/{id}                 Change fullname and/or role
    PATCH  /accounts/{id}/toggle-active   Activate / deactivate
    DELETE /accounts/{id}                 Delete profile + identity
"""

from fastapi import APIRouter, Depends, Query, Request

from posadmin.accounts.listing import ListingQuery
from posadmin.accounts.schemas import CreateAccountRequest, UpdateAccountRequest
from posadmin.accounts.service import AccountScope, AccountService
from posadmin.auth.context import Viewer
from posadmin.config import settings
from posadmin.dependencies import get_account_service, get_viewer
from posadmin.rbac.decorators import require_role
from posadmin.rbac.roles import Role
from posadmin.utils import success_response

superadmin_router = APIRouter()

SCOPE = AccountScope.ALL


@superadmin_router.get("")
@require_role(Role.SUPERADMIN)
async def overview(
    request: Request,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    counts = await svc.role_counts()
    return success_response(
        data={"fullname": viewer.profile.fullname, "counts": counts}
    )


@superadmin_router.get("/accounts")
@require_role(Role.SUPERADMIN)
async def list_accounts(
    request: Request,
    q: str = Query(""),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=100),
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    """Every profile, newest first, filtered by fullname."""
    query = ListingQuery(search=q, page=page, page_size=page_size)
    result = await svc.list_accounts(viewer, SCOPE, query)
    return success_response(data=result.to_dict())


@superadmin_router.post("/accounts")
@require_role(Role.SUPERADMIN)
async def create_account(
    request: Request,
    body: CreateAccountRequest,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    profile = await svc.create_account(
        viewer,
        SCOPE,
        fullname=body.fullname,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    return success_response(
        data=profile.model_dump(mode="json"), message="Account created", code=201
    )


@superadmin_router.put("/accounts/{profile_id}")
@require_role(Role.SUPERADMIN)
async def update_account(
    request: Request,
    profile_id: str,
    body: UpdateAccountRequest,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    profile = await svc.update_account(
        viewer, SCOPE, profile_id, fullname=body.fullname, role=body.role
    )
    return success_response(data=profile.model_dump(mode="json"), message="Account updated")


@superadmin_router.patch("/accounts/{profile_id}/toggle-active")
@require_role(Role.SUPERADMIN)
async def toggle_active(
    request: Request,
    profile_id: str,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    profile = await svc.toggle_active(viewer, SCOPE, profile_id)
    return success_response(
        data=profile.model_dump(mode="json"), message="Account status updated"
    )


@superadmin_router.delete("/accounts/{profile_id}")
@require_role(Role.SUPERADMIN)
async def delete_account(
    request: Request,
    profile_id: str,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    await svc.delete_account(viewer, SCOPE, profile_id)
    return success_response(data={"id": profile_id}, message="User deleted successfully")
