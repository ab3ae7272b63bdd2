"""
Admin Routes — an admin's own cashiers.

Only cashiers whose created_by is the signed-in admin are visible here.

Endpoints:
    GET    /                              Cashier totals for this admin
    GET    /cashiers                      List own cashiers (search + pages)
    POST   /cashiers                      Create a cashier
    PUT    /cashiers/{id}                 Rename a cashier
    PATCH  /cashiers/{id}/toggle-active   Activate / deactivate
    DELETE /cashiers/{id}                 Delete a cashier
"""

from fastapi import APIRouter, Depends, Query, Request

from posadmin.accounts.listing import ListingQuery
from posadmin.accounts.schemas import CreateCashierRequest, UpdateCashierRequest
from posadmin.accounts.service import AccountScope, AccountService
from posadmin.auth.context import Viewer
from posadmin.config import settings
from posadmin.dependencies import get_account_service, get_viewer
from posadmin.rbac.decorators import require_role
from posadmin.rbac.roles import Role
from posadmin.utils import success_response

admin_router = APIRouter()

SCOPE = AccountScope.OWN_CASHIERS


@admin_router.get("")
@require_role(Role.ADMIN, Role.SUPERADMIN)
async def overview(
    request: Request,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    counts = await svc.cashier_counts(viewer)
    return success_response(
        data={
            "fullname": viewer.profile.fullname,
            "role": viewer.role.value,
            "cashiers": counts,
        }
    )


@admin_router.get("/cashiers")
@require_role(Role.ADMIN, Role.SUPERADMIN)
async def list_cashiers(
    request: Request,
    q: str = Query(""),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=100),
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    query = ListingQuery(search=q, page=page, page_size=page_size)
    result = await svc.list_accounts(viewer, SCOPE, query)
    return success_response(data=result.to_dict())


@admin_router.post("/cashiers")
@require_role(Role.ADMIN, Role.SUPERADMIN)
async def create_cashier(
    request: Request,
    body: CreateCashierRequest,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    """Create a cashier owned by the signed-in admin."""
    profile = await svc.create_account(
        viewer,
        SCOPE,
        fullname=body.fullname,
        email=body.email,
        password=body.password,
        role=Role.CASHIER,
    )
    return success_response(
        data=profile.model_dump(mode="json"),
        message="Cashier created successfully!",
        code=201,
    )


@admin_router.put("/cashiers/{profile_id}")
@require_role(Role.ADMIN, Role.SUPERADMIN)
async def update_cashier(
    request: Request,
    profile_id: str,
    body: UpdateCashierRequest,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    profile = await svc.update_account(viewer, SCOPE, profile_id, fullname=body.fullname)
    return success_response(data=profile.model_dump(mode="json"), message="Cashier updated")


@admin_router.patch("/cashiers/{profile_id}/toggle-active")
@require_role(Role.ADMIN, Role.SUPERADMIN)
async def toggle_cashier(
    request: Request,
    profile_id: str,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    profile = await svc.toggle_active(viewer, SCOPE, profile_id)
    return success_response(
        data=profile.model_dump(mode="json"),
        message="Cashier status updated successfully!",
    )


@admin_router.delete("/cashiers/{profile_id}")
@require_role(Role.ADMIN, Role.SUPERADMIN)
async def delete_cashier(
    request: Request,
    profile_id: str,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    await svc.delete_account(viewer, SCOPE, profile_id)
    return success_response(
        data={"id": profile_id}, message="Cashier deleted successfully!"
    )
