"""
Profile Routes — self-service for the signed-in account.

Endpoints:
    GET    /    Own profile (already loaded by the middleware)
    PUT    /    Change own fullname
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from posadmin.accounts.service import AccountService
from posadmin.auth.context import Viewer
from posadmin.dependencies import get_account_service, get_viewer
from posadmin.utils import success_response
from posadmin.utils.exceptions import NotFoundError

profile_router = APIRouter()


class UpdateProfileRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    fullname: str = Field(..., min_length=1, max_length=100)


@profile_router.get("")
async def get_my_profile(viewer: Viewer = Depends(get_viewer)):
    if viewer.profile is None:
        raise NotFoundError("Profile not found")
    data = viewer.profile.model_dump(mode="json")
    data["email"] = viewer.identity.email
    return success_response(data=data)


@profile_router.put("")
async def update_my_profile(
    body: UpdateProfileRequest,
    viewer: Viewer = Depends(get_viewer),
    svc: AccountService = Depends(get_account_service),
):
    """Role, status and creator cannot be changed here."""
    profile = await svc.rename_self(viewer, body.fullname)
    return success_response(data=profile.model_dump(mode="json"), message="Profile updated")
