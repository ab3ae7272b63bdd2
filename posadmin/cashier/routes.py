"""
Cashier Routes — the signed-in cashier's terminal.

Transaction counters are placeholders; no sales data is stored.
"""

from fastapi import APIRouter, Depends

from posadmin.auth.context import Viewer
from posadmin.dependencies import get_viewer
from posadmin.utils import success_response
from posadmin.utils.exceptions import NotFoundError

cashier_router = APIRouter()

TERMINAL_STATS = {
    "transactions_today": 0,
    "sales_today": "0.00",
    "terminal_status": "Ready",
}


@cashier_router.get("")
async def terminal(viewer: Viewer = Depends(get_viewer)):
    if viewer.profile is None:
        raise NotFoundError("Profile not found")
    return success_response(
        data={
            "profile": viewer.profile.model_dump(mode="json"),
            "stats": dict(TERMINAL_STATS),
        }
    )
