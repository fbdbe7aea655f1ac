from typing import Optional

from fastapi import APIRouter, Depends

from edge_api.routers.deps import require_admin
from edge_api.services.net_worth_service import NetWorthService
from edge_api.services.system_tools_service import SystemToolsService

router = APIRouter(tags=["system"])
_tools = SystemToolsService()
_net_worth = NetWorthService()


@router.get("/admin-system-tools")
def system_overview(admin: str = Depends(require_admin)):
    return _tools.overview()


@router.post("/admin-system-tools")
def system_action(payload: dict, admin: str = Depends(require_admin)):
    message = _tools.run_action(payload.get("action"), actor=admin)
    return {"success": True, "message": message}


@router.get("/admin-net-worth")
def net_worth(userId: Optional[str] = None, admin: str = Depends(require_admin)):
    return _net_worth.summary(userId)
