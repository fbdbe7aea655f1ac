from fastapi import APIRouter, Depends

from edge_api.routers.deps import require_admin
from edge_api.services.support_service import SupportService

router = APIRouter(tags=["support"])
_service = SupportService()


@router.get("/admin-support")
def list_tickets(admin: str = Depends(require_admin)):
    return _service.list_tickets()


@router.post("/admin-support")
def resolve_ticket(payload: dict, admin: str = Depends(require_admin)):
    _service.resolve(payload.get("id"), actor=admin)
    return {"success": True}
