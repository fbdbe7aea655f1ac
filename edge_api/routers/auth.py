from fastapi import APIRouter, Request

from edge_api.core.security import bearer_token
from edge_api.services.admin_auth_service import AdminAuthService

router = APIRouter(prefix="/admin-auth", tags=["auth"])
_service = AdminAuthService()


@router.post("/login")
def login(payload: dict):
    token, expires_at = _service.login(payload.get("email"), payload.get("password"))
    return {"token": token, "expires_at": expires_at.isoformat()}


@router.post("/logout")
def logout(request: Request):
    _service.logout(bearer_token(request.headers.get("authorization")))
    return {"success": True}
