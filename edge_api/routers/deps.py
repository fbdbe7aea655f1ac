from __future__ import annotations

from fastapi import Request

from edge_api.core.security import bearer_token
from edge_api.services.admin_auth_service import AdminAuthService

_auth = AdminAuthService()


def require_admin(request: Request) -> str:
    """FastAPI dependency returning the authenticated admin e-mail."""
    return _auth.authenticate(bearer_token(request.headers.get("authorization")))
