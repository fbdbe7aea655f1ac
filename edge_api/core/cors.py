from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


class EdgeCorsMiddleware(BaseHTTPMiddleware):
    """Answer preflight requests and stamp the CORS headers on every response."""

    async def dispatch(self, request, call_next):
        if request.method == "OPTIONS":
            return Response("ok", status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
