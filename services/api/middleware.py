"""
HTTP middleware for the users API.

Two independent, stateless wrappers, installed outer-to-inner as
CORS -> JSON content type -> router.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Set permissive CORS headers on every response.

    OPTIONS requests on any path are answered here with 204 and an empty
    body; the wrapped application never sees them.
    """

    def __init__(
        self,
        app: ASGIApp,
        allow_origin: str = "*",
        allow_methods: str = "GET, POST, PUT, DELETE, OPTIONS",
        allow_headers: str = "Content-Type, Authorization",
    ) -> None:
        super().__init__(app)
        self.cors_headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": allow_methods,
            "Access-Control-Allow-Headers": allow_headers,
        }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)

        response.headers.update(self.cors_headers)
        return response


class JSONContentTypeMiddleware(BaseHTTPMiddleware):
    """Label every response as application/json."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers["Content-Type"] = "application/json"
        return response
