# api/errors.py
"""
Error rendering shared by every route.

* ``HTTPException``  → ``{"error": detail}`` with the exception's status.
* anything else      → logged with traceback, 500 ``{"error": ...}``.
  POST requests answer in plain text instead, as they always have.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Coroutine

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

_LOG = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal Server Error"


class GuardedRoute(APIRoute):
    """Route class that turns unexpected handler failures into a 500."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def guarded(request: Request) -> Response:
            try:
                return await handler(request)
            except (StarletteHTTPException, RequestValidationError):
                raise
            except Exception:
                _LOG.exception(
                    "Error handling request %s %s", request.method, request.url.path
                )
                if request.method == "POST":
                    return PlainTextResponse(INTERNAL_ERROR, status_code=500)
                return JSONResponse({"error": INTERNAL_ERROR}, status_code=500)

        return guarded


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )
