from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from config import Settings, get_settings
from api.errors import http_error_handler
from api.router import api_router
from services.store import JsonFileMealStore, MealStore

_LOG = logging.getLogger(__name__)


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Refuse cross-origin requests from anything outside the allow-list."""

    def __init__(self, app, allowed: list[str]) -> None:
        super().__init__(app)
        self.allowed = set(allowed)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin is not None and origin not in self.allowed:
            _LOG.warning("Rejected request from origin %s", origin)
            return JSONResponse({"error": "Origin not allowed"}, status_code=403)
        return await call_next(request)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    settings: Settings | None = None,
    store: MealStore | None = None,
) -> FastAPI:
    s = settings or get_settings()
    configure_logging(s.log_level)

    app = FastAPI(title="Meal API", version="1.0.0")
    app.state.store = store if store is not None else JsonFileMealStore(s.data_file)

    # CORS for the allow-list; the guard (outermost) turns everyone else away
    app.add_middleware(
        CORSMiddleware,
        allow_origins=s.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginGuardMiddleware, allowed=s.cors_origins)

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.include_router(api_router)

    # static assets last so API routes win on overlapping paths
    if s.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=s.public_dir), name="public")
    else:
        _LOG.info("No public directory at %s, static assets disabled", s.public_dir)

    return app


app = create_app()


class MealServer(uvicorn.Server):
    """uvicorn server that announces itself once the socket is listening."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if not self.should_exit:
            _LOG.info("Server is NOW running at http://localhost:%d", self.config.port)


def run(settings: Settings | None = None) -> None:
    s = settings or get_settings()
    config = uvicorn.Config(app, host=s.host, port=s.port, log_level=s.log_level.lower())
    MealServer(config).run()


if __name__ == "__main__":
    run()
