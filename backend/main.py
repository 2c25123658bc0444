# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
FastAPI application factory.

Responsibilities
----------------
* Instantiate the FastAPI app and the process-wide AuthService
  (session registry + bootstrap-admin flags) on ``app.state``.
* Register CORS and request-logging middleware.
* Translate account-layer errors (``core.errors``) into HTTP responses.
* Mount the feature routers (auth, admin).
* Mount the start-page frontend when it is present, so a single
  ``uvicorn`` process serves both the API and the HTML/CSS/JS.
* Expose a /health endpoint for container liveness checks.
"""

import time
from datetime import timedelta
from pathlib import Path

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from auth.router import router as auth_router
from auth.service import AuthService
from auth.sessions import SessionRegistry
from admin.router import router as admin_router
from core.config import settings
from core.errors import AuthError, StorageUnavailable
from core.logger import logger


def build_auth_service() -> AuthService:
    return AuthService(
        SessionRegistry(timedelta(minutes=settings.session_expire_minutes)),
        registration_enabled=settings.user_registration_enabled,
    )


app = FastAPI(title="Start Page", version="1.0.0")
app.state.auth_service = build_auth_service()

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
# Credentials must be allowed or the browser drops the session cookie.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Logs every inbound request: method, path, client IP, status, latency.
# Bodies (passwords!) and cookies are never echoed.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            client_ip,
            response.status_code,
            elapsed_ms,
        )
        return response


app.add_middleware(_RequestLogMiddleware)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


@app.exception_handler(AuthError)
async def _auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    if isinstance(exc, StorageUnavailable):
        logger.error("%s %s -> %s", request.method, request.url.path, type(exc).__name__)
    else:
        logger.warning(
            "%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.detail
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(admin_router)

# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.on_event("startup")
async def _on_startup():
    logger.info(
        "Start Page service starting up (registration %s)",
        "enabled" if settings.user_registration_enabled else "disabled",
    )


@app.on_event("shutdown")
async def _on_shutdown():
    logger.info("Start Page service shutting down")


@app.get("/health")
def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Static files – frontend
# ---------------------------------------------------------------------------
# Mounted *after* the API routers so that /auth/* and /admin/* are handled
# by FastAPI first.
_FRONTEND_DIR = Path(__file__).resolve().parent.parent / "frontend"

if _FRONTEND_DIR.is_dir():
    app.mount("/", StaticFiles(directory=str(_FRONTEND_DIR), html=True), name="frontend")
