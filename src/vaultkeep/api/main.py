# VaultKeep - FastAPI Application
#
# Wires the routers, the centralized error view and the no-store middleware.
# Every failure funnels to one handler: status from the error (default 500),
# and error detail only outside production.

import logging
import traceback
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..core.config import get_settings
from ..core.errors import LoginRequired, VaultError
from ..core.logging_setup import configure_logging
from ..db.connection import close_database
from .auth_routes import router as auth_router
from .dependencies import get_services, set_services
from .profile_routes import router as profile_router
from .vault_routes import router as vault_router
from .views import redirect

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(level=settings.log_level, json_output=settings.log_json)
    get_services()
    logger.info(f"VaultKeep {__version__} started ({settings.env})")
    yield
    set_services(None)
    close_database()
    logger.info("VaultKeep stopped")


app = FastAPI(
    title="VaultKeep",
    description="Personal credential vault",
    version=__version__,
    lifespan=lifespan,
)


# Pages carry plaintext secrets, so no response may be cached.
# Pure ASGI middleware (not BaseHTTPMiddleware) so streaming bodies are
# passed through untouched.
class NoStoreMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_no_store(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                for name, value in [
                    (b"cache-control", b"no-store, no-cache, must-revalidate"),
                    (b"pragma", b"no-cache"),
                ]:
                    headers.append((name, value))
                message = {**message, "headers": headers}
            await send(message)

        await self.app(scope, receive, send_with_no_store)


app.add_middleware(NoStoreMiddleware)

app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(vault_router)


# ── Error handling ───────────────────────────────────────────────────

def error_view(status_code: int, message: str, exc: Optional[BaseException] = None) -> JSONResponse:
    """
    Render the single error view.

    Error detail (type + traceback) is only included outside production.
    """
    body = {"view": "error", "message": message, "status": status_code}
    if exc is not None and not get_settings().is_production:
        body["error"] = {
            "type": type(exc).__name__,
            "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
        }
    return JSONResponse(body, status_code=status_code)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    return redirect(exc.location)


@app.exception_handler(VaultError)
async def vault_error_handler(request: Request, exc: VaultError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_view(exc.status_code, exc.message, exc)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    response = error_view(exc.status_code, str(exc.detail), exc)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return error_view(422, "Invalid request", exc)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_view(500, "Internal Server Error", exc)


def start_api_server(host: Optional[str] = None, port: Optional[int] = None):
    """
    Start the HTTP server.

    Args:
        host: Host to bind to (default from settings)
        port: Port to listen on (default from settings)
    """
    settings = get_settings()
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    start_api_server()
