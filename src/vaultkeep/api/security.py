# API Security - cookie sessions and the login gate
#
# The session token travels in an HttpOnly cookie. Each request resolves it
# into an explicit RequestContext; gated routes then depend on
# require_principal, which runs AuthGate and short-circuits with a redirect
# to /login before the route body executes.

from fastapi import Depends, Request
from fastapi.responses import Response

from ..core.config import get_settings
from ..core.errors import LoginRequired
from ..vault.models import Allowed, RequestContext, User
from .dependencies import VaultServices, get_services

LOGIN_PATH = "/login"


async def get_request_context(
    request: Request,
    services: VaultServices = Depends(get_services),
) -> RequestContext:
    """
    FastAPI dependency resolving the session cookie.

    Returns:
        RequestContext (anonymous when there is no valid session)
    """
    token = request.cookies.get(get_settings().session_cookie)
    return await services.sessions.resolve(token)


async def require_principal(
    context: RequestContext = Depends(get_request_context),
    services: VaultServices = Depends(get_services),
) -> User:
    """
    FastAPI dependency for gated routes.

    Usage in routes:
        @router.get("/vault")
        async def vault(principal: User = Depends(require_principal)): ...

    Raises:
        LoginRequired: rendered as a 302 to /login (never a 401)
    """
    decision = services.gate.authorize(context)
    if isinstance(decision, Allowed):
        return decision.principal
    raise LoginRequired(LOGIN_PATH)


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie,
        value=token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=get_settings().session_cookie)
