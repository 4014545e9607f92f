# API Views - JSON view documents
#
# Pages are returned as {"view": <name>, ...} documents; the client decides
# how to draw them. Redirects use 302, so browsers follow form posts with a GET.

from typing import Any, Optional

from fastapi.responses import JSONResponse, RedirectResponse

from ..vault.models import RequestContext


def render(
    view: str,
    context: Optional[RequestContext] = None,
    status_code: int = 200,
    **data: Any,
) -> JSONResponse:
    """
    Build a view document.

    Args:
        view: View name (e.g. "vault", "password")
        context: Request context; adds loggedIn/user when given
        status_code: HTTP status
        **data: View payload
    """
    body = {"view": view}
    if context is not None:
        body["loggedIn"] = context.logged_in
        body["user"] = context.principal.to_public() if context.principal else None
    body.update(data)
    return JSONResponse(body, status_code=status_code)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=302)
