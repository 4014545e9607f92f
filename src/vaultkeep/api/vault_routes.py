# Vault API - password entry pages
#
# Every route here is gated: require_principal redirects anonymous
# requests to /login before the route body runs, so a denied request
# never reaches the vault.
#
# Ownership: list, search, view, update and delete only ever see the
# principal's own entries. Another user's entry id answers 404.

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request

from ..core.errors import NotFound
from ..vault.models import RequestContext, User
from .dependencies import VaultServices, get_services
from .forms import read_form
from .security import get_request_context, require_principal
from .views import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["vault"])


@router.get("/create-password")
async def create_password_form(
    principal: User = Depends(require_principal),
    context: RequestContext = Depends(get_request_context),
):
    """Creation form."""
    return render("create-password", context)


@router.post("/create-password")
async def create_password(
    request: Request,
    principal: User = Depends(require_principal),
    services: VaultServices = Depends(get_services),
):
    """
    Create an entry owned by the principal and redirect to its page.

    Form fields: name, username, password, description, url.
    """
    fields = await read_form(request)
    entry = await services.vault.create(principal, fields)
    return redirect(f"/password/{entry.id}")


@router.get("/delete-password/")
async def delete_password_unbound(
    principal: User = Depends(require_principal),
):
    """
    Legacy delete link that never carries an entry id.

    Kept as an inert route: it deletes nothing and always lands on /vault.
    Real deletion goes through /delpass/{password_id}.
    """
    logger.warning(f"Ignored delete request without entry id (user {principal.id})")
    return redirect("/vault")


# "." and ".." are dot segments: clients collapse them out of a redirect
# target even when percent-encoded, so those terms are answered in place.
DOT_SEGMENTS = (".", "..")


async def _search_view(services: VaultServices, principal: User, context: RequestContext, term: str):
    results = await services.search.query(principal, term)
    return render(
        "search",
        context,
        searchQuery=term,
        searchResults=[entry.to_dict() for entry in results],
    )


@router.post("/search")
async def submit_search(
    request: Request,
    principal: User = Depends(require_principal),
    context: RequestContext = Depends(get_request_context),
    services: VaultServices = Depends(get_services),
):
    """Redirect a search form post to its canonical /search/<term> URL."""
    form = await read_form(request)
    term = form.get("searchQuery") or ""
    if term == "":
        return redirect("/vault")
    if term in DOT_SEGMENTS:
        return await _search_view(services, principal, context, term)
    return redirect("/search/" + quote(term, safe=""))


@router.get("/search/{search_query:path}")
async def search_results(
    search_query: str,
    principal: User = Depends(require_principal),
    context: RequestContext = Depends(get_request_context),
    services: VaultServices = Depends(get_services),
):
    """Entries whose name equals the term exactly."""
    if search_query == "":
        # /search/ carries no term and is not a search page
        raise NotFound()
    return await _search_view(services, principal, context, search_query)


@router.get("/password/{password_id}")
async def view_password(
    password_id: str,
    principal: User = Depends(require_principal),
    context: RequestContext = Depends(get_request_context),
    services: VaultServices = Depends(get_services),
):
    """Entry detail."""
    entry = await services.vault.get(principal, password_id)
    return render("password", context, password=entry.to_dict())


@router.get("/password/{password_id}/update")
async def update_password_form(
    password_id: str,
    principal: User = Depends(require_principal),
    context: RequestContext = Depends(get_request_context),
    services: VaultServices = Depends(get_services),
):
    """Edit form, pre-filled with the current entry."""
    entry = await services.vault.get(principal, password_id)
    return render("update_password", context, password=entry.to_dict())


@router.post("/password/{password_id}/update")
async def update_password(
    password_id: str,
    request: Request,
    principal: User = Depends(require_principal),
    services: VaultServices = Depends(get_services),
):
    """Replace every editable field, then show the entry."""
    fields = await read_form(request)
    await services.vault.update(principal, password_id, fields)
    return redirect(f"/password/{password_id}")


@router.get("/password/{password_id}/delete")
async def confirm_password_deletion(
    password_id: str,
    principal: User = Depends(require_principal),
    context: RequestContext = Depends(get_request_context),
    services: VaultServices = Depends(get_services),
):
    """Deletion confirmation page."""
    entry = await services.vault.get(principal, password_id)
    return render("confirm_password_deletion", context, password=entry.to_dict())


@router.get("/delpass/{password_id}")
async def delete_password(
    password_id: str,
    principal: User = Depends(require_principal),
    services: VaultServices = Depends(get_services),
):
    """Delete the entry and go back to the vault."""
    await services.vault.delete(principal, password_id)
    return redirect("/vault")


@router.get("/vault")
async def vault(
    principal: User = Depends(require_principal),
    context: RequestContext = Depends(get_request_context),
    services: VaultServices = Depends(get_services),
):
    """The principal's entries."""
    entries = await services.vault.list(principal)
    return render("vault", context, passwords=[entry.to_dict() for entry in entries])
