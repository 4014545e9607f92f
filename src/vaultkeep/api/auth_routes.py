# Auth API - index, signup, login, logout
#
# These routes are public. Successful signup/login opens a session and
# sets the session cookie; logout revokes it.

from fastapi import APIRouter, Depends, Request

from ..core.config import get_settings
from ..vault.models import RequestContext
from .dependencies import VaultServices, get_services
from .forms import read_form
from .security import clear_session_cookie, get_request_context, set_session_cookie
from .views import redirect, render

router = APIRouter(tags=["auth"])


@router.get("/")
async def index(context: RequestContext = Depends(get_request_context)):
    return render("index", context)


@router.get("/signup")
async def signup_form(context: RequestContext = Depends(get_request_context)):
    return render("signup", context)


@router.post("/signup")
async def signup(
    request: Request,
    services: VaultServices = Depends(get_services),
):
    """
    Register an account and log it in.

    Form fields: username, password, display_name (optional).
    """
    form = await read_form(request)
    user = await services.accounts.register(
        username=form.get("username", ""),
        password=form.get("password", ""),
        display_name=form.get("display_name"),
    )
    token = await services.sessions.open_session(user)

    response = redirect("/vault")
    set_session_cookie(response, token)
    return response


@router.get("/login")
async def login_form(context: RequestContext = Depends(get_request_context)):
    return render("login", context)


@router.post("/login")
async def login(
    request: Request,
    services: VaultServices = Depends(get_services),
):
    """
    Check credentials, open a session and go to the vault.

    Bad credentials re-render the login view with 401.
    """
    form = await read_form(request)
    user = await services.accounts.authenticate(
        form.get("username", ""), form.get("password", "")
    )
    if user is None:
        return render(
            "login",
            RequestContext.anonymous(),
            status_code=401,
            error="Invalid username or password",
        )

    token = await services.sessions.open_session(user)
    response = redirect("/vault")
    set_session_cookie(response, token)
    return response


@router.get("/logout")
async def logout(
    request: Request,
    services: VaultServices = Depends(get_services),
):
    await services.sessions.close_session(
        request.cookies.get(get_settings().session_cookie)
    )
    response = redirect("/")
    clear_session_cookie(response)
    return response
