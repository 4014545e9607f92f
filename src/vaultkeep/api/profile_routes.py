# Profile API - public user profiles
#
# No login required. An unknown username renders the profile view with
# no data and a 404 status instead of going to the error page.

from fastapi import APIRouter, Depends

from ..core.errors import NotFound
from ..vault.models import RequestContext
from .dependencies import VaultServices, get_services
from .security import get_request_context
from .views import render

router = APIRouter(tags=["profile"])


@router.get("/profile/{profile_username}")
async def profile(
    profile_username: str,
    context: RequestContext = Depends(get_request_context),
    services: VaultServices = Depends(get_services),
):
    try:
        user = await services.directory.find_by_username(profile_username)
    except NotFound:
        return render(
            "profile",
            context,
            status_code=404,
            profileData=None,
            message=f"No user named {profile_username}",
        )
    return render("profile", context, profileData=user.to_public())
