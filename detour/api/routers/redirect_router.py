from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from detour.api.deps import get_detourer
from detour.api.services.redirect_service import Detourer

router = APIRouter(tags=["redirect"])


@router.api_route("/{legacy_path:path}", methods=["GET", "HEAD"], include_in_schema=False)
def detour(
    legacy_path: str,
    request: Request,
    detourer: Detourer = Depends(get_detourer),
):
    """
    Redirect any request for the legacy catalogue to the matching Primo page.

    Every request gets a redirect; requests that cannot be translated go
    to the Primo search page.
    """
    redirect = detourer.classify(request.url.path, request.url.query)
    return RedirectResponse(redirect.url, status_code=redirect.status_code)
