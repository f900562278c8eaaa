from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from tinyapp.dependencies import ensure_visitor_id, get_url_service
from tinyapp.services.url_service import URLService

router = APIRouter(tags=["redirect"])


@router.get("/u/{short_key}")
def redirect_to_long_url(
    short_key: str,
    visitor_id: str = Depends(ensure_visitor_id),
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.

    Flow:
    1. Log the visit against the session's visitor token
    2. Redirect to the long URL

    Unknown keys raise NotFoundError, which the app turns into a 404.
    Anyone can follow a short link; no login needed.
    """
    long_url = url_service.resolve(short_key, visitor_id)
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
