from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from tinyapp.dependencies import get_current_user, get_url_service, require_user
from tinyapp.exceptions import NotAuthenticatedError, OwnershipError
from tinyapp.models.user import User
from tinyapp.schemas.url import (
    URLCreate,
    URLDetail,
    URLResponse,
    URLStats,
    URLUpdate,
    URLUpdateResponse,
)
from tinyapp.services.url_service import URLService

router = APIRouter(prefix="/urls", tags=["urls"])


@router.post("/", response_model=URLResponse, status_code=status.HTTP_201_CREATED)
def create_short_url(
    url_data: URLCreate,
    user: User = Depends(require_user),
    url_service: URLService = Depends(get_url_service)
):
    """Create a new short URL owned by the logged-in user"""
    return url_service.create_short_url(url_data.long_url, user.id)


@router.get("/", response_model=List[URLResponse])
def list_urls(
    user: User = Depends(require_user),
    url_service: URLService = Depends(get_url_service)
):
    """List the logged-in user's short URLs, oldest first"""
    return url_service.urls_for_user(user.id)


def _get_owned_url(short_key: str, user: Optional[User], url_service: URLService):
    # Read access reports a missing link before asking who is looking
    record = url_service.get_url(short_key)
    if user is None:
        raise NotAuthenticatedError()
    if record.owner_id != user.id:
        raise OwnershipError()
    return record


@router.get("/{short_key}", response_model=URLDetail)
def get_url_info(
    short_key: str,
    user: Optional[User] = Depends(get_current_user),
    url_service: URLService = Depends(get_url_service)
):
    """Get a short URL with its visit counters and visit log (owner only)"""
    record = _get_owned_url(short_key, user, url_service)
    visits = url_service.get_visit_stats(short_key)
    return URLDetail.model_validate({**record.model_dump(), "visits": visits.model_dump()})


@router.get("/{short_key}/stats", response_model=URLStats)
def get_url_stats(
    short_key: str,
    user: Optional[User] = Depends(get_current_user),
    url_service: URLService = Depends(get_url_service)
):
    """Get visit statistics for a short URL (owner only)"""
    record = _get_owned_url(short_key, user, url_service)
    visits = url_service.get_visit_stats(short_key)
    return URLStats(
        short_key=record.short_key,
        total=visits.total,
        unique=visits.unique,
        created_at=record.created_at,
        last_visited_at=record.visit_log[-1].timestamp if record.visit_log else None,
    )


@router.put("/{short_key}", response_model=URLUpdateResponse)
def update_url(
    short_key: str,
    url_data: URLUpdate,
    user: Optional[User] = Depends(get_current_user),
    url_service: URLService = Depends(get_url_service)
):
    """Point a short URL somewhere else (owner only)"""
    url_service.require_owner(user.id if user else None, short_key)
    updated = url_service.update_short_url(short_key, url_data.long_url)
    record = url_service.get_url(short_key)
    return URLUpdateResponse.model_validate({**record.model_dump(), "updated": updated})


@router.delete("/{short_key}", status_code=status.HTTP_204_NO_CONTENT)
def delete_url(
    short_key: str,
    user: Optional[User] = Depends(get_current_user),
    url_service: URLService = Depends(get_url_service)
):
    """Delete a short URL (owner only)"""
    url_service.require_owner(user.id if user else None, short_key)
    url_service.delete_short_url(short_key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
