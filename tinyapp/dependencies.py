"""
FastAPI dependencies for dependency injection.

This module provides the process-wide stores and the services built on them,
plus the session helpers routes use to find the current user and visitor.

Pattern: Dependency Injection
- Stores are created once (lru_cache) and passed into services
- Tests swap them with app.dependency_overrides
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request

from tinyapp.config import settings
from tinyapp.exceptions import NotAuthenticatedError
from tinyapp.models.user import User
from tinyapp.services.auth_service import AuthService
from tinyapp.services.id_generator import generate_token
from tinyapp.services.url_service import URLService
from tinyapp.storage.strategies import (
    InMemoryURLStore,
    InMemoryUserStore,
    URLStore,
    UserStore,
)

SESSION_USER_KEY = "user_id"
SESSION_VISITOR_KEY = "visitor_id"


@lru_cache()
def get_user_store() -> UserStore:
    """
    Get user store instance (singleton).

    @lru_cache ensures this is called only once.
    """
    return InMemoryUserStore()


@lru_cache()
def get_url_store() -> URLStore:
    """
    Get URL store instance (singleton).

    @lru_cache ensures this is called only once.
    """
    return InMemoryURLStore()


@lru_cache()
def get_auth_service() -> AuthService:
    """
    Get AuthService bound to the process-wide user store (singleton).

    Cached because building it hashes a dummy password at full bcrypt cost.
    """
    return AuthService(user_store=get_user_store(), rounds=settings.bcrypt_rounds)


def get_url_service(url_store: URLStore = Depends(get_url_store)) -> URLService:
    """Get URLService with its store injected"""
    return URLService(url_store=url_store)


def ensure_visitor_id(request: Request) -> str:
    """
    Give every browser session an anonymous visitor token.

    Installed as an app-wide dependency, so the token exists from the first
    request on, logged in or not.
    """
    visitor_id = request.session.get(SESSION_VISITOR_KEY)
    if not visitor_id:
        visitor_id = generate_token(settings.visitor_id_length)
        request.session[SESSION_VISITOR_KEY] = visitor_id
    return visitor_id


def get_current_user_id(request: Request) -> Optional[str]:
    return request.session.get(SESSION_USER_KEY)


def get_current_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[User]:
    """
    The logged-in user, or None.

    A session pointing at a user that no longer exists is treated as
    logged out and cleared.
    """
    user_id = get_current_user_id(request)
    user = auth_service.get_user(user_id)
    if user_id and user is None:
        request.session.pop(SESSION_USER_KEY, None)
    return user


def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    """
    Raises:
        NotAuthenticatedError: If nobody is logged in
    """
    if user is None:
        raise NotAuthenticatedError()
    return user
