import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from tinyapp.dependencies import SESSION_USER_KEY, get_auth_service, get_current_user
from tinyapp.exceptions import IncompleteFieldsError
from tinyapp.models.user import User
from tinyapp.schemas.user import LoginRequest, MessageResponse, UserCreate, UserResponse
from tinyapp.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "The username/email or password you entered is invalid."


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Create an account and log it in"""
    user = auth_service.register_user(user_data.username, user_data.email, user_data.password)
    request.session[SESSION_USER_KEY] = user.id
    return user


@router.post("/login", response_model=UserResponse)
def login(
    credentials: LoginRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Log in with a username or email plus password"""
    if not credentials.login or not credentials.password:
        raise IncompleteFieldsError()

    user = auth_service.authenticate(credentials.login, credentials.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS
        )

    request.session[SESSION_USER_KEY] = user.id
    return user


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request):
    """Forget the logged-in user; the visitor token stays"""
    user_id = request.session.pop(SESSION_USER_KEY, None)
    if user_id:
        logger.info("User %s logged out", user_id)
        return {"message": "You've successfully logged out."}
    return {"message": "You were not logged in."}


@router.get("/me", response_model=UserResponse)
def read_current_user(user: Optional[User] = Depends(get_current_user)):
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You are not logged in."
        )
    return user
