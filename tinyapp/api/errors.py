"""
Map service-layer exceptions to HTTP responses.

Routes don't catch TinyAppError themselves; they let it propagate and the
handler registered here renders {"detail": message} with the right status.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from tinyapp.exceptions import (
    CredentialTakenError,
    NotAuthenticatedError,
    NotFoundError,
    OwnershipError,
    TinyAppError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first
STATUS_CODES = [
    (CredentialTakenError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (OwnershipError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
]


def status_code_for(exc: TinyAppError) -> int:
    for exc_type, status_code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def tinyapp_error_handler(request: Request, exc: TinyAppError) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.info("%s %s -> %d %s", request.method, request.url.path, status_code, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TinyAppError, tinyapp_error_handler)
