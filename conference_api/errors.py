# conference_api/errors.py

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class ConferenceApiError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"

    def __init__(self, detail=None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(ConferenceApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"


class Forbidden(ConferenceApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied"


class NotFound(ConferenceApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class InvalidTransition(ConferenceApiError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Invalid state transition"


class ExternalDependencyDegraded(ConferenceApiError):
    """Raised by collaborators and recovered locally; never reaches a client."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "External dependency unavailable"


async def conference_api_error_handler(request: Request, exc: ConferenceApiError):
    headers = None
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(ConferenceApiError, conference_api_error_handler)
