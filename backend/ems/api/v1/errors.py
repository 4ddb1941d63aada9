from __future__ import annotations

from fastapi import HTTPException, status

from ems.core.exceptions import (
    AuthenticationError,
    EmsError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[EmsError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (RateLimitedError, status.HTTP_429_TOO_MANY_REQUESTS),
]


def to_http_exception(err: EmsError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(err, error_type):
            return HTTPException(status_code=status_code, detail=str(err))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(err))
