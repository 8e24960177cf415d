"""Translation of core errors into HTTP errors."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..errors import (
    BoxNotFoundError,
    InvalidTransitionError,
    JobNotFoundError,
    PersistenceError,
    StorehubError,
    ValidationError,
)


def http_error(exc: StorehubError) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, (JobNotFoundError, BoxNotFoundError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidTransitionError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, PersistenceError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{exc}. Reload the data before trying again.",
        )
    logging.exception(f"Unexpected storage hub error: {exc}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
