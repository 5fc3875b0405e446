"""Mapping of service exceptions to HTTP errors."""

from fastapi import HTTPException

from telemed.core.errors import InvalidRecordId, RecordNotFound, RequestLimitError, StoreError
from telemed.services.profiles import ProfileNotValid


def to_http_exception(exc: Exception) -> HTTPException:
    """Translate a service-layer exception into an ``HTTPException``.

    Callers pass only ``SERVICE_ERRORS`` instances.
    """
    if isinstance(exc, ProfileNotValid):
        return HTTPException(
            status_code=422,
            detail={"error": "not_validated_error", "errors": exc.errors},
        )
    if isinstance(exc, (RecordNotFound, InvalidRecordId)):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, RequestLimitError):
        return HTTPException(status_code=429, detail=str(exc))
    if isinstance(exc, StoreError):
        return HTTPException(status_code=503, detail="Record store unavailable")
    return HTTPException(status_code=500, detail=str(exc))


SERVICE_ERRORS: tuple[type[Exception], ...] = (
    ProfileNotValid,
    RecordNotFound,
    RequestLimitError,
    StoreError,
)
