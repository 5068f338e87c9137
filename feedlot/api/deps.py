from fastapi import HTTPException, status

from feedlot.core.errors import (
    InvariantViolation,
    LedgerError,
    NotFoundError,
    ValidationError,
)
from feedlot.core.ids import IdGenerator, default_id_generator

_STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InvariantViolation, status.HTTP_409_CONFLICT),
)


def to_http_exception(exc: LedgerError) -> HTTPException:
    for error_cls, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)


def get_id_generator() -> IdGenerator:
    return default_id_generator
