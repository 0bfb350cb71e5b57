"""
Shared API dependencies and error mapping
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from fastapi import HTTPException, status

from ..bank import Bank
from ..errors import (
    AccountNotFound, AuthenticationFailed, BankingError, CustomerNotFound, DuplicateEmail
)


def get_bank() -> Bank:
    """Dependency returning the process-wide bank"""
    return Bank.get_instance()


_STATUS_BY_ERROR = {
    CustomerNotFound: status.HTTP_404_NOT_FOUND,
    AccountNotFound: status.HTTP_404_NOT_FOUND,
    DuplicateEmail: status.HTTP_409_CONFLICT,
    AuthenticationFailed: status.HTTP_401_UNAUTHORIZED,
}


def to_http_exception(error: BankingError) -> HTTPException:
    """Map a domain error to an HTTP error; anything unmapped is a 400"""
    for error_class, status_code in _STATUS_BY_ERROR.items():
        if isinstance(error, error_class):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def to_jsonable(value: Any) -> Any:
    """Render snapshots for JSON: Decimals as strings, dates as ISO text"""
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
