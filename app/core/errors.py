"""
Error kinds raised by the availability services.

Each kind carries a stable `kind` string and an HTTP status so routes can
map failures with a single helper instead of scattering try/except blocks.
Only StoreUnavailable is worth retrying.
"""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from fastapi import HTTPException
from sqlalchemy.exc import InterfaceError, OperationalError

logger = logging.getLogger(__name__)


class AvailabilityError(Exception):
    kind = "error"
    status_code = 500
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.kind, "message": self.message}


class NotFound(AvailabilityError):
    kind = "not_found"
    status_code = 404


class AccessDenied(AvailabilityError):
    kind = "access_denied"
    status_code = 403


class InvalidInput(AvailabilityError):
    """A field failed validation. `field` names which one."""

    kind = "invalid_input"
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field
        return data


class StoreUnavailable(AvailabilityError):
    kind = "store_unavailable"
    status_code = 503
    retryable = True


def domain_error_to_http(exc: AvailabilityError) -> HTTPException:
    """
    Map a service error into an HTTPException whose detail is the
    structured error body (kind, message and, for InvalidInput, field).
    """
    return HTTPException(status_code=exc.status_code, detail=exc.to_dict())


def store_call(fn):
    """
    Wrap a method of an object holding `self.db`: connection-level
    failures roll the session back and surface as StoreUnavailable.
    """

    @wraps(fn)
    def wrapper(self, *args, **kwargs):
        try:
            return fn(self, *args, **kwargs)
        except (OperationalError, InterfaceError) as e:
            self.db.rollback()
            logger.exception("store call %s failed", fn.__qualname__)
            raise StoreUnavailable(f"Availability store unavailable: {e.orig}") from e

    return wrapper
