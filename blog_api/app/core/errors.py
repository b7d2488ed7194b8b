"""
Error taxonomy and its HTTP mapping.

Every failure a request can run into is one of four exception classes:

* ``ValidationFailure`` – the request body or a path parameter broke a
  field rule.  Carries the full list of field errors.
* ``ConstraintViolation`` – the store rejected a write (unique email,
  unknown author, ...).
* ``NotFound`` – an update or delete targeted a row that does not exist.
* ``StoreUnavailable`` – the store could not be reached or failed
  internally.

Repositories only ever raise the three ``StoreError`` subclasses; all
``sqlite3`` exceptions are translated at that boundary.  The handlers
installed by ``install_exception_handlers`` turn each class into a JSON
body of the form ``{"error": <details>}``.  ``NotFound`` is answered with
400, not 404, to keep the service's established observable behaviour.
"""

import logging
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..schemas.common import FieldError


logger = logging.getLogger(__name__)


class ValidationFailure(Exception):
    """Input rejected before any persistence attempt."""

    def __init__(self, errors: List[FieldError]):
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))
        self.errors = errors


class StoreError(Exception):
    """Base class for failures reported by the repositories."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConstraintViolation(StoreError):
    """The store rejected a write because of a uniqueness or foreign key rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(StoreError):
    """The row targeted by an update or delete does not exist."""

    status_code = status.HTTP_400_BAD_REQUEST


class StoreUnavailable(StoreError):
    """Connectivity, timeout or internal failure of the store."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, details) -> JSONResponse:
    """Build the ``{"error": ...}`` envelope shared by all failures."""
    return JSONResponse(status_code=status_code, content={"error": details})


def _request_errors(exc: RequestValidationError) -> List[FieldError]:
    """Flatten FastAPI's own request errors (malformed JSON etc.)."""
    errors: List[FieldError] = []
    for item in exc.errors():
        loc = [str(part) for part in item.get("loc", ()) if part not in ("body", "path", "query")]
        errors.append(FieldError(field=".".join(loc) or "body", message=item.get("msg", "Invalid request")))
    return errors


def install_exception_handlers(app: FastAPI) -> None:
    """Register handlers translating the taxonomy into HTTP responses."""

    @app.exception_handler(ValidationFailure)
    async def _handle_validation_failure(_request: Request, exc: ValidationFailure) -> JSONResponse:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            [error.model_dump() for error in exc.errors],
        )

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            [error.model_dump() for error in _request_errors(exc)],
        )

    @app.exception_handler(StoreError)
    async def _handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)
