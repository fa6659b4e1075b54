"""
Error taxonomy shared by the catalog features, plus the FastAPI handlers
that turn it into HTTP responses.

Repositories raise `RecordNotFound` / `EditConflict`, services raise
`FailedValidation` / `MalformedRequest`. Anything else that escapes a route
is logged and reported as a generic 500.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_FAULT_MESSAGE = "the server encountered a problem and could not process your request"


class CatalogError(Exception):
    status_code = 500
    message = INTERNAL_FAULT_MESSAGE

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message

    def payload(self) -> object:
        return self.message


class RecordNotFound(CatalogError):
    status_code = 404
    message = "the requested resource could not be found"


class EditConflict(CatalogError):
    status_code = 409
    message = "unable to update the record due to an edit conflict, please try again"


class MalformedRequest(CatalogError):
    status_code = 400
    message = "the request body could not be decoded"


class FailedValidation(CatalogError):
    status_code = 422
    message = "validation failed"

    def __init__(self, errors: dict[str, str]):
        super().__init__(self.message)
        self.errors = dict(errors)

    def payload(self) -> object:
        return self.errors


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed method=%s path=%s error=%s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.payload()})


async def internal_fault_handler(request: Request, exc: Exception) -> JSONResponse:
    # Never leak driver/DB details to the client.
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_FAULT_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(Exception, internal_fault_handler)
