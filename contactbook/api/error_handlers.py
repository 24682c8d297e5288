"""Error handlers: global exception handlers for the Contact Book API.

    - CustomerValidationError, RequestValidationError → 400 with every field error
    - CustomerNotFound → 404
    - ConcurrencyConflict → 409
    - StorageFailure, Exception (catch-all) → 500, never leaks internal details

Every body carries a human-readable ``detail``.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from contactbook.core.exceptions import (
    ConcurrencyConflict,
    CustomerNotFound,
    CustomerValidationError,
    StorageFailure,
)
from contactbook.core.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(CustomerValidationError)
    async def customer_validation_error_handler(request: Request, exc: CustomerValidationError):
        logger.warning(f"Validation failed on {request.method} {request.url.path}: {exc.violations}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": exc.message,
                "errors": [{"field": v.field, "message": v.message} for v in exc.violations],
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Malformed request on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_request_error_response(exc),
        )

    @app.exception_handler(CustomerNotFound)
    async def not_found_handler(request: Request, exc: CustomerNotFound):
        logger.error(exc.message)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(ConcurrencyConflict)
    async def concurrency_conflict_handler(request: Request, exc: ConcurrencyConflict):
        logger.error(f"{request.method}: Concurrency error on customer with ID {exc.customer_id}.")
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})

    @app.exception_handler(StorageFailure)
    async def storage_failure_handler(request: Request, exc: StorageFailure):
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": f"{INTERNAL_ERROR_MESSAGE} {exc.message}"},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": INTERNAL_ERROR_MESSAGE},
        )


def _build_request_error_response(exc: RequestValidationError) -> dict:
    """Same shape as a failed rule check; the leading 'body'/'path' location is dropped."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error["loc"]]
        if len(location) > 1 and location[0] in ("body", "path", "query"):
            location = location[1:]
        errors.append({"field": ".".join(location), "message": error["msg"]})
    return {"detail": "The request could not be read.", "errors": errors}
