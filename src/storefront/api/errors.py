"""Maps domain exceptions to JSON error envelopes.

Every error response has the shape
``{"status": "error", "message": ..., "errors": {field: [messages]}}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from storefront.exceptions import AuthExpiredError, DuplicateEmailError, ForbiddenError, InsufficientStockError

logger = structlog.get_logger(__name__)

_STATUS_CODES = (
    (DuplicateEmailError, 409, "Email already registered"),
    (InsufficientStockError, 400, "Insufficient stock"),
    (ValidationError, 400, "Validation failed"),
    (ObjectNotFoundError, 404, "Not found"),
    (AuthExpiredError, 401, "Authentication required"),
    (ForbiddenError, 403, "Forbidden"),
    (InvalidOperationError, 400, "Operation not allowed"),
)


def _field_errors(exc) -> dict:
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        return {key: value if isinstance(value, list) else [str(value)] for key, value in messages.items()}
    if messages:
        return {"_entity": [str(messages)]}
    return {}


def error_response(status_code: int, message: str, errors: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message, "errors": errors or {}},
    )


def _handler_for(status_code: int, message: str):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        errors = _field_errors(exc)
        first = next((msgs[0] for msgs in errors.values() if msgs), None)
        logger.info(
            "Request failed",
            path=request.url.path,
            status_code=status_code,
            error=type(exc).__name__,
        )
        return error_response(status_code, first or message, errors)

    return handler


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "_request"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return error_response(400, "Invalid request", errors)


async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, error=type(exc).__name__)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class, status_code, message in _STATUS_CODES:
        app.add_exception_handler(exc_class, _handler_for(status_code, message))
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_handler)
