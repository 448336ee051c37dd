"""Global exception handlers: map SDK exceptions to HTTP responses.

Every error body has the shape ``{"error": message}``.  SDK errors carry
their own status code and a client-safe message; ``ValueError`` from the
services is classified by message pattern.  Raw details stay in the log.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from formflow_wizard.errors import FormflowError, ValidationError

logger = logging.getLogger(__name__)

# --- Keyword patterns in ValueError messages and their HTTP status codes ---
# Checked in order; first match wins.
_VALUE_ERROR_PATTERNS: list[tuple[str, int]] = [
    ("not found", 404),
    ("already exists", 409),
]

# --- Client-safe messages keyed by HTTP status code ---
_SAFE_MESSAGES: dict[int, str] = {
    400: "Invalid request",
    404: "Resource not found",
    409: "Resource already exists",
}


async def formflow_error_handler(request: Request, exc: FormflowError) -> JSONResponse:
    """Render an SDK error with its own status code and message."""
    if exc.status_code >= 500:
        logger.error("%s at %s: %s", type(exc).__name__, request.url, exc.message)
    else:
        logger.warning("%s at %s: %s", type(exc).__name__, request.url, exc.message)

    content: dict = {"error": exc.message}
    if isinstance(exc, ValidationError) and exc.field_errors:
        content["fields"] = exc.field_errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map service ``ValueError`` to 404 / 409 / 400 by message pattern."""
    msg = str(exc)
    status = 400
    for pattern, code in _VALUE_ERROR_PATTERNS:
        if pattern in msg.lower():
            status = code
            break

    logger.warning("ValueError [%d] at %s: %s", status, request.url, msg)
    return JSONResponse(status_code=status, content={"error": _SAFE_MESSAGES[status]})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON or a body of the wrong shape is a plain 400."""
    logger.warning("Rejected request body at %s: %s", request.url, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Keep framework-raised HTTP errors (unknown route, bad method) in the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
