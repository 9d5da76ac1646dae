"""Error Handlers - global exception handlers for the prompt enhancer API.

Invariants:
    - PromptEnhancerError -> its own envelope and status (4xx logged as warning, 5xx as error)
    - slowapi RateLimitExceeded -> RateLimitExceededError envelope, 429
    - RequestValidationError -> 400 with field details, input values omitted
    - Exception (catch-all) -> 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from app.core.errors import ErrorSeverity, PromptEnhancerError, RateLimitExceededError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PromptEnhancerError, _domain_error_response)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_response)
    app.add_exception_handler(RequestValidationError, _validation_error_response)
    app.add_exception_handler(Exception, _internal_error_response)


async def _domain_error_response(request: Request, exc: PromptEnhancerError):
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _rate_limit_response(request: Request, exc: RateLimitExceeded):
    return await _domain_error_response(request, RateLimitExceededError(str(exc.detail)))


async def _validation_error_response(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(
        f"{len(errors)} invalid field(s) on {request.url.path}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": "validation",
                "severity": ErrorSeverity.ERROR.value,
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                        "type": e["type"],
                    }
                    for e in errors
                ],
            },
        },
    )


async def _internal_error_response(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
