"""Error Handlers - global exception handlers for the Tapecalc API.

Invariants:
    - TapecalcError -> structured JSON with error code, message, severity
    - RequestValidationError -> field-level error details, plus the session id
      from the path when the route has one
    - Exception (catch-all) -> never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from tapecalc.core.errors import TapecalcError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_tapecalc_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_tapecalc_error_handler(app: FastAPI) -> None:
    """Register domain error handler."""

    @app.exception_handler(TapecalcError)
    async def tapecalc_error_handler(request: Request, exc: TapecalcError):
        """Handle all Tapecalc domain errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"TapecalcError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "session_id": exc.context.session_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Reject malformed action bodies, key presses and session ids."""
        session_id = request.path_params.get("session_id")
        logger.warning(
            f"Rejected request on {request.url.path}: {exc.errors()}",
            extra={
                "error_code": "VALIDATION_ERROR",
                "path": request.url.path,
                "session_id": session_id,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc, session_id),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={
                "error_code": "INTERNAL_ERROR",
                "path": request.url.path,
                "session_id": request.path_params.get("session_id"),
            },
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


def _build_validation_error_response(
    exc: RequestValidationError, session_id: str | None,
) -> dict:
    """Same envelope as TapecalcError.to_response(), with per-field details."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid calculator request",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "context": {"session_id": session_id},
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
