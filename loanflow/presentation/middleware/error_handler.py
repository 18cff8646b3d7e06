"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from loanflow.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainException,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred."


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid request"


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps the domain error taxonomy to HTTP responses. Handlers are matched
    on the exception's MRO, so every subclass inherits its family's status.
    """

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(
        request: Request,
        exc: AuthenticationError,
    ) -> JSONResponse:
        return _error_response(401, exc.code, exc.message)

    @app.exception_handler(AuthorizationError)
    async def authorization_handler(
        request: Request,
        exc: AuthorizationError,
    ) -> JSONResponse:
        logger.info("request_forbidden", request_id=get_request_id(), message=exc.message)
        return _error_response(403, exc.code, exc.message)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(
        request: Request,
        exc: NotFoundError,
    ) -> JSONResponse:
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(ValidationError)
    async def validation_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle malformed request bodies and parameters."""
        return _error_response(400, "VALIDATION_ERROR", _format_validation_errors(exc))

    @app.exception_handler(ConflictError)
    async def conflict_handler(
        request: Request,
        exc: ConflictError,
    ) -> JSONResponse:
        logger.warning(
            "request_conflict",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(UnexpectedError)
    async def unexpected_handler(
        request: Request,
        exc: UnexpectedError,
    ) -> JSONResponse:
        """Handle downstream failures; details stay in the logs."""
        logger.error(
            "unexpected_error",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(500, exc.code, GENERIC_ERROR_MESSAGE)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", GENERIC_ERROR_MESSAGE)
