"""Error Handlers — global exception handlers for the gateway API.

Invariants:
    - GatewayError → its http_status with {"message": ...}
    - Starlette 404/405 (any method the catch-all route does not list) → 404 route-not-found
    - RequestValidationError (unparseable body) → 400 {"message": "Invalid request body"}
    - Exception (catch-all) → 500 {"message": str(exc)}, logged with traceback

Design Decisions:
    - Layered handlers: domain (GatewayError), routing (Starlette HTTP), validation (Pydantic),
      catch-all (Exception)
    - Every error body has the same single-field shape
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from marvel_gateway.core.errors import GatewayError, RouteNotFoundError

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_gateway_error_handler(app)
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_gateway_error_handler(app: FastAPI) -> None:
    """Register domain/upstream error handler."""

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"GatewayError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register Starlette HTTP error handler (unroutable methods, stray HTTPExceptions)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=RouteNotFoundError().to_response(),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=exc.headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": INVALID_BODY_MESSAGE},
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        return unhandled_error_response(request.url.path, request.method, exc)


def unhandled_error_response(path: str, method: str, exc: Exception) -> JSONResponse:
    """Log an unexpected exception and build its 500 envelope."""
    logger.error(
        f"Unhandled exception on {path}: {exc}",
        exc_info=exc,
        extra={"path": path, "method": method},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": str(exc)},
    )
