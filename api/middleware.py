"""
Consolidated middleware for the NutriPlan API
"""

import time
import logging
from datetime import datetime
from uuid import uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceValidationError,
)

logger = logging.getLogger("nutriplan.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, Decimal):
        return float(obj)
    elif isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    return obj


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every request with a request id and its duration.

    A caller-supplied X-Request-ID is reused so plan generation can be traced
    across services; otherwise a new id is generated.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        logger.info("Request started", extra={**context, "client": request.client.host if request.client else None})

        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                extra={**context, "error": str(exc), "process_time": f"{time.perf_counter() - started:.4f}s"},
                exc_info=True,
            )
            raise

        elapsed = time.perf_counter() - started
        logger.info(
            "Request completed",
            extra={**context, "status_code": response.status_code, "process_time": f"{elapsed:.4f}s"},
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    # Convert errors to JSON-serializable format (handles Decimal, etc.)
    serializable_errors = make_serializable(exc.errors())

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "success": False,
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": serializable_errors,
            },
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": {
                "code": f"HTTP_{exc.status_code}",
                "message": exc.detail,
            },
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


DEFAULT_ERROR_CODES = {
    ServiceValidationError: "SERVICE_VALIDATION_ERROR",
    NotFoundError: "NOT_FOUND",
    ForbiddenError: "FORBIDDEN",
    ConflictError: "CONFLICT",
}


def _domain_error_response(exc, default_code: str) -> JSONResponse:
    payload = exc.to_dict()
    return JSONResponse(
        status_code=exc.http_status,
        content={
            "success": False,
            "error": {
                "code": payload.get("code") or default_code,
                "message": payload["message"],
                "details": make_serializable(payload.get("details")),
            },
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


async def service_validation_exception_handler(
    request: Request, exc: ServiceValidationError
):
    """Handle service validation errors, including candidate shortages"""
    logger.warning(f"Service validation error on {request.url}: {str(exc)}")
    return _domain_error_response(exc, DEFAULT_ERROR_CODES[ServiceValidationError])


async def not_found_exception_handler(request: Request, exc: NotFoundError):
    """Handle not found errors"""
    logger.warning(f"Resource not found on {request.url}: {str(exc)}")
    return _domain_error_response(exc, DEFAULT_ERROR_CODES[NotFoundError])


async def forbidden_exception_handler(request: Request, exc: ForbiddenError):
    """Handle access to another user's resources"""
    logger.warning(f"Forbidden on {request.url}: {str(exc)}")
    return _domain_error_response(exc, DEFAULT_ERROR_CODES[ForbiddenError])


async def conflict_exception_handler(request: Request, exc: ConflictError):
    """Handle resource conflicts"""
    logger.warning(f"Conflict on {request.url}: {str(exc)}")
    return _domain_error_response(exc, DEFAULT_ERROR_CODES[ConflictError])

async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
            },
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


def register_exception_handlers(app) -> None:
    """Install the error envelope handlers on a FastAPI app"""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ServiceValidationError, service_validation_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_exception_handler)
    app.add_exception_handler(ForbiddenError, forbidden_exception_handler)
    app.add_exception_handler(ConflictError, conflict_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
