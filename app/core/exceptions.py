"""
Domain exceptions and the error envelope handler

Every error response carries a machine-readable ``code``:
    {"success": false, "message": "...", "code": "OUT_OF_RANGE", "details": {...}}
"""
from typing import Optional, Dict, Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from atams.exceptions import AppException, BadRequestException
from atams.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    429: "RATE_LIMITED",
    500: "INTERNAL_SERVER_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


class DomainException(BadRequestException):
    """400 with a domain specific error code"""
    code = "BAD_REQUEST"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, {"code": self.code, **(details or {})})


class LocationRequiredException(DomainException):
    code = "LOCATION_REQUIRED"

    def __init__(self, message: str = "Location required for check-in"):
        super().__init__(message)


class OutOfRangeException(DomainException):
    code = "OUT_OF_RANGE"

    def __init__(self, distance_m: float, radius_m: float):
        self.distance_m = round(distance_m)
        self.radius_m = radius_m
        super().__init__(
            f"You are too far from the event location. "
            f"Distance: {self.distance_m}m. Allowed: {radius_m:g}m.",
            {"distance": self.distance_m, "radius": radius_m},
        )


class NotEligibleException(DomainException):
    code = "NOT_ELIGIBLE"

    def __init__(self, message: str = "User did not attend event or was absent"):
        super().__init__(message)


class NoEligibleAttendeesException(DomainException):
    code = "NO_ELIGIBLE_ATTENDEES"

    def __init__(self, message: str = "No eligible attendees found for this event"):
        super().__init__(message)


def error_code_for(exc: AppException) -> str:
    return exc.details.get("code") or DEFAULT_ERROR_CODES.get(exc.status_code, "ERROR")


async def app_exception_handler(request: Request, exc: AppException):
    """Handle application exceptions, adding the machine-readable code"""
    details = {k: v for k, v in exc.details.items() if k != "code"}
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.message,
            "code": error_code_for(exc),
            "details": details,
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors (422) with field level detail"""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "message": "Validation error",
            "code": "VALIDATION_ERROR",
            "details": {"errors": errors}
        }
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError):
    """Handle database integrity errors (409)"""
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "success": False,
            "message": "Database constraint violation",
            "code": "CONFLICT",
            "details": {}
        }
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle general SQLAlchemy errors (500) without leaking driver messages"""
    logger.error(
        f"Database error: {str(exc)}",
        exc_info=True,
        extra={
            'extra_data': {
                'error_type': type(exc).__name__,
                'path': request.url.path,
                'method': request.method
            }
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": "Database error occurred",
            "code": "INTERNAL_SERVER_ERROR",
            "details": {}
        }
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions (500)"""
    logger.error(
        f"Unhandled exception: {str(exc)}",
        exc_info=True,
        extra={
            'extra_data': {
                'error_type': type(exc).__name__,
                'path': request.url.path,
                'method': request.method
            }
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": "Internal server error",
            "code": "INTERNAL_SERVER_ERROR",
            "details": {}
        }
    )


def setup_domain_exception_handlers(app) -> None:
    """
    Register handlers on top of ``atams.exceptions.setup_exception_handlers``.
    Must be called after it so these handlers take precedence.
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
