"""
Custom exception classes and error handlers
Provides consistent error responses across the application
"""

from fastapi import FastAPI, HTTPException, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

class RewardsException(HTTPException):
    """Base exception class for the rewards application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.extra = extra or {}

class BadRequestException(RewardsException):
    """400 Bad Request"""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST", extra: Optional[Dict[str, Any]] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code,
            extra=extra
        )

class UnauthorizedException(RewardsException):
    """401 Unauthorized"""

    def __init__(self, detail: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code,
            headers={"WWW-Authenticate": "Bearer"}
        )

class NotFoundException(RewardsException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class InternalServerException(RewardsException):
    """500 Internal Server Error"""

    def __init__(
        self,
        detail: str = "Internal server error",
        error_code: str = "INTERNAL_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code=error_code
        )

# Business logic exceptions
class InvalidInputException(BadRequestException):
    """Missing or malformed request fields"""

    def __init__(self, detail: str):
        super().__init__(detail=detail, error_code="INVALID_INPUT")

class InvalidCredentialsException(UnauthorizedException):
    """Login rejected"""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail=detail, error_code="INVALID_CREDENTIALS")

class SessionNotFoundException(RewardsException):
    """
    Session token absent or unknown.

    Rendered as a plain 404 so protected routes look like missing ones,
    unless strict mode asks for a proper 401.
    """

    def __init__(self, strict: bool = False):
        if strict:
            super().__init__(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unauthorized",
                error_code="SESSION_NOT_FOUND",
                headers={"WWW-Authenticate": "Bearer"}
            )
        else:
            super().__init__(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Not found",
                error_code="SESSION_NOT_FOUND"
            )

class PartnerNotFoundException(NotFoundException):
    """Unknown partner slug"""

    def __init__(self, slug: str):
        super().__init__(detail="Partner not found", error_code="PARTNER_NOT_FOUND")
        self.slug = slug

class InsufficientFundsException(BadRequestException):
    """Balance too low for a perk redemption"""

    def __init__(self, current_balance, required):
        super().__init__(
            detail="Insufficient funds",
            error_code="INSUFFICIENT_FUNDS",
            extra={
                "success": False,
                "currentBalance": float(current_balance),
                "required": float(required),
            }
        )
        self.current_balance = current_balance
        self.required = required

class AlreadyRunningException(BadRequestException):
    """A test simulation is already active for this user"""

    def __init__(self, detail: str = "Test simulation is already running for this user"):
        super().__init__(detail=detail, error_code="ALREADY_RUNNING", extra={"isRunning": True})

class NotRunningException(BadRequestException):
    """No test simulation to stop"""

    def __init__(self, detail: str = "No test simulation is currently running for this user"):
        super().__init__(
            detail=detail,
            error_code="NOT_RUNNING",
            extra={"success": False, "message": detail, "isRunning": False}
        )

class UpstreamUnavailableException(RewardsException):
    """AI provider is down, rate limited or out of quota"""

    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(
            status_code=status_code,
            detail=detail,
            error_code="UPSTREAM_UNAVAILABLE"
        )

def _error_body(exc: RewardsException) -> Dict[str, Any]:
    body = {"error": exc.detail}
    if exc.error_code:
        body["code"] = exc.error_code
    body.update(exc.extra)
    return body

async def rewards_exception_handler(request: Request, exc: RewardsException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc), headers=exc.headers)

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing fields are a 400 here, not FastAPI's default 422"""
    errors = exc.errors()
    fields = [".".join(str(p) for p in err.get("loc", ())[1:]) or "body" for err in errors]
    message = f"Invalid or missing fields: {', '.join(fields)}" if fields else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "code": "INVALID_INPUT"}
    )

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc) or "Unknown error occurred", "code": "INTERNAL_ERROR"}
    )

def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON error handlers to the app"""
    app.add_exception_handler(RewardsException, rewards_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
