"""
Service-level errors.

Services raise these instead of returning error tuples; the API layer renders
every ServiceError as {"success": false, "error": "<message>"}.
"""

from fastapi import Request
from fastapi.responses import JSONResponse


class ServiceError(ValueError):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


class AuthenticationError(ServiceError):
    status_code = 401


class PermissionDeniedError(ServiceError):
    status_code = 403


class GatewayError(ServiceError):
    """The payment gateway (or another upstream) failed or refused the call."""
    status_code = 502


async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )
