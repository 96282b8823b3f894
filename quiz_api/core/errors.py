import logging
from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Application error carrying the HTTP status it should surface with"""

    error = "ServiceError"

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(ServiceError):
    error = "ValidationError"

    def __init__(self, message: str):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class NotFoundError(ServiceError):
    error = "NotFound"

    def __init__(self, message: str):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class AuthenticationError(ServiceError):
    error = "Unauthorized"

    def __init__(self, message: str):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class ConstraintKind(str, Enum):
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    UNIQUE = "unique"
    CHECK = "check"
    UNKNOWN = "unknown"


class ConstraintViolation(Exception):
    """
    Storage-level integrity failure, produced by the database adapter.

    Carries the kind of constraint that failed and, when the driver reports
    them, the offending column and constraint name.
    """

    _STATUS = {
        ConstraintKind.NOT_NULL: (status.HTTP_400_BAD_REQUEST, "Missing field"),
        ConstraintKind.FOREIGN_KEY: (status.HTTP_404_NOT_FOUND, "Invalid reference"),
        ConstraintKind.UNIQUE: (status.HTTP_409_CONFLICT, "Conflict"),
    }

    def __init__(
        self,
        kind: ConstraintKind,
        column: Optional[str] = None,
        constraint: Optional[str] = None,
        detail: str = "",
    ):
        self.kind = kind
        self.column = column
        self.constraint = constraint
        self.detail = detail
        super().__init__(detail or kind.value)

    @property
    def status_code(self) -> int:
        return self._STATUS.get(self.kind, (status.HTTP_400_BAD_REQUEST, ""))[0]

    @property
    def message(self) -> str:
        label = self._STATUS.get(self.kind, (None, "Constraint violation"))[1]
        target = self.column or self.constraint
        return f"{label}: {target}" if target else label


def _error_body(error: str, message: str) -> dict:
    return {"error": error, "message": message}


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as a JSON body with a category and a message"""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code, content=_error_body(exc.error, exc.message)
        )

    @app.exception_handler(ConstraintViolation)
    async def handle_constraint_violation(request: Request, exc: ConstraintViolation):
        logger.warning(f"⚠️ Constraint violation on {request.url.path}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("ConstraintViolation", exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        messages = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err["loc"] if part not in ("query", "body"))
            messages.append(f"{field}: {err['msg']}" if field else err["msg"])
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("ValidationError", "; ".join(messages)),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal Server Error", "An unexpected error occurred."),
        )
