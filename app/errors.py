# app/errors.py
import logging
from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorKind(int, Enum):
    VALIDATION = 400
    UNAUTHORIZED = 401
    NOT_FOUND = 404


class ApiError(Exception):
    kind: Optional[ErrorKind] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        # a bare ApiError has no kind
        return self.kind.value if self.kind is not None else 500


class ValidationError(ApiError):
    kind = ErrorKind.VALIDATION


class UnauthorizedError(ApiError):
    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(ApiError):
    kind = ErrorKind.NOT_FOUND


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ---------------------------
# Error translator
# ---------------------------
def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("validation error on %s: %s", request.url.path, exc.errors())
        return _error_response(ErrorKind.VALIDATION.value, "Validation Error: Invalid request parameters")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.detail)
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # never leak internals to the client
        logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error_response(500, "Internal Server Error")
