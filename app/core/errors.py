# app/core/errors.py
import logging
from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    unauthenticated = "unauthenticated"
    not_found = "not_found"
    validation = "validation"
    conflict = "conflict"
    upload = "upload"
    internal = "internal"


class AppError(Exception):
    kind = ErrorKind.internal
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class Unauthenticated(AppError):
    kind = ErrorKind.unauthenticated
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(AppError):
    kind = ErrorKind.not_found
    status_code = status.HTTP_404_NOT_FOUND


class ValidationFailed(AppError):
    kind = ErrorKind.validation
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    kind = ErrorKind.conflict
    status_code = status.HTTP_409_CONFLICT


class UploadError(AppError):
    kind = ErrorKind.upload
    status_code = status.HTTP_400_BAD_REQUEST


def _error_body(kind: ErrorKind, message: str) -> dict:
    return {"message": message, "error": kind.value}


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.kind, exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    body = _error_body(ErrorKind.validation, "Invalid request")
    body["errors"] = jsonable_encoder(exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(ErrorKind.internal, "Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
