"""
Единый формат ошибок API.

Каждая ошибка отдаётся как JSON с полем ``message``; для 500 добавляется
``error`` с деталями для диагностики.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """Базовая ошибка API."""

    def __init__(
        self,
        status_code: int,
        message: str,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.message = message


class BadRequestError(APIError):
    def __init__(self, message: str = "Bad request"):
        super().__init__(status.HTTP_400_BAD_REQUEST, message)


class AuthenticationError(APIError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(APIError):
    def __init__(self, message: str = "Access denied"):
        super().__init__(status.HTTP_403_FORBIDDEN, message)


class NotFoundError(APIError):
    def __init__(self, message: str = "Not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, message)


class StorageError(APIError):
    """Ошибка хранилища. ``error`` уходит клиенту для диагностики."""

    def __init__(self, message: str = "Internal Server Error", error: Optional[str] = None):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, message)
        self.error = error


@contextmanager
def storage_errors(message: str) -> Iterator[None]:
    """
    Переводит ошибки SQLAlchemy в StorageError (500) с записью в лог.
    Пример: with storage_errors("Failed to fetch reservations"): ...
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception(message)
        raise StorageError(message, error=str(e))


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    content: Dict[str, Any] = {"message": exc.message}
    if isinstance(exc, StorageError) and exc.error:
        content["error"] = exc.error
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Validation error at {request.url.path}: {exc.errors()}")
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": errors},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error at {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "error": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Подключает обработчики ошибок к приложению."""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
