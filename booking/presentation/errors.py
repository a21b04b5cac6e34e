import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from booking.domain.exceptions import (
    DomainException,
    UnauthenticatedError,
    ForbiddenError,
    NotFoundError,
    InvalidStatusValueError,
    InvalidOrExpiredTokenError,
    WeakPasswordError,
    MissingFieldsError,
    InvalidFieldError,
    ConflictError,
)

logger = logging.getLogger(__name__)

# Порядок важен: первый подходящий класс определяет HTTP-статус
STATUS_MAP = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidStatusValueError, status.HTTP_400_BAD_REQUEST),
    (WeakPasswordError, status.HTTP_400_BAD_REQUEST),
    (MissingFieldsError, status.HTTP_400_BAD_REQUEST),
    (InvalidFieldError, status.HTTP_400_BAD_REQUEST),
    (InvalidOrExpiredTokenError, status.HTTP_400_BAD_REQUEST),
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def _envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "data": []})


def status_code_for(exc: Exception) -> int:
    for exc_type, code in STATUS_MAP:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
        """Маппинг доменных ошибок на HTTP-статусы"""
        code = status_code_for(exc)
        if code >= 500:
            logger.error(f"Ошибка {request.method} {request.url.path}: {exc}")
        return _envelope(code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info(f"Некорректный запрос {request.method} {request.url.path}: {exc.errors()}")
        return _envelope(status.HTTP_400_BAD_REQUEST, "Missing required fields")

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Необработанная ошибка {request.method} {request.url.path}: {exc}", exc_info=True)
        return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
