# _*_ coding: utf-8 _*_
"""Global exception handlers for FastAPI application.

모든 에러 응답은 ErrorResponse 형식으로 통일된다.
5xx 응답은 APP_DEBUG 가 켜져 있을 때만 원인 예외를 노출한다.
"""
import datetime as dt
import logging
import uuid

import redis.exceptions
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from resource_backend.config import settings
from resource_backend.types.response.base import ErrorResponse
from resource_backend.types.response.exceptions import HandledException, UnHandledException
from resource_backend.types.response.response_code import ResponseCode
from resource_backend.utils.logging_utils import describe_request, log_error, log_warning

logger = logging.getLogger(__name__)

INTERNAL_ERROR_CONTENT = "서버 내부 오류가 발생했습니다. 잠시 후 다시 시도해주세요."


def create_error_response(
    code: int,
    message: str,
    content: str = None,
    trace_id: str = None
) -> ErrorResponse:
    """에러 응답 생성"""
    return ErrorResponse(
        code=code,
        message=message,
        content=message if content is None else content,
        timestamp=dt.datetime.utcnow().isoformat(),
        trace_id=trace_id or str(uuid.uuid4())
    )


def error_json(status_code: int, error_response: ErrorResponse, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error_response),
        headers=headers
    )


def _handled_exception_response(exc: HandledException) -> JSONResponse:
    content = f"요청 처리 중 오류가 발생했습니다: {exc.message}"
    if exc.http_status_code >= 500 and settings.app_debug and exc.original_exception is not None:
        content = f"{content} ({exc.original_exception!r})"
    return error_json(
        exc.http_status_code,
        create_error_response(code=exc.code, message=exc.message, content=content)
    )


def _internal_error_response(exc: Exception) -> JSONResponse:
    managed_exc = UnHandledException(e=exc)
    content = f"{exc.__class__.__name__}: {exc}" if settings.app_debug else INTERNAL_ERROR_CONTENT
    return error_json(
        500,
        create_error_response(code=managed_exc.code, message=managed_exc.message, content=content)
    )


def _validation_error_response(exc: RequestValidationError) -> JSONResponse:
    # 잘못된 입력은 422 가 아닌 400
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return error_json(
        400,
        create_error_response(
            code=ResponseCode.VALIDATION_ERROR.code,
            message=ResponseCode.VALIDATION_ERROR.message,
            content=details or "입력한 데이터를 확인해주세요."
        )
    )


def set_global_exception_handlers(app: FastAPI) -> FastAPI:
    """글로벌 예외 핸들러 설정"""

    @app.exception_handler(HandledException)
    async def handled_exception_handler(request: Request, exc: HandledException):
        log_msg = f"HandledException [{exc.code}] {exc.message} ({describe_request(request)})"
        if exc.http_status_code >= 500:
            log_error(f"{log_msg}\n{exc.logMessage}", exc.original_exception or exc)
        else:
            log_warning(log_msg)
        return _handled_exception_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        log_warning(f"HTTPException [{exc.status_code}] {exc.detail} ({describe_request(request)})")
        return error_json(
            exc.status_code,
            create_error_response(
                code=exc.status_code,
                message=str(exc.detail),
                content=f"HTTP 오류가 발생했습니다: {exc.detail}"
            ),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        log_warning(f"ValidationError {exc.errors()} ({describe_request(request)})")
        return _validation_error_response(exc)

    @app.exception_handler(redis.exceptions.ConnectionError)
    async def redis_connection_error_handler(request: Request, exc: redis.exceptions.ConnectionError):
        log_error(f"Redis ConnectionError ({describe_request(request)})", exc)
        return _internal_error_response(exc)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        log_error(f"Unexpected {exc.__class__.__name__} ({describe_request(request)})", exc)
        return _internal_error_response(exc)

    return app
