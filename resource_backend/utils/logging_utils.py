# _*_ coding: utf-8 _*_
"""로깅 유틸리티 함수들."""
import logging

from resource_backend.config.simple_settings import settings

logger = logging.getLogger("resource_backend.errors")


def describe_request(request) -> str:
    """에러 로그에 덧붙일 요청 요약 (헤더는 토큰이 포함되므로 제외)"""
    return f"{request.method} {request.url.path} client={request.client}"


def log_exception(level: int, message: str, exception: Exception = None):
    """예외 정보를 포함한 로그 기록

    exc_info 포함 여부는 LOG_INCLUDE_EXC_INFO 로 제어한다.
    """
    if exception is None:
        logger.log(level, message)
        return
    logger.log(level, f"{message}: {exception!r}", exc_info=settings.log_include_exc_info)


def log_error(message: str, exception: Exception = None):
    log_exception(logging.ERROR, message, exception)


def log_warning(message: str, exception: Exception = None):
    log_exception(logging.WARNING, message, exception)
