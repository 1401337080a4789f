# _*_ coding: utf-8 _*_
"""Application exceptions.

서비스/CRUD 계층은 HandledException 을 발생시키고, 글로벌 예외 핸들러가
ResponseCode 에 맞는 HTTP 상태와 ErrorResponse 로 변환한다.
"""
from typing import Dict, Optional

from fastapi.exceptions import HTTPException

from .response_code import ResponseCode

__all__ = [
    "HandledException",
    "UnHandledException",
    "DuplicateRatingError",
]

# ResponseCode -> HTTP 상태. 목록에 없는 코드는 생성자의 http_status_code (기본 400)
_STATUS_BY_CODE: Dict[ResponseCode, int] = {
    ResponseCode.UNDEFINED_ERROR: 500,
    ResponseCode.DATABASE_CONNECTION_ERROR: 500,
    ResponseCode.DATABASE_QUERY_ERROR: 500,
    ResponseCode.DATABASE_TRANSACTION_ERROR: 500,
    ResponseCode.CACHE_CONNECTION_ERROR: 500,
    ResponseCode.AUTH_TOKEN_MISSING: 401,
    ResponseCode.AUTH_TOKEN_INVALID: 401,
    ResponseCode.AUTH_TOKEN_EXPIRED: 401,
    ResponseCode.RESOURCE_NOT_FOUND: 404,
    ResponseCode.RESOURCE_ACCESS_DENIED: 403,
    ResponseCode.RESOURCE_CREATE_ERROR: 500,
    ResponseCode.RATING_NOT_FOUND: 404,
    ResponseCode.RATING_FORBIDDEN: 403,
    ResponseCode.RATING_AGGREGATE_ERROR: 500,
    ResponseCode.RATING_AGGREGATE_LOCK_TIMEOUT: 500,
}


class HandledException(HTTPException):
    """애플리케이션이 관리하는 예외.

    Parameters
    ----------
    resp_code: ResponseCode
        에러 케이스. 응답의 ``code`` 와 기본 ``message`` 를 결정한다.

    e: Exception (default: None)
        원인 예외. 로그에만 남고 운영 환경 응답에는 노출되지 않는다.

    msg: str (default: None)
        기본 메시지 뒤에 ``": "`` 로 이어 붙일 상세 내용.

    http_status_code: int (default: 400)
        ``resp_code`` 에 고정된 상태가 없을 때 사용할 HTTP 상태.

    Examples
    --------
    >>> rating = rating_crud.get_rating(rating_id)
    >>> if rating is None:
    ...     raise HandledException(ResponseCode.RATING_NOT_FOUND, msg=rating_id)

    """

    code: int
    message: str
    http_status_code: int

    def __init__(self, resp_code: ResponseCode, e: Exception = None, msg: str = None, http_status_code: int = 400):
        status_code = _STATUS_BY_CODE.get(resp_code, http_status_code)
        super().__init__(status_code=status_code, detail=resp_code.message)

        self.resp_code = resp_code
        self.code = resp_code.code
        self.message = resp_code.message if msg is None else f"{resp_code.message}: {msg}"
        self.http_status_code = status_code
        self.original_exception = e

    @property
    def logMessage(self) -> str:
        text = f"[{self.code}] {self.message}"
        if self.original_exception is not None:
            text += f"\nCAUSE: {self.original_exception!r}"
        return text


class UnHandledException(HandledException):
    """예상하지 못한 예외를 UNDEFINED_ERROR 로 감싼 것"""

    def __init__(self, e: Exception = None, msg: str = None):
        super().__init__(ResponseCode.UNDEFINED_ERROR, e=e, msg=msg)


class DuplicateRatingError(Exception):
    """(user_id, resource_id) 유니크 제약 위반.

    RatingService 내부에서 "수정으로 재시도" 처리되며 클라이언트에 노출되지 않는다.
    """

    def __init__(self, user_id: str, resource_id: str, e: Optional[Exception] = None):
        super().__init__(f"rating already exists for user={user_id} resource={resource_id}")
        self.user_id = user_id
        self.resource_id = resource_id
        self.original_exception = e
