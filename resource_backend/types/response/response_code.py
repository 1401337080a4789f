from enum import Enum, unique


__all__ = [
    "ResponseCode"
]


@unique
class ResponseCode(Enum):

    SUCCESS = (1, "성공")
    FAIL = (-1, "실패")
    UNDEFINED_ERROR = (-2, "정의되지 않은 오류입니다.")

    # DATABASE_SERVICE = (-1400 ~ -1499)
    DATABASE_CONNECTION_ERROR = (-1401, "데이터베이스 연결 오류가 발생했습니다.")
    DATABASE_QUERY_ERROR = (-1402, "데이터베이스 쿼리 오류가 발생했습니다.")
    DATABASE_TRANSACTION_ERROR = (-1403, "데이터베이스 트랜잭션 오류가 발생했습니다.")

    # CACHE_SERVICE = (-1500 ~ -1599)
    CACHE_CONNECTION_ERROR = (-1501, "캐시 연결 오류가 발생했습니다.")

    # VALIDATION_ERROR = (-1600 ~ -1699)
    VALIDATION_ERROR = (-1601, "입력 데이터 검증 오류가 발생했습니다.")
    REQUIRED_FIELD_MISSING = (-1602, "필수 필드가 누락되었습니다.")
    INVALID_DATA_FORMAT = (-1603, "잘못된 데이터 형식입니다.")

    # AUTH = (-1700 ~ -1799)
    AUTH_TOKEN_MISSING = (-1701, "인증이 필요합니다.")
    AUTH_TOKEN_INVALID = (-1702, "유효하지 않은 토큰입니다.")
    AUTH_TOKEN_EXPIRED = (-1703, "토큰이 만료되었습니다.")

    # RESOURCE_SERVICE = (-1800 ~ -1899)
    RESOURCE_NOT_FOUND = (-1801, "리소스를 찾을 수 없습니다.")
    RESOURCE_ACCESS_DENIED = (-1802, "리소스에 대한 권한이 없습니다.")
    RESOURCE_CREATE_ERROR = (-1803, "리소스 생성 중 오류가 발생했습니다.")

    # RATING_SERVICE = (-1900 ~ -1999)
    RATING_NOT_FOUND = (-1901, "평가를 찾을 수 없습니다.")
    RATING_INVALID_STARS = (-1902, "평가 점수는 1-5점 사이여야 합니다.")
    RATING_REVIEW_TOO_LONG = (-1903, "리뷰는 500자를 초과할 수 없습니다.")
    RATING_SELF_RATING = (-1904, "본인이 업로드한 리소스는 평가할 수 없습니다.")
    RATING_FORBIDDEN = (-1905, "본인의 평가만 삭제할 수 있습니다.")
    RATING_AGGREGATE_ERROR = (-1906, "평가 집계 중 오류가 발생했습니다.")
    RATING_AGGREGATE_LOCK_TIMEOUT = (-1907, "평가 집계 락 획득 시간이 초과되었습니다.")

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
