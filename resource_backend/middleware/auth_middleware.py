# _*_ coding: utf-8 _*_
"""JWT Authentication middleware."""
import logging
from typing import Optional

import jwt
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from resource_backend.config import settings
from resource_backend.core.global_exception_handlers import create_error_response
from resource_backend.types.response.exceptions import HandledException
from resource_backend.types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(BaseHTTPMiddleware):
    """JWT 토큰 검증 미들웨어

    Authorization 헤더가 있으면 토큰을 검증하고 payload 를 request.state 에 저장한다.
    토큰이 없는 요청은 그대로 통과하며, 인증이 필요한 엔드포인트는
    get_current_user 의존성에서 401 을 반환한다.
    """

    def __init__(self, app, secret_key: str = None, algorithm: str = None, issuer: Optional[str] = None):
        super().__init__(app)
        self.exclude_paths = settings.get_jwt_exclude_paths()
        self.secret_key = secret_key or settings.jwt_secret_key
        self.algorithm = algorithm or settings.jwt_algorithm
        self.issuer = issuer if issuer is not None else settings.jwt_issuer
        if not self.secret_key or self.secret_key == "change_me":
            logger.warning("JWT secret key is using default value. Please configure JWT_SECRET_KEY.")

    def _is_excluded_path(self, path: str) -> bool:
        """경로가 제외 목록에 있는지 확인"""
        for excluded_path in self.exclude_paths:
            if path == excluded_path or path.startswith(excluded_path + "/"):
                return True
        return False

    def _extract_token(self, request: Request) -> Optional[str]:
        """Authorization 헤더에서 토큰 추출"""
        authorization = request.headers.get("Authorization")
        if not authorization:
            return None

        # "Bearer <token>" 형식에서 토큰 추출
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise HandledException(ResponseCode.AUTH_TOKEN_INVALID, msg="Bearer 형식이 아닙니다.")

        return parts[1]

    def _verify_token(self, token: str) -> dict:
        """JWT 토큰 검증 (외부 인증 서버가 서명한 토큰)"""
        decode_kwargs = {
            "algorithms": [self.algorithm],
            "options": {
                "require": ["exp"],
            },
        }
        if self.issuer:
            decode_kwargs["issuer"] = self.issuer
        try:
            return jwt.decode(token, self.secret_key, **decode_kwargs)
        except jwt.ExpiredSignatureError as e:
            raise HandledException(ResponseCode.AUTH_TOKEN_EXPIRED, e=e)
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {str(e)}")
            raise HandledException(ResponseCode.AUTH_TOKEN_INVALID, e=e)

    async def dispatch(self, request: Request, call_next):
        # 제외 경로인 경우 통과
        if self._is_excluded_path(request.url.path):
            return await call_next(request)

        try:
            token = self._extract_token(request)
            if token is not None:
                payload = self._verify_token(token)
                # 검증 성공 시 payload를 request state에 저장
                request.state.jwt_payload = payload
                request.state.user_id = payload.get("user_id") or payload.get("sub") or payload.get("id")
                request.state.role = payload.get("role") or "user"
        except HandledException as e:
            error_response = create_error_response(
                code=e.code,
                message=e.message,
                content=f"토큰 검증에 실패했습니다: {e.message}"
            )
            return JSONResponse(
                status_code=e.http_status_code,
                content=jsonable_encoder(error_response)
            )

        # 요청 계속 처리
        return await call_next(request)
