# _*_ coding: utf-8 _*_
"""Dependency injection for FastAPI."""
import logging
import time
from typing import Generator, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from resource_backend.api.services.aggregate_service import AggregateService
from resource_backend.api.services.rating_service import RatingService
from resource_backend.api.services.resource_service import ResourceService
from resource_backend.cache.redis_client import RedisClient
from resource_backend.config import settings
from resource_backend.core.locks import ResourceLockManager
from resource_backend.database.base import Database
from resource_backend.types.response.exceptions import HandledException
from resource_backend.types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)

# 전역 인스턴스들 (싱글톤)
_db_instance = None
_redis_instance = None
_lock_manager_instance = None
_last_redis_attempt = None


def get_database() -> Database:
    """데이터베이스 의존성 주입 (싱글톤 패턴)"""
    global _db_instance

    if _db_instance is not None:
        return _db_instance

    logger.info("Creating new database instance")
    try:
        _db_instance = Database(settings.database_url, echo=settings.database_echo)
        _db_instance.create_database()
        logger.info(f"Database connection established: {_db_instance.engine.url.render_as_string(hide_password=True)}")
        return _db_instance
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        _db_instance = None
        raise HandledException(ResponseCode.DATABASE_CONNECTION_ERROR, e=e)


def get_db() -> Generator[Session, None, None]:
    """데이터베이스 세션 의존성 주입 (요청별 세션)"""
    db = get_database()
    session = db.new_session()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_redis_client() -> Optional[RedisClient]:
    """Redis 클라이언트 의존성 주입 (싱글톤 패턴, 비활성/연결 실패 시 None)"""
    global _redis_instance

    if not settings.redis_enabled:
        return None

    if _redis_instance is not None:
        return _redis_instance

    client = RedisClient()
    if client.ping():
        logger.info("Redis connection established")
        _redis_instance = client
        return _redis_instance

    logger.warning("Redis connection failed, falling back to in-process aggregate locks")
    return None


def _retry_redis_locks(lock_manager: ResourceLockManager):
    """Redis 가 활성화돼 있는데 로컬 락으로 동작 중이면 주기적으로 재연결 시도"""
    global _last_redis_attempt

    if not settings.redis_enabled or lock_manager.is_distributed:
        return

    now = time.monotonic()
    if _last_redis_attempt is not None and now - _last_redis_attempt < settings.redis_retry_interval_seconds:
        return
    _last_redis_attempt = now

    redis_client = get_redis_client()
    if redis_client is not None:
        lock_manager.use_redis(redis_client)


def get_lock_manager() -> ResourceLockManager:
    """리소스별 집계 락 관리자 (프로세스 전역 싱글톤)"""
    global _lock_manager_instance, _last_redis_attempt

    if _lock_manager_instance is not None:
        _retry_redis_locks(_lock_manager_instance)
    else:
        _last_redis_attempt = time.monotonic()
        _lock_manager_instance = ResourceLockManager(
            redis_client=get_redis_client(),
            timeout_seconds=settings.rating_lock_timeout_seconds
        )
        logger.info(
            "Aggregate lock manager created ({})".format(
                "redis" if _lock_manager_instance.is_distributed else "in-process"
            )
        )
    return _lock_manager_instance


def get_aggregate_service(
    db: Session = Depends(get_db),
    lock_manager: ResourceLockManager = Depends(get_lock_manager)
) -> AggregateService:
    """평가 집계 서비스 의존성 주입"""
    return AggregateService(db=db, lock_manager=lock_manager)


def get_rating_service(
    db: Session = Depends(get_db),
    aggregate_service: AggregateService = Depends(get_aggregate_service)
) -> RatingService:
    """평가 서비스 의존성 주입"""
    return RatingService(db=db, aggregate_service=aggregate_service)


def get_resource_service(
    db: Session = Depends(get_db)
) -> ResourceService:
    """리소스 서비스 의존성 주입"""
    return ResourceService(db=db)


def get_current_user(request: Request) -> dict:
    """
    JWT 토큰에서 사용자 정보를 추출하는 의존성 함수

    사용법:
        @router.get("/example")
        def example_endpoint(user: dict = Depends(get_current_user)):
            user_id = user.get("user_id")
            ...

    Returns:
        dict: JWT payload (user_id, sub, id, role 등 포함)

    Raises:
        HandledException: 토큰이 없거나 사용자 ID가 없는 경우 (401)
    """
    # 미들웨어에서 검증된 payload 가져오기
    payload = getattr(request.state, "jwt_payload", None)
    if payload is None:
        raise HandledException(ResponseCode.AUTH_TOKEN_MISSING)

    return payload


def get_current_user_id(request: Request) -> str:
    """JWT 토큰에서 사용자 ID를 추출하는 의존성 함수"""
    payload = get_current_user(request)
    # 다양한 필드명 지원 (user_id, sub, id)
    user_id = payload.get("user_id") or payload.get("sub") or payload.get("id")

    if not user_id:
        raise HandledException(ResponseCode.AUTH_TOKEN_INVALID, msg="사용자 ID를 찾을 수 없습니다.")

    return str(user_id)


def get_current_user_role(request: Request) -> str:
    """JWT 토큰에서 역할을 추출 (기본값 user)"""
    payload = get_current_user(request)
    return payload.get("role") or "user"
