# _*_ coding: utf-8 _*_
"""Redis client for distributed locking."""
import logging
from typing import Optional

import redis

from resource_backend.config import settings

logger = logging.getLogger(__name__)


class RedisClient:
    """Redis 클라이언트 - 리소스별 집계 락 관리"""

    def __init__(self, host: str = None, port: int = None, db: int = None, password: Optional[str] = None):
        self.host = host or settings.redis_host
        self.port = port or settings.redis_port
        self.db = settings.redis_db if db is None else db
        self.password = password if password is not None else settings.redis_password

        self.redis_client = redis.Redis(
            host=self.host,
            port=self.port,
            db=self.db,
            password=self.password,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )

    def ping(self) -> bool:
        """Redis 연결 상태 확인"""
        try:
            return self.redis_client.ping()
        except redis.exceptions.RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    def lock(self, name: str, timeout: float, blocking_timeout: float):
        """분산 락 객체 반환 (redis-py Lock)

        timeout: 락 자동 해제 시간 (프로세스가 죽어도 락이 남지 않도록)
        blocking_timeout: 락 획득 대기 시간
        """
        return self.redis_client.lock(
            f"lock:{name}",
            timeout=timeout,
            blocking_timeout=blocking_timeout,
        )

    def close(self):
        self.redis_client.close()
