# _*_ coding: utf-8 _*_
"""Per-resource locks serializing rating aggregate recomputation."""
import logging
import threading
from contextlib import contextmanager
from typing import Dict

import redis.exceptions

from resource_backend.types.response.exceptions import HandledException
from resource_backend.types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)


class _KeyedLock:
    __slots__ = ("lock", "holders")

    def __init__(self):
        self.lock = threading.Lock()
        self.holders = 0


class ResourceLockManager:
    """resource_id 별 락 관리자

    Redis 클라이언트가 주어지면 여러 워커 프로세스 사이에서 공유되는 Redis 락을,
    없으면 프로세스 내부 threading.Lock 을 사용한다.
    사용하지 않는 키의 락은 마지막 보유자가 해제할 때 레지스트리에서 제거된다.
    """

    def __init__(self, redis_client=None, timeout_seconds: float = 10.0):
        self.redis_client = redis_client
        self.timeout_seconds = timeout_seconds
        self._registry: Dict[str, _KeyedLock] = {}
        self._registry_lock = threading.Lock()

    @property
    def is_distributed(self) -> bool:
        return self.redis_client is not None

    def use_redis(self, redis_client):
        """이후 획득하는 락부터 Redis 락을 사용

        이미 보유 중인 로컬 락은 그대로 해제된다.
        """
        self.redis_client = redis_client
        logger.info("Aggregate lock manager switched to redis locks")

    def active_keys(self) -> int:
        """현재 레지스트리에 남아 있는 로컬 락 개수"""
        with self._registry_lock:
            return len(self._registry)

    @contextmanager
    def lock(self, resource_id: str):
        if self.redis_client is not None:
            with self._redis_lock(resource_id):
                yield
        else:
            with self._local_lock(resource_id):
                yield

    @contextmanager
    def _local_lock(self, resource_id: str):
        with self._registry_lock:
            entry = self._registry.get(resource_id)
            if entry is None:
                entry = _KeyedLock()
                self._registry[resource_id] = entry
            entry.holders += 1

        acquired = entry.lock.acquire(timeout=self.timeout_seconds)
        try:
            if not acquired:
                logger.warning(f"Aggregate lock timeout: resource_id={resource_id}")
                raise HandledException(ResponseCode.RATING_AGGREGATE_LOCK_TIMEOUT, msg=resource_id)
            yield
        finally:
            if acquired:
                entry.lock.release()
            with self._registry_lock:
                entry.holders -= 1
                if entry.holders == 0:
                    self._registry.pop(resource_id, None)

    @contextmanager
    def _redis_lock(self, resource_id: str):
        lock = self.redis_client.lock(
            f"rating-aggregate:{resource_id}",
            timeout=self.timeout_seconds * 3,
            blocking_timeout=self.timeout_seconds,
        )
        try:
            acquired = lock.acquire()
        except redis.exceptions.RedisError as e:
            raise HandledException(ResponseCode.CACHE_CONNECTION_ERROR, e=e)
        if not acquired:
            logger.warning(f"Aggregate redis lock timeout: resource_id={resource_id}")
            raise HandledException(ResponseCode.RATING_AGGREGATE_LOCK_TIMEOUT, msg=resource_id)
        try:
            yield
        finally:
            try:
                lock.release()
            except redis.exceptions.LockError as e:
                # timeout 으로 이미 만료된 경우
                logger.warning(f"Aggregate redis lock already released: resource_id={resource_id}: {e}")

