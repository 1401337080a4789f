"""
Per-resource aggregate locks: in-process registry, Redis-backed path, and
concurrent submissions converging on the right aggregate.
"""

import threading
import time

import pytest
import redis.exceptions

from resource_backend.api.services.aggregate_service import AggregateService
from resource_backend.api.services.rating_service import RatingService
from resource_backend.core import dependencies
from resource_backend.core.locks import ResourceLockManager
from resource_backend.database.crud.resource_crud import ResourceCRUD
from resource_backend.types.response.exceptions import HandledException
from resource_backend.types.response.response_code import ResponseCode


class FakeRedisLock:
    def __init__(self, acquired=True, acquire_error=None, release_error=None):
        self.acquired = acquired
        self.acquire_error = acquire_error
        self.release_error = release_error
        self.released = False

    def acquire(self):
        if self.acquire_error is not None:
            raise self.acquire_error
        return self.acquired

    def release(self):
        if self.release_error is not None:
            raise self.release_error
        self.released = True


class FakeRedisClient:
    def __init__(self, lock):
        self._lock = lock
        self.calls = []

    def lock(self, name, timeout, blocking_timeout):
        self.calls.append((name, timeout, blocking_timeout))
        return self._lock


def test_local_lock_registry_is_cleaned_up():
    manager = ResourceLockManager(timeout_seconds=1)

    with manager.lock("res-1"):
        with manager.lock("res-2"):
            assert manager.active_keys() == 2
        assert manager.active_keys() == 1

    assert manager.active_keys() == 0
    assert manager.is_distributed is False


def test_local_lock_released_on_error():
    manager = ResourceLockManager(timeout_seconds=1)

    with pytest.raises(ValueError):
        with manager.lock("res-1"):
            raise ValueError("boom")

    assert manager.active_keys() == 0
    # 다시 획득할 수 있어야 한다
    with manager.lock("res-1"):
        pass


def test_local_lock_timeout():
    manager = ResourceLockManager(timeout_seconds=0.05)

    with manager.lock("res-1"):
        with pytest.raises(HandledException) as exc_info:
            with manager.lock("res-1"):
                pass

    assert exc_info.value.resp_code == ResponseCode.RATING_AGGREGATE_LOCK_TIMEOUT
    assert exc_info.value.http_status_code == 500
    assert manager.active_keys() == 0


def test_local_lock_serializes_same_resource():
    manager = ResourceLockManager(timeout_seconds=5)
    inside = []
    overlaps = []

    def _worker():
        with manager.lock("res-1"):
            if inside:
                overlaps.append(True)
            inside.append(True)
            threading.Event().wait(0.01)
            inside.pop()

    threads = [threading.Thread(target=_worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert overlaps == []
    assert manager.active_keys() == 0


def test_redis_lock_acquire_and_release():
    fake_lock = FakeRedisLock()
    client = FakeRedisClient(fake_lock)
    manager = ResourceLockManager(redis_client=client, timeout_seconds=2)

    with manager.lock("res-1"):
        pass

    assert manager.is_distributed is True
    assert client.calls == [("rating-aggregate:res-1", 6, 2)]
    assert fake_lock.released is True


def test_redis_lock_timeout():
    manager = ResourceLockManager(redis_client=FakeRedisClient(FakeRedisLock(acquired=False)), timeout_seconds=2)

    with pytest.raises(HandledException) as exc_info:
        with manager.lock("res-1"):
            pass

    assert exc_info.value.resp_code == ResponseCode.RATING_AGGREGATE_LOCK_TIMEOUT


def test_redis_lock_connection_error():
    fake_lock = FakeRedisLock(acquire_error=redis.exceptions.ConnectionError("refused"))
    manager = ResourceLockManager(redis_client=FakeRedisClient(fake_lock), timeout_seconds=2)

    with pytest.raises(HandledException) as exc_info:
        with manager.lock("res-1"):
            pass

    assert exc_info.value.resp_code == ResponseCode.CACHE_CONNECTION_ERROR


def test_redis_lock_expired_before_release_is_ignored():
    fake_lock = FakeRedisLock(release_error=redis.exceptions.LockNotOwnedError("expired"))
    manager = ResourceLockManager(redis_client=FakeRedisClient(fake_lock), timeout_seconds=2)

    with manager.lock("res-1"):
        pass


def test_concurrent_submissions_converge(database, make_resource):
    """Parallel ratings on one resource leave an aggregate matching all of them."""
    resource_id = make_resource()
    manager = ResourceLockManager(timeout_seconds=30)
    stars_by_user = {f"user-{index}": index % 5 + 1 for index in range(8)}
    errors = []

    def _submit(user_id, stars):
        session = database.new_session()
        try:
            service = RatingService(db=session, aggregate_service=AggregateService(db=session, lock_manager=manager))
            service.submit_rating(user_id, resource_id, stars)
        except Exception as e:
            errors.append(e)
        finally:
            session.close()

    threads = [threading.Thread(target=_submit, args=item) for item in stars_by_user.items()]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    with database.session() as session:
        resource = ResourceCRUD(session).get_resource(resource_id)
        assert resource.total_ratings == 8
        # 1+2+3+4+5+1+2+3 = 21, 21 / 8 = 2.625
        assert resource.stars == 2.6
    assert manager.active_keys() == 0


def test_lock_manager_switches_to_redis_once_reachable(monkeypatch):
    """A worker that started without Redis picks it up after the retry interval."""
    fake_client = FakeRedisClient(FakeRedisLock())
    manager = ResourceLockManager(timeout_seconds=1)
    monkeypatch.setattr(dependencies.settings, "redis_enabled", True)
    monkeypatch.setattr(dependencies.settings, "redis_retry_interval_seconds", 30.0)
    monkeypatch.setattr(dependencies, "_lock_manager_instance", manager)
    monkeypatch.setattr(dependencies, "get_redis_client", lambda: fake_client)

    # 재시도 간격 이내에는 로컬 락 유지
    monkeypatch.setattr(dependencies, "_last_redis_attempt", time.monotonic())
    assert dependencies.get_lock_manager().is_distributed is False

    monkeypatch.setattr(dependencies, "_last_redis_attempt", time.monotonic() - 31)
    assert dependencies.get_lock_manager() is manager
    assert manager.is_distributed is True

    with manager.lock("res-1"):
        pass
    assert fake_client.calls == [("rating-aggregate:res-1", 3, 1)]


def test_lock_manager_stays_local_while_redis_down(monkeypatch):
    manager = ResourceLockManager(timeout_seconds=1)
    monkeypatch.setattr(dependencies.settings, "redis_enabled", True)
    monkeypatch.setattr(dependencies, "_lock_manager_instance", manager)
    monkeypatch.setattr(dependencies, "_last_redis_attempt", None)
    monkeypatch.setattr(dependencies, "get_redis_client", lambda: None)

    assert dependencies.get_lock_manager().is_distributed is False
    assert dependencies._last_redis_attempt is not None
