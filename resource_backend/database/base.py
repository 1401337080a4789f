# -*- coding: utf-8 -*-
"""Database module."""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, orm
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# 모델 import는 __init__.py에서 처리


__all__ = [
    "Base",
    "Database",
]

Base = declarative_base()


class Database:
    def __init__(self, database_url: str, echo: bool = False):
        """
        database_url: SQLAlchemy URL (postgresql://..., sqlite:///...)
        """
        engine_kwargs = {"echo": echo}
        if database_url.startswith("sqlite"):
            # FastAPI 워커 스레드에서 같은 커넥션을 사용
            engine_kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
            if database_url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.database_url = database_url
        self._engine = create_engine(database_url, **engine_kwargs)
        self._session_factory = orm.sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self._engine,
        )

    @property
    def engine(self):
        return self._engine

    @property
    def is_sqlite(self) -> bool:
        return self._engine.dialect.name == "sqlite"

    def create_database(self, checkfirst=True):
        """
        테이블 생성
        checkfirst: True면 기존 테이블이 있으면 건너뛰고, False면 무조건 생성 시도
        """
        try:
            Base.metadata.create_all(bind=self._engine, checkfirst=checkfirst)
            logger.info("모든 테이블 생성 완료 (RESOURCES, RATINGS)")
        except Exception as e:
            logger.error("테이블 생성 실패: " + str(e))
            raise e

    def drop_database(self):
        """테이블 삭제 (테스트용)"""
        Base.metadata.drop_all(bind=self._engine)

    def new_session(self) -> orm.Session:
        return self._session_factory()

    @contextmanager
    def session(self):
        """
        요청 범위 밖(스크립트, 배치)에서 사용하는 세션 컨텍스트
        """
        session = self._session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """데이터베이스 연결 종료"""
        if hasattr(self, '_engine'):
            self._engine.dispose()
