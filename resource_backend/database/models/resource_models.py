# _*_ coding: utf-8 _*_
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql.expression import func, true

from resource_backend.database.base import Base

__all__ = [
    "Resource",
]


class Resource(Base):
    """학습 자료 테이블.

    STARS / TOTAL_RATINGS 는 평가 집계 결과를 비정규화한 값이며
    AggregateService.recompute 만 갱신한다.
    """
    __tablename__ = "RESOURCES"

    resource_id = Column('RESOURCE_ID', String(50), primary_key=True)
    title = Column('TITLE', String(200), nullable=False)
    description = Column('DESCRIPTION', Text, nullable=False)
    exam_category = Column('EXAM_CATEGORY', String(20), nullable=False)
    section = Column('SECTION', String(30), nullable=False)
    file_url = Column('FILE_URL', String(1000), nullable=False)
    file_name = Column('FILE_NAME', String(255), nullable=False)
    file_size = Column('FILE_SIZE', Integer, nullable=False)
    file_type = Column('FILE_TYPE', String(10), nullable=False)
    uploaded_by = Column('UPLOADED_BY', String(50), nullable=False)
    tags = Column('TAGS', JSON, nullable=False, default=list)

    # 평가 집계 (비정규화)
    stars = Column('STARS', Float, nullable=False, default=0, server_default='0')
    total_ratings = Column('TOTAL_RATINGS', Integer, nullable=False, default=0, server_default='0')

    download_count = Column('DOWNLOAD_COUNT', Integer, nullable=False, default=0, server_default='0')
    is_active = Column('IS_ACTIVE', Boolean, nullable=False, server_default=true())
    created_at = Column('CREATED_AT', DateTime, nullable=False, server_default=func.now())
    updated_at = Column('UPDATED_AT', DateTime, nullable=True, onupdate=func.now())

    __table_args__ = (
        Index('IX_RESOURCES_CATEGORY_SECTION', 'EXAM_CATEGORY', 'SECTION'),
        Index('IX_RESOURCES_UPLOADED_BY', 'UPLOADED_BY'),
        Index('IX_RESOURCES_STARS', 'STARS'),
        Index('IX_RESOURCES_CREATED_AT', 'CREATED_AT'),
    )
