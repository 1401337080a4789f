# _*_ coding: utf-8 _*_
from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql.expression import func

from resource_backend.database.base import Base

__all__ = [
    "Rating",
]


class Rating(Base):
    """리소스 평가 테이블 - 사용자당 리소스 하나에 평가 하나"""
    __tablename__ = "RATINGS"

    rating_id = Column('RATING_ID', String(50), primary_key=True)
    user_id = Column('USER_ID', String(50), nullable=False)
    resource_id = Column('RESOURCE_ID', String(50), ForeignKey('RESOURCES.RESOURCE_ID'), nullable=False)
    stars = Column('STARS', Integer, nullable=False)  # 1-5점
    review = Column('REVIEW', Text, nullable=False, default="", server_default="")
    created_at = Column('CREATED_AT', DateTime, nullable=False, server_default=func.now())
    updated_at = Column('UPDATED_AT', DateTime, nullable=True, onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('USER_ID', 'RESOURCE_ID', name='UQ_RATINGS_USER_RESOURCE'),
        Index('IX_RATINGS_USER_ID', 'USER_ID'),
        Index('IX_RATINGS_RESOURCE_ID', 'RESOURCE_ID'),
    )
