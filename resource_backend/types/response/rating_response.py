# _*_ coding: utf-8 _*_
"""Rating response models."""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from .base import CamelModel


class RatedResourceSummary(CamelModel):
    """사용자 평가 목록에 포함되는 리소스 요약"""
    resource_id: str = Field(..., description="리소스 ID")
    title: str = Field(..., description="제목")
    exam_category: str = Field(..., description="시험 분류")
    section: str = Field(..., description="섹션")
    file_url: Optional[str] = Field(default=None, description="파일 URL")


class RatingResponse(CamelModel):
    """평가 응답 모델"""
    rating_id: str = Field(..., description="평가 ID")
    user_id: str = Field(..., description="평가한 사용자 ID")
    resource_id: str = Field(..., description="리소스 ID")
    stars: int = Field(..., description="평가 점수 (1-5)")
    review: Optional[str] = Field(default=None, description="리뷰")
    created_at: Optional[datetime] = Field(default=None, description="생성 시간")
    updated_at: Optional[datetime] = Field(default=None, description="수정 시간")
    resource: Optional[RatedResourceSummary] = Field(default=None, description="리소스 요약")


class RatingPagination(CamelModel):
    """평가 목록 페이지 정보"""
    current_page: int
    total_pages: int
    total_ratings: int
    has_next: bool
    has_prev: bool


class SubmitRatingResponse(CamelModel):
    """평가 생성/수정 응답 모델"""
    message: str = Field(..., description="응답 메시지")
    created: bool = Field(..., description="신규 생성 여부")
    rating: RatingResponse = Field(..., description="저장된 평가")


class RatingListResponse(CamelModel):
    """평가 목록 응답 모델"""
    ratings: List[RatingResponse] = Field(default_factory=list)
    pagination: RatingPagination


class RatingStatsResponse(CamelModel):
    """평가 통계 응답 모델"""
    average_stars: float = Field(..., description="평균 별점 (소수점 1자리)")
    total_ratings: int = Field(..., description="평가 개수")
    star_distribution: Dict[int, int] = Field(..., description="별점별 개수 (1-5)")
