# _*_ coding: utf-8 _*_
"""Resource response models."""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class ResourceResponse(CamelModel):
    """리소스 응답 모델"""
    resource_id: str
    title: str
    description: str
    exam_category: str
    section: str
    file_url: str
    file_name: str
    file_size: int
    file_type: str
    uploaded_by: str
    tags: List[str] = Field(default_factory=list)
    stars: float = Field(default=0, description="평균 별점 (집계값)")
    total_ratings: int = Field(default=0, description="평가 개수 (집계값)")
    download_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ResourcePagination(CamelModel):
    """리소스 목록 페이지 정보"""
    current_page: int
    total_pages: int
    total_resources: int
    has_next: bool
    has_prev: bool


class ResourceListResponse(CamelModel):
    """리소스 목록 응답 모델"""
    resources: List[ResourceResponse] = Field(default_factory=list)
    pagination: ResourcePagination


class ResourceCreateResponse(CamelModel):
    """리소스 생성 응답 모델"""
    message: str = Field(default="리소스가 등록되었습니다.")
    resource: ResourceResponse


class ResourceDownloadResponse(CamelModel):
    """다운로드 응답 모델"""
    file_url: str
    download_count: int


class ResourceCategoriesResponse(CamelModel):
    """시험 분류/섹션 목록"""
    exam_categories: List[str]
    sections: List[str]
    file_types: List[str]
