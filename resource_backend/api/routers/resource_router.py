# _*_ coding: utf-8 _*_
"""Resource REST API endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from resource_backend.api.services.resource_service import ResourceService
from resource_backend.core.dependencies import (
    get_current_user_id,
    get_current_user_role,
    get_resource_service,
)
from resource_backend.types.request.resource_request import (
    CreateResourceRequest,
    ExamCategory,
    FileType,
    ResourceListQuery,
    ResourceSort,
    Section,
)
from resource_backend.types.response.base import MessageResponse
from resource_backend.types.response.resource_response import (
    ResourceCategoriesResponse,
    ResourceCreateResponse,
    ResourceDownloadResponse,
    ResourceListResponse,
    ResourcePagination,
    ResourceResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["resource"])


def _to_list_response(resources, pagination: dict) -> ResourceListResponse:
    return ResourceListResponse(
        resources=[ResourceResponse.model_validate(resource) for resource in resources],
        pagination=ResourcePagination(
            current_page=pagination["current_page"],
            total_pages=pagination["total_pages"],
            total_resources=pagination["total"],
            has_next=pagination["has_next"],
            has_prev=pagination["has_prev"]
        )
    )


@router.post("/resources", response_model=ResourceCreateResponse)
def create_resource(
    request: CreateResourceRequest,
    user_id: str = Depends(get_current_user_id),
    resource_service: ResourceService = Depends(get_resource_service)
):
    """리소스 등록 (파일 메타데이터)"""
    resource = resource_service.create_resource(user_id, request)
    return ResourceCreateResponse(resource=ResourceResponse.model_validate(resource))


@router.get("/resources", response_model=ResourceListResponse)
def get_resources(
    exam_category: Optional[ExamCategory] = Query(None, alias="examCategory", description="시험 분류 필터"),
    section: Optional[Section] = Query(None, description="섹션 필터"),
    search: Optional[str] = Query(None, max_length=100, description="제목/설명 검색어"),
    sort: ResourceSort = Query(ResourceSort.NEWEST, description="정렬 기준"),
    page: int = Query(1, ge=1, description="페이지 번호"),
    limit: int = Query(10, ge=1, le=100, description="페이지 크기"),
    resource_service: ResourceService = Depends(get_resource_service)
):
    """리소스 목록 조회"""
    query = ResourceListQuery(
        exam_category=exam_category,
        section=section,
        search=search,
        sort=sort,
        page=page,
        limit=limit
    )
    resources, pagination = resource_service.list_resources(query)
    return _to_list_response(resources, pagination)


@router.get("/resources/categories", response_model=ResourceCategoriesResponse)
def get_categories():
    """시험 분류, 섹션, 파일 형식 목록"""
    return ResourceCategoriesResponse(
        exam_categories=[category.value for category in ExamCategory],
        sections=[section.value for section in Section],
        file_types=[file_type.value for file_type in FileType]
    )


@router.get("/resources/my-resources", response_model=ResourceListResponse)
def get_my_resources(
    page: int = Query(1, ge=1, description="페이지 번호"),
    limit: int = Query(10, ge=1, le=100, description="페이지 크기"),
    user_id: str = Depends(get_current_user_id),
    resource_service: ResourceService = Depends(get_resource_service)
):
    """로그인한 사용자가 업로드한 리소스 목록"""
    resources, pagination = resource_service.list_user_resources(user_id, page, limit)
    return _to_list_response(resources, pagination)


@router.get("/resources/{resource_id}", response_model=ResourceResponse)
def get_resource(
    resource_id: str,
    resource_service: ResourceService = Depends(get_resource_service)
):
    """리소스 상세 조회 (비정규화된 평가 집계 포함)"""
    return ResourceResponse.model_validate(resource_service.get_resource(resource_id))


@router.post("/resources/{resource_id}/download", response_model=ResourceDownloadResponse)
def download_resource(
    resource_id: str,
    resource_service: ResourceService = Depends(get_resource_service)
):
    """다운로드 수 증가 후 파일 URL 반환"""
    file_url, download_count = resource_service.record_download(resource_id)
    return ResourceDownloadResponse(file_url=file_url, download_count=download_count)


@router.delete("/resources/{resource_id}", response_model=MessageResponse)
def delete_resource(
    resource_id: str,
    user_id: str = Depends(get_current_user_id),
    role: str = Depends(get_current_user_role),
    resource_service: ResourceService = Depends(get_resource_service)
):
    """리소스 삭제 (업로더 또는 관리자)"""
    resource_service.delete_resource(resource_id, user_id, role)
    return MessageResponse(message="리소스가 삭제되었습니다.")
