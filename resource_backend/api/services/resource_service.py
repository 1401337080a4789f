# _*_ coding: utf-8 _*_
"""Resource Service for handling study resource operations."""
import logging
from typing import Dict, List, Tuple

from sqlalchemy.orm import Session

from resource_backend.database.crud.resource_crud import ResourceCRUD
from resource_backend.database.models.resource_models import Resource
from resource_backend.types.request.resource_request import CreateResourceRequest, ResourceListQuery
from resource_backend.types.response.exceptions import HandledException
from resource_backend.types.response.response_code import ResponseCode
from resource_backend.utils.pagination import build_pagination, get_skip
from resource_backend.utils.uuid_gen import gen

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


class ResourceService:
    """학습 자료 서비스를 관리하는 클래스"""

    def __init__(self, db: Session):
        if db is None:
            raise ValueError("Database session is required")

        self.db = db
        self.resource_crud = ResourceCRUD(db)

    def create_resource(self, user_id: str, request: CreateResourceRequest) -> Resource:
        """리소스 등록 (파일은 이미 Blob Storage 에 있음)"""
        resource = self.resource_crud.create_resource(
            resource_id=gen(),
            title=request.title,
            description=request.description,
            exam_category=request.exam_category.value,
            section=request.section.value,
            file_url=request.file_url,
            file_name=request.file_name,
            file_size=request.file_size,
            file_type=request.file_type.value,
            uploaded_by=user_id,
            tags=request.tags
        )
        logger.info(f"Resource created: resource_id={resource.resource_id}, uploaded_by={user_id}")
        return resource

    def get_resource(self, resource_id: str) -> Resource:
        """리소스 조회"""
        resource = self.resource_crud.get_resource(resource_id)
        if not resource:
            raise HandledException(ResponseCode.RESOURCE_NOT_FOUND, msg=resource_id)
        return resource

    def list_resources(self, query: ResourceListQuery) -> Tuple[List[Resource], Dict]:
        """리소스 목록 조회 (분류/섹션 필터, 검색, 정렬)"""
        search = query.search.strip() if query.search else None
        resources, total = self.resource_crud.get_resources(
            skip=get_skip(query.page, query.limit),
            limit=query.limit,
            exam_category=query.exam_category.value if query.exam_category else None,
            section=query.section.value if query.section else None,
            search=search or None,
            sort=query.sort.value
        )
        return resources, build_pagination(query.page, query.limit, total, len(resources))

    def list_user_resources(self, user_id: str, page: int = 1, limit: int = 10) -> Tuple[List[Resource], Dict]:
        """업로더 본인의 리소스 목록"""
        resources, total = self.resource_crud.get_resources(
            skip=get_skip(page, limit),
            limit=limit,
            uploaded_by=user_id
        )
        return resources, build_pagination(page, limit, total, len(resources))

    def record_download(self, resource_id: str) -> Tuple[str, int]:
        """다운로드 수 증가 후 (file_url, download_count) 반환"""
        resource = self.get_resource(resource_id)
        download_count = self.resource_crud.increment_download_count(resource_id)
        if download_count is None:
            raise HandledException(ResponseCode.RESOURCE_NOT_FOUND, msg=resource_id)
        return resource.file_url, download_count

    def delete_resource(self, resource_id: str, user_id: str, role: str = "user") -> None:
        """리소스 비활성화 (업로더 또는 관리자만 가능)"""
        resource = self.get_resource(resource_id)
        if resource.uploaded_by != user_id and role != ADMIN_ROLE:
            raise HandledException(ResponseCode.RESOURCE_ACCESS_DENIED)

        self.resource_crud.deactivate_resource(resource)
        logger.info(f"Resource deactivated: resource_id={resource_id}, by={user_id}")
