# _*_ coding: utf-8 _*_
"""Resource CRUD operations with database."""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session

from resource_backend.database.models.resource_models import Resource
from resource_backend.types.response.exceptions import HandledException
from resource_backend.types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)


class ResourceCRUD:
    """학습 자료 관련 CRUD 작업을 처리하는 클래스"""

    SORT_COLUMNS = {
        "newest": (Resource.created_at,),
        "stars": (Resource.stars, Resource.total_ratings),
        "downloads": (Resource.download_count,),
    }

    def __init__(self, db: Session):
        self.db = db

    def create_resource(
        self,
        resource_id: str,
        title: str,
        description: str,
        exam_category: str,
        section: str,
        file_url: str,
        file_name: str,
        file_size: int,
        file_type: str,
        uploaded_by: str,
        tags: List[str] = None
    ) -> Resource:
        """리소스 생성 (평가 집계값은 0으로 시작)"""
        try:
            now = datetime.now()
            resource = Resource(
                resource_id=resource_id,
                title=title,
                description=description,
                exam_category=exam_category,
                section=section,
                file_url=file_url,
                file_name=file_name,
                file_size=file_size,
                file_type=file_type,
                uploaded_by=uploaded_by,
                tags=tags or [],
                stars=0,
                total_ratings=0,
                download_count=0,
                is_active=True,
                created_at=now,
                updated_at=now
            )
            self.db.add(resource)
            self.db.commit()
            self.db.refresh(resource)
            return resource
        except Exception as e:
            self.db.rollback()
            logger.error(f"Database error creating resource: {str(e)}")
            raise HandledException(ResponseCode.RESOURCE_CREATE_ERROR, e=e)

    def get_resource(self, resource_id: str, active_only: bool = True) -> Optional[Resource]:
        """리소스 조회"""
        try:
            query = self.db.query(Resource).filter(Resource.resource_id == resource_id)
            if active_only:
                query = query.filter(Resource.is_active == True)  # noqa: E712
            return query.first()
        except Exception as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def get_resource_for_update(self, resource_id: str) -> Optional[Resource]:
        """리소스 행 잠금 조회 (SELECT ... FOR UPDATE, 트랜잭션 종료 시 해제)

        비활성 리소스도 포함한다.
        """
        try:
            return self.db.query(Resource).filter(
                Resource.resource_id == resource_id
            ).with_for_update().populate_existing().first()
        except Exception as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def get_resources(
        self,
        skip: int = 0,
        limit: int = 10,
        exam_category: str = None,
        section: str = None,
        search: str = None,
        sort: str = "newest",
        uploaded_by: str = None
    ) -> Tuple[List[Resource], int]:
        """활성 리소스 목록 조회"""
        try:
            query = self.db.query(Resource).filter(Resource.is_active == True)  # noqa: E712

            if exam_category is not None:
                query = query.filter(Resource.exam_category == exam_category)

            if section is not None:
                query = query.filter(Resource.section == section)

            if uploaded_by is not None:
                query = query.filter(Resource.uploaded_by == uploaded_by)

            if search:
                pattern = f"%{search}%"
                query = query.filter(or_(
                    Resource.title.ilike(pattern),
                    Resource.description.ilike(pattern)
                ))

            total = query.count()
            columns = self.SORT_COLUMNS.get(sort, self.SORT_COLUMNS["newest"])
            order = [desc(column) for column in columns]
            if sort != "newest":
                order.append(desc(Resource.created_at))

            resources = query.order_by(*order).offset(skip).limit(limit).all()
            return resources, total
        except Exception as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def get_all_resource_ids(self) -> List[str]:
        """전체 리소스 ID (비활성 포함)"""
        try:
            return [row[0] for row in self.db.query(Resource.resource_id).all()]
        except Exception as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def set_rating_aggregate(self, resource_id: str, stars: float, total_ratings: int) -> int:
        """평가 집계값 기록 후 커밋. 갱신된 행 수 반환

        단일 UPDATE 문으로 두 컬럼을 함께 갱신한다.
        AggregateService.recompute 외에서는 호출하지 않는다.
        """
        try:
            updated = self.db.query(Resource).filter(
                Resource.resource_id == resource_id
            ).update(
                {
                    Resource.stars: stars,
                    Resource.total_ratings: total_ratings,
                },
                synchronize_session=False
            )
            self.db.commit()
            return updated
        except Exception as e:
            self.db.rollback()
            logger.error(f"Database error writing rating aggregate: {str(e)}")
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def increment_download_count(self, resource_id: str) -> Optional[int]:
        """다운로드 수 증가 (원자적 UPDATE). 리소스가 없으면 None"""
        try:
            updated = self.db.query(Resource).filter(
                Resource.resource_id == resource_id,
                Resource.is_active == True  # noqa: E712
            ).update(
                {Resource.download_count: Resource.download_count + 1},
                synchronize_session=False
            )
            self.db.commit()
            if not updated:
                return None
            resource = self.get_resource(resource_id)
            self.db.refresh(resource)
            return resource.download_count
        except HandledException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def deactivate_resource(self, resource: Resource) -> bool:
        """리소스 비활성화 (소프트 삭제)"""
        try:
            resource.is_active = False
            resource.updated_at = datetime.now()
            self.db.commit()
            return True
        except Exception as e:
            self.db.rollback()
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)
