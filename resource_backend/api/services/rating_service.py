# _*_ coding: utf-8 _*_
"""Rating Service for handling rating lifecycle operations."""
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from resource_backend.api.services.aggregate_service import (
    AggregateService,
    average_from_distribution,
)
from resource_backend.database.crud.rating_crud import RatingCRUD
from resource_backend.database.crud.resource_crud import ResourceCRUD
from resource_backend.database.models.rating_models import Rating
from resource_backend.database.models.resource_models import Resource
from resource_backend.types.request.rating_request import MAX_REVIEW_LENGTH
from resource_backend.types.response.exceptions import DuplicateRatingError, HandledException
from resource_backend.types.response.response_code import ResponseCode
from resource_backend.utils.pagination import build_pagination, get_skip
from resource_backend.utils.uuid_gen import gen

logger = logging.getLogger(__name__)

MIN_STARS = 1
MAX_STARS = 5


class RatingService:
    """평가 생성/수정/삭제와 집계 재계산을 조율하는 서비스"""

    def __init__(self, db: Session, aggregate_service: AggregateService):
        if db is None:
            raise ValueError("Database session is required")

        self.db = db
        self.rating_crud = RatingCRUD(db)
        self.resource_crud = ResourceCRUD(db)
        self.aggregate_service = aggregate_service

    @staticmethod
    def validate_rating_input(stars, review: Optional[str]) -> Optional[str]:
        """별점/리뷰 검증. 정리된 review 반환"""
        if isinstance(stars, bool) or not isinstance(stars, int) or not MIN_STARS <= stars <= MAX_STARS:
            raise HandledException(ResponseCode.RATING_INVALID_STARS, msg=f"stars={stars!r}")

        if review is not None:
            review = review.strip()
            if len(review) > MAX_REVIEW_LENGTH:
                raise HandledException(ResponseCode.RATING_REVIEW_TOO_LONG, msg=f"length={len(review)}")
        return review

    def submit_rating(
        self,
        user_id: str,
        resource_id: str,
        stars: int,
        review: Optional[str] = None
    ) -> Tuple[Rating, bool]:
        """평가 생성 또는 수정 후 집계 재계산

        Returns:
            (저장된 평가, 신규 생성 여부)
        """
        try:
            review = self.validate_rating_input(stars, review)

            resource = self.resource_crud.get_resource(resource_id)
            if not resource:
                raise HandledException(ResponseCode.RESOURCE_NOT_FOUND, msg=resource_id)

            if resource.uploaded_by == user_id:
                raise HandledException(ResponseCode.RATING_SELF_RATING)

            existing_rating = self.rating_crud.get_user_rating(user_id, resource_id)
            if existing_rating:
                rating = self.rating_crud.update_rating(existing_rating, stars, review)
                created = False
            else:
                try:
                    rating = self.rating_crud.create_rating(
                        rating_id=gen(),
                        user_id=user_id,
                        resource_id=resource_id,
                        stars=stars,
                        review=review
                    )
                    created = True
                except DuplicateRatingError:
                    # 존재 확인과 INSERT 사이에 같은 사용자의 요청이 먼저 저장된 경우
                    logger.info(f"Rating insert raced, updating instead: user_id={user_id}, resource_id={resource_id}")
                    existing_rating = self.rating_crud.get_user_rating(user_id, resource_id)
                    rating = self.rating_crud.update_rating(existing_rating, stars, review)
                    created = False

            self.aggregate_service.recompute(resource_id)

            logger.info(
                f"Rating {'created' if created else 'updated'}: rating_id={rating.rating_id}, "
                f"user_id={user_id}, resource_id={resource_id}, stars={stars}"
            )
            return rating, created
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)

    def delete_rating(self, rating_id: str, requester_id: str) -> str:
        """평가 삭제 후 집계 재계산. 삭제된 평가의 resource_id 반환"""
        try:
            rating = self.rating_crud.get_rating(rating_id)
            if not rating:
                raise HandledException(ResponseCode.RATING_NOT_FOUND, msg=rating_id)

            # 평가한 사용자만 삭제 가능
            if rating.user_id != requester_id:
                raise HandledException(ResponseCode.RATING_FORBIDDEN)

            resource_id = rating.resource_id
            self.rating_crud.delete_rating(rating)
            self.aggregate_service.recompute(resource_id)

            logger.info(f"Rating deleted: rating_id={rating_id}, resource_id={resource_id}")
            return resource_id
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)

    def list_resource_ratings(self, resource_id: str, page: int = 1, limit: int = 10) -> Tuple[List[Rating], Dict]:
        """리소스의 평가 목록 (최신순)"""
        resource = self.resource_crud.get_resource(resource_id)
        if not resource:
            raise HandledException(ResponseCode.RESOURCE_NOT_FOUND, msg=resource_id)

        ratings, total = self.rating_crud.get_resource_ratings(resource_id, get_skip(page, limit), limit)
        return ratings, build_pagination(page, limit, total, len(ratings))

    def list_user_ratings(self, user_id: str, page: int = 1, limit: int = 10) -> Tuple[List[Tuple[Rating, Resource]], Dict]:
        """사용자의 평가 목록 (최신순)"""
        rows, total = self.rating_crud.get_user_ratings(user_id, get_skip(page, limit), limit)
        return rows, build_pagination(page, limit, total, len(rows))

    def get_rating_stats(self, resource_id: str) -> Dict:
        """평가 통계 - RATINGS 에서 직접 계산 (비정규화 컬럼을 참조하지 않음)"""
        resource = self.resource_crud.get_resource(resource_id, active_only=False)
        if not resource:
            raise HandledException(ResponseCode.RESOURCE_NOT_FOUND, msg=resource_id)

        distribution = self.rating_crud.get_star_distribution(resource_id)
        return {
            "average_stars": average_from_distribution(distribution),
            "total_ratings": sum(distribution.values()),
            "star_distribution": distribution,
        }
