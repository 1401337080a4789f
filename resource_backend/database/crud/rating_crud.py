# _*_ coding: utf-8 _*_
"""Rating CRUD operations with database."""
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from resource_backend.database.models.rating_models import Rating
from resource_backend.database.models.resource_models import Resource
from resource_backend.types.response.exceptions import DuplicateRatingError, HandledException
from resource_backend.types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)

STAR_VALUES = (1, 2, 3, 4, 5)


class RatingCRUD:
    """리소스 평가 관련 CRUD 작업을 처리하는 클래스"""

    def __init__(self, session: Session):
        self.session = session

    def create_rating(
        self,
        rating_id: str,
        user_id: str,
        resource_id: str,
        stars: int,
        review: str = None
    ) -> Rating:
        """평가 생성

        (user_id, resource_id) 유니크 제약에 걸리면 DuplicateRatingError 를 발생시킨다.
        """
        try:
            now = datetime.now()
            rating = Rating(
                rating_id=rating_id,
                user_id=user_id,
                resource_id=resource_id,
                stars=stars,
                review=review or "",
                created_at=now,
                updated_at=now
            )
            self.session.add(rating)
            self.session.commit()
            self.session.refresh(rating)
            return rating
        except IntegrityError as e:
            self.session.rollback()
            if self.get_user_rating(user_id, resource_id) is not None:
                logger.info(f"Duplicate rating insert detected: user_id={user_id}, resource_id={resource_id}")
                raise DuplicateRatingError(user_id, resource_id, e=e)
            logger.error(f"Integrity error creating rating: {str(e)}")
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)
        except Exception as e:
            logger.error(f"Database error creating rating: {str(e)}")
            self.session.rollback()
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def get_rating(self, rating_id: str) -> Optional[Rating]:
        """평가 ID로 조회"""
        try:
            return self.session.query(Rating).filter(
                Rating.rating_id == rating_id
            ).first()
        except Exception as e:
            logger.error(f"Database error getting rating: {str(e)}")
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def get_user_rating(self, user_id: str, resource_id: str) -> Optional[Rating]:
        """사용자가 리소스에 남긴 평가 조회 (없으면 None)"""
        try:
            return self.session.query(Rating).filter(
                Rating.user_id == user_id,
                Rating.resource_id == resource_id
            ).first()
        except Exception as e:
            logger.error(f"Database error getting user rating: {str(e)}")
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def update_rating(self, rating: Rating, stars: int, review: str = None) -> Rating:
        """평가 수정 (review 는 전달된 경우에만 덮어쓴다)"""
        try:
            rating.stars = stars
            if review is not None:
                rating.review = review
            rating.updated_at = datetime.now()

            self.session.commit()
            self.session.refresh(rating)
            return rating
        except Exception as e:
            logger.error(f"Database error updating rating: {str(e)}")
            self.session.rollback()
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def delete_rating(self, rating: Rating) -> None:
        """평가 삭제 (하드 삭제)"""
        try:
            self.session.delete(rating)
            self.session.commit()
        except Exception as e:
            logger.error(f"Database error deleting rating: {str(e)}")
            self.session.rollback()
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def get_resource_ratings(self, resource_id: str, skip: int = 0, limit: int = 10) -> Tuple[List[Rating], int]:
        """리소스의 평가 목록 (최신순)"""
        try:
            query = self.session.query(Rating).filter(Rating.resource_id == resource_id)
            total = query.count()
            ratings = query.order_by(
                desc(Rating.created_at),
                desc(Rating.rating_id)
            ).offset(skip).limit(limit).all()
            return ratings, total
        except Exception as e:
            logger.error(f"Database error getting resource ratings: {str(e)}")
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def get_user_ratings(self, user_id: str, skip: int = 0, limit: int = 10) -> Tuple[List[Tuple[Rating, Resource]], int]:
        """사용자의 평가 목록 (최신순, 리소스 정보 포함)"""
        try:
            total = self.session.query(func.count(Rating.rating_id)).filter(
                Rating.user_id == user_id
            ).scalar()
            rows = self.session.query(Rating, Resource).join(
                Resource,
                Rating.resource_id == Resource.resource_id
            ).filter(
                Rating.user_id == user_id
            ).order_by(
                desc(Rating.created_at),
                desc(Rating.rating_id)
            ).offset(skip).limit(limit).all()
            return [(rating, resource) for rating, resource in rows], total or 0
        except Exception as e:
            logger.error(f"Database error getting user ratings: {str(e)}")
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def get_rating_summary(self, resource_id: str) -> Tuple[int, int]:
        """리소스의 현재 평가 개수와 별점 합계 (count, sum)"""
        try:
            count, total = self.session.query(
                func.count(Rating.rating_id),
                func.coalesce(func.sum(Rating.stars), 0)
            ).filter(
                Rating.resource_id == resource_id
            ).one()
            return int(count), int(total)
        except Exception as e:
            logger.error(f"Database error summarizing ratings: {str(e)}")
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    def get_star_distribution(self, resource_id: str) -> Dict[int, int]:
        """별점(1-5)별 평가 개수. 개수가 0인 별점도 포함"""
        try:
            rows = self.session.query(
                Rating.stars,
                func.count(Rating.rating_id)
            ).filter(
                Rating.resource_id == resource_id
            ).group_by(Rating.stars).all()

            distribution = {star: 0 for star in STAR_VALUES}
            for stars, count in rows:
                if stars in distribution:
                    distribution[stars] = int(count)
                else:
                    logger.warning(f"Out-of-range stars value {stars} for resource {resource_id}")
            return distribution
        except Exception as e:
            logger.error(f"Database error getting star distribution: {str(e)}")
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

