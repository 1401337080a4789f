# _*_ coding: utf-8 _*_
"""Rating aggregate recomputation for resources.

Resource.stars / Resource.total_ratings are derived from the live RATINGS
rows. This module is the only writer of those two columns: every rating
create, update and delete ends with an explicit ``recompute`` call for the
affected resource.

``recompute`` is a full re-derivation (never an incremental update of a
running mean), so it is idempotent and any earlier stale value is repaired
by the next call.
"""
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

from sqlalchemy.orm import Session

from resource_backend.core.locks import ResourceLockManager
from resource_backend.database.crud.rating_crud import RatingCRUD
from resource_backend.database.crud.resource_crud import ResourceCRUD
from resource_backend.types.response.exceptions import HandledException
from resource_backend.types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceAggregate:
    resource_id: str
    stars: float
    total_ratings: int


def average_stars(total_ratings: int, stars_sum: int, digits: int = 1) -> float:
    """평균 별점을 소수점 digits 자리로 반올림 (round-half-away-from-zero)

    평가가 없으면 0.
    """
    if total_ratings <= 0:
        return 0.0
    quantum = Decimal(1).scaleb(-digits)
    mean = Decimal(stars_sum) / Decimal(total_ratings)
    return float(mean.quantize(quantum, rounding=ROUND_HALF_UP))


def average_from_distribution(distribution: Dict[int, int]) -> float:
    total = sum(distribution.values())
    stars_sum = sum(star * count for star, count in distribution.items())
    return average_stars(total, stars_sum)


class AggregateService:
    """리소스 평가 집계 재계산 서비스"""

    def __init__(self, db: Session, lock_manager: ResourceLockManager):
        if db is None:
            raise ValueError("Database session is required")

        self.db = db
        self.lock_manager = lock_manager
        self.rating_crud = RatingCRUD(db)
        self.resource_crud = ResourceCRUD(db)

    def recompute(self, resource_id: str) -> ResourceAggregate:
        """resource_id 의 평가 집계를 현재 RATINGS 로부터 다시 계산해 기록

        같은 리소스에 대한 재계산은 락으로 직렬화되며, 락 안에서 평가 집합을
        새로 읽으므로 동시에 들어온 평가가 모두 반영된다.
        """
        with self.lock_manager.lock(resource_id):
            try:
                resource = self.resource_crud.get_resource_for_update(resource_id)
                if resource is None:
                    raise HandledException(ResponseCode.RESOURCE_NOT_FOUND, msg=resource_id)

                total_ratings, stars_sum = self.rating_crud.get_rating_summary(resource_id)
                stars = average_stars(total_ratings, stars_sum)

                self.resource_crud.set_rating_aggregate(resource_id, stars, total_ratings)
            except HandledException:
                self.db.rollback()
                raise
            except Exception as e:
                self.db.rollback()
                raise HandledException(ResponseCode.RATING_AGGREGATE_ERROR, e=e)

        logger.debug(
            f"Recomputed rating aggregate: resource_id={resource_id}, "
            f"stars={stars}, total_ratings={total_ratings}"
        )
        return ResourceAggregate(resource_id=resource_id, stars=stars, total_ratings=total_ratings)

    def recompute_all(self) -> List[ResourceAggregate]:
        """모든 리소스(비활성 포함)의 집계를 재계산"""
        results = []
        for resource_id in self.resource_crud.get_all_resource_ids():
            results.append(self.recompute(resource_id))
        logger.info(f"Recomputed rating aggregates for {len(results)} resources")
        return results
