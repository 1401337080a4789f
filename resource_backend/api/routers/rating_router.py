# _*_ coding: utf-8 _*_
"""Rating REST API endpoints."""
import logging

from fastapi import APIRouter, Depends, Query

from resource_backend.api.services.rating_service import RatingService
from resource_backend.config import settings
from resource_backend.core.dependencies import get_current_user_id, get_rating_service
from resource_backend.types.request.rating_request import SubmitRatingRequest
from resource_backend.types.response.base import MessageResponse
from resource_backend.types.response.rating_response import (
    RatedResourceSummary,
    RatingListResponse,
    RatingPagination,
    RatingResponse,
    RatingStatsResponse,
    SubmitRatingResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["rating"])

PAGE_QUERY = Query(1, ge=1, description="페이지 번호")
LIMIT_QUERY = Query(settings.rating_page_size_default, ge=1, le=settings.rating_page_size_max, description="페이지 크기")


def _to_pagination(pagination: dict) -> RatingPagination:
    return RatingPagination(
        current_page=pagination["current_page"],
        total_pages=pagination["total_pages"],
        total_ratings=pagination["total"],
        has_next=pagination["has_next"],
        has_prev=pagination["has_prev"]
    )


@router.post("/ratings", response_model=SubmitRatingResponse, response_model_by_alias=True)
def submit_rating(
    request: SubmitRatingRequest,
    user_id: str = Depends(get_current_user_id),
    rating_service: RatingService = Depends(get_rating_service)
):
    """리소스 평가 생성 또는 수정"""
    # Service Layer에서 전파된 HandledException은 Global Exception Handler가 처리
    rating, created = rating_service.submit_rating(
        user_id=user_id,
        resource_id=request.resource_id,
        stars=request.stars,
        review=request.review
    )

    return SubmitRatingResponse(
        message="평가가 저장되었습니다." if created else "평가가 수정되었습니다.",
        created=created,
        rating=RatingResponse.model_validate(rating)
    )


@router.get("/ratings/resource/{resource_id}", response_model=RatingListResponse, response_model_by_alias=True)
def get_resource_ratings(
    resource_id: str,
    page: int = PAGE_QUERY,
    limit: int = LIMIT_QUERY,
    rating_service: RatingService = Depends(get_rating_service)
):
    """리소스의 평가 목록 (최신순)"""
    ratings, pagination = rating_service.list_resource_ratings(resource_id, page, limit)

    return RatingListResponse(
        ratings=[RatingResponse.model_validate(rating) for rating in ratings],
        pagination=_to_pagination(pagination)
    )


def _user_ratings_response(rows, pagination: dict) -> RatingListResponse:
    ratings = []
    for rating, resource in rows:
        item = RatingResponse.model_validate(rating)
        item.resource = RatedResourceSummary.model_validate(resource)
        ratings.append(item)
    return RatingListResponse(ratings=ratings, pagination=_to_pagination(pagination))


@router.get("/ratings/my-ratings", response_model=RatingListResponse, response_model_by_alias=True)
def get_my_ratings(
    page: int = PAGE_QUERY,
    limit: int = LIMIT_QUERY,
    user_id: str = Depends(get_current_user_id),
    rating_service: RatingService = Depends(get_rating_service)
):
    """로그인한 사용자의 평가 목록"""
    rows, pagination = rating_service.list_user_ratings(user_id, page, limit)
    return _user_ratings_response(rows, pagination)


@router.get("/ratings/user/{user_id}", response_model=RatingListResponse, response_model_by_alias=True)
def get_user_ratings(
    user_id: str,
    page: int = PAGE_QUERY,
    limit: int = LIMIT_QUERY,
    rating_service: RatingService = Depends(get_rating_service)
):
    """특정 사용자의 평가 목록"""
    rows, pagination = rating_service.list_user_ratings(user_id, page, limit)
    return _user_ratings_response(rows, pagination)


@router.delete("/ratings/{rating_id}", response_model=MessageResponse)
def delete_rating(
    rating_id: str,
    user_id: str = Depends(get_current_user_id),
    rating_service: RatingService = Depends(get_rating_service)
):
    """평가 삭제 (본인 평가만)"""
    rating_service.delete_rating(rating_id, user_id)
    return MessageResponse(message="평가가 삭제되었습니다.")


@router.get("/ratings/stats/{resource_id}", response_model=RatingStatsResponse, response_model_by_alias=True)
def get_rating_stats(
    resource_id: str,
    rating_service: RatingService = Depends(get_rating_service)
):
    """리소스 평가 통계 (평균, 개수, 별점 분포)"""
    stats = rating_service.get_rating_stats(resource_id)
    return RatingStatsResponse(**stats)
