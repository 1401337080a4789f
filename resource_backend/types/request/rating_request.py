# _*_ coding: utf-8 _*_
"""Rating request models."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_REVIEW_LENGTH = 500


class SubmitRatingRequest(BaseModel):
    """평가 생성/수정 요청 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    resource_id: str = Field(..., min_length=1, max_length=50, description="리소스 ID")
    stars: int = Field(..., ge=1, le=5, description="평가 점수 (1-5)")
    review: Optional[str] = Field(default=None, max_length=MAX_REVIEW_LENGTH, description="리뷰 (선택)")

    @field_validator('stars', mode='before')
    @classmethod
    def validate_stars(cls, v):
        # lax 모드에서는 true 가 1 로 변환되므로 먼저 거부
        if isinstance(v, bool):
            raise ValueError("stars must be an integer between 1 and 5")
        return v

    @field_validator('resource_id', mode='before')
    @classmethod
    def validate_resource_id(cls, v):
        if isinstance(v, str):
            v = v.strip()
        return v

    @field_validator('review', mode='before')
    @classmethod
    def validate_review(cls, v):
        # 공백 제거 후 길이 검사
        if isinstance(v, str):
            return v.strip()
        return v
