# _*_ coding: utf-8 _*_
"""Common response models."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "MessageResponse",
]


class CamelModel(BaseModel):
    """응답 JSON 키를 camelCase로 직렬화하는 기본 모델"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """에러 응답 모델"""
    type: str = Field(default="error", description="응답 타입")
    code: int = Field(..., description="에러 코드")
    message: str = Field(..., description="에러 메시지")
    content: str = Field(..., description="사용자에게 표시할 에러 내용")
    timestamp: str = Field(..., description="타임스탬프")
    trace_id: Optional[str] = Field(default=None, description="추적 ID")


class MessageResponse(BaseModel):
    """단순 메시지 응답 모델"""
    message: str = Field(..., description="응답 메시지")
