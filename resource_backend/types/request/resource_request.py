# _*_ coding: utf-8 _*_
"""Resource request models."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ExamCategory(str, Enum):
    UPSC = "UPSC"
    JEE = "JEE"
    GATE = "GATE"
    NEET = "NEET"
    CAT = "CAT"
    SSC = "SSC"
    BANKING = "Banking"
    RAILWAY = "Railway"
    OTHER = "Other"


class Section(str, Enum):
    GENERAL = "General"
    OPTIONAL = "Optional"
    SUBJECT_SPECIFIC = "Subject-specific"
    PREVIOUS_PAPERS = "Previous Papers"
    NOTES = "Notes"
    BOOKS = "Books"
    OTHER = "Other"


class FileType(str, Enum):
    PDF = "pdf"
    DOC = "doc"
    DOCX = "docx"
    TXT = "txt"
    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"
    OTHER = "other"


class ResourceSort(str, Enum):
    NEWEST = "newest"
    STARS = "stars"
    DOWNLOADS = "downloads"


class CreateResourceRequest(BaseModel):
    """리소스 등록 요청 (파일은 Blob Storage에 업로드된 후 URL만 전달)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200, description="제목")
    description: str = Field(..., min_length=1, max_length=1000, description="설명")
    exam_category: ExamCategory = Field(..., description="시험 분류")
    section: Section = Field(..., description="섹션")
    file_url: str = Field(..., min_length=1, description="Blob Storage URL")
    file_name: str = Field(..., min_length=1, max_length=255, description="원본 파일명")
    file_size: int = Field(..., ge=0, description="파일 크기 (bytes)")
    file_type: FileType = Field(default=FileType.OTHER, description="파일 형식")
    tags: List[str] = Field(default_factory=list, description="태그")

    @field_validator('title', 'description', mode='before')
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        cleaned = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in cleaned:
                cleaned.append(tag)
        return cleaned


class ResourceListQuery(BaseModel):
    """리소스 목록 조회 조건"""
    exam_category: Optional[ExamCategory] = None
    section: Optional[Section] = None
    search: Optional[str] = Field(default=None, max_length=100)
    sort: ResourceSort = ResourceSort.NEWEST
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
