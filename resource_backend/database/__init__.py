# _*_ coding: utf-8 _*_
"""Database module with all models imported to register with Base."""

# Base를 먼저 import
from .base import Base, Database

# 모든 모델을 import하여 Base에 등록
from .models.resource_models import Resource
from .models.rating_models import Rating

__all__ = [
    "Base",
    "Database",
    "Resource",
    "Rating",
]
