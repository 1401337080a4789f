# _*_ coding: utf-8 _*_
"""Database models."""
from resource_backend.database.models.resource_models import Resource
from resource_backend.database.models.rating_models import Rating

__all__ = [
    "Resource",
    "Rating",
]
