# _*_ coding: utf-8 _*_
"""Response models for the resource backend API."""

from .base import CamelModel, ErrorResponse, MessageResponse
from .exceptions import DuplicateRatingError, HandledException, UnHandledException
from .response_code import ResponseCode

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "MessageResponse",
    "DuplicateRatingError",
    "HandledException",
    "UnHandledException",
    "ResponseCode",
]
