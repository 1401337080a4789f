# _*_ coding: utf-8 _*_
"""Application configuration."""
from .simple_settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
