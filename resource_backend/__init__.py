# _*_ coding: utf-8 _*_
"""Study resource sharing backend - rating aggregation service."""

__version__ = "1.0.0"
