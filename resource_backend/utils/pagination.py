# _*_ coding: utf-8 _*_
"""Page/limit pagination helpers."""
import math
from typing import Dict


def get_skip(page: int, limit: int) -> int:
    """skip = (page - 1) * limit"""
    return (page - 1) * limit


def build_pagination(page: int, limit: int, total: int, returned: int) -> Dict[str, object]:
    """목록 응답용 페이지 정보 생성

    returned: 현재 페이지에 실제로 담긴 항목 수
    """
    skip = get_skip(page, limit)
    return {
        "current_page": page,
        "total_pages": math.ceil(total / limit) if limit else 0,
        "total": total,
        "has_next": skip + returned < total,
        "has_prev": page > 1,
    }
