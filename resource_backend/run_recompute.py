#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
평가 집계 재계산 스크립트

집계 기록 도중 실패로 RESOURCES.STARS / TOTAL_RATINGS 가 어긋난 경우
RATINGS 로부터 다시 계산한다.
"""
import argparse
import logging
import sys

from resource_backend.api.services.aggregate_service import AggregateService
from resource_backend.config import settings
from resource_backend.core.dependencies import get_database, get_lock_manager
from resource_backend.core.logging_config import setup_logging
from resource_backend.types.response.exceptions import HandledException

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    """집계 재계산 실행"""
    parser = argparse.ArgumentParser(description='리소스 평가 집계 재계산')
    parser.add_argument('--resource-id', '-r',
                        action='append',
                        default=None,
                        help='재계산할 리소스 ID (여러 번 지정 가능, 생략 시 전체)')
    args = parser.parse_args(argv)

    setup_logging(settings)
    logger.info(f"Rating aggregate recompute requested: {args.resource_id or 'all resources'}")

    database = get_database()
    lock_manager = get_lock_manager()

    with database.session() as session:
        aggregate_service = AggregateService(db=session, lock_manager=lock_manager)
        try:
            if args.resource_id:
                results = [aggregate_service.recompute(resource_id) for resource_id in args.resource_id]
            else:
                results = aggregate_service.recompute_all()
        except HandledException as e:
            print(f"❌ 재계산 실패: {e.message}")
            return 1

    for result in results:
        print(f"   - {result.resource_id}: stars={result.stars}, totalRatings={result.total_ratings}")
    print(f"✅ {len(results)}개 리소스 집계 재계산 완료")
    return 0


if __name__ == "__main__":
    sys.exit(main())
