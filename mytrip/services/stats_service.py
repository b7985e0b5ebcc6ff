"""
통계 데이터 집계 서비스

지역별, 콘텐츠 타입별 관광지 개수를 집계하고 대시보드용 요약을 만듭니다.

핵심 구현 로직:
- 개수는 numOfRows=1 목록 조회의 totalCount로만 얻음 (전체 페이지를 읽지 않음)
- 모든 지역/타입 호출은 asyncio.gather로 병렬 실행
- 일부 호출이 실패해도 성공한 데이터로 결과를 만들고, 전체가 실패할 때만 실패
"""

import asyncio
import logging
import time
from datetime import datetime
from typing import Any, Awaitable, List, Optional, Sequence

from config.constants import CONTENT_TYPE_IDS, get_content_type_name
from mytrip.collectors.tour_api_client import TourAPIClient
from mytrip.core.error_handling import ErrorKind
from mytrip.models import ApiResult, AreaCode, RegionStat, StatsSummary, TypeStat

TOP_N = 3


async def gather_settled(coroutines: Sequence[Awaitable[Any]]) -> List[Any]:
    """모든 작업이 끝날 때까지 대기 (하나가 실패해도 나머지를 취소하지 않음)"""
    return await asyncio.gather(*coroutines, return_exceptions=True)


def _sort_by_count(stats: list) -> list:
    # sorted는 안정 정렬이므로 동률은 원래 순서 유지
    return sorted(stats, key=lambda stat: stat.count, reverse=True)


class StatsAggregator:
    """통계 집계기"""

    def __init__(
        self,
        client: TourAPIClient,
        content_type_ids: Optional[Sequence[str]] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.content_type_ids = list(content_type_ids or CONTENT_TYPE_IDS)

    async def _get_regions(self) -> ApiResult[List[AreaCode]]:
        result = await self.client.get_area_codes(use_server_credential=True)
        if not result.ok:
            return ApiResult.failure(
                result.message or "지역 코드 조회에 실패했습니다.",
                result.error_kind,
                result.status_code,
                result.code,
            )
        return result

    async def _count(self, area_code: str, content_type_id: Optional[str] = None) -> Optional[int]:
        """지역(및 타입)의 관광지 개수 (실패 시 None)"""
        result = await self.client.get_area_based_list(
            area_code,
            content_type_id,
            num_of_rows=1,
            page_no=1,
            use_server_credential=True,
        )
        if result.ok and result.total_count is not None:
            return result.total_count

        self.logger.warning(
            f"지역 {area_code} 타입 {content_type_id or '전체'} 개수 조회 실패: {result.message}"
        )
        return None

    async def get_region_stats(self) -> ApiResult[List[RegionStat]]:
        """지역별 관광지 개수 집계"""
        start_time = time.time()

        regions_result = await self._get_regions()
        if not regions_result.ok:
            return regions_result
        regions = regions_result.data

        counts = await gather_settled([self._count(region.code) for region in regions])

        region_stats = []
        for region, count in zip(regions, counts):
            if isinstance(count, BaseException):
                self.logger.warning(f"지역 {region.code} ({region.name}) 통계 조회 중 예외: {count}")
                continue
            if count is None:
                continue
            region_stats.append(RegionStat(code=region.code, name=region.name, count=count))

        if not region_stats:
            return ApiResult.failure("모든 지역의 통계 조회에 실패했습니다.", ErrorKind.UNKNOWN)

        self.logger.info(
            f"지역별 통계 집계 완료: {len(region_stats)}/{len(regions)} 지역 "
            f"({time.time() - start_time:.2f}s)"
        )
        return ApiResult.success(_sort_by_count(region_stats))

    async def _get_type_stat(
        self, content_type_id: str, regions: List[AreaCode]
    ) -> Optional[TypeStat]:
        """한 타입의 전체 지역 합계 (모든 지역이 실패하면 None)"""
        counts = await gather_settled(
            [self._count(region.code, content_type_id) for region in regions]
        )

        succeeded = [c for c in counts if isinstance(c, int) and not isinstance(c, bool)]
        if not succeeded:
            self.logger.warning(f"타입 {content_type_id}의 모든 지역 조회 실패")
            return None

        # 실패한 지역은 0으로 합산
        return TypeStat(
            code=content_type_id,
            name=get_content_type_name(content_type_id) or f"타입 {content_type_id}",
            count=sum(succeeded),
        )

    async def get_type_stats(self) -> ApiResult[List[TypeStat]]:
        """
        콘텐츠 타입별 관광지 개수 집계

        타입 x 지역 조합을 모두 병렬로 조회한 뒤 타입별로 합산합니다.
        """
        start_time = time.time()

        regions_result = await self._get_regions()
        if not regions_result.ok:
            return regions_result
        regions = regions_result.data

        results = await gather_settled(
            [self._get_type_stat(type_id, regions) for type_id in self.content_type_ids]
        )

        type_stats = []
        for type_id, stat in zip(self.content_type_ids, results):
            if isinstance(stat, BaseException):
                self.logger.warning(f"타입 {type_id} 통계 조회 중 예외: {stat}")
                continue
            if stat is not None:
                type_stats.append(stat)

        if not type_stats:
            return ApiResult.failure("모든 타입의 통계 조회에 실패했습니다.", ErrorKind.UNKNOWN)

        self.logger.info(
            f"타입별 통계 집계 완료: {len(type_stats)}/{len(self.content_type_ids)} 타입, "
            f"{len(self.content_type_ids) * len(regions)}회 호출 ({time.time() - start_time:.2f}s)"
        )
        return ApiResult.success(_sort_by_count(type_stats))

    async def get_stats_summary(self) -> ApiResult[StatsSummary]:
        """
        전체 통계 요약

        전체 관광지 수는 타입별 개수의 합입니다. 한 장소가 여러 타입에
        포함될 수 있어 지역별 합계와 다를 수 있습니다.
        """
        region_result, type_result = await asyncio.gather(
            self.get_region_stats(), self.get_type_stats()
        )

        for result in (region_result, type_result):
            if not result.ok:
                return ApiResult.failure(
                    result.message or "통계 요약 조회에 실패했습니다.",
                    result.error_kind,
                    result.status_code,
                    result.code,
                )

        region_stats = region_result.data
        type_stats = type_result.data

        return ApiResult.success(
            StatsSummary(
                total_count=sum(stat.count for stat in type_stats),
                top_regions=region_stats[:TOP_N],
                top_types=type_stats[:TOP_N],
                computed_at=datetime.now(),
            )
        )
