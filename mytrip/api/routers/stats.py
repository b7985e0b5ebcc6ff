"""
통계 대시보드 API 라우터
"""

from fastapi import APIRouter, Depends

from mytrip.api.dependencies import get_stats_aggregator, result_response
from mytrip.services.stats_service import StatsAggregator

router = APIRouter()


@router.get("/regions")
async def region_stats(aggregator: StatsAggregator = Depends(get_stats_aggregator)):
    """지역별 관광지 개수"""
    return result_response(await aggregator.get_region_stats())


@router.get("/types")
async def type_stats(aggregator: StatsAggregator = Depends(get_stats_aggregator)):
    """타입별 관광지 개수"""
    return result_response(await aggregator.get_type_stats())


@router.get("/summary")
async def stats_summary(aggregator: StatsAggregator = Depends(get_stats_aggregator)):
    """통계 요약"""
    return result_response(await aggregator.get_stats_summary())
