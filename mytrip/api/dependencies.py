"""
라우터 공용 의존성
"""

from typing import Optional

from fastapi import Depends
from fastapi.responses import JSONResponse

from mytrip.collectors.tour_api_client import TourAPIClient
from mytrip.core.error_handling import ErrorKind
from mytrip.models import ApiResult
from mytrip.services.stats_service import StatsAggregator
from mytrip.services.tour_listing_service import TourListingService

# lifespan에서 설정되는 공유 클라이언트
tour_client: Optional[TourAPIClient] = None


def get_tour_client() -> TourAPIClient:
    if tour_client is None:
        raise RuntimeError("TourAPIClient가 초기화되지 않았습니다.")
    return tour_client


def get_listing_service(client: TourAPIClient = Depends(get_tour_client)) -> TourListingService:
    return TourListingService(client)


def get_stats_aggregator(client: TourAPIClient = Depends(get_tour_client)) -> StatsAggregator:
    return StatsAggregator(client)


def result_response(result: ApiResult, not_found_on_no_data: bool = False) -> JSONResponse:
    """ApiResult를 JSON 응답으로 변환 (실패는 502, 데이터 없음은 선택적으로 404)"""
    if result.ok:
        status_code = 200
    elif not_found_on_no_data and result.error_kind == ErrorKind.NO_DATA:
        status_code = 404
    else:
        status_code = 502
    return JSONResponse(status_code=status_code, content=result.to_dict())
