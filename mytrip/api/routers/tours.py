"""
관광지 목록/상세 API 라우터
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from config.constants import SORT_OPTIONS
from mytrip.api.dependencies import (
    get_listing_service,
    get_tour_client,
    result_response,
)
from mytrip.collectors.tour_api_client import TourAPIClient
from mytrip.models import ApiResult
from mytrip.services.tour_listing_service import (
    DEFAULT_SORT,
    TourListingService,
    parse_content_type_ids,
)

router = APIRouter()


@router.get("/areas")
async def list_areas(client: TourAPIClient = Depends(get_tour_client)):
    """시/도 목록 조회"""
    result = await client.get_area_codes(use_server_credential=True)
    return result_response(result)


@router.get("/tours")
async def list_tours(
    area_code: Optional[str] = Query(None, alias="areaCode"),
    content_type_id: Optional[str] = Query(None, alias="contentTypeId"),
    keyword: Optional[str] = None,
    sort: str = Query(DEFAULT_SORT, description="정렬 (modifiedtime, title)"),
    page_no: int = Query(1, ge=1, alias="pageNo"),
    service: TourListingService = Depends(get_listing_service),
):
    """관광지 목록 조회 (검색, 다중 타입 필터, 정렬)"""
    result = await service.list_tours(
        area_code=area_code,
        content_type_ids=parse_content_type_ids(content_type_id),
        keyword=keyword,
        sort=sort if sort in SORT_OPTIONS else DEFAULT_SORT,
        page_no=page_no,
    )
    return result_response(result)


@router.get("/places/{content_id}")
async def get_place(
    content_id: str, service: TourListingService = Depends(get_listing_service)
):
    """관광지 상세 정보 조회"""
    result = await service.get_place_detail(content_id)
    return result_response(result, not_found_on_no_data=True)


@router.get("/places/{content_id}/recommendations")
async def get_recommendations(
    content_id: str,
    area_code: str = Query(..., alias="areaCode"),
    content_type_id: str = Query(..., alias="contentTypeId"),
    max_count: int = Query(6, ge=1, le=10, alias="maxCount"),
    service: TourListingService = Depends(get_listing_service),
):
    """추천 관광지 조회"""
    items = await service.get_recommendations(
        content_id, area_code, content_type_id, max_count
    )
    return result_response(ApiResult.success(items))
