"""
관광지 목록/상세 서비스

목록 페이지(다중 타입 병합, 중복 제거, 정렬), 상세 페이지(공통/소개/이미지/반려동물 정보)
및 추천 관광지 데이터를 구성합니다. 모두 서버 전용 키로 호출합니다.
"""

import asyncio
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from config.constants import DEFAULT_AREA_CODE, PAGINATION_DEFAULTS
from mytrip.collectors.tour_api_client import TourAPIClient
from mytrip.core.error_handling import ErrorKind
from mytrip.models import ApiResult, PlaceDetail, TourItem, TourListing

DEFAULT_SORT = "modifiedtime"
LISTING_ERROR_MESSAGE = "관광지 목록을 불러오는 중 오류가 발생했습니다."


def parse_content_type_ids(value: Optional[str]) -> List[str]:
    """쉼표로 구분된 콘텐츠 타입 ID 파싱 ("12, 14,x" -> ["12", "14"])"""
    if not value:
        return []
    ids = []
    for part in value.split(","):
        part = part.strip()
        if part.isdigit() and int(part) > 0 and part not in ids:
            ids.append(part)
    return ids


def dedupe_by_content_id(items: Iterable[TourItem]) -> List[TourItem]:
    """content_id 기준 중복 제거 (처음 나온 항목 유지)"""
    seen = set()
    unique = []
    for item in items:
        if item.content_id in seen:
            continue
        seen.add(item.content_id)
        unique.append(item)
    return unique


def sort_tours(items: List[TourItem], sort: str = DEFAULT_SORT) -> List[TourItem]:
    """title: 이름순, 그 외: 수정일 최신순"""
    if sort == "title":
        return sorted(items, key=lambda item: item.title)
    return sorted(
        items,
        key=lambda item: item.modified_at or datetime.min,
        reverse=True,
    )


class TourListingService:
    """관광지 목록/상세 서비스"""

    def __init__(self, client: TourAPIClient):
        self.logger = logging.getLogger(__name__)
        self.client = client

    async def list_tours(
        self,
        area_code: Optional[str] = None,
        content_type_ids: Optional[Sequence[str]] = None,
        keyword: Optional[str] = None,
        sort: str = DEFAULT_SORT,
        page_no: int = PAGINATION_DEFAULTS["page_no"],
        num_of_rows: int = PAGINATION_DEFAULTS["num_of_rows"],
    ) -> ApiResult[TourListing]:
        """
        관광지 목록 조회

        Args:
            area_code: 지역 코드 (기본값: 서울)
            content_type_ids: 콘텐츠 타입 ID 목록 (여러 개면 타입별 조회 후 병합)
            keyword: 검색어 (있으면 키워드 검색, 첫 번째 타입만 적용)
            sort: "title" 또는 "modifiedtime"
            page_no: 페이지 번호
            num_of_rows: 페이지당 항목 수
        """
        area_code = area_code or DEFAULT_AREA_CODE
        type_ids = list(content_type_ids or [])
        keyword = keyword.strip() if keyword else ""

        if keyword:
            result = await self.client.search_keyword(
                keyword,
                area_code,
                type_ids[0] if type_ids else None,
                num_of_rows,
                page_no,
                use_server_credential=True,
            )
            return self._single_listing(result, sort, page_no)

        if len(type_ids) > 1:
            return await self._merged_listing(area_code, type_ids, sort, page_no, num_of_rows)

        result = await self.client.get_area_based_list(
            area_code,
            type_ids[0] if type_ids else None,
            num_of_rows,
            page_no,
            use_server_credential=True,
        )
        return self._single_listing(result, sort, page_no)

    def _single_listing(
        self, result: ApiResult[List[TourItem]], sort: str, page_no: int
    ) -> ApiResult[TourListing]:
        if not result.ok:
            return result
        items = result.data or []
        return ApiResult.success(
            TourListing(
                items=sort_tours(items, sort),
                total_count=result.total_count or len(items),
                page_no=page_no,
            ),
            result.total_count,
        )

    async def _merged_listing(
        self,
        area_code: str,
        type_ids: List[str],
        sort: str,
        page_no: int,
        num_of_rows: int,
    ) -> ApiResult[TourListing]:
        """타입별 목록을 병렬 조회 후 병합"""
        results = await asyncio.gather(
            *[
                self.client.get_area_based_list(
                    area_code, type_id, num_of_rows, page_no, use_server_credential=True
                )
                for type_id in type_ids
            ]
        )

        merged: List[TourItem] = []
        total_count = 0
        last_failure: Optional[ApiResult] = None
        for type_id, result in zip(type_ids, results):
            if result.ok:
                merged.extend(result.data or [])
                total_count = max(total_count, result.total_count or 0)
            else:
                self.logger.warning(f"타입 {type_id} 목록 조회 실패: {result.message}")
                last_failure = result

        if last_failure is not None and not merged:
            return ApiResult.failure(
                last_failure.message or LISTING_ERROR_MESSAGE,
                last_failure.error_kind or ErrorKind.UNKNOWN,
                last_failure.status_code,
                last_failure.code,
            )

        items = dedupe_by_content_id(merged)
        return ApiResult.success(
            TourListing(
                items=sort_tours(items, sort),
                total_count=total_count or len(items),
                page_no=page_no,
                partial_error=(last_failure.message or LISTING_ERROR_MESSAGE)
                if last_failure
                else None,
            ),
            total_count or None,
        )

    async def get_place_detail(self, content_id: str) -> ApiResult[PlaceDetail]:
        """
        상세 페이지 데이터 조회

        공통 정보가 실패하면 실패를 반환하고, 소개/이미지/반려동물 정보는
        실패해도 비워둔 채로 반환합니다.
        """
        detail_result = await self.client.get_detail_common(content_id, use_server_credential=True)
        if not detail_result.ok:
            return detail_result

        detail = detail_result.data
        intro_result, images_result, pet_result = await asyncio.gather(
            self.client.get_detail_intro(
                content_id, detail.content_type_id, use_server_credential=True
            ),
            self.client.get_detail_images(content_id, use_server_credential=True),
            self.client.get_detail_pet_tour(content_id, use_server_credential=True),
        )

        return ApiResult.success(
            PlaceDetail(
                detail=detail,
                intro=intro_result.data if intro_result.ok else None,
                images=images_result.data if images_result.ok else [],
                pet_info=pet_result.data if pet_result.ok else None,
            )
        )

    async def get_recommendations(
        self,
        content_id: str,
        area_code: str,
        content_type_id: str,
        max_count: int = 6,
    ) -> List[TourItem]:
        """같은 지역, 같은 타입의 다른 관광지 (실패 시 빈 목록)"""
        result = await self.client.get_area_based_list(
            area_code, content_type_id, 10, 1, use_server_credential=True
        )
        if not result.ok:
            self.logger.info(f"추천 관광지 조회 실패 ({content_id}): {result.message}")
            return []

        return [item for item in result.data if item.content_id != content_id][:max_count]
