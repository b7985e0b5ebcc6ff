"""
한국관광공사 API 클라이언트

한국관광공사 국문 관광정보 서비스(KorService2)의 엔드포인트별 호출 함수를 제공합니다.
모든 함수는 예외를 던지지 않고 ApiResult를 반환합니다.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from config.constants import PAGINATION_DEFAULTS, TOUR_API_ENDPOINTS
from config.settings import TourAPIConfig, get_tour_api_config
from mytrip.core.api_client import ResilientFetcher
from mytrip.core.error_handling import ConfigurationError, ErrorKind, classify_error
from mytrip.core.response_normalizer import NO_DATA_MESSAGE, normalize_envelope
from mytrip.models import (
    ApiResult,
    AreaCode,
    PetTourInfo,
    TourDetail,
    TourImage,
    TourIntro,
    TourItem,
)

ContentTypeId = Union[int, str]


class TourAPIClient:
    """한국관광공사 API 클라이언트"""

    def __init__(
        self,
        config: Optional[TourAPIConfig] = None,
        fetcher: Optional[ResilientFetcher] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.config = config or get_tour_api_config()
        self.fetcher = fetcher or ResilientFetcher(timeout=self.config.timeout)

        # 기본 파라미터 설정
        self.default_params = {
            "MobileOS": self.config.mobile_os,
            "MobileApp": self.config.mobile_app,
            "_type": self.config.response_type,
        }

    async def __aenter__(self):
        await self.fetcher.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.fetcher.__aexit__(exc_type, exc_val, exc_tb)

    def _get_service_key(self, use_server_credential: bool) -> str:
        """서버 전용 키 또는 클라이언트 공개 키 선택"""
        if use_server_credential:
            key, env_name = self.config.server_key, "TOUR_API_KEY"
        else:
            key, env_name = self.config.public_key, "TOUR_API_PUBLIC_KEY"

        if not key:
            raise ConfigurationError(
                f"환경변수 {env_name}가 설정되지 않았습니다.", config_key=env_name
            )
        return key

    def _build_params(
        self, params: Dict[str, Any], use_server_credential: bool
    ) -> Dict[str, str]:
        """공통 파라미터와 엔드포인트별 파라미터 병합 (None 값 제외)"""
        merged = {"serviceKey": self._get_service_key(use_server_credential)}
        merged.update(self.default_params)
        for key, value in params.items():
            if value is None or value == "":
                continue
            merged[key] = str(value)
        return merged

    async def _request(
        self,
        endpoint_name: str,
        params: Dict[str, Any],
        use_server_credential: bool,
        parse_item: Callable[[Dict[str, Any]], Any],
        operation: str,
    ) -> ApiResult[List[Any]]:
        """API 호출 -> 응답 정규화 -> 항목 변환 (모든 실패는 ApiResult로 변환)"""
        endpoint = TOUR_API_ENDPOINTS[endpoint_name]
        try:
            query = self._build_params(params, use_server_credential)
            url = f"{self.config.base_url.rstrip('/')}/{endpoint}"

            envelope = await self.fetcher.fetch_with_retry(url, query)
            result = normalize_envelope(envelope)
            if not result.ok:
                self.logger.warning(
                    f"{operation} 실패: {endpoint} - {result.error_kind.value} "
                    f"(code: {result.code}) {result.message}"
                )
                return result

            return result.map(lambda items: [parse_item(item) for item in items])

        except Exception as e:
            info = classify_error(e)
            self.logger.error(
                f"{operation} 오류: {endpoint} - {info.kind.value} "
                f"(status: {info.status_code}) {info.message}"
            )
            return ApiResult.failure(
                info.message or f"{operation} 중 오류가 발생했습니다.",
                info.kind,
                info.status_code,
            )

    @staticmethod
    def _first(result: ApiResult[List[Any]]) -> ApiResult[Any]:
        """단건 조회 결과에서 첫 항목만 사용"""
        if result.ok and not result.data:
            return ApiResult.failure(NO_DATA_MESSAGE, ErrorKind.NO_DATA)
        return result.map(lambda items: items[0])

    async def get_area_codes(
        self, area_code: Optional[str] = None, use_server_credential: bool = False
    ) -> ApiResult[List[AreaCode]]:
        """
        지역 코드 조회

        Args:
            area_code: 시/도 코드 (없으면 전체 시/도, 있으면 해당 시/도의 시군구)
            use_server_credential: 서버 전용 API 키 사용 여부
        """
        return await self._request(
            "area_code",
            {"areaCode": area_code, "numOfRows": 100, "pageNo": 1},
            use_server_credential,
            AreaCode.from_api,
            "지역코드 조회",
        )

    async def get_area_based_list(
        self,
        area_code: str,
        content_type_id: Optional[ContentTypeId] = None,
        num_of_rows: int = PAGINATION_DEFAULTS["num_of_rows"],
        page_no: int = PAGINATION_DEFAULTS["page_no"],
        use_server_credential: bool = False,
    ) -> ApiResult[List[TourItem]]:
        """지역 기반 관광지 목록 조회"""
        return await self._request(
            "area_based_list",
            {
                "areaCode": area_code,
                "numOfRows": num_of_rows,
                "pageNo": page_no,
                "contentTypeId": content_type_id,
            },
            use_server_credential,
            TourItem.from_api,
            "관광지 목록 조회",
        )

    async def search_keyword(
        self,
        keyword: str,
        area_code: Optional[str] = None,
        content_type_id: Optional[ContentTypeId] = None,
        num_of_rows: int = PAGINATION_DEFAULTS["num_of_rows"],
        page_no: int = PAGINATION_DEFAULTS["page_no"],
        use_server_credential: bool = False,
    ) -> ApiResult[List[TourItem]]:
        """키워드 검색"""
        return await self._request(
            "search_keyword",
            {
                "keyword": keyword,
                "numOfRows": num_of_rows,
                "pageNo": page_no,
                "areaCode": area_code,
                "contentTypeId": content_type_id,
            },
            use_server_credential,
            TourItem.from_api,
            "키워드 검색",
        )

    async def get_detail_common(
        self, content_id: str, use_server_credential: bool = False
    ) -> ApiResult[TourDetail]:
        """관광지 공통 정보 조회"""
        result = await self._request(
            "detail_common",
            {"contentId": content_id},
            use_server_credential,
            TourDetail.from_api,
            "관광지 상세 정보 조회",
        )
        return self._first(result)

    async def get_detail_intro(
        self,
        content_id: str,
        content_type_id: ContentTypeId,
        use_server_credential: bool = False,
    ) -> ApiResult[TourIntro]:
        """관광지 소개 정보 조회 (운영 정보)"""
        result = await self._request(
            "detail_intro",
            {"contentId": content_id, "contentTypeId": content_type_id},
            use_server_credential,
            TourIntro.from_api,
            "운영 정보 조회",
        )
        return self._first(result)

    async def get_detail_images(
        self, content_id: str, use_server_credential: bool = False
    ) -> ApiResult[List[TourImage]]:
        """관광지 이미지 목록 조회"""
        return await self._request(
            "detail_image",
            {"contentId": content_id},
            use_server_credential,
            TourImage.from_api,
            "이미지 목록 조회",
        )

    async def get_detail_pet_tour(
        self, content_id: str, use_server_credential: bool = False
    ) -> ApiResult[PetTourInfo]:
        """반려동물 동반 여행 정보 조회"""
        result = await self._request(
            "detail_pet_tour",
            {"contentId": content_id},
            use_server_credential,
            PetTourInfo.from_api,
            "반려동물 정보 조회",
        )
        return self._first(result)
