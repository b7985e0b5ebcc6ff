"""
공용 테스트 픽스처

네트워크 없이 테스트하기 위한 가짜 HTTP 세션과 관광 API 클라이언트 스텁을 제공합니다.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional

import pytest

from config.settings import TourAPIConfig
from mytrip.core.error_handling import ErrorKind, RetryConfig
from mytrip.models import ApiResult, AreaCode, TourItem


def make_envelope(
    items: Any = None,
    total_count: Optional[int] = None,
    result_code: str = "0000",
    result_msg: str = "OK",
    omit_items: bool = False,
) -> Dict[str, Any]:
    """한국관광공사 API 응답 봉투 생성"""
    body: Dict[str, Any] = {"numOfRows": 20, "pageNo": 1}
    if not omit_items:
        body["items"] = {"item": items}
    if total_count is not None:
        body["totalCount"] = total_count
    return {
        "response": {
            "header": {"resultCode": result_code, "resultMsg": result_msg},
            "body": body,
        }
    }


def make_tour_item(content_id: str, title: str = "", **overrides) -> Dict[str, Any]:
    item = {
        "contentid": content_id,
        "contenttypeid": "12",
        "title": title or f"관광지 {content_id}",
        "addr1": "서울특별시 종로구",
        "areacode": "1",
        "mapx": "1269770410",
        "mapy": "375796170",
        "modifiedtime": "20240101120000",
    }
    item.update(overrides)
    return item


class FakeResponse:
    """aiohttp 응답 대역"""

    def __init__(self, status: int = 200, body: Any = None, reason: str = "OK"):
        self.status = status
        self.reason = reason
        self._body = body if isinstance(body, str) else json.dumps(body or {})

    async def text(self) -> str:
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """
    aiohttp.ClientSession 대역

    responses의 항목을 순서대로 반환하며, 마지막 항목은 계속 반복됩니다.
    예외 인스턴스는 get() 호출 시 그대로 발생합니다.
    """

    def __init__(self, responses: List[Any]):
        self.responses = responses
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, params: Optional[Dict[str, Any]] = None):
        self.calls.append({"url": url, "params": params})
        item = self.responses[min(len(self.calls), len(self.responses)) - 1]
        if isinstance(item, BaseException):
            raise item
        return item


class SleepRecorder:
    """asyncio.sleep 대역 (지연 시간만 기록)"""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class StubTourClient:
    """
    StatsAggregator/TourListingService 테스트용 TourAPIClient 스텁

    region_counts: 지역 코드 -> 개수 (전체 타입)
    type_counts: (지역 코드, 타입 ID) -> 개수
    failing: 실패 결과를 반환할 (지역 코드, 타입 ID 또는 None) 집합
    raising: 예외를 발생시킬 (지역 코드, 타입 ID 또는 None) 집합

    목록 조회는 이벤트 루프에 제어를 넘기므로 동시에 진행 중인 호출 수의
    최댓값(peak_in_flight)으로 병렬 실행 여부를 확인할 수 있습니다.
    """

    def __init__(
        self,
        regions: List[AreaCode],
        region_counts: Optional[Dict[str, int]] = None,
        type_counts: Optional[Dict[tuple, int]] = None,
        failing: Optional[set] = None,
        area_codes_result: Optional[ApiResult] = None,
        listings: Optional[Dict[Any, ApiResult]] = None,
        raising: Optional[set] = None,
    ):
        self.regions = regions
        self.region_counts = region_counts or {}
        self.type_counts = type_counts or {}
        self.failing = failing or set()
        self.raising = raising or set()
        self.area_codes_result = area_codes_result
        self.listings = listings or {}
        self.calls: List[Dict[str, Any]] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def get_area_codes(self, area_code=None, use_server_credential=False):
        self.calls.append({"op": "area_codes", "server": use_server_credential})
        if self.area_codes_result is not None:
            return self.area_codes_result
        return ApiResult.success(list(self.regions))

    async def get_area_based_list(
        self,
        area_code,
        content_type_id=None,
        num_of_rows=20,
        page_no=1,
        use_server_credential=False,
    ):
        type_id = str(content_type_id) if content_type_id is not None else None
        self.calls.append(
            {
                "op": "area_based_list",
                "area_code": area_code,
                "content_type_id": type_id,
                "num_of_rows": num_of_rows,
                "server": use_server_credential,
            }
        )

        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
        finally:
            self.in_flight -= 1

        if (area_code, type_id) in self.raising:
            raise RuntimeError(f"지역 {area_code} 조회 중 예상치 못한 오류")
        if (area_code, type_id) in self.failing:
            return ApiResult.failure("네트워크 연결에 실패했습니다.", ErrorKind.NETWORK)
        if type_id in self.listings:
            return self.listings[type_id]
        if type_id is None:
            count = self.region_counts.get(area_code, 0)
        else:
            count = self.type_counts.get((area_code, type_id), 0)
        return ApiResult.success([], count)


@pytest.fixture
def api_config() -> TourAPIConfig:
    return TourAPIConfig(
        base_url="https://apis.example.test/B551011/KorService2",
        server_key="server-secret-key",
        public_key="public-client-key",
        timeout=0,
    )


@pytest.fixture
def retry_config() -> RetryConfig:
    return RetryConfig(max_attempts=3, base_delay_ms=1000, max_delay_ms=10000)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def seventeen_regions() -> List[AreaCode]:
    names = [
        ("1", "서울"), ("2", "인천"), ("3", "대전"), ("4", "대구"), ("5", "광주"),
        ("6", "부산"), ("7", "울산"), ("8", "세종"), ("31", "경기도"), ("32", "강원특별자치도"),
        ("33", "충청북도"), ("34", "충청남도"), ("35", "경상북도"), ("36", "경상남도"),
        ("37", "전북특별자치도"), ("38", "전라남도"), ("39", "제주도"),
    ]
    return [AreaCode(code=code, name=name) for code, name in names]


@pytest.fixture
def tour_items() -> List[TourItem]:
    return [
        TourItem.from_api(make_tour_item("100", "경복궁", modifiedtime="20240301000000")),
        TourItem.from_api(make_tour_item("200", "창덕궁", modifiedtime="20240501000000")),
        TourItem.from_api(make_tour_item("300", "덕수궁", modifiedtime="20240101000000")),
    ]


@pytest.fixture
def envelope_factory():
    return make_envelope


@pytest.fixture
def tour_item_factory():
    return make_tour_item


@pytest.fixture
def response_factory():
    return FakeResponse


@pytest.fixture
def session_factory():
    return FakeSession


@pytest.fixture
def stub_client_factory():
    return StubTourClient
