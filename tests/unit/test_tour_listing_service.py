"""
관광지 목록/상세 서비스 테스트
"""

from unittest.mock import AsyncMock, Mock

import pytest

from mytrip.core.error_handling import ErrorKind
from mytrip.models import ApiResult, TourDetail, TourImage, TourIntro, TourItem
from mytrip.services.tour_listing_service import (
    TourListingService,
    dedupe_by_content_id,
    parse_content_type_ids,
    sort_tours,
)


def _item(content_id, title="", modified="20240101000000", type_id="12"):
    return TourItem(
        content_id=content_id,
        content_type_id=type_id,
        title=title or content_id,
        modified_time=modified,
    )


@pytest.fixture
def client():
    mock_client = Mock()
    mock_client.get_area_based_list = AsyncMock()
    mock_client.search_keyword = AsyncMock()
    mock_client.get_detail_common = AsyncMock()
    mock_client.get_detail_intro = AsyncMock()
    mock_client.get_detail_images = AsyncMock()
    mock_client.get_detail_pet_tour = AsyncMock()
    return mock_client


class TestHelpers:
    def test_parse_content_type_ids(self):
        assert parse_content_type_ids("12, 14,x,0,12,,39") == ["12", "14", "39"]
        assert parse_content_type_ids("") == []
        assert parse_content_type_ids(None) == []

    def test_dedupe_keeps_first(self):
        first = _item("1", "첫번째")
        items = dedupe_by_content_id([first, _item("2"), _item("1", "중복")])

        assert [item.content_id for item in items] == ["1", "2"]
        assert items[0] is first

    def test_sort_by_modified_time(self, tour_items):
        sorted_items = sort_tours(tour_items)
        assert [item.content_id for item in sorted_items] == ["200", "100", "300"]

    def test_sort_by_title(self, tour_items):
        sorted_items = sort_tours(tour_items, "title")
        assert [item.title for item in sorted_items] == ["경복궁", "덕수궁", "창덕궁"]

    def test_invalid_modified_time_sorts_last(self):
        items = sort_tours([_item("1", modified=""), _item("2", modified="20230101000000")])
        assert [item.content_id for item in items] == ["2", "1"]


class TestListTours:
    """목록 조회 테스트"""

    @pytest.mark.asyncio
    async def test_default_area_and_single_call(self, client, tour_items):
        client.get_area_based_list.return_value = ApiResult.success(tour_items, 45)

        result = await TourListingService(client).list_tours()

        assert result.ok
        assert result.data.total_count == 45
        assert [item.content_id for item in result.data.items] == ["200", "100", "300"]
        client.get_area_based_list.assert_awaited_once_with(
            "1", None, 20, 1, use_server_credential=True
        )

    @pytest.mark.asyncio
    async def test_keyword_uses_search(self, client, tour_items):
        client.search_keyword.return_value = ApiResult.success(tour_items[:1], 1)

        result = await TourListingService(client).list_tours(
            area_code="6", content_type_ids=["39", "12"], keyword="  국밥 ", page_no=2
        )

        assert result.ok
        assert result.data.page_no == 2
        client.search_keyword.assert_awaited_once_with(
            "국밥", "6", "39", 20, 2, use_server_credential=True
        )
        client.get_area_based_list.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_multiple_types_are_merged(self, client):
        responses = {
            "12": ApiResult.success([_item("1", modified="20240101000000"), _item("2")], 30),
            "39": ApiResult.success(
                [_item("2"), _item("3", modified="20240601000000", type_id="39")], 50
            ),
        }
        client.get_area_based_list.side_effect = (
            lambda area, type_id, *args, **kwargs: responses[type_id]
        )

        result = await TourListingService(client).list_tours(content_type_ids=["12", "39"])

        assert result.ok
        listing = result.data
        assert [item.content_id for item in listing.items] == ["3", "1", "2"]
        assert listing.total_count == 50
        assert listing.partial_error is None

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_successful_types(self, client):
        responses = {
            "12": ApiResult.success([_item("1")], 10),
            "39": ApiResult.failure("네트워크 연결에 실패했습니다.", ErrorKind.NETWORK),
        }
        client.get_area_based_list.side_effect = (
            lambda area, type_id, *args, **kwargs: responses[type_id]
        )

        result = await TourListingService(client).list_tours(content_type_ids=["12", "39"])

        assert result.ok
        assert [item.content_id for item in result.data.items] == ["1"]
        assert result.data.partial_error == "네트워크 연결에 실패했습니다."

    @pytest.mark.asyncio
    async def test_all_types_fail(self, client):
        client.get_area_based_list.return_value = ApiResult.failure(
            "일일 호출 한도를 초과했습니다.", ErrorKind.UPSTREAM, code="05"
        )

        result = await TourListingService(client).list_tours(content_type_ids=["12", "39"])

        assert not result.ok
        assert result.code == "05"

    @pytest.mark.asyncio
    async def test_failure_is_passed_through(self, client):
        client.get_area_based_list.return_value = ApiResult.failure(
            "조회된 데이터가 없습니다.", ErrorKind.NO_DATA
        )

        result = await TourListingService(client).list_tours(area_code="39")

        assert not result.ok
        assert result.error_kind == ErrorKind.NO_DATA


class TestPlaceDetail:
    """상세 페이지 테스트"""

    @pytest.mark.asyncio
    async def test_detail_with_optional_parts(self, client):
        detail = TourDetail(content_id="1", content_type_id="12", title="경복궁")
        client.get_detail_common.return_value = ApiResult.success(detail)
        client.get_detail_intro.return_value = ApiResult.success(
            TourIntro(content_id="1", content_type_id="12", fields={"usetime": "09:00"})
        )
        client.get_detail_images.return_value = ApiResult.failure("오류", ErrorKind.NETWORK)
        client.get_detail_pet_tour.return_value = ApiResult.failure(
            "조회된 데이터가 없습니다.", ErrorKind.NO_DATA
        )

        result = await TourListingService(client).get_place_detail("1")

        assert result.ok
        assert result.data.detail is detail
        assert result.data.intro.get("usetime") == "09:00"
        assert result.data.images == []
        assert result.data.pet_info is None
        client.get_detail_intro.assert_awaited_once_with("1", "12", use_server_credential=True)

    @pytest.mark.asyncio
    async def test_detail_failure(self, client):
        client.get_detail_common.return_value = ApiResult.failure(
            "조회된 데이터가 없습니다.", ErrorKind.NO_DATA
        )

        result = await TourListingService(client).get_place_detail("999")

        assert result.error_kind == ErrorKind.NO_DATA
        client.get_detail_images.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_detail_images_are_kept(self, client):
        client.get_detail_common.return_value = ApiResult.success(
            TourDetail(content_id="1", content_type_id="12", title="경복궁")
        )
        client.get_detail_intro.return_value = ApiResult.failure("오류")
        client.get_detail_images.return_value = ApiResult.success(
            [TourImage(content_id="1", origin_url="o.jpg", small_url="s.jpg")]
        )
        client.get_detail_pet_tour.return_value = ApiResult.failure("오류")

        result = await TourListingService(client).get_place_detail("1")

        assert result.data.intro is None
        assert result.to_dict()["data"]["images"][0]["originimgurl"] == "o.jpg"


class TestRecommendations:
    @pytest.mark.asyncio
    async def test_excludes_current_place(self, client):
        items = [_item(str(i)) for i in range(10)]
        client.get_area_based_list.return_value = ApiResult.success(items, 100)

        recommendations = await TourListingService(client).get_recommendations("3", "1", "12")

        assert len(recommendations) == 6
        assert "3" not in [item.content_id for item in recommendations]
        client.get_area_based_list.assert_awaited_once_with(
            "1", "12", 10, 1, use_server_credential=True
        )

    @pytest.mark.asyncio
    async def test_failure_returns_empty(self, client):
        client.get_area_based_list.return_value = ApiResult.failure("오류", ErrorKind.NETWORK)

        assert await TourListingService(client).get_recommendations("3", "1", "12") == []
