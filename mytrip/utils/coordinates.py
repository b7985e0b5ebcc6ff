"""
좌표 변환 유틸리티

한국관광공사 API는 WGS84 좌표를 10^7배 한 정수(예: 1270000000)로 제공합니다.
지도에서 사용할 수 있도록 실수 경도/위도로 변환합니다.
"""

import math
from typing import NamedTuple, Union

from config.constants import (
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
    REGION_CENTER_COORDINATES,
    REGION_ZOOM_LEVELS,
)

COORDINATE_SCALE = 10_000_000

Number = Union[str, int, float]


class GeoPoint(NamedTuple):
    """WGS84 좌표"""

    lng: float
    lat: float


def _parse(value: Number) -> float:
    if isinstance(value, bool):
        raise ValueError(f"유효하지 않은 좌표 값입니다: {value!r}")
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise ValueError(f"유효하지 않은 좌표 값입니다: {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"유효하지 않은 좌표 값입니다: {value!r}")
    return number


def to_geo(x: Number, y: Number) -> GeoPoint:
    """
    정수형 좌표를 WGS84 좌표로 변환

    Args:
        x: 경도 (mapx)
        y: 위도 (mapy)

    Returns:
        GeoPoint: (lng, lat)

    Raises:
        ValueError: 숫자가 아닌 값이 들어온 경우
    """
    return GeoPoint(lng=_parse(x) / COORDINATE_SCALE, lat=_parse(y) / COORDINATE_SCALE)


def tour_item_to_coordinates(item) -> GeoPoint:
    """mapx/mapy 속성 또는 키를 가진 관광지 항목의 좌표 변환"""
    if isinstance(item, dict):
        return to_geo(item.get("mapx"), item.get("mapy"))
    return to_geo(item.mapx, item.mapy)


def get_region_center(area_code: str = None) -> GeoPoint:
    """지역 코드의 중심 좌표 (모르는 코드면 기본 좌표)"""
    lng, lat = REGION_CENTER_COORDINATES.get(area_code or "", DEFAULT_CENTER)
    return GeoPoint(lng=lng, lat=lat)


def get_region_zoom(area_code: str = None) -> int:
    return REGION_ZOOM_LEVELS.get(area_code or "", DEFAULT_ZOOM)
