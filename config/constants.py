"""
상수 정의 모듈

애플리케이션에서 사용하는 상수들을 정의합니다.
"""

from enum import Enum
from typing import Optional


class ContentType(Enum):
    """관광 콘텐츠 타입"""

    TOURIST_SPOT = "12"  # 관광지
    CULTURAL_FACILITY = "14"  # 문화시설
    FESTIVAL = "15"  # 축제공연행사
    TRAVEL_COURSE = "25"  # 여행코스
    LEISURE_SPORTS = "28"  # 레포츠
    ACCOMMODATION = "32"  # 숙박
    SHOPPING = "38"  # 쇼핑
    RESTAURANT = "39"  # 음식점


# 콘텐츠 타입 ID -> 이름 (통계 집계 순서)
CONTENT_TYPE_NAMES = {
    ContentType.TOURIST_SPOT.value: "관광지",
    ContentType.CULTURAL_FACILITY.value: "문화시설",
    ContentType.FESTIVAL.value: "축제/행사",
    ContentType.TRAVEL_COURSE.value: "여행코스",
    ContentType.LEISURE_SPORTS.value: "레포츠",
    ContentType.ACCOMMODATION.value: "숙박",
    ContentType.SHOPPING.value: "쇼핑",
    ContentType.RESTAURANT.value: "음식점",
}

CONTENT_TYPE_IDS = list(CONTENT_TYPE_NAMES.keys())


def get_content_type_name(content_type_id) -> Optional[str]:
    """콘텐츠 타입 ID로 이름 조회 (없으면 None)"""
    return CONTENT_TYPE_NAMES.get(str(content_type_id).strip())


# 지역 코드 매핑
AREA_CODES = {
    "서울": "1",
    "인천": "2",
    "대전": "3",
    "대구": "4",
    "광주": "5",
    "부산": "6",
    "울산": "7",
    "세종": "8",
    "경기": "31",
    "강원": "32",
    "충북": "33",
    "충남": "34",
    "경북": "35",
    "경남": "36",
    "전북": "37",
    "전남": "38",
    "제주": "39",
}

DEFAULT_AREA_CODE = AREA_CODES["서울"]

# 지역 코드별 중심 좌표 (경도, 위도)
REGION_CENTER_COORDINATES = {
    "1": (126.978, 37.5665),  # 서울
    "2": (126.7052, 37.4563),  # 인천
    "3": (127.3845, 36.3504),  # 대전
    "4": (128.5914, 35.8714),  # 대구
    "5": (126.8531, 35.1595),  # 광주
    "6": (129.0756, 35.1796),  # 부산
    "7": (129.3114, 35.5384),  # 울산
    "8": (127.2892, 36.4800),  # 세종
    "31": (127.5107, 37.4138),  # 경기
    "32": (128.3115, 37.8228),  # 강원
    "33": (127.4913, 36.8000),  # 충북
    "34": (126.8454, 36.5184),  # 충남
    "35": (128.5556, 36.4919),  # 경북
    "36": (128.3016, 35.4606),  # 경남
    "37": (127.1412, 35.7175),  # 전북
    "38": (126.8531, 34.8679),  # 전남
    "39": (126.5312, 33.4996),  # 제주
}

DEFAULT_CENTER = (127.0, 37.5)

# 지역이 넓을수록 낮은 줌 레벨
REGION_ZOOM_LEVELS = {
    "1": 11,
    "2": 11,
    "3": 12,
    "4": 12,
    "5": 12,
    "6": 11,
    "7": 12,
    "8": 12,
    "31": 10,
    "32": 9,
    "33": 10,
    "34": 10,
    "35": 9,
    "36": 9,
    "37": 10,
    "38": 9,
    "39": 10,
}

DEFAULT_ZOOM = 11

# 한국관광공사 API 엔드포인트
TOUR_API_ENDPOINTS = {
    "area_code": "areaCode2",
    "area_based_list": "areaBasedList2",
    "search_keyword": "searchKeyword2",
    "detail_common": "detailCommon2",
    "detail_intro": "detailIntro2",
    "detail_image": "detailImage2",
    "detail_pet_tour": "detailPetTour2",
}

# 페이지네이션 기본값
PAGINATION_DEFAULTS = {
    "num_of_rows": 20,
    "page_no": 1,
}

# 목록 정렬 옵션
SORT_OPTIONS = {
    "modifiedtime": "최신순",
    "title": "이름순",
}

# 날짜 형식
DATE_FORMATS = {
    "api_modified_time": "%Y%m%d%H%M%S",
}
