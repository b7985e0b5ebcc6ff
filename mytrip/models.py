"""
관광 API 데이터 모델

한국관광공사 API 응답 구조를 기반으로 한 데이터 클래스와
모든 공개 함수가 반환하는 ApiResult를 정의합니다.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from config.constants import DATE_FORMATS
from mytrip.core.error_handling import ErrorKind
from mytrip.utils.coordinates import GeoPoint, to_geo

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """API 호출 결과 (성공 또는 실패 중 하나)"""

    ok: bool
    data: Optional[T] = None
    total_count: Optional[int] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    status_code: Optional[int] = None
    code: Optional[str] = None

    @classmethod
    def success(cls, data: T, total_count: Optional[int] = None) -> "ApiResult[T]":
        return cls(ok=True, data=data, total_count=total_count)

    @classmethod
    def failure(
        cls,
        message: str,
        error_kind: ErrorKind = ErrorKind.UNKNOWN,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ) -> "ApiResult[T]":
        return cls(
            ok=False,
            error_kind=error_kind,
            message=message,
            status_code=status_code,
            code=code,
        )

    def map(self, func) -> "ApiResult":
        """성공 데이터 변환 (실패는 그대로 전달)"""
        if not self.ok:
            return self
        return ApiResult.success(func(self.data), self.total_count)

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            body = {"success": True, "data": _serialize(self.data)}
            if self.total_count is not None:
                body["totalCount"] = self.total_count
            return body
        body = {"success": False, "error": self.message}
        if self.code:
            body["code"] = self.code
        return body


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _str(item: Dict[str, Any], key: str) -> str:
    value = item.get(key)
    return "" if value is None else str(value)


def _opt(item: Dict[str, Any], key: str) -> Optional[str]:
    value = item.get(key)
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class AreaCode:
    """지역 코드 (areaCode2)"""

    code: str
    name: str
    rnum: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "AreaCode":
        return cls(code=_str(item, "code"), name=_str(item, "name"), rnum=_opt(item, "rnum"))

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "name": self.name, "rnum": self.rnum}


@dataclass(frozen=True)
class TourItem:
    """관광지 목록 항목 (areaBasedList2, searchKeyword2)"""

    content_id: str
    content_type_id: str
    title: str
    addr1: str = ""
    addr2: Optional[str] = None
    area_code: str = ""
    mapx: str = ""
    mapy: str = ""
    first_image: Optional[str] = None
    first_image2: Optional[str] = None
    tel: Optional[str] = None
    cat1: Optional[str] = None
    cat2: Optional[str] = None
    cat3: Optional[str] = None
    modified_time: str = ""

    @staticmethod
    def _common_fields(item: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "content_id": _str(item, "contentid"),
            "content_type_id": _str(item, "contenttypeid"),
            "title": _str(item, "title"),
            "addr1": _str(item, "addr1"),
            "addr2": _opt(item, "addr2"),
            "area_code": _str(item, "areacode"),
            "mapx": _str(item, "mapx"),
            "mapy": _str(item, "mapy"),
            "first_image": _opt(item, "firstimage"),
            "first_image2": _opt(item, "firstimage2"),
            "tel": _opt(item, "tel"),
            "cat1": _opt(item, "cat1"),
            "cat2": _opt(item, "cat2"),
            "cat3": _opt(item, "cat3"),
            "modified_time": _str(item, "modifiedtime"),
        }

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "TourItem":
        return cls(**cls._common_fields(item))

    @property
    def geo(self) -> GeoPoint:
        """WGS84 좌표 (좌표가 잘못된 경우 ValueError)"""
        return to_geo(self.mapx, self.mapy)

    @property
    def modified_at(self) -> Optional[datetime]:
        try:
            return datetime.strptime(self.modified_time, DATE_FORMATS["api_modified_time"])
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contentid": self.content_id,
            "contenttypeid": self.content_type_id,
            "title": self.title,
            "addr1": self.addr1,
            "addr2": self.addr2,
            "areacode": self.area_code,
            "mapx": self.mapx,
            "mapy": self.mapy,
            "firstimage": self.first_image,
            "firstimage2": self.first_image2,
            "tel": self.tel,
            "cat1": self.cat1,
            "cat2": self.cat2,
            "cat3": self.cat3,
            "modifiedtime": self.modified_time,
        }


@dataclass(frozen=True)
class TourDetail(TourItem):
    """관광지 상세 정보 (detailCommon2)"""

    zipcode: Optional[str] = None
    homepage: Optional[str] = None
    overview: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "TourDetail":
        return cls(
            **cls._common_fields(item),
            zipcode=_opt(item, "zipcode"),
            homepage=_opt(item, "homepage"),
            overview=_opt(item, "overview"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            {"zipcode": self.zipcode, "homepage": self.homepage, "overview": self.overview}
        )
        return data


INTRO_FIELDS = (
    "usetime",
    "restdate",
    "infocenter",
    "parking",
    "chkpet",
    "accomcount",
    "expguide",
    "babycarriage",
    "pet",
    "expagerange",
    "usefee",
    "parkingfee",
    "discountinfo",
    "reservation",
    "refund",
)


@dataclass(frozen=True)
class TourIntro:
    """관광지 운영 정보 (detailIntro2) - 타입별로 필드가 다름"""

    content_id: str
    content_type_id: str
    fields: Dict[str, str] = field(default_factory=dict)
    extra: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "TourIntro":
        fields = {}
        extra = {}
        for key, value in item.items():
            if key in ("contentid", "contenttypeid") or value in (None, ""):
                continue
            if key in INTRO_FIELDS:
                fields[key] = str(value)
            else:
                extra[key] = str(value)
        return cls(
            content_id=_str(item, "contentid"),
            content_type_id=_str(item, "contenttypeid"),
            fields=fields,
            extra=extra,
        )

    def get(self, key: str) -> Optional[str]:
        return self.fields.get(key) or self.extra.get(key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contentid": self.content_id,
            "contenttypeid": self.content_type_id,
            **self.extra,
            **self.fields,
        }


@dataclass(frozen=True)
class TourImage:
    """관광지 이미지 (detailImage2)"""

    content_id: str
    origin_url: str
    small_url: str
    name: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "TourImage":
        return cls(
            content_id=_str(item, "contentid"),
            origin_url=_str(item, "originimgurl"),
            small_url=_str(item, "smallimageurl"),
            name=_opt(item, "imgname"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contentid": self.content_id,
            "originimgurl": self.origin_url,
            "smallimageurl": self.small_url,
            "imgname": self.name,
        }


@dataclass(frozen=True)
class PetTourInfo:
    """반려동물 동반 여행 정보 (detailPetTour2)"""

    content_id: str
    content_type_id: str = ""
    leash: Optional[str] = None
    size: Optional[str] = None
    place: Optional[str] = None
    fee: Optional[str] = None
    info: Optional[str] = None
    parking: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "PetTourInfo":
        return cls(
            content_id=_str(item, "contentid"),
            content_type_id=_str(item, "contenttypeid"),
            leash=_opt(item, "chkpetleash"),
            size=_opt(item, "chkpetsize"),
            place=_opt(item, "chkpetplace"),
            fee=_opt(item, "chkpetfee"),
            info=_opt(item, "petinfo"),
            parking=_opt(item, "parking"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contentid": self.content_id,
            "contenttypeid": self.content_type_id,
            "chkpetleash": self.leash,
            "chkpetsize": self.size,
            "chkpetplace": self.place,
            "chkpetfee": self.fee,
            "petinfo": self.info,
            "parking": self.parking,
        }


@dataclass(frozen=True)
class RegionStat:
    """지역별 관광지 개수"""

    code: str
    name: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "name": self.name, "count": self.count}


@dataclass(frozen=True)
class TypeStat:
    """콘텐츠 타입별 관광지 개수"""

    code: str
    name: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "name": self.name, "count": self.count}


@dataclass(frozen=True)
class StatsSummary:
    """통계 요약 (요청 단위로만 유효)"""

    total_count: int
    top_regions: List[RegionStat]
    top_types: List[TypeStat]
    computed_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCount": self.total_count,
            "topRegions": [r.to_dict() for r in self.top_regions],
            "topTypes": [t.to_dict() for t in self.top_types],
            "computedAt": self.computed_at.isoformat(),
        }


@dataclass(frozen=True)
class TourListing:
    """목록 페이지 결과"""

    items: List[TourItem]
    total_count: int
    page_no: int
    partial_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "totalCount": self.total_count,
            "pageNo": self.page_no,
            "partialError": self.partial_error,
        }


@dataclass(frozen=True)
class PlaceDetail:
    """상세 페이지 데이터 묶음"""

    detail: TourDetail
    intro: Optional[TourIntro] = None
    images: List[TourImage] = field(default_factory=list)
    pet_info: Optional[PetTourInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": self.detail.to_dict(),
            "intro": self.intro.to_dict() if self.intro else None,
            "images": [image.to_dict() for image in self.images],
            "petInfo": self.pet_info.to_dict() if self.pet_info else None,
        }
