"""
한국관광공사 API 응답 정규화

응답 봉투(header/body)를 검증하고, items.item이 단일 객체이든 배열이든
항상 목록을 담은 ApiResult로 변환합니다.
"""

import logging
from typing import Any, Dict, List, Optional

from mytrip.core.error_handling import ErrorKind
from mytrip.models import ApiResult

logger = logging.getLogger(__name__)

SUCCESS_RESULT_CODE = "0000"

# resultCode별 사용자 메시지
RESULT_CODE_MESSAGES = {
    "01": "필수 파라미터가 누락되었습니다.",
    "02": "잘못된 파라미터 값입니다.",
    "03": "서비스키가 유효하지 않습니다.",
    "04": "서비스키가 만료되었습니다.",
    "05": "일일 호출 한도를 초과했습니다.",
}

DEFAULT_RESULT_MESSAGE = "API 호출 중 오류가 발생했습니다."
NO_DATA_MESSAGE = "조회된 데이터가 없습니다."
INVALID_ENVELOPE_MESSAGE = "서버 응답 형식이 올바르지 않습니다."


def get_result_code_message(result_code: str, result_msg: Optional[str] = None) -> str:
    """resultCode에 맞는 사용자 메시지 (모르는 코드는 원본 메시지 사용)"""
    return RESULT_CODE_MESSAGES.get(result_code) or result_msg or DEFAULT_RESULT_MESSAGE


def _parse_total_count(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _extract_header(envelope: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(envelope, dict):
        return None

    response = envelope.get("response")
    if isinstance(response, dict) and isinstance(response.get("header"), dict):
        return response["header"]

    # 게이트웨이 오류는 response 래퍼 없이 resultCode만 오는 경우가 있음
    if "resultCode" in envelope:
        return envelope

    return None


def normalize_envelope(envelope: Any) -> ApiResult[List[Dict[str, Any]]]:
    """
    API 응답 봉투를 ApiResult로 변환

    - resultCode가 "0000"이 아니면 코드별 메시지와 함께 실패
    - items가 없으면 "데이터 없음" 실패 (빈 배열과는 구분)
    - items.item이 단일 객체면 목록으로 감싸고, 배열이면 그대로 사용
    """
    header = _extract_header(envelope)
    if header is None:
        return ApiResult.failure(INVALID_ENVELOPE_MESSAGE, ErrorKind.PARSE)

    result_code = str(header.get("resultCode", "")).strip()
    if result_code != SUCCESS_RESULT_CODE:
        result_msg = header.get("resultMsg")
        logger.debug(f"API 오류 응답 - 코드: {result_code}, 메시지: {result_msg}")
        return ApiResult.failure(
            get_result_code_message(result_code, result_msg),
            ErrorKind.UPSTREAM,
            code=result_code or None,
        )

    # 성공 코드인데 response 래퍼가 없으면 형식 오류
    response = envelope.get("response")
    if not isinstance(response, dict):
        return ApiResult.failure(INVALID_ENVELOPE_MESSAGE, ErrorKind.PARSE)

    body = response.get("body")
    if not isinstance(body, dict):
        return ApiResult.failure(NO_DATA_MESSAGE, ErrorKind.NO_DATA)

    items = body.get("items")
    item = items.get("item") if isinstance(items, dict) else None
    if item is None:
        return ApiResult.failure(NO_DATA_MESSAGE, ErrorKind.NO_DATA)

    item_list = item if isinstance(item, list) else [item]
    return ApiResult.success(item_list, _parse_total_count(body.get("totalCount")))
