"""
통합 오류 처리 프레임워크

관광 API 호출에서 발생하는 오류를 분류하고, 재시도 여부와
사용자에게 보여줄 메시지를 결정합니다.
"""

import asyncio
import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

import aiohttp


class ErrorKind(Enum):
    """오류 종류"""

    NETWORK = "network"  # 연결 실패, 타임아웃 (재시도 대상)
    API_STATUS = "api"  # HTTP 상태 코드 오류 (5xx만 재시도)
    PARSE = "parse"  # 응답 파싱 실패
    UNKNOWN = "unknown"  # 기타
    UPSTREAM = "upstream"  # resultCode가 "0000"이 아닌 응답
    NO_DATA = "no_data"  # 정상 응답이지만 items 없음


# HTTP 상태 코드별 사용자 메시지
STATUS_MESSAGES = {
    400: "잘못된 요청입니다. 입력값을 확인해주세요.",
    401: "인증이 필요합니다. API 키를 확인해주세요.",
    403: "접근이 거부되었습니다. 권한을 확인해주세요.",
    404: "요청한 리소스를 찾을 수 없습니다.",
    429: "요청 횟수가 초과되었습니다. 잠시 후 다시 시도해주세요.",
    500: "서버 내부 오류가 발생했습니다. 잠시 후 다시 시도해주세요.",
    503: "서비스를 일시적으로 사용할 수 없습니다. 잠시 후 다시 시도해주세요.",
}

DEFAULT_STATUS_MESSAGE = "서버에서 오류가 발생했습니다."
NETWORK_MESSAGE = "네트워크 연결에 실패했습니다. 인터넷 연결을 확인해주세요."
PARSE_MESSAGE = "서버 응답을 처리하는 중 오류가 발생했습니다."
UNKNOWN_MESSAGE = "알 수 없는 오류가 발생했습니다."


@dataclass(frozen=True)
class ErrorInfo:
    """분류된 오류 정보"""

    kind: ErrorKind
    message: str
    status_code: Optional[int] = None


@dataclass
class ErrorContext:
    """오류 컨텍스트 정보"""

    operation: str = ""
    endpoint: str = ""
    parameters: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환 (로그용)"""
        return {
            "operation": self.operation,
            "endpoint": self.endpoint,
            "parameters": sanitize_parameters(self.parameters),
            "metadata": self.metadata,
            "timestamp": self.timestamp.isoformat(),
        }


SENSITIVE_KEYS = ("servicekey", "api_key", "apikey", "password", "token", "secret")


def sanitize_parameters(params: Dict[str, Any]) -> Dict[str, Any]:
    """민감 정보 제거"""
    sanitized = {}
    for key, value in params.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            if isinstance(value, str) and len(value) > 6:
                sanitized[key] = f"{value[:3]}***{value[-3:]}"
            else:
                sanitized[key] = "***"
        else:
            sanitized[key] = value
    return sanitized


class TourAPIError(Exception):
    """프로젝트 기본 예외 클래스"""

    kind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        status_code: Optional[int] = None,
        context: Optional[ErrorContext] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.status_code = status_code
        self.context = context or ErrorContext()
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "kind": self.kind.value,
            "status_code": self.status_code,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class HTTPStatusError(TourAPIError):
    """2xx가 아닌 HTTP 응답"""

    kind = ErrorKind.API_STATUS

    def __init__(self, status_code: int, reason: str = "", **kwargs):
        super().__init__(
            f"HTTP {status_code}: {reason}".rstrip(": "),
            status_code=status_code,
            **kwargs,
        )
        self.reason = reason


class ResponseParseError(TourAPIError):
    """응답 본문을 JSON으로 해석할 수 없음"""

    kind = ErrorKind.PARSE


class ConfigurationError(TourAPIError):
    """설정 관련 오류"""

    def __init__(self, message: str, config_key: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.config_key = config_key


def get_status_message(status_code: Optional[int]) -> str:
    """HTTP 상태 코드별 사용자 메시지"""
    return STATUS_MESSAGES.get(status_code, DEFAULT_STATUS_MESSAGE)


def classify_error(error: BaseException) -> ErrorInfo:
    """
    발생한 예외를 오류 종류로 분류

    우선순위:
        1. 전송 계층 실패 -> NETWORK
        2. 2xx가 아닌 HTTP 응답 -> API_STATUS (상태 코드별 메시지)
        3. JSON 파싱 실패 -> PARSE
        4. 그 외 -> UNKNOWN
    """
    if isinstance(error, HTTPStatusError):
        return ErrorInfo(
            ErrorKind.API_STATUS,
            get_status_message(error.status_code),
            error.status_code,
        )

    if isinstance(error, TourAPIError):
        return ErrorInfo(error.kind, error.message, error.status_code)

    # ContentTypeError는 ClientResponseError의 하위 클래스이므로 먼저 검사
    if isinstance(error, aiohttp.ContentTypeError):
        return ErrorInfo(ErrorKind.PARSE, PARSE_MESSAGE)

    if isinstance(
        error,
        (
            aiohttp.ClientConnectionError,
            aiohttp.ClientPayloadError,
            asyncio.TimeoutError,
            ConnectionError,
            OSError,
        ),
    ):
        return ErrorInfo(ErrorKind.NETWORK, NETWORK_MESSAGE)

    if isinstance(error, aiohttp.ClientResponseError):
        return ErrorInfo(
            ErrorKind.API_STATUS, get_status_message(error.status), error.status
        )

    if isinstance(error, (json.JSONDecodeError, UnicodeDecodeError)):
        return ErrorInfo(ErrorKind.PARSE, PARSE_MESSAGE)

    return ErrorInfo(ErrorKind.UNKNOWN, str(error) or UNKNOWN_MESSAGE)


class RetryConfig:
    """재시도 설정"""

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay_ms: int = 1000,
        max_delay_ms: int = 10000,
        exponential_base: float = 2.0,
    ):
        self.max_attempts = max_attempts
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self.exponential_base = exponential_base

    @classmethod
    def from_settings(cls, retry_settings) -> "RetryConfig":
        return cls(
            max_attempts=retry_settings.max_attempts,
            base_delay_ms=retry_settings.base_delay_ms,
            max_delay_ms=retry_settings.max_delay_ms,
        )

    def calculate_delay(self, attempt: int) -> float:
        """재시도 지연 시간 계산 (지수 백오프, 초 단위)"""
        delay_ms = self.base_delay_ms * (self.exponential_base**attempt)
        return min(delay_ms, self.max_delay_ms) / 1000.0

    def should_retry(self, info: ErrorInfo, attempt: int) -> bool:
        return attempt < self.max_attempts and is_retryable(info)


def is_retryable(info: ErrorInfo) -> bool:
    """일시적인 서버 측 오류인지 확인"""
    if info.kind == ErrorKind.NETWORK:
        return True
    return (
        info.kind == ErrorKind.API_STATUS
        and info.status_code is not None
        and info.status_code >= 500
    )
