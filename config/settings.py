"""
애플리케이션 설정 관리 모듈

환경 변수와 설정 값들을 중앙에서 관리합니다.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List

from dotenv import load_dotenv

# 환경 변수 로드
load_dotenv()


DEFAULT_TOUR_API_BASE_URL = "https://apis.data.go.kr/B551011/KorService2"


@dataclass
class TourAPIConfig:
    """한국관광공사 API 설정"""

    base_url: str
    server_key: str
    public_key: str
    mobile_os: str = "ETC"
    mobile_app: str = "MyTrip"
    response_type: str = "json"
    timeout: float = 30.0  # 0 이하이면 타임아웃 없음


@dataclass
class RetrySettings:
    """API 재시도 설정"""

    max_attempts: int = 3
    base_delay_ms: int = 1000
    max_delay_ms: int = 10000


@dataclass
class LoggingConfig:
    """로깅 설정"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_prefix: str = "mytrip"
    log_dir: str = "logs"
    file_enabled: bool = True
    max_bytes: int = 10485760  # 10MB
    backup_count: int = 5


@dataclass
class AppSettings:
    """전체 애플리케이션 설정"""

    debug: bool
    environment: str
    tour_api: TourAPIConfig
    retry: RetrySettings
    logging: LoggingConfig


# 필수 환경 변수와 설명
REQUIRED_ENV_VARS: Dict[str, str] = {
    "TOUR_API_KEY": "한국관광공사 API 키 (서버)",
    "TOUR_API_PUBLIC_KEY": "한국관광공사 API 키 (클라이언트)",
}


@dataclass
class EnvValidationResult:
    """환경 변수 검증 결과"""

    missing_vars: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.missing_vars


def validate_required_env(required_vars: Dict[str, str] = None) -> EnvValidationResult:
    """필수 환경 변수 검증"""
    if required_vars is None:
        required_vars = REQUIRED_ENV_VARS

    result = EnvValidationResult()
    for key, description in required_vars.items():
        value = os.getenv(key, "")
        if not value.strip():
            result.missing_vars.append(key)
            result.errors.append(f"{key}: {description}이(가) 설정되지 않았습니다.")
    return result


def get_tour_api_config() -> TourAPIConfig:
    """관광 API 설정 조회"""
    return TourAPIConfig(
        base_url=os.getenv("TOUR_API_BASE_URL", DEFAULT_TOUR_API_BASE_URL),
        server_key=os.getenv("TOUR_API_KEY", ""),
        public_key=os.getenv("TOUR_API_PUBLIC_KEY", ""),
        mobile_os=os.getenv("TOUR_API_MOBILE_OS", "ETC"),
        mobile_app=os.getenv("TOUR_API_MOBILE_APP", "MyTrip"),
        timeout=float(os.getenv("TOUR_API_TIMEOUT", "30")),
    )


def get_retry_settings() -> RetrySettings:
    """재시도 설정 조회"""
    return RetrySettings(
        max_attempts=int(os.getenv("API_RETRY_MAX_ATTEMPTS", "3")),
        base_delay_ms=int(os.getenv("API_RETRY_BASE_DELAY_MS", "1000")),
        max_delay_ms=int(os.getenv("API_RETRY_MAX_DELAY_MS", "10000")),
    )


def get_logging_config() -> LoggingConfig:
    """로깅 설정 조회"""
    return LoggingConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format=os.getenv(
            "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ),
        file_prefix=os.getenv("LOG_FILE_PREFIX", "mytrip"),
        log_dir=os.getenv("LOG_DIR", "logs"),
        file_enabled=os.getenv("LOG_FILE_ENABLED", "true").lower() == "true",
        max_bytes=int(os.getenv("LOG_MAX_BYTES", "10485760")),
        backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
    )


def get_app_settings() -> AppSettings:
    """전체 애플리케이션 설정 조회"""
    return AppSettings(
        debug=os.getenv("DEBUG", "False").lower() == "true",
        environment=os.getenv("ENVIRONMENT", "development"),
        tour_api=get_tour_api_config(),
        retry=get_retry_settings(),
        logging=get_logging_config(),
    )


# 전역 설정 인스턴스
settings = get_app_settings()
