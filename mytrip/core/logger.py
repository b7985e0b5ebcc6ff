"""
로깅 설정 및 관리 모듈

애플리케이션 전체의 로깅을 중앙에서 관리합니다.
"""

import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from config.settings import LoggingConfig, get_logging_config


class AppLogger:
    """애플리케이션 로거 클래스"""

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or get_logging_config()
        self.log_dir = Path(self.config.log_dir)
        self._setup_logging()

    def _setup_logging(self) -> None:
        """로깅 설정"""
        level = getattr(logging, self.config.level.upper(), logging.INFO)
        formatter = logging.Formatter(self.config.format)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        # 콘솔 핸들러
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if not self.config.file_enabled:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        today = datetime.now().strftime("%Y%m%d")

        # 파일 핸들러 (일반 로그)
        file_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / f"{self.config.file_prefix}_{today}.log",
            maxBytes=self.config.max_bytes,
            backupCount=self.config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        # 에러 로그 파일 핸들러
        error_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / f"{self.config.file_prefix}_error_{today}.log",
            maxBytes=self.config.max_bytes,
            backupCount=self.config.backup_count,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        root_logger.addHandler(error_handler)

    def get_logger(self, name: str) -> logging.Logger:
        """특정 이름의 로거 반환"""
        return logging.getLogger(name)

    def log_client_error(self, error_log: Dict[str, Any]) -> None:
        """클라이언트에서 전송한 오류 로그 기록"""
        logger = self.get_logger("client")
        logger.error(
            f"클라이언트 오류 수신 - {error_log.get('errorType') or 'Unknown'}: "
            f"{error_log.get('message')} (url: {error_log.get('url')}, "
            f"timestamp: {error_log.get('timestamp')})"
        )


# 전역 로거 인스턴스
_logger_instance = None


def setup_logging(config: Optional[LoggingConfig] = None) -> AppLogger:
    """로깅 초기화 (이미 초기화되었으면 기존 인스턴스 반환)"""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = AppLogger(config)
    return _logger_instance


def get_logger_instance() -> AppLogger:
    """전역 로거 인스턴스 반환"""
    return setup_logging()
