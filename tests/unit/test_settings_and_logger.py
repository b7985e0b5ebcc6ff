"""
설정 및 로깅 테스트
"""

import logging

import pytest

from config.settings import (
    LoggingConfig,
    get_app_settings,
    get_logging_config,
    get_retry_settings,
    get_tour_api_config,
    validate_required_env,
)
from mytrip.core.logger import AppLogger


@pytest.fixture
def restore_root_handlers():
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level
    yield
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers[:] = original_handlers
    root_logger.setLevel(original_level)


class TestSettings:
    """환경 변수 기반 설정 테스트"""

    def test_tour_api_config_from_env(self, monkeypatch):
        monkeypatch.setenv("TOUR_API_KEY", "server")
        monkeypatch.setenv("TOUR_API_PUBLIC_KEY", "public")
        monkeypatch.setenv("TOUR_API_TIMEOUT", "0")
        monkeypatch.delenv("TOUR_API_BASE_URL", raising=False)

        config = get_tour_api_config()

        assert config.server_key == "server"
        assert config.public_key == "public"
        assert config.timeout == 0
        assert config.base_url == "https://apis.data.go.kr/B551011/KorService2"

    def test_retry_defaults(self, monkeypatch):
        for name in ["API_RETRY_MAX_ATTEMPTS", "API_RETRY_BASE_DELAY_MS", "API_RETRY_MAX_DELAY_MS"]:
            monkeypatch.delenv(name, raising=False)

        retry = get_retry_settings()

        assert (retry.max_attempts, retry.base_delay_ms, retry.max_delay_ms) == (3, 1000, 10000)

    def test_logging_file_toggle(self, monkeypatch):
        monkeypatch.setenv("LOG_FILE_ENABLED", "false")
        assert get_logging_config().file_enabled is False

    def test_validate_required_env(self, monkeypatch):
        monkeypatch.setenv("TOUR_API_KEY", "server")
        monkeypatch.setenv("TOUR_API_PUBLIC_KEY", "  ")

        result = validate_required_env()

        assert not result.is_valid
        assert result.missing_vars == ["TOUR_API_PUBLIC_KEY"]
        assert len(result.errors) == 1


class TestAppLogger:
    """AppLogger 테스트"""

    def test_console_only(self, tmp_path, restore_root_handlers):
        AppLogger(LoggingConfig(log_dir=str(tmp_path / "logs"), file_enabled=False))

        assert len(logging.getLogger().handlers) == 1
        assert not (tmp_path / "logs").exists()

    def test_error_log_file(self, tmp_path, restore_root_handlers):
        app_logger = AppLogger(LoggingConfig(log_dir=str(tmp_path), file_prefix="test"))

        app_logger.log_client_error(
            {"errorType": "TypeError", "message": "undefined", "url": "/stats"}
        )
        for handler in logging.getLogger().handlers:
            handler.flush()

        error_files = list(tmp_path.glob("test_error_*.log"))
        assert len(error_files) == 1
        content = error_files[0].read_text(encoding="utf-8")
        assert "TypeError: undefined" in content
        assert "/stats" in content


def test_app_settings_bundle(monkeypatch):
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("API_RETRY_MAX_ATTEMPTS", "5")
    monkeypatch.delenv("TOUR_API_MOBILE_APP", raising=False)

    app_settings = get_app_settings()

    assert app_settings.debug is True
    assert app_settings.retry.max_attempts == 5
    assert app_settings.tour_api.mobile_app == "MyTrip"
