"""
재시도 기능을 갖춘 HTTP 클라이언트

한 번의 GET 요청을 수행하고, 일시적인 오류(네트워크 오류, 5xx 응답)일 때만
지수 백오프로 재시도합니다.
"""

import asyncio
import json
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional

import aiohttp

from config.settings import get_retry_settings, get_tour_api_config
from mytrip.core.error_handling import (
    ConfigurationError,
    ErrorContext,
    HTTPStatusError,
    ResponseParseError,
    RetryConfig,
    TourAPIError,
    classify_error,
    sanitize_parameters,
)

USER_AGENT = "MyTrip/1.0 (Tour Information Service)"


class ResilientFetcher:
    """재시도 HTTP 클라이언트"""

    def __init__(
        self,
        retry_config: Optional[RetryConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.logger = logging.getLogger(__name__)
        self.retry_config = retry_config or RetryConfig.from_settings(get_retry_settings())
        self.timeout = get_tour_api_config().timeout if timeout is None else timeout
        self.session = session
        self._owns_session = False
        self._sleep = sleep

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        if self.session is None:
            client_timeout = aiohttp.ClientTimeout(
                total=self.timeout if self.timeout > 0 else None
            )
            self.session = aiohttp.ClientSession(
                timeout=client_timeout, headers={"User-Agent": USER_AGENT}
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self.session:
            await self.session.close()
            self.session = None
            self._owns_session = False

    async def _fetch_once(self, url: str, params: Optional[Dict[str, Any]]) -> Dict:
        """HTTP GET 한 번 실행 후 JSON 파싱"""
        async with self.session.get(url, params=params) as response:
            if not 200 <= response.status < 300:
                raise HTTPStatusError(response.status, response.reason or "")

            response_text = await response.text()

            # XML 응답은 게이트웨이 오류인 경우가 대부분
            if response_text.lstrip().startswith("<"):
                raise ResponseParseError(f"XML 오류 응답: {response_text[:200]}...")

            return json.loads(response_text)

    async def fetch_with_retry(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Dict:
        """
        GET 요청 실행 (일시적 오류 시 재시도)

        Args:
            url: 요청 URL
            params: 쿼리 파라미터

        Returns:
            Dict: 파싱된 JSON 응답

        Raises:
            TourAPIError: 재시도 불가능한 오류이거나 재시도를 모두 소진한 경우
        """
        if self.session is None:
            raise ConfigurationError(
                "HTTP 세션이 초기화되지 않았습니다. async with 구문을 사용하세요."
            )

        attempt = 0
        while True:
            start_time = time.time()
            try:
                data = await self._fetch_once(url, params)
                self.logger.debug(
                    f"API 호출 성공: {url} ({int((time.time() - start_time) * 1000)}ms)"
                )
                return data
            except Exception as e:
                info = classify_error(e)

                if self.retry_config.should_retry(info, attempt):
                    delay = self.retry_config.calculate_delay(attempt)
                    self.logger.warning(
                        f"API 호출 실패 (재시도 {attempt + 1}/{self.retry_config.max_attempts}, "
                        f"{delay:.1f}초 후): {info.kind.value} {info.status_code or ''} {url}"
                    )
                    await self._sleep(delay)
                    attempt += 1
                    continue

                context = ErrorContext(
                    endpoint=url,
                    parameters=sanitize_parameters(params or {}),
                    metadata={"attempts": attempt + 1},
                )
                raise TourAPIError(
                    info.message,
                    kind=info.kind,
                    status_code=info.status_code,
                    context=context,
                    cause=e,
                ) from e
