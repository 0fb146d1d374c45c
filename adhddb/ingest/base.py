"""외부 API 클라이언트 베이스 클래스"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from adhddb.config import settings

logger = logging.getLogger(__name__)


class BaseAPIClient(ABC):
    """외부 API 클라이언트 베이스 클래스

    async context manager로 사용한다. 요청 간 최소 간격(request_delay)을 지키고,
    전송 오류와 5xx는 지수 백오프로 재시도, 429는 Retry-After 만큼 대기한다.
    404는 None (결과 없음)으로 돌려준다.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        request_delay: float = 0.0,
        max_retries: Optional[int] = None,
        retry_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.request_delay = request_delay
        self.max_retries = max_retries if max_retries is not None else settings.HTTP_MAX_RETRIES
        self.retry_delay = retry_delay
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._last_request = 0.0

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"Accept": "application/json", "User-Agent": "ADHD-DB/1.0"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(f"{type(self).__name__} must be used as async context manager")
        return self._client

    @abstractmethod
    def source_type(self) -> str:
        """소스 타입 반환"""
        pass

    async def _throttle(self) -> None:
        """요청 간 최소 간격 유지"""
        if self.request_delay <= 0:
            return
        elapsed = time.monotonic() - self._last_request
        if elapsed < self.request_delay:
            await asyncio.sleep(self.request_delay - elapsed)
        self._last_request = time.monotonic()

    def _retry_after(self, response: httpx.Response, attempt: int) -> float:
        header = response.headers.get("Retry-After")
        if header and header.isdigit():
            return float(header)
        return self.retry_delay * (2 ** attempt)

    async def _request(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
    ) -> Optional[Any]:
        """
        API 요청 (재시도 로직 포함)

        Args:
            path: base_url 기준 경로 (예: "/drug/label.json")
            params: 쿼리 파라미터 (None 값은 제외)

        Returns:
            JSON 응답, 404면 None

        Raises:
            httpx.HTTPError: 재시도 소진 또는 재시도 불가 4xx
        """
        url = f"{self.base_url}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        last_error: Optional[httpx.HTTPError] = None

        for attempt in range(self.max_retries):
            await self._throttle()
            try:
                response = await self.client.get(url, params=query)

                if response.status_code == 404:
                    return None

                # Rate limit 처리
                if response.status_code == 429:
                    wait_time = self._retry_after(response, attempt)
                    logger.warning(
                        f"[{self.source_type()}] Rate limited, {wait_time:.1f}초 대기"
                    )
                    last_error = httpx.HTTPStatusError(
                        "Rate limited", request=response.request, response=response,
                    )
                    await asyncio.sleep(wait_time)
                    continue

                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                last_error = e
                if e.response.status_code < 500:
                    raise
                logger.warning(
                    f"[{self.source_type()}] 서버 오류 {e.response.status_code} "
                    f"(시도 {attempt + 1}/{self.max_retries})"
                )
                await asyncio.sleep(self.retry_delay * (2 ** attempt))

            except httpx.RequestError as e:
                last_error = e
                logger.warning(
                    f"[{self.source_type()}] 요청 실패: {e} "
                    f"(시도 {attempt + 1}/{self.max_retries})"
                )
                await asyncio.sleep(self.retry_delay * (2 ** attempt))

        raise last_error or httpx.RequestError(f"Failed to fetch {url}")
