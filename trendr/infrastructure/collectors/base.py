"""플랫폼 어댑터 공통 베이스 클래스."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import httpx

from trendr.domain.entities import RawItem
from trendr.domain.exceptions import NetworkError, ParseError

logger = logging.getLogger(__name__)

USER_AGENT = "Trendr/1.0.0"


class BaseAdapter(ABC):
    """모든 플랫폼 어댑터의 공통 베이스.

    도메인 Protocol(PlatformAdapter)의 계약을 이행하면서,
    공통 로직(HTTP 클라이언트, 상태 코드 → 예외 변환, 항목 단위 파싱)을 제공한다.
    """

    REQUEST_DELAY: float = 1.0

    def __init__(
        self,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._timeout = timeout
        self._transport = transport

    @property
    @abstractmethod
    def platform(self) -> str: ...

    @property
    def request_delay(self) -> float:
        return self.REQUEST_DELAY

    async def prepare(self, credentials: Any) -> None:
        """기본값: 준비할 것 없음. 토큰 발급이 필요한 어댑터에서 오버라이드."""
        return None

    @abstractmethod
    async def test_connection(self, credentials: Any) -> bool: ...

    @abstractmethod
    async def fetch_page(self, credentials: Any, target: str) -> list[RawItem]: ...

    # ─── HTTP 헬퍼 ───

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            headers={"User-Agent": USER_AGENT},
        )

    async def _request(
        self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any
    ) -> httpx.Response:
        try:
            return await client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            # 타임아웃/연결 실패는 일시적이므로 재시도 대상
            raise NetworkError(f"[{self.platform}] 요청 실패: {e}", retryable=True) from e

    def _raise_for_status(self, response: httpx.Response, context: str) -> None:
        if response.is_success:
            return
        status = response.status_code
        raise NetworkError(
            f"[{self.platform}] {context}: HTTP {status}",
            retryable=status == 429 or status >= 500,
        )

    def _json(self, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"[{self.platform}] JSON 응답 파싱 실패: {e}") from e
        if not isinstance(data, dict):
            raise ParseError(f"[{self.platform}] 예상치 못한 응답 형식: {type(data).__name__}")
        return data

    def _parse_items(
        self, raw_items: Any, parse: Callable[[dict[str, Any]], RawItem]
    ) -> list[RawItem]:
        """항목 하나의 파싱 실패는 경고만 남기고 나머지를 계속 처리."""
        if not isinstance(raw_items, list):
            raise ParseError(f"[{self.platform}] 항목 목록 형식 오류: {type(raw_items).__name__}")

        items: list[RawItem] = []
        for raw in raw_items:
            if not isinstance(raw, dict):
                logger.warning(f"[{self.platform}] 항목 형식 오류, 건너뜀: {type(raw).__name__}")
                continue
            try:
                items.append(parse(raw))
            except ParseError as e:
                logger.warning(f"[{self.platform}] 항목 파싱 실패, 건너뜀: {e}")
            except (TypeError, ValueError, AttributeError, KeyError, OverflowError, OSError) as e:
                # 필드 타입이 예상과 다른 경우 (문자열 metrics, 범위 밖 timestamp 등)
                logger.warning(
                    f"[{self.platform}] 항목 형식 오류, 건너뜀: {e.__class__.__name__}: {e}"
                )
        return items


def to_int(value: Any) -> Optional[int]:
    """숫자 또는 숫자 문자열을 int로. 없거나 변환 불가하면 None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
