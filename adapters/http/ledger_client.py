"""
원장 API 클라이언트

원장/리포트 조회 API를 호출하는 비동기 HTTP 클라이언트.
- 응답 envelope({success, data, message})를 풀어 data만 반환
- 네트워크 오류, 2xx 외 응답, success=false는 TransportError
- LatestRequestGate: 같은 화면에서 새 조회가 시작되면 이전 조회를 취소하고
  늦게 도착한 이전 결과는 버린다
"""

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Callable, TypeVar

import httpx

from core.errors import TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _date_param(value: date | None) -> str | None:
    return value.isoformat() if value else None


def _clean_params(params: dict[str, Any]) -> dict[str, Any]:
    """None 값 파라미터 제거"""
    return {key: value for key, value in params.items() if value is not None}


class LedgerApiClient:
    """원장 API 클라이언트

    Args:
        base_url: API 베이스 URL (예: http://127.0.0.1:8000)
        timeout: 요청 타임아웃 (초)
        transport: httpx transport (테스트용 MockTransport/ASGITransport)

    사용 예시:
    ```python
    async with LedgerApiClient("http://127.0.0.1:8000") as client:
        ledger = await client.get_sales_ledger("P001", start=date(2024, 1, 1))
    ```
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "LedgerApiClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """API 요청 실행

        Returns:
            envelope의 data

        Raises:
            TransportError: 네트워크 오류(status=0), HTTP 에러, success=false
        """
        client = await self._get_client()

        try:
            response = await client.request(
                method,
                path,
                params=_clean_params(params or {}),
                json=json,
            )
        except httpx.RequestError as e:
            logger.error(f"원장 API 요청 실패: {method} {path} ({e})")
            raise TransportError(f"request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            message = response.text
            if isinstance(body, dict) and body.get("message"):
                message = body["message"]
            logger.warning(f"원장 API 에러 응답: {method} {path} {response.status_code}")
            raise TransportError(message, status=response.status_code)

        if not isinstance(body, dict) or "success" not in body:
            raise TransportError("malformed response envelope", status=response.status_code)

        if not body["success"]:
            raise TransportError(
                body.get("message") or "request was not successful",
                status=response.status_code,
            )

        return body.get("data")

    # -------------------------------------------------------------------------
    # 원장 조회
    # -------------------------------------------------------------------------

    async def get_sales_ledger(
        self,
        party_id: str,
        start: date | None = None,
        end: date | None = None,
        query: str | None = None,
    ) -> dict[str, Any]:
        """거래처 매출 원장"""
        return await self._request(
            "GET",
            "/api/sales/ledger",
            params={
                "partyId": party_id,
                "from": _date_param(start),
                "to": _date_param(end),
                "q": query,
            },
        )

    async def get_rice_purchase_ledger(
        self,
        party_id: str,
        start: date | None = None,
        end: date | None = None,
        query: str | None = None,
    ) -> dict[str, Any]:
        """거래처 쌀 매입 원장"""
        return await self._request(
            "GET",
            "/api/purchase/rice/ledger",
            params={
                "partyId": party_id,
                "from": _date_param(start),
                "to": _date_param(end),
                "q": query,
            },
        )

    async def list_parties(self, party_type: str | None = None) -> list[dict[str, Any]]:
        """거래처 목록 (참조 데이터)"""
        return await self._request("GET", "/api/parties", params={"type": party_type})

    # -------------------------------------------------------------------------
    # 리포트
    # -------------------------------------------------------------------------

    async def get_daily_report(self, day: date) -> dict[str, Any]:
        """일일 현금 출납 리포트"""
        return await self._request(
            "GET", "/api/reports/daily", params={"date": day.isoformat()}
        )

    async def get_daily_summary(self, start: date, end: date) -> dict[str, Any]:
        """기간 일별 요약"""
        return await self._request(
            "GET",
            "/api/reports/daily/summary",
            params={"from": start.isoformat(), "to": end.isoformat()},
        )

    async def get_financial_statement(self, start: date, end: date) -> dict[str, Any]:
        """기간 재무 현황"""
        return await self._request(
            "GET",
            "/api/reports/financial-statement",
            params={"from": start.isoformat(), "to": end.isoformat()},
        )

    # -------------------------------------------------------------------------
    # 분개 쓰기
    # -------------------------------------------------------------------------

    async def create_entry(self, payload: dict[str, Any]) -> dict[str, Any]:
        """분개 생성 (금액은 통화 단위 문자열/숫자)"""
        return await self._request("POST", "/api/ledger/entries", json=payload)

    async def update_entry(self, entry_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """분개 수정"""
        return await self._request("PUT", f"/api/ledger/entries/{entry_id}", json=payload)

    async def cancel_entry(self, entry_id: str) -> dict[str, Any]:
        """분개 취소"""
        return await self._request("DELETE", f"/api/ledger/entries/{entry_id}")


class LatestRequestGate:
    """최신 조회만 반영하는 요청 게이트 (화면 단위)

    run()을 호출할 때마다 세대(generation)가 증가한다.
    진행 중인 이전 조회는 취소되고, 이전 세대의 결과/예외는 버려진다 (None 반환).

    사용 예시:
    ```python
    gate = LatestRequestGate()
    ledger = await gate.run(lambda: client.get_sales_ledger("P001", start, end))
    if ledger is None:
        return  # 더 최신 조회가 시작됨
    ```
    """

    def __init__(self) -> None:
        self._generation = 0
        self._task: asyncio.Task | None = None

    @property
    def generation(self) -> int:
        """현재 세대"""
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def cancel(self) -> None:
        """진행 중인 조회 취소 (화면 종료 시)"""
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def run(self, factory: Callable[[], Awaitable[T]]) -> T | None:
        """조회 실행

        Args:
            factory: 조회 코루틴 생성 함수

        Returns:
            조회 결과 (더 최신 조회에 의해 대체되었으면 None)

        Raises:
            현재 세대 조회의 예외는 그대로 전파
        """
        self.cancel()
        generation = self._generation

        task = asyncio.ensure_future(factory())
        self._task = task

        try:
            result = await task
        except asyncio.CancelledError:
            if not self.is_current(generation):
                logger.debug(f"이전 조회 취소됨 (generation={generation})")
                return None
            raise
        except Exception:
            if not self.is_current(generation):
                return None
            raise
        finally:
            if self._task is task:
                self._task = None

        if not self.is_current(generation):
            logger.debug(f"이전 조회 결과 폐기 (generation={generation})")
            return None

        return result


async def fetch_many(*calls: Awaitable[Any]) -> list[Any]:
    """독립적인 조회를 동시에 실행 (fan-out/join)

    하나라도 실패하면 아직 실행 중인 나머지 조회를 취소하고 첫 예외를 전파.

    Example:
        >>> customers, suppliers = await fetch_many(
        ...     client.list_parties("CUSTOMER"),
        ...     client.list_parties("SUPPLIER"),
        ... )
    """
    tasks = [asyncio.ensure_future(call) for call in calls]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        pending = [t for t in tasks if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.debug(f"동시 조회 실패, 나머지 {len(pending)}건 취소")
        raise
