"""
원장 서비스

거래처별 매출/쌀 매입 원장 조회.
거래처 전체 이력을 (entry_date, seq) 순으로 읽어 기간 기초 잔액과
누적 잔액을 계산한 뒤, 검색어는 마지막에 표시 행에만 적용한다.
"""

import logging
from datetime import date
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.ledger.filters import DateWindow, build_ledger_window
from core.ledger.store import LedgerStore
from core.ledger.types import LedgerKind, LedgerSnapshot, LedgerSummary
from web.models.responses import (
    DateRangeResponse,
    LedgerRowResponse,
    LedgerSummaryResponse,
    MoneyResponse,
    PartyLedgerResponse,
    PartyResponse,
)

logger = logging.getLogger(__name__)


def date_range_response(window: DateWindow) -> DateRangeResponse:
    return DateRangeResponse(
        date_from=window.start.isoformat() if window.start else None,
        date_to=window.end.isoformat() if window.end else None,
    )


def ledger_row_response(snapshot: LedgerSnapshot, symbol: str) -> LedgerRowResponse:
    entry = snapshot.entry
    return LedgerRowResponse(
        entry_id=entry.entry_id,
        seq=entry.seq,
        date=entry.entry_date.isoformat(),
        transaction_type=entry.transaction_type,
        invoice_no=entry.invoice_no,
        description=entry.description,
        party_name=entry.party_name,
        head_name=entry.head_name,
        debit=MoneyResponse.of(entry.debit, symbol),
        credit=MoneyResponse.of(entry.credit, symbol),
        balance=MoneyResponse.of(snapshot.balance, symbol),
    )


def summary_response(summary: LedgerSummary, symbol: str) -> LedgerSummaryResponse:
    return LedgerSummaryResponse(
        opening_balance=MoneyResponse.of(summary.opening_balance, symbol),
        closing_balance=MoneyResponse.of(summary.closing_balance, symbol),
        total_debit=MoneyResponse.of(summary.total_debit, symbol),
        total_credit=MoneyResponse.of(summary.total_credit, symbol),
        entry_count=summary.entry_count,
    )


def party_response(party: dict[str, Any], symbol: str) -> PartyResponse:
    return PartyResponse(
        party_id=party["party_id"],
        name=party["name"],
        party_type=party["party_type"],
        opening_balance=MoneyResponse.of(party["opening_balance"], symbol),
    )


class LedgerService:
    """거래처 원장 서비스

    Args:
        db: SQLite 어댑터 (읽기 전용)
        currency_symbol: 표시용 통화 기호
    """

    def __init__(self, db: SQLiteAdapter, currency_symbol: str = Defaults.CURRENCY_SYMBOL):
        self.db = db
        self.symbol = currency_symbol
        self.store = LedgerStore(db)

    async def get_party_ledger(
        self,
        ledger_kind: LedgerKind,
        party_id: str,
        start: date | None = None,
        end: date | None = None,
        query: str | None = None,
    ) -> PartyLedgerResponse:
        """거래처 원장 조회

        Args:
            ledger_kind: SALES 또는 RICE_PURCHASE
            party_id: 거래처 ID
            start: 시작일 (포함, 선택)
            end: 종료일 (포함, 선택)
            query: 검색어 (표시 행만 필터)

        Raises:
            ValidationError: start > end
            NotFoundError: 거래처 없음
        """
        window = DateWindow(start, end).validate()
        party = await self.store.require_party(party_id)

        # 기초 잔액 계산을 위해 기간 이전 이력 전체를 읽는다
        entries = await self.store.fetch_entries(ledger_kind.value, party_id, end=end)
        view = build_ledger_window(
            entries,
            window,
            base_opening=party["opening_balance"],
            query=query,
        )

        logger.debug(
            f"원장 조회: {ledger_kind.value}/{party_id} "
            f"rows={len(view.rows)}/{view.summary.entry_count}"
        )

        return PartyLedgerResponse(
            ledger_kind=ledger_kind.value,
            party=party_response(party, self.symbol),
            date_range=date_range_response(window),
            query=view.query,
            opening_balance=MoneyResponse.of(view.opening_balance, self.symbol),
            rows=[ledger_row_response(s, self.symbol) for s in view.rows],
            summary=summary_response(view.summary, self.symbol),
        )

    async def list_parties(self, party_type: str | None = None) -> list[PartyResponse]:
        """거래처 목록 (참조 데이터)"""
        parties = await self.store.list_parties(party_type)
        return [party_response(p, self.symbol) for p in parties]
