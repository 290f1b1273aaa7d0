"""
리포트 서비스

회사 현금 출납(CASH) 원장 기반 리포트.
- 일일 리포트: 해당 일 입금/출금 + 누적 잔액
- 일별 요약: 기간 내 일자별 합계와 일말 잔액
- 재무 현황: 계정 과목별 입금/출금 합계
- 상세/비교: 계정 과목별 거래, 두 기간 합계 증감률

기초 잔액은 항상 기간 시작 이전 전체 이력으로 계산한다.
입금 = debit, 출금 = credit.
"""

import logging
from collections import OrderedDict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.errors import ValidationError
from core.ledger.filters import DateWindow, LedgerWindow, build_ledger_window
from core.ledger.store import LedgerStore
from core.ledger.types import LedgerKind, LedgerSnapshot
from web.models.responses import (
    CashRowResponse,
    DailyReportResponse,
    DailySummaryItem,
    DailySummaryResponse,
    FinancialStatementResponse,
    HeadTotalResponse,
    MoneyResponse,
    PeriodChangesResponse,
    PeriodTotalsResponse,
    StatementComparisonResponse,
    StatementDetailResponse,
)
from web.services.ledger_service import date_range_response

logger = logging.getLogger(__name__)

UNSPECIFIED_HEAD = "Unspecified"

# 재무 현황 상세 조회 유형
RECEIVE = "receive"
PAYMENT = "payment"


def percent_change(current: int, previous: int) -> str:
    """증감률 (%) 소수점 2자리 문자열

    이전 값이 0 이하이면 "0.00".
    """
    if previous <= 0:
        return "0.00"
    change = Decimal(current - previous) * 100 / Decimal(previous)
    return str(change.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _side_amount(snapshot: LedgerSnapshot, side: str) -> int:
    entry = snapshot.entry
    return entry.debit if side == RECEIVE else entry.credit


class ReportService:
    """현금 출납 리포트 서비스

    Args:
        db: SQLite 어댑터 (읽기 전용)
        currency_symbol: 표시용 통화 기호
    """

    def __init__(self, db: SQLiteAdapter, currency_symbol: str = Defaults.CURRENCY_SYMBOL):
        self.db = db
        self.symbol = currency_symbol
        self.store = LedgerStore(db)

    def _money(self, units: int) -> MoneyResponse:
        return MoneyResponse.of(units, self.symbol)

    async def _cash_window(self, window: DateWindow) -> LedgerWindow:
        """현금 출납 기간 원장"""
        window.validate()
        entries = await self.store.fetch_entries(LedgerKind.CASH.value, None, end=window.end)
        return build_ledger_window(entries, window, base_opening=0)

    def _cash_rows(self, snapshots: list[LedgerSnapshot], side: str) -> list[CashRowResponse]:
        rows: list[CashRowResponse] = []
        for snapshot in snapshots:
            amount = _side_amount(snapshot, side)
            if amount <= 0:
                continue
            entry = snapshot.entry
            rows.append(
                CashRowResponse(
                    sl=len(rows) + 1,
                    entry_id=entry.entry_id,
                    date=entry.entry_date.isoformat(),
                    party_name=entry.party_name,
                    head_name=entry.head_name,
                    description=entry.description,
                    amount=self._money(amount),
                    balance=self._money(snapshot.balance),
                )
            )
        return rows

    # =========================================================================
    # 일일 리포트
    # =========================================================================

    async def get_daily_report(self, day: date) -> DailyReportResponse:
        """일일 현금 출납 리포트

        Args:
            day: 조회일

        Returns:
            기초 잔액 (이전 전체 이력), 입금/출금 목록, 합계, 기말 잔액
        """
        view = await self._cash_window(DateWindow(day, day))

        return DailyReportResponse(
            date=day.isoformat(),
            opening_balance=self._money(view.opening_balance),
            receives=self._cash_rows(view.rows, RECEIVE),
            payments=self._cash_rows(view.rows, PAYMENT),
            total_receives=self._money(view.summary.total_debit),
            total_payments=self._money(view.summary.total_credit),
            closing_balance=self._money(view.summary.closing_balance),
        )

    async def get_daily_summary(self, start: date, end: date) -> DailySummaryResponse:
        """기간 일별 요약 (거래가 있는 날짜만)"""
        window = DateWindow(start, end)
        view = await self._cash_window(window)

        by_day: OrderedDict[date, list[LedgerSnapshot]] = OrderedDict()
        for snapshot in view.rows:
            by_day.setdefault(snapshot.entry.entry_date, []).append(snapshot)

        days = [
            DailySummaryItem(
                date=day.isoformat(),
                total_receives=self._money(sum(s.entry.debit for s in snapshots)),
                total_payments=self._money(sum(s.entry.credit for s in snapshots)),
                receive_count=sum(1 for s in snapshots if s.entry.debit > 0),
                payment_count=sum(1 for s in snapshots if s.entry.credit > 0),
                closing_balance=self._money(snapshots[-1].balance),
            )
            for day, snapshots in by_day.items()
        ]

        return DailySummaryResponse(
            date_range=date_range_response(window),
            opening_balance=self._money(view.opening_balance),
            days=days,
            closing_balance=self._money(view.summary.closing_balance),
        )

    # =========================================================================
    # 재무 현황
    # =========================================================================

    def _head_totals(self, snapshots: list[LedgerSnapshot], side: str) -> list[HeadTotalResponse]:
        """계정 과목별 합계 (금액 내림차순, 합계 0 제외)"""
        totals: dict[str | None, list[int]] = {}
        for snapshot in snapshots:
            amount = _side_amount(snapshot, side)
            if amount <= 0:
                continue
            bucket = totals.setdefault(snapshot.entry.head_name, [0, 0])
            bucket[0] += amount
            bucket[1] += 1

        ordered = sorted(totals.items(), key=lambda item: (-item[1][0], item[0] or ""))
        return [
            HeadTotalResponse(
                id=f"{side}-{head or index}",
                sl=index,
                head_id=head,
                head=head or UNSPECIFIED_HEAD,
                amount=self._money(amount),
                transaction_count=count,
            )
            for index, (head, (amount, count)) in enumerate(ordered, start=1)
        ]

    async def get_financial_statement(self, start: date, end: date) -> FinancialStatementResponse:
        """기간 재무 현황 (계정 과목별 입금/출금)"""
        window = DateWindow(start, end)
        view = await self._cash_window(window)

        return FinancialStatementResponse(
            date_range=date_range_response(window),
            opening_balance=self._money(view.opening_balance),
            receives=self._head_totals(view.rows, RECEIVE),
            payments=self._head_totals(view.rows, PAYMENT),
            total_receives=self._money(view.summary.total_debit),
            total_payments=self._money(view.summary.total_credit),
            closing_balance=self._money(view.summary.closing_balance),
        )

    async def get_statement_details(
        self,
        start: date,
        end: date,
        head_id: str | None,
        side: str | None,
    ) -> list[StatementDetailResponse]:
        """계정 과목별 상세 거래 (최신순)

        Args:
            head_id: 계정 과목 ID (계정 과목명)
            side: "receive" 또는 "payment"

        Raises:
            ValidationError: headId/type 누락, 잘못된 side
        """
        if not head_id:
            raise ValidationError("headId is required", "headId")
        if not side:
            raise ValidationError("type is required", "type")
        if side not in (RECEIVE, PAYMENT):
            raise ValidationError("type must be either 'receive' or 'payment'", "type")

        view = await self._cash_window(DateWindow(start, end))

        matched = [
            s for s in view.rows
            if s.entry.head_name == head_id and _side_amount(s, side) > 0
        ]
        matched.reverse()

        return [
            StatementDetailResponse(
                entry_id=s.entry.entry_id,
                date=s.entry.entry_date.isoformat(),
                party=s.entry.party_name or "N/A",
                amount=self._money(_side_amount(s, side)),
                description=s.entry.description,
            )
            for s in matched
        ]

    async def _period_totals(self, window: DateWindow) -> PeriodTotalsResponse:
        view = await self._cash_window(window)
        receives = view.summary.total_debit
        payments = view.summary.total_credit
        return PeriodTotalsResponse(
            date_range=date_range_response(window),
            receives=self._money(receives),
            payments=self._money(payments),
            net=self._money(receives - payments),
        )

    async def get_statement_comparison(
        self,
        current: DateWindow,
        previous: DateWindow,
    ) -> StatementComparisonResponse:
        """두 기간 합계 비교 (증감률 %)"""
        current_totals = await self._period_totals(current)
        previous_totals = await self._period_totals(previous)

        return StatementComparisonResponse(
            current=current_totals,
            previous=previous_totals,
            changes=PeriodChangesResponse(
                receives_percent=percent_change(
                    current_totals.receives.units, previous_totals.receives.units
                ),
                payments_percent=percent_change(
                    current_totals.payments.units, previous_totals.payments.units
                ),
            ),
        )
