"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
모든 응답은 {success, data, message} envelope으로 감싼다.
JSON 필드명은 camelCase (alias), 금액은 MoneyResponse.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.constants import Defaults
from core.money import format_amount, from_minor_units

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """camelCase alias 베이스 모델"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[DataT]):
    """공통 응답 envelope"""

    success: bool = Field(default=True, description="성공 여부")
    data: DataT | None = Field(default=None, description="응답 데이터")
    message: str | None = Field(default=None, description="오류/안내 메시지")


class MoneyResponse(CamelModel):
    """금액 (최소 단위 + 통화 단위 문자열)"""

    units: int = Field(..., description="최소 단위 정수 (kobo)")
    amount: str = Field(..., description="통화 단위 금액 (소수점 2자리)")
    display: str = Field(..., description="표시용 문자열 (예: ₦14,000.00)")

    @classmethod
    def of(cls, units: int, symbol: str = Defaults.CURRENCY_SYMBOL) -> "MoneyResponse":
        return cls(
            units=units,
            amount=str(from_minor_units(units)),
            display=format_amount(units, symbol),
        )


class DateRangeResponse(CamelModel):
    """조회 기간"""

    date_from: str | None = Field(default=None, alias="from", description="시작일")
    date_to: str | None = Field(default=None, alias="to", description="종료일")


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    mode: str = Field(..., description="실행 모드 (production/development)")
    version: str = Field(..., description="API 버전")


# =========================================================================
# 원장
# =========================================================================


class PartyResponse(CamelModel):
    """거래처"""

    party_id: str = Field(..., description="거래처 ID")
    name: str = Field(..., description="거래처명")
    party_type: str = Field(..., description="거래처 종류")
    opening_balance: MoneyResponse = Field(..., description="기초 잔액")


class LedgerRowResponse(CamelModel):
    """원장 행 (누적 잔액 포함)"""

    entry_id: str = Field(..., description="분개 ID")
    seq: int = Field(..., description="같은 날짜 내 순서")
    date: str = Field(..., description="거래일 (YYYY-MM-DD)")
    transaction_type: str | None = Field(default=None, description="거래 유형")
    invoice_no: str | None = Field(default=None, description="송장 번호")
    description: str | None = Field(default=None, description="적요")
    party_name: str | None = Field(default=None, description="거래처명")
    head_name: str | None = Field(default=None, description="계정 과목")
    debit: MoneyResponse = Field(..., description="차변")
    credit: MoneyResponse = Field(..., description="대변")
    balance: MoneyResponse = Field(..., description="누적 잔액")


class LedgerSummaryResponse(CamelModel):
    """원장 집계 (기간 전체 기준)"""

    opening_balance: MoneyResponse
    closing_balance: MoneyResponse
    total_debit: MoneyResponse
    total_credit: MoneyResponse
    entry_count: int


class PartyLedgerResponse(CamelModel):
    """거래처 원장 조회 결과

    rows는 검색어 적용 후 행, summary는 기간 전체 기준.
    """

    ledger_kind: str = Field(..., description="원장 종류")
    party: PartyResponse = Field(..., description="거래처")
    date_range: DateRangeResponse = Field(..., description="조회 기간")
    query: str | None = Field(default=None, description="검색어")
    opening_balance: MoneyResponse = Field(..., description="기간 기초 잔액")
    rows: list[LedgerRowResponse] = Field(default_factory=list, description="원장 행")
    summary: LedgerSummaryResponse = Field(..., description="기간 집계")


# =========================================================================
# 리포트
# =========================================================================


class CashRowResponse(CamelModel):
    """현금 출납 행"""

    sl: int = Field(..., description="일련번호")
    entry_id: str
    date: str
    party_name: str | None = None
    head_name: str | None = None
    description: str | None = None
    amount: MoneyResponse
    balance: MoneyResponse = Field(..., description="해당 분개 반영 후 누적 잔액")


class DailyReportResponse(CamelModel):
    """일일 현금 출납 리포트"""

    date: str
    opening_balance: MoneyResponse
    receives: list[CashRowResponse] = Field(default_factory=list)
    payments: list[CashRowResponse] = Field(default_factory=list)
    total_receives: MoneyResponse
    total_payments: MoneyResponse
    closing_balance: MoneyResponse


class DailySummaryItem(CamelModel):
    """일별 요약"""

    date: str
    total_receives: MoneyResponse
    total_payments: MoneyResponse
    receive_count: int
    payment_count: int
    closing_balance: MoneyResponse


class DailySummaryResponse(CamelModel):
    """기간 일별 요약"""

    date_range: DateRangeResponse
    opening_balance: MoneyResponse
    days: list[DailySummaryItem] = Field(default_factory=list)
    closing_balance: MoneyResponse


class HeadTotalResponse(CamelModel):
    """계정 과목별 합계"""

    id: str = Field(..., description="행 ID (receive-<head>, payment-<head>)")
    sl: int
    head_id: str | None = Field(default=None, description="계정 과목 ID (미지정이면 None)")
    head: str = Field(..., description="계정 과목명")
    amount: MoneyResponse
    transaction_count: int


class FinancialStatementResponse(CamelModel):
    """기간 재무 현황"""

    date_range: DateRangeResponse
    opening_balance: MoneyResponse
    receives: list[HeadTotalResponse] = Field(default_factory=list)
    payments: list[HeadTotalResponse] = Field(default_factory=list)
    total_receives: MoneyResponse
    total_payments: MoneyResponse
    closing_balance: MoneyResponse


class StatementDetailResponse(CamelModel):
    """계정 과목별 상세 거래"""

    entry_id: str
    date: str
    party: str
    amount: MoneyResponse
    description: str | None = None


class PeriodTotalsResponse(CamelModel):
    """기간 합계"""

    date_range: DateRangeResponse
    receives: MoneyResponse
    payments: MoneyResponse
    net: MoneyResponse


class PeriodChangesResponse(CamelModel):
    """기간 대비 증감률 (%)"""

    receives_percent: str
    payments_percent: str


class StatementComparisonResponse(CamelModel):
    """기간 비교"""

    current: PeriodTotalsResponse
    previous: PeriodTotalsResponse
    changes: PeriodChangesResponse


# =========================================================================
# 분개
# =========================================================================


class EntryResponse(CamelModel):
    """저장된 분개"""

    entry_id: str
    seq: int
    ledger_kind: str
    party_id: str | None = None
    party_name: str | None = None
    date: str
    transaction_type: str
    debit: MoneyResponse
    credit: MoneyResponse
    invoice_no: str | None = None
    description: str | None = None
    head_name: str | None = None
    status: str
    balance: MoneyResponse | None = Field(default=None, description="저장된 누적 잔액 (취소 시 None)")
    closing_balance: MoneyResponse | None = Field(default=None, description="재계산 후 scope 기말 잔액")
