"""
원장 타입 정의

LedgerEntry / LedgerSnapshot / LedgerSummary 및 원장 관련 Enum 정의.
금액은 모두 최소 단위 정수 (kobo).
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class LedgerKind(str, Enum):
    """원장 종류

    str을 상속하여 JSON 직렬화 가능.
    """

    SALES = "SALES"  # 매출 원장 (거래처별)
    RICE_PURCHASE = "RICE_PURCHASE"  # 쌀 매입 원장 (거래처별)
    CASH = "CASH"  # 회사 현금 출납 (일보/재무제표)


class TransactionType(str, Enum):
    """분개 거래 유형"""

    SALE = "SALE"  # 판매 (매출처 채권 증가)
    PURCHASE = "PURCHASE"  # 매입 (매입처 채무 증가)
    RECEIVE = "RECEIVE"  # 입금
    PAYMENT = "PAYMENT"  # 출금
    ADJUSTMENT = "ADJUSTMENT"  # 잔액 조정


class EntryStatus(str, Enum):
    """분개 상태"""

    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"  # 잔액 계산에서 제외


@dataclass(frozen=True)
class LedgerEntry:
    """원장 분개 (불변)

    debit은 잔액 증가, credit은 잔액 감소.
    정렬 순서는 (entry_date, seq) — seq는 생성 순서로 같은 날짜 내 tie-break.
    """

    entry_id: str
    entry_date: date
    seq: int
    debit: int = 0
    credit: int = 0
    scope_id: str | None = None  # 거래처 ID (회사 전체 원장은 None)

    # 표시용 필드 (잔액 계산에 사용하지 않음)
    invoice_no: str | None = None
    description: str | None = None
    party_name: str | None = None
    head_name: str | None = None
    transaction_type: str | None = None

    @property
    def net(self) -> int:
        """잔액 변동분 (debit - credit)"""
        return self.debit - self.credit

    @property
    def sort_key(self) -> tuple[date, int]:
        """전순서 정렬 키"""
        return (self.entry_date, self.seq)


@dataclass(frozen=True)
class LedgerSnapshot:
    """분개 적용 후 잔액"""

    entry: LedgerEntry
    balance: int


@dataclass(frozen=True)
class LedgerSummary:
    """기간 집계

    closing_balance는 마지막 snapshot의 잔액, 기간이 비어 있으면 opening_balance.
    """

    opening_balance: int
    closing_balance: int
    total_debit: int
    total_credit: int
    entry_count: int
