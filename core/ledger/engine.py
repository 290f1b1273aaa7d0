"""
원장 잔액 엔진

정렬된 분개 시퀀스와 기초 잔액으로 분개별 누적 잔액을 계산.

    balance = opening
    for entry in entries:
        balance = balance + entry.debit - entry.credit
        emit LedgerSnapshot(entry, balance)

순수 함수: 내부 상태 없음, 동일 입력 → 동일 출력.
"""

import logging
from typing import Iterable, Iterator, Sequence

from core.constants import Defaults
from core.errors import ValidationError
from core.ledger.types import LedgerEntry, LedgerSnapshot, LedgerSummary
from core.money import ensure_minor_units

logger = logging.getLogger(__name__)


def _check_entry(
    entry: LedgerEntry,
    previous: LedgerEntry | None,
) -> tuple[int, int]:
    """단일 분개 검증

    - debit/credit: 유한한 비음수 정수
    - 정렬: 직전 분개보다 (entry_date, seq)가 엄격히 커야 함

    Returns:
        검증된 (debit, credit)

    Raises:
        ValidationError: 불변 조건 위반
    """
    amounts = []
    for field in ("debit", "credit"):
        label = f"{entry.entry_id}.{field}"
        value = ensure_minor_units(getattr(entry, field), label)
        if value < 0:
            raise ValidationError(f"negative amount: {value}", label)
        amounts.append(value)

    if previous is not None and entry.sort_key <= previous.sort_key:
        raise ValidationError(
            "entries must be pre-sorted by (date, seq): "
            f"{previous.entry_id} {previous.sort_key} >= "
            f"{entry.entry_id} {entry.sort_key}",
        )

    return amounts[0], amounts[1]


def validate_entries(entries: Iterable[LedgerEntry]) -> None:
    """전체 분개 사전 검증 (fail fast)

    Raises:
        ValidationError: 첫 번째 위반 분개에서 발생
    """
    previous: LedgerEntry | None = None
    for entry in entries:
        _check_entry(entry, previous)
        previous = entry


def iter_ledger(
    entries: Iterable[LedgerEntry],
    opening_balance: int,
) -> Iterator[LedgerSnapshot]:
    """누적 잔액 스트리밍 계산 (lazy)

    이력이 매우 긴 거래처용. 결과를 메모리에 쌓지 않음.
    검증은 각 분개에 도달했을 때 수행되므로, 위반 시 그 이전 snapshot은
    이미 소비되었을 수 있다. 전체 사전 검증이 필요하면 compute_ledger 사용.

    Args:
        entries: (entry_date, seq) 오름차순 분개
        opening_balance: 기초 잔액 (음수 가능)

    Yields:
        LedgerSnapshot (입력과 같은 순서, 같은 개수)

    Raises:
        ValidationError: 정렬 위반, 비유한/음수 금액, 잔액 범위 초과
    """
    balance = ensure_minor_units(opening_balance, "opening_balance")
    previous: LedgerEntry | None = None

    for entry in entries:
        debit, credit = _check_entry(entry, previous)
        balance = balance + debit - credit
        if abs(balance) > Defaults.MAX_MINOR_UNITS:
            raise ValidationError(
                f"balance out of range: {balance}", f"{entry.entry_id}.balance"
            )
        yield LedgerSnapshot(entry=entry, balance=balance)
        previous = entry


def compute_ledger(
    entries: Sequence[LedgerEntry] | Iterable[LedgerEntry],
    opening_balance: int,
) -> list[LedgerSnapshot]:
    """누적 잔액 계산 (eager)

    모든 분개를 먼저 검증한 뒤 계산하므로 부분 결과를 반환하지 않는다.

    Args:
        entries: (entry_date, seq) 오름차순 분개
        opening_balance: 기초 잔액

    Returns:
        분개별 LedgerSnapshot 목록

    Raises:
        ValidationError: 정렬 위반, 비유한/음수 금액, 잘못된 기초 잔액

    Example:
        >>> snapshots = compute_ledger(entries, opening_balance=1000)
        >>> snapshots[-1].balance
    """
    items = list(entries)
    ensure_minor_units(opening_balance, "opening_balance")

    try:
        validate_entries(items)
    except ValidationError as e:
        logger.error(f"원장 입력 검증 실패: {e}")
        raise

    return list(iter_ledger(items, opening_balance))


def summarize(
    snapshots: Sequence[LedgerSnapshot],
    opening_balance: int,
) -> LedgerSummary:
    """기간 집계 (기초/기말 잔액, 차변/대변 합계)

    Args:
        snapshots: compute_ledger 결과 (기간 내)
        opening_balance: 기간 기초 잔액

    Returns:
        LedgerSummary
    """
    # Decimal/float 정수값 입력도 int 합계로
    total_debit = sum(int(s.entry.debit) for s in snapshots)
    total_credit = sum(int(s.entry.credit) for s in snapshots)
    closing = snapshots[-1].balance if snapshots else opening_balance

    return LedgerSummary(
        opening_balance=opening_balance,
        closing_balance=closing,
        total_debit=total_debit,
        total_credit=total_credit,
        entry_count=len(snapshots),
    )


def infer_opening_balance(first: LedgerSnapshot) -> int:
    """첫 snapshot에서 기초 잔액 역산

    balance - (debit - credit). 이미 계산된 잔액만 받은 경우에만 사용.
    기간 필터가 적용된 경우 filters.opening_for_window 사용.
    """
    return first.balance - first.entry.net
