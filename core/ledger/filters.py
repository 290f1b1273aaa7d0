"""
원장 필터링/범위 지정

엔진 바깥에서 적용되는 계층:
- 거래처(scope) 분리: 계산 전에 분리, 거래처 간 합산 금지
- 기간 필터: 계산 전에 적용. 기초 잔액은 기간 시작 이전 전체 이력으로 계산
- 검색 필터: 계산 후에 적용. 표시 행만 줄이고 잔액은 바꾸지 않음
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Hashable, Iterable, Sequence

from core.errors import NotFoundError, ValidationError
from core.ledger.engine import compute_ledger, summarize, validate_entries
from core.ledger.types import LedgerEntry, LedgerSnapshot, LedgerSummary


@dataclass(frozen=True)
class DateWindow:
    """기간 [start, end] (양 끝 포함, 각각 생략 가능)"""

    start: date | None = None
    end: date | None = None

    def validate(self) -> "DateWindow":
        """start > end이면 ValidationError"""
        if self.start and self.end and self.start > self.end:
            raise ValidationError(
                f"'from' date cannot be later than 'to' date "
                f"({self.start.isoformat()} > {self.end.isoformat()})"
            )
        return self

    def contains(self, day: date) -> bool:
        """기간 포함 여부"""
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True

    def is_before(self, day: date) -> bool:
        """기간 시작 이전 여부 (기초 잔액 대상)"""
        return self.start is not None and day < self.start


@dataclass
class LedgerWindow:
    """원장 조회 결과 (요청마다 새로 생성되는 view model)

    rows는 검색 필터 적용 후 행, summary는 기간 전체 기준.
    """

    window: DateWindow
    opening_balance: int
    summary: LedgerSummary
    rows: list[LedgerSnapshot] = field(default_factory=list)
    query: str | None = None


def partition_by_scope(
    entries: Iterable[LedgerEntry],
) -> dict[Hashable, list[LedgerEntry]]:
    """scope_id별 분리 (입력 순서 유지)"""
    partitions: dict[Hashable, list[LedgerEntry]] = {}
    for entry in entries:
        partitions.setdefault(entry.scope_id, []).append(entry)
    return partitions


def select_scope(
    partitions: dict[Hashable, list[LedgerEntry]],
    scope_id: Hashable,
) -> list[LedgerEntry]:
    """특정 scope 분개 반환

    Raises:
        NotFoundError: 해당 scope 분개가 없음
    """
    if scope_id not in partitions:
        raise NotFoundError("ledger scope", None if scope_id is None else str(scope_id))
    return partitions[scope_id]


def split_window(
    entries: Iterable[LedgerEntry],
    window: DateWindow,
) -> tuple[list[LedgerEntry], list[LedgerEntry]]:
    """(기간 이전 분개, 기간 내 분개)로 분리

    기간 이후 분개는 버린다.
    """
    prior: list[LedgerEntry] = []
    inside: list[LedgerEntry] = []
    for entry in entries:
        if window.is_before(entry.entry_date):
            prior.append(entry)
        elif window.contains(entry.entry_date):
            inside.append(entry)
    return prior, inside


def opening_for_window(
    entries: Iterable[LedgerEntry],
    window: DateWindow,
    base_opening: int = 0,
) -> int:
    """기간 기초 잔액

    base_opening + 기간 시작 이전 모든 분개의 (debit - credit).
    """
    prior, _ = split_window(entries, window)
    snapshots = compute_ledger(prior, base_opening)
    return snapshots[-1].balance if snapshots else base_opening


def matches_query(entry: LedgerEntry, query: str) -> bool:
    """검색어 매칭 (대소문자 무시)

    대상: 송장 번호, 적요, 거래처명, 계정 과목명
    """
    needle = query.strip().lower()
    if not needle:
        return True
    haystack = (entry.invoice_no, entry.description, entry.party_name, entry.head_name)
    return any(needle in value.lower() for value in haystack if value)


def search_snapshots(
    snapshots: Sequence[LedgerSnapshot],
    query: str | None,
) -> list[LedgerSnapshot]:
    """계산된 snapshot에 검색 필터 적용

    표시용 필터. 각 snapshot의 balance는 필터 전 값 그대로 유지.
    """
    if not query or not query.strip():
        return list(snapshots)
    return [s for s in snapshots if matches_query(s.entry, query)]


def build_ledger_window(
    entries: Sequence[LedgerEntry],
    window: DateWindow,
    base_opening: int = 0,
    query: str | None = None,
) -> LedgerWindow:
    """기간 원장 생성

    1. 기간 검증, 이력 정렬/금액 검증
    2. 기간 이전 이력으로 기초 잔액 계산
    3. 기간 내 분개 누적 잔액 계산
    4. 기간 집계
    5. 검색 필터 (마지막)

    Args:
        entries: 하나의 scope 전체 이력, (entry_date, seq) 오름차순
        window: 조회 기간
        base_opening: 거래처 기초 잔액 (이력 이전)
        query: 검색어 (선택)

    Returns:
        LedgerWindow
    """
    window.validate()
    validate_entries(entries)

    prior, inside = split_window(entries, window)
    prior_snapshots = compute_ledger(prior, base_opening)
    opening = prior_snapshots[-1].balance if prior_snapshots else base_opening

    snapshots = compute_ledger(inside, opening)

    return LedgerWindow(
        window=window,
        opening_balance=opening,
        rows=search_snapshots(snapshots, query),
        summary=summarize(snapshots, opening),
        query=query,
    )
