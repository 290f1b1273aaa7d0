"""
core/ledger/filters.py 테스트

scope 분리, 기간 필터 (기초 잔액), 검색 필터 (표시 전용)
"""

from datetime import date

import pytest

from core.errors import NotFoundError, ValidationError
from core.ledger.engine import compute_ledger, summarize
from core.ledger.filters import (
    DateWindow,
    LedgerWindow,
    build_ledger_window,
    matches_query,
    opening_for_window,
    partition_by_scope,
    search_snapshots,
    select_scope,
    split_window,
)


@pytest.fixture
def history(make_entry) -> list:
    """한 거래처의 1월 이력"""
    return [
        make_entry(date(2024, 1, 1), debit=5000, invoice_no="INV-001", description="Rice 50kg"),
        make_entry(date(2024, 1, 2), credit=2000, description="Cash received"),
        make_entry(date(2024, 1, 3), debit=1000, invoice_no="INV-002", description="Bran"),
        make_entry(date(2024, 1, 5), credit=500, head_name="Discount"),
    ]


class TestDateWindow:
    """DateWindow 테스트"""

    def test_start_after_end_rejected(self) -> None:
        """시작일 > 종료일이면 ValidationError"""
        with pytest.raises(ValidationError, match="cannot be later"):
            DateWindow(date(2024, 2, 1), date(2024, 1, 1)).validate()

    def test_open_ended_window(self) -> None:
        """양 끝 생략 가능"""
        window = DateWindow(start=date(2024, 1, 2)).validate()

        assert window.contains(date(2030, 1, 1))
        assert not window.contains(date(2024, 1, 1))
        assert window.is_before(date(2024, 1, 1))

    def test_unbounded_window_has_no_prior(self) -> None:
        """시작일이 없으면 기간 이전 분개 없음"""
        window = DateWindow()

        assert not window.is_before(date(1900, 1, 1))
        assert window.contains(date(1900, 1, 1))


class TestScopePartition:
    """scope 분리 테스트"""

    def test_partition_keeps_order(self, make_entry) -> None:
        """scope별 분리, 입력 순서 유지"""
        entries = [
            make_entry(date(2024, 1, 1), debit=1, scope_id="A"),
            make_entry(date(2024, 1, 1), debit=2, scope_id="B"),
            make_entry(date(2024, 1, 2), debit=3, scope_id="A"),
            make_entry(date(2024, 1, 2), debit=4, scope_id=None),
        ]

        partitions = partition_by_scope(entries)

        assert [e.debit for e in partitions["A"]] == [1, 3]
        assert [e.debit for e in partitions["B"]] == [2]
        assert [e.debit for e in partitions[None]] == [4]

    def test_folds_never_cross_scopes(self, make_entry) -> None:
        """scope별 계산은 다른 scope 분개에 영향받지 않음"""
        entries = [
            make_entry(date(2024, 1, 1), debit=100, scope_id="A"),
            make_entry(date(2024, 1, 1), debit=900, scope_id="B"),
        ]

        partitions = partition_by_scope(entries)

        assert compute_ledger(select_scope(partitions, "A"), 0)[-1].balance == 100

    def test_unknown_scope(self, make_entry) -> None:
        """없는 scope는 NotFoundError"""
        partitions = partition_by_scope([make_entry(date(2024, 1, 1), scope_id="A")])

        with pytest.raises(NotFoundError, match="ledger scope"):
            select_scope(partitions, "Z")


class TestWindowOpening:
    """기간 기초 잔액 테스트"""

    def test_split_window(self, history) -> None:
        """이전/기간 내로 분리, 이후 분개는 제외"""
        prior, inside = split_window(history, DateWindow(date(2024, 1, 2), date(2024, 1, 3)))

        assert [e.entry_date.day for e in prior] == [1]
        assert [e.entry_date.day for e in inside] == [2, 3]

    def test_opening_uses_full_prior_history(self, history) -> None:
        """기초 잔액 = 기준 잔액 + 기간 이전 전체 순증감"""
        window = DateWindow(date(2024, 1, 3), date(2024, 1, 31))

        assert opening_for_window(history, window, base_opening=10000) == 13000

    def test_opening_without_start(self, history) -> None:
        """시작일이 없으면 기준 잔액 그대로"""
        assert opening_for_window(history, DateWindow(end=date(2024, 1, 2)), 750) == 750

    def test_window_closing_matches_full_history(self, history) -> None:
        """기간 기말 잔액은 전체 이력 계산의 같은 시점 잔액과 일치"""
        full = compute_ledger(history, 10000)
        view = build_ledger_window(history, DateWindow(date(2024, 1, 2), date(2024, 1, 3)), 10000)

        assert view.opening_balance == 15000
        assert [s.balance for s in view.rows] == [full[1].balance, full[2].balance]
        assert view.summary.closing_balance == full[2].balance


class TestSearch:
    """검색 필터 테스트"""

    def test_matches_fields_case_insensitive(self, make_entry) -> None:
        """송장 번호/적요/거래처명/계정 과목, 대소문자 무시"""
        entry = make_entry(
            date(2024, 1, 1),
            invoice_no="INV-9",
            description="Parboiled rice",
            party_name="Adamu Foods",
            head_name="Sales",
        )

        assert matches_query(entry, "inv-9")
        assert matches_query(entry, "PARBOILED")
        assert matches_query(entry, "adamu")
        assert matches_query(entry, "sal")
        assert not matches_query(entry, "paddy")

    def test_search_is_display_only(self, history) -> None:
        """검색 후 남은 행의 잔액은 전체 계산과 동일"""
        full = compute_ledger(history, 10000)

        filtered = search_snapshots(full, "inv")

        assert [s.entry.invoice_no for s in filtered] == ["INV-001", "INV-002"]
        by_id = {s.entry.entry_id: s.balance for s in full}
        for snapshot in filtered:
            assert snapshot.balance == by_id[snapshot.entry.entry_id]

    def test_blank_query_keeps_all_rows(self, history) -> None:
        """빈 검색어는 모든 행 유지"""
        full = compute_ledger(history, 0)

        assert search_snapshots(full, "   ") == full
        assert search_snapshots(full, None) == full

    def test_summary_ignores_search(self, history) -> None:
        """집계는 검색어와 무관하게 기간 전체 기준"""
        window = DateWindow(date(2024, 1, 1), date(2024, 1, 31))

        plain = build_ledger_window(history, window, 10000)
        searched = build_ledger_window(history, window, 10000, query="bran")

        assert len(searched.rows) == 1
        assert searched.rows[0].balance == 14000
        assert searched.summary == plain.summary
        assert searched.query == "bran"


class TestBuildLedgerWindow:
    """build_ledger_window 테스트"""

    def test_invalid_window_rejected(self, history) -> None:
        """잘못된 기간은 계산 전에 거부"""
        with pytest.raises(ValidationError):
            build_ledger_window(history, DateWindow(date(2024, 1, 5), date(2024, 1, 1)))

    def test_empty_window(self, history) -> None:
        """기간 내 분개가 없으면 기말 = 기초"""
        view = build_ledger_window(history, DateWindow(date(2024, 1, 4), date(2024, 1, 4)), 100)

        assert view.rows == []
        assert view.opening_balance == 100 + 5000 - 2000 + 1000
        assert view.summary.closing_balance == view.opening_balance
        assert view.summary.entry_count == 0

    def test_summary_is_required(self) -> None:
        """summary 없이 LedgerWindow를 만들 수 없음"""
        with pytest.raises(TypeError):
            LedgerWindow(window=DateWindow(), opening_balance=0)

        view = LedgerWindow(window=DateWindow(), opening_balance=0, summary=summarize([], 0))
        assert view.rows == []

    def test_unsorted_history_rejected(self, make_entry) -> None:
        """정렬되지 않은 이력은 ValidationError"""
        entries = [make_entry(date(2024, 1, 3), debit=1), make_entry(date(2024, 1, 1), debit=1)]

        with pytest.raises(ValidationError, match="pre-sorted"):
            build_ledger_window(entries, DateWindow())
