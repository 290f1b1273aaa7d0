"""LedgerStore 통합 테스트"""

from datetime import date

import pytest
import pytest_asyncio

from core.constants import Defaults
from core.errors import NotFoundError, ValidationError
from core.ledger.filters import DateWindow, opening_for_window
from core.ledger.store import EntryChanges, LedgerStore, NewEntry
from core.ledger.types import EntryStatus


@pytest_asyncio.fixture
async def seeded(store: LedgerStore) -> LedgerStore:
    """거래처 2곳 + 매출 분개 3건 (기초 10,000)"""
    await store.upsert_party("P001", "Adamu Foods", "CUSTOMER", opening_balance=10000)
    await store.upsert_party("P002", "Bello Stores", "CUSTOMER")

    for entry_id, day, debit, credit in [
        ("s1", date(2024, 1, 1), 5000, 0),
        ("s2", date(2024, 1, 2), 0, 2000),
        ("s3", date(2024, 1, 3), 1000, 0),
    ]:
        await store.add_entry(
            NewEntry(
                ledger_kind="SALES",
                party_id="P001",
                entry_date=day,
                transaction_type="SALE" if debit else "RECEIVE",
                debit=debit,
                credit=credit,
                entry_id=entry_id,
            )
        )
    return store


async def stored_balances(store: LedgerStore, kind: str, party_id: str | None) -> list:
    rows = await store.list_stored_rows(kind, party_id)
    return [(row["entry_id"], row["balance"]) for row in rows]


class TestParties:
    """거래처 테스트"""

    @pytest.mark.asyncio
    async def test_upsert_and_get(self, store: LedgerStore) -> None:
        """등록 후 조회"""
        await store.upsert_party("P001", "Adamu Foods", "CUSTOMER", opening_balance=150)

        party = await store.get_party("P001")

        assert party["name"] == "Adamu Foods"
        assert party["opening_balance"] == 150
        assert party["is_active"] is True

    @pytest.mark.asyncio
    async def test_list_by_type(self, store: LedgerStore) -> None:
        """종류별 목록 (이름순)"""
        await store.upsert_party("S1", "Zaria Paddy", "SUPPLIER")
        await store.upsert_party("C1", "Bello Stores", "CUSTOMER")
        await store.upsert_party("C2", "Adamu Foods", "CUSTOMER")

        customers = await store.list_parties("CUSTOMER")

        assert [p["party_id"] for p in customers] == ["C2", "C1"]
        assert len(await store.list_parties()) == 3

    @pytest.mark.asyncio
    async def test_require_missing_party(self, store: LedgerStore) -> None:
        """없는 거래처는 NotFoundError"""
        with pytest.raises(NotFoundError, match="party"):
            await store.require_party("NOPE")

    @pytest.mark.asyncio
    async def test_opening_change_recomputes(self, seeded: LedgerStore) -> None:
        """기초 잔액 변경 시 기존 분개 잔액 재계산"""
        await seeded.upsert_party("P001", "Adamu Foods", "CUSTOMER", opening_balance=0)

        assert await stored_balances(seeded, "SALES", "P001") == [
            ("s1", 5000),
            ("s2", 3000),
            ("s3", 4000),
        ]


class TestAddEntry:
    """분개 저장 테스트"""

    @pytest.mark.asyncio
    async def test_running_balances_stored(self, seeded: LedgerStore) -> None:
        """저장 시 잔액 체인 계산"""
        assert await stored_balances(seeded, "SALES", "P001") == [
            ("s1", 15000),
            ("s2", 13000),
            ("s3", 14000),
        ]

        scope = await seeded.get_scope_balance("SALES", "P001")
        assert scope["balance"] == 14000
        assert scope["entry_count"] == 3
        assert scope["last_entry_id"] == "s3"

    @pytest.mark.asyncio
    async def test_backdated_entry_shifts_later_rows(self, seeded: LedgerStore) -> None:
        """과거 날짜 분개는 이후 잔액 모두 변경"""
        await seeded.add_entry(
            NewEntry(
                ledger_kind="SALES",
                party_id="P001",
                entry_date=date(2024, 1, 1),
                transaction_type="SALE",
                debit=500,
                entry_id="late",
            )
        )

        assert await stored_balances(seeded, "SALES", "P001") == [
            ("s1", 15000),
            ("late", 15500),
            ("s2", 13500),
            ("s3", 14500),
        ]

    @pytest.mark.asyncio
    async def test_scopes_are_independent(self, seeded: LedgerStore) -> None:
        """다른 거래처/원장 분개는 서로 영향 없음"""
        await seeded.add_entry(
            NewEntry(
                ledger_kind="SALES",
                party_id="P002",
                entry_date=date(2024, 1, 1),
                transaction_type="SALE",
                debit=999,
            )
        )
        await seeded.add_entry(
            NewEntry(
                ledger_kind="RICE_PURCHASE",
                party_id="P001",
                entry_date=date(2024, 1, 1),
                transaction_type="PURCHASE",
                debit=777,
            )
        )

        assert (await seeded.get_scope_balance("SALES", "P001"))["balance"] == 14000
        assert (await seeded.get_scope_balance("SALES", "P002"))["balance"] == 999
        assert (await seeded.get_scope_balance("RICE_PURCHASE", "P001"))["balance"] == 10777

    @pytest.mark.asyncio
    async def test_party_ledger_requires_party(self, store: LedgerStore) -> None:
        """매출 원장은 거래처 필수"""
        with pytest.raises(ValidationError, match="requires a party"):
            await store.add_entry(
                NewEntry(
                    ledger_kind="SALES",
                    entry_date=date(2024, 1, 1),
                    transaction_type="SALE",
                    debit=1,
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_party(self, store: LedgerStore) -> None:
        """없는 거래처는 NotFoundError"""
        with pytest.raises(NotFoundError):
            await store.add_entry(
                NewEntry(
                    ledger_kind="SALES",
                    party_id="GHOST",
                    entry_date=date(2024, 1, 1),
                    transaction_type="SALE",
                    debit=1,
                )
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fields, match",
        [
            ({"ledger_kind": "PAYROLL"}, "ledger kind"),
            ({"transaction_type": "REFUND"}, "transaction type"),
            ({"debit": -1}, "negative"),
            ({"credit": 1.5}, "whole minor units"),
        ],
    )
    async def test_invalid_input(self, store: LedgerStore, fields: dict, match: str) -> None:
        """잘못된 입력은 ValidationError, 저장하지 않음"""
        values = {
            "ledger_kind": "CASH",
            "entry_date": date(2024, 1, 1),
            "transaction_type": "RECEIVE",
            "debit": 100,
        }
        values.update(fields)

        with pytest.raises(ValidationError, match=match):
            await store.add_entry(NewEntry(**values))

        assert await store.db.fetchval("SELECT COUNT(*) FROM ledger_entry") == 0


class TestUpdateAndCancel:
    """분개 수정/취소 테스트"""

    @pytest.mark.asyncio
    async def test_update_amount_recomputes(self, seeded: LedgerStore) -> None:
        """금액 수정 시 이후 잔액 재계산"""
        updated = await seeded.update_entry("s1", EntryChanges(debit=6000))

        assert updated["debit"] == 6000
        assert await stored_balances(seeded, "SALES", "P001") == [
            ("s1", 16000),
            ("s2", 14000),
            ("s3", 15000),
        ]

    @pytest.mark.asyncio
    async def test_amount_out_of_range_rejected(self, seeded: LedgerStore) -> None:
        """상한 초과 금액은 저장 전 거부"""
        with pytest.raises(ValidationError, match="out of range"):
            await seeded.update_entry("s1", EntryChanges(debit=Defaults.MAX_MINOR_UNITS + 1))

    @pytest.mark.asyncio
    async def test_balance_overflow_rolls_back(self, seeded: LedgerStore) -> None:
        """누적 잔액이 상한을 넘으면 수정 전체 롤백"""
        with pytest.raises(ValidationError, match="balance out of range"):
            await seeded.update_entry("s1", EntryChanges(debit=Defaults.MAX_MINOR_UNITS))

        entry = await seeded.require_entry("s1")
        assert entry["debit"] == 5000
        assert await stored_balances(seeded, "SALES", "P001") == [
            ("s1", 15000),
            ("s2", 13000),
            ("s3", 14000),
        ]

    @pytest.mark.asyncio
    async def test_update_date_reorders(self, seeded: LedgerStore) -> None:
        """날짜 수정 시 순서와 잔액 재계산"""
        await seeded.update_entry("s3", EntryChanges(entry_date=date(2023, 12, 31)))

        assert await stored_balances(seeded, "SALES", "P001") == [
            ("s3", 11000),
            ("s1", 16000),
            ("s2", 14000),
        ]

    @pytest.mark.asyncio
    async def test_empty_update_is_noop(self, seeded: LedgerStore) -> None:
        """변경 필드가 없으면 그대로 반환"""
        entry = await seeded.update_entry("s2", EntryChanges())

        assert entry["balance"] == 13000

    @pytest.mark.asyncio
    async def test_update_missing_entry(self, seeded: LedgerStore) -> None:
        """없는 분개 수정"""
        with pytest.raises(NotFoundError, match="ledger entry"):
            await seeded.update_entry("nope", EntryChanges(debit=1))

    @pytest.mark.asyncio
    async def test_cancel_excludes_from_balances(self, seeded: LedgerStore) -> None:
        """취소 분개는 잔액 계산에서 제외, 행은 보존"""
        cancelled = await seeded.cancel_entry("s2")

        assert cancelled["status"] == EntryStatus.CANCELLED.value
        assert cancelled["balance"] is None
        assert await stored_balances(seeded, "SALES", "P001") == [
            ("s1", 15000),
            ("s2", None),
            ("s3", 16000),
        ]
        assert [e.entry_id for e in await seeded.fetch_entries("SALES", "P001")] == ["s1", "s3"]

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self, seeded: LedgerStore) -> None:
        """두 번 취소해도 동일"""
        await seeded.cancel_entry("s1")
        again = await seeded.cancel_entry("s1")

        assert again["status"] == EntryStatus.CANCELLED.value
        assert (await seeded.get_scope_balance("SALES", "P001"))["balance"] == 9000

    @pytest.mark.asyncio
    async def test_cancelled_entry_cannot_be_updated(self, seeded: LedgerStore) -> None:
        """취소된 분개는 수정 불가"""
        await seeded.cancel_entry("s1")

        with pytest.raises(ValidationError, match="cancelled"):
            await seeded.update_entry("s1", EntryChanges(debit=1))


class TestQueries:
    """조회 테스트"""

    @pytest.mark.asyncio
    async def test_fetch_entries_window(self, seeded: LedgerStore) -> None:
        """기간 조회 ((entry_date, seq) 순)"""
        entries = await seeded.fetch_entries(
            "SALES", "P001", start=date(2024, 1, 2), end=date(2024, 1, 3)
        )

        assert [e.entry_id for e in entries] == ["s2", "s3"]
        assert entries[0].party_name == "Adamu Foods"
        assert entries[0].scope_id == "P001"

    @pytest.mark.asyncio
    async def test_opening_before_matches_fold(self, seeded: LedgerStore) -> None:
        """SQL 집계 기초 잔액 = 전체 이력 계산 기초 잔액"""
        history = await seeded.fetch_entries("SALES", "P001")
        window = DateWindow(date(2024, 1, 3), date(2024, 1, 31))

        expected = opening_for_window(history, window, base_opening=10000)

        assert expected == 13000
        assert await seeded.opening_before("SALES", "P001", date(2024, 1, 3)) == expected
        assert await seeded.net_before("SALES", "P001", date(2024, 1, 1)) == 0

    @pytest.mark.asyncio
    async def test_cash_book_is_company_wide(self, seeded: LedgerStore) -> None:
        """현금 출납은 거래처가 있어도 회사 전체 한 scope"""
        await seeded.add_entry(
            NewEntry(
                ledger_kind="CASH",
                party_id="P001",
                entry_date=date(2024, 1, 1),
                transaction_type="RECEIVE",
                debit=300,
                head_name="Sales",
            )
        )
        await seeded.add_entry(
            NewEntry(
                ledger_kind="CASH",
                entry_date=date(2024, 1, 2),
                transaction_type="PAYMENT",
                credit=100,
                head_name="Fuel",
            )
        )

        entries = await seeded.fetch_entries("CASH", None)

        assert [e.scope_id for e in entries] == [None, None]
        assert entries[0].party_name == "Adamu Foods"
        assert (await seeded.get_scope_balance("CASH", None))["balance"] == 200
        assert (await seeded.get_scope_balance("CASH", "P001"))["balance"] == 200
        assert await seeded.opening_before("CASH", None, date(2024, 1, 2)) == 300

    @pytest.mark.asyncio
    async def test_recompute_all(self, seeded: LedgerStore) -> None:
        """전체 재계산은 저장된 잔액을 복구"""
        await seeded.db.execute("UPDATE ledger_entry SET balance = 0")
        await seeded.db.commit()

        balances = await seeded.recompute_all()

        assert balances == {("SALES", "P001"): 14000}
        assert await stored_balances(seeded, "SALES", "P001") == [
            ("s1", 15000),
            ("s2", 13000),
            ("s3", 14000),
        ]
