"""
원장 저장소

분개 저장/수정/취소 및 조회.
분개에 대한 모든 쓰기는 같은 트랜잭션 안에서 해당 scope 전체 잔액 체인을
재계산한다 (ledger_entry.balance, scope_balance).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from core.errors import NotFoundError, ValidationError
from core.ledger.engine import compute_ledger
from core.ledger.types import EntryStatus, LedgerEntry, LedgerKind, TransactionType
from core.money import ensure_minor_units

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

# 회사 전체 원장의 scope_balance 키
COMPANY_SCOPE_KEY = "*"

# 거래처 필수 원장
PARTY_LEDGERS = {LedgerKind.SALES.value, LedgerKind.RICE_PURCHASE.value}

_ENTRY_COLUMNS = """
    le.seq, le.entry_id, le.ledger_kind, le.party_id, le.entry_date,
    le.transaction_type, le.debit, le.credit, le.invoice_no, le.description,
    le.head_name, le.status, le.balance, p.name
"""


@dataclass
class NewEntry:
    """신규 분개 입력 (금액은 최소 단위)"""

    ledger_kind: str
    entry_date: date
    transaction_type: str
    debit: int = 0
    credit: int = 0
    party_id: str | None = None
    invoice_no: str | None = None
    description: str | None = None
    head_name: str | None = None
    entry_id: str | None = None


@dataclass
class EntryChanges:
    """분개 수정 입력 (None 필드는 변경하지 않음)

    ledger_kind, party_id는 변경 불가 (scope 고정).
    """

    entry_date: date | None = None
    transaction_type: str | None = None
    debit: int | None = None
    credit: int | None = None
    invoice_no: str | None = None
    description: str | None = None
    head_name: str | None = None

    def as_columns(self) -> dict[str, Any]:
        """변경할 컬럼 dict"""
        columns: dict[str, Any] = {}
        for name in (
            "entry_date", "transaction_type", "debit", "credit",
            "invoice_no", "description", "head_name",
        ):
            value = getattr(self, name)
            if value is None:
                continue
            columns[name] = value.isoformat() if isinstance(value, date) else value
        return columns


def scope_party(ledger_kind: str, party_id: str | None) -> str | None:
    """scope 기준 거래처 ID (회사 전체 원장은 None)

    CASH 분개의 party_id는 표시용이며 scope를 나누지 않는다.
    """
    if ledger_kind in PARTY_LEDGERS:
        return party_id
    return None


def _scope_key(ledger_kind: str, party_id: str | None) -> str:
    scoped = scope_party(ledger_kind, party_id)
    return scoped if scoped is not None else COMPANY_SCOPE_KEY


def _scope_filter(
    ledger_kind: str,
    party_id: str | None,
    prefix: str = "",
) -> tuple[str, tuple[Any, ...]]:
    """scope WHERE 조건절과 파라미터"""
    if ledger_kind in PARTY_LEDGERS:
        return (
            f"{prefix}ledger_kind = ? AND {prefix}party_id IS ?",
            (ledger_kind, party_id),
        )
    return f"{prefix}ledger_kind = ?", (ledger_kind,)


def _row_to_entry(row: tuple[Any, ...]) -> LedgerEntry:
    return LedgerEntry(
        entry_id=row[1],
        entry_date=date.fromisoformat(row[4]),
        seq=row[0],
        debit=row[6],
        credit=row[7],
        scope_id=scope_party(row[2], row[3]),
        invoice_no=row[8],
        description=row[9],
        party_name=row[13],
        head_name=row[10],
        transaction_type=row[5],
    )


def _row_to_dict(row: tuple[Any, ...]) -> dict[str, Any]:
    return {
        "seq": row[0],
        "entry_id": row[1],
        "ledger_kind": row[2],
        "party_id": row[3],
        "entry_date": row[4],
        "transaction_type": row[5],
        "debit": row[6],
        "credit": row[7],
        "invoice_no": row[8],
        "description": row[9],
        "head_name": row[10],
        "status": row[11],
        "balance": row[12],
        "party_name": row[13],
    }


class LedgerStore:
    """원장 저장소

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # =====================================
    # 거래처
    # =====================================

    async def upsert_party(
        self,
        party_id: str,
        name: str,
        party_type: str = "OTHER",
        opening_balance: int = 0,
    ) -> None:
        """거래처 등록/갱신 (가져오기 스크립트, 테스트용)

        기초 잔액이 바뀌면 해당 거래처 원장 잔액도 재계산.
        """
        opening = ensure_minor_units(opening_balance, "opening_balance")

        async with self.db.transaction():
            await self.db.execute(
                """
                INSERT INTO party (party_id, name, party_type, opening_balance)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(party_id) DO UPDATE SET
                    name = excluded.name,
                    party_type = excluded.party_type,
                    opening_balance = excluded.opening_balance,
                    updated_at = datetime('now')
                """,
                (party_id, name, party_type, opening),
            )
            for kind in PARTY_LEDGERS:
                if await self._has_entries(kind, party_id):
                    await self._recompute_scope(kind, party_id)

    async def get_party(self, party_id: str) -> dict[str, Any] | None:
        """거래처 조회

        Returns:
            거래처 정보 (없으면 None)
        """
        row = await self.db.fetchone(
            """
            SELECT party_id, name, party_type, opening_balance, is_active
            FROM party
            WHERE party_id = ?
            """,
            (party_id,),
        )
        if not row:
            return None

        return {
            "party_id": row[0],
            "name": row[1],
            "party_type": row[2],
            "opening_balance": row[3],
            "is_active": bool(row[4]),
        }

    async def list_parties(self, party_type: str | None = None) -> list[dict[str, Any]]:
        """활성 거래처 목록 (이름순)"""
        sql = """
            SELECT party_id, name, party_type, opening_balance, is_active
            FROM party
            WHERE is_active = 1
        """
        params: tuple[Any, ...] = ()
        if party_type:
            sql += " AND party_type = ?"
            params = (party_type,)
        sql += " ORDER BY name ASC"

        rows = await self.db.fetchall(sql, params)
        return [
            {
                "party_id": row[0],
                "name": row[1],
                "party_type": row[2],
                "opening_balance": row[3],
                "is_active": bool(row[4]),
            }
            for row in rows
        ]

    async def require_party(self, party_id: str) -> dict[str, Any]:
        """거래처 조회 (없으면 NotFoundError)"""
        party = await self.get_party(party_id)
        if party is None:
            raise NotFoundError("party", party_id)
        return party

    # =====================================
    # 분개 쓰기
    # =====================================

    async def add_entry(self, new: NewEntry) -> str:
        """분개 저장 + scope 잔액 재계산

        Args:
            new: 신규 분개

        Returns:
            저장된 entry_id

        Raises:
            ValidationError: 잘못된 원장 종류/금액, 거래처 누락
            NotFoundError: 존재하지 않는 거래처
        """
        await self._validate_scope(new.ledger_kind, new.party_id)
        self._check_transaction_type(new.transaction_type)
        debit = self._check_amount(new.debit, "debit")
        credit = self._check_amount(new.credit, "credit")

        entry_id = new.entry_id or str(uuid4())

        async with self.db.transaction():
            await self.db.execute(
                """
                INSERT INTO ledger_entry (
                    entry_id, ledger_kind, party_id, entry_date, transaction_type,
                    debit, credit, invoice_no, description, head_name, status
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry_id,
                    new.ledger_kind,
                    new.party_id,
                    new.entry_date.isoformat(),
                    new.transaction_type,
                    debit,
                    credit,
                    new.invoice_no,
                    new.description,
                    new.head_name,
                    EntryStatus.ACTIVE.value,
                ),
            )
            await self._recompute_scope(new.ledger_kind, new.party_id)

        logger.info(
            f"분개 저장: {entry_id} ({new.ledger_kind}, party={new.party_id}, "
            f"debit={debit}, credit={credit})"
        )
        return entry_id

    async def update_entry(self, entry_id: str, changes: EntryChanges) -> dict[str, Any]:
        """분개 수정 + scope 잔액 재계산

        과거 분개를 수정하면 이후 모든 분개의 잔액이 다시 계산된다.

        Raises:
            NotFoundError: 분개 없음
            ValidationError: 취소된 분개, 잘못된 금액
        """
        current = await self.require_entry(entry_id)
        if current["status"] == EntryStatus.CANCELLED.value:
            raise ValidationError("cancelled entry cannot be updated", entry_id)

        columns = changes.as_columns()
        if "transaction_type" in columns:
            self._check_transaction_type(columns["transaction_type"])
        for name in ("debit", "credit"):
            if name in columns:
                columns[name] = self._check_amount(columns[name], name)

        if not columns:
            return current

        assignments = ", ".join(f"{name} = ?" for name in columns)
        async with self.db.transaction():
            await self.db.execute(
                f"""
                UPDATE ledger_entry
                SET {assignments}, updated_at = datetime('now')
                WHERE entry_id = ?
                """,
                (*columns.values(), entry_id),
            )
            await self._recompute_scope(current["ledger_kind"], current["party_id"])

        logger.info(f"분개 수정: {entry_id} {sorted(columns)}")
        return await self.require_entry(entry_id)

    async def cancel_entry(self, entry_id: str) -> dict[str, Any]:
        """분개 취소 + scope 잔액 재계산

        취소된 분개는 잔액 계산에서 제외 (행은 보존).

        Raises:
            NotFoundError: 분개 없음
        """
        current = await self.require_entry(entry_id)
        if current["status"] == EntryStatus.CANCELLED.value:
            return current

        async with self.db.transaction():
            await self.db.execute(
                """
                UPDATE ledger_entry
                SET status = ?, balance = NULL, updated_at = datetime('now')
                WHERE entry_id = ?
                """,
                (EntryStatus.CANCELLED.value, entry_id),
            )
            await self._recompute_scope(current["ledger_kind"], current["party_id"])

        logger.info(f"분개 취소: {entry_id}")
        return await self.require_entry(entry_id)

    async def recompute_scope(self, ledger_kind: str, party_id: str | None) -> int:
        """scope 잔액 체인 재계산 (트랜잭션)

        Returns:
            기말 잔액
        """
        async with self.db.transaction():
            closing = await self._recompute_scope(ledger_kind, party_id)
        return closing

    async def recompute_all(self) -> dict[tuple[str, str | None], int]:
        """모든 scope 잔액 재계산 (운영 스크립트용)

        Returns:
            {(ledger_kind, party_id): 기말 잔액}
        """
        rows = await self.db.fetchall(
            "SELECT DISTINCT ledger_kind, party_id FROM ledger_entry ORDER BY ledger_kind"
        )
        scopes = {(kind, scope_party(kind, party_id)) for kind, party_id in rows}

        results: dict[tuple[str, str | None], int] = {}
        for kind, party_id in sorted(scopes, key=lambda s: (s[0], s[1] or "")):
            results[(kind, party_id)] = await self.recompute_scope(kind, party_id)

        logger.info(f"전체 잔액 재계산 완료: {len(results)}개 scope")
        return results

    async def _recompute_scope(self, ledger_kind: str, party_id: str | None) -> int:
        """scope 잔액 체인 재계산 (호출자 트랜잭션 안에서 실행)"""
        entries = await self.fetch_entries(ledger_kind, party_id)
        opening = await self.get_scope_opening(ledger_kind, party_id)
        snapshots = compute_ledger(entries, opening)

        if snapshots:
            await self.db.executemany(
                "UPDATE ledger_entry SET balance = ? WHERE seq = ?",
                [(s.balance, s.entry.seq) for s in snapshots],
            )

        closing = snapshots[-1].balance if snapshots else opening
        last_entry_id = snapshots[-1].entry.entry_id if snapshots else None

        await self.db.execute(
            """
            INSERT INTO scope_balance (ledger_kind, scope_key, balance, entry_count, last_entry_id)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(ledger_kind, scope_key) DO UPDATE SET
                balance = excluded.balance,
                entry_count = excluded.entry_count,
                last_entry_id = excluded.last_entry_id,
                updated_at = datetime('now')
            """,
            (ledger_kind, _scope_key(ledger_kind, party_id), closing, len(snapshots), last_entry_id),
        )

        logger.debug(
            f"잔액 재계산: {ledger_kind}/{_scope_key(ledger_kind, party_id)} "
            f"entries={len(snapshots)} closing={closing}"
        )
        return closing

    # =====================================
    # 조회
    # =====================================

    async def get_entry(self, entry_id: str) -> dict[str, Any] | None:
        """분개 단건 조회 (취소 포함)"""
        row = await self.db.fetchone(
            f"""
            SELECT {_ENTRY_COLUMNS}
            FROM ledger_entry le
            LEFT JOIN party p ON le.party_id = p.party_id
            WHERE le.entry_id = ?
            """,
            (entry_id,),
        )
        return _row_to_dict(row) if row else None

    async def require_entry(self, entry_id: str) -> dict[str, Any]:
        """분개 단건 조회 (없으면 NotFoundError)"""
        entry = await self.get_entry(entry_id)
        if entry is None:
            raise NotFoundError("ledger entry", entry_id)
        return entry

    async def fetch_entries(
        self,
        ledger_kind: str,
        party_id: str | None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[LedgerEntry]:
        """scope 유효 분개 조회 ((entry_date, seq) 오름차순)

        Args:
            ledger_kind: 원장 종류
            party_id: 거래처 ID (회사 전체 원장은 None)
            start: 시작일 (포함, 선택)
            end: 종료일 (포함, 선택)
        """
        scope_sql, scope_params = _scope_filter(ledger_kind, party_id, prefix="le.")
        sql = f"""
            SELECT {_ENTRY_COLUMNS}
            FROM ledger_entry le
            LEFT JOIN party p ON le.party_id = p.party_id
            WHERE {scope_sql} AND le.status = ?
        """
        params: list[Any] = [*scope_params, EntryStatus.ACTIVE.value]

        if start:
            sql += " AND le.entry_date >= ?"
            params.append(start.isoformat())

        if end:
            sql += " AND le.entry_date <= ?"
            params.append(end.isoformat())

        sql += " ORDER BY le.entry_date ASC, le.seq ASC"

        rows = await self.db.fetchall(sql, tuple(params))
        return [_row_to_entry(row) for row in rows]

    async def get_scope_opening(self, ledger_kind: str, party_id: str | None) -> int:
        """scope 기초 잔액 (이력 이전)

        거래처 원장: party.opening_balance, 회사 전체 원장: 0
        """
        scoped = scope_party(ledger_kind, party_id)
        if scoped is None:
            return 0
        return await self.db.fetchval(
            "SELECT opening_balance FROM party WHERE party_id = ?",
            (scoped,),
            default=0,
        )

    async def net_before(
        self,
        ledger_kind: str,
        party_id: str | None,
        day: date,
    ) -> int:
        """day 이전 (미포함) 유효 분개 순증감 합계"""
        scope_sql, scope_params = _scope_filter(ledger_kind, party_id)
        return await self.db.fetchval(
            f"""
            SELECT SUM(debit - credit)
            FROM ledger_entry
            WHERE {scope_sql} AND status = ?
              AND entry_date < ?
            """,
            (*scope_params, EntryStatus.ACTIVE.value, day.isoformat()),
            default=0,
        )

    async def opening_before(
        self,
        ledger_kind: str,
        party_id: str | None,
        day: date,
    ) -> int:
        """day 시점 기초 잔액 (거래처 기초 잔액 + 이전 이력)"""
        base = await self.get_scope_opening(ledger_kind, party_id)
        return base + await self.net_before(ledger_kind, party_id, day)

    async def get_scope_balance(
        self,
        ledger_kind: str,
        party_id: str | None,
    ) -> dict[str, Any] | None:
        """scope 기말 잔액 Projection 조회"""
        row = await self.db.fetchone(
            """
            SELECT balance, entry_count, last_entry_id, updated_at
            FROM scope_balance
            WHERE ledger_kind = ? AND scope_key = ?
            """,
            (ledger_kind, _scope_key(ledger_kind, party_id)),
        )
        if not row:
            return None

        return {
            "ledger_kind": ledger_kind,
            "party_id": party_id,
            "balance": row[0],
            "entry_count": row[1],
            "last_entry_id": row[2],
            "updated_at": row[3],
        }

    async def list_stored_rows(
        self,
        ledger_kind: str,
        party_id: str | None,
    ) -> list[dict[str, Any]]:
        """저장된 분개 행 (balance Projection 포함, 취소 포함)"""
        scope_sql, scope_params = _scope_filter(ledger_kind, party_id, prefix="le.")
        rows = await self.db.fetchall(
            f"""
            SELECT {_ENTRY_COLUMNS}
            FROM ledger_entry le
            LEFT JOIN party p ON le.party_id = p.party_id
            WHERE {scope_sql}
            ORDER BY le.entry_date ASC, le.seq ASC
            """,
            scope_params,
        )
        return [_row_to_dict(row) for row in rows]

    # =====================================
    # 내부 검증
    # =====================================

    async def _validate_scope(self, ledger_kind: str, party_id: str | None) -> None:
        try:
            kind = LedgerKind(ledger_kind)
        except ValueError as e:
            raise ValidationError(f"unknown ledger kind: {ledger_kind!r}", "ledger_kind") from e

        if kind.value in PARTY_LEDGERS and not party_id:
            raise ValidationError(f"{kind.value} ledger requires a party", "party_id")

        if party_id is not None:
            await self.require_party(party_id)

    async def _has_entries(self, ledger_kind: str, party_id: str) -> bool:
        row = await self.db.fetchone(
            "SELECT 1 FROM ledger_entry WHERE ledger_kind = ? AND party_id = ? LIMIT 1",
            (ledger_kind, party_id),
        )
        return row is not None

    @staticmethod
    def _check_transaction_type(value: str) -> None:
        try:
            TransactionType(value)
        except ValueError as e:
            raise ValidationError(
                f"unknown transaction type: {value!r}", "transaction_type"
            ) from e

    @staticmethod
    def _check_amount(value: Any, name: str) -> int:
        amount = ensure_minor_units(value, name)
        if amount < 0:
            raise ValidationError(f"negative amount: {amount}", name)
        return amount
