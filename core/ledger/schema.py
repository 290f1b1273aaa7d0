"""
원장 스키마 초기화

Web/스크립트 시작 시 자동으로 원장 테이블 생성.
CREATE IF NOT EXISTS 패턴으로 안전하게 동작.

금액 컬럼은 모두 INTEGER (최소 단위, kobo).
날짜 컬럼은 TEXT (YYYY-MM-DD).
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


async def init_ledger_schema(db: "SQLiteAdapter") -> None:
    """원장 스키마 초기화 (테이블 + 인덱스)

    party 테이블은 adapters.db.sqlite_adapter.init_schema에서 생성되므로
    그 이후에 호출해야 한다.

    Args:
        db: SQLiteAdapter 인스턴스
    """
    await _create_ledger_tables(db)
    await _create_ledger_indexes(db)
    await db.commit()
    logger.info("원장 스키마 초기화 완료")


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """원장 테이블 생성"""

    # ledger_entry 테이블 (seq = 같은 날짜 내 tie-break)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS ledger_entry (
            seq              INTEGER PRIMARY KEY AUTOINCREMENT,
            entry_id         TEXT NOT NULL UNIQUE,
            ledger_kind      TEXT NOT NULL,
            party_id         TEXT,
            entry_date       TEXT NOT NULL,
            transaction_type TEXT NOT NULL,
            debit            INTEGER NOT NULL DEFAULT 0 CHECK (debit >= 0),
            credit           INTEGER NOT NULL DEFAULT 0 CHECK (credit >= 0),
            invoice_no       TEXT,
            description      TEXT,
            head_name        TEXT,
            status           TEXT NOT NULL DEFAULT 'ACTIVE',
            balance          INTEGER,
            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at       TEXT NOT NULL DEFAULT (datetime('now')),
            FOREIGN KEY (party_id) REFERENCES party(party_id)
        )
    """)

    # scope_balance 테이블 (Projection: scope별 기말 잔액)
    # scope_key: party_id, 회사 전체 원장은 '*'
    await db.execute("""
        CREATE TABLE IF NOT EXISTS scope_balance (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            ledger_kind      TEXT NOT NULL,
            scope_key        TEXT NOT NULL,
            balance          INTEGER NOT NULL DEFAULT 0,
            entry_count      INTEGER NOT NULL DEFAULT 0,
            last_entry_id    TEXT,
            updated_at       TEXT NOT NULL DEFAULT (datetime('now')),
            UNIQUE(ledger_kind, scope_key)
        )
    """)


async def _create_ledger_indexes(db: "SQLiteAdapter") -> None:
    """원장 인덱스 생성"""
    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_ledger_entry_scope
        ON ledger_entry(ledger_kind, party_id, status, entry_date, seq)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_ledger_entry_date
        ON ledger_entry(entry_date)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_ledger_entry_head
        ON ledger_entry(head_name, transaction_type)
    """)
