"""
원장 잔액 시스템

거래처별(매출/쌀 매입) 및 회사 전체(현금 출납) 원장의 누적 잔액 계산.

사용 예시:
```python
from core.ledger import LedgerStore, compute_ledger, build_ledger_window

# 누적 잔액
snapshots = compute_ledger(entries, opening_balance=1_000_000)

# 기간 원장 (기초 잔액은 기간 이전 이력으로 계산)
view = build_ledger_window(entries, DateWindow(start, end), base_opening)

# 저장소
store = LedgerStore(db)
entry_id = await store.add_entry(new_entry)
```
"""

from core.ledger.engine import (
    compute_ledger,
    infer_opening_balance,
    iter_ledger,
    summarize,
    validate_entries,
)
from core.ledger.filters import (
    DateWindow,
    LedgerWindow,
    build_ledger_window,
    opening_for_window,
    partition_by_scope,
    search_snapshots,
    select_scope,
    split_window,
)
from core.ledger.store import EntryChanges, LedgerStore, NewEntry
from core.ledger.types import (
    EntryStatus,
    LedgerEntry,
    LedgerKind,
    LedgerSnapshot,
    LedgerSummary,
    TransactionType,
)

__all__ = [
    # 엔진
    "compute_ledger",
    "iter_ledger",
    "summarize",
    "validate_entries",
    "infer_opening_balance",
    # 필터
    "DateWindow",
    "LedgerWindow",
    "build_ledger_window",
    "opening_for_window",
    "partition_by_scope",
    "search_snapshots",
    "select_scope",
    "split_window",
    # 저장소
    "LedgerStore",
    "NewEntry",
    "EntryChanges",
    # 타입
    "LedgerEntry",
    "LedgerSnapshot",
    "LedgerSummary",
    "LedgerKind",
    "TransactionType",
    "EntryStatus",
]
