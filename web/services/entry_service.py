"""
분개 서비스

분개 생성/수정/취소. 모든 쓰기는 LedgerStore가 같은 트랜잭션 안에서
해당 scope 잔액 체인을 재계산한다.
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.ledger.store import EntryChanges, LedgerStore, NewEntry
from web.models.requests import EntryCreateRequest, EntryUpdateRequest
from web.models.responses import EntryResponse, MoneyResponse

logger = logging.getLogger(__name__)


class EntryService:
    """분개 서비스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        currency_symbol: 표시용 통화 기호
    """

    def __init__(self, db: SQLiteAdapter, currency_symbol: str = Defaults.CURRENCY_SYMBOL):
        self.db = db
        self.symbol = currency_symbol
        self.store = LedgerStore(db)

    async def _to_response(self, entry: dict[str, Any]) -> EntryResponse:
        scope_balance = await self.store.get_scope_balance(entry["ledger_kind"], entry["party_id"])
        balance = entry["balance"]

        return EntryResponse(
            entry_id=entry["entry_id"],
            seq=entry["seq"],
            ledger_kind=entry["ledger_kind"],
            party_id=entry["party_id"],
            party_name=entry["party_name"],
            date=entry["entry_date"],
            transaction_type=entry["transaction_type"],
            debit=MoneyResponse.of(entry["debit"], self.symbol),
            credit=MoneyResponse.of(entry["credit"], self.symbol),
            invoice_no=entry["invoice_no"],
            description=entry["description"],
            head_name=entry["head_name"],
            status=entry["status"],
            balance=MoneyResponse.of(balance, self.symbol) if balance is not None else None,
            closing_balance=(
                MoneyResponse.of(scope_balance["balance"], self.symbol)
                if scope_balance else None
            ),
        )

    async def create_entry(self, request: EntryCreateRequest) -> EntryResponse:
        """분개 생성"""
        entry_id = await self.store.add_entry(
            NewEntry(
                ledger_kind=request.ledger_kind.value,
                entry_date=request.entry_date,
                transaction_type=request.transaction_type.value,
                debit=request.debit,
                credit=request.credit,
                party_id=request.party_id,
                invoice_no=request.invoice_no,
                description=request.description,
                head_name=request.head_name,
            )
        )
        return await self._to_response(await self.store.require_entry(entry_id))

    async def update_entry(self, entry_id: str, request: EntryUpdateRequest) -> EntryResponse:
        """분개 수정"""
        entry = await self.store.update_entry(
            entry_id,
            EntryChanges(
                entry_date=request.entry_date,
                transaction_type=(
                    request.transaction_type.value if request.transaction_type else None
                ),
                debit=request.debit,
                credit=request.credit,
                invoice_no=request.invoice_no,
                description=request.description,
                head_name=request.head_name,
            ),
        )
        return await self._to_response(entry)

    async def cancel_entry(self, entry_id: str) -> EntryResponse:
        """분개 취소"""
        entry = await self.store.cancel_entry(entry_id)
        return await self._to_response(entry)
