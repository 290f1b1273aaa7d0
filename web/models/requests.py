"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증.
금액은 통화 단위(문자열/숫자)로 받아 최소 단위 정수로 변환한다.
변환 실패 시 0으로 대체하지 않고 요청 검증 오류(422).
"""

from datetime import date
from typing import Any

from pydantic import Field, field_validator

from core.ledger.types import LedgerKind, TransactionType
from core.money import to_minor_units
from core.utils.dates import parse_iso_date
from web.models.responses import CamelModel


def _parse_entry_date(value: Any) -> Any:
    if isinstance(value, str):
        return parse_iso_date(value, "date")
    return value


class EntryCreateRequest(CamelModel):
    """분개 생성 요청"""

    ledger_kind: LedgerKind = Field(..., description="원장 종류 (SALES/RICE_PURCHASE/CASH)")
    party_id: str | None = Field(default=None, description="거래처 ID (CASH는 생략 가능)")
    entry_date: date = Field(..., alias="date", description="거래일 (YYYY-MM-DD)")
    transaction_type: TransactionType = Field(..., description="거래 유형")
    debit: int = Field(default=0, description="차변 (통화 단위)")
    credit: int = Field(default=0, description="대변 (통화 단위)")
    invoice_no: str | None = Field(default=None, description="송장 번호")
    description: str | None = Field(default=None, description="적요")
    head_name: str | None = Field(default=None, description="계정 과목")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "ledgerKind": "SALES",
                    "partyId": "P001",
                    "date": "2024-01-15",
                    "transactionType": "SALE",
                    "debit": "5000.00",
                    "invoiceNo": "INV-001",
                    "description": "Rice 50kg x 10",
                },
            ]
        }
    }

    @field_validator("entry_date", mode="before")
    @classmethod
    def _check_date(cls, value: Any) -> Any:
        return _parse_entry_date(value)

    @field_validator("debit", "credit", mode="before")
    @classmethod
    def _to_minor_units(cls, value: Any) -> int:
        amount = to_minor_units(value)
        if amount < 0:
            raise ValueError(f"negative amount: {value!r}")
        return amount


class EntryUpdateRequest(CamelModel):
    """분개 수정 요청 (생략한 필드는 유지)"""

    entry_date: date | None = Field(default=None, alias="date", description="거래일 (YYYY-MM-DD)")
    transaction_type: TransactionType | None = Field(default=None, description="거래 유형")
    debit: int | None = Field(default=None, description="차변 (통화 단위)")
    credit: int | None = Field(default=None, description="대변 (통화 단위)")
    invoice_no: str | None = Field(default=None, description="송장 번호")
    description: str | None = Field(default=None, description="적요")
    head_name: str | None = Field(default=None, description="계정 과목")

    @field_validator("entry_date", mode="before")
    @classmethod
    def _check_date(cls, value: Any) -> Any:
        return _parse_entry_date(value)

    @field_validator("debit", "credit", mode="before")
    @classmethod
    def _to_minor_units(cls, value: Any) -> int | None:
        if value is None:
            return None
        amount = to_minor_units(value)
        if amount < 0:
            raise ValueError(f"negative amount: {value!r}")
        return amount
