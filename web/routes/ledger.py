"""
원장 API 라우트

거래처별 매출/쌀 매입 원장 조회 및 거래처 참조 목록
"""

from fastapi import APIRouter, Depends, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from core.ledger.types import LedgerKind
from core.utils.dates import parse_optional_date
from web.dependencies import get_app_settings, get_db
from web.models.responses import ApiResponse, PartyLedgerResponse, PartyResponse
from web.services.ledger_service import LedgerService

router = APIRouter(prefix="/api", tags=["Ledger"])


async def _party_ledger(
    ledger_kind: LedgerKind,
    party_id: str,
    date_from: str | None,
    date_to: str | None,
    q: str | None,
    db: SQLiteAdapter,
    settings: Settings,
) -> ApiResponse[PartyLedgerResponse]:
    service = LedgerService(db, settings.currency_symbol)
    ledger = await service.get_party_ledger(
        ledger_kind,
        party_id,
        start=parse_optional_date(date_from, "from"),
        end=parse_optional_date(date_to, "to"),
        query=q,
    )
    return ApiResponse(data=ledger)


@router.get("/sales/ledger", response_model=ApiResponse[PartyLedgerResponse])
async def get_sales_ledger(
    party_id: str = Query(..., alias="partyId", description="거래처 ID"),
    date_from: str | None = Query(default=None, alias="from", description="시작일 (YYYY-MM-DD)"),
    date_to: str | None = Query(default=None, alias="to", description="종료일 (YYYY-MM-DD)"),
    q: str | None = Query(default=None, description="검색어 (송장 번호/적요/계정 과목)"),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[PartyLedgerResponse]:
    """매출 원장 조회

    기초 잔액은 기간 시작 이전 전체 이력으로 계산.
    검색어는 표시 행만 줄이며 잔액/집계는 바꾸지 않는다.
    """
    return await _party_ledger(LedgerKind.SALES, party_id, date_from, date_to, q, db, settings)


@router.get("/purchase/rice/ledger", response_model=ApiResponse[PartyLedgerResponse])
async def get_rice_purchase_ledger(
    party_id: str = Query(..., alias="partyId", description="거래처 ID"),
    date_from: str | None = Query(default=None, alias="from", description="시작일 (YYYY-MM-DD)"),
    date_to: str | None = Query(default=None, alias="to", description="종료일 (YYYY-MM-DD)"),
    q: str | None = Query(default=None, description="검색어 (송장 번호/적요/계정 과목)"),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[PartyLedgerResponse]:
    """쌀 매입 원장 조회"""
    return await _party_ledger(
        LedgerKind.RICE_PURCHASE, party_id, date_from, date_to, q, db, settings
    )


@router.get("/parties", response_model=ApiResponse[list[PartyResponse]])
async def list_parties(
    party_type: str | None = Query(default=None, alias="type", description="거래처 종류"),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[list[PartyResponse]]:
    """거래처 목록 (원장 화면 참조 데이터)"""
    service = LedgerService(db, settings.currency_symbol)
    return ApiResponse(data=await service.list_parties(party_type))
