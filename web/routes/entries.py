"""
분개 API 라우트

분개 생성/수정/취소. 쓰기마다 해당 scope 잔액 재계산.
"""

from fastapi import APIRouter, Depends, Path

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from web.dependencies import get_app_settings, get_db_write
from web.models.requests import EntryCreateRequest, EntryUpdateRequest
from web.models.responses import ApiResponse, EntryResponse
from web.services.entry_service import EntryService

router = APIRouter(prefix="/api/ledger/entries", tags=["Entries"])


@router.post("", response_model=ApiResponse[EntryResponse], status_code=201)
async def create_entry(
    request: EntryCreateRequest,
    db: SQLiteAdapter = Depends(get_db_write),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[EntryResponse]:
    """분개 생성"""
    service = EntryService(db, settings.currency_symbol)
    entry = await service.create_entry(request)
    return ApiResponse(data=entry, message="entry created")


@router.put("/{entry_id}", response_model=ApiResponse[EntryResponse])
async def update_entry(
    request: EntryUpdateRequest,
    entry_id: str = Path(..., description="분개 ID"),
    db: SQLiteAdapter = Depends(get_db_write),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[EntryResponse]:
    """분개 수정 (이후 분개 잔액 재계산)"""
    service = EntryService(db, settings.currency_symbol)
    entry = await service.update_entry(entry_id, request)
    return ApiResponse(data=entry, message="entry updated")


@router.delete("/{entry_id}", response_model=ApiResponse[EntryResponse])
async def cancel_entry(
    entry_id: str = Path(..., description="분개 ID"),
    db: SQLiteAdapter = Depends(get_db_write),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[EntryResponse]:
    """분개 취소 (행은 보존, 잔액 계산에서 제외)"""
    service = EntryService(db, settings.currency_symbol)
    entry = await service.cancel_entry(entry_id)
    return ApiResponse(data=entry, message="entry cancelled")
