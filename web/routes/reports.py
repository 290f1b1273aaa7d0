"""
리포트 API 라우트

현금 출납 기반 일일 리포트 및 재무 현황
"""

from fastapi import APIRouter, Depends, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from core.ledger.filters import DateWindow
from core.utils.dates import require_iso_date
from web.dependencies import get_app_settings, get_db
from web.models.responses import (
    ApiResponse,
    DailyReportResponse,
    DailySummaryResponse,
    FinancialStatementResponse,
    StatementComparisonResponse,
    StatementDetailResponse,
)
from web.services.report_service import ReportService

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.get("/daily", response_model=ApiResponse[DailyReportResponse])
async def get_daily_report(
    day: str | None = Query(default=None, alias="date", description="조회일 (YYYY-MM-DD)"),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[DailyReportResponse]:
    """일일 현금 출납 리포트"""
    service = ReportService(db, settings.currency_symbol)
    report = await service.get_daily_report(require_iso_date(day, "date"))
    return ApiResponse(data=report)


@router.get("/daily/summary", response_model=ApiResponse[DailySummaryResponse])
async def get_daily_summary(
    date_from: str | None = Query(default=None, alias="from"),
    date_to: str | None = Query(default=None, alias="to"),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[DailySummaryResponse]:
    """기간 일별 입금/출금 요약"""
    service = ReportService(db, settings.currency_symbol)
    summary = await service.get_daily_summary(
        require_iso_date(date_from, "from"),
        require_iso_date(date_to, "to"),
    )
    return ApiResponse(data=summary)


@router.get("/financial-statement", response_model=ApiResponse[FinancialStatementResponse])
async def get_financial_statement(
    date_from: str | None = Query(default=None, alias="from"),
    date_to: str | None = Query(default=None, alias="to"),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[FinancialStatementResponse]:
    """기간 재무 현황 (계정 과목별 입금/출금)"""
    service = ReportService(db, settings.currency_symbol)
    statement = await service.get_financial_statement(
        require_iso_date(date_from, "from"),
        require_iso_date(date_to, "to"),
    )
    return ApiResponse(data=statement)


@router.get(
    "/financial-statement/details",
    response_model=ApiResponse[list[StatementDetailResponse]],
)
async def get_statement_details(
    date_from: str | None = Query(default=None, alias="from"),
    date_to: str | None = Query(default=None, alias="to"),
    head_id: str | None = Query(default=None, alias="headId", description="계정 과목 ID"),
    side: str | None = Query(default=None, alias="type", description="receive 또는 payment"),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[list[StatementDetailResponse]]:
    """계정 과목별 상세 거래"""
    service = ReportService(db, settings.currency_symbol)
    details = await service.get_statement_details(
        require_iso_date(date_from, "from"),
        require_iso_date(date_to, "to"),
        head_id,
        side,
    )
    return ApiResponse(data=details)


@router.get(
    "/financial-statement/comparison",
    response_model=ApiResponse[StatementComparisonResponse],
)
async def get_statement_comparison(
    current_from: str | None = Query(default=None, alias="currentFrom"),
    current_to: str | None = Query(default=None, alias="currentTo"),
    previous_from: str | None = Query(default=None, alias="previousFrom"),
    previous_to: str | None = Query(default=None, alias="previousTo"),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[StatementComparisonResponse]:
    """두 기간 입금/출금 합계 비교"""
    current = DateWindow(
        require_iso_date(current_from, "currentFrom"),
        require_iso_date(current_to, "currentTo"),
    )
    previous = DateWindow(
        require_iso_date(previous_from, "previousFrom"),
        require_iso_date(previous_to, "previousTo"),
    )

    service = ReportService(db, settings.currency_symbol)
    comparison = await service.get_statement_comparison(current, previous)
    return ApiResponse(data=comparison)
