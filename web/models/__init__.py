"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    EntryCreateRequest,
    EntryUpdateRequest,
)
from web.models.responses import (
    ApiResponse,
    DailyReportResponse,
    DailySummaryResponse,
    EntryResponse,
    FinancialStatementResponse,
    HealthResponse,
    MoneyResponse,
    PartyLedgerResponse,
    PartyResponse,
    StatementComparisonResponse,
    StatementDetailResponse,
)

__all__ = [
    # Requests
    "EntryCreateRequest",
    "EntryUpdateRequest",
    # Responses
    "ApiResponse",
    "DailyReportResponse",
    "DailySummaryResponse",
    "EntryResponse",
    "FinancialStatementResponse",
    "HealthResponse",
    "MoneyResponse",
    "PartyLedgerResponse",
    "PartyResponse",
    "StatementComparisonResponse",
    "StatementDetailResponse",
]
