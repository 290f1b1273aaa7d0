"""
HTTP 어댑터

원장 API 클라이언트 및 최신 요청 게이트.
"""

from adapters.http.ledger_client import (
    LatestRequestGate,
    LedgerApiClient,
    fetch_many,
)

__all__ = [
    "LatestRequestGate",
    "LedgerApiClient",
    "fetch_many",
]
