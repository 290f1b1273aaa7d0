"""
유틸리티 패키지

날짜 파라미터 파싱 등 공통 유틸리티
"""

from core.utils.dates import (
    parse_iso_date,
    parse_optional_date,
    require_iso_date,
)

__all__ = [
    "parse_iso_date",
    "parse_optional_date",
    "require_iso_date",
]
