"""
날짜 유틸리티

API 날짜 파라미터는 YYYY-MM-DD 형식만 허용.
형식이 틀리거나 존재하지 않는 날짜는 ValidationError.
"""

import re
from datetime import date, datetime

from core.constants import Defaults
from core.errors import ValidationError

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str, field: str | None = None) -> date:
    """YYYY-MM-DD 문자열을 date로 변환

    Args:
        value: 날짜 문자열
        field: 오류 메시지에 표시할 파라미터명

    Raises:
        ValidationError: 형식 불일치, 존재하지 않는 날짜 (예: 2024-02-30)

    Example:
        >>> parse_iso_date("2024-01-15")
        datetime.date(2024, 1, 15)
    """
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value.strip()):
        raise ValidationError(f"date must be YYYY-MM-DD, got {value!r}", field)

    try:
        return datetime.strptime(value.strip(), Defaults.DATE_FORMAT).date()
    except ValueError as e:
        raise ValidationError(f"invalid date: {value!r}", field) from e


def parse_optional_date(value: str | None, field: str | None = None) -> date | None:
    """빈 값이면 None, 아니면 parse_iso_date"""
    if value is None or not value.strip():
        return None
    return parse_iso_date(value, field)


def require_iso_date(value: str | None, field: str) -> date:
    """필수 날짜 파라미터 (없으면 ValidationError)"""
    if value is None or not value.strip():
        raise ValidationError(f"'{field}' date parameter is required (format: YYYY-MM-DD)", field)
    return parse_iso_date(value, field)
