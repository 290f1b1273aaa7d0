"""
core/utils/dates.py 테스트

YYYY-MM-DD 날짜 파라미터 파싱
"""

from datetime import date

import pytest

from core.errors import ValidationError
from core.utils.dates import parse_iso_date, parse_optional_date, require_iso_date


class TestParseIsoDate:
    """parse_iso_date 테스트"""

    def test_valid(self) -> None:
        """정상 날짜"""
        assert parse_iso_date("2024-01-15") == date(2024, 1, 15)

    def test_surrounding_whitespace(self) -> None:
        """앞뒤 공백 허용"""
        assert parse_iso_date(" 2024-03-01 ") == date(2024, 3, 1)

    @pytest.mark.parametrize(
        "value",
        ["2024/01/15", "15-01-2024", "2024-1-5", "2024-01-15T00:00", "yesterday", ""],
    )
    def test_wrong_format(self, value) -> None:
        """형식 불일치"""
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            parse_iso_date(value, "from")

    def test_impossible_date(self) -> None:
        """존재하지 않는 날짜"""
        with pytest.raises(ValidationError, match="invalid date"):
            parse_iso_date("2024-02-30", "to")

    def test_non_string(self) -> None:
        """문자열이 아니면 거부"""
        with pytest.raises(ValidationError):
            parse_iso_date(20240101)  # type: ignore[arg-type]


class TestOptionalAndRequired:
    """parse_optional_date / require_iso_date 테스트"""

    def test_optional_blank(self) -> None:
        """빈 값은 None"""
        assert parse_optional_date(None) is None
        assert parse_optional_date("  ") is None
        assert parse_optional_date("2024-05-05") == date(2024, 5, 5)

    def test_required_missing(self) -> None:
        """필수 날짜 누락"""
        with pytest.raises(ValidationError, match="required") as exc_info:
            require_iso_date(None, "date")

        assert exc_info.value.field == "date"

    def test_required_present(self) -> None:
        """필수 날짜 정상"""
        assert require_iso_date("2024-12-31", "date") == date(2024, 12, 31)
