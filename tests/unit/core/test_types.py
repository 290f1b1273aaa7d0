"""
core/types.py 테스트

모든 Enum이 문자열 직렬화 가능한지 확인
"""

import json

import pytest

from core.types import AppMode, PartyType


class TestAppMode:
    """AppMode 테스트"""

    def test_values(self) -> None:
        """값 확인"""
        assert AppMode.PRODUCTION.value == "production"
        assert AppMode.DEVELOPMENT.value == "development"

    def test_from_string(self) -> None:
        """문자열에서 생성"""
        assert AppMode("production") == AppMode.PRODUCTION

    def test_invalid_value(self) -> None:
        """알 수 없는 모드는 ValueError"""
        with pytest.raises(ValueError):
            AppMode("testnet")


class TestPartyType:
    """PartyType 테스트"""

    def test_values(self) -> None:
        """값 확인"""
        assert {t.value for t in PartyType} == {"CUSTOMER", "SUPPLIER", "OTHER"}

    def test_json_serialization(self) -> None:
        """str 상속으로 JSON 직렬화 가능"""
        assert json.dumps({"type": PartyType.CUSTOMER}) == '{"type": "CUSTOMER"}'
