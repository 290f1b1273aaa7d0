"""
web/services/report_service.py 헬퍼 테스트
"""

import pytest

from web.services.report_service import percent_change


class TestPercentChange:
    """percent_change 테스트"""

    @pytest.mark.parametrize(
        "current, previous, expected",
        [
            (150, 100, "50.00"),
            (80, 100, "-20.00"),
            (100, 100, "0.00"),
            (1, 3, "-66.67"),
            (2, 3, "-33.33"),
            (1, 8, "-87.50"),
            (100, 0, "0.00"),
            (100, -5, "0.00"),
        ],
    )
    def test_values(self, current: int, previous: int, expected: str) -> None:
        """소수점 2자리, 이전 값 0 이하면 0.00"""
        assert percent_change(current, previous) == expected
