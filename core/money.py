"""
금액 유틸리티

내부 표현: 최소 단위 정수 (kobo, 1 NGN = 100 kobo)
외부 표현: 소수점 2자리 Decimal / 문자열

API 경계에서 한 번만 변환하며, 변환 실패 시 0으로 대체하지 않고
ValidationError를 발생시킨다.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from core.constants import Defaults
from core.errors import ValidationError

_MINOR = Decimal(Defaults.MINOR_UNITS_PER_UNIT)
_QUANT = Decimal(1).scaleb(-Defaults.DECIMAL_PLACES)  # Decimal("0.01")


def check_range(units: int, field: str | None = None) -> int:
    """최소 단위 금액이 허용 범위(±MAX_MINOR_UNITS) 안인지 확인

    Raises:
        ValidationError: 범위 초과
    """
    if abs(units) > Defaults.MAX_MINOR_UNITS:
        raise ValidationError(f"amount out of range: {units}", field)
    return units


def to_minor_units(value: Any, field: str | None = None) -> int:
    """통화 단위 금액을 최소 단위 정수로 변환

    Args:
        value: int, Decimal, float, 또는 숫자 문자열 (통화 단위)
        field: 오류 메시지에 표시할 필드명

    Returns:
        최소 단위 정수 (예: "150.25" → 15025)

    Raises:
        ValidationError: None, bool, 빈 문자열, 숫자가 아닌 문자열,
            NaN/Infinity, 소수점 2자리 초과, 허용 범위 초과인 경우

    Example:
        >>> to_minor_units("5000")
        500000
        >>> to_minor_units(12.5)
        1250
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f"amount is required, got {value!r}", field)

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        # repr 기반 변환 (0.1 → Decimal("0.1"), nan → Decimal("NaN"))
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("amount must not be empty", field)
        try:
            amount = Decimal(text)
        except InvalidOperation as e:
            raise ValidationError(f"malformed amount: {value!r}", field) from e
    else:
        raise ValidationError(
            f"unsupported amount type: {type(value).__name__}", field
        )

    if not amount.is_finite():
        raise ValidationError(f"non-finite amount: {value!r}", field)

    scaled = amount * _MINOR
    if scaled != scaled.to_integral_value():
        raise ValidationError(
            f"amount has more than {Defaults.DECIMAL_PLACES} decimal places: {value!r}",
            field,
        )

    return check_range(int(scaled), field)


def ensure_minor_units(value: Any, field: str | None = None) -> int:
    """이미 최소 단위로 표현된 값 검증

    엔진 입력용. int만 허용 (bool 제외).
    Decimal/float는 유한하고 정수값일 때만 int로 받아들인다.

    Raises:
        ValidationError: 비유한 값, 정수가 아닌 값, 범위 초과, 지원하지 않는 타입
    """
    if isinstance(value, bool):
        raise ValidationError("unsupported amount type: bool", field)

    if isinstance(value, int):
        return check_range(value, field)

    if isinstance(value, (float, Decimal)):
        amount = Decimal(repr(value)) if isinstance(value, float) else value
        if not amount.is_finite():
            raise ValidationError(f"non-finite amount: {value!r}", field)
        if amount != amount.to_integral_value():
            raise ValidationError(
                f"amount must be whole minor units: {value!r}", field
            )
        return check_range(int(amount), field)

    raise ValidationError(
        f"unsupported amount type: {type(value).__name__}", field
    )


def from_minor_units(units: int) -> Decimal:
    """최소 단위 정수를 통화 단위 Decimal로 변환

    Example:
        >>> from_minor_units(1400000)
        Decimal('14000.00')
    """
    return (Decimal(units) / _MINOR).quantize(_QUANT)


def format_amount(units: int, symbol: str = Defaults.CURRENCY_SYMBOL) -> str:
    """표시용 금액 문자열

    Example:
        >>> format_amount(1400000)
        '₦14,000.00'
        >>> format_amount(-50)
        '-₦0.50'
    """
    amount = from_minor_units(units)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{Defaults.DECIMAL_PLACES}f}"
