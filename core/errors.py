"""
도메인 예외 정의

- ValidationError: 잘못된 입력 (정렬 위반, 비유한 금액, 잘못된 날짜 범위)
- NotFoundError: 존재하지 않는 거래처/원장/분개
- TransportError: 원장 조회 HTTP 호출 실패 (네트워크/HTTP 계층)
"""


class LedgerError(Exception):
    """원장 관련 예외 베이스"""

    pass


class ValidationError(LedgerError, ValueError):
    """입력 검증 실패

    ValueError를 함께 상속하여 Pydantic validator 안에서 발생해도
    요청 검증 오류로 변환된다.

    Args:
        message: 실패한 불변 조건 설명
        field: 문제가 된 필드/항목 (선택)
    """

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        if field:
            super().__init__(f"{field}: {message}")
        else:
            super().__init__(message)


class NotFoundError(LedgerError):
    """요청한 거래처/원장/분개가 존재하지 않음"""

    def __init__(self, kind: str, identifier: str | None):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class TransportError(LedgerError):
    """원장 데이터 조회 실패 (HTTP 계층)

    status 0은 네트워크 오류(응답 없음)를 의미.
    """

    def __init__(self, message: str, status: int = 0):
        self.message = message
        self.status = status
        super().__init__(f"[{status}] {message}")
