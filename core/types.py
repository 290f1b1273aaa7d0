"""
타입 정의 모듈

애플리케이션 공통 Enum 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class AppMode(str, Enum):
    """실행 모드 (운영 / 개발)"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class PartyType(str, Enum):
    """거래처 종류"""

    CUSTOMER = "CUSTOMER"  # 매출처 (쌀 판매)
    SUPPLIER = "SUPPLIER"  # 매입처 (쌀/벼 구매)
    OTHER = "OTHER"
