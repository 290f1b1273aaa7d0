"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → ricemill/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # 통화 (나이라, 최소 단위 kobo)
    CURRENCY_CODE: str = "NGN"
    CURRENCY_SYMBOL: str = "₦"
    MINOR_UNITS_PER_UNIT: int = 100
    DECIMAL_PLACES: int = 2

    # 금액/잔액 상한 (최소 단위, SQLite 64비트 INTEGER 범위 안)
    MAX_MINOR_UNITS: int = 999_999_999_999_999

    # 날짜 파라미터 형식
    DATE_FORMAT: str = "%Y-%m-%d"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"
    SCRIPT_LOGS_DIR: Path = LOGS_DIR / "scripts"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    PROD_DB: Path = DATA_DIR / "ricemill_prod.db"
    DEV_DB: Path = DATA_DIR / "ricemill_dev.db"
