"""
설정 로더

settings.yaml 로드 및 애플리케이션 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import PROJECT_ROOT, Defaults, Paths
from core.types import AppMode


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    mode: AppMode = AppMode.DEVELOPMENT
    db_path: Path | None = None
    web_host: str = Defaults.WEB_HOST
    web_port: int = Defaults.WEB_PORT
    currency_symbol: str = Defaults.CURRENCY_SYMBOL

    @property
    def resolved_db_path(self) -> Path:
        """DB 경로 (명시값이 없으면 모드별 기본 경로)"""
        if self.db_path is not None:
            return self.db_path
        if self.mode == AppMode.PRODUCTION:
            return Paths.PROD_DB
        return Paths.DEV_DB


class ConfigLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def _section(data: dict, name: str) -> dict:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigLoadError(f"settings.yaml의 '{name}' 섹션 형식이 잘못되었습니다")
    return value


def load_config(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    파일이 없으면 기본값(development)으로 동작.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        ConfigLoadError: 형식이 잘못된 경우
        ValueError: 유효하지 않은 mode인 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        return AppConfig()

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return AppConfig()

    if not isinstance(data, dict):
        raise ConfigLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    # mode 검증
    mode_str = data.get("mode", AppMode.DEVELOPMENT.value)
    try:
        mode = AppMode(str(mode_str).lower())
    except ValueError as e:
        valid_modes = [m.value for m in AppMode]
        raise ValueError(
            f"유효하지 않은 mode입니다: '{mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    database = _section(data, "database")
    web = _section(data, "web")
    currency = _section(data, "currency")

    db_path_str = database.get("path")
    db_path = None
    if db_path_str:
        db_path = Path(db_path_str)
        if not db_path.is_absolute():
            db_path = PROJECT_ROOT / db_path

    try:
        web_port = int(web.get("port", Defaults.WEB_PORT))
    except (TypeError, ValueError) as e:
        raise ConfigLoadError(f"web.port가 정수가 아닙니다: {web.get('port')!r}") from e

    return AppConfig(
        mode=mode,
        db_path=db_path,
        web_host=str(web.get("host", Defaults.WEB_HOST)),
        web_port=web_port,
        currency_symbol=str(currency.get("symbol", Defaults.CURRENCY_SYMBOL)),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            type(self)._config = load_config(settings_path)

    @property
    def config(self) -> AppConfig:
        """로드된 설정"""
        assert self._config is not None
        return self._config

    @property
    def mode(self) -> AppMode:
        """현재 실행 모드"""
        return self.config.mode

    @property
    def db_path(self) -> Path:
        """현재 모드의 DB 경로"""
        return self.config.resolved_db_path

    @property
    def web_host(self) -> str:
        return self.config.web_host

    @property
    def web_port(self) -> int:
        return self.config.web_port

    @property
    def currency_symbol(self) -> str:
        return self.config.currency_symbol

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
