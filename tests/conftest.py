"""
pytest 공통 fixture 정의

임시 디렉토리, 설정 파일, 임시 DB, 분개 생성 헬퍼
"""

import tempfile
from datetime import date
from pathlib import Path
from typing import Callable

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import Settings
from core.ledger.store import LedgerStore
from core.ledger.types import LedgerEntry


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = """# 테스트용 settings.yaml
mode: development

database:
  path: data/test_ledger.db

web:
  host: 0.0.0.0
  port: 8080

currency:
  symbol: "NGN "
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_production(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (production 모드, 나머지 기본값)"""
    settings_path = temp_dir / "settings_prod.yaml"
    settings_path.write_text("mode: production\n", encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_invalid_mode(temp_dir: Path) -> Path:
    """잘못된 모드의 settings.yaml 파일 생성"""
    settings_path = temp_dir / "settings_invalid.yaml"
    settings_path.write_text("mode: staging\n", encoding="utf-8")
    return settings_path


@pytest.fixture(autouse=True)
def reset_settings() -> None:
    """테스트 간 Settings 싱글턴 격리"""
    Settings.reset()
    yield
    Settings.reset()


@pytest_asyncio.fixture
async def db(temp_dir: Path) -> SQLiteAdapter:
    """스키마가 초기화된 임시 DB"""
    adapter = SQLiteAdapter(temp_dir / "test_ledger.db")
    await adapter.connect()
    await init_schema(adapter)

    yield adapter

    await adapter.close()


@pytest.fixture
def store(db: SQLiteAdapter) -> LedgerStore:
    """LedgerStore 인스턴스"""
    return LedgerStore(db)


@pytest.fixture
def make_entry() -> Callable[..., LedgerEntry]:
    """LedgerEntry 생성 헬퍼 (seq 자동 증가)"""
    counter = {"seq": 0}

    def _make(
        day: date,
        debit: int = 0,
        credit: int = 0,
        scope_id: str | None = "P001",
        **fields,
    ) -> LedgerEntry:
        counter["seq"] += 1
        seq = fields.pop("seq", counter["seq"])
        return LedgerEntry(
            entry_id=fields.pop("entry_id", f"e{seq}"),
            entry_date=day,
            seq=seq,
            debit=debit,
            credit=credit,
            scope_id=scope_id,
            **fields,
        )

    return _make
