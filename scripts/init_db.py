"""
DB 초기화 / 거래처 가져오기

사용법:
    python -m scripts.init_db
    python -m scripts.init_db --mode production --parties config/parties.yaml
    python -m scripts.init_db --recompute

parties.yaml 형식:
    parties:
      - id: P001
        name: Adamu Foods
        type: CUSTOMER
        opening_balance: "12500.00"
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import yaml

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.sqlite_adapter import SQLiteAdapter, get_db_path, init_schema
from core.config.loader import get_settings
from core.ledger.store import LedgerStore
from core.logging import setup_logging
from core.money import to_minor_units
from core.types import AppMode, PartyType

logger = logging.getLogger(__name__)


def load_parties(path: Path) -> list[dict]:
    """parties.yaml 로드 및 검증

    Raises:
        ValueError: 형식 오류
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    items = data.get("parties") or []
    if not isinstance(items, list):
        raise ValueError("parties.yaml의 'parties'는 목록이어야 합니다")

    parties = []
    for index, item in enumerate(items, start=1):
        if not item.get("id") or not item.get("name"):
            raise ValueError(f"{index}번째 거래처에 id/name이 없습니다")
        parties.append({
            "party_id": str(item["id"]),
            "name": str(item["name"]),
            "party_type": PartyType(item.get("type", PartyType.OTHER.value)).value,
            "opening_balance": to_minor_units(
                item.get("opening_balance", 0), f"parties[{index}].opening_balance"
            ),
        })
    return parties


async def main(args: argparse.Namespace) -> None:
    if args.mode:
        db_path = get_db_path(AppMode(args.mode))
    else:
        db_path = get_settings().db_path

    logger.info(f"DB: {db_path}")

    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        store = LedgerStore(db)

        if args.parties:
            parties = load_parties(Path(args.parties))
            for party in parties:
                await store.upsert_party(**party)
            logger.info(f"거래처 {len(parties)}건 가져오기 완료")

        if args.recompute:
            balances = await store.recompute_all()
            for (kind, party_id), closing in balances.items():
                logger.info(f"  {kind}/{party_id or '*'}: {closing}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="원장 DB 초기화")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in AppMode],
        default=None,
        help="실행 모드 (생략 시 settings.yaml)",
    )
    parser.add_argument("--parties", default=None, help="가져올 parties.yaml 경로")
    parser.add_argument("--recompute", action="store_true", help="전체 잔액 재계산")

    setup_logging("scripts")
    asyncio.run(main(parser.parse_args()))
