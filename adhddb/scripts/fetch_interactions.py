"""약물 상호작용 데이터 생성

큐레이션된 약물군 상호작용표와 영양소 경고표로 약물별 상호작용 데이터
(drugInteractions, nutrientInteractions, commonCoprescribed)를 만들어
캐시 디렉토리에 YAML로 저장합니다. 외부 API 호출은 없습니다.

사용법:
    python -m adhddb.scripts.fetch_interactions
    python -m adhddb.scripts.fetch_interactions -d guanfacine --dry-run
"""

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from adhddb.config import settings
from adhddb.ingest import select_mappings
from adhddb.interactions import build_interactions_data
from adhddb.store import DrugCatalog, load_catalog, write_yaml

logger = logging.getLogger(__name__)


async def run(
    drug_ids: Optional[list[str]] = None,
    out_dir: Optional[Path] = None,
    dry_run: bool = False,
    catalog: Optional[DrugCatalog] = None,
) -> dict:
    """생성 실행 (통계 dict 반환)"""
    mappings = select_mappings(drug_ids)
    out_dir = out_dir or settings.CACHE_DIR
    if catalog is None:
        catalog = load_catalog()
    stats = {
        "start_time": datetime.now().isoformat(),
        "drugs": [m.drug_id for m in mappings],
        "summaries": {},
        "written": [],
        "missing": [],
    }

    for mapping in mappings:
        drug = catalog.get(mapping.drug_id)
        if drug is None:
            logger.warning(f"[{mapping.drug_id}] 카탈로그에 없음, 건너뜀")
            stats["missing"].append(mapping.drug_id)
            continue

        data = build_interactions_data(drug)
        stats["summaries"][drug.id] = {
            "drug_interactions": len(data["drugInteractions"]),
            "nutrient_interactions": len(data["nutrientInteractions"]),
            "coprescribed": len(data["commonCoprescribed"]),
        }
        logger.info(f"[{drug.id}] 약물 상호작용 {len(data['drugInteractions'])}건")

        if not dry_run:
            path = write_yaml(out_dir / f"{drug.id}-interactions.yaml", data)
            stats["written"].append(str(path))

    stats["end_time"] = datetime.now().isoformat()
    return stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="약물 상호작용 데이터 생성")
    parser.add_argument("--drug", "-d", action="append", dest="drugs",
                        help="대상 약물 ID (반복 가능, 기본: 전체)")
    parser.add_argument("--out", type=Path, default=settings.CACHE_DIR, help="캐시 디렉토리")
    parser.add_argument("--dry-run", action="store_true", help="파일 저장 안 함")
    return parser


async def main(argv: Optional[list[str]] = None):
    """CLI 진입점"""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    stats = await run(drug_ids=args.drugs, out_dir=args.out, dry_run=args.dry_run)

    print("\n" + "=" * 50)
    print("약물 상호작용 데이터 생성 결과")
    print("=" * 50)
    print(f"{'Drug ID':<24} | Drug-Drug | Nutrient | Co-Rx Classes")
    print("-" * 24 + "-|-----------|----------|--------------")
    for drug_id, summary in stats["summaries"].items():
        print(
            f"{drug_id:<24} | {summary['drug_interactions']:>9} | "
            f"{summary['nutrient_interactions']:>8} | {summary['coprescribed']}"
        )
    print(f"\n저장 파일: {len(stats['written'])}개")
    if stats["missing"]:
        print(f"카탈로그에 없는 약물: {', '.join(stats['missing'])}")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(main())
