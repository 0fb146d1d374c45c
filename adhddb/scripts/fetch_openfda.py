"""OpenFDA 라벨 + FAERS 이상사례 수집

약물별로 라벨을 병합해 fdaData 블록을, FAERS count 결과로 faersData 블록을 만들어
캐시 디렉토리에 YAML로 저장합니다. 카탈로그(data/drugs)는 수정하지 않습니다.

사용법:
    python -m adhddb.scripts.fetch_openfda
    python -m adhddb.scripts.fetch_openfda --drug methylphenidate --drug atomoxetine
    python -m adhddb.scripts.fetch_openfda --out data/cache --dry-run
"""

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from adhddb.config import settings
from adhddb.ingest import DrugSourceMapping, OpenFDAClient, select_mappings
from adhddb.parse import FAERSParser, OpenFDALabelParser
from adhddb.store import write_yaml

logger = logging.getLogger(__name__)

LABEL_LIMIT = 50
REACTION_LIMIT = 30


async def fetch_drug(client: OpenFDAClient, mapping: DrugSourceMapping) -> dict:
    """
    약물 1개 수집

    Returns:
        {"fdaData": ..., "faersData": ..., "labelCount": int}
    """
    name = mapping.generic_name
    label_parser = OpenFDALabelParser()
    faers_parser = FAERSParser()

    response = await client.search_drug_labels(name, limit=LABEL_LIMIT)
    labels = label_parser.parse_many(response.get("results") or [])
    merged = label_parser.merge_labels(labels)
    logger.info(f"[{mapping.drug_id}] 라벨 {len(labels)}건")

    total = await client.get_total_report_count(name)
    serious = await client.get_total_report_count(name, serious=True)
    faers = faers_parser.build_summary(
        total_reports=total,
        serious_reports=serious,
        reactions=await client.get_reaction_counts(name, REACTION_LIMIT),
        ages=await client.get_age_counts(name),
        sexes=await client.get_sex_counts(name),
        outcomes=await client.get_outcome_counts(name),
    )
    logger.info(f"[{mapping.drug_id}] FAERS 보고 {total}건 (중대 {serious}건)")

    fda_data = None
    if merged is not None:
        fda_data = label_parser.to_fda_data(merged, list(mapping.application_numbers))

    return {
        "fdaData": (
            fda_data.model_dump(by_alias=True, exclude_none=True, mode="json")
            if fda_data else None
        ),
        "faersData": faers.model_dump(by_alias=True, exclude_none=True, mode="json"),
        "labelCount": len(labels),
    }


async def run(
    drug_ids: Optional[list[str]] = None,
    out_dir: Optional[Path] = None,
    dry_run: bool = False,
    client: Optional[OpenFDAClient] = None,
) -> dict:
    """
    수집 실행

    Args:
        drug_ids: 대상 약물 ID (기본: 매핑 전체)
        out_dir: 캐시 디렉토리 (기본: settings.CACHE_DIR)
        dry_run: 파일 저장 건너뛰기
        client: 테스트용 클라이언트 주입

    Returns:
        수집 결과 통계
    """
    mappings = select_mappings(drug_ids)
    out_dir = out_dir or settings.CACHE_DIR
    stats = {
        "start_time": datetime.now().isoformat(),
        "drugs": [m.drug_id for m in mappings],
        "fetched": {},
        "written": [],
        "errors": [],
    }

    async with (client or OpenFDAClient()) as fda:
        for mapping in mappings:
            try:
                result = await fetch_drug(fda, mapping)
            except Exception as e:
                logger.error(f"[{mapping.drug_id}] 수집 실패: {e}")
                stats["errors"].append(f"{mapping.drug_id}: {e}")
                continue

            stats["fetched"][mapping.drug_id] = result["labelCount"]
            if dry_run:
                continue

            if result["fdaData"]:
                path = write_yaml(out_dir / f"{mapping.drug_id}-label.yaml", result["fdaData"])
                stats["written"].append(str(path))
            path = write_yaml(out_dir / f"{mapping.drug_id}-events.yaml", result["faersData"])
            stats["written"].append(str(path))

    stats["end_time"] = datetime.now().isoformat()
    return stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="OpenFDA 라벨/이상사례 수집")
    parser.add_argument(
        "--drug", "-d",
        action="append",
        dest="drugs",
        help="대상 약물 ID (반복 가능, 기본: 전체)",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=settings.CACHE_DIR,
        help="캐시 디렉토리",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="파일 저장 안 함",
    )
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
    print("OpenFDA 수집 결과")
    print("=" * 50)
    for drug_id, count in stats["fetched"].items():
        print(f"  - {drug_id}: 라벨 {count}건")
    print(f"\n저장 파일: {len(stats['written'])}개")
    if stats["errors"]:
        print(f"\n오류: {len(stats['errors'])}건")
        for err in stats["errors"][:5]:
            print(f"  - {err}")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(main())
