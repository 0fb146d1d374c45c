"""ClinicalTrials.gov ADHD 임상시험 수집

약물별 검색어로 ADHD 임상시험을 모아 NCT ID 기준으로 합치고, 요약
(clinicalTrialsData)과 표시용 목록을 캐시 디렉토리에 YAML로 저장합니다.

사용법:
    python -m adhddb.scripts.fetch_trials
    python -m adhddb.scripts.fetch_trials -d viloxazine -d clonidine
"""

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from adhddb.config import settings
from adhddb.ingest import ClinicalTrialsGovClient, DrugSourceMapping, select_mappings
from adhddb.parse import ClinicalTrialsParser
from adhddb.store import write_yaml

logger = logging.getLogger(__name__)

PRIMARY_LIMIT = 100
ALTERNATE_LIMIT = 50


async def fetch_drug(client: ClinicalTrialsGovClient, mapping: DrugSourceMapping) -> dict:
    """
    약물 1개 수집

    첫 검색어는 PRIMARY_LIMIT건, 나머지 검색어는 ALTERNATE_LIMIT건까지 모은다.

    Returns:
        {"clinicalTrialsData": ..., "trials": [표시용 요약, ...]}
    """
    parser = ClinicalTrialsParser()
    terms = mapping.trial_search_terms

    raw = await client.get_adhd_trials_for_drug(terms[0], limit=PRIMARY_LIMIT)
    for term in terms[1:]:
        raw.extend(await client.get_adhd_trials_for_drug(term, limit=ALTERNATE_LIMIT))

    trials = parser.parse_many(raw)
    data = parser.to_trials_data(trials, terms[0])
    logger.info(
        f"[{mapping.drug_id}] 임상시험 {data.summary.total}건 "
        f"(모집 {data.summary.recruiting}, 진행 {data.summary.active})"
    )

    return {
        "clinicalTrialsData": data.model_dump(by_alias=True, exclude_none=True, mode="json"),
        "trials": [parser.format_trial(t) for t in trials],
    }


async def run(
    drug_ids: Optional[list[str]] = None,
    out_dir: Optional[Path] = None,
    dry_run: bool = False,
    client: Optional[ClinicalTrialsGovClient] = None,
) -> dict:
    """수집 실행 (통계 dict 반환)"""
    mappings = select_mappings(drug_ids)
    out_dir = out_dir or settings.CACHE_DIR
    stats = {
        "start_time": datetime.now().isoformat(),
        "drugs": [m.drug_id for m in mappings],
        "summaries": {},
        "written": [],
        "errors": [],
    }

    async with (client or ClinicalTrialsGovClient()) as ctgov:
        for mapping in mappings:
            try:
                result = await fetch_drug(ctgov, mapping)
            except Exception as e:
                logger.error(f"[{mapping.drug_id}] 수집 실패: {e}")
                stats["errors"].append(f"{mapping.drug_id}: {e}")
                continue

            stats["summaries"][mapping.drug_id] = result["clinicalTrialsData"]["summary"]
            if not dry_run:
                path = write_yaml(out_dir / f"{mapping.drug_id}-trials.yaml", result)
                stats["written"].append(str(path))

    stats["end_time"] = datetime.now().isoformat()
    return stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ClinicalTrials.gov ADHD 임상시험 수집")
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
    print("ClinicalTrials.gov 수집 결과")
    print("=" * 50)
    print(f"{'Drug ID':<24} | {'Total':>5} | {'Recruiting':>10} | {'Active':>6} | Completed")
    print("-" * 24 + "-|-------|------------|--------|----------")
    for drug_id, summary in stats["summaries"].items():
        print(
            f"{drug_id:<24} | {summary['total']:>5} | {summary['recruiting']:>10} | "
            f"{summary['active']:>6} | {summary['completed']}"
        )
    print(f"\n저장 파일: {len(stats['written'])}개")
    if stats["errors"]:
        print(f"\n오류: {len(stats['errors'])}건")
        for err in stats["errors"][:5]:
            print(f"  - {err}")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(main())
