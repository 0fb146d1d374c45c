"""RxNorm 개념 수집 (RxNav)

성분 RxCUI를 찾은 뒤 관련 개념(상표, 임상약물, 제형)을 모아 rxnormData 블록을
캐시 디렉토리에 YAML로 저장합니다.

사용법:
    python -m adhddb.scripts.fetch_rxnorm
    python -m adhddb.scripts.fetch_rxnorm -d guanfacine --dry-run
"""

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from adhddb.config import settings
from adhddb.ingest import DrugSourceMapping, RxNavClient, select_mappings
from adhddb.models import RxNormData
from adhddb.parse import RxNormParser
from adhddb.store import write_yaml

logger = logging.getLogger(__name__)


async def fetch_drug(client: RxNavClient, mapping: DrugSourceMapping) -> Optional[RxNormData]:
    """
    약물 1개 수집

    검색어를 순서대로 시도해 처음 찾은 성분을 사용한다.

    Returns:
        RxNormData, 성분을 못 찾으면 None
    """
    ingredient = None
    for term in mapping.search_terms or (mapping.ingredient_name,):
        info = await client.get_drug_info(term)
        if info["ingredient"]:
            ingredient = info["ingredient"]
            break

    if ingredient is None:
        logger.warning(f"[{mapping.drug_id}] 성분 RxCUI 없음")
        return None

    logger.info(f"[{mapping.drug_id}] 성분 {ingredient.get('name')} (RxCUI {ingredient.get('rxcui')})")
    all_related = await client.get_all_related(ingredient["rxcui"])

    # RxNorm BN에 없는 알려진 상표는 이름으로 RxCUI 조회
    listed = {c.get("name", "").lower() for c in all_related.get("BN", [])}
    extra_brands: dict[str, str] = {}
    for brand in mapping.brand_names:
        if brand.lower() in listed:
            continue
        rxcuis = await client.find_rxcui_by_string(brand)
        extra_brands[brand] = rxcuis[0] if rxcuis else ""

    return RxNormParser().build(ingredient, all_related, extra_brands)


async def run(
    drug_ids: Optional[list[str]] = None,
    out_dir: Optional[Path] = None,
    dry_run: bool = False,
    client: Optional[RxNavClient] = None,
) -> dict:
    """수집 실행 (통계 dict 반환)"""
    mappings = select_mappings(drug_ids)
    out_dir = out_dir or settings.CACHE_DIR
    stats = {
        "start_time": datetime.now().isoformat(),
        "drugs": [m.drug_id for m in mappings],
        "fetched": {},
        "missing": [],
        "written": [],
        "errors": [],
    }

    async with (client or RxNavClient()) as rxnav:
        for mapping in mappings:
            try:
                data = await fetch_drug(rxnav, mapping)
            except Exception as e:
                logger.error(f"[{mapping.drug_id}] 수집 실패: {e}")
                stats["errors"].append(f"{mapping.drug_id}: {e}")
                continue

            if data is None:
                stats["missing"].append(mapping.drug_id)
                continue

            stats["fetched"][mapping.drug_id] = len(data.rxcui_mappings)
            if not dry_run:
                path = write_yaml(
                    out_dir / f"{mapping.drug_id}-rxnorm.yaml",
                    {"rxnormData": data.model_dump(by_alias=True, exclude_none=True, mode="json")},
                )
                stats["written"].append(str(path))

    stats["end_time"] = datetime.now().isoformat()
    return stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="RxNorm 개념 수집")
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
    print("RxNorm 수집 결과")
    print("=" * 50)
    for drug_id, count in stats["fetched"].items():
        print(f"  - {drug_id}: RxCUI 매핑 {count}개")
    if stats["missing"]:
        print(f"\n성분 미확인: {', '.join(stats['missing'])}")
    print(f"\n저장 파일: {len(stats['written'])}개")
    if stats["errors"]:
        print(f"\n오류: {len(stats['errors'])}건")
        for err in stats["errors"][:5]:
            print(f"  - {err}")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(main())
