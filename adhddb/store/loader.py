"""YAML 레코드 로더

data/
  drugs/*.yaml        약물 1개 = 문서 1개
  meta/regions.yaml   regions, drugCategories
  meta/categories.yaml categories, drugClasses
  meta/terms.yaml     terms
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from adhddb.config import settings
from adhddb.models import Category, DrugClassInfo, DrugRecord, Region, Term
from adhddb.store.catalog import DrugCatalog
from adhddb.travel.rules import find_duplicate_rules

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """레코드 로드 실패 (YAML 파싱, 스키마 검증, 중복 id)"""


def list_yaml_files(directory: Path) -> list[Path]:
    """디렉토리의 .yaml/.yml 파일 (이름순)"""
    if not directory.exists():
        return []
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix in (".yaml", ".yml")
    )


def read_yaml(path: Path) -> Any:
    """YAML 문서 1개 읽기

    Raises:
        CatalogError: YAML 문법 오류
    """
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogError(f"{path.name}: YAML 파싱 실패: {e}") from e


def write_yaml(path: Path, data: Any) -> Path:
    """YAML 캐시 파일 쓰기 (키 순서 유지, 유니코드 그대로)"""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)
    return path


def _validate(model, data: Any, source: str):
    if not isinstance(data, dict):
        raise CatalogError(f"{source}: 매핑 문서가 아님 ({type(data).__name__})")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"{source}: 스키마 검증 실패\n{e}") from e


def load_drug(path: Path) -> DrugRecord:
    """약물 YAML 1개 → DrugRecord"""
    return _validate(DrugRecord, read_yaml(path), path.name)


def load_drugs(drugs_dir: Path) -> list[DrugRecord]:
    """
    약물 디렉토리 전체 로드

    Args:
        drugs_dir: 약물 YAML 디렉토리

    Returns:
        파일 이름순 DrugRecord 목록

    Raises:
        CatalogError: 검증 실패 또는 id 중복
    """
    if not drugs_dir.exists():
        logger.warning(f"[Loader] 약물 디렉토리 없음: {drugs_dir}")
        return []

    drugs: list[DrugRecord] = []
    seen: dict[str, str] = {}

    for path in list_yaml_files(drugs_dir):
        drug = load_drug(path)
        if drug.id in seen:
            raise CatalogError(
                f"{path.name}: 중복 약물 id '{drug.id}' (먼저 정의: {seen[drug.id]})"
            )
        seen[drug.id] = path.name

        for from_region, to_region in find_duplicate_rules(drug):
            logger.warning(
                f"[Loader] {drug.id}: 중복 국경 간 규칙 {from_region}->{to_region} "
                f"(첫 번째 규칙 사용)"
            )

        drugs.append(drug)

    logger.info(f"[Loader] 약물 {len(drugs)}개 로드: {drugs_dir}")
    return drugs


def _read_meta(meta_dir: Path, filename: str) -> dict:
    path = meta_dir / filename
    if not path.exists():
        logger.warning(f"[Loader] 메타 파일 없음: {path}")
        return {}
    data = read_yaml(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CatalogError(f"{filename}: 매핑 문서가 아님")
    return data


def _keyed(model, entries: Optional[dict], key_field: str, source: str) -> list:
    """{id: {...}} 매핑 → 모델 목록 (키를 id 필드로 주입)"""
    items = []
    for key, body in (entries or {}).items():
        body = dict(body or {})
        body.setdefault(key_field, key)
        items.append(_validate(model, body, f"{source}:{key}"))
    return items


def load_meta(meta_dir: Path) -> dict[str, Any]:
    """메타 YAML 로드 (categories, drug_classes, regions, drug_categories, terms)"""
    regions_doc = _read_meta(meta_dir, "regions.yaml")
    categories_doc = _read_meta(meta_dir, "categories.yaml")
    terms_doc = _read_meta(meta_dir, "terms.yaml")

    return {
        "regions": _keyed(Region, regions_doc.get("regions"), "code", "regions.yaml"),
        "drug_categories": regions_doc.get("drugCategories") or {},
        "categories": _keyed(
            Category, categories_doc.get("categories"), "id", "categories.yaml"
        ),
        "drug_classes": _keyed(
            DrugClassInfo, categories_doc.get("drugClasses"), "id", "categories.yaml"
        ),
        "terms": _keyed(Term, terms_doc.get("terms"), "id", "terms.yaml"),
    }


def load_catalog(data_dir: Optional[Path] = None) -> DrugCatalog:
    """
    데이터 디렉토리 → DrugCatalog

    Args:
        data_dir: 데이터 루트 (기본: settings.DRUGS_DIR, settings.META_DIR)

    Returns:
        불변 카탈로그 스냅샷
    """
    if data_dir is None:
        drugs_dir, meta_dir = settings.DRUGS_DIR, settings.META_DIR
    else:
        drugs_dir, meta_dir = Path(data_dir) / "drugs", Path(data_dir) / "meta"

    drugs = load_drugs(drugs_dir)
    meta = load_meta(meta_dir)

    catalog = DrugCatalog.from_records(
        drugs=drugs,
        categories=meta["categories"],
        drug_classes=meta["drug_classes"],
        regions=meta["regions"],
        terms=meta["terms"],
        drug_categories=meta["drug_categories"],
        loaded_at=datetime.now(),
    )
    logger.info(
        f"[Loader] 카탈로그 로드 완료: 약물 {len(catalog.drugs)}, "
        f"카테고리 {len(catalog.categories)}, 지역 {len(catalog.regions)}, "
        f"용어 {len(catalog.terms)}"
    )
    return catalog
