"""공통 pytest 설정 및 fixture

- 코드로 만든 소형 카탈로그 (규칙/추론 테스트용)
- 저장소에 포함된 data/ 카탈로그 (데이터 품질 테스트용)
"""

from pathlib import Path

import pytest

from adhddb.models import Category, DrugClassInfo, DrugRecord, Region
from adhddb.store import DrugCatalog, load_catalog

DATA_DIR = Path(__file__).parent.parent / "data"


def make_drug(**overrides) -> DrugRecord:
    """camelCase dict로 DrugRecord 생성 (YAML 문서와 같은 모양)"""
    doc = {
        "id": "test-drug",
        "genericName": {"en": "Testamine"},
        "drugClass": "stimulant",
        "category": "methylphenidate",
        "controlledSubstance": False,
        "approvals": [],
    }
    doc.update(overrides)
    return DrugRecord.model_validate(doc)


@pytest.fixture
def methylphenidate():
    return make_drug(
        id="methylphenidate",
        genericName={"en": "Methylphenidate", "zh": "哌甲酯", "ja": "メチルフェニデート"},
        brandNames={"US": ["Ritalin", "Concerta"], "JP": ["コンサータ"]},
        drugClass="stimulant",
        category="methylphenidate",
        controlledSubstance=True,
        approvals=[
            {"region": "US", "agency": "FDA", "available": True},
            {"region": "JP", "agency": "PMDA", "available": True},
            {"region": "CN", "agency": "NMPA", "available": True},
        ],
        drugInteractions=[
            {"drug": {"en": "MAO inhibitors"}, "severity": "major", "effect": {"en": "Hypertensive crisis"}},
            {
                "drug": {"en": "Guanfacine"},
                "severity": "minor",
                "effect": {"en": "Commonly co-prescribed", "zh": "常联合处方"},
            },
        ],
        travelRules={
            "generalAdvice": {"en": "Carry a prescription."},
            "crossBorderRules": [
                {"fromRegion": "US", "toRegion": "JP", "status": "requires_permit"},
                {"fromRegion": "US", "toRegion": "CN", "status": "restricted"},
            ],
        },
    )


@pytest.fixture
def amphetamine():
    return make_drug(
        id="amphetamine-mixed-salts",
        genericName={"en": "Amphetamine Mixed Salts", "zh": "混合苯丙胺盐"},
        drugClass="stimulant",
        category="amphetamine",
        controlledSubstance=True,
        approvals=[
            {"region": "US", "agency": "FDA", "available": True},
            {"region": "CA", "agency": "Health Canada", "available": True},
            {"region": "JP", "agency": "PMDA", "available": False},
        ],
        travelRules={
            "crossBorderRules": [
                {"fromRegion": "US", "toRegion": "CA", "status": "allowed"},
            ],
        },
    )


@pytest.fixture
def guanfacine():
    return make_drug(
        id="guanfacine",
        genericName={"en": "Guanfacine", "ja": "グアンファシン"},
        drugClass="non-stimulant",
        category="alpha2-agonist",
        controlledSubstance=False,
        approvals=[{"region": "US", "agency": "FDA", "available": True}],
        drugInteractions=[
            {
                "drug": {"en": "Methylphenidate"},
                "severity": "minor",
                "effect": {"en": "No clinically significant interaction"},
            },
        ],
    )


@pytest.fixture
def sample_catalog(methylphenidate, amphetamine, guanfacine):
    """약물 3개 + 메타 최소 구성"""
    return DrugCatalog.from_records(
        drugs=[methylphenidate, amphetamine, guanfacine],
        categories=[
            Category(id="methylphenidate", drug_class="stimulant", name={"en": "Methylphenidate"}),
            Category(id="amphetamine", drug_class="stimulant", name={"en": "Amphetamine"}),
        ],
        drug_classes=[
            DrugClassInfo(id="stimulant", name={"en": "Stimulants"}, categories=("methylphenidate", "amphetamine")),
        ],
        regions=[
            Region(code="US", name={"en": "United States"}),
            Region(code="JP", name={"en": "Japan"}),
            Region(code="CN", name={"en": "China"}),
        ],
    )


@pytest.fixture(scope="session")
def bundled_catalog():
    """저장소 data/ 디렉토리 카탈로그"""
    return load_catalog(DATA_DIR)
