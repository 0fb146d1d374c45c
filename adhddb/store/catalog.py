"""약물 카탈로그 (불변 스냅샷)

로더가 한 번 만들고 이후에는 참조로만 공유된다.
갱신이 필요하면 새 카탈로그를 만들어 참조를 교체한다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from adhddb.models import Category, DrugClassInfo, DrugRecord, Region, Term


def _freeze(items: Iterable, key) -> Mapping:
    return MappingProxyType({key(item): item for item in items})


@dataclass(frozen=True, eq=False)
class DrugCatalog:
    """로드된 약물/메타 레코드 묶음"""

    drugs: tuple[DrugRecord, ...] = ()
    categories: tuple[Category, ...] = ()
    drug_classes: tuple[DrugClassInfo, ...] = ()
    regions: tuple[Region, ...] = ()
    terms: tuple[Term, ...] = ()
    drug_categories: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    loaded_at: Optional[datetime] = None

    # 인덱스 (생성 시 계산)
    _by_id: Mapping[str, DrugRecord] = field(init=False, repr=False)
    _terms_by_id: Mapping[str, Term] = field(init=False, repr=False)

    def __post_init__(self):
        # frozen dataclass라 object.__setattr__ 사용
        object.__setattr__(self, "_by_id", _freeze(self.drugs, lambda d: d.id))
        object.__setattr__(self, "_terms_by_id", _freeze(self.terms, lambda t: t.id))

    @classmethod
    def from_records(
        cls,
        drugs: Iterable[DrugRecord],
        categories: Iterable[Category] = (),
        drug_classes: Iterable[DrugClassInfo] = (),
        regions: Iterable[Region] = (),
        terms: Iterable[Term] = (),
        drug_categories: Optional[Mapping[str, Iterable[str]]] = None,
        loaded_at: Optional[datetime] = None,
    ) -> "DrugCatalog":
        """임의 iterable로부터 카탈로그 생성 (튜플/읽기전용 매핑으로 고정)"""
        return cls(
            drugs=tuple(drugs),
            categories=tuple(categories),
            drug_classes=tuple(drug_classes),
            regions=tuple(regions),
            terms=tuple(terms),
            drug_categories=MappingProxyType(
                {k: tuple(v) for k, v in (drug_categories or {}).items()}
            ),
            loaded_at=loaded_at,
        )

    # ──────────────────────────────────────────────
    # 조회
    # ──────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.drugs)

    def __contains__(self, drug_id: object) -> bool:
        return drug_id in self._by_id

    @property
    def drug_ids(self) -> list[str]:
        return [d.id for d in self.drugs]

    @property
    def region_codes(self) -> list[str]:
        return [r.code for r in self.regions]

    def get(self, drug_id: str) -> Optional[DrugRecord]:
        """id로 약물 조회 (없으면 None)"""
        return self._by_id.get(drug_id)

    def get_term(self, term_id: str) -> Optional[Term]:
        return self._terms_by_id.get(term_id)

    def filter(
        self,
        drug_class: Optional[str] = None,
        category: Optional[str] = None,
        region: Optional[str] = None,
    ) -> list[DrugRecord]:
        """
        정확 일치 필터

        Args:
            drug_class: drugClass 값
            category: category 값
            region: 해당 지역에 available=true 승인이 있는 약물만

        Returns:
            조건을 모두 만족하는 약물 (로드 순서)
        """
        items = list(self.drugs)
        if drug_class:
            items = [d for d in items if d.drug_class == drug_class]
        if category:
            items = [d for d in items if d.category == category]
        if region:
            items = [d for d in items if d.is_available_in(region)]
        return items
