"""약물 ID ↔ 외부 소스 검색어 매핑"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DrugSourceMapping:
    """내부 약물 ID와 외부 API 검색어의 대응"""

    drug_id: str
    generic_name: str                    # OpenFDA 조회용 성분명 (염 포함)
    ingredient_name: str                 # RxNorm/CT.gov 조회용 성분명
    search_terms: tuple[str, ...] = ()
    application_numbers: tuple[str, ...] = ()
    brand_names: tuple[str, ...] = ()
    trial_terms: tuple[str, ...] = ()

    @property
    def trial_search_terms(self) -> tuple[str, ...]:
        """임상시험 검색어 (첫 항목이 기본 검색어)"""
        return self.trial_terms or (self.ingredient_name,)


DRUG_SOURCE_MAPPINGS: tuple[DrugSourceMapping, ...] = (
    DrugSourceMapping(
        drug_id="methylphenidate",
        generic_name="methylphenidate hydrochloride",
        ingredient_name="methylphenidate",
        search_terms=("methylphenidate", "methylphenidate hydrochloride"),
        application_numbers=("NDA021121", "NDA010187"),  # Concerta, Ritalin
        brand_names=(
            "Concerta", "Ritalin", "Ritalin LA", "Metadate CD", "Metadate ER",
            "Methylin", "Quillivant XR", "Quillichew ER", "Jornay PM",
            "Aptensio XR", "Cotempla XR-ODT", "Daytrana",
        ),
        trial_terms=("methylphenidate", "methylphenidate hydrochloride"),
    ),
    DrugSourceMapping(
        drug_id="amphetamine-mixed-salts",
        generic_name="amphetamine",
        ingredient_name="amphetamine",
        search_terms=("amphetamine", "amphetamine aspartate", "dextroamphetamine"),
        application_numbers=("NDA011522",),  # Adderall
        brand_names=("Adderall", "Adderall XR", "Mydayis"),
        trial_terms=("amphetamine", "mixed amphetamine salts", "dextroamphetamine"),
    ),
    DrugSourceMapping(
        drug_id="lisdexamfetamine",
        generic_name="lisdexamfetamine dimesylate",
        ingredient_name="lisdexamfetamine",
        search_terms=("lisdexamfetamine", "lisdexamfetamine dimesylate"),
        application_numbers=("NDA021977",),  # Vyvanse
        brand_names=("Vyvanse",),
        trial_terms=("lisdexamfetamine", "lisdexamfetamine dimesylate"),
    ),
    DrugSourceMapping(
        drug_id="atomoxetine",
        generic_name="atomoxetine hydrochloride",
        ingredient_name="atomoxetine",
        search_terms=("atomoxetine", "atomoxetine hydrochloride"),
        application_numbers=("NDA021411",),  # Strattera
        brand_names=("Strattera",),
        trial_terms=("atomoxetine", "atomoxetine hydrochloride"),
    ),
    DrugSourceMapping(
        drug_id="guanfacine",
        generic_name="guanfacine hydrochloride",
        ingredient_name="guanfacine",
        search_terms=("guanfacine", "guanfacine hydrochloride"),
        application_numbers=("NDA022037",),  # Intuniv
        brand_names=("Intuniv", "Tenex"),
        trial_terms=("guanfacine", "guanfacine extended release"),
    ),
    DrugSourceMapping(
        drug_id="clonidine",
        generic_name="clonidine hydrochloride",
        ingredient_name="clonidine",
        search_terms=("clonidine", "clonidine hydrochloride"),
        application_numbers=("NDA022331",),  # Kapvay
        brand_names=("Kapvay", "Catapres"),
        trial_terms=("clonidine", "clonidine extended release"),
    ),
    DrugSourceMapping(
        drug_id="viloxazine",
        generic_name="viloxazine hydrochloride",
        ingredient_name="viloxazine",
        search_terms=("viloxazine", "viloxazine hydrochloride"),
        application_numbers=("NDA211964",),  # Qelbree
        brand_names=("Qelbree",),
        trial_terms=("viloxazine", "viloxazine extended release"),
    ),
)

_BY_ID = {m.drug_id: m for m in DRUG_SOURCE_MAPPINGS}


def get_mapping(drug_id: str) -> Optional[DrugSourceMapping]:
    """약물 ID로 매핑 조회 (없으면 None)"""
    return _BY_ID.get(drug_id)


def select_mappings(drug_ids: Optional[list[str]] = None) -> list[DrugSourceMapping]:
    """
    CLI --drug 옵션 해석

    Args:
        drug_ids: 약물 ID 목록 (None/빈 목록이면 전체)

    Raises:
        KeyError: 매핑에 없는 ID
    """
    if not drug_ids:
        return list(DRUG_SOURCE_MAPPINGS)
    unknown = [d for d in drug_ids if d not in _BY_ID]
    if unknown:
        raise KeyError(f"Unknown drug id(s): {', '.join(unknown)}")
    return [_BY_ID[d] for d in drug_ids]
