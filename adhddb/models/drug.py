"""약물 레코드 데이터 모델

YAML 약물 문서 1개 = DrugRecord 1개. 로드 시 한 번 생성되며 이후 변경되지 않는다.
YAML 키는 camelCase, 파이썬 속성은 snake_case (alias_generator로 연결).
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from adhddb.i18n.localized import LocalizedList, LocalizedString, LocalizedText


def _date_to_str(value: Any) -> Any:
    """YAML이 날짜로 파싱한 값을 ISO 문자열로 되돌림"""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


DateStr = Annotated[str, BeforeValidator(_date_to_str)]


def _null_as(default: Any) -> BeforeValidator:
    """값 없이 적힌 YAML 키(null)를 기본값으로 취급"""
    def convert(value: Any) -> Any:
        return default if value is None else value
    return BeforeValidator(convert)


# 플래그는 없거나 null이면 false, 목록은 빈 튜플
Flag = Annotated[bool, _null_as(False)]
NULL_AS_EMPTY = _null_as(())


class DrugClass(str, Enum):
    """약물 대분류"""
    STIMULANT = "stimulant"
    NON_STIMULANT = "non-stimulant"


class TravelStatus(str, Enum):
    """국경 간 휴대 상태"""
    ALLOWED = "allowed"
    RESTRICTED = "restricted"
    PROHIBITED = "prohibited"
    REQUIRES_PERMIT = "requires_permit"


class Severity(str, Enum):
    """상호작용 심각도"""
    MAJOR = "major"
    MODERATE = "moderate"
    MINOR = "minor"
    UNKNOWN = "unknown"


class RecordModel(BaseModel):
    """YAML 레코드 공통 설정 (불변, camelCase 별칭)"""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


# ──────────────────────────────────────────────
# 제형 / 부작용 / 상호작용
# ──────────────────────────────────────────────

class DrugForm(RecordModel):
    """제형"""
    type: str
    type_label: Optional[LocalizedString] = None
    release_type: str = ""
    release_type_label: Optional[LocalizedString] = None
    brand_name: Optional[str] = None
    strengths: tuple[str, ...] = ()
    duration_hours: Optional[float] = None
    notes: Optional[LocalizedText] = None


class SideEffect(RecordModel):
    name: LocalizedText
    frequency: Optional[str] = None
    notes: Optional[LocalizedText] = None


class SideEffects(RecordModel):
    common: tuple[SideEffect, ...] = ()
    uncommon: tuple[SideEffect, ...] = ()
    serious: tuple[SideEffect, ...] = ()


class DrugInteractionEntry(RecordModel):
    """큐레이션된 약물-약물 상호작용 (자유 텍스트 상대 물질명)"""
    drug: LocalizedText
    severity: str = Severity.UNKNOWN.value
    effect: LocalizedText = ""
    recommendation: Optional[LocalizedText] = None

    @property
    def substance_key(self) -> str:
        """매칭용 상대 물질명 (영문 또는 단일 문자열)"""
        if isinstance(self.drug, str):
            return self.drug
        return self.drug.en or ""


# ──────────────────────────────────────────────
# 승인 / 여행 규칙
# ──────────────────────────────────────────────

class DrugApproval(RecordModel):
    """지역별 승인 정보"""
    region: str
    agency: str = ""
    year: Optional[int] = None
    approved_ages: Optional[LocalizedText] = None
    indications: Optional[LocalizedList] = None
    available: Flag = False
    notes: Optional[LocalizedText] = None


class TravelDocumentation(RecordModel):
    type: str
    type_label: Optional[LocalizedString] = None
    notes: Optional[LocalizedText] = None


class MaxPersonalSupply(RecordModel):
    default: str = ""
    by_region: dict[str, str] = Field(default_factory=dict)


class CrossBorderRule(RecordModel):
    """관리자가 작성한 지역 간 휴대 규칙"""
    from_region: str
    to_region: str
    status: TravelStatus
    status_label: Optional[LocalizedString] = None
    requirements: Optional[LocalizedList] = None
    max_supply: Optional[str] = None
    notes: Optional[LocalizedText] = None
    sources: tuple[str, ...] = ()


class TravelRules(RecordModel):
    general_advice: Optional[LocalizedText] = None
    required_documentation: Annotated[tuple[TravelDocumentation, ...], NULL_AS_EMPTY] = ()
    max_personal_supply: Optional[MaxPersonalSupply] = None
    cross_border_rules: Annotated[tuple[CrossBorderRule, ...], NULL_AS_EMPTY] = ()


# ──────────────────────────────────────────────
# 용량 / 비용 / 주의사항
# ──────────────────────────────────────────────

class DosingInfo(RecordModel):
    starting_dose: Optional[str] = None
    max_dose: Optional[str] = None
    notes: Optional[LocalizedText] = None


class TypicalDosing(RecordModel):
    children: Optional[DosingInfo] = None
    adults: Optional[DosingInfo] = None


class CostEstimate(RecordModel):
    brand: Optional[str] = None
    generic: Optional[str] = None


class SpecialConsiderations(RecordModel):
    cardiac_risk: Optional[LocalizedText] = None
    abuse_risk: Optional[LocalizedText] = None
    withdrawal_notes: Optional[LocalizedText] = None
    monitoring_required: Optional[LocalizedText] = None


# ──────────────────────────────────────────────
# 외부 데이터 (CLI 보강 스크립트가 파일에 기록)
# ──────────────────────────────────────────────

class FDAPharmacologicClass(RecordModel):
    mechanism_of_action: Optional[tuple[str, ...]] = None
    established_class: Optional[tuple[str, ...]] = None
    physiologic_effect: Optional[tuple[str, ...]] = None


class FDAAbuseAndDependence(RecordModel):
    controlled_substance_class: Optional[str] = None
    abuse: Optional[LocalizedText] = None
    dependence: Optional[LocalizedText] = None


class FDAData(RecordModel):
    """OpenFDA 라벨 요약"""
    application_numbers: tuple[str, ...] = ()
    spl_set_id: Optional[str] = None
    spl_id: Optional[str] = None
    rxcui: tuple[str, ...] = ()
    pharmacologic_class: Optional[FDAPharmacologicClass] = None
    boxed_warning: Optional[LocalizedText] = None
    fda_indications: Optional[LocalizedText] = None
    abuse_and_dependence: Optional[FDAAbuseAndDependence] = None
    label_effective_date: Optional[DateStr] = None
    fda_label_url: Optional[str] = None


class FAERSReaction(RecordModel):
    reaction: LocalizedText
    report_count: int = 0
    percentage: float = 0.0


class AgeGroupCount(RecordModel):
    age_group: str
    count: int


class SexCount(RecordModel):
    sex: str
    count: int


class FAERSDemographics(RecordModel):
    by_age: tuple[AgeGroupCount, ...] = ()
    by_sex: tuple[SexCount, ...] = ()


class FAERSOutcomes(RecordModel):
    recovered: int = 0
    recovering: int = 0
    not_recovered: int = 0
    fatal: int = 0
    unknown: int = 0


class DateRange(RecordModel):
    # "from"은 예약어라 별칭 지정
    start: Optional[DateStr] = Field(None, alias="from")
    end: Optional[DateStr] = Field(None, alias="to")


class FAERSData(RecordModel):
    """FDA 이상사례 보고 (FAERS) 요약"""
    total_reports: int = 0
    serious_reports: int = 0
    top_reactions: tuple[FAERSReaction, ...] = ()
    demographics: Optional[FAERSDemographics] = None
    outcomes: Optional[FAERSOutcomes] = None
    data_range: Optional[DateRange] = None
    last_updated: Optional[DateStr] = None


class RxcuiMapping(RecordModel):
    rxcui: str
    name: str
    tty: str
    description: Optional[str] = None


class BrandMapping(RecordModel):
    brand_name: str
    rxcui: str = ""
    manufacturer: Optional[str] = None
    region: Optional[str] = None


class RxNormSynonym(RecordModel):
    name: str
    type: str  # generic, brand, chemical
    source: Optional[str] = None


class RelatedDrug(RecordModel):
    rxcui: str
    name: str
    tty: str
    relationship: str


class RxNormData(RecordModel):
    """RxNorm 매핑"""
    ingredient_rxcui: str
    ingredient_name: str
    rxcui_mappings: tuple[RxcuiMapping, ...] = ()
    brand_mappings: tuple[BrandMapping, ...] = ()
    synonyms: tuple[RxNormSynonym, ...] = ()
    related_drugs: tuple[RelatedDrug, ...] = ()
    last_updated: Optional[DateStr] = None


class TrialSummary(RecordModel):
    total: int = 0
    recruiting: int = 0
    active: int = 0
    completed: int = 0
    by_phase: dict[str, int] = Field(default_factory=dict)


class ClinicalTrialsData(RecordModel):
    """ClinicalTrials.gov 요약"""
    summary: Optional[TrialSummary] = None
    search_url: Optional[str] = None
    last_updated: Optional[DateStr] = None


# ──────────────────────────────────────────────
# 약물 레코드
# ──────────────────────────────────────────────

class DrugRecord(RecordModel):
    """ADHD 약물 레코드

    drug_class는 검증하지 않는다 (모르는 값도 그대로 통과).
    알 수 없는 최상위 키는 ``extra`` 에 보존되며 코어 로직은 참조하지 않는다.
    """

    model_config = ConfigDict(extra="allow")

    # 식별
    id: str
    generic_name: LocalizedText = ""
    brand_names: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    # 분류
    drug_class: str = ""
    drug_class_label: Optional[LocalizedString] = None
    category: str = ""
    category_label: Optional[LocalizedString] = None
    controlled_substance: Flag = False
    schedule: dict[str, str] = Field(default_factory=dict)

    # 약리
    active_ingredient: Optional[LocalizedText] = None
    mechanism_of_action: Optional[LocalizedText] = None
    neurotransmitters_affected: tuple[str, ...] = ()
    forms: Annotated[tuple[DrugForm, ...], NULL_AS_EMPTY] = ()
    onset_minutes: Optional[float] = None
    peak_effect_hours: Optional[float] = None
    duration_hours: Optional[float] = None

    # 안전성
    side_effects: Optional[SideEffects] = None
    contraindications: Optional[LocalizedList] = None
    drug_interactions: Annotated[tuple[DrugInteractionEntry, ...], NULL_AS_EMPTY] = ()
    black_box_warnings: Optional[LocalizedList] = None
    pregnancy_category: Optional[str] = None
    food_interactions: Optional[LocalizedText] = None

    # 복용 / 보관
    typical_dosing: Optional[TypicalDosing] = None
    cost_estimate: dict[str, CostEstimate] = Field(default_factory=dict)
    storage_requirements: Optional[LocalizedText] = None

    # 규제
    approvals: Annotated[tuple[DrugApproval, ...], NULL_AS_EMPTY] = ()
    special_considerations: Optional[SpecialConsiderations] = None
    travel_rules: Optional[TravelRules] = None

    # 외부 데이터
    fda_data: Optional[FDAData] = None
    faers_data: Optional[FAERSData] = None
    rxnorm_data: Optional[RxNormData] = None
    clinical_trials_data: Optional[ClinicalTrialsData] = None

    # 메타데이터
    last_updated: Optional[DateStr] = None
    sources: Annotated[tuple[str, ...], NULL_AS_EMPTY] = ()
    notes: Optional[LocalizedText] = None

    @property
    def extra(self) -> dict[str, Any]:
        """스키마에 없는 최상위 키"""
        return dict(self.model_extra or {})

    @property
    def cross_border_rules(self) -> tuple[CrossBorderRule, ...]:
        """작성된 국경 간 규칙 (travelRules 없으면 빈 튜플)"""
        if self.travel_rules is None:
            return ()
        return self.travel_rules.cross_border_rules

    @property
    def available_regions(self) -> list[str]:
        """available=true 승인 지역 목록 (문서 순서)"""
        return [a.region for a in self.approvals if a.available]

    def is_available_in(self, region: str) -> bool:
        """해당 지역에 available=true 승인 항목이 하나라도 있는지"""
        return any(a.region == region and a.available for a in self.approvals)
