"""상호작용/영양소 심각도 집계

요청된 약물마다 세 가지 출처를 모은다.
- 약물군 상호작용 (check_class 지정 시)
- 요청 약물 간 상호작용 (약물 레코드의 drugInteractions 자유 텍스트 부분일치)
- 영양소 경고

요약은 major/moderate 개수를 세어 high > moderate > low 순으로 판정한다.
모르는 약물 id는 건너뛴다.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from adhddb.i18n.localized import DEFAULT_LOCALE, resolve_optional, resolve_text
from adhddb.interactions.catalog import find_class_interaction, nutrient_warnings_for
from adhddb.models import DrugRecord, Severity
from adhddb.store.catalog import DrugCatalog


@dataclass
class PairInteraction:
    """요청 약물 간 상호작용"""
    drug: str
    severity: str
    effect: str
    recommendation: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = {"drug": self.drug, "severity": self.severity, "effect": self.effect}
        if self.recommendation:
            data["recommendation"] = self.recommendation
        return data


@dataclass
class ClassInteractionHit:
    """약물군 상호작용 일치"""
    class_label: str
    severity: str
    note: str

    def to_dict(self) -> dict[str, Any]:
        return {"class": self.class_label, "severity": self.severity, "note": self.note}


@dataclass
class NutrientHit:
    """로케일 해석된 영양소 경고"""
    nutrient: str
    nutrient_type: str
    effect: str
    severity: str
    timing: Optional[str] = None
    recommendation: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "nutrient": self.nutrient,
            "nutrientType": self.nutrient_type,
            "effect": self.effect,
            "severity": self.severity,
        }
        if self.timing:
            data["timing"] = self.timing
        if self.recommendation:
            data["recommendation"] = self.recommendation
        return data


@dataclass
class DrugInteractionResult:
    """약물 1개에 대한 결과"""
    drug_id: str
    drug_name: str
    drug_class: str
    interactions_with: list[PairInteraction] = field(default_factory=list)
    class_interactions: list[ClassInteractionHit] = field(default_factory=list)
    nutrient_warnings: list[NutrientHit] = field(default_factory=list)

    def severities(self) -> list[str]:
        """세 출처 전체의 심각도"""
        return (
            [i.severity for i in self.interactions_with]
            + [c.severity for c in self.class_interactions]
            + [n.severity for n in self.nutrient_warnings]
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "drugId": self.drug_id,
            "drugName": self.drug_name,
            "drugClass": self.drug_class,
            "interactionsWith": [i.to_dict() for i in self.interactions_with],
            "classInteractions": [c.to_dict() for c in self.class_interactions],
            "nutrientWarnings": [n.to_dict() for n in self.nutrient_warnings],
        }


@dataclass
class InteractionSummary:
    major_interactions: int = 0
    moderate_interactions: int = 0
    total_warnings: int = 0
    overall_risk: str = "low"  # high, moderate, low

    def to_dict(self) -> dict[str, Any]:
        return {
            "majorInteractions": self.major_interactions,
            "moderateInteractions": self.moderate_interactions,
            "totalWarnings": self.total_warnings,
            "overallRisk": self.overall_risk,
        }


@dataclass
class InteractionReport:
    drugs: list[str]
    check_class: Optional[str]
    results: list[DrugInteractionResult]
    summary: InteractionSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "drugs": self.drugs,
            "checkClass": self.check_class,
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary.to_dict(),
        }


def normalize_drug_ids(drug_ids: Iterable[str]) -> list[str]:
    """공백 제거 + 소문자화 (빈 값 제외)"""
    normalized = (d.strip().lower() for d in drug_ids)
    return [d for d in normalized if d]


def summarize(results: Iterable[DrugInteractionResult]) -> InteractionSummary:
    """
    심각도 집계

    major가 하나라도 있으면 high, 없고 moderate가 있으면 moderate, 그 외 low.
    """
    major = 0
    moderate = 0
    for result in results:
        for severity in result.severities():
            if severity == Severity.MAJOR.value:
                major += 1
            elif severity == Severity.MODERATE.value:
                moderate += 1

    if major > 0:
        risk = "high"
    elif moderate > 0:
        risk = "moderate"
    else:
        risk = "low"

    return InteractionSummary(
        major_interactions=major,
        moderate_interactions=moderate,
        total_warnings=major + moderate,
        overall_risk=risk,
    )


def _pair_interactions(
    catalog: DrugCatalog,
    drug: DrugRecord,
    drug_ids: list[str],
    locale: str,
) -> list[PairInteraction]:
    found = []
    for other_id in drug_ids:
        if other_id == drug.id:
            continue
        other = catalog.get(other_id)
        if other is None:
            continue

        # 자유 텍스트라 느슨한 부분일치 ("amphetamine-mixed-salts" → "amphetamine mixed salts")
        needle = other_id.replace("-", " ")
        entry = next(
            (e for e in drug.drug_interactions if needle in e.substance_key.lower()),
            None,
        )
        if entry is None:
            continue

        found.append(PairInteraction(
            drug=resolve_text(other.generic_name, locale),
            severity=entry.severity,
            effect=resolve_text(entry.effect, locale),
            recommendation=resolve_optional(entry.recommendation, locale),
        ))
    return found


def check_interactions(
    catalog: DrugCatalog,
    drug_ids: Iterable[str],
    check_class: Optional[str] = None,
    locale: str = DEFAULT_LOCALE,
) -> InteractionReport:
    """
    상호작용 검사

    Args:
        catalog: 약물 카탈로그
        drug_ids: 검사할 약물 id (공백/대소문자 정규화)
        check_class: 약물군 코드 또는 라벨 (MAOI, SSRI, ...)
        locale: 출력 로케일

    Returns:
        InteractionReport
    """
    ids = normalize_drug_ids(drug_ids)
    class_interaction = find_class_interaction(check_class) if check_class else None

    results: list[DrugInteractionResult] = []
    for drug_id in ids:
        drug = catalog.get(drug_id)
        if drug is None:
            continue

        result = DrugInteractionResult(
            drug_id=drug_id,
            drug_name=resolve_text(drug.generic_name, locale),
            drug_class=drug.drug_class,
        )

        if class_interaction is not None and class_interaction.affects(drug_id):
            result.class_interactions.append(ClassInteractionHit(
                class_label=class_interaction.label,
                severity=class_interaction.severity.value,
                note=class_interaction.note,
            ))

        result.interactions_with = _pair_interactions(catalog, drug, ids, locale)

        for warning in nutrient_warnings_for(drug):
            result.nutrient_warnings.append(NutrientHit(
                nutrient=resolve_text(warning.nutrient, locale),
                nutrient_type=warning.nutrient_type,
                effect=resolve_text(warning.effect, locale),
                severity=warning.severity.value,
                timing=resolve_optional(warning.timing, locale),
                recommendation=resolve_optional(warning.recommendation, locale),
            ))

        results.append(result)

    return InteractionReport(
        drugs=ids,
        check_class=check_class or None,
        results=results,
        summary=summarize(results),
    )
