"""로케일 해석된 출력 변환

DrugRecord 등 불변 레코드를 요청 로케일 기준의 평범한 dict로 투영한다.
키는 camelCase이며 값이 없는 필드는 빠진다.
"""

from typing import Any, Optional

from adhddb.i18n.localized import (
    DEFAULT_LOCALE,
    resolve_optional as _t,
    resolve_optional_list as _l,
    resolve_text,
)
from adhddb.i18n.messages import (
    INFERRED_NOTICE,
    travel_reason_message,
    travel_status_label,
)
from adhddb.models import (
    Category,
    CrossBorderRule,
    DosingInfo,
    DrugClassInfo,
    DrugRecord,
    FAERSData,
    FDAData,
    SideEffect,
    Term,
)
from adhddb.travel.inference import InferredTravelStatus


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """None 값 제거"""
    return {k: v for k, v in data.items() if v is not None}


def _dump(model) -> Optional[dict[str, Any]]:
    if model is None:
        return None
    return model.model_dump(by_alias=True, exclude_none=True)


def _side_effects(items: tuple[SideEffect, ...], locale: str) -> list[dict]:
    return [
        _compact({
            "name": resolve_text(se.name, locale),
            "frequency": se.frequency,
            "notes": _t(se.notes, locale),
        })
        for se in items
    ]


def _dosing(dosing: Optional[DosingInfo], locale: str) -> Optional[dict]:
    if dosing is None:
        return None
    return _compact({
        "startingDose": dosing.starting_dose,
        "maxDose": dosing.max_dose,
        "notes": _t(dosing.notes, locale),
    })


def localize_rule(rule: CrossBorderRule, locale: str = DEFAULT_LOCALE) -> dict[str, Any]:
    """국경 간 규칙 1개"""
    return _compact({
        "fromRegion": rule.from_region,
        "toRegion": rule.to_region,
        "status": rule.status.value,
        "statusLabel": _t(rule.status_label, locale),
        "requirements": _l(rule.requirements, locale),
        "maxSupply": rule.max_supply,
        "notes": _t(rule.notes, locale),
        "sources": list(rule.sources) or None,
    })


def _fda_data(fda: Optional[FDAData], locale: str) -> Optional[dict]:
    if fda is None:
        return None
    abuse = fda.abuse_and_dependence
    return _compact({
        "applicationNumbers": list(fda.application_numbers),
        "splSetId": fda.spl_set_id,
        "splId": fda.spl_id,
        "rxcui": list(fda.rxcui),
        "pharmacologicClass": _dump(fda.pharmacologic_class),
        "boxedWarning": _t(fda.boxed_warning, locale),
        "fdaIndications": _t(fda.fda_indications, locale),
        "abuseAndDependence": _compact({
            "controlledSubstanceClass": abuse.controlled_substance_class,
            "abuse": _t(abuse.abuse, locale),
            "dependence": _t(abuse.dependence, locale),
        }) if abuse else None,
        "labelEffectiveDate": fda.label_effective_date,
        "fdaLabelUrl": fda.fda_label_url,
    })


def _faers_data(faers: Optional[FAERSData], locale: str) -> Optional[dict]:
    if faers is None:
        return None
    return _compact({
        "totalReports": faers.total_reports,
        "seriousReports": faers.serious_reports,
        "topReactions": [
            {
                "reaction": resolve_text(r.reaction, locale),
                "reportCount": r.report_count,
                "percentage": r.percentage,
            }
            for r in faers.top_reactions
        ],
        "demographics": _dump(faers.demographics),
        "outcomes": _dump(faers.outcomes),
        "dataRange": _dump(faers.data_range),
        "lastUpdated": faers.last_updated,
    })


def localize_drug_summary(drug: DrugRecord, locale: str = DEFAULT_LOCALE) -> dict[str, Any]:
    """목록용 약물 요약"""
    return _compact({
        "id": drug.id,
        "genericName": resolve_text(drug.generic_name, locale),
        "brandNames": {k: list(v) for k, v in drug.brand_names.items()},
        "drugClass": drug.drug_class,
        "drugClassLabel": _t(drug.drug_class_label, locale),
        "category": drug.category,
        "categoryLabel": _t(drug.category_label, locale),
        "controlledSubstance": drug.controlled_substance,
        "schedule": dict(drug.schedule) or None,
        "availableRegions": drug.available_regions,
        "durationHours": drug.duration_hours,
    })


def localize_drug(drug: DrugRecord, locale: str = DEFAULT_LOCALE) -> dict[str, Any]:
    """
    약물 상세 (모든 다국어 필드 해석)

    Args:
        drug: 약물 레코드
        locale: 출력 로케일

    Returns:
        camelCase dict
    """
    side_effects = drug.side_effects
    dosing = drug.typical_dosing
    special = drug.special_considerations
    travel = drug.travel_rules

    return _compact({
        "id": drug.id,
        "genericName": resolve_text(drug.generic_name, locale),
        "brandNames": {k: list(v) for k, v in drug.brand_names.items()},
        "drugClass": drug.drug_class,
        "drugClassLabel": _t(drug.drug_class_label, locale),
        "category": drug.category,
        "categoryLabel": _t(drug.category_label, locale),
        "controlledSubstance": drug.controlled_substance,
        "schedule": dict(drug.schedule) or None,
        "activeIngredient": _t(drug.active_ingredient, locale),
        "mechanismOfAction": _t(drug.mechanism_of_action, locale),
        "neurotransmittersAffected": list(drug.neurotransmitters_affected),
        "forms": [
            _compact({
                "type": form.type,
                "typeLabel": _t(form.type_label, locale),
                "releaseType": form.release_type,
                "releaseTypeLabel": _t(form.release_type_label, locale),
                "brandName": form.brand_name,
                "strengths": list(form.strengths),
                "durationHours": form.duration_hours,
                "notes": _t(form.notes, locale),
            })
            for form in drug.forms
        ],
        "onsetMinutes": drug.onset_minutes,
        "peakEffectHours": drug.peak_effect_hours,
        "durationHours": drug.duration_hours,
        "sideEffects": {
            "common": _side_effects(side_effects.common, locale),
            "uncommon": _side_effects(side_effects.uncommon, locale),
            "serious": _side_effects(side_effects.serious, locale),
        } if side_effects else None,
        "contraindications": _l(drug.contraindications, locale),
        "drugInteractions": [
            _compact({
                "drug": resolve_text(di.drug, locale),
                "severity": di.severity,
                "effect": resolve_text(di.effect, locale),
                "recommendation": _t(di.recommendation, locale),
            })
            for di in drug.drug_interactions
        ],
        "blackBoxWarnings": _l(drug.black_box_warnings, locale),
        "pregnancyCategory": drug.pregnancy_category,
        "foodInteractions": _t(drug.food_interactions, locale),
        "typicalDosing": _compact({
            "children": _dosing(dosing.children, locale),
            "adults": _dosing(dosing.adults, locale),
        }) if dosing else None,
        "costEstimate": {k: _dump(v) for k, v in drug.cost_estimate.items()} or None,
        "storageRequirements": _t(drug.storage_requirements, locale),
        "approvals": [
            _compact({
                "region": a.region,
                "agency": a.agency,
                "year": a.year,
                "approvedAges": _t(a.approved_ages, locale),
                "indications": _l(a.indications, locale),
                "available": a.available,
                "notes": _t(a.notes, locale),
            })
            for a in drug.approvals
        ],
        "travelRules": _compact({
            "generalAdvice": _t(travel.general_advice, locale),
            "requiredDocumentation": [
                _compact({
                    "type": doc.type,
                    "typeLabel": _t(doc.type_label, locale),
                    "notes": _t(doc.notes, locale),
                })
                for doc in travel.required_documentation
            ],
            "maxPersonalSupply": _dump(travel.max_personal_supply),
            "crossBorderRules": [localize_rule(r, locale) for r in travel.cross_border_rules],
        }) if travel else None,
        "specialConsiderations": _compact({
            "cardiacRisk": _t(special.cardiac_risk, locale),
            "abuseRisk": _t(special.abuse_risk, locale),
            "withdrawalNotes": _t(special.withdrawal_notes, locale),
            "monitoringRequired": _t(special.monitoring_required, locale),
        }) if special else None,
        "fdaData": _fda_data(drug.fda_data, locale),
        "faersData": _faers_data(drug.faers_data, locale),
        "rxnormData": _dump(drug.rxnorm_data),
        "clinicalTrialsData": _dump(drug.clinical_trials_data),
        "lastUpdated": drug.last_updated,
        "sources": list(drug.sources),
        "notes": _t(drug.notes, locale),
    })


def localize_travel_status(
    drug: DrugRecord,
    from_region: str,
    to_region: str,
    result: InferredTravelStatus,
    locale: str = DEFAULT_LOCALE,
) -> dict[str, Any]:
    """여행 상태 결과 + 표시 문구"""
    status = result.status.value
    data = {
        "drugId": drug.id,
        "drugName": resolve_text(drug.generic_name, locale),
        "fromRegion": from_region,
        "toRegion": to_region,
        "status": status,
        "statusLabel": travel_status_label(status, locale),
        "inferred": result.inferred,
        "reason": result.reason.value if result.reason else None,
        "reasonText": travel_reason_message(
            result.reason.value if result.reason else None, locale
        ) or None,
        "notice": resolve_text(INFERRED_NOTICE, locale) if result.inferred else None,
        "rule": localize_rule(result.rule, locale) if result.rule else None,
    }
    if drug.travel_rules and drug.travel_rules.general_advice:
        data["generalAdvice"] = resolve_text(drug.travel_rules.general_advice, locale)
    return _compact(data)


def localize_category(category: Category, locale: str = DEFAULT_LOCALE) -> dict[str, Any]:
    return _compact({
        "id": category.id,
        "drugClass": category.drug_class,
        "name": resolve_text(category.name, locale),
        "description": _t(category.description, locale),
        "mechanism": _t(category.mechanism, locale),
        "wikipediaUrl": category.wikipedia_url.for_locale(locale) if category.wikipedia_url else None,
        "commonBrands": list(category.common_brands),
        "notes": _t(category.notes, locale),
        "drugs": list(category.drugs),
    })


def localize_drug_class(drug_class: DrugClassInfo, locale: str = DEFAULT_LOCALE) -> dict[str, Any]:
    return _compact({
        "id": drug_class.id,
        "name": resolve_text(drug_class.name, locale),
        "description": _t(drug_class.description, locale),
        "wikipediaUrl": drug_class.wikipedia_url.for_locale(locale) if drug_class.wikipedia_url else None,
        "categories": list(drug_class.categories),
    })


def localize_term(term: Term, locale: str = DEFAULT_LOCALE) -> dict[str, Any]:
    return _compact({
        "id": term.id,
        "name": resolve_text(term.name, locale),
        "description": _t(term.description, locale),
        "wikiUrl": term.wiki_url,
    })
