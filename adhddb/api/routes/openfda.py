"""OpenFDA 실시간 조회 API (라벨, 이상사례)"""

import logging

from datetime import date
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query

from adhddb.api.deps import get_catalog, get_locale, get_openfda_client
from adhddb.i18n.messages import INTERACTION_DISCLAIMER
from adhddb.ingest import OpenFDAClient, get_mapping
from adhddb.ingest.mappings import DRUG_SOURCE_MAPPINGS
from adhddb.interactions import curated_interactions_for
from adhddb.models import Severity
from adhddb.parse import FAERSParser, OpenFDALabelParser, clean_label_text
from adhddb.store import DrugCatalog

logger = logging.getLogger(__name__)

router = APIRouter()

LABEL_LIMIT = 10
INTERACTION_TEXT_LIMIT = 3000
NO_FDA_INTERACTION_TEXT = "No FDA interaction data available"


def _mapping_or_404(drug_id: str):
    mapping = get_mapping(drug_id)
    if mapping is None:
        available = ", ".join(m.drug_id for m in DRUG_SOURCE_MAPPINGS)
        raise HTTPException(
            status_code=404,
            detail=f'Drug "{drug_id}" is not supported. Available drugs: {available}',
        )
    return mapping


def _format_label(drug_id: str, label: dict, total: int, meta: dict) -> dict:
    """병합 라벨 → 응답 구조 (섹션별 그룹)"""
    pharm = label.get("pharmacologic_class") or {}
    return {
        "drugId": drug_id,
        "fdaReferences": {
            "applicationNumber": label.get("application_number"),
            "splSetId": label.get("spl_set_id"),
            "splId": label.get("spl_id"),
            "rxcui": label.get("rxcui") or [],
        },
        "names": {
            "brandNames": label.get("brand_names") or [],
            "genericName": label.get("generic_name"),
            "manufacturers": label.get("manufacturers") or [],
        },
        "pharmacologicClass": {
            "mechanismOfAction": pharm.get("mechanism_of_action") or [],
            "establishedClass": pharm.get("established_class") or [],
            "physiologicEffect": pharm.get("physiologic_effect") or [],
        },
        "clinicalInfo": {
            "indicationsAndUsage": label.get("indications_and_usage"),
            "dosageAndAdministration": label.get("dosage_and_administration"),
            "contraindications": label.get("contraindications"),
        },
        "safetyInfo": {
            "boxedWarning": label.get("boxed_warning"),
            "warningsAndPrecautions": label.get("warnings_and_precautions"),
            "adverseReactions": label.get("adverse_reactions"),
            "drugInteractions": label.get("drug_interactions"),
        },
        "abuseAndDependence": {
            "controlledSubstanceClass": label.get("controlled_substance_class"),
            "abuse": label.get("abuse_info"),
            "dependence": label.get("dependence_info"),
        },
        "specialPopulations": {
            "pediatricUse": label.get("pediatric_use"),
            "geriatricUse": label.get("geriatric_use"),
            "pregnancy": label.get("pregnancy_info"),
        },
        "pharmacology": {
            "mechanismOfAction": label.get("mechanism_of_action"),
            "pharmacokinetics": label.get("pharmacokinetics"),
        },
        "metadata": {
            "effectiveDate": label.get("effective_date"),
            "totalLabelsFound": total,
            "lastUpdated": meta.get("last_updated"),
            "source": "OpenFDA Drug Label API",
            "disclaimer": meta.get("disclaimer"),
        },
    }


@router.get("/labels/{drug_id}")
async def get_label(
    drug_id: str,
    client: OpenFDAClient = Depends(get_openfda_client),
):
    """약물 라벨 (여러 라벨 병합, 최고 점수 라벨 기준)"""
    mapping = _mapping_or_404(drug_id)
    parser = OpenFDALabelParser()

    try:
        async with client:
            response = await client.search_drug_labels(mapping.generic_name, limit=LABEL_LIMIT)
    except httpx.HTTPError as e:
        logger.error(f"[OpenFDA] 라벨 조회 실패 ({drug_id}): {e}")
        raise HTTPException(status_code=502, detail="Failed to fetch FDA label data")

    labels = parser.parse_many(response.get("results") or [])
    merged = parser.merge_labels(labels)
    if merged is None:
        raise HTTPException(status_code=404, detail=f'No FDA label found for "{drug_id}"')

    return {"data": _format_label(drug_id, merged, len(labels), response.get("meta") or {})}


@router.get("/adverse-events/{drug_id}")
async def get_adverse_events(
    drug_id: str,
    client: OpenFDAClient = Depends(get_openfda_client),
):
    """FAERS 이상사례 요약"""
    mapping = _mapping_or_404(drug_id)
    name = mapping.generic_name

    try:
        async with client:
            total = await client.get_total_report_count(name)
            serious = await client.get_total_report_count(name, serious=True)
            reactions = await client.get_reaction_counts(name)
            ages = await client.get_age_counts(name)
            sexes = await client.get_sex_counts(name)
            outcomes = await client.get_outcome_counts(name)
    except httpx.HTTPError as e:
        logger.error(f"[OpenFDA] 이상사례 조회 실패 ({drug_id}): {e}")
        raise HTTPException(status_code=502, detail="Failed to fetch adverse event data")

    summary = FAERSParser().build_summary(total, serious, reactions, ages, sexes, outcomes)
    data = summary.model_dump(by_alias=True, exclude_none=True, mode="json")
    data["drugId"] = drug_id
    return {"data": data}


async def _fetch_interaction_text(client: OpenFDAClient, generic_name: str) -> Optional[str]:
    """라벨 drug_interactions 섹션 (조회 실패 시 None)"""
    try:
        async with client:
            response = await client.search_drug_labels(generic_name, limit=1)
    except httpx.HTTPError as e:
        logger.warning(f"[OpenFDA] 상호작용 라벨 조회 실패 ({generic_name}): {e}")
        return None

    results = response.get("results") or []
    if not results:
        return None
    return clean_label_text(
        results[0].get("drug_interactions"), max_length=INTERACTION_TEXT_LIMIT,
    )


@router.get("/interactions")
async def get_interactions(
    drug: Optional[str] = Query(None, description="약물 ID"),
    check: Optional[str] = Query(None, description="확인할 약물/약물군 (부분일치)"),
    lang: str = Depends(get_locale),
    catalog: DrugCatalog = Depends(get_catalog),
    client: OpenFDAClient = Depends(get_openfda_client),
):
    """
    약물별 알려진 상호작용 + FDA 라벨 상호작용 섹션

    check가 있으면 상대 물질명/약물군 코드/예시 약물로 걸러내고 경고 요약을 붙인다.
    FDA 조회가 실패해도 큐레이션 결과는 그대로 반환한다.
    """
    if not drug:
        available = ", ".join(m.drug_id for m in DRUG_SOURCE_MAPPINGS)
        raise HTTPException(
            status_code=400,
            detail=f"Missing required parameter: drug. Available drugs: {available}",
        )
    mapping = _mapping_or_404(drug)
    record = catalog.get(drug)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Drug not found: {drug}")

    known = curated_interactions_for(record)
    if check:
        known = [i for i in known if i.matches(check)]

    fda_text = await _fetch_interaction_text(client, mapping.generic_name)
    match_found = bool(check and fda_text and check.strip().lower() in fda_text.lower())

    data = {
        "drugId": drug,
        "drugName": mapping.generic_name,
        "query": check,
        "interactions": {
            "known": [i.localize(lang) for i in known],
            "total": len(known),
        },
        "fdaLabelInfo": {
            "hasInteractionData": fda_text is not None,
            "matchFound": match_found,
            "text": fda_text or NO_FDA_INTERACTION_TEXT,
        },
        "metadata": {
            "source": "OpenFDA Drug Label API + Curated Database",
            "lastUpdated": date.today().isoformat(),
            "disclaimer": INTERACTION_DISCLAIMER,
        },
    }

    if check:
        major = [i for i in known if i.severity == Severity.MAJOR]
        moderate = [i for i in known if i.severity == Severity.MODERATE]
        lead = (major or known or [None])[0]
        recommendation = (
            lead.localize(lang).get("recommendation") if lead else None
        ) or "No known significant interactions found"
        data["warnings"] = {
            "majorInteractions": len(major),
            "moderateInteractions": len(moderate),
            "recommendation": recommendation,
        }

    return {"data": data}
