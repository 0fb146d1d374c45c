"""ClinicalTrials.gov 실시간 조회 API"""

import logging
from datetime import date, datetime, timezone
from urllib.parse import quote_plus

import httpx
from fastapi import APIRouter, Depends, HTTPException

from adhddb.api.deps import get_catalog, get_ctgov_client, get_locale
from adhddb.i18n import resolve_text
from adhddb.ingest import ClinicalTrialsGovClient, get_mapping
from adhddb.ingest.mappings import DRUG_SOURCE_MAPPINGS
from adhddb.parse import ClinicalTrialsParser
from adhddb.parse.clinicaltrials_parser import SEARCH_URL
from adhddb.store import DrugCatalog

logger = logging.getLogger(__name__)

router = APIRouter()

RECENT_YEARS = 2
NOTABLE_ENROLLMENT = 200
DISCLAIMER = (
    "Clinical trial information is subject to change. "
    "Visit ClinicalTrials.gov for the most current information."
)


def _is_recent(completion: str | None, today: date) -> bool:
    """완료일이 최근 RECENT_YEARS년 이내인지 (YYYY-MM 또는 YYYY-MM-DD)"""
    if not completion:
        return False
    try:
        year, month, *rest = (int(p) for p in completion.split("-"))
    except ValueError:
        return False
    day = rest[0] if rest else 1
    cutoff = (today.year - RECENT_YEARS, today.month, today.day)
    return (year, month, day) >= cutoff


def _is_notable(trial: dict) -> bool:
    return (
        "PHASE3" in (trial.get("phases") or [])
        or (trial.get("enrollment_count") or 0) > NOTABLE_ENROLLMENT
        or bool(trial.get("has_results"))
    )


@router.get("/{drug_id}")
async def get_trials(
    drug_id: str,
    lang: str = Depends(get_locale),
    catalog: DrugCatalog = Depends(get_catalog),
    client: ClinicalTrialsGovClient = Depends(get_ctgov_client),
):
    """약물별 ADHD 임상시험 요약 (모집 중, 진행 중, 최근 완료)"""
    mapping = get_mapping(drug_id)
    if mapping is None:
        raise HTTPException(
            status_code=404,
            detail=(
                f'Drug "{drug_id}" is not supported. Available drugs: '
                + ", ".join(m.drug_id for m in DRUG_SOURCE_MAPPINGS)
            ),
        )

    name = mapping.trial_search_terms[0]
    try:
        async with client:
            recruiting_raw = await client.get_recruiting_trials(name)
            active_raw = await client.get_active_trials(name)
            completed_raw = await client.get_adhd_trials_for_drug(name, ["COMPLETED"], limit=20)
    except httpx.HTTPError as e:
        logger.error(f"[CT.gov] 조회 실패 ({drug_id}): {e}")
        raise HTTPException(status_code=502, detail="Failed to fetch clinical trial data")

    parser = ClinicalTrialsParser()
    recruiting = parser.parse_many(recruiting_raw)
    active = parser.parse_many(active_raw)
    today = date.today()
    recently_completed = [
        t for t in parser.parse_many(completed_raw) if _is_recent(t.get("completion_date"), today)
    ]
    notable = [t for t in recruiting + active if _is_notable(t)][:5]

    drug = catalog.get(drug_id)
    drug_name = resolve_text(drug.generic_name, lang) if drug else name

    return {"data": {
        "drugId": drug_id,
        "drugName": drug_name,
        "summary": {
            "total": len(recruiting) + len(active) + len(recently_completed),
            "recruiting": len(recruiting),
            "active": len(active),
            "recentlyCompleted": len(recently_completed),
        },
        "trials": {
            "recruiting": [parser.format_trial(t) for t in recruiting[:10]],
            "active": [parser.format_trial(t) for t in active[:5]],
            "recentlyCompleted": [parser.format_trial(t) for t in recently_completed[:5]],
            "notable": [parser.format_trial(t) for t in notable],
        },
        "searchUrl": SEARCH_URL.format(term=quote_plus(name)),
        "metadata": {
            "source": "ClinicalTrials.gov API v2",
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
            "disclaimer": DISCLAIMER,
        },
    }}
