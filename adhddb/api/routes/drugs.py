"""약물 조회 API"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from adhddb.api.deps import get_catalog, get_locale
from adhddb.api.schemas import DataResponse, ListResponse
from adhddb.report import localize_drug, localize_drug_summary, localize_travel_status
from adhddb.store import DrugCatalog
from adhddb.travel import infer_travel_status

router = APIRouter()


def _get_drug_or_404(catalog: DrugCatalog, drug_id: str):
    drug = catalog.get(drug_id)
    if drug is None:
        raise HTTPException(status_code=404, detail=f"Drug not found: {drug_id}")
    return drug


@router.get("", response_model=ListResponse)
def list_drugs(
    drug_class: Optional[str] = Query(default=None, alias="class"),
    category: Optional[str] = None,
    region: Optional[str] = None,
    lang: str = Depends(get_locale),
    catalog: DrugCatalog = Depends(get_catalog),
):
    """약물 목록 (class/category/region 정확 일치 필터)"""
    items = catalog.filter(drug_class=drug_class, category=category, region=region)
    return ListResponse(
        count=len(items),
        data=[localize_drug_summary(d, lang) for d in items],
    )


@router.get("/{drug_id}", response_model=DataResponse)
def get_drug_detail(
    drug_id: str,
    lang: str = Depends(get_locale),
    catalog: DrugCatalog = Depends(get_catalog),
):
    """약물 상세"""
    drug = _get_drug_or_404(catalog, drug_id)
    return DataResponse(data=localize_drug(drug, lang))


@router.get("/{drug_id}/travel", response_model=DataResponse)
def get_travel_status(
    drug_id: str,
    from_region: str = Query(..., alias="from", min_length=1),
    to_region: str = Query(..., alias="to", min_length=1),
    lang: str = Depends(get_locale),
    catalog: DrugCatalog = Depends(get_catalog),
):
    """국경 간 휴대 상태 (명시 규칙 또는 추론)"""
    drug = _get_drug_or_404(catalog, drug_id)
    src = from_region.strip().upper()
    dst = to_region.strip().upper()

    result = infer_travel_status(drug, src, dst)
    return DataResponse(data=localize_travel_status(drug, src, dst, result, lang))
