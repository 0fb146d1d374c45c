"""용어집 API"""

from fastapi import APIRouter, Depends, HTTPException

from adhddb.api.deps import get_catalog, get_locale
from adhddb.api.schemas import DataResponse, ListResponse
from adhddb.report import localize_term
from adhddb.store import DrugCatalog

router = APIRouter()


@router.get("", response_model=ListResponse)
def list_terms(
    lang: str = Depends(get_locale),
    catalog: DrugCatalog = Depends(get_catalog),
):
    """용어 목록 (terms.yaml 순서)"""
    terms = [localize_term(t, lang) for t in catalog.terms]
    return ListResponse(count=len(terms), data=terms)


@router.get("/{term_id}", response_model=DataResponse)
def get_term(
    term_id: str,
    lang: str = Depends(get_locale),
    catalog: DrugCatalog = Depends(get_catalog),
):
    term = catalog.get_term(term_id)
    if term is None:
        raise HTTPException(status_code=404, detail=f"Term not found: {term_id}")
    return DataResponse(data=localize_term(term, lang))
