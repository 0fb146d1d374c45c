"""카테고리 API"""

from fastapi import APIRouter, Depends

from adhddb.api.deps import get_catalog, get_locale
from adhddb.api.schemas import CategoriesResponse, ListResponse
from adhddb.report import localize_category, localize_drug_class
from adhddb.store import DrugCatalog

router = APIRouter()


@router.get("", response_model=CategoriesResponse)
def list_categories(
    lang: str = Depends(get_locale),
    catalog: DrugCatalog = Depends(get_catalog),
):
    """약물 카테고리와 대분류"""
    categories = [localize_category(c, lang) for c in catalog.categories]
    drug_classes = [localize_drug_class(c, lang) for c in catalog.drug_classes]
    return CategoriesResponse(
        categories=ListResponse(count=len(categories), data=categories),
        drugClasses=ListResponse(count=len(drug_classes), data=drug_classes),
    )
