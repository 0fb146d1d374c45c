"""LLM용 텍스트 내보내기 (llms.txt, llms-full.txt)"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from adhddb.api.deps import get_catalog, validate_locale
from adhddb.i18n import DEFAULT_LOCALE
from adhddb.report import render_llms_full, render_llms_txt
from adhddb.store import DrugCatalog

router = APIRouter()


@router.get("/llms.txt", response_class=PlainTextResponse)
def llms_txt(catalog: DrugCatalog = Depends(get_catalog)):
    """기본 로케일 llms.txt"""
    return render_llms_txt(catalog, DEFAULT_LOCALE)


@router.get("/llms-full.txt", response_class=PlainTextResponse)
def llms_full_txt(catalog: DrugCatalog = Depends(get_catalog)):
    """전체 데이터 내보내기 (모든 로케일)"""
    return render_llms_full(catalog)


@router.get("/{lang}/llms.txt", response_class=PlainTextResponse)
def localized_llms_txt(lang: str, catalog: DrugCatalog = Depends(get_catalog)):
    """로케일별 llms.txt"""
    return render_llms_txt(catalog, validate_locale(lang))
