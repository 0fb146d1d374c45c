"""API 의존성 - 카탈로그 로딩, 로케일 검증, 외부 클라이언트"""

from typing import Optional

from fastapi import HTTPException, Query

from adhddb.config import settings
from adhddb.i18n import Locale, is_valid_locale
from adhddb.ingest import ClinicalTrialsGovClient, OpenFDAClient
from adhddb.store import DrugCatalog, load_catalog

LOCALE_ERROR = "Language must be one of: " + ", ".join(loc.value for loc in Locale)

_catalog: Optional[DrugCatalog] = None


def get_catalog() -> DrugCatalog:
    """DrugCatalog 싱글톤 반환 (최초 호출 시 로드)"""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog


def validate_locale(lang: str) -> str:
    """로케일 코드 검증

    Raises:
        HTTPException: 지원하지 않는 로케일 (400)
    """
    if not is_valid_locale(lang):
        raise HTTPException(status_code=400, detail=LOCALE_ERROR)
    return lang


def get_locale(lang: str = Query(default=settings.DEFAULT_LOCALE)) -> str:
    """?lang= 쿼리 파라미터"""
    return validate_locale(lang)


def get_openfda_client() -> OpenFDAClient:
    return OpenFDAClient()


def get_ctgov_client() -> ClinicalTrialsGovClient:
    return ClinicalTrialsGovClient()
