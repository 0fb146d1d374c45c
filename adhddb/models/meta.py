"""메타 데이터 모델 (카테고리, 약물 분류, 지역, 용어집)"""

from typing import Optional

from pydantic import ConfigDict, Field

from adhddb.i18n.localized import LocalizedString, LocalizedText, locale_code
from adhddb.models.drug import RecordModel


class WikipediaUrls(RecordModel):
    """로케일별 위키백과 링크"""
    en: Optional[str] = None
    zh: Optional[str] = None
    zh_tw: Optional[str] = Field(None, alias="zh-TW")
    ja: Optional[str] = None

    def for_locale(self, locale: str) -> Optional[str]:
        """요청 로케일 링크, 없으면 영문 링크"""
        code = locale_code(locale)
        value = {"en": self.en, "zh": self.zh, "zh-TW": self.zh_tw, "ja": self.ja}.get(code)
        return value or self.en


class Category(RecordModel):
    """약물 카테고리 (methylphenidate, amphetamine, ...)"""
    id: str
    drug_class: str = ""
    name: LocalizedText = ""
    description: Optional[LocalizedText] = None
    mechanism: Optional[LocalizedText] = None
    wikipedia_url: Optional[WikipediaUrls] = None
    common_brands: tuple[str, ...] = ()
    notes: Optional[LocalizedText] = None
    drugs: tuple[str, ...] = ()


class DrugClassInfo(RecordModel):
    """약물 대분류 (stimulant / non-stimulant)"""
    id: str
    name: LocalizedText = ""
    description: Optional[LocalizedText] = None
    wikipedia_url: Optional[WikipediaUrls] = None
    categories: tuple[str, ...] = ()


class Region(RecordModel):
    """규제 지역"""

    model_config = ConfigDict(extra="allow")

    code: str
    name: LocalizedText = ""
    agency: Optional[str] = None
    agency_name: Optional[LocalizedString] = None


class Term(RecordModel):
    """용어집 항목"""
    id: str
    name: LocalizedText = ""
    description: Optional[LocalizedText] = None
    wiki_url: Optional[str] = None
