"""다국어 필드 모델 및 해석기

YAML 레코드의 다국어 필드는 두 가지 형태를 가진다.
- 레거시: 단일 문자열 (``"Methylphenidate"``)
- 신규: 로케일 맵 (``{en: ..., zh: ..., zh-TW: ..., ja: ...}``)

pydantic이 파싱 시점에 ``str`` 또는 ``LocalizedString`` 으로 확정하므로
해석 함수는 값의 모양을 추측하지 않고 타입으로만 분기한다.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Locale(str, Enum):
    """지원 로케일"""
    EN = "en"
    ZH = "zh"          # 简体中文
    ZH_TW = "zh-TW"    # 繁體中文
    JA = "ja"          # 日本語


DEFAULT_LOCALE = Locale.EN

# "아무 값이라도" 단계에서 사용하는 탐색 순서
LOCALE_ORDER: tuple[Locale, ...] = (Locale.EN, Locale.ZH, Locale.ZH_TW, Locale.JA)

LOCALE_NAMES = {
    Locale.EN: "English",
    Locale.ZH: "简体中文",
    Locale.ZH_TW: "繁體中文",
    Locale.JA: "日本語",
}


def locale_code(locale) -> str:
    """Locale 또는 문자열 → 로케일 코드 문자열"""
    if isinstance(locale, Locale):
        return locale.value
    return str(locale)


def is_valid_locale(value: Optional[str]) -> bool:
    """지원 로케일 코드 여부"""
    return value in {loc.value for loc in Locale}


def parse_locale(value: Optional[str]) -> Locale:
    """로케일 문자열 → Locale (None이면 기본 로케일)

    Raises:
        ValueError: 지원하지 않는 로케일
    """
    if value is None or value == "":
        return DEFAULT_LOCALE
    return Locale(value)


class _LocaleMap(BaseModel):
    """로케일 맵 공통 동작"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def get(self, locale: str):
        """로케일 코드로 값 조회 (미지원 코드는 None)"""
        field_name = _FIELD_BY_LOCALE.get(locale_code(locale))
        if field_name is None:
            return None
        return getattr(self, field_name)

    def first_present(self):
        """LOCALE_ORDER 순서로 처음 채워진 값"""
        for locale in LOCALE_ORDER:
            value = self.get(locale)
            if value:
                return value
        return None


class LocalizedString(_LocaleMap):
    """로케일별 문자열"""
    en: Optional[str] = None
    zh: Optional[str] = None
    zh_tw: Optional[str] = Field(None, alias="zh-TW")
    ja: Optional[str] = None


class LocalizedStringList(_LocaleMap):
    """로케일별 문자열 목록"""
    en: Optional[list[str]] = None
    zh: Optional[list[str]] = None
    zh_tw: Optional[list[str]] = Field(None, alias="zh-TW")
    ja: Optional[list[str]] = None


_FIELD_BY_LOCALE = {
    Locale.EN.value: "en",
    Locale.ZH.value: "zh",
    Locale.ZH_TW.value: "zh_tw",
    Locale.JA.value: "ja",
}

LocalizedText = Union[str, LocalizedString]
LocalizedList = Union[list[str], LocalizedStringList]


def _resolve(value: _LocaleMap, locale: str):
    locale = locale_code(locale)

    # 번체 → 간체 폴백 (영어보다 간체가 번체 독자에게 유용)
    if locale == Locale.ZH_TW.value and not value.zh_tw and value.zh:
        return value.zh

    return (
        value.get(locale)
        or value.get(DEFAULT_LOCALE)
        or value.en
        or value.first_present()
    )


def resolve_text(value: Optional[LocalizedText], locale: str = DEFAULT_LOCALE) -> str:
    """
    다국어 문자열 해석

    Args:
        value: 문자열 또는 LocalizedString (없으면 None)
        locale: 요청 로케일

    Returns:
        요청 로케일 → (zh-TW면 zh) → en → 아무 값 순서로 찾은 문자열, 없으면 ""
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return _resolve(value, locale) or ""


def resolve_list(value: Optional[LocalizedList], locale: str = DEFAULT_LOCALE) -> list[str]:
    """다국어 목록 해석 (resolve_text와 동일한 폴백, 없으면 [])"""
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return list(_resolve(value, locale) or [])


def resolve_optional(value: Optional[LocalizedText], locale: str = DEFAULT_LOCALE) -> Optional[str]:
    """필드가 없으면 None, 있으면 resolve_text 결과 (API 응답용)"""
    if value is None:
        return None
    return resolve_text(value, locale)


def resolve_optional_list(
    value: Optional[LocalizedList], locale: str = DEFAULT_LOCALE,
) -> Optional[list[str]]:
    """필드가 없으면 None, 있으면 resolve_list 결과 (API 응답용)"""
    if value is None:
        return None
    return resolve_list(value, locale)
