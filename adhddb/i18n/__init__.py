"""다국어 해석 모듈"""

from .localized import (
    DEFAULT_LOCALE,
    LOCALE_NAMES,
    Locale,
    LocalizedList,
    LocalizedString,
    LocalizedStringList,
    LocalizedText,
    is_valid_locale,
    parse_locale,
    resolve_list,
    resolve_optional,
    resolve_optional_list,
    resolve_text,
)
from .messages import travel_reason_message, travel_status_label

__all__ = [
    "DEFAULT_LOCALE",
    "LOCALE_NAMES",
    "Locale",
    "LocalizedList",
    "LocalizedString",
    "LocalizedStringList",
    "LocalizedText",
    "is_valid_locale",
    "parse_locale",
    "resolve_list",
    "resolve_optional",
    "resolve_optional_list",
    "resolve_text",
    "travel_reason_message",
    "travel_status_label",
]
