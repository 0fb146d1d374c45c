"""다국어 해석 테스트"""

import pytest

from adhddb.i18n import (
    Locale,
    LocalizedString,
    LocalizedStringList,
    is_valid_locale,
    parse_locale,
    resolve_list,
    resolve_optional,
    resolve_text,
)
from adhddb.i18n.messages import travel_reason_message, travel_status_label


def ls(**kwargs) -> LocalizedString:
    return LocalizedString.model_validate(kwargs)


class TestResolveText:
    """폴백 순서: 요청 로케일 → (zh-TW면 zh) → en → 아무 값"""

    def test_plain_string_returned_for_any_locale(self):
        for locale in ("en", "zh", "zh-TW", "ja"):
            assert resolve_text("Methylphenidate", locale) == "Methylphenidate"

    def test_requested_locale(self):
        value = ls(en="Methylphenidate", zh="哌甲酯", ja="メチルフェニデート")
        assert resolve_text(value, "ja") == "メチルフェニデート"
        assert resolve_text(value, "zh") == "哌甲酯"

    def test_zh_tw_falls_back_to_zh_before_en(self):
        value = ls(en="Methylphenidate", zh="哌甲酯")
        assert resolve_text(value, "zh-TW") == "哌甲酯"

    def test_zh_tw_own_value_wins(self):
        value = ls(en="Methylphenidate", zh="哌甲酯", **{"zh-TW": "派醋甲酯"})
        assert resolve_text(value, "zh-TW") == "派醋甲酯"

    def test_missing_locale_falls_back_to_en(self):
        value = ls(en="Methylphenidate", zh="哌甲酯")
        assert resolve_text(value, "ja") == "Methylphenidate"

    def test_any_present_value_when_en_missing(self):
        value = ls(ja="メチルフェニデート")
        assert resolve_text(value, "zh") == "メチルフェニデート"

    def test_empty_string_treated_as_absent(self):
        value = ls(en="Methylphenidate", ja="")
        assert resolve_text(value, "ja") == "Methylphenidate"

    def test_none_and_empty_map(self):
        assert resolve_text(None, "en") == ""
        assert resolve_text(ls(), "ja") == ""

    def test_locale_enum_accepted(self):
        value = ls(en="Methylphenidate", zh="哌甲酯")
        assert resolve_text(value, Locale.ZH) == "哌甲酯"

    def test_resolve_optional(self):
        assert resolve_optional(None, "en") is None
        assert resolve_optional(ls(en="x"), "ja") == "x"


class TestResolveList:
    def test_plain_list(self):
        assert resolve_list(["ADHD", "Narcolepsy"], "ja") == ["ADHD", "Narcolepsy"]

    def test_localized_list_fallback(self):
        value = LocalizedStringList.model_validate({"en": ["ADHD"], "zh": ["注意缺陷多动障碍"]})
        assert resolve_list(value, "zh-TW") == ["注意缺陷多动障碍"]
        assert resolve_list(value, "ja") == ["ADHD"]

    def test_none(self):
        assert resolve_list(None, "en") == []

    def test_result_is_a_copy(self):
        source = ["ADHD"]
        result = resolve_list(source, "en")
        result.append("Narcolepsy")
        assert source == ["ADHD"]


class TestLocaleValidation:
    @pytest.mark.parametrize("code", ["en", "zh", "zh-TW", "ja"])
    def test_supported(self, code):
        assert is_valid_locale(code)

    @pytest.mark.parametrize("code", ["fr", "zh-tw", "EN", "", None])
    def test_unsupported(self, code):
        assert not is_valid_locale(code)

    def test_parse_locale_default(self):
        assert parse_locale(None) == Locale.EN
        assert parse_locale("ja") == Locale.JA

    def test_parse_locale_invalid(self):
        with pytest.raises(ValueError):
            parse_locale("fr")


class TestMessages:
    def test_status_label(self):
        assert travel_status_label("requires_permit", "en") == "Requires Import Permit"
        assert travel_status_label("prohibited", "ja") == "禁止"

    def test_status_label_zh_tw(self):
        assert travel_status_label("allowed", "zh-TW") == "允許"

    def test_unknown_status_passthrough(self):
        assert travel_status_label("banned", "en") == "banned"

    def test_reason_message(self):
        assert "China" in travel_reason_message("amphetamine_prohibited_cn", "en")
        assert travel_reason_message(None, "en") == ""
        assert travel_reason_message("no_such_reason", "en") == ""
