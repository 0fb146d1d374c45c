"""출력 변환 테스트 (로케일 투영, llms.txt)"""

from datetime import datetime

import pytest

from adhddb.report import (
    format_drug,
    localize_drug,
    localize_drug_summary,
    localize_travel_status,
    render_llms_full,
    render_llms_txt,
)
from adhddb.travel import infer_travel_status


class TestLocalize:
    def test_summary(self, methylphenidate):
        data = localize_drug_summary(methylphenidate, "zh")
        assert data["genericName"] == "哌甲酯"
        assert data["availableRegions"] == ["US", "JP", "CN"]
        assert "schedule" not in data

    def test_detail_drops_missing_fields(self, guanfacine):
        data = localize_drug(guanfacine, "en")
        assert "travelRules" not in data
        assert "fdaData" not in data
        assert data["drugInteractions"][0]["drug"] == "Methylphenidate"

    def test_detail_rules(self, methylphenidate):
        rules = localize_drug(methylphenidate, "ja")["travelRules"]["crossBorderRules"]
        assert [(r["fromRegion"], r["toRegion"], r["status"]) for r in rules] == [
            ("US", "JP", "requires_permit"), ("US", "CN", "restricted"),
        ]

    def test_travel_status_inferred(self, amphetamine):
        result = infer_travel_status(amphetamine, "US", "JP")
        data = localize_travel_status(amphetamine, "US", "JP", result, "ja")
        assert data["status"] == "requires_permit"
        assert data["statusLabel"] == "輸入許可が必要"
        assert data["reason"] == "amphetamine_requires_permit_jp"
        assert "輸入許可" in data["reasonText"]
        assert "rule" not in data

    def test_travel_status_general_advice(self, methylphenidate):
        result = infer_travel_status(methylphenidate, "US", "JP")
        data = localize_travel_status(methylphenidate, "US", "JP", result)
        assert data["generalAdvice"] == "Carry a prescription."
        assert "notice" not in data


class TestLlmsTxt:
    @pytest.mark.parametrize("locale", ["en", "zh", "zh-TW", "ja"])
    def test_every_locale_renders(self, bundled_catalog, locale):
        text = render_llms_txt(bundled_catalog, locale)
        assert text.startswith("# ADHD-DB")
        assert "(methylphenidate)" in text
        assert "https://adhd-db.com" in text

    def test_stats(self, bundled_catalog):
        text = render_llms_txt(bundled_catalog, "en")
        assert "- Total Drugs: 7" in text
        assert "- Stimulants: 3" in text
        assert "- Non-Stimulants: 4" in text

    def test_language_links(self, bundled_catalog):
        text = render_llms_txt(bundled_catalog, "zh")
        assert "- English: /\n" in text
        assert "- 日本語: /ja/" in text
        assert "- 繁體中文: /zh-TW/" in text

    def test_invalid_locale(self, bundled_catalog):
        with pytest.raises(ValueError):
            render_llms_txt(bundled_catalog, "fr")

    def test_full_export(self, bundled_catalog):
        text = render_llms_full(bundled_catalog, generated_at=datetime(2025, 1, 15, 9, 0))
        assert "Generated: 2025-01-15T09:00:00" in text
        assert "Regions: US, CN, JP, EU, UK, AU, CA" in text
        assert text.count("\n---\n") >= 7

    def test_format_drug(self, methylphenidate):
        block = format_drug(methylphenidate)
        assert block.startswith("## Methylphenidate")
        assert block.rstrip().endswith("---")
