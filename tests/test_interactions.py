"""상호작용/영양소 심각도 집계 테스트"""

from datetime import date

import pytest

from adhddb.interactions import (
    CLASS_INTERACTIONS,
    CURATED_INTERACTIONS,
    ClassInteractionHit,
    DrugInteractionResult,
    EvidenceLevel,
    NutrientHit,
    PairInteraction,
    build_interactions_data,
    check_interactions,
    curated_interactions_for,
    find_class_interaction,
    normalize_drug_ids,
    nutrient_warnings_for,
    summarize,
)
from adhddb.models import Severity

from conftest import make_drug


# =============================================================================
# 약물군 조회
# =============================================================================

class TestFindClassInteraction:
    def test_exact_key_case_insensitive(self):
        assert find_class_interaction("ssri").key == "SSRI"
        assert find_class_interaction("MAOI").key == "MAOI"

    def test_label_substring(self):
        assert find_class_interaction("tricyclic").key == "TCA"
        assert find_class_interaction("Beta-Blockers").key == "beta-blocker"

    def test_mixed_case_key(self):
        # "BETA-BLOCKER"는 대문자 키로 없지만 키 대소문자 무시 일치
        assert find_class_interaction("beta-blocker").key == "beta-blocker"

    def test_unknown(self):
        assert find_class_interaction("antihistamine") is None
        assert find_class_interaction("") is None

    def test_table_contents(self):
        assert set(CLASS_INTERACTIONS) == {
            "MAOI", "SSRI", "SNRI", "TCA", "beta-blocker", "CYP2D6", "CYP3A4", "CYP1A2",
        }
        assert CLASS_INTERACTIONS["MAOI"].affects("viloxazine")
        assert not CLASS_INTERACTIONS["SSRI"].affects("viloxazine")


# =============================================================================
# 영양소 경고
# =============================================================================

class TestNutrientWarnings:
    def test_stimulant_gets_vitamin_c_caffeine_alcohol(self, methylphenidate):
        names = [w.nutrient.en for w in nutrient_warnings_for(methylphenidate)]
        assert names == ["Vitamin C", "Caffeine", "Alcohol"]

    def test_guanfacine_gets_grapefruit(self, guanfacine):
        names = [w.nutrient.en for w in nutrient_warnings_for(guanfacine)]
        assert names == ["Grapefruit", "Alcohol"]

    def test_grapefruit_keyed_by_id_not_category(self):
        drug = make_drug(id="clonidine", drugClass="non-stimulant", category="alpha2-agonist")
        names = [w.nutrient.en for w in nutrient_warnings_for(drug)]
        assert names == ["Alcohol"]


# =============================================================================
# 큐레이션 상호작용
# =============================================================================

class TestCuratedInteractions:
    def test_stimulant_gets_common_entries(self, methylphenidate):
        items = curated_interactions_for(methylphenidate)
        assert [i.substance.en for i in items] == [
            "MAO Inhibitors", "Serotonergic Drugs", "Antihypertensive Agents",
            "Proton Pump Inhibitors (PPIs)",
        ]
        assert items[0].severity == Severity.MAJOR
        assert items[-1].evidence_level == EvidenceLevel.PROBABLE

    def test_non_stimulant_gets_only_own_entries(self):
        drug = make_drug(id="atomoxetine", drugClass="non-stimulant", category="snri")
        items = curated_interactions_for(drug)
        assert [i.class_code for i in items] == ["CYP2D6", "MAOI"]

    def test_unknown_non_stimulant_is_empty(self):
        assert curated_interactions_for(make_drug(id="x", drugClass="non-stimulant")) == []

    def test_every_entry_fully_localized(self):
        for items in CURATED_INTERACTIONS.values():
            for item in items:
                for text in (item.substance, item.effect):
                    assert text.en and text.zh and text.ja and text.zh_tw

    def test_matches_class_code_and_examples(self):
        maoi = CURATED_INTERACTIONS["stimulant"][0]
        assert maoi.matches("maoi")
        assert maoi.matches("Selegiline")
        assert maoi.matches("mao inhib")
        assert not maoi.matches("ibuprofen")
        assert not maoi.matches("  ")

    def test_localize(self):
        item = CURATED_INTERACTIONS["clonidine"][0]
        data = item.localize("zh-TW")
        assert data["drug"] == "β受體阻滯劑"
        assert data["drugClass"] == "beta-blocker"
        assert data["source"] == "curated"

    def test_build_interactions_data(self, guanfacine):
        data = build_interactions_data(guanfacine, today=date(2025, 3, 1))
        assert data["lastUpdated"] == "2025-03-01"
        assert len(data["drugInteractions"]) == 3
        first = data["drugInteractions"][0]
        assert first["drug"]["zh-TW"] == "CYP3A4抑制劑"
        assert first["severity"] == "major"
        assert first["evidenceLevel"] == "established"
        assert "clinicalSignificance" not in first
        assert [n["nutrient"]["en"] for n in data["nutrientInteractions"]] == ["Grapefruit", "Alcohol"]
        assert all(c["drugClass"] in CLASS_INTERACTIONS for c in data["commonCoprescribed"])


# =============================================================================
# 집계
# =============================================================================

def _result(*severities: str) -> DrugInteractionResult:
    result = DrugInteractionResult(drug_id="x", drug_name="X", drug_class="stimulant")
    for severity in severities:
        result.nutrient_warnings.append(
            NutrientHit(nutrient="n", nutrient_type="food", effect="e", severity=severity)
        )
    return result


class TestSummarize:
    def test_empty_is_low(self):
        summary = summarize([])
        assert summary.overall_risk == "low"
        assert summary.total_warnings == 0

    def test_minor_only_is_low(self):
        assert summarize([_result("minor", "unknown")]).overall_risk == "low"

    def test_moderate(self):
        summary = summarize([_result("moderate", "minor")])
        assert summary.overall_risk == "moderate"
        assert summary.moderate_interactions == 1
        assert summary.total_warnings == 1

    def test_any_major_is_high(self):
        summary = summarize([_result("moderate"), _result("major")])
        assert summary.overall_risk == "high"
        assert summary.major_interactions == 1
        assert summary.total_warnings == 2

    def test_counts_all_three_sources(self):
        result = _result("moderate")
        result.interactions_with.append(PairInteraction(drug="d", severity="major", effect=""))
        result.class_interactions.append(ClassInteractionHit(class_label="SSRIs", severity="moderate", note=""))
        summary = summarize([result])
        assert summary.major_interactions == 1
        assert summary.moderate_interactions == 2

    @pytest.mark.parametrize("extra", ["major", "moderate", "minor"])
    def test_adding_severity_never_lowers_risk(self, extra):
        order = {"low": 0, "moderate": 1, "high": 2}
        base = [_result("moderate")]
        before = summarize(base).overall_risk
        after = summarize(base + [_result(extra)]).overall_risk
        assert order[after] >= order[before]


class TestNormalizeDrugIds:
    def test_trim_lower_drop_empty(self):
        assert normalize_drug_ids([" Methylphenidate ", "", "GUANFACINE", "  "]) == [
            "methylphenidate", "guanfacine",
        ]


# =============================================================================
# check_interactions
# =============================================================================

class TestCheckInteractions:
    def test_pair_interaction_both_directions(self, sample_catalog):
        report = check_interactions(sample_catalog, ["methylphenidate", "guanfacine"])
        by_id = {r.drug_id: r for r in report.results}

        mph = by_id["methylphenidate"]
        assert [i.drug for i in mph.interactions_with] == ["Guanfacine"]
        assert mph.interactions_with[0].severity == "minor"

        guan = by_id["guanfacine"]
        assert [i.drug for i in guan.interactions_with] == ["Methylphenidate"]

    def test_pair_interaction_localized(self, sample_catalog):
        report = check_interactions(sample_catalog, ["methylphenidate", "guanfacine"], locale="ja")
        mph = report.results[0]
        # 상대 약물명은 로케일 해석, 효과는 ja 없으면 en
        assert mph.interactions_with[0].drug == "グアンファシン"
        assert mph.interactions_with[0].effect == "Commonly co-prescribed"

    def test_class_interaction_with_nutrients(self, sample_catalog):
        report = check_interactions(sample_catalog, ["methylphenidate"], check_class="SSRI")
        result = report.results[0]
        assert result.class_interactions[0].class_label == "SSRIs"
        assert result.class_interactions[0].severity == "moderate"
        # SSRI(moderate) + Vitamin C, Caffeine(moderate) + Alcohol(major)
        assert report.summary.major_interactions == 1
        assert report.summary.moderate_interactions == 3
        assert report.summary.overall_risk == "high"

    def test_class_not_affecting_drug(self, sample_catalog):
        report = check_interactions(sample_catalog, ["guanfacine"], check_class="CYP2D6")
        assert report.results[0].class_interactions == []

    def test_unknown_ids_skipped(self, sample_catalog):
        report = check_interactions(sample_catalog, ["nope", "guanfacine"])
        assert report.drugs == ["nope", "guanfacine"]
        assert [r.drug_id for r in report.results] == ["guanfacine"]

    def test_ids_normalized(self, sample_catalog):
        report = check_interactions(sample_catalog, [" GUANFACINE "])
        assert report.results[0].drug_id == "guanfacine"

    def test_no_results_is_low(self, sample_catalog):
        report = check_interactions(sample_catalog, ["nope"])
        assert report.results == []
        assert report.summary.overall_risk == "low"

    def test_to_dict_shape(self, sample_catalog):
        data = check_interactions(sample_catalog, ["guanfacine"], check_class="MAOI").to_dict()
        assert data["checkClass"] == "MAOI"
        assert set(data["summary"]) == {
            "majorInteractions", "moderateInteractions", "totalWarnings", "overallRisk",
        }
        result = data["results"][0]
        assert result["drugId"] == "guanfacine"
        assert result["nutrientWarnings"][0]["nutrient"] == "Grapefruit"
        assert result["nutrientWarnings"][0]["timing"] == "Avoid completely"

    def test_bundled_scenario(self, bundled_catalog):
        report = check_interactions(
            bundled_catalog, ["amphetamine-mixed-salts"], check_class="MAOI",
        )
        result = report.results[0]
        assert result.class_interactions[0].severity == Severity.MAJOR.value
        assert report.summary.overall_risk == "high"
