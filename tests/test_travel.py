"""국경 간 규칙 조회 / 여행 상태 추론 테스트"""

from adhddb.models import TravelStatus
from adhddb.travel import (
    InferenceReason,
    find_cross_border_rule,
    find_duplicate_rules,
    infer_travel_status,
    travel_matrix,
)

from conftest import make_drug


# =============================================================================
# 규칙 조회
# =============================================================================

class TestFindCrossBorderRule:
    def test_match(self, methylphenidate):
        rule = find_cross_border_rule(methylphenidate, "US", "JP")
        assert rule is not None
        assert rule.status == TravelStatus.REQUIRES_PERMIT

    def test_direction_matters(self, methylphenidate):
        assert find_cross_border_rule(methylphenidate, "JP", "US") is None

    def test_no_travel_rules(self, guanfacine):
        assert find_cross_border_rule(guanfacine, "US", "JP") is None

    def test_first_duplicate_wins(self):
        drug = make_drug(travelRules={"crossBorderRules": [
            {"fromRegion": "US", "toRegion": "JP", "status": "allowed"},
            {"fromRegion": "US", "toRegion": "JP", "status": "prohibited"},
        ]})
        assert find_cross_border_rule(drug, "US", "JP").status == TravelStatus.ALLOWED
        assert find_duplicate_rules(drug) == [("US", "JP")]

    def test_no_duplicates(self, methylphenidate):
        assert find_duplicate_rules(methylphenidate) == []


# =============================================================================
# 추론
# =============================================================================

class TestInferTravelStatus:
    def test_authored_rule_wins(self, methylphenidate):
        result = infer_travel_status(methylphenidate, "US", "JP")
        assert result.status == TravelStatus.REQUIRES_PERMIT
        assert result.inferred is False
        assert result.reason is None
        assert result.rule is not None

    def test_authored_rule_beats_amphetamine_override(self):
        drug = make_drug(
            category="amphetamine",
            controlledSubstance=True,
            travelRules={"crossBorderRules": [
                {"fromRegion": "US", "toRegion": "JP", "status": "prohibited"},
            ]},
        )
        result = infer_travel_status(drug, "US", "JP")
        assert result.status == TravelStatus.PROHIBITED
        assert result.inferred is False

    def test_amphetamine_to_china_prohibited(self, amphetamine):
        result = infer_travel_status(amphetamine, "US", "CN")
        assert result.status == TravelStatus.PROHIBITED
        assert result.inferred is True
        assert result.reason == InferenceReason.AMPHETAMINE_PROHIBITED_CN

    def test_amphetamine_to_japan_requires_permit(self, amphetamine):
        result = infer_travel_status(amphetamine, "CA", "JP")
        assert result.status == TravelStatus.REQUIRES_PERMIT
        assert result.reason == InferenceReason.AMPHETAMINE_REQUIRES_PERMIT_JP

    def test_amphetamine_override_ignores_controlled_flag(self):
        drug = make_drug(category="amphetamine", controlledSubstance=False)
        assert infer_travel_status(drug, "US", "CN").status == TravelStatus.PROHIBITED

    def test_controlled_not_approved(self, amphetamine):
        result = infer_travel_status(amphetamine, "US", "EU")
        assert result.status == TravelStatus.RESTRICTED
        assert result.reason == InferenceReason.CONTROLLED_NOT_APPROVED

    def test_controlled_available_only_when_flag_true(self):
        drug = make_drug(
            controlledSubstance=True,
            approvals=[{"region": "EU", "available": False}],
        )
        result = infer_travel_status(drug, "US", "EU")
        assert result.reason == InferenceReason.CONTROLLED_NOT_APPROVED

    def test_controlled_and_approved(self, methylphenidate):
        result = infer_travel_status(methylphenidate, "JP", "US")
        assert result.status == TravelStatus.RESTRICTED
        assert result.inferred is True
        assert result.reason == InferenceReason.CONTROLLED_SUBSTANCE

    def test_controlled_other_category_approved_only_in_eu(self):
        drug = make_drug(
            category="stimulant-other",
            controlledSubstance=True,
            approvals=[{"region": "EU", "available": True}],
        )

        to_eu = infer_travel_status(drug, "US", "EU")
        assert to_eu.status == TravelStatus.RESTRICTED
        assert to_eu.reason == InferenceReason.CONTROLLED_SUBSTANCE

        to_jp = infer_travel_status(drug, "US", "JP")
        assert to_jp.status == TravelStatus.RESTRICTED
        assert to_jp.reason == InferenceReason.CONTROLLED_NOT_APPROVED

    def test_non_controlled_allowed(self, guanfacine):
        result = infer_travel_status(guanfacine, "US", "CN")
        assert result.status == TravelStatus.ALLOWED
        assert result.inferred is True
        assert result.reason == InferenceReason.NON_CONTROLLED

    def test_unknown_region_non_controlled(self, guanfacine):
        result = infer_travel_status(guanfacine, "XX", "YY")
        assert result.status == TravelStatus.ALLOWED
        assert result.reason == InferenceReason.NON_CONTROLLED

    def test_unknown_destination_for_controlled_drug(self, methylphenidate):
        # 승인 목록에 없는 지역은 미승인으로 본다
        result = infer_travel_status(methylphenidate, "US", "XX")
        assert result.reason == InferenceReason.CONTROLLED_NOT_APPROVED

    def test_deterministic(self, amphetamine):
        first = infer_travel_status(amphetamine, "US", "CN")
        second = infer_travel_status(amphetamine, "US", "CN")
        assert first == second


class TestTravelMatrix:
    def test_excludes_same_region(self, methylphenidate):
        matrix = travel_matrix(methylphenidate, ["US", "JP", "CN"])
        assert len(matrix) == 6
        assert ("US", "US") not in matrix

    def test_entries_match_single_lookup(self, amphetamine):
        matrix = travel_matrix(amphetamine, ["US", "CN", "JP", "CA"])
        for (src, dst), result in matrix.items():
            assert result == infer_travel_status(amphetamine, src, dst)
        assert matrix[("US", "CA")].inferred is False


# =============================================================================
# 번들 데이터 시나리오
# =============================================================================

class TestBundledScenarios:
    def test_methylphenidate_us_to_japan(self, bundled_catalog):
        drug = bundled_catalog.get("methylphenidate")
        result = infer_travel_status(drug, "US", "JP")
        assert result.status == TravelStatus.REQUIRES_PERMIT
        assert result.inferred is False

    def test_adderall_us_to_china(self, bundled_catalog):
        drug = bundled_catalog.get("amphetamine-mixed-salts")
        result = infer_travel_status(drug, "US", "CN")
        assert result.status == TravelStatus.PROHIBITED
        assert result.reason == InferenceReason.AMPHETAMINE_PROHIBITED_CN

    def test_atomoxetine_anywhere_allowed(self, bundled_catalog):
        drug = bundled_catalog.get("atomoxetine")
        for (_, _), result in travel_matrix(drug, bundled_catalog.region_codes).items():
            assert result.status == TravelStatus.ALLOWED

    def test_lisdexamfetamine_to_china(self, bundled_catalog):
        drug = bundled_catalog.get("lisdexamfetamine")
        assert infer_travel_status(drug, "UK", "CN").status == TravelStatus.PROHIBITED
