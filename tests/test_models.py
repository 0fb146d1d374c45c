"""약물 레코드 모델 테스트"""

import datetime

import pytest
from pydantic import ValidationError

from adhddb.i18n import LocalizedString, resolve_text
from adhddb.models import DrugRecord, TravelStatus

from conftest import make_drug


class TestDrugRecord:
    def test_camel_case_keys(self, methylphenidate):
        assert methylphenidate.controlled_substance is True
        assert methylphenidate.brand_names["US"] == ("Ritalin", "Concerta")
        assert methylphenidate.travel_rules.general_advice.en == "Carry a prescription."

    def test_snake_case_names_accepted(self):
        drug = DrugRecord(id="x", drug_class="stimulant", controlled_substance=True)
        assert drug.controlled_substance is True

    def test_legacy_string_and_localized_map(self):
        legacy = make_drug(genericName="Clonidine")
        localized = make_drug(genericName={"en": "Clonidine", "zh": "可乐定"})
        assert isinstance(legacy.generic_name, str)
        assert isinstance(localized.generic_name, LocalizedString)
        assert resolve_text(localized.generic_name, "zh") == "可乐定"

    def test_unknown_drug_class_passes(self):
        assert make_drug(drugClass="herbal").drug_class == "herbal"

    def test_unknown_keys_preserved_in_extra(self):
        drug = make_drug(customField={"a": 1})
        assert drug.extra == {"customField": {"a": 1}}

    def test_null_flag_reads_as_false(self):
        drug = DrugRecord.model_validate({"id": "x", "controlledSubstance": None})
        assert drug.controlled_substance is False

    def test_null_lists_read_as_empty(self):
        drug = DrugRecord.model_validate({
            "id": "x",
            "approvals": None,
            "drugInteractions": None,
            "travelRules": {"crossBorderRules": None, "requiredDocumentation": None},
        })
        assert drug.approvals == ()
        assert drug.drug_interactions == ()
        assert drug.travel_rules.cross_border_rules == ()
        assert drug.travel_rules.required_documentation == ()

    def test_null_approval_availability(self):
        drug = make_drug(approvals=[{"region": "EU", "available": None}])
        assert drug.approvals[0].available is False

    def test_frozen(self, methylphenidate):
        with pytest.raises(ValidationError):
            methylphenidate.id = "other"

    def test_invalid_travel_status_rejected(self):
        with pytest.raises(ValidationError):
            make_drug(travelRules={"crossBorderRules": [
                {"fromRegion": "US", "toRegion": "JP", "status": "banned"},
            ]})

    def test_missing_id_rejected(self):
        with pytest.raises(ValidationError):
            DrugRecord.model_validate({"genericName": "x"})

    def test_yaml_dates_become_strings(self):
        drug = make_drug(lastUpdated=datetime.date(2025, 1, 15))
        assert drug.last_updated == "2025-01-15"

    def test_available_regions(self, amphetamine):
        assert amphetamine.available_regions == ["US", "CA"]
        assert amphetamine.is_available_in("US")
        assert not amphetamine.is_available_in("JP")
        assert not amphetamine.is_available_in("CN")

    def test_cross_border_rules_property(self, methylphenidate, guanfacine):
        assert [r.status for r in methylphenidate.cross_border_rules] == [
            TravelStatus.REQUIRES_PERMIT, TravelStatus.RESTRICTED,
        ]
        assert guanfacine.cross_border_rules == ()

    def test_substance_key(self, methylphenidate):
        assert [e.substance_key for e in methylphenidate.drug_interactions] == [
            "MAO inhibitors", "Guanfacine",
        ]
