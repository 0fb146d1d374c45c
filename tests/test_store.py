"""YAML 로더 / 카탈로그 테스트"""

import logging

import pytest

from adhddb.config import settings
from adhddb.store import CatalogError, load_catalog, write_yaml
from adhddb.store.loader import load_drugs, load_meta, read_yaml
from adhddb.travel import find_duplicate_rules

DRUG_A = """\
id: drug-a
genericName:
  en: Drug A
drugClass: stimulant
category: methylphenidate
controlledSubstance: true
approvals:
  - region: US
    available: true
lastUpdated: 2025-01-15
"""

DRUG_B = """\
id: drug-b
genericName: Drug B
drugClass: non-stimulant
category: snri
"""


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# =============================================================================
# 로더
# =============================================================================

class TestLoader:
    def test_load_drugs_sorted_by_filename(self, tmp_path):
        write(tmp_path / "drugs" / "b.yaml", DRUG_B)
        write(tmp_path / "drugs" / "a.yaml", DRUG_A)
        write(tmp_path / "drugs" / "README.md", "not yaml")

        drugs = load_drugs(tmp_path / "drugs")
        assert [d.id for d in drugs] == ["drug-a", "drug-b"]
        assert drugs[0].last_updated == "2025-01-15"

    def test_missing_directory_is_empty(self, tmp_path):
        assert load_drugs(tmp_path / "nope") == []

    def test_duplicate_id_rejected(self, tmp_path):
        write(tmp_path / "drugs" / "a.yaml", DRUG_A)
        write(tmp_path / "drugs" / "a2.yml", DRUG_A)
        with pytest.raises(CatalogError, match="drug-a"):
            load_drugs(tmp_path / "drugs")

    def test_invalid_yaml(self, tmp_path):
        path = write(tmp_path / "bad.yaml", "id: [unclosed")
        with pytest.raises(CatalogError, match="bad.yaml"):
            read_yaml(path)

    def test_schema_error(self, tmp_path):
        write(tmp_path / "drugs" / "x.yaml", "genericName: no id here\n")
        with pytest.raises(CatalogError, match="x.yaml"):
            load_drugs(tmp_path / "drugs")

    def test_non_mapping_document(self, tmp_path):
        write(tmp_path / "drugs" / "x.yaml", "- a\n- b\n")
        with pytest.raises(CatalogError):
            load_drugs(tmp_path / "drugs")

    def test_duplicate_rule_warning(self, tmp_path, caplog):
        write(tmp_path / "drugs" / "a.yaml", DRUG_A + (
            "travelRules:\n"
            "  crossBorderRules:\n"
            "    - {fromRegion: US, toRegion: JP, status: allowed}\n"
            "    - {fromRegion: US, toRegion: JP, status: prohibited}\n"
        ))
        with caplog.at_level(logging.WARNING):
            drugs = load_drugs(tmp_path / "drugs")
        assert len(drugs) == 1
        assert "US->JP" in caplog.text

    def test_meta_keys_become_ids(self, tmp_path):
        write(tmp_path / "meta" / "regions.yaml", (
            "regions:\n"
            "  US: {name: {en: United States}, agency: FDA}\n"
            "drugCategories:\n"
            "  stimulant: [methylphenidate]\n"
        ))
        write(tmp_path / "meta" / "terms.yaml", "terms:\n  adhd: {name: ADHD}\n")
        meta = load_meta(tmp_path / "meta")
        assert [r.code for r in meta["regions"]] == ["US"]
        assert meta["drug_categories"] == {"stimulant": ["methylphenidate"]}
        assert [t.id for t in meta["terms"]] == ["adhd"]
        assert meta["categories"] == []

    def test_null_fields_load(self, tmp_path):
        write(tmp_path / "drugs" / "x.yaml", (
            "id: drug-x\n"
            "controlledSubstance:\n"
            "approvals:\n"
            "drugInteractions:\n"
            "travelRules:\n"
            "  crossBorderRules:\n"
        ))
        drug = load_drugs(tmp_path / "drugs")[0]
        assert drug.controlled_substance is False
        assert drug.approvals == ()
        assert drug.cross_border_rules == ()

    def test_default_dirs_follow_settings(self, tmp_path, monkeypatch):
        write(tmp_path / "drugs" / "a.yaml", DRUG_A)
        write(tmp_path / "meta" / "terms.yaml", "terms:\n  adhd: {name: ADHD}\n")
        monkeypatch.setattr(settings, "DATA_DIR", tmp_path)

        catalog = load_catalog()
        assert catalog.drug_ids == ["drug-a"]
        assert catalog.get_term("adhd") is not None

    def test_write_yaml_round_trip(self, tmp_path):
        path = write_yaml(tmp_path / "cache" / "x.yaml", {"genericName": {"zh": "哌甲酯"}})
        assert "哌甲酯" in path.read_text(encoding="utf-8")
        assert read_yaml(path) == {"genericName": {"zh": "哌甲酯"}}


# =============================================================================
# 카탈로그
# =============================================================================

class TestDrugCatalog:
    def test_get(self, sample_catalog):
        assert sample_catalog.get("guanfacine").id == "guanfacine"
        assert sample_catalog.get("nope") is None
        assert "guanfacine" in sample_catalog

    def test_filter_exact_match(self, sample_catalog):
        assert [d.id for d in sample_catalog.filter(drug_class="stimulant")] == [
            "methylphenidate", "amphetamine-mixed-salts",
        ]
        assert [d.id for d in sample_catalog.filter(category="amphetamine")] == [
            "amphetamine-mixed-salts",
        ]
        assert sample_catalog.filter(drug_class="Stimulant") == []

    def test_filter_region_requires_available(self, sample_catalog):
        assert [d.id for d in sample_catalog.filter(region="JP")] == ["methylphenidate"]

    def test_filter_combined(self, sample_catalog):
        items = sample_catalog.filter(drug_class="stimulant", region="CA")
        assert [d.id for d in items] == ["amphetamine-mixed-salts"]

    def test_empty_catalog_from_empty_dir(self, tmp_path):
        catalog = load_catalog(tmp_path)
        assert len(catalog) == 0
        assert catalog.loaded_at is not None


# =============================================================================
# 번들 데이터 품질
# =============================================================================

class TestBundledData:
    def test_all_drugs_load(self, bundled_catalog):
        assert set(bundled_catalog.drug_ids) == {
            "methylphenidate", "amphetamine-mixed-salts", "lisdexamfetamine",
            "atomoxetine", "guanfacine", "clonidine", "viloxazine",
        }

    def test_no_duplicate_rules(self, bundled_catalog):
        for drug in bundled_catalog.drugs:
            assert find_duplicate_rules(drug) == [], drug.id

    def test_drug_classes_known(self, bundled_catalog):
        for drug in bundled_catalog.drugs:
            assert drug.drug_class in ("stimulant", "non-stimulant"), drug.id

    def test_rule_regions_known(self, bundled_catalog):
        codes = set(bundled_catalog.region_codes)
        for drug in bundled_catalog.drugs:
            for rule in drug.cross_border_rules:
                assert rule.from_region in codes, drug.id
                assert rule.to_region in codes, drug.id

    def test_categories_reference_existing_drugs(self, bundled_catalog):
        for category in bundled_catalog.categories:
            for drug_id in category.drugs:
                assert drug_id in bundled_catalog, f"{category.id}: {drug_id}"

    def test_meta_loaded(self, bundled_catalog):
        assert bundled_catalog.region_codes == ["US", "CN", "JP", "EU", "UK", "AU", "CA"]
        assert [c.id for c in bundled_catalog.drug_classes] == ["stimulant", "non-stimulant"]
        assert bundled_catalog.get_term("adhd") is not None
