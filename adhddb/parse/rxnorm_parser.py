"""RxNav 응답 → rxnormData 블록 변환"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from adhddb.models import BrandMapping, RelatedDrug, RxcuiMapping, RxNormData, RxNormSynonym

# 용어 유형(TTY) 설명
TTY_DESCRIPTIONS = {
    "IN": "Base ingredient",
    "PIN": "Precise ingredient (includes salt form)",
    "MIN": "Multiple ingredients",
    "SCDC": "Ingredient + strength",
    "SCDF": "Ingredient + dose form",
    "SCDG": "Dose form group",
    "SCD": "Clinical drug (ingredient + strength + form)",
    "SBDC": "Branded ingredient + strength",
    "SBDF": "Branded ingredient + dose form",
    "SBDG": "Branded dose form group",
    "SBD": "Branded drug (brand + strength + form)",
    "BN": "Brand name",
    "GPCK": "Generic pack",
    "BPCK": "Brand pack",
}

# rxcuiMappings에 포함할 TTY
MAPPED_TTYS = ("PIN", "SCD", "SBD", "SCDF", "SBDF", "BN")

# 제형별 관련 약물 최대 수
MAX_RELATED_PER_TYPE = 20


class RxNormParser:
    """RxNav 조회 결과를 RxNormData 모델로 조립"""

    def build(
        self,
        ingredient: dict[str, Any],
        all_related: dict[str, list[dict[str, Any]]],
        extra_brands: Optional[dict[str, str]] = None,
        today: Optional[date] = None,
    ) -> RxNormData:
        """
        RxNormData 생성

        Args:
            ingredient: 성분 개념 {"rxcui", "name", "tty"}
            all_related: TTY → 개념 목록 (RxNavClient.get_all_related 결과)
            extra_brands: RxNorm BN에 없는 상표명 → RxCUI (없으면 "")
            today: 기준일

        Returns:
            RxNormData
        """
        ingredient_rxcui = str(ingredient.get("rxcui", ""))
        ingredient_name = ingredient.get("name", "")
        ingredient_tty = ingredient.get("tty", "IN")

        # RxCUI 매핑 (성분 자신 + 주요 TTY, 중복 RxCUI 제외)
        mappings = [RxcuiMapping(
            rxcui=ingredient_rxcui,
            name=ingredient_name,
            tty=ingredient_tty,
            description=TTY_DESCRIPTIONS.get(ingredient_tty),
        )]
        seen = {ingredient_rxcui}
        for tty in MAPPED_TTYS:
            for concept in all_related.get(tty, []):
                rxcui = str(concept.get("rxcui", ""))
                if rxcui in seen:
                    continue
                seen.add(rxcui)
                concept_tty = concept.get("tty", tty)
                mappings.append(RxcuiMapping(
                    rxcui=rxcui,
                    name=concept.get("name", ""),
                    tty=concept_tty,
                    description=TTY_DESCRIPTIONS.get(concept_tty),
                ))

        # 상표 (RxNorm은 미국 중심)
        brand_concepts = all_related.get("BN", [])
        brands = [
            BrandMapping(brand_name=b.get("name", ""), rxcui=str(b.get("rxcui", "")), region="US")
            for b in brand_concepts
        ]
        known = {b.brand_name.lower() for b in brands}
        for name, rxcui in (extra_brands or {}).items():
            if name.lower() not in known:
                brands.append(BrandMapping(brand_name=name, rxcui=rxcui, region="US"))
                known.add(name.lower())

        # 동의어: 염 형태(PIN) → 상표 → 성분명
        synonyms = [
            RxNormSynonym(name=p.get("name", ""), type="chemical", source="RxNorm")
            for p in all_related.get("PIN", [])
            if p.get("name") != ingredient_name
        ]
        synonyms += [
            RxNormSynonym(name=b.get("name", ""), type="brand", source="RxNorm")
            for b in brand_concepts
        ]
        synonyms.append(RxNormSynonym(name=ingredient_name, type="generic", source="RxNorm"))

        related = (
            self._related(all_related.get("SCD", [])[:MAX_RELATED_PER_TYPE], "clinical_drug")
            + self._related(all_related.get("SBD", [])[:MAX_RELATED_PER_TYPE], "branded_drug")
            + self._related(all_related.get("SCDF", []), "drug_form")
        )

        return RxNormData(
            ingredient_rxcui=ingredient_rxcui,
            ingredient_name=ingredient_name,
            rxcui_mappings=tuple(mappings),
            brand_mappings=tuple(brands),
            synonyms=tuple(synonyms),
            related_drugs=tuple(related),
            last_updated=(today or date.today()).isoformat(),
        )

    @staticmethod
    def _related(concepts: list[dict[str, Any]], relationship: str) -> list[RelatedDrug]:
        return [
            RelatedDrug(
                rxcui=str(c.get("rxcui", "")),
                name=c.get("name", ""),
                tty=c.get("tty", ""),
                relationship=relationship,
            )
            for c in concepts
        ]
