"""RxNav (NLM) RxNorm API 클라이언트

API 문서: https://lhncbc.nlm.nih.gov/RxNav/APIs/
"""

from typing import Any, Optional

import httpx

from adhddb.config import settings
from .base import BaseAPIClient


class RxNavClient(BaseAPIClient):
    """RxNav REST API 클라이언트"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        request_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url=base_url or settings.RXNAV_BASE_URL,
            timeout=timeout,
            request_delay=(
                request_delay if request_delay is not None else settings.RXNAV_REQUEST_DELAY
            ),
            transport=transport,
        )

    def source_type(self) -> str:
        return "RXNAV"

    async def find_rxcui_by_string(self, name: str, exact: bool = False) -> list[str]:
        """
        이름으로 RxCUI 조회

        Args:
            name: 약물명
            exact: True면 정확 일치만 (search=0), 아니면 근사 일치 (search=2)
        """
        data = await self._request("/rxcui.json", {"name": name, "search": 0 if exact else 2})
        return ((data or {}).get("idGroup") or {}).get("rxnormId") or []

    async def get_approximate_match(self, term: str, max_entries: int = 5) -> list[dict[str, str]]:
        """근사 일치 후보 (철자 교정용)"""
        data = await self._request(
            "/approximateTerm.json", {"term": term, "maxEntries": max_entries}
        )
        candidates = ((data or {}).get("approximateGroup") or {}).get("candidate") or []
        return [
            {"rxcui": c.get("rxcui", ""), "score": c.get("score", ""), "rank": c.get("rank", "")}
            for c in candidates
        ]

    async def get_spelling_suggestions(self, name: str) -> list[str]:
        data = await self._request("/spellingsuggestions.json", {"name": name})
        group = (data or {}).get("suggestionGroup") or {}
        return (group.get("suggestionList") or {}).get("suggestion") or []

    async def get_all_properties(self, rxcui: str) -> list[dict[str, str]]:
        """RxCUI 전체 속성 (propName/propValue 목록)"""
        data = await self._request(f"/rxcui/{rxcui}/allProperties.json", {"prop": "all"})
        return ((data or {}).get("propConceptGroup") or {}).get("propConcept") or []

    async def get_property(self, rxcui: str, prop_name: str) -> Optional[str]:
        for prop in await self.get_all_properties(rxcui):
            if prop.get("propName") == prop_name:
                return prop.get("propValue")
        return None

    async def get_related_by_type(self, rxcui: str, tty: list[str]) -> list[dict[str, Any]]:
        """
        TTY별 관련 개념

        Args:
            rxcui: 기준 RxCUI
            tty: 용어 유형 목록 (예: ["IN", "BN"])

        Returns:
            conceptProperties 목록 (그룹 순서대로 평탄화)
        """
        data = await self._request(f"/rxcui/{rxcui}/related.json", {"tty": " ".join(tty)})
        concepts: list[dict[str, Any]] = []
        for group in ((data or {}).get("relatedGroup") or {}).get("conceptGroup") or []:
            concepts.extend(group.get("conceptProperties") or [])
        return concepts

    async def get_all_related(self, rxcui: str) -> dict[str, list[dict[str, Any]]]:
        """전체 관련 개념 (TTY → 개념 목록)"""
        data = await self._request(f"/rxcui/{rxcui}/allrelated.json")
        result: dict[str, list[dict[str, Any]]] = {}
        for group in ((data or {}).get("allRelatedGroup") or {}).get("conceptGroup") or []:
            props = group.get("conceptProperties") or []
            if props:
                result[group.get("tty", "")] = props
        return result

    async def get_ndcs(self, rxcui: str) -> list[str]:
        data = await self._request(f"/rxcui/{rxcui}/ndcs.json")
        return (((data or {}).get("ndcGroup") or {}).get("ndcList") or {}).get("ndc") or []

    async def get_drug_info(self, drug_name: str) -> dict[str, Any]:
        """
        약물명 → 성분 RxCUI, 상표, 임상약물, 제형 일괄 조회

        Returns:
            {"rxcuis", "ingredient", "brand_names", "clinical_drugs", "drug_forms"}
        """
        info: dict[str, Any] = {
            "rxcuis": [],
            "ingredient": None,
            "brand_names": [],
            "clinical_drugs": [],
            "drug_forms": [],
        }

        rxcuis = await self.find_rxcui_by_string(drug_name)
        if not rxcuis:
            return info
        info["rxcuis"] = rxcuis

        ingredients = await self.get_related_by_type(rxcuis[0], ["IN"])
        ingredient = ingredients[0] if ingredients else None

        # 조회된 RxCUI 자체가 성분일 수 있음
        if ingredient is None:
            tty = await self.get_property(rxcuis[0], "TTY")
            if tty in ("IN", "PIN"):
                name = await self.get_property(rxcuis[0], "RxNorm Name")
                ingredient = {"rxcui": rxcuis[0], "name": name or drug_name, "tty": tty}

        if ingredient is None:
            return info

        info["ingredient"] = ingredient
        info["brand_names"] = await self.get_related_by_type(ingredient["rxcui"], ["BN"])
        info["clinical_drugs"] = await self.get_related_by_type(ingredient["rxcui"], ["SCD", "SBD"])
        info["drug_forms"] = await self.get_related_by_type(ingredient["rxcui"], ["SCDF", "SBDF"])
        return info
