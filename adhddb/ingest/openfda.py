"""OpenFDA API 클라이언트 (약물 라벨, 이상사례 보고)

API 문서: https://open.fda.gov/apis/drug/
"""

from typing import Any, Optional

import httpx

from adhddb.config import settings
from .base import BaseAPIClient


def _empty_response(limit: int = 0) -> dict[str, Any]:
    """결과 없음 응답 (404 대체)"""
    return {"meta": {"results": {"skip": 0, "limit": limit, "total": 0}}, "results": []}


class OpenFDAClient(BaseAPIClient):
    """OpenFDA API 클라이언트"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        request_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url=base_url or settings.OPENFDA_BASE_URL,
            timeout=timeout,
            request_delay=(
                request_delay if request_delay is not None else settings.OPENFDA_REQUEST_DELAY
            ),
            transport=transport,
        )
        self.api_key = api_key or settings.OPENFDA_API_KEY

    def source_type(self) -> str:
        return "OPENFDA"

    async def _query(self, path: str, params: dict[str, Any]) -> Optional[Any]:
        if self.api_key:
            params = {**params, "api_key": self.api_key}
        return await self._request(path, params)

    # ──────────────────────────────────────────────
    # 약물 라벨 (/drug/label)
    # ──────────────────────────────────────────────

    async def search_drug_labels(
        self,
        generic_name: str,
        limit: int = 10,
        skip: int = 0,
    ) -> dict[str, Any]:
        """
        성분명으로 라벨 검색 (generic_name 또는 substance_name)

        Args:
            generic_name: 성분명 (예: "methylphenidate hydrochloride")
            limit: 최대 결과 수
            skip: 건너뛸 결과 수

        Returns:
            API 응답 dict (결과 없으면 빈 results)
        """
        search = (
            f'openfda.generic_name:"{generic_name}" '
            f'OR openfda.substance_name:"{generic_name}"'
        )
        data = await self._query(
            "/drug/label.json", {"search": search, "limit": limit, "skip": skip}
        )
        return data or _empty_response(limit)

    async def get_label_by_application_number(self, application_number: str) -> Optional[dict[str, Any]]:
        """
        NDA/ANDA 번호로 라벨 1건 조회

        Args:
            application_number: 예: "NDA021121"

        Returns:
            라벨 dict, 없으면 None
        """
        data = await self._query(
            "/drug/label.json",
            {"search": f'openfda.application_number:"{application_number}"', "limit": 1},
        )
        results = (data or {}).get("results") or []
        return results[0] if results else None

    # ──────────────────────────────────────────────
    # 이상사례 (/drug/event)
    # ──────────────────────────────────────────────

    @staticmethod
    def _event_search(drug_name: str, serious: Optional[bool] = None) -> str:
        search = f'patient.drug.openfda.generic_name:"{drug_name}"'
        if serious is not None:
            search += f" AND serious:{'1' if serious else '2'}"
        return search

    async def count_adverse_events(
        self,
        drug_name: str,
        count_field: str,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        """
        필드별 보고 건수 집계 (count API)

        Args:
            drug_name: 성분명
            count_field: 집계 필드 (예: "patient.reaction.reactionmeddrapt.exact")
            limit: 최대 항목 수

        Returns:
            [{"term": ..., "count": ...}, ...]
        """
        data = await self._query(
            "/drug/event.json",
            {"search": self._event_search(drug_name), "count": count_field, "limit": limit},
        )
        return (data or {}).get("results") or []

    async def get_reaction_counts(self, drug_name: str, limit: int = 20) -> list[dict[str, Any]]:
        return await self.count_adverse_events(
            drug_name, "patient.reaction.reactionmeddrapt.exact", limit
        )

    async def get_outcome_counts(self, drug_name: str) -> list[dict[str, Any]]:
        return await self.count_adverse_events(drug_name, "patient.reaction.reactionoutcome", 10)

    async def get_age_counts(self, drug_name: str) -> list[dict[str, Any]]:
        return await self.count_adverse_events(drug_name, "patient.patientonsetage", 100)

    async def get_sex_counts(self, drug_name: str) -> list[dict[str, Any]]:
        return await self.count_adverse_events(drug_name, "patient.patientsex", 3)

    async def get_total_report_count(self, drug_name: str, serious: Optional[bool] = None) -> int:
        """보고 총 건수 (serious=True면 중대 보고만)"""
        data = await self._query(
            "/drug/event.json",
            {"search": self._event_search(drug_name, serious), "limit": 1},
        )
        if not data:
            return 0
        return data.get("meta", {}).get("results", {}).get("total", 0)
