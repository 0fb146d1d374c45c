"""ClinicalTrials.gov v2 API 클라이언트

ADHD 적응증 + 약물(intervention)별 임상시험 수집.
API 문서: https://clinicaltrials.gov/data-api/api
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from adhddb.config import settings
from .base import BaseAPIClient

logger = logging.getLogger(__name__)

ADHD_CONDITION = 'ADHD OR "Attention Deficit Hyperactivity Disorder"'

RECRUITING_STATUSES = ["RECRUITING", "ENROLLING_BY_INVITATION", "NOT_YET_RECRUITING"]
ACTIVE_STATUSES = ["ACTIVE_NOT_RECRUITING"]


class ClinicalTrialsGovClient(BaseAPIClient):
    """ClinicalTrials.gov v2 API 클라이언트"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        request_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url=base_url or settings.CT_GOV_BASE_URL,
            timeout=timeout,
            request_delay=(
                request_delay if request_delay is not None else settings.CT_GOV_REQUEST_DELAY
            ),
            transport=transport,
        )

    def source_type(self) -> str:
        return "CLINICALTRIALS_GOV"

    async def search_studies(
        self,
        query: str = "",
        condition: str = "",
        intervention: str = "",
        statuses: list[str] | None = None,
        phases: list[str] | None = None,
        page_size: int = 20,
        page_token: str | None = None,
    ) -> dict[str, Any]:
        """임상시험 검색

        Args:
            query: 자유 검색어
            condition: 질환 (AREA[Condition])
            intervention: 약물명 (AREA[InterventionName])
            statuses: 상태 필터 (RECRUITING, COMPLETED, ...)
            phases: 단계 필터 (PHASE2, PHASE3, ...)
            page_size: 페이지 크기
            page_token: 다음 페이지 토큰

        Returns:
            원본 응답 dict ({"studies": [...], "nextPageToken": ..., "totalCount": ...})
        """
        parts = []
        if query:
            parts.append(query)
        if condition:
            parts.append(f"AREA[Condition]{condition}")
        if intervention:
            parts.append(f"AREA[InterventionName]{intervention}")

        params: dict[str, Any] = {
            "format": "json",
            "pageSize": page_size,
            "query.term": " AND ".join(parts) or None,
            "filter.overallStatus": ",".join(statuses) if statuses else None,
            "filter.phase": ",".join(phases) if phases else None,
            "pageToken": page_token,
            "countTotal": "true",
        }

        data = await self._request("/studies", params)
        return data or {"studies": [], "totalCount": 0}

    async def get_adhd_trials_for_drug(
        self,
        drug_name: str,
        statuses: list[str] | None = None,
        limit: int = 50,
    ) -> list[dict[str, Any]]:
        """자동 페이지네이션으로 약물별 ADHD 임상시험 수집 (최대 limit건)"""
        studies: list[dict[str, Any]] = []
        page_token: str | None = None

        while len(studies) < limit:
            data = await self.search_studies(
                condition=ADHD_CONDITION,
                intervention=drug_name,
                statuses=statuses,
                page_size=min(limit - len(studies), 20),
                page_token=page_token,
            )
            batch = data.get("studies") or []
            studies.extend(batch)

            page_token = data.get("nextPageToken")
            if not page_token or not batch:
                break

        logger.debug(f"[CT.gov] {drug_name}: {len(studies)}건")
        return studies[:limit]

    async def get_recruiting_trials(self, drug_name: str) -> list[dict[str, Any]]:
        return await self.get_adhd_trials_for_drug(drug_name, RECRUITING_STATUSES, limit=20)

    async def get_active_trials(self, drug_name: str) -> list[dict[str, Any]]:
        return await self.get_adhd_trials_for_drug(drug_name, ACTIVE_STATUSES, limit=20)
