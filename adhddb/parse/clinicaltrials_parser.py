"""ClinicalTrials.gov v2 API 파서

v2 API의 nested protocolSection 구조를 평탄화하고 약물별 요약을 만든다.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional
from urllib.parse import quote_plus

from adhddb.models import ClinicalTrialsData, TrialSummary

logger = logging.getLogger(__name__)

RECRUITING = {"RECRUITING", "ENROLLING_BY_INVITATION", "NOT_YET_RECRUITING"}
ACTIVE = {"ACTIVE_NOT_RECRUITING"}
COMPLETED = {"COMPLETED"}

STUDY_URL = "https://clinicaltrials.gov/study/{nct_id}"
SEARCH_URL = "https://clinicaltrials.gov/search?cond=ADHD&intr={term}"


class ClinicalTrialsParser:
    """CT.gov v2 API 결과 파서"""

    def parse_study(self, raw: dict[str, Any]) -> dict[str, Any]:
        """단일 연구 파싱

        Args:
            raw: CT.gov v2 API study dict

        Returns:
            평탄화된 dict
        """
        proto = raw.get("protocolSection", {})
        ident = proto.get("identificationModule", {})
        status_mod = proto.get("statusModule", {})
        design_mod = proto.get("designModule", {})
        arms_mod = proto.get("armsInterventionsModule", {})
        sponsor_mod = proto.get("sponsorCollaboratorsModule", {})
        desc_mod = proto.get("descriptionModule", {})
        elig_mod = proto.get("eligibilityModule", {})

        enrollment = design_mod.get("enrollmentInfo", {})
        lead_sponsor = sponsor_mod.get("leadSponsor", {})

        return {
            "nct_id": ident.get("nctId", ""),
            "brief_title": ident.get("briefTitle", ""),
            "official_title": ident.get("officialTitle"),
            "overall_status": status_mod.get("overallStatus", ""),
            "phases": list(design_mod.get("phases") or []),
            "study_type": design_mod.get("studyType"),
            "conditions": list(proto.get("conditionsModule", {}).get("conditions") or []),
            "interventions": [
                {"type": i.get("type", ""), "name": i.get("name", ""), "description": i.get("description")}
                for i in arms_mod.get("interventions") or []
            ],
            "lead_sponsor": {
                "name": lead_sponsor.get("name", ""),
                "class": lead_sponsor.get("class"),
            } if lead_sponsor else None,
            "enrollment_count": enrollment.get("count"),
            "enrollment_type": enrollment.get("type"),
            "start_date": status_mod.get("startDateStruct", {}).get("date"),
            "completion_date": status_mod.get("completionDateStruct", {}).get("date"),
            "last_update_date": status_mod.get("lastUpdatePostDateStruct", {}).get("date"),
            "brief_summary": desc_mod.get("briefSummary"),
            "minimum_age": elig_mod.get("minimumAge"),
            "maximum_age": elig_mod.get("maximumAge"),
            "has_results": raw.get("hasResults", False),
        }

    def parse_many(self, studies: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """여러 연구 파싱 (NCT ID 기준 중복 제거, 순서 유지)"""
        results: list[dict[str, Any]] = []
        seen: set[str] = set()
        for study in studies:
            parsed = self.parse_study(study)
            nct_id = parsed["nct_id"]
            if not nct_id:
                logger.debug("CT.gov: NCT ID 없는 연구 건너뜀")
                continue
            if nct_id in seen:
                continue
            seen.add(nct_id)
            results.append(parsed)
        return results

    def summarize(self, trials: list[dict[str, Any]]) -> TrialSummary:
        """상태/단계별 집계 (단계 정보가 없으면 "NA")"""
        by_phase: dict[str, int] = {}
        for trial in trials:
            for phase in trial.get("phases") or ["NA"]:
                by_phase[phase] = by_phase.get(phase, 0) + 1

        statuses = [t.get("overall_status") for t in trials]
        return TrialSummary(
            total=len(trials),
            recruiting=sum(1 for s in statuses if s in RECRUITING),
            active=sum(1 for s in statuses if s in ACTIVE),
            completed=sum(1 for s in statuses if s in COMPLETED),
            by_phase=by_phase,
        )

    def to_trials_data(
        self,
        trials: list[dict[str, Any]],
        search_term: str,
        today: Optional[date] = None,
    ) -> ClinicalTrialsData:
        """약물 레코드 clinicalTrialsData 블록 생성"""
        return ClinicalTrialsData(
            summary=self.summarize(trials),
            search_url=SEARCH_URL.format(term=quote_plus(search_term)),
            last_updated=(today or date.today()).isoformat(),
        )

    def format_trial(self, trial: dict[str, Any]) -> dict[str, str]:
        """화면 표시용 요약"""
        enrollment = trial.get("enrollment_count")
        if enrollment:
            enrollment_text = f"{enrollment} ({(trial.get('enrollment_type') or 'unknown').lower()})"
        else:
            enrollment_text = "Not specified"

        start = trial.get("start_date")
        dates = f"{start} - {trial.get('completion_date') or 'ongoing'}" if start else "Not specified"

        return {
            "nctId": trial.get("nct_id", ""),
            "title": trial.get("brief_title", ""),
            "status": (trial.get("overall_status") or "").replace("_", " "),
            "phase": ", ".join(trial.get("phases") or []) or "N/A",
            "sponsor": (trial.get("lead_sponsor") or {}).get("name") or "Unknown",
            "enrollment": enrollment_text,
            "dates": dates,
            "url": STUDY_URL.format(nct_id=trial.get("nct_id", "")),
        }
