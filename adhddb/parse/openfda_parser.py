"""OpenFDA 응답 파서 (약물 라벨, FAERS 이상사례 집계)"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

from adhddb.models import (
    AgeGroupCount,
    DateRange,
    FAERSData,
    FAERSDemographics,
    FAERSOutcomes,
    FAERSReaction,
    FDAAbuseAndDependence,
    FDAData,
    FDAPharmacologicClass,
    SexCount,
)

_HTML_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")

MAX_LABEL_TEXT = 5000

# FAERS 데이터 시작일
FAERS_START_DATE = "2004-01-01"

AGE_GROUPS = ["0-5", "6-11", "12-17", "18-24", "25-34", "35-44", "45-54", "55-64", "65+"]
_AGE_BOUNDS = [(6, "0-5"), (12, "6-11"), (18, "12-17"), (25, "18-24"),
               (35, "25-34"), (45, "35-44"), (55, "45-54"), (65, "55-64")]

SEX_CODES = {"0": "Unknown", "1": "Male", "2": "Female"}

OUTCOME_CODES = {
    "1": "recovered",
    "2": "recovering",
    "3": "not_recovered",
    "4": "recovered",  # 후유증 동반 회복은 회복으로 합산
    "5": "fatal",
    "6": "unknown",
}


def clean_label_text(text: Any, max_length: int = MAX_LABEL_TEXT) -> Optional[str]:
    """
    라벨 텍스트 정리 (HTML 제거, 공백 정규화, 길이 제한)

    Args:
        text: 문자열 또는 문자열 리스트 (리스트는 빈 줄로 연결)
        max_length: 최대 길이 (초과분은 "..."로 대체)

    Returns:
        정리된 문자열, 내용이 없으면 None
    """
    if not text:
        return None
    if isinstance(text, list):
        text = "\n\n".join(str(t) for t in text)

    cleaned = _WHITESPACE.sub(" ", _HTML_TAG.sub("", str(text))).strip()
    if len(cleaned) > max_length:
        cleaned = cleaned[:max_length] + "..."
    return cleaned or None


def _first(values: Optional[list]) -> Optional[Any]:
    return values[0] if values else None


def age_group(age: int) -> str:
    for upper, label in _AGE_BOUNDS:
        if age < upper:
            return label
    return "65+"


class OpenFDALabelParser:
    """OpenFDA /drug/label 응답 파서"""

    def parse_label(self, raw: dict[str, Any]) -> dict[str, Any]:
        """
        라벨 1건을 정규화된 dict로 변환

        Args:
            raw: /drug/label.json results 항목

        Returns:
            정규화된 dict (snake_case 키)
        """
        openfda = raw.get("openfda") or {}

        return {
            # 식별
            "application_number": _first(openfda.get("application_number")),
            "spl_set_id": raw.get("set_id"),
            "spl_id": raw.get("id"),
            "rxcui": list(openfda.get("rxcui") or []),

            # 이름
            "brand_names": list(openfda.get("brand_name") or []),
            "generic_name": _first(openfda.get("generic_name")),
            "manufacturers": list(openfda.get("manufacturer_name") or []),

            # 약리 분류
            "pharmacologic_class": {
                "mechanism_of_action": list(openfda.get("pharm_class_moa") or []),
                "established_class": list(openfda.get("pharm_class_epc") or []),
                "physiologic_effect": list(openfda.get("pharm_class_pe") or []),
            },

            # 임상 정보
            "indications_and_usage": clean_label_text(raw.get("indications_and_usage")),
            "dosage_and_administration": clean_label_text(raw.get("dosage_and_administration")),
            "contraindications": clean_label_text(raw.get("contraindications")),
            "boxed_warning": clean_label_text(raw.get("boxed_warning")),
            "warnings_and_precautions": clean_label_text(
                raw.get("warnings_and_cautions") or raw.get("warnings")
            ),
            "adverse_reactions": clean_label_text(raw.get("adverse_reactions")),
            "drug_interactions": clean_label_text(raw.get("drug_interactions")),

            # 남용/의존
            "controlled_substance_class": _first(raw.get("controlled_substance")),
            "abuse_info": clean_label_text(raw.get("abuse")),
            "dependence_info": clean_label_text(raw.get("dependence")),

            # 특수 집단
            "pediatric_use": clean_label_text(raw.get("pediatric_use")),
            "geriatric_use": clean_label_text(raw.get("geriatric_use")),
            "pregnancy_info": clean_label_text(raw.get("pregnancy")),

            # 약리
            "mechanism_of_action": clean_label_text(raw.get("mechanism_of_action")),
            "pharmacokinetics": clean_label_text(raw.get("pharmacokinetics")),

            "effective_date": raw.get("effective_time"),
        }

    def parse_many(self, results: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [self.parse_label(r) for r in results]

    def score_label(self, label: dict[str, Any]) -> int:
        """라벨 완성도 + 최신성 점수"""
        score = 0
        if label.get("boxed_warning"):
            score += 10
        for key in ("indications_and_usage", "adverse_reactions", "drug_interactions"):
            if label.get(key):
                score += 5
        if label.get("mechanism_of_action"):
            score += 3
        if label.get("pediatric_use"):
            score += 3
        if (label.get("pharmacologic_class") or {}).get("mechanism_of_action"):
            score += 3

        # 최신성 (최대 25점)
        effective = label.get("effective_date") or ""
        if effective[:4].isdigit():
            score += min(int(effective[:4]) - 2000, 25)
        return score

    def select_best_label(self, labels: list[dict[str, Any]]) -> Optional[dict[str, Any]]:
        """가장 높은 점수의 라벨 (동점이면 먼저 나온 라벨)"""
        if not labels:
            return None
        return max(labels, key=self.score_label)

    def merge_labels(self, labels: list[dict[str, Any]]) -> Optional[dict[str, Any]]:
        """
        여러 라벨 병합

        최고 점수 라벨을 기준으로 상표명, 제조사, RxCUI, 약리 분류(MoA/EPC)를
        전체 라벨에서 중복 없이 모은다.
        """
        best = self.select_best_label(labels)
        if best is None or len(labels) == 1:
            return best

        def union(getter) -> list[str]:
            seen: dict[str, None] = {}
            for label in labels:
                for value in getter(label) or []:
                    seen.setdefault(value, None)
            return list(seen)

        pharm = best.get("pharmacologic_class") or {}
        return {
            **best,
            "brand_names": union(lambda lb: lb.get("brand_names")),
            "manufacturers": union(lambda lb: lb.get("manufacturers")),
            "rxcui": union(lambda lb: lb.get("rxcui")),
            "pharmacologic_class": {
                **pharm,
                "mechanism_of_action": union(
                    lambda lb: (lb.get("pharmacologic_class") or {}).get("mechanism_of_action")
                ),
                "established_class": union(
                    lambda lb: (lb.get("pharmacologic_class") or {}).get("established_class")
                ),
            },
        }

    def to_fda_data(
        self,
        label: dict[str, Any],
        application_numbers: Optional[list[str]] = None,
    ) -> FDAData:
        """정규화된 라벨 → 약물 레코드 fdaData 블록"""
        pharm = label.get("pharmacologic_class") or {}
        numbers = list(application_numbers or [])
        if label.get("application_number") and label["application_number"] not in numbers:
            numbers.append(label["application_number"])

        effective = label.get("effective_date")
        if effective and len(effective) == 8 and effective.isdigit():
            effective = f"{effective[:4]}-{effective[4:6]}-{effective[6:]}"

        set_id = label.get("spl_set_id")
        return FDAData(
            application_numbers=tuple(numbers),
            spl_set_id=set_id,
            spl_id=label.get("spl_id"),
            rxcui=tuple(label.get("rxcui") or ()),
            pharmacologic_class=FDAPharmacologicClass(
                mechanism_of_action=tuple(pharm.get("mechanism_of_action") or ()) or None,
                established_class=tuple(pharm.get("established_class") or ()) or None,
                physiologic_effect=tuple(pharm.get("physiologic_effect") or ()) or None,
            ),
            boxed_warning=label.get("boxed_warning"),
            fda_indications=label.get("indications_and_usage"),
            abuse_and_dependence=FDAAbuseAndDependence(
                controlled_substance_class=label.get("controlled_substance_class"),
                abuse=label.get("abuse_info"),
                dependence=label.get("dependence_info"),
            ),
            label_effective_date=effective,
            fda_label_url=(
                f"https://dailymed.nlm.nih.gov/dailymed/lookup.cfm?setid={set_id}"
                if set_id else None
            ),
        )


class FAERSParser:
    """FAERS count 응답 → 이상사례 요약"""

    def parse_reactions(
        self, counts: list[dict[str, Any]], total_reports: int
    ) -> list[FAERSReaction]:
        reactions = []
        for row in counts:
            count = int(row.get("count", 0))
            percentage = round(count / total_reports * 100, 2) if total_reports > 0 else 0.0
            reactions.append(FAERSReaction(
                reaction=str(row.get("term", "")).lower().replace("_", " "),
                report_count=count,
                percentage=percentage,
            ))
        return reactions

    def parse_age_groups(self, counts: list[dict[str, Any]]) -> list[AgeGroupCount]:
        """나이별 count → 연령대 합산 (0~120세만, 연령대 순서 유지)"""
        groups: dict[str, int] = {}
        for row in counts:
            try:
                age = int(float(row.get("term")))
            except (TypeError, ValueError):
                continue
            if 0 <= age <= 120:
                group = age_group(age)
                groups[group] = groups.get(group, 0) + int(row.get("count", 0))
        return [
            AgeGroupCount(age_group=g, count=groups[g]) for g in AGE_GROUPS if g in groups
        ]

    def parse_sexes(self, counts: list[dict[str, Any]]) -> list[SexCount]:
        return [
            SexCount(sex=SEX_CODES.get(str(row.get("term")), "Unknown"), count=int(row.get("count", 0)))
            for row in counts
        ]

    def parse_outcomes(self, counts: list[dict[str, Any]]) -> FAERSOutcomes:
        totals = {"recovered": 0, "recovering": 0, "not_recovered": 0, "fatal": 0, "unknown": 0}
        for row in counts:
            key = OUTCOME_CODES.get(str(row.get("term")), "unknown")
            totals[key] += int(row.get("count", 0))
        return FAERSOutcomes(**totals)

    def build_summary(
        self,
        total_reports: int,
        serious_reports: int,
        reactions: list[dict[str, Any]],
        ages: list[dict[str, Any]],
        sexes: list[dict[str, Any]],
        outcomes: list[dict[str, Any]],
        today: Optional[date] = None,
    ) -> FAERSData:
        """
        FAERS 요약 생성

        Args:
            total_reports: 전체 보고 수
            serious_reports: 중대 보고 수
            reactions: 반응별 count 결과
            ages: 나이별 count 결과
            sexes: 성별 count 결과
            outcomes: 결과별 count 결과
            today: 기준일 (기본값: 오늘)
        """
        today = today or date.today()
        return FAERSData(
            total_reports=total_reports,
            serious_reports=serious_reports,
            top_reactions=tuple(self.parse_reactions(reactions, total_reports)),
            demographics=FAERSDemographics(
                by_age=tuple(self.parse_age_groups(ages)),
                by_sex=tuple(self.parse_sexes(sexes)),
            ),
            outcomes=self.parse_outcomes(outcomes),
            data_range=DateRange(start=FAERS_START_DATE, end=today.isoformat()),
            last_updated=today.isoformat(),
        )
