"""여행 상태 추론 엔진

작성된 규칙이 없을 때 약물 카테고리, 규제 여부, 도착 지역 승인 여부로
휴대 상태를 추론한다. 순서가 곧 우선순위이며 처음 일치한 단계에서 끝난다.

1. 작성된 규칙 (inferred=False)
2. 암페타민 계열 → CN 금지 / JP 수입허가
3. 규제 약물 → 도착 지역 미승인이면 controlled_not_approved, 아니면 controlled_substance
4. 기본값 allowed (non_controlled)

모르는 지역 코드는 모든 비교에서 빠져 4단계 allowed로 떨어진다.
"""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from adhddb.models import CrossBorderRule, DrugRecord, TravelStatus
from adhddb.travel.rules import find_cross_border_rule

AMPHETAMINE_CATEGORY = "amphetamine"


class InferenceReason(str, Enum):
    """추론 사유 코드"""
    AMPHETAMINE_PROHIBITED_CN = "amphetamine_prohibited_cn"
    AMPHETAMINE_REQUIRES_PERMIT_JP = "amphetamine_requires_permit_jp"
    CONTROLLED_NOT_APPROVED = "controlled_not_approved"
    CONTROLLED_SUBSTANCE = "controlled_substance"
    NON_CONTROLLED = "non_controlled"


# 암페타민 계열 도착지별 예외 (이 두 곳만 존재)
_AMPHETAMINE_OVERRIDES: dict[str, tuple[TravelStatus, InferenceReason]] = {
    "CN": (TravelStatus.PROHIBITED, InferenceReason.AMPHETAMINE_PROHIBITED_CN),
    "JP": (TravelStatus.REQUIRES_PERMIT, InferenceReason.AMPHETAMINE_REQUIRES_PERMIT_JP),
}


class InferredTravelStatus(BaseModel):
    """추론 결과"""

    model_config = ConfigDict(frozen=True)

    status: TravelStatus
    inferred: bool
    reason: Optional[InferenceReason] = None
    rule: Optional[CrossBorderRule] = None  # inferred=False일 때 일치한 규칙


def infer_travel_status(
    drug: DrugRecord,
    from_region: str,
    to_region: str,
) -> InferredTravelStatus:
    """
    (출발, 도착) 여행 상태 추론

    Args:
        drug: 약물 레코드
        from_region: 출발 지역 코드
        to_region: 도착 지역 코드

    Returns:
        InferredTravelStatus (작성된 규칙이면 reason=None)
    """
    rule = find_cross_border_rule(drug, from_region, to_region)
    if rule is not None:
        return InferredTravelStatus(status=rule.status, inferred=False, rule=rule)

    if drug.category == AMPHETAMINE_CATEGORY and to_region in _AMPHETAMINE_OVERRIDES:
        status, reason = _AMPHETAMINE_OVERRIDES[to_region]
        return InferredTravelStatus(status=status, inferred=True, reason=reason)

    if drug.controlled_substance:
        if not drug.is_available_in(to_region):
            return InferredTravelStatus(
                status=TravelStatus.RESTRICTED,
                inferred=True,
                reason=InferenceReason.CONTROLLED_NOT_APPROVED,
            )
        return InferredTravelStatus(
            status=TravelStatus.RESTRICTED,
            inferred=True,
            reason=InferenceReason.CONTROLLED_SUBSTANCE,
        )

    return InferredTravelStatus(
        status=TravelStatus.ALLOWED,
        inferred=True,
        reason=InferenceReason.NON_CONTROLLED,
    )


def travel_matrix(
    drug: DrugRecord,
    regions: Iterable[str],
) -> dict[tuple[str, str], InferredTravelStatus]:
    """모든 (출발, 도착) 순서쌍 (출발 != 도착)에 대한 추론 결과"""
    codes = list(regions)
    return {
        (src, dst): infer_travel_status(drug, src, dst)
        for src in codes
        for dst in codes
        if src != dst
    }
