"""국경 간 휴대 규칙 조회 및 여행 상태 추론"""

from .inference import (
    InferenceReason,
    InferredTravelStatus,
    infer_travel_status,
    travel_matrix,
)
from .rules import find_cross_border_rule, find_duplicate_rules

__all__ = [
    "InferenceReason",
    "InferredTravelStatus",
    "find_cross_border_rule",
    "find_duplicate_rules",
    "infer_travel_status",
    "travel_matrix",
]
