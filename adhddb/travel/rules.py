"""국경 간 휴대 규칙 조회"""

from collections import Counter
from typing import Optional

from adhddb.models import CrossBorderRule, DrugRecord


def find_cross_border_rule(
    drug: DrugRecord,
    from_region: str,
    to_region: str,
) -> Optional[CrossBorderRule]:
    """
    작성된 규칙 중 (출발, 도착)이 일치하는 첫 번째 규칙

    중복 규칙이 있으면 목록상 먼저 나온 규칙이 이긴다.

    Args:
        drug: 약물 레코드
        from_region: 출발 지역 코드
        to_region: 도착 지역 코드

    Returns:
        일치 규칙, 없으면 None
    """
    for rule in drug.cross_border_rules:
        if rule.from_region == from_region and rule.to_region == to_region:
            return rule
    return None


def find_duplicate_rules(drug: DrugRecord) -> list[tuple[str, str]]:
    """두 번 이상 작성된 (출발, 도착) 쌍 (첫 등장 순서)"""
    counts = Counter((r.from_region, r.to_region) for r in drug.cross_border_rules)
    return [pair for pair, count in counts.items() if count > 1]
