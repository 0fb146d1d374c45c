"""출력 변환 (로케일 투영, llms.txt 내보내기)"""

from .llms import format_drug, render_llms_full, render_llms_txt
from .localize import (
    localize_category,
    localize_drug,
    localize_drug_class,
    localize_drug_summary,
    localize_rule,
    localize_term,
    localize_travel_status,
)

__all__ = [
    "format_drug",
    "localize_category",
    "localize_drug",
    "localize_drug_class",
    "localize_drug_summary",
    "localize_rule",
    "localize_term",
    "localize_travel_status",
    "render_llms_full",
    "render_llms_txt",
]
