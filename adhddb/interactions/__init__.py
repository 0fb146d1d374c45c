"""약물 상호작용 / 영양소 경고"""

from .catalog import (
    CLASS_INTERACTIONS,
    NUTRIENT_WARNINGS,
    ClassInteraction,
    NutrientWarning,
    find_class_interaction,
    nutrient_warnings_for,
)
from .checker import (
    ClassInteractionHit,
    DrugInteractionResult,
    InteractionReport,
    InteractionSummary,
    NutrientHit,
    PairInteraction,
    check_interactions,
    normalize_drug_ids,
    summarize,
)
from .curated import (
    CURATED_INTERACTIONS,
    CuratedInteraction,
    EvidenceLevel,
    build_interactions_data,
    curated_interactions_for,
)

__all__ = [
    "CLASS_INTERACTIONS",
    "CURATED_INTERACTIONS",
    "NUTRIENT_WARNINGS",
    "ClassInteraction",
    "ClassInteractionHit",
    "CuratedInteraction",
    "DrugInteractionResult",
    "EvidenceLevel",
    "InteractionReport",
    "InteractionSummary",
    "NutrientHit",
    "NutrientWarning",
    "PairInteraction",
    "build_interactions_data",
    "check_interactions",
    "curated_interactions_for",
    "find_class_interaction",
    "normalize_drug_ids",
    "nutrient_warnings_for",
    "summarize",
]
