"""ADHD-DB 데이터 모델"""

from .drug import (
    AgeGroupCount,
    BrandMapping,
    ClinicalTrialsData,
    CostEstimate,
    CrossBorderRule,
    DateRange,
    DosingInfo,
    DrugApproval,
    DrugClass,
    DrugForm,
    DrugInteractionEntry,
    DrugRecord,
    FAERSData,
    FAERSDemographics,
    FAERSOutcomes,
    FAERSReaction,
    FDAAbuseAndDependence,
    FDAData,
    FDAPharmacologicClass,
    MaxPersonalSupply,
    RecordModel,
    RelatedDrug,
    RxcuiMapping,
    RxNormData,
    RxNormSynonym,
    Severity,
    SexCount,
    SideEffect,
    SideEffects,
    SpecialConsiderations,
    TravelDocumentation,
    TravelRules,
    TravelStatus,
    TrialSummary,
    TypicalDosing,
)
from .meta import Category, DrugClassInfo, Region, Term, WikipediaUrls

__all__ = [
    "AgeGroupCount",
    "BrandMapping",
    "Category",
    "ClinicalTrialsData",
    "CostEstimate",
    "CrossBorderRule",
    "DateRange",
    "DosingInfo",
    "DrugApproval",
    "DrugClass",
    "DrugClassInfo",
    "DrugForm",
    "DrugInteractionEntry",
    "DrugRecord",
    "FAERSData",
    "FAERSDemographics",
    "FAERSOutcomes",
    "FAERSReaction",
    "FDAAbuseAndDependence",
    "FDAData",
    "FDAPharmacologicClass",
    "MaxPersonalSupply",
    "RecordModel",
    "Region",
    "RelatedDrug",
    "RxcuiMapping",
    "RxNormData",
    "RxNormSynonym",
    "Severity",
    "SexCount",
    "SideEffect",
    "SideEffects",
    "SpecialConsiderations",
    "Term",
    "TravelDocumentation",
    "TravelRules",
    "TravelStatus",
    "TrialSummary",
    "TypicalDosing",
    "WikipediaUrls",
]
