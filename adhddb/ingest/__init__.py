"""외부 데이터 수집 모듈 (OpenFDA, RxNav, ClinicalTrials.gov)"""

from .base import BaseAPIClient
from .clinicaltrials import ClinicalTrialsGovClient
from .mappings import DRUG_SOURCE_MAPPINGS, DrugSourceMapping, get_mapping, select_mappings
from .openfda import OpenFDAClient
from .rxnav import RxNavClient

__all__ = [
    "BaseAPIClient",
    "OpenFDAClient",
    "RxNavClient",
    "ClinicalTrialsGovClient",
    # 매핑
    "DrugSourceMapping",
    "DRUG_SOURCE_MAPPINGS",
    "get_mapping",
    "select_mappings",
]
