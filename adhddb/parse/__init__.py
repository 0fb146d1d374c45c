"""파서 모듈"""

from .clinicaltrials_parser import ClinicalTrialsParser
from .openfda_parser import FAERSParser, OpenFDALabelParser, clean_label_text
from .rxnorm_parser import TTY_DESCRIPTIONS, RxNormParser

__all__ = [
    "OpenFDALabelParser",
    "FAERSParser",
    "clean_label_text",
    "RxNormParser",
    "TTY_DESCRIPTIONS",
    "ClinicalTrialsParser",
]
