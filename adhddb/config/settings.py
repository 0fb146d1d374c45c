"""프로젝트 설정"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """ADHD-DB 설정"""

    # 프로젝트 경로
    BASE_DIR: Path = Path(__file__).parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"
    CACHE_DIR: Path = BASE_DIR / "data" / "cache"

    @property
    def DRUGS_DIR(self) -> Path:
        """약물 YAML 디렉토리"""
        return self.DATA_DIR / "drugs"

    @property
    def META_DIR(self) -> Path:
        """메타 YAML (regions, categories, terms) 디렉토리"""
        return self.DATA_DIR / "meta"

    # 다국어
    DEFAULT_LOCALE: str = "en"

    # OpenFDA API
    OPENFDA_API_KEY: Optional[str] = None
    OPENFDA_BASE_URL: str = "https://api.fda.gov"
    OPENFDA_REQUEST_DELAY: float = 0.3  # ~200 req/min

    # RxNav (NLM)
    RXNAV_BASE_URL: str = "https://rxnav.nlm.nih.gov/REST"
    RXNAV_REQUEST_DELAY: float = 0.2

    # ClinicalTrials.gov v2
    CT_GOV_BASE_URL: str = "https://clinicaltrials.gov/api/v2"
    CT_GOV_REQUEST_DELAY: float = 0.35

    # HTTP 공통
    HTTP_TIMEOUT: float = 30.0
    HTTP_MAX_RETRIES: int = 3

    # 사이트
    SITE_URL: str = "https://adhd-db.com"

    # 로깅
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # 추가 환경변수 무시


settings = Settings()
