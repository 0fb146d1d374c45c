"""ADHD-DB API 메인"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adhddb import __version__
from adhddb.api.deps import get_catalog
from adhddb.api.routes import (
    categories,
    clinicaltrials,
    drugs,
    exports,
    interactions,
    openfda,
    terms,
)
from adhddb.api.schemas import HealthResponse, ServiceInfo
from adhddb.config import settings

# 로깅 설정
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작 시 카탈로그 로드"""
    logger.info("카탈로그 로딩 시작...")
    catalog = get_catalog()
    logger.info(
        f"카탈로그 로드 완료: {len(catalog)}개 약물, "
        f"{len(catalog.categories)}개 카테고리, {len(catalog.regions)}개 지역"
    )
    yield


app = FastAPI(
    title="ADHD-DB API",
    description="ADHD 약물 다국어 데이터베이스 API",
    version=__version__,
    lifespan=lifespan,
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(drugs.router, prefix="/api/v1/drugs", tags=["Drugs"])
app.include_router(categories.router, prefix="/api/v1/categories", tags=["Categories"])
app.include_router(interactions.router, prefix="/api/v1/interactions", tags=["Interactions"])
app.include_router(openfda.router, prefix="/api/v1/openfda", tags=["OpenFDA"])
app.include_router(clinicaltrials.router, prefix="/api/v1/clinicaltrials", tags=["ClinicalTrials"])
app.include_router(terms.router, prefix="/api/v1/terms", tags=["Terms"])


@app.get("/", response_model=ServiceInfo)
def root():
    """API 상태"""
    return ServiceInfo(service="ADHD-DB API", version=__version__, status="running")


@app.get("/health", response_model=HealthResponse)
def health():
    """헬스체크"""
    catalog = get_catalog()
    return HealthResponse(
        status="healthy",
        drug_count=len(catalog),
        loaded_at=catalog.loaded_at,
    )


# /{lang}/llms.txt 경로가 다른 라우트를 가리지 않도록 마지막에 등록
app.include_router(exports.router, tags=["Exports"])
