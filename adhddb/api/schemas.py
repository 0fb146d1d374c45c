"""API 응답 스키마

약물/카테고리 본문은 로케일 투영 결과(camelCase dict)를 그대로 싣는다.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class ServiceInfo(BaseModel):
    """서비스 정보"""
    service: str
    version: str
    status: str


class HealthResponse(BaseModel):
    """헬스체크"""
    status: str
    drug_count: int
    loaded_at: Optional[datetime] = None


class ListResponse(BaseModel):
    """목록 응답"""
    count: int
    data: list[dict[str, Any]]


class DataResponse(BaseModel):
    """단건 응답"""
    data: dict[str, Any]


class CategoriesResponse(BaseModel):
    """카테고리 + 약물 대분류"""
    categories: ListResponse
    drugClasses: ListResponse

