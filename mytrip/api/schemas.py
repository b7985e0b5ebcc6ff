"""
API Pydantic 스키마
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorLogRequest(BaseModel):
    """클라이언트 오류 로그"""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    message: Optional[str] = None
    timestamp: Optional[str] = None
    stack: Optional[str] = None
    url: Optional[str] = None
    user_agent: Optional[str] = Field(default=None, alias="userAgent")
    error_type: Optional[str] = Field(default=None, alias="errorType")


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str
    service: str
    version: str
