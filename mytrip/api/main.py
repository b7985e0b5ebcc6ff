"""
MyTrip API Server

한국관광공사 API를 프록시하여 관광지 목록, 상세 정보, 통계 데이터를 제공하는 API 서버
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import validate_required_env
from mytrip.api import dependencies
from mytrip.api.config import settings
from mytrip.api.routers import logs, stats, tours
from mytrip.api.schemas import HealthResponse
from mytrip.collectors.tour_api_client import TourAPIClient
from mytrip.core.logger import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리"""
    setup_logging()
    logger.info(f"MyTrip API 시작 - Port: {settings.PORT}, 환경: {settings.ENVIRONMENT}")

    env_result = validate_required_env()
    if not env_result.is_valid:
        for error in env_result.errors:
            logger.warning(f"환경변수 검증 실패 - {error}")

    async with TourAPIClient() as client:
        dependencies.tour_client = client
        yield
        dependencies.tour_client = None

    logger.info("MyTrip API 종료")


app = FastAPI(
    title="MyTrip API",
    description="한국관광공사 관광정보 프록시 및 통계 API",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(tours.router, prefix="/api", tags=["tours"])
app.include_router(stats.router, prefix="/api/stats", tags=["stats"])
app.include_router(logs.router, prefix="/api", tags=["logs"])


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="healthy", service=settings.SERVICE_NAME, version=settings.VERSION)


if __name__ == "__main__":
    uvicorn.run(
        "mytrip.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
