"""
클라이언트 오류 로그 수신 라우터
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mytrip.api.schemas import ErrorLogRequest
from mytrip.core.logger import get_logger_instance

router = APIRouter()


@router.post("/log-error")
async def log_error(error_log: ErrorLogRequest):
    """클라이언트 오류 로그 기록"""
    if not error_log.message or not error_log.timestamp:
        return JSONResponse(status_code=400, content={"error": "Invalid error log format"})

    get_logger_instance().log_client_error(error_log.model_dump(by_alias=True))
    return {"success": True}
