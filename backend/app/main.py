"""
backend/app/main.py - FastAPI 메인 애플리케이션
───────────────────────────────────────────────────
pricing/ 모듈을 감싸는 얇은 API 레이어.

실행 방법:
    # 개발
    uvicorn backend.app.main:app --reload --port 8000

    # 프로덕션
    gunicorn backend.app.main:app -w 4 -k uvicorn.workers.UvicornWorker -b 0.0.0.0:8000
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pricing import FareError, InvalidInputError
from backend.app.api import health_router, quote_router, profitability_router, rates_router
from backend.app.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# FastAPI 앱 생성
app = FastAPI(
    title=settings.APP_NAME,
    description="용차 운임 산출 및 수익성 계산 API",
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS 설정 (환경변수 기반)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.cors_methods_list,
    allow_headers=settings.CORS_ALLOW_HEADERS.split(",") if settings.CORS_ALLOW_HEADERS != "*" else ["*"],
)


# ─────────────────────────────────────
# 예외 핸들러
# ─────────────────────────────────────
@app.exception_handler(FareError)
async def fare_error_handler(request: Request, exc: FareError) -> JSONResponse:
    """요율 누락 → 422, 입력 오류 → 400."""
    status_code = 400 if isinstance(exc, InvalidInputError) else 422
    logger.warning(f"[{exc.code}] {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.as_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 본문 파싱 오류 → 400 (422 는 요율 누락 전용)."""
    logger.warning(f"[VALIDATION_ERROR] {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "ok": False,
            "code": InvalidInputError.code,
            "message": "입력 데이터가 올바르지 않습니다",
            "missingRegions": [],
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


# 라우터 등록
app.include_router(health_router)
app.include_router(quote_router)
app.include_router(profitability_router)
app.include_router(rates_router)


# 루트 엔드포인트
@app.get("/")
async def root():
    """API 루트."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


# 앱 시작 이벤트
@app.on_event("startup")
async def startup_event():
    """앱 시작 시 요율 테이블 확인."""
    from pricing import ensure_tables
    ensure_tables()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
