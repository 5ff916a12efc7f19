"""
backend/app/api - API 라우터 모듈
───────────────────────────────────
각 도메인별 API 엔드포인트 정의.
"""

from .health import router as health_router
from .quote import router as quote_router
from .profitability import router as profitability_router
from .rates import router as rates_router

__all__ = [
    "health_router",
    "quote_router",
    "profitability_router",
    "rates_router",
]
