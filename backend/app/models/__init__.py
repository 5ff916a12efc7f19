"""
backend/app/models - Pydantic 모델 정의
───────────────────────────────────────────
입력 파싱 / 응답 직렬화용 Pydantic 모델.
"""

from .schemas import (
    # 공통
    HealthResponse,
    ErrorResponse,
    # 운임 산출
    QuoteRequest,
    ManualQuoteRequest,
    FareQuoteData,
    QuoteResponse,
    # 수익성
    BillableFields,
    ThresholdFields,
    ProfitabilityRequest,
    ProfitabilityData,
    ProfitabilityResponse,
    RecommendedFeeRequest,
    RecommendedFeeResponse,
    ProfitabilityExportRequest,
    # 요율표
    CenterFareCreate,
    CenterFareCreated,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "QuoteRequest",
    "ManualQuoteRequest",
    "FareQuoteData",
    "QuoteResponse",
    "BillableFields",
    "ThresholdFields",
    "ProfitabilityRequest",
    "ProfitabilityData",
    "ProfitabilityResponse",
    "RecommendedFeeRequest",
    "RecommendedFeeResponse",
    "ProfitabilityExportRequest",
    "CenterFareCreate",
    "CenterFareCreated",
]
