"""
backend/app/api/quote.py - 운임 산출 API
───────────────────────────────────────────
pricing.lookup_fare_components() + pricing.quote_fare() 호출.

요율 누락 시 422 + missingRegions 응답은 main.py 의 예외 핸들러가 만듭니다.
"""
import logging

from fastapi import APIRouter, HTTPException

from pricing import (
    FareComponents,
    FareError,
    lookup_fare_components,
    quote_fare,
)
from backend.app.models import (
    ErrorResponse,
    FareQuoteData,
    ManualQuoteRequest,
    QuoteRequest,
    QuoteResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quote", tags=["Quote"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "입력 오류"},
    422: {"model": ErrorResponse, "description": "요율 누락 (MISSING_RATE / MISSING_SURCHARGE)"},
}


# ─────────────────────────────────────
# 요율표 기반 산출
# ─────────────────────────────────────
@router.post("", response_model=QuoteResponse, responses=ERROR_RESPONSES)
@router.post("/", response_model=QuoteResponse, responses=ERROR_RESPONSES)
async def quote(req: QuoteRequest) -> QuoteResponse:
    """
    센터/차량톤수/지역으로 요율을 조회해 운임 산출.

    협의운임이면 협의금액이 총액이며, 요율 누락은 오류로 보지 않습니다.
    """
    try:
        components = lookup_fare_components(
            req.center_name,
            req.vehicle_type,
            req.regions,
            req.stop_count,
            is_negotiated=req.is_negotiated,
            negotiated_fare=req.negotiated_fare,
        )
        result = quote_fare(components)
        logger.info(f"운임 산출: {req.center_name}/{req.vehicle_type} {result.total:,}원")
        return QuoteResponse(ok=True, data=FareQuoteData(**result.as_dict()))

    except FareError:
        raise
    except Exception as e:
        logger.error(f"운임 산출 실패: {e}")
        raise HTTPException(status_code=500, detail=str(e))


# ─────────────────────────────────────
# 요율 직접 입력
# ─────────────────────────────────────
@router.post("/manual", response_model=QuoteResponse, responses=ERROR_RESPONSES)
async def quote_manual(req: ManualQuoteRequest) -> QuoteResponse:
    """요율 조회 없이 입력값으로 운임 산출."""
    components = FareComponents(**req.model_dump())
    result = quote_fare(components)
    return QuoteResponse(ok=True, data=FareQuoteData(**result.as_dict()))
