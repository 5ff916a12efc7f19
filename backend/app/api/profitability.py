"""
backend/app/api/profitability.py - 수익성 API
───────────────────────────────────────────────
pricing.calculate_profitability() / calculate_recommended_driver_fee()
를 호출하는 얇은 API 레이어.
"""
import logging

import pandas as pd
from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from pricing import (
    BillableRequest,
    FareError,
    ProfitabilityThresholds,
    calculate_profitability,
    calculate_recommended_driver_fee,
    generate_profitability_summary,
    get_profitability_icon,
    profitability_to_excel,
    resolve_center_billing,
)
from backend.app.config import settings
from backend.app.models import (
    BillableFields,
    ErrorResponse,
    ProfitabilityData,
    ProfitabilityExportRequest,
    ProfitabilityRequest,
    ProfitabilityResponse,
    RecommendedFeeRequest,
    RecommendedFeeResponse,
    ThresholdFields,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profitability", tags=["Profitability"])

ERROR_RESPONSES = {400: {"model": ErrorResponse, "description": "입력 오류"}}

BILLABLE_KEYS = set(BillableFields.model_fields)


def build_thresholds(req: ThresholdFields) -> ProfitabilityThresholds:
    """요청값이 없으면 서버 설정값 사용."""
    return ProfitabilityThresholds(
        profit_threshold=(
            req.profit_threshold if req.profit_threshold is not None else settings.PROFIT_THRESHOLD
        ),
        break_even_threshold=(
            req.break_even_threshold if req.break_even_threshold is not None else settings.BREAK_EVEN_THRESHOLD
        ),
    )


def to_billable(req: BillableFields) -> BillableRequest:
    return BillableRequest.from_mapping(req.model_dump(include=BILLABLE_KEYS))


# ─────────────────────────────────────
# 수익성 계산
# ─────────────────────────────────────
@router.post("", response_model=ProfitabilityResponse, responses=ERROR_RESPONSES)
@router.post("/", response_model=ProfitabilityResponse, responses=ERROR_RESPONSES)
async def profitability(req: ProfitabilityRequest) -> ProfitabilityResponse:
    """요청 1건의 마진/마진율/수익성 판정."""
    result = calculate_profitability(to_billable(req), build_thresholds(req))
    return ProfitabilityResponse(
        ok=True,
        data=ProfitabilityData(
            **result.as_dict(),
            icon=get_profitability_icon(result.margin_rate),
            summary=generate_profitability_summary(result),
        ),
    )


# ─────────────────────────────────────
# 권장 기사 운임
# ─────────────────────────────────────
@router.post("/recommended-fee", response_model=RecommendedFeeResponse, responses=ERROR_RESPONSES)
async def recommended_fee(req: RecommendedFeeRequest) -> RecommendedFeeResponse:
    """목표 마진율(기본 25%)에 맞는 기사 운임 (1000원 단위)."""
    request = to_billable(req)
    target = req.target_margin_rate if req.target_margin_rate is not None else settings.TARGET_MARGIN_RATE
    fee = calculate_recommended_driver_fee(request, target)
    return RecommendedFeeResponse(
        ok=True,
        center_billing=resolve_center_billing(request),
        target_margin_rate=target,
        recommended_driver_fee=fee,
    )


# ─────────────────────────────────────
# 엑셀 내보내기
# ─────────────────────────────────────
@router.post("/export", responses=ERROR_RESPONSES)
async def export_profitability(req: ProfitabilityExportRequest):
    """요청 목록에 수익성 컬럼을 붙여 xlsx 로 다운로드."""
    try:
        df = pd.DataFrame(req.rows)
        output = profitability_to_excel(df, build_thresholds(req), sheet_name=req.sheet_name)

        return StreamingResponse(
            output,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": "attachment; filename=profitability.xlsx"},
        )

    except FareError:
        raise
    except Exception as e:
        logger.error(f"수익성 엑셀 생성 실패: {e}")
        raise HTTPException(status_code=500, detail=str(e))
