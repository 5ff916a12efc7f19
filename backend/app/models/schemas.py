"""
backend/app/models/schemas.py - Pydantic 스키마 정의
───────────────────────────────────────────────────────
입력 파싱 및 응답 직렬화용 Pydantic 모델.
금액 검증과 계산은 pricing/ 모듈에서 처리.

JSON 필드명은 camelCase (centerName, missingRegions ...),
파이썬 속성명은 snake_case 를 사용합니다.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase JSON ↔ snake_case 속성."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ─────────────────────────────────────
# 공통 응답
# ─────────────────────────────────────
class HealthResponse(BaseModel):
    """헬스체크 응답."""
    status: str = "ok"
    version: str = "1.0.0"


class ErrorResponse(CamelModel):
    """에러 응답 (422: 요율 누락, 400: 입력 오류)."""
    ok: bool = False
    code: str
    message: str
    missing_regions: List[str] = Field(default_factory=list, description="기본운임 누락 지역")
    center_name: Optional[str] = None
    vehicle_type: Optional[str] = None
    field: Optional[str] = None


# ─────────────────────────────────────
# 운임 산출
# ─────────────────────────────────────
class QuoteRequest(CamelModel):
    """요율표 기반 운임 산출 요청."""
    center_name: str = Field(..., description="센터명")
    vehicle_type: str = Field(..., description="차량톤수 (예: 5톤)")
    regions: List[str] = Field(..., description="도착 지역 목록")
    stop_count: Optional[int] = Field(default=None, description="착지 수 (없으면 지역 수)")
    is_negotiated: bool = Field(default=False, description="협의운임 여부")
    negotiated_fare: Optional[int] = Field(default=None, description="협의금액 (원)")


class ManualQuoteRequest(CamelModel):
    """요율을 직접 입력하는 운임 산출 요청."""
    base_fare: Optional[int] = Field(default=None, description="기본운임 (원)")
    extra_stop_fee: Optional[int] = Field(default=None, description="착지당 경유료 (원)")
    extra_region_fee: Optional[int] = Field(default=None, description="지역당 지역료 (원)")
    stop_count: int = Field(default=1, description="착지 수")
    region_count: int = Field(default=1, description="지역 수")
    is_negotiated: bool = Field(default=False, description="협의운임 여부")
    negotiated_fare: Optional[int] = Field(default=None, description="협의금액 (원)")
    base_fare_region: Optional[str] = Field(default=None, description="기본운임 적용 지역")


class FareQuoteData(CamelModel):
    """운임 산출 결과."""
    base_fare: int
    extra_stop_fee: int = Field(..., description="경유료 합계")
    extra_region_fee: int = Field(..., description="지역료 합계")
    total: int
    formula: str
    is_negotiated: bool = False
    base_fare_region: Optional[str] = None


class QuoteResponse(CamelModel):
    """운임 산출 응답."""
    ok: bool = True
    data: FareQuoteData


# ─────────────────────────────────────
# 수익성
# ─────────────────────────────────────
class BillableFields(CamelModel):
    """요청 1건의 청구/지급 항목 (null 은 0 / 미배정 처리)."""
    base_fare: Optional[int] = None
    extra_stop_fee: Optional[int] = None
    extra_region_fee: Optional[int] = None
    extra_adjustment: Optional[int] = None
    center_billing_total: Optional[int] = None
    driver_fee: Optional[int] = None


class ThresholdFields(CamelModel):
    """판정 기준 (없으면 서버 설정값)."""
    profit_threshold: Optional[float] = None
    break_even_threshold: Optional[float] = None


class ProfitabilityRequest(BillableFields, ThresholdFields):
    """수익성 계산 요청."""


class ProfitabilityData(CamelModel):
    """수익성 계산 결과."""
    center_billing: int
    driver_fee: int
    margin: int
    margin_rate: float
    status: str
    status_label: str
    status_color: str
    recommendation: Optional[str] = None
    icon: str
    summary: str


class ProfitabilityResponse(CamelModel):
    """수익성 계산 응답."""
    ok: bool = True
    data: ProfitabilityData


class RecommendedFeeRequest(BillableFields):
    """권장 기사 운임 요청."""
    target_margin_rate: Optional[float] = Field(default=None, description="목표 마진율 (%)")


class RecommendedFeeResponse(CamelModel):
    """권장 기사 운임 응답."""
    ok: bool = True
    center_billing: int
    target_margin_rate: float
    recommended_driver_fee: int


class ProfitabilityExportRequest(ThresholdFields):
    """수익성 엑셀 내보내기 요청."""
    rows: List[Dict[str, Any]] = Field(..., description="요청 행 목록")
    sheet_name: str = Field(default="수익성", description="시트명")


# ─────────────────────────────────────
# 요율표
# ─────────────────────────────────────
class CenterFareCreate(CamelModel):
    """요율 등록 요청."""
    center_name: str
    vehicle_type: str
    fare_type: str = Field(..., description="기본운임 / 경유운임")
    region: Optional[str] = None
    base_fare: Optional[int] = None
    extra_stop_fee: Optional[int] = None
    extra_region_fee: Optional[int] = None


class CenterFareCreated(CamelModel):
    """요율 등록 응답."""
    ok: bool = True
    fare_id: int
