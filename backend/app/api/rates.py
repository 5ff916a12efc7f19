"""
backend/app/api/rates.py - 센터 요율표 관리 API
운임 산출(/quote)이 조회하는 center_fares 테이블을 관리합니다.
"""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from pricing import (
    FARE_TYPE_BASIC,
    FARE_TYPE_EXTRA,
    FareError,
    deactivate_center_fare,
    list_center_fares,
    upsert_center_fare,
)
from backend.app.models import CenterFareCreate, CenterFareCreated, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rates", tags=["rates"])

FARE_TYPES_INFO = {
    FARE_TYPE_BASIC: "지역별 기본운임 (baseFare)",
    FARE_TYPE_EXTRA: "착지당 경유료 / 지역당 지역료 (extraStopFee, extraRegionFee)",
}


@router.get("/fare-types")
async def list_fare_types():
    """요율 구분 목록"""
    return FARE_TYPES_INFO


@router.get("/center-fares")
async def get_center_fares(
    center_name: Optional[str] = None,
    vehicle_type: Optional[str] = None,
    include_inactive: bool = False,
):
    """센터 요율표 조회"""
    try:
        df = list_center_fares(center_name, vehicle_type, include_inactive)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    result = []
    for _, row in df.iterrows():
        result.append({
            "fareId": int(row["fare_id"]),
            "centerName": row["center_name"],
            "vehicleType": row["vehicle_type"],
            "region": row["region"] or None,
            "fareType": row["fare_type"],
            "baseFare": _nullable_int(row["base_fare"]),
            "extraStopFee": _nullable_int(row["extra_stop_fee"]),
            "extraRegionFee": _nullable_int(row["extra_region_fee"]),
            "isActive": bool(row["is_active"]),
            "createdAt": row["created_at"],
        })
    return result


@router.post("/center-fares", response_model=CenterFareCreated, responses={400: {"model": ErrorResponse}})
async def create_center_fare(req: CenterFareCreate) -> CenterFareCreated:
    """요율 등록 (같은 키의 기존 요율은 비활성화)"""
    try:
        fare_id = upsert_center_fare(
            req.center_name,
            req.vehicle_type,
            req.fare_type,
            region=req.region,
            base_fare=req.base_fare,
            extra_stop_fee=req.extra_stop_fee,
            extra_region_fee=req.extra_region_fee,
        )
        return CenterFareCreated(ok=True, fare_id=fare_id)
    except FareError:
        raise
    except Exception as e:
        logger.error(f"요율 등록 실패: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/center-fares/{fare_id}")
async def delete_center_fare(fare_id: int):
    """요율 삭제 (비활성화)"""
    if not deactivate_center_fare(fare_id):
        raise HTTPException(status_code=404, detail=f"Center fare '{fare_id}' not found")
    return {"status": "success", "fareId": fare_id}


def _nullable_int(value) -> Optional[int]:
    if value is None or value != value:  # NaN
        return None
    return int(value)
