"""
pricing/rate_lookup.py - 센터 요율 조회
───────────────────────────────────────────
(센터, 차량톤수, 지역 목록) → FareComponents

- 기본운임: 모든 지역에 기본운임 행이 있어야 하며, 그중 최댓값을 사용
- 경유운임: (센터, 차량톤수) 행의 경유료/지역료
- 누락 시 MissingRateError(missing_regions) / MissingSurchargeError

협의운임이면 누락을 오류로 보지 않고 표시용 값만 채웁니다.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Iterable, List, Optional

import pandas as pd

from .db import (
    FARE_TYPE_BASIC,
    FARE_TYPE_EXTRA,
    FARE_TYPES,
    get_connection,
    now_str,
    read_fares_df,
)
from .errors import InvalidInputError, MissingRateError, MissingSurchargeError
from .models import FareComponents, check_amount
from .regions import normalize_region, unique_regions

logger = logging.getLogger(__name__)


def _int_or_none(value) -> Optional[int]:
    if value is None or pd.isna(value):
        return None
    return int(value)


def _active_rows(
    con: Optional[sqlite3.Connection], center_name: str, vehicle_type: str
) -> pd.DataFrame:
    return read_fares_df(
        """
        SELECT fare_id, region, fare_type, base_fare, extra_stop_fee, extra_region_fee
          FROM center_fares
         WHERE center_name = ? AND vehicle_type = ? AND is_active = 1
         ORDER BY created_at DESC, fare_id DESC
        """,
        [center_name, vehicle_type],
        con=con,
    )


# ─────────────────────────────────────
# 조회
# ─────────────────────────────────────
def lookup_fare_components(
    center_name: str,
    vehicle_type: str,
    regions: Iterable[str],
    stop_count: Optional[int] = None,
    *,
    is_negotiated: bool = False,
    negotiated_fare: Optional[int] = None,
    con: Optional[sqlite3.Connection] = None,
) -> FareComponents:
    """
    요율표에서 운임 산출 입력을 구성.

    Args:
        center_name: 센터명
        vehicle_type: 차량톤수 (예: '5톤')
        regions: 도착 지역 목록 (정규화/중복 제거됨)
        stop_count: 착지 수 (지역 수보다 작으면 지역 수로 보정)
        is_negotiated / negotiated_fare: 협의운임
        con: 기존 연결 (없으면 새로 연결)

    Raises:
        InvalidInputError: 지역 없음
        MissingRateError: 기본운임 누락 지역이 있음
        MissingSurchargeError: 경유운임 행 누락
    """
    region_list = unique_regions(regions)
    if not region_list:
        raise InvalidInputError("지역 정보는 필수입니다", field="regions")

    if stop_count is None:
        stop_count = len(region_list)
    elif type(stop_count) is int and 1 <= stop_count < len(region_list):
        logger.info(f"착지 수 보정: {stop_count} → {len(region_list)} ({center_name}/{vehicle_type})")
        stop_count = len(region_list)

    rows = _active_rows(con, center_name, vehicle_type)

    basic = rows[rows["fare_type"] == FARE_TYPE_BASIC]
    extra = rows[rows["fare_type"] == FARE_TYPE_EXTRA]

    # ① 기본운임: 지역별 최신 행
    base_by_region = {}
    for region in region_list:
        match = basic[basic["region"] == region]
        fare = _int_or_none(match.iloc[0]["base_fare"]) if not match.empty else None
        if fare is not None:
            base_by_region[region] = fare

    missing = [r for r in region_list if r not in base_by_region]

    # ② 경유운임
    stop_fee = region_fee = None
    if not extra.empty:
        stop_fee = _int_or_none(extra.iloc[0]["extra_stop_fee"])
        region_fee = _int_or_none(extra.iloc[0]["extra_region_fee"])

    base_fare = base_region = None
    if base_by_region:
        # 동일 금액이면 먼저 입력된 지역
        base_region = max(base_by_region, key=lambda r: base_by_region[r])
        base_fare = base_by_region[base_region]

    if not is_negotiated:
        if missing:
            label = ", ".join(missing)
            logger.warning(f"기본운임 누락: {center_name}/{vehicle_type} - {label}")
            raise MissingRateError(
                f"{label} 지역의 기본운임이 등록되지 않았습니다",
                missing_regions=missing,
                center_name=center_name,
                vehicle_type=vehicle_type,
            )
        if stop_fee is None or region_fee is None:
            logger.warning(f"경유운임 누락: {center_name}/{vehicle_type}")
            raise MissingSurchargeError(
                center_name=center_name,
                vehicle_type=vehicle_type,
            )

    return FareComponents(
        base_fare=base_fare,
        extra_stop_fee=stop_fee,
        extra_region_fee=region_fee,
        stop_count=stop_count,
        region_count=len(region_list),
        is_negotiated=is_negotiated,
        negotiated_fare=negotiated_fare,
        base_fare_region=base_region,
    )


# ─────────────────────────────────────
# 요율표 관리
# ─────────────────────────────────────
def list_center_fares(
    center_name: Optional[str] = None,
    vehicle_type: Optional[str] = None,
    include_inactive: bool = False,
) -> pd.DataFrame:
    """요율표 조회 (센터/차량톤수 필터)."""
    query = "SELECT * FROM center_fares WHERE 1=1"
    params: List = []
    if not include_inactive:
        query += " AND is_active = 1"
    if center_name:
        query += " AND center_name = ?"
        params.append(center_name)
    if vehicle_type:
        query += " AND vehicle_type = ?"
        params.append(vehicle_type)
    query += " ORDER BY center_name, vehicle_type, fare_type, region"

    return read_fares_df(query, params)


def upsert_center_fare(
    center_name: str,
    vehicle_type: str,
    fare_type: str,
    region: Optional[str] = None,
    base_fare: Optional[int] = None,
    extra_stop_fee: Optional[int] = None,
    extra_region_fee: Optional[int] = None,
) -> int:
    """
    요율 등록/수정.

    같은 키의 활성 행은 비활성화하고 새 행을 추가합니다 (이력 보존).
    Returns:
        새 fare_id
    """
    center_name = (center_name or "").strip()
    vehicle_type = (vehicle_type or "").strip()
    if not center_name:
        raise InvalidInputError("센터명은 필수입니다", field="center_name")
    if not vehicle_type:
        raise InvalidInputError("차량 타입은 필수입니다", field="vehicle_type")
    if fare_type not in FARE_TYPES:
        raise InvalidInputError(f"알 수 없는 요율 구분: {fare_type}", field="fare_type")

    if fare_type == FARE_TYPE_BASIC:
        region = normalize_region(region or "")
        if not region:
            raise InvalidInputError("기본운임에는 지역이 필요합니다", field="region")
        base_fare = check_amount("base_fare", base_fare)
        extra_stop_fee = extra_region_fee = None
    else:
        region = ""
        base_fare = None
        extra_stop_fee = check_amount("extra_stop_fee", extra_stop_fee)
        extra_region_fee = check_amount("extra_region_fee", extra_region_fee)

    with get_connection() as con:
        con.execute(
            """UPDATE center_fares SET is_active = 0
                WHERE center_name = ? AND vehicle_type = ? AND fare_type = ?
                  AND region = ? AND is_active = 1""",
            (center_name, vehicle_type, fare_type, region),
        )
        cur = con.execute(
            """INSERT INTO center_fares
               (center_name, vehicle_type, region, fare_type,
                base_fare, extra_stop_fee, extra_region_fee, is_active, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, 1, ?)""",
            (center_name, vehicle_type, region, fare_type,
             base_fare, extra_stop_fee, extra_region_fee, now_str()),
        )
        con.commit()
        fare_id = cur.lastrowid

    logger.info(f"요율 등록: {center_name}/{vehicle_type}/{fare_type}/{region or '-'} (id={fare_id})")
    return fare_id


def deactivate_center_fare(fare_id: int) -> bool:
    """요율 삭제 (비활성화). 대상이 없으면 False."""
    with get_connection() as con:
        cur = con.execute(
            "UPDATE center_fares SET is_active = 0 WHERE fare_id = ? AND is_active = 1",
            (fare_id,),
        )
        con.commit()
        return cur.rowcount > 0

