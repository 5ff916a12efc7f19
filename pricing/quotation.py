"""
pricing/quotation.py - 운임 산출
───────────────────────────────────
기본운임 + 경유료 × (착지수 - 1) + 지역료 × (지역수 - 1)

협의운임이면 협의금액이 총액이 되고, 나머지 항목은 표시용입니다.
요율 조회는 rate_lookup.py 에서 처리하며 여기서는 계산만 합니다.
"""
from __future__ import annotations

from .errors import MissingRateError, MissingSurchargeError
from .models import FareComponents, FareQuote


def _surcharges(c: FareComponents) -> tuple:
    stop_surcharge = (c.extra_stop_fee or 0) * max(0, c.stop_count - 1)
    region_surcharge = (c.extra_region_fee or 0) * max(0, c.region_count - 1)
    return stop_surcharge, region_surcharge


def build_formula(c: FareComponents, total: int) -> str:
    """감사 표시용 계산식 문자열."""
    base_label = f"{c.base_fare_region} 기본료" if c.base_fare_region else "기본료"
    return (
        f"{base_label} {(c.base_fare or 0):,}원"
        f" + 경유료 {(c.extra_stop_fee or 0):,}원 × (착지수 {c.stop_count} - 1)"
        f" + 지역료 {(c.extra_region_fee or 0):,}원 × (지역수 {c.region_count} - 1)"
        f" = {total:,}원"
    )


def quote_fare(components: FareComponents) -> FareQuote:
    """
    운임 산출.

    Args:
        components: 요율 조회 결과 + 착지/지역 수

    Returns:
        FareQuote (기본료, 경유료 합계, 지역료 합계, 총액, 계산식)

    Raises:
        MissingRateError: 기본운임 없음 (협의운임 제외)
        MissingSurchargeError: 경유/지역 요율 없음 (협의운임 제외)
    """
    c = components

    if c.is_negotiated:
        stop_surcharge, region_surcharge = _surcharges(c)
        computed = (c.base_fare or 0) + stop_surcharge + region_surcharge
        return FareQuote(
            base_fare=c.base_fare or 0,
            extra_stop_fee=stop_surcharge,
            extra_region_fee=region_surcharge,
            total=c.negotiated_fare,
            formula=f"협의운임 {c.negotiated_fare:,}원 (산출운임 {computed:,}원)",
            is_negotiated=True,
            base_fare_region=c.base_fare_region,
        )

    if c.base_fare is None:
        raise MissingRateError(
            f"{c.base_fare_region} 지역의 기본운임이 등록되지 않았습니다"
            if c.base_fare_region else None,
            missing_regions=[c.base_fare_region] if c.base_fare_region else [],
        )
    if c.extra_stop_fee is None or c.extra_region_fee is None:
        raise MissingSurchargeError()

    stop_surcharge, region_surcharge = _surcharges(c)
    total = c.base_fare + stop_surcharge + region_surcharge

    return FareQuote(
        base_fare=c.base_fare,
        extra_stop_fee=stop_surcharge,
        extra_region_fee=region_surcharge,
        total=total,
        formula=build_formula(c, total),
        is_negotiated=False,
        base_fare_region=c.base_fare_region,
    )
