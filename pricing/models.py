"""
pricing/models.py - 요금 계산 입출력 타입
───────────────────────────────────────────
- FareComponents: 요율 조회 결과 + 착지/지역 수 (운임 산출 입력)
- BillableRequest: 센터 청구 항목 + 기사 운임 (수익성 입력)
- ProfitabilityThresholds: 수익/손익분기 기준 (%)
- FareQuote / ProfitabilityResult: 계산 결과 (저장하지 않음)

금액은 모두 정수(원). 생성 시점에 검증하고, 잘못된 값은
InvalidInputError 로 즉시 실패합니다 (음수 → 0 보정 없음).
"""
from __future__ import annotations

import math
import numbers
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional

import pandas as pd

from .errors import InvalidInputError

PROFIT = "profit"
BREAK_EVEN = "break-even"
LOSS = "loss"


# ─────────────────────────────────────
# 검증 헬퍼
# ─────────────────────────────────────
def check_amount(
    name: str,
    value: Any,
    *,
    allow_none: bool = False,
    allow_negative: bool = False,
) -> Optional[int]:
    if value is None:
        if allow_none:
            return None
        raise InvalidInputError(f"'{name}' 값이 필요합니다", field=name)
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(f"'{name}' 는 정수 금액이어야 합니다: {value!r}", field=name)
    value = int(value)
    if value < 0 and not allow_negative:
        raise InvalidInputError(f"'{name}' 는 음수일 수 없습니다: {value}", field=name)
    return value


def _check_count(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(f"'{name}' 는 정수여야 합니다: {value!r}", field=name)
    if value < 1:
        raise InvalidInputError(f"'{name}' 는 1 이상이어야 합니다: {value}", field=name)
    return int(value)


def check_percent(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(f"'{name}' 는 숫자여야 합니다: {value!r}", field=name)
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInputError(f"'{name}' 는 유한한 값이어야 합니다", field=name)
    return value


def _coerce_cell(name: str, value: Any) -> Any:
    """DataFrame/JSON 셀 값을 정수 금액으로 정리 (NaN/NA/빈칸 → None)."""
    if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
        return None
    if isinstance(value, str):
        text = value.replace(",", "").strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            raise InvalidInputError(f"'{name}' 값을 숫자로 읽을 수 없습니다: {value!r}", field=name) from None
    if isinstance(value, numbers.Real) and not isinstance(value, (bool, numbers.Integral)):
        if math.isnan(value):
            return None
        if not float(value).is_integer():
            raise InvalidInputError(f"'{name}' 는 정수 금액이어야 합니다: {value}", field=name)
        return int(value)
    return value


# ─────────────────────────────────────
# 입력 타입
# ─────────────────────────────────────
@dataclass(frozen=True)
class FareComponents:
    """운임 산출 입력."""

    base_fare: Optional[int]
    extra_stop_fee: Optional[int]
    extra_region_fee: Optional[int]
    stop_count: int = 1
    region_count: int = 1
    is_negotiated: bool = False
    negotiated_fare: Optional[int] = None
    base_fare_region: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("base_fare", "extra_stop_fee", "extra_region_fee", "negotiated_fare"):
            object.__setattr__(self, name, check_amount(name, getattr(self, name), allow_none=True))
        object.__setattr__(self, "stop_count", _check_count("stop_count", self.stop_count))
        object.__setattr__(self, "region_count", _check_count("region_count", self.region_count))
        if not isinstance(self.is_negotiated, bool):
            raise InvalidInputError("'is_negotiated' 는 bool 이어야 합니다", field="is_negotiated")
        if self.is_negotiated and self.negotiated_fare is None:
            raise InvalidInputError("협의금액이 설정되었지만 유효하지 않습니다", field="negotiated_fare")


@dataclass(frozen=True)
class BillableRequest:
    """수익성 계산 입력 (요청 1건의 청구/지급 스냅샷)."""

    base_fare: int = 0
    extra_stop_fee: int = 0
    extra_region_fee: int = 0
    extra_adjustment: int = 0
    center_billing_total: Optional[int] = None
    driver_fee: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("base_fare", "extra_stop_fee", "extra_region_fee"):
            object.__setattr__(self, name, check_amount(name, getattr(self, name)))
        object.__setattr__(
            self, "extra_adjustment",
            check_amount("extra_adjustment", self.extra_adjustment, allow_negative=True),
        )
        object.__setattr__(
            self, "center_billing_total",
            check_amount("center_billing_total", self.center_billing_total, allow_none=True),
        )
        object.__setattr__(
            self, "driver_fee",
            check_amount("driver_fee", self.driver_fee, allow_none=True),
        )

    # 행 데이터(dict, pandas Series)의 컬럼명 후보
    _KEYS = {
        "base_fare": ("base_fare", "baseFare"),
        "extra_stop_fee": ("extra_stop_fee", "extraStopFee"),
        "extra_region_fee": ("extra_region_fee", "extraRegionFee"),
        "extra_adjustment": ("extra_adjustment", "extraAdjustment"),
        "center_billing_total": ("center_billing_total", "centerBillingTotal"),
        "driver_fee": ("driver_fee", "driverFee"),
    }

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "BillableRequest":
        """
        느슨한 행 데이터에서 BillableRequest 생성.

        snake_case / camelCase 키 모두 허용, NaN/빈칸은 기본값 처리.
        """
        kwargs: Dict[str, Any] = {}
        for attr, keys in cls._KEYS.items():
            for key in keys:
                if key in row:
                    value = _coerce_cell(attr, row[key])
                    if value is not None:
                        kwargs[attr] = value
                    break
        return cls(**kwargs)


@dataclass(frozen=True)
class ProfitabilityThresholds:
    """수익성 판정 기준 (%)."""

    profit_threshold: float = 20.0
    break_even_threshold: float = 0.0

    def __post_init__(self) -> None:
        profit = check_percent("profit_threshold", self.profit_threshold)
        break_even = check_percent("break_even_threshold", self.break_even_threshold)
        if profit < break_even:
            raise InvalidInputError(
                f"수익 기준({profit})이 손익분기 기준({break_even})보다 낮습니다",
                field="profit_threshold",
            )
        object.__setattr__(self, "profit_threshold", profit)
        object.__setattr__(self, "break_even_threshold", break_even)


# ─────────────────────────────────────
# 결과 타입
# ─────────────────────────────────────
@dataclass(frozen=True)
class FareQuote:
    """운임 산출 결과."""

    base_fare: int
    extra_stop_fee: int
    extra_region_fee: int
    total: int
    formula: str
    is_negotiated: bool = False
    base_fare_region: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProfitabilityResult:
    """수익성 계산 결과."""

    center_billing: int
    driver_fee: int
    margin: int
    margin_rate: float
    status: str
    status_label: str
    status_color: str
    recommendation: Optional[str] = field(default=None)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
