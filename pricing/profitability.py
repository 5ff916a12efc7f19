"""
pricing/profitability.py - 수익성 계산
───────────────────────────────────────────
센터 청구액 - 기사 운임 = 마진, 마진율로 수익/보통/손실 판정.

모든 화면/엑셀 내보내기에서 같은 함수를 사용합니다.
입력은 변경하지 않으며, 캐시나 전역 상태가 없습니다.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .errors import InvalidInputError
from .models import (
    BREAK_EVEN,
    LOSS,
    PROFIT,
    BillableRequest,
    ProfitabilityResult,
    ProfitabilityThresholds,
    check_percent,
)

# ─────────────────────────────────────
# 표시용 상수
# ─────────────────────────────────────
STATUS_LABELS = {
    PROFIT: "✅ 수익",
    BREAK_EVEN: "⚠️ 보통",
    LOSS: "❌ 손실",
}

STATUS_COLORS = {
    PROFIT: "text-green-600 bg-green-50 border-green-200",
    BREAK_EVEN: "text-yellow-600 bg-yellow-50 border-yellow-200",
    LOSS: "text-red-600 bg-red-50 border-red-200",
}

FEE_ROUNDING_UNIT = 1000  # 1000원 단위
DEFAULT_TARGET_MARGIN_RATE = 25


def resolve_center_billing(request: BillableRequest) -> int:
    """센터 청구액: centerBillingTotal 우선, 없으면 항목 합계 (음수 허용)."""
    if request.center_billing_total is not None:
        return request.center_billing_total
    return (
        request.base_fare
        + request.extra_stop_fee
        + request.extra_region_fee
        + request.extra_adjustment
    )


def classify_margin_rate(margin_rate: float, thresholds: ProfitabilityThresholds) -> str:
    if margin_rate >= thresholds.profit_threshold:
        return PROFIT
    if margin_rate >= thresholds.break_even_threshold:
        return BREAK_EVEN
    return LOSS


def _recommendation(status: str, margin_rate: float) -> Optional[str]:
    if status == BREAK_EVEN:
        return f"마진율이 {margin_rate:.1f}%로 낮습니다. 기사 운임 조정을 고려해보세요."
    if status == LOSS:
        return f"손실 발생! 현재 마진율 {margin_rate:.1f}%. 즉시 운임 조정이 필요합니다."
    return None


def calculate_profitability(
    request: BillableRequest,
    thresholds: Optional[ProfitabilityThresholds] = None,
) -> ProfitabilityResult:
    """
    요청 1건의 수익성 계산.

    Args:
        request: 청구 항목 + 기사 운임
        thresholds: 판정 기준 (기본: 수익 20%, 손익분기 0%)

    Returns:
        ProfitabilityResult

    Note:
        청구액이 0이면 마진율은 0으로 고정됩니다. 기사 운임만 있고 청구액이
        0인 경우에도 '보통'으로 분류되는데, 기존 화면과 같은 결과를 내기 위해
        그대로 둡니다.
        청구액이 음수이면 0 보정 없이 비율을 그대로 계산합니다. 청구 -20,000원,
        기사 운임 10,000원이면 마진 -30,000원, 마진율 150%로 '수익'이 됩니다.
    """
    thresholds = thresholds or ProfitabilityThresholds()

    center_billing = resolve_center_billing(request)
    driver_fee = request.driver_fee if request.driver_fee is not None else 0

    margin = center_billing - driver_fee
    margin_rate = 0.0 if center_billing == 0 else (margin / center_billing) * 100

    status = classify_margin_rate(margin_rate, thresholds)

    return ProfitabilityResult(
        center_billing=center_billing,
        driver_fee=driver_fee,
        margin=margin,
        margin_rate=margin_rate,
        status=status,
        status_label=STATUS_LABELS[status],
        status_color=STATUS_COLORS[status],
        recommendation=_recommendation(status, margin_rate),
    )


def calculate_recommended_driver_fee(
    request: BillableRequest,
    target_margin_rate: float = DEFAULT_TARGET_MARGIN_RATE,
) -> int:
    """
    목표 마진율을 맞추는 권장 기사 운임 (1000원 단위 반올림).

    반올림은 0에서 먼 쪽 (92,592 → 93,000).
    """
    target = check_percent("target_margin_rate", target_margin_rate)
    if not 0 <= target <= 100:
        raise InvalidInputError(
            f"목표 마진율은 0~100 사이여야 합니다: {target}", field="target_margin_rate"
        )

    center_billing = resolve_center_billing(request)
    if center_billing <= 0:
        return 0

    raw_fee = Decimal(center_billing) * (1 - Decimal(str(target)) / 100)
    units = (raw_fee / FEE_ROUNDING_UNIT).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(units) * FEE_ROUNDING_UNIT


def get_profitability_icon(margin_rate: float) -> str:
    if margin_rate >= 20:
        return "🟢"
    if margin_rate >= 0:
        return "🟡"
    return "🔴"


def generate_profitability_summary(result: ProfitabilityResult) -> str:
    """한 줄 요약 (목록/알림용)."""
    billing = f"{result.center_billing:,}"
    fee = f"{result.driver_fee:,}"
    margin = f"{result.margin:,}"
    rate = f"{result.margin_rate:.1f}"

    if result.status == PROFIT:
        return f"청구 {billing}원 - 기사비 {fee}원 = 수익 {margin}원 ({rate}%) 👍"
    if result.status == BREAK_EVEN:
        return f"청구 {billing}원 - 기사비 {fee}원 = 마진 {margin}원 ({rate}%) ⚠️"
    if result.status == LOSS:
        return f"청구 {billing}원 - 기사비 {fee}원 = 손실 {margin}원 ({rate}%) ❌"
    return "수익성 계산 불가"
