from dataclasses import replace

import pytest

from pricing import (
    BREAK_EVEN,
    LOSS,
    PROFIT,
    BillableRequest,
    InvalidInputError,
    ProfitabilityThresholds,
    calculate_profitability,
    calculate_recommended_driver_fee,
    generate_profitability_summary,
    get_profitability_icon,
    resolve_center_billing,
)


# ─────────────────────────────────────
# 수익성 계산
# ─────────────────────────────────────
def test_basic_profitability(base_request):
    result = calculate_profitability(base_request)

    assert result.center_billing == 380000
    assert result.driver_fee == 250000
    assert result.margin == 130000
    assert result.margin_rate == pytest.approx(34.21, abs=0.01)
    assert result.status == PROFIT
    assert result.status_label == "✅ 수익"
    assert result.recommendation is None


def test_center_billing_total_wins(base_request):
    result = calculate_profitability(replace(base_request, center_billing_total=400000))

    assert result.center_billing == 400000
    assert result.margin == 150000
    assert result.margin_rate == pytest.approx(37.5)


def test_zero_center_billing_total_is_still_an_override(base_request):
    result = calculate_profitability(replace(base_request, center_billing_total=0))

    assert result.center_billing == 0
    assert result.margin_rate == 0


def test_negative_adjustment(base_request):
    result = calculate_profitability(replace(base_request, extra_adjustment=-20000))

    assert result.center_billing == 360000
    assert result.margin == 110000
    assert result.margin_rate == pytest.approx(30.56, abs=0.01)
    assert result.status == PROFIT


def test_negative_billing_sum_is_not_clamped():
    request = BillableRequest(base_fare=10000, extra_adjustment=-30000)
    assert resolve_center_billing(request) == -20000
    assert calculate_profitability(request).center_billing == -20000


def test_zero_driver_fee(base_request):
    result = calculate_profitability(replace(base_request, driver_fee=0))

    assert result.margin == 380000
    assert result.margin_rate == 100
    assert result.status == PROFIT


def test_unassigned_driver(base_request):
    result = calculate_profitability(replace(base_request, driver_fee=None))

    assert result.driver_fee == 0
    assert result.margin == 380000
    assert result.margin_rate == 100


def test_zero_billing_with_driver_fee_is_break_even():
    # 청구 0 → 마진율 0 고정, 기본 기준에서는 '보통'
    request = BillableRequest(base_fare=0, extra_stop_fee=0, extra_region_fee=0, driver_fee=100000)
    result = calculate_profitability(request)

    assert result.center_billing == 0
    assert result.margin == -100000
    assert result.margin_rate == 0
    assert result.status == BREAK_EVEN


def test_negative_billing_uses_plain_ratio():
    # 음수 청구는 0 보정 없이 계산: -30000 / -20000 → 150%
    request = BillableRequest(base_fare=10000, extra_adjustment=-30000, driver_fee=10000)
    result = calculate_profitability(request)

    assert result.center_billing == -20000
    assert result.margin == -30000
    assert result.margin_rate == pytest.approx(150.0)
    assert result.status == PROFIT


@pytest.mark.parametrize("fee, status, label", [
    (200000, PROFIT, "✅ 수익"),      # 47.37%
    (280000, PROFIT, "✅ 수익"),      # 26.32%
    (320000, BREAK_EVEN, "⚠️ 보통"),  # 15.79%
    (360000, BREAK_EVEN, "⚠️ 보통"),  # 5.26%
    (400000, LOSS, "❌ 손실"),        # -5.26%
])
def test_classification(base_request, fee, status, label):
    result = calculate_profitability(replace(base_request, driver_fee=fee))

    assert result.status == status
    assert result.status_label == label
    assert result.status_color


def test_threshold_boundaries_are_inclusive():
    request = BillableRequest(center_billing_total=100000, driver_fee=80000)  # 20%
    assert calculate_profitability(request).status == PROFIT

    request = BillableRequest(center_billing_total=100000, driver_fee=100000)  # 0%
    assert calculate_profitability(request).status == BREAK_EVEN


def test_custom_thresholds(base_request):
    thresholds = ProfitabilityThresholds(profit_threshold=30, break_even_threshold=10)
    result = calculate_profitability(replace(base_request, driver_fee=280000), thresholds)

    assert result.status == BREAK_EVEN


def test_thresholds_must_be_ordered():
    with pytest.raises(InvalidInputError):
        ProfitabilityThresholds(profit_threshold=5, break_even_threshold=10)


def test_recommendation_text(base_request):
    result = calculate_profitability(replace(base_request, driver_fee=320000))
    assert result.recommendation == "마진율이 15.8%로 낮습니다. 기사 운임 조정을 고려해보세요."

    result = calculate_profitability(replace(base_request, driver_fee=400000))
    assert result.recommendation.startswith("손실 발생! 현재 마진율 -5.3%")


def test_repeated_calls_are_identical_and_do_not_mutate(base_request):
    snapshot = replace(base_request)

    first = calculate_profitability(base_request)
    second = calculate_profitability(base_request)

    assert first == second
    assert base_request == snapshot


def test_classification_is_monotonic():
    rank = {LOSS: 0, BREAK_EVEN: 1, PROFIT: 2}
    billing = 380000
    ranks = [
        rank[calculate_profitability(BillableRequest(center_billing_total=billing, driver_fee=fee)).status]
        for fee in range(500000, -1, -1000)  # 기사 운임 감소 → 마진율 증가
    ]

    assert ranks == sorted(ranks)
    assert all(b - a <= 1 for a, b in zip(ranks, ranks[1:]))


def test_summary_and_icon(base_request):
    result = calculate_profitability(base_request)

    assert generate_profitability_summary(result) == (
        "청구 380,000원 - 기사비 250,000원 = 수익 130,000원 (34.2%) 👍"
    )
    assert get_profitability_icon(result.margin_rate) == "🟢"
    assert get_profitability_icon(10) == "🟡"
    assert get_profitability_icon(-0.1) == "🔴"


# ─────────────────────────────────────
# 권장 기사 운임
# ─────────────────────────────────────
def test_recommended_fee_default_target(base_request):
    assert calculate_recommended_driver_fee(base_request) == 285000  # 380,000 × 0.75


@pytest.mark.parametrize("billing, target, expected", [
    (100000, 25, 75000),
    (123456, 25, 93000),   # 92,592 → 93,000
    (150000, 30, 105000),
    (200000, 20, 160000),
    (2000, 75, 1000),      # 500 → 1,000 (0에서 먼 쪽)
])
def test_recommended_fee_rounding(billing, target, expected):
    request = BillableRequest(center_billing_total=billing)
    assert calculate_recommended_driver_fee(request, target) == expected


def test_recommended_fee_zero_billing():
    assert calculate_recommended_driver_fee(BillableRequest()) == 0


@pytest.mark.parametrize("target", [-1, 101, float("nan")])
def test_recommended_fee_rejects_bad_target(base_request, target):
    with pytest.raises(InvalidInputError):
        calculate_recommended_driver_fee(base_request, target)


@pytest.mark.parametrize("billing", [380000, 123456, 1000000, 55555])
@pytest.mark.parametrize("target", [10, 25, 30, 50])
def test_recommended_fee_hits_target_margin(billing, target):
    request = BillableRequest(center_billing_total=billing)
    fee = calculate_recommended_driver_fee(request, target)

    rate = calculate_profitability(replace(request, driver_fee=fee)).margin_rate
    tolerance = 500 / billing * 100  # 1000원 단위 반올림 오차

    assert abs(rate - target) <= tolerance + 1e-9
