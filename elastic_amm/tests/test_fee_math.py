"""
Fee Math 테스트

fee growth outside/inside 구조와 rToken 청구량 계산을 테스트합니다.
"""

import pytest

from ..constants import Q96
from ..math.fee_math import (
    FEE_GROWTH_MODULUS,
    SECONDS_PER_LIQUIDITY_MODULUS,
    calculate_fee_growth_delta,
    calculate_fees_claimable,
    fee_growth_above,
    fee_growth_below,
    fee_growth_inside,
)


class TestFeeGrowthAboveBelow:
    """f_a / f_b 테스트"""

    def test_current_tick_at_or_above(self):
        """i_c >= i 이면 f_a = f_g - f_o, f_b = f_o"""
        assert fee_growth_above(tick_idx=60, current_tick=60,
                                fee_growth_global=5000, fee_growth_outside=1200) == 3800
        assert fee_growth_below(tick_idx=60, current_tick=120,
                                fee_growth_global=5000, fee_growth_outside=1200) == 1200

    def test_current_tick_below(self):
        """i_c < i 이면 f_a = f_o, f_b = f_g - f_o"""
        assert fee_growth_above(tick_idx=60, current_tick=0,
                                fee_growth_global=5000, fee_growth_outside=1200) == 1200
        assert fee_growth_below(tick_idx=60, current_tick=59,
                                fee_growth_global=5000, fee_growth_outside=1200) == 3800


class TestFeeGrowthInside:
    """fee_growth_inside 테스트 (f_r = f_g - f_b(i_l) - f_a(i_u))"""

    def test_in_range(self):
        # f_b = 100, f_a = 200
        result = fee_growth_inside(
            tick_lower=-60, tick_upper=60, current_tick=0,
            fee_growth_global=1000,
            fee_growth_outside_lower=100,
            fee_growth_outside_upper=200
        )
        assert result == 700

    def test_below_range_wraps(self):
        """범위 아래: 1000 - 900 - 200 = -100 -> 2^256 래핑"""
        result = fee_growth_inside(
            tick_lower=-60, tick_upper=60, current_tick=-120,
            fee_growth_global=1000,
            fee_growth_outside_lower=100,
            fee_growth_outside_upper=200
        )
        assert result == FEE_GROWTH_MODULUS - 100

    def test_above_range(self):
        # f_b = 100, f_a = 1000 - 200 = 800
        result = fee_growth_inside(
            tick_lower=-60, tick_upper=60, current_tick=60,
            fee_growth_global=1000,
            fee_growth_outside_lower=100,
            fee_growth_outside_upper=200
        )
        assert result == 100

    def test_seconds_per_liquidity_modulus(self):
        """seconds-per-liquidity 는 2^128 로 래핑"""
        result = fee_growth_inside(
            tick_lower=-60, tick_upper=60, current_tick=-120,
            fee_growth_global=1000,
            fee_growth_outside_lower=100,
            fee_growth_outside_upper=200,
            modulus=SECONDS_PER_LIQUIDITY_MODULUS
        )
        assert result == SECONDS_PER_LIQUIDITY_MODULUS - 100

    def test_wrapped_inside_still_yields_correct_delta(self):
        """래핑된 f_r 이라도 두 시점의 차이는 정확함"""
        before = fee_growth_inside(-60, 60, -120, 1000, 100, 200)
        after = fee_growth_inside(-60, 60, -120, 1500, 100, 200)
        # 범위 아래에서는 범위 내 수수료가 변하지 않음
        assert calculate_fee_growth_delta(after, before) == 0


class TestCalculateFeesClaimable:
    """calculate_fees_claimable 테스트 (rToken = l × Δf_r / 2^96)"""

    def test_basic_calculation(self):
        assert calculate_fees_claimable(10 ** 18, 3 * Q96, Q96) == 2 * 10 ** 18

    def test_rounds_down(self):
        """내림"""
        assert calculate_fees_claimable(3, Q96 // 2, 0) == 1

    def test_zero_delta(self):
        assert calculate_fees_claimable(10 ** 18, 5 * Q96, 5 * Q96) == 0

    def test_wraparound(self):
        """전역 누적값이 2^256 을 넘어 래핑된 경우"""
        last = FEE_GROWTH_MODULUS - Q96
        current = Q96
        assert calculate_fees_claimable(1000, current, last) == 2000


class TestCalculateFeeGrowthDelta:
    """calculate_fee_growth_delta 테스트"""

    def test_normal_delta(self):
        assert calculate_fee_growth_delta(1000, 500) == 500

    def test_underflow_wraparound(self):
        assert calculate_fee_growth_delta(100, 200) == FEE_GROWTH_MODULUS - 100


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
