"""
Liquidity Math 테스트

유동성 ↔ 토큰 수량 변환과 부호/반올림 규칙을 테스트합니다.
"""

import pytest

from ..constants import Q96, UINT128_MAX
from ..errors import InsufficientLiquidity, Overflow
from ..math.liquidity_math import (
    apply_liquidity_delta,
    calc_required_qty0,
    calc_required_qty1,
    calc_unlock_qtys,
    get_amount0_delta,
    get_amount1_delta,
    get_qty0_from_burn_r_tokens,
    get_qty1_from_burn_r_tokens,
)
from ..math.sqrt_price_math import encode_price_sqrt, sqrt_price_x96_to_price
from ..math.tick_math import get_sqrt_ratio_at_tick

PRICE_1 = encode_price_sqrt(1, 1)
PRICE_121_100 = encode_price_sqrt(121, 100)


class TestAmountDeltas:
    """get_amount0_delta / get_amount1_delta 테스트"""

    def test_amount1_price_1_to_1_21(self):
        """가격 1 -> 1.21: Δy = L * 0.1"""
        assert get_amount1_delta(PRICE_1, PRICE_121_100, 10 ** 18, round_up=True) == 10 ** 17
        assert get_amount1_delta(PRICE_1, PRICE_121_100, 10 ** 18, round_up=False) == 10 ** 17 - 1

    def test_amount0_price_1_to_1_21(self):
        """가격 1 -> 1.21: Δx = L * (1 - 1/1.1)"""
        assert get_amount0_delta(PRICE_1, PRICE_121_100, 10 ** 18, round_up=True) == 90909090909090910
        assert get_amount0_delta(PRICE_1, PRICE_121_100, 10 ** 18, round_up=False) == 90909090909090909

    def test_order_independent(self):
        """가격 순서와 무관"""
        assert get_amount0_delta(PRICE_121_100, PRICE_1, 10 ** 18) == \
            get_amount0_delta(PRICE_1, PRICE_121_100, 10 ** 18)

    def test_zero_liquidity(self):
        assert get_amount0_delta(PRICE_1, PRICE_121_100, 0) == 0
        assert get_amount1_delta(PRICE_1, PRICE_121_100, 0) == 0


class TestRequiredQtys:
    """유동성 추가/제거 수량 부호 테스트"""

    def test_add_is_positive_remove_is_negative(self):
        lower = get_sqrt_ratio_at_tick(-600)
        upper = get_sqrt_ratio_at_tick(600)
        add0 = calc_required_qty0(lower, upper, 10 ** 18, is_add=True)
        remove0 = calc_required_qty0(lower, upper, 10 ** 18, is_add=False)
        add1 = calc_required_qty1(lower, upper, 10 ** 18, is_add=True)
        remove1 = calc_required_qty1(lower, upper, 10 ** 18, is_add=False)

        assert add0 > 0 and add1 > 0
        assert remove0 < 0 and remove1 < 0
        # 제거로 받는 양은 추가에 든 양을 넘지 않음
        assert -remove0 <= add0
        assert -remove1 <= add1

    def test_unlock_qtys_at_price_1(self):
        """가격 1 에서 잠금 유동성 수량"""
        assert calc_unlock_qtys(PRICE_1, 100000) == (100000, 100000)

    def test_unlock_qtys_round_up(self):
        qty0, qty1 = calc_unlock_qtys(encode_price_sqrt(4, 1), 100001)
        # sqrtP = 2 -> qty0 = L / 2 (올림), qty1 = L * 2
        assert qty0 == 50001
        assert qty1 == 200002

    def test_burn_r_tokens_qtys(self):
        assert get_qty0_from_burn_r_tokens(Q96, 1000) == 1000
        assert get_qty1_from_burn_r_tokens(Q96, 1000) == 1000


class TestApplyLiquidityDelta:
    """apply_liquidity_delta 테스트"""

    def test_add_and_remove(self):
        assert apply_liquidity_delta(100, 50, True) == 150
        assert apply_liquidity_delta(100, 50, False) == 50

    def test_underflow(self):
        with pytest.raises(InsufficientLiquidity):
            apply_liquidity_delta(10, 11, False)

    def test_overflow(self):
        with pytest.raises(Overflow):
            apply_liquidity_delta(UINT128_MAX, 1, True)


class TestPriceEncoding:
    """encode_price_sqrt / sqrt_price_x96_to_price 테스트"""

    def test_encode_one(self):
        assert encode_price_sqrt(1, 1) == Q96

    def test_encode_four(self):
        assert encode_price_sqrt(4, 1) == 2 * Q96

    def test_human_price(self):
        assert sqrt_price_x96_to_price(encode_price_sqrt(4, 1)) == pytest.approx(4.0)
        # token0 18 decimals, token1 6 decimals
        assert sqrt_price_x96_to_price(Q96, 18, 6) == pytest.approx(1e12)

    def test_invalid_reserve(self):
        with pytest.raises(ValueError):
            encode_price_sqrt(0, 1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
