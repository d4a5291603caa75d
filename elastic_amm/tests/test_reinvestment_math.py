"""
Reinvestment Math 테스트
"""

import pytest
from hypothesis import given, strategies as st

from ..math.reinvestment_math import calc_r_mint_qty


class TestCalcRMintQty:
    """calc_r_mint_qty 테스트"""

    def test_no_growth(self):
        """reinvestment 유동성이 늘지 않으면 발행 없음"""
        assert calc_r_mint_qty(1000, 1000, 10 ** 18, 1000) == 0
        assert calc_r_mint_qty(900, 1000, 10 ** 18, 1000) == 0

    def test_no_base_liquidity(self):
        """범위 유동성이 없으면 모든 증가분이 기존 보유자 몫"""
        assert calc_r_mint_qty(2000, 1000, 0, 1000) == 0

    def test_bootstrap_one_to_one(self):
        """기존 발행량이 없으면 LP 기여분을 그대로 발행"""
        # base 3000, growth 1000, total 3000 + 1000 -> 3000 * 1000 / 4000 = 750
        assert calc_r_mint_qty(1000, 0, 3000, 0) == 750

    def test_proportional_to_supply(self):
        # lp_contribution = 1000 * 100 / 2100 = 47, mint = 500 * 47 / 1000 = 23
        assert calc_r_mint_qty(1100, 1000, 1000, 500) == 23

    @given(
        reinvest_l_last=st.integers(min_value=1, max_value=10 ** 24),
        growth=st.integers(min_value=1, max_value=10 ** 24),
        base_l=st.integers(min_value=1, max_value=10 ** 30),
    )
    def test_minted_share_not_above_growth(self, reinvest_l_last, growth, base_l):
        """공급량 == reinvest_l_last 이면 발행량은 증가분 이하"""
        minted = calc_r_mint_qty(reinvest_l_last + growth, reinvest_l_last, base_l, reinvest_l_last)
        assert 0 <= minted <= growth


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
