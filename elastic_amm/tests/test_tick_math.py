"""
Tick Math 테스트

tick_math.py의 함수들을 테스트합니다.
온체인 값과 비교하여 정확도를 검증합니다.
"""

import pytest
from hypothesis import given, strategies as st

from ..constants import MAX_SQRT_RATIO, MAX_TICK, MIN_SQRT_RATIO, MIN_TICK, Q96
from ..errors import PriceOutOfRange, TickOutOfRange
from ..math.sqrt_price_math import encode_price_sqrt
from ..math.tick_math import (
    get_max_tick,
    get_min_tick,
    get_nearest_spaced_tick,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    is_tick_aligned,
)


class TestGetSqrtRatioAtTick:
    """get_sqrt_ratio_at_tick 테스트"""

    def test_min_tick(self):
        """최소 틱에서의 sqrtP"""
        assert get_sqrt_ratio_at_tick(MIN_TICK) == MIN_SQRT_RATIO

    def test_max_tick(self):
        """최대 틱에서의 sqrtP"""
        assert get_sqrt_ratio_at_tick(MAX_TICK) == MAX_SQRT_RATIO

    def test_tick_0(self):
        """틱 0에서의 sqrtP (price = 1)"""
        assert get_sqrt_ratio_at_tick(0) == Q96

    def test_positive_tick(self):
        """양수 틱은 2^96 보다 큼"""
        assert get_sqrt_ratio_at_tick(100) > Q96

    def test_negative_tick(self):
        """음수 틱은 2^96 보다 작음"""
        assert get_sqrt_ratio_at_tick(-100) < Q96

    def test_invalid_tick_too_low(self):
        """유효 범위를 벗어난 틱 (너무 낮음)"""
        with pytest.raises(TickOutOfRange):
            get_sqrt_ratio_at_tick(MIN_TICK - 1)

    def test_invalid_tick_too_high(self):
        """유효 범위를 벗어난 틱 (너무 높음)"""
        with pytest.raises(TickOutOfRange):
            get_sqrt_ratio_at_tick(MAX_TICK + 1)

    @given(tick=st.integers(min_value=MIN_TICK, max_value=MAX_TICK - 1))
    def test_strictly_increasing(self, tick):
        """틱이 커지면 sqrtP 도 커짐"""
        assert get_sqrt_ratio_at_tick(tick) < get_sqrt_ratio_at_tick(tick + 1)


class TestGetTickAtSqrtRatio:
    """get_tick_at_sqrt_ratio 테스트"""

    def test_min_sqrt_ratio(self):
        """최소 sqrtRatio에서의 틱"""
        assert get_tick_at_sqrt_ratio(MIN_SQRT_RATIO) == MIN_TICK

    def test_max_sqrt_ratio_minus_one(self):
        """최대 sqrtRatio 바로 아래는 MAX_TICK - 1"""
        assert get_tick_at_sqrt_ratio(MAX_SQRT_RATIO - 1) == MAX_TICK - 1

    def test_sqrt_ratio_at_tick_0(self):
        """sqrtP 2^96에서의 틱"""
        assert get_tick_at_sqrt_ratio(Q96) == 0

    def test_just_below_tick_0(self):
        """2^96 바로 아래는 틱 -1"""
        assert get_tick_at_sqrt_ratio(Q96 - 1) == -1

    def test_too_low(self):
        with pytest.raises(PriceOutOfRange):
            get_tick_at_sqrt_ratio(MIN_SQRT_RATIO - 1)

    def test_too_high(self):
        """MAX_SQRT_RATIO 자체는 범위 밖"""
        with pytest.raises(PriceOutOfRange):
            get_tick_at_sqrt_ratio(MAX_SQRT_RATIO)

    @given(tick=st.integers(min_value=MIN_TICK, max_value=MAX_TICK - 1))
    def test_round_trip(self, tick):
        """tick -> sqrtP -> tick"""
        assert get_tick_at_sqrt_ratio(get_sqrt_ratio_at_tick(tick)) == tick

    @given(sqrt_p=st.integers(min_value=MIN_SQRT_RATIO, max_value=MAX_SQRT_RATIO - 1))
    def test_floor_semantics(self, sqrt_p):
        """sqrtP(tick) <= sqrt_p < sqrtP(tick + 1)"""
        tick = get_tick_at_sqrt_ratio(sqrt_p)
        assert get_sqrt_ratio_at_tick(tick) <= sqrt_p
        assert sqrt_p < get_sqrt_ratio_at_tick(tick + 1)


class TestTickDistance:
    """tick distance 관련 함수 테스트"""

    def test_min_max_tick(self):
        """0.3% fee tier -> tick distance 60"""
        assert get_min_tick(60) == -887220
        assert get_max_tick(60) == 887220
        assert get_min_tick(1) == MIN_TICK
        assert get_max_tick(1) == MAX_TICK

    def test_is_tick_aligned(self):
        assert is_tick_aligned(120, 60)
        assert is_tick_aligned(-120, 60)
        assert not is_tick_aligned(100, 60)

    def test_nearest_spaced_tick(self):
        """현재 틱을 tick distance 배수로 내림"""
        assert get_nearest_spaced_tick(encode_price_sqrt(1, 1), 60) == 0
        assert get_nearest_spaced_tick(get_sqrt_ratio_at_tick(-30), 60) == -60
        assert get_nearest_spaced_tick(get_sqrt_ratio_at_tick(119), 60) == 60


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
