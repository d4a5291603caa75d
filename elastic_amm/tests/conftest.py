"""
공용 테스트 fixture

FakeClock 으로 시간을 직접 조절하고, 풀 생성/unlock 을 한 번에 처리한다.
"""

import pytest

from ..config import PoolConfig
from ..math.sqrt_price_math import encode_price_sqrt
from ..pool import Pool

START_TIME = 1_700_000_000


class FakeClock:
    """수동으로 진행하는 시계"""

    def __init__(self, start: int = START_TIME):
        self.time = start

    def __call__(self) -> int:
        return self.time

    def advance(self, seconds: int) -> None:
        self.time += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_pool(clock):
    """PoolConfig 를 받아 unlock 된 풀을 만드는 factory"""

    def _make(
        swap_fee_units: int = 300,
        tick_distance: int = 60,
        vesting_period: int = 0,
        min_liquidity: int = 100000,
        initial_sqrt_p: int = encode_price_sqrt(1, 1),
    ) -> Pool:
        config = PoolConfig(
            swap_fee_units=swap_fee_units,
            tick_distance=tick_distance,
            vesting_period=vesting_period,
            min_liquidity=min_liquidity,
        )
        pool = Pool(config, clock=clock)
        pool.unlock_pool(initial_sqrt_p)
        return pool

    return _make
