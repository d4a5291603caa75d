"""
Ticks Fees Reader 테스트
"""

import pytest

from ..constants import MAX_TICK, MIN_SQRT_RATIO, MIN_TICK
from ..errors import PoolValidationError
from ..periphery.position_manager import create_position_manager
from ..periphery.ticks_reader import TICK_TABLE_COLUMNS, TicksFeesReader


@pytest.fixture
def pool(make_pool):
    pool = make_pool()
    for lower, upper, liquidity in ((-120, 120, 10 ** 18), (-60, 180, 4 * 10 ** 17)):
        pool.mint("alice", lower, upper, pool.get_ticks_previous(lower, upper), liquidity)
    return pool


class TestTickTraversal:
    """연결 리스트 순회"""

    def test_get_all_ticks(self, pool):
        assert TicksFeesReader(pool).get_all_ticks() == [-120, -60, 120, 180]

    def test_get_ticks_in_range(self, pool):
        reader = TicksFeesReader(pool)
        assert reader.get_ticks_in_range(-60, 2) == [-60, 120]
        assert reader.get_ticks_in_range(-60, 0) == [-60, 120, 180]

    def test_start_tick_not_initialized(self, pool):
        with pytest.raises(PoolValidationError):
            TicksFeesReader(pool).get_ticks_in_range(0, 1)

    def test_nearest_initialized_ticks(self, pool):
        reader = TicksFeesReader(pool)
        assert reader.get_nearest_initialized_ticks(0) == (-60, 120)
        assert reader.get_nearest_initialized_ticks(120) == (-60, 180)
        assert reader.get_nearest_initialized_ticks(600) == (180, MAX_TICK)
        assert reader.get_nearest_initialized_ticks(-600) == (MIN_TICK, -120)


class TestTickTable:
    """틱 테이블"""

    def test_columns_and_profile(self, pool):
        table = TicksFeesReader(pool).tick_table()

        assert list(table.columns) == TICK_TABLE_COLUMNS
        assert list(table.index) == [-120, -60, 120, 180]
        assert list(table["liquidity_net"]) == [10 ** 18, 4 * 10 ** 17, -10 ** 18, -4 * 10 ** 17]
        assert list(table["active_liquidity"]) == [10 ** 18, 14 * 10 ** 17, 4 * 10 ** 17, 0]
        assert table.loc[-60, "liquidity_gross"] == 4 * 10 ** 17
        assert table["price"].is_monotonic_increasing

    def test_empty_pool(self, make_pool):
        table = TicksFeesReader(make_pool()).tick_table()
        assert table.empty
        assert list(table.columns) == TICK_TABLE_COLUMNS


class TestFeesOwed:
    """포지션 수수료 환산"""

    def test_matches_burn_r_tokens(self, make_pool):
        pool = make_pool()
        manager = create_position_manager(pool)
        token_id, _, _ = manager.mint(-600, 600, pool.get_ticks_previous(-600, 600), 10 ** 18)
        reader = TicksFeesReader(pool)
        assert reader.get_total_fees_owed_to_position(manager, token_id) == (0, 0)

        pool.swap(10 ** 16, True, MIN_SQRT_RATIO + 1)
        r_tokens = reader.get_total_r_tokens_owed_to_position(manager, token_id)
        expected = reader.get_total_fees_owed_to_position(manager, token_id)
        assert r_tokens > 0

        manager.sync_fee_growth(token_id)
        assert manager.positions(token_id).r_token_owed == r_tokens
        assert manager.burn_r_tokens(token_id) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
