"""
Anti-Snip Attack 테스트

수수료 잠금 비율, 잠금 시계 재시작, 유동성 제거 시 몰수를 테스트합니다.
position.liquidity = 2^96 이면 earned = Δfee growth 이므로 계산을 단순화할 수 있습니다.
"""

import pytest
from hypothesis import given, strategies as st

from ..constants import FEE_UNITS, Q96
from ..errors import PoolValidationError, PositionNotFound
from ..periphery.anti_snip import FeeVestingLedger, Position, calc_fee_proportions

VESTING_PERIOD = 1000
T0 = 1_700_000_000


@pytest.fixture
def ledger():
    vesting = FeeVestingLedger(VESTING_PERIOD)
    vesting.open(1, T0)
    return vesting


def new_position():
    return Position(tick_lower=-60, tick_upper=60, liquidity=Q96)


class TestCalcFeeProportions:
    """calc_fee_proportions 테스트"""

    def test_split(self):
        # (50000 * 100 + 25000 * 200) / 100000 = 100
        assert calc_fee_proportions(100, 200, 50000, 25000) == (200, 100)

    def test_fully_vested(self):
        assert calc_fee_proportions(100, 200, FEE_UNITS, FEE_UNITS) == (0, 300)

    def test_nothing_vested(self):
        assert calc_fee_proportions(100, 200, 0, 0) == (300, 0)


class TestFeeVestingLedger:
    """FeeVestingLedger 테스트"""

    def test_open(self, ledger):
        record = ledger.get(1)
        assert record.last_action_time == T0
        assert record.lock_time == T0
        assert record.unlock_time == T0 + VESTING_PERIOD
        assert record.fees_locked == 0

    def test_half_vested(self, ledger):
        """lock_time 후 vesting period 절반이면 새 수수료의 절반만 청구 가능"""
        position = new_position()
        update = ledger.sync(1, position, 1000, T0 + 500)

        assert update.fees_claimable == 500
        assert update.fees_burnable == 0
        assert position.r_token_owed == 500
        assert position.fee_growth_inside_last == 1000
        assert ledger.get(1).fees_locked == 500

    def test_sync_does_not_rearm(self, ledger):
        """유동성 변경 없는 동기화는 잠금 시계를 다시 시작하지 않음"""
        position = new_position()
        ledger.sync(1, position, 1000, T0 + 500)
        record = ledger.get(1)
        assert record.lock_time == T0
        assert record.unlock_time == T0 + VESTING_PERIOD
        assert record.last_action_time == T0 + 500

    def test_repeated_sync_keeps_lock(self, ledger):
        """연속 동기화로 잠긴 수수료가 앞당겨 풀리지 않음"""
        position = new_position()
        ledger.sync(1, position, 10 ** 6, T0 + 10)
        assert ledger.get(1).fees_locked == 990000

        # 남은 990초 중 1초 경과: 101 / FEE_UNITS 만 풀림
        update = ledger.sync(1, position, 10 ** 6, T0 + 11)
        assert update.fees_claimable == 990000 * 101 // FEE_UNITS
        assert ledger.get(1).fees_locked == 989001

    def test_locked_fees_release_linearly(self, ledger):
        """잠긴 수수료는 unlock_time 까지 선형으로 풀림"""
        position = new_position()
        ledger.sync(1, position, 10 ** 6, T0 + 500)
        assert ledger.get(1).fees_locked == 500000

        update = ledger.sync(1, position, 10 ** 6, T0 + 750)
        assert update.fees_claimable == 250000
        assert ledger.get(1).fees_locked == 250000

        update = ledger.sync(1, position, 10 ** 6, T0 + VESTING_PERIOD)
        assert update.fees_claimable == 250000
        assert ledger.get(1).fees_locked == 0

    def test_fully_vested_after_period(self, ledger):
        position = new_position()
        update = ledger.sync(1, position, 1000, T0 + VESTING_PERIOD + 5)
        assert update.fees_claimable == 1000
        assert ledger.get(1).fees_locked == 0

    def test_add_liquidity_rearms_lock(self, ledger):
        position = new_position()
        ledger.sync(1, position, 1000, T0 + 500, liquidity_delta=10, is_add_liquidity=True)
        record = ledger.get(1)
        assert record.lock_time == T0 + 500
        assert record.unlock_time == T0 + 500 + VESTING_PERIOD

        # 다시 잠금 시계가 시작되었으므로 바로 다음 수수료는 거의 잠김
        update = ledger.sync(1, position, 2000, T0 + 510)
        # 기존 잠금 500 은 unlock_time 전이라 1% 만, 새 1000 도 1% 만 풀림
        assert update.fees_claimable == (1000 * 500 + 1000 * 1000) // FEE_UNITS

    def test_remove_liquidity_burns_locked_share(self, ledger):
        """잠금 중 유동성의 절반을 빼면 잠긴 수수료의 절반 몰수"""
        position = new_position()
        update = ledger.sync(1, position, 1000, T0 + 10,
                             liquidity_delta=Q96 // 2, is_add_liquidity=False)

        # 1% 청구 가능, 나머지 990 잠금 중 절반 몰수
        assert update.fees_claimable == 10
        assert update.fees_burnable == 495
        assert ledger.get(1).fees_locked == 495

    def test_invalid_vesting_period(self):
        with pytest.raises(PoolValidationError):
            FeeVestingLedger(0)

    def test_unknown_position(self, ledger):
        with pytest.raises(PositionNotFound):
            ledger.get(2)
        with pytest.raises(PositionNotFound):
            ledger.sync(2, new_position(), 1000, T0)

    def test_close(self, ledger):
        ledger.close(1)
        with pytest.raises(PositionNotFound):
            ledger.get(1)

    @given(
        earned=st.integers(min_value=0, max_value=10 ** 24),
        first=st.integers(min_value=0, max_value=2 * VESTING_PERIOD),
        second=st.integers(min_value=0, max_value=2 * VESTING_PERIOD),
    )
    def test_claimable_is_monotonic_in_time(self, earned, first, second):
        """같은 수수료라도 더 늦게 동기화하면 청구 가능량이 줄지 않음"""
        early, late = sorted((first, second))
        claimable = []
        for elapsed in (early, late):
            vesting = FeeVestingLedger(VESTING_PERIOD)
            vesting.open(1, T0)
            position = new_position()
            update = vesting.sync(1, position, earned, T0 + elapsed)
            assert update.fees_claimable + vesting.get(1).fees_locked == earned
            claimable.append(update.fees_claimable)
        assert claimable[0] <= claimable[1]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
