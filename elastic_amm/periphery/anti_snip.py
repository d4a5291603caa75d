"""
Anti-Snip Attack - 포지션별 수수료 베스팅

유동성을 스왑 직전에 넣었다가 직후에 빼는 sniping 을 막기 위해, 포지션이
번 수수료를 vesting period 동안 선형으로 잠근다. 유동성을 바꾸면 잠금 시계가
다시 시작되고, 잠금 중에 유동성을 빼면 잠긴 수수료 중 뺀 비율만큼 몰수된다.

References:
- KyberSwap Elastic: contracts/periphery/libraries/AntiSnipAttack.sol

핵심 공식 (FEE_UNITS 단위):
    earned          = l × (f_r(t_1) - f_r(t_0)) / 2^96
    claimable_units = min(FEE_UNITS, (now - lock_time) × FEE_UNITS / vesting_period)
    vested_units    = (now - last_action_time) × FEE_UNITS / (unlock_time - last_action_time)
    claimable       = (locked × vested_units + earned × claimable_units) / FEE_UNITS
    locked'         = locked + earned - claimable
"""

import logging
from dataclasses import dataclass
from typing import Dict, NamedTuple, Tuple

from ..constants import FEE_UNITS
from ..errors import PoolValidationError, PositionNotFound
from ..math.fee_math import calculate_fees_claimable
from ..math.full_math import mul_div_floor

logger = logging.getLogger(__name__)


@dataclass
class Position:
    """포지션 매니저가 관리하는 포지션 (opaque id 별)"""
    tick_lower: int
    tick_upper: int
    liquidity: int = 0
    r_token_owed: int = 0  # 청구 가능 rToken
    fee_growth_inside_last: int = 0


@dataclass
class FeeVestingRecord:
    """포지션별 수수료 잠금 상태"""
    last_action_time: int
    lock_time: int
    unlock_time: int
    fees_locked: int = 0


class VestingUpdate(NamedTuple):
    fees_claimable: int  # 이번에 풀린 rToken (r_token_owed 에 더해짐)
    fees_burnable: int  # 유동성 제거로 몰수된 rToken


def calc_fee_proportions(
    current_fees: int,
    next_fees: int,
    current_claimable_units: int,
    next_claimable_units: int
) -> Tuple[int, int]:
    """기존 잠금 수수료와 새 수수료를 청구 가능/잠금으로 분할

    Args:
        current_fees: 기존 잠금 수수료
        next_fees: 새로 번 수수료
        current_claimable_units: 기존 잠금분의 청구 가능 비율 (FEE_UNITS 기준)
        next_claimable_units: 새 수수료의 청구 가능 비율 (FEE_UNITS 기준)

    Returns:
        (잠금 유지분, 청구 가능분)
    """
    total_fees = current_fees + next_fees
    fees_claimable = (current_claimable_units * current_fees
                      + next_claimable_units * next_fees) // FEE_UNITS
    if fees_claimable > total_fees:
        fees_claimable = total_fees
    return total_fees - fees_claimable, fees_claimable


class FeeVestingLedger:
    """포지션 id 별 FeeVestingRecord 저장소와 베스팅 계산"""

    def __init__(self, vesting_period: int):
        if vesting_period <= 0:
            raise PoolValidationError(f"vesting period 는 양수여야 합니다: {vesting_period}")
        self.vesting_period = vesting_period
        self._records: Dict[int, FeeVestingRecord] = {}

    def open(self, position_id: int, now: int) -> FeeVestingRecord:
        """새 포지션의 잠금 레코드 생성 (잠긴 수수료 없음, 잠금 시계는 now 부터)"""
        record = FeeVestingRecord(last_action_time=now, lock_time=now,
                                  unlock_time=now + self.vesting_period)
        self._records[position_id] = record
        return record

    def close(self, position_id: int) -> None:
        self._records.pop(position_id, None)

    def get(self, position_id: int) -> FeeVestingRecord:
        try:
            record = self._records[position_id]
        except KeyError:
            raise PositionNotFound(f"베스팅 레코드가 없습니다: {position_id}") from None
        return FeeVestingRecord(record.last_action_time, record.lock_time,
                                record.unlock_time, record.fees_locked)

    def claimable_units(self, record: FeeVestingRecord, now: int) -> int:
        """lock_time 이후 경과 시간에 비례한 청구 가능 비율 (FEE_UNITS 기준)"""
        elapsed = max(now - record.lock_time, 0)
        return min(FEE_UNITS, elapsed * FEE_UNITS // self.vesting_period)

    def vested_units(self, record: FeeVestingRecord, now: int) -> int:
        """기존 잠금분의 청구 가능 비율

        잠긴 수수료는 마지막 동작 시점부터 unlock_time 까지 남은 기간에 걸쳐
        선형으로 풀린다. unlock_time 이 지났으면 전부 풀림.
        """
        remaining = record.unlock_time - record.last_action_time
        if now >= record.unlock_time or remaining <= 0:
            return FEE_UNITS
        elapsed = max(now - record.last_action_time, 0)
        return min(FEE_UNITS, elapsed * FEE_UNITS // remaining)

    def sync(
        self,
        position_id: int,
        position: Position,
        new_fee_growth_inside: int,
        now: int,
        liquidity_delta: int = 0,
        is_add_liquidity: bool = True
    ) -> VestingUpdate:
        """새 fee growth 를 반영해 잠금/청구 가능 수수료 갱신

        position.r_token_owed 와 position.fee_growth_inside_last 를 갱신한다.
        유동성 변경(liquidity_delta > 0)이면 잠금 시계를 now 로 다시 시작하고,
        제거라면 잠긴 수수료를 제거 비율만큼 몰수한다.

        Args:
            position_id: 포지션 id
            position: 유동성 변경 전 포지션
            new_fee_growth_inside: 현재 범위 내 fee growth
            now: 현재 시각
            liquidity_delta: 유동성 변화량 (0 이면 단순 동기화)
            is_add_liquidity: 추가 여부

        Returns:
            VestingUpdate(fees_claimable, fees_burnable)
        """
        record = self._records.get(position_id)
        if record is None:
            raise PositionNotFound(f"베스팅 레코드가 없습니다: {position_id}")

        fees_earned = calculate_fees_claimable(
            position.liquidity, new_fee_growth_inside, position.fee_growth_inside_last
        )
        next_units = self.claimable_units(record, now)
        current_units = self.vested_units(record, now)

        fees_locked, fees_claimable = calc_fee_proportions(
            record.fees_locked, fees_earned, current_units, next_units
        )

        fees_burnable = 0
        if liquidity_delta != 0:
            if not is_add_liquidity and position.liquidity > 0:
                fees_burnable = mul_div_floor(fees_locked, liquidity_delta, position.liquidity)
                fees_locked -= fees_burnable
            record.lock_time = now
            record.unlock_time = now + self.vesting_period

        record.fees_locked = fees_locked
        record.last_action_time = now
        position.r_token_owed += fees_claimable
        position.fee_growth_inside_last = new_fee_growth_inside

        logger.debug("vesting sync position=%d earned=%d claimable=%d locked=%d burnable=%d",
                     position_id, fees_earned, fees_claimable, fees_locked, fees_burnable)
        return VestingUpdate(fees_claimable, fees_burnable)
