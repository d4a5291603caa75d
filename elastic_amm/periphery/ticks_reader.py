"""
Ticks Fees Reader - 풀 틱/수수료 조회

초기화된 틱 연결 리스트를 순회하고, 포지션이 받을 rToken 을 토큰 수량으로
환산하는 읽기 전용 도우미. 상태를 바꾸지 않는다.

References:
- KyberSwap Elastic: contracts/periphery/TicksFeesReader.sol
"""

from typing import List, Tuple

import numpy as np
import pandas as pd

from ..constants import MAX_TICK, MIN_TICK
from ..errors import PoolValidationError
from ..math.full_math import mul_div_floor
from ..math.liquidity_math import get_qty0_from_burn_r_tokens, get_qty1_from_burn_r_tokens
from ..math.reinvestment_math import calc_r_mint_qty
from ..math.sqrt_price_math import sqrt_price_x96_to_price
from ..math.tick_math import get_sqrt_ratio_at_tick
from ..pool import Pool
from .position_manager import BasePositionManager

TICK_TABLE_COLUMNS = [
    "liquidity_gross",
    "liquidity_net",
    "fee_growth_outside",
    "seconds_per_liquidity_outside",
    "price",
    "active_liquidity",
]


class TicksFeesReader:
    """풀 틱/수수료 조회기

    사용법:
        reader = TicksFeesReader(pool)
        ticks = reader.get_all_ticks()
        table = reader.tick_table(decimal0=18, decimal1=6)
        qty0, qty1 = reader.get_total_fees_owed_to_position(manager, token_id)
    """

    def __init__(self, pool: Pool):
        self.pool = pool

    def get_all_ticks(self) -> List[int]:
        """연결 리스트 순서대로 모든 초기화 틱 (센티널 제외)"""
        return self.get_ticks_in_range(MIN_TICK, 0)

    def get_ticks_in_range(self, start_tick: int, length: int) -> List[int]:
        """start_tick 부터 next 포인터를 따라 최대 length 개의 틱

        Args:
            start_tick: 시작 틱 (연결 리스트에 있어야 함)
            length: 최대 개수 (0 이면 끝까지)

        Returns:
            초기화 틱 목록 (오름차순, 센티널 제외)
        """
        if self.pool.get_initialized_tick(start_tick) is None:
            raise PoolValidationError(f"초기화되지 않은 틱입니다: {start_tick}")

        ticks: List[int] = []
        tick = start_tick
        while tick != MAX_TICK and (length == 0 or len(ticks) < length):
            if tick != MIN_TICK:
                ticks.append(tick)
            tick = self.pool.get_initialized_tick(tick).next
        return ticks

    def get_nearest_initialized_ticks(self, tick: int) -> Tuple[int, int]:
        """tick 바로 아래/위의 리스트 틱 (센티널 포함)"""
        previous = self.pool.get_ticks_previous(tick, tick)[0]
        next_tick = self.pool.get_initialized_tick(previous).next
        if next_tick == tick:
            next_tick = self.pool.get_initialized_tick(tick).next
        return previous, next_tick

    def get_total_r_tokens_owed_to_position(self, manager: BasePositionManager, token_id: int) -> int:
        return manager.get_total_r_tokens_owed(token_id)

    def get_total_fees_owed_to_position(
        self,
        manager: BasePositionManager,
        token_id: int
    ) -> Tuple[int, int]:
        """포지션의 rToken 을 지금 소각하면 받을 (qty0, qty1)

        아직 동기화되지 않은 재투자 수수료로 늘어날 rToken 발행량까지 반영한다.
        """
        r_token_owed = manager.get_total_r_tokens_owed(token_id)
        if r_token_owed == 0:
            return 0, 0

        pool = self.pool
        liquidity = pool.get_liquidity_state()
        r_mint_qty = calc_r_mint_qty(liquidity.reinvest_l, liquidity.reinvest_l_last,
                                     liquidity.base_l, pool.r_total_supply)
        delta_l = mul_div_floor(r_token_owed, liquidity.reinvest_l, pool.r_total_supply + r_mint_qty)
        sqrt_p = pool.get_pool_state().sqrt_p
        return get_qty0_from_burn_r_tokens(sqrt_p, delta_l), get_qty1_from_burn_r_tokens(sqrt_p, delta_l)

    def tick_table(self, decimal0: int = 18, decimal1: int = 18) -> pd.DataFrame:
        """초기화 틱 테이블

        active_liquidity 는 해당 틱 바로 위 구간의 base 유동성 (liquidity_net 누적합).
        정수 열은 uint256 값을 그대로 담기 위해 object dtype 을 쓴다.

        Returns:
            tick 을 index 로 하는 DataFrame
        """
        ticks = self.get_all_ticks()
        if not ticks:
            return pd.DataFrame(columns=TICK_TABLE_COLUMNS, index=pd.Index([], name="tick"))

        infos = [self.pool.get_tick(tick) for tick in ticks]
        liquidity_net = np.array([info.liquidity_net for info in infos], dtype=object)

        df = pd.DataFrame({
            "liquidity_gross": pd.Series([info.liquidity_gross for info in infos], dtype=object),
            "liquidity_net": pd.Series(list(liquidity_net), dtype=object),
            "fee_growth_outside": pd.Series([info.fee_growth_outside for info in infos], dtype=object),
            "seconds_per_liquidity_outside": pd.Series(
                [info.seconds_per_liquidity_outside for info in infos], dtype=object
            ),
            "price": [
                sqrt_price_x96_to_price(get_sqrt_ratio_at_tick(tick), decimal0, decimal1)
                for tick in ticks
            ],
            "active_liquidity": pd.Series(list(np.cumsum(liquidity_net)), dtype=object),
        })
        df.index = pd.Index(ticks, name="tick")
        return df
