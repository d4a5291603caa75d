"""
Elastic AMM 상태 타입 정의

풀, 틱, 포지션 상태와 연산 결과를 Python dataclass / NamedTuple 로 정의.
모든 숫자 필드는 온체인 정밀도를 위해 int 타입 사용.
"""

from dataclasses import dataclass
from typing import NamedTuple

from ..constants import MIN_TICK
from ..math.sqrt_price_math import sqrt_price_x96_to_price


@dataclass
class TickInfo:
    """Tick-Indexed State

    - liquidityGross: 해당 틱을 경계로 하는 총 유동성
    - liquidityNet: 틱을 위로 크로싱할 때 유동성 변화량 (ΔL)
    - feeGrowthOutside: 틱 외부 누적 rToken / base 유동성 (f_o)
    - secondsPerLiquidityOutside: 틱 외부 누적 seconds / base 유동성
    """
    liquidity_gross: int = 0
    liquidity_net: int = 0
    fee_growth_outside: int = 0  # f_o
    seconds_per_liquidity_outside: int = 0


@dataclass
class TickLink:
    """초기화된 틱 연결 리스트의 노드"""
    previous: int
    next: int


@dataclass
class PoolState:
    """Global State

    - sqrt_p: 현재 √가격 (Q96 인코딩)
    - current_tick: sqrt_p 가 속한 틱 (i_c)
    - nearest_current_tick: current_tick 이하의 가장 가까운 초기화 틱
    - base_l: 현재 가격을 포함하는 범위 포지션 유동성 합
    - reinvest_l: 수수료로 재투자된 유동성 (범위 없음)
    - reinvest_l_last: 마지막 rToken 동기화 시점의 reinvest_l
    - fee_growth_global: base 유동성 1단위당 누적 rToken (Q96)
    - seconds_per_liquidity_global: base 유동성 1단위당 누적 시간 (Q96)
    """
    sqrt_p: int = 0
    current_tick: int = 0
    nearest_current_tick: int = MIN_TICK
    base_l: int = 0
    reinvest_l: int = 0
    reinvest_l_last: int = 0
    fee_growth_global: int = 0
    seconds_per_liquidity_global: int = 0
    seconds_per_liquidity_update_time: int = 0
    locked: bool = True

    @property
    def active_liquidity(self) -> int:
        return self.base_l + self.reinvest_l


@dataclass
class PoolPosition:
    """풀 수준 포지션 상태 (owner, tick_lower, tick_upper 별)"""
    liquidity: int = 0
    fee_growth_inside_last: int = 0


class PositionKey(NamedTuple):
    owner: str
    tick_lower: int
    tick_upper: int


class PoolStateSnapshot(NamedTuple):
    sqrt_p: int
    current_tick: int
    nearest_current_tick: int
    locked: bool

    def price(self, decimal0: int = 18, decimal1: int = 18) -> float:
        """token1/token0 human-readable 가격"""
        return sqrt_price_x96_to_price(self.sqrt_p, decimal0, decimal1)


class LiquidityState(NamedTuple):
    base_l: int
    reinvest_l: int
    reinvest_l_last: int


class SecondsPerLiquidityData(NamedTuple):
    seconds_per_liquidity_global: int
    last_update_time: int


class SwapResult(NamedTuple):
    """스왑 결과 (풀 기준 부호: 양수 = 풀이 받음, 음수 = 풀이 내줌)"""
    delta_qty0: int
    delta_qty1: int

    @property
    def amount_in(self) -> int:
        return max(self.delta_qty0, self.delta_qty1, 0)

    @property
    def amount_out(self) -> int:
        return -min(self.delta_qty0, self.delta_qty1, 0)


class MintResult(NamedTuple):
    qty0: int  # 풀이 받을 token0
    qty1: int  # 풀이 받을 token1
    fee_growth_inside: int


class BurnResult(NamedTuple):
    qty0: int  # 풀이 내줄 token0
    qty1: int  # 풀이 내줄 token1
    fee_growth_inside: int
