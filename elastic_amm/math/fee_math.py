"""
Fee Math - 범위 내 fee growth 와 포지션 수수료

Elastic 풀의 fee growth 는 base 유동성 1단위당 누적 rToken (Q96) 하나뿐이다.
수수료가 양쪽 토큰의 유동성으로 재투자되므로 rToken 하나가 두 토큰의 몫을 모두 나타낸다.
seconds-per-liquidity 도 같은 outside/inside 구조를 쓴다 (uint128 랩어라운드).

References:
- 백서 Section 6.3: Tick-Indexed State (feeGrowthOutside)
- KyberSwap Elastic: contracts/Pool.sol (_updatePosition)

핵심 공식:
    f_a(i) = f_g - f_o(i)  if i_c >= i else f_o(i)     # 틱 i 위 수수료
    f_b(i) = f_o(i)        if i_c >= i else f_g - f_o(i) # 틱 i 아래 수수료
    f_r = f_g - f_b(i_l) - f_a(i_u)                     # 범위 내 수수료
    rToken = l × (f_r(t_1) - f_r(t_0)) / 2^96           # 청구 가능 rToken
"""

from ..constants import Q96
from .full_math import mul_div_floor

FEE_GROWTH_MODULUS: int = 2 ** 256
SECONDS_PER_LIQUIDITY_MODULUS: int = 2 ** 128


def fee_growth_above(
    tick_idx: int,
    current_tick: int,
    fee_growth_global: int,
    fee_growth_outside: int
) -> int:
    """틱 위에서 발생한 수수료 성장률 (f_a)

    Args:
        tick_idx: 틱 인덱스 (i)
        current_tick: 현재 틱 (i_c)
        fee_growth_global: 전역 fee growth (f_g)
        fee_growth_outside: 틱의 fee growth outside (f_o)

    Returns:
        틱 위의 fee growth (f_a)
    """
    if current_tick >= tick_idx:
        return fee_growth_global - fee_growth_outside
    return fee_growth_outside


def fee_growth_below(
    tick_idx: int,
    current_tick: int,
    fee_growth_global: int,
    fee_growth_outside: int
) -> int:
    """틱 아래에서 발생한 수수료 성장률 (f_b)"""
    if current_tick >= tick_idx:
        return fee_growth_outside
    return fee_growth_global - fee_growth_outside


def fee_growth_inside(
    tick_lower: int,
    tick_upper: int,
    current_tick: int,
    fee_growth_global: int,
    fee_growth_outside_lower: int,
    fee_growth_outside_upper: int,
    modulus: int = FEE_GROWTH_MODULUS
) -> int:
    """범위 내 fee growth 계산 (f_r)

    f_r = f_g - f_b(i_l) - f_a(i_u)

    Args:
        tick_lower: 하한 틱 (i_l)
        tick_upper: 상한 틱 (i_u)
        current_tick: 현재 틱 (i_c)
        fee_growth_global: 전역 fee growth (f_g)
        fee_growth_outside_lower: 하한 틱의 fee growth outside (f_o(i_l))
        fee_growth_outside_upper: 상한 틱의 fee growth outside (f_o(i_u))
        modulus: 랩어라운드 폭 (fee growth 2^256, seconds-per-liquidity 2^128)

    Returns:
        범위 내 fee growth (f_r)
    """
    f_b = fee_growth_below(tick_lower, current_tick, fee_growth_global, fee_growth_outside_lower)
    f_a = fee_growth_above(tick_upper, current_tick, fee_growth_global, fee_growth_outside_upper)

    # Solidity unchecked 블록의 랩어라운드와 동일하게 처리
    return (fee_growth_global - f_b - f_a) % modulus


def calculate_fee_growth_delta(
    fee_growth_current: int,
    fee_growth_previous: int,
    modulus: int = FEE_GROWTH_MODULUS
) -> int:
    """두 시점 간 fee growth 변화량 (랩어라운드 고려)"""
    return (fee_growth_current - fee_growth_previous) % modulus


def calculate_fees_claimable(
    liquidity: int,
    fee_growth_inside_current: int,
    fee_growth_inside_last: int
) -> int:
    """포지션이 청구할 수 있는 rToken 수량

    Args:
        liquidity: 포지션 유동성 (l)
        fee_growth_inside_current: 현재 범위 내 fee growth (f_r(t_1))
        fee_growth_inside_last: 마지막 동기화 시 fee growth (f_r(t_0))

    Returns:
        청구 가능 rToken (내림)
    """
    delta = calculate_fee_growth_delta(fee_growth_inside_current, fee_growth_inside_last)
    return mul_div_floor(delta, liquidity, Q96)
