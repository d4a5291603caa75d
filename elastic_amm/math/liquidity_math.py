"""
Liquidity Math - 유동성 ↔ 토큰 수량

집중화된 유동성(Concentrated Liquidity)의 가격 범위별 토큰 수량 계산과
유동성 변화량 적용.

References:
- KyberSwap Elastic: contracts/libraries/QtyDeltaMath.sol
- KyberSwap Elastic: contracts/libraries/LiqDeltaMath.sol

핵심 공식:
    Δx = L * (1/√P_a - 1/√P_b)   # token0
    Δy = L * (√P_b - √P_a)       # token1

부호 규칙: 풀이 받는 수량은 양수(올림), 풀이 내주는 수량은 음수(내림).
"""

from typing import Tuple

from ..constants import Q96, UINT128_MAX
from ..errors import InsufficientLiquidity, Overflow
from .full_math import div_rounding_up, mul_div_ceiling, mul_div_floor


def get_amount0_delta(
    sqrt_ratio_a: int,
    sqrt_ratio_b: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """유동성에서 amount0 변화량 계산

    공식: Δx = L * (√P_b - √P_a) / (√P_a * √P_b)

    Args:
        sqrt_ratio_a: 하한 sqrtP
        sqrt_ratio_b: 상한 sqrtP
        liquidity: 유동성
        round_up: True면 올림, False면 내림

    Returns:
        amount0 (token0 수량, 최소 단위)
    """
    if sqrt_ratio_a > sqrt_ratio_b:
        sqrt_ratio_a, sqrt_ratio_b = sqrt_ratio_b, sqrt_ratio_a

    numerator1 = liquidity << 96
    numerator2 = sqrt_ratio_b - sqrt_ratio_a

    if round_up:
        return div_rounding_up(
            mul_div_ceiling(numerator1, numerator2, sqrt_ratio_b),
            sqrt_ratio_a
        )
    return mul_div_floor(numerator1, numerator2, sqrt_ratio_b) // sqrt_ratio_a


def get_amount1_delta(
    sqrt_ratio_a: int,
    sqrt_ratio_b: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """유동성에서 amount1 변화량 계산

    공식: Δy = L * (√P_b - √P_a)

    Args:
        sqrt_ratio_a: 하한 sqrtP
        sqrt_ratio_b: 상한 sqrtP
        liquidity: 유동성
        round_up: True면 올림, False면 내림

    Returns:
        amount1 (token1 수량, 최소 단위)
    """
    if sqrt_ratio_a > sqrt_ratio_b:
        sqrt_ratio_a, sqrt_ratio_b = sqrt_ratio_b, sqrt_ratio_a

    if round_up:
        return mul_div_ceiling(liquidity, sqrt_ratio_b - sqrt_ratio_a, Q96)
    return mul_div_floor(liquidity, sqrt_ratio_b - sqrt_ratio_a, Q96)


def calc_required_qty0(lower_sqrt_p: int, upper_sqrt_p: int, liquidity: int, is_add: bool) -> int:
    """유동성 추가/제거 시 token0 수량 (부호 포함)

    추가하면 풀이 받을 양(올림, 양수), 제거하면 풀이 내줄 양(내림, 음수).
    """
    if is_add:
        return get_amount0_delta(lower_sqrt_p, upper_sqrt_p, liquidity, round_up=True)
    return -get_amount0_delta(lower_sqrt_p, upper_sqrt_p, liquidity, round_up=False)


def calc_required_qty1(lower_sqrt_p: int, upper_sqrt_p: int, liquidity: int, is_add: bool) -> int:
    """유동성 추가/제거 시 token1 수량 (부호 포함)"""
    if is_add:
        return get_amount1_delta(lower_sqrt_p, upper_sqrt_p, liquidity, round_up=True)
    return -get_amount1_delta(lower_sqrt_p, upper_sqrt_p, liquidity, round_up=False)


def calc_unlock_qtys(initial_sqrt_p: int, min_liquidity: int) -> Tuple[int, int]:
    """풀 unlock 시 잠금 유동성에 필요한 토큰 수량

    공식:
        qty0 = ceil(L_min * 2^96 / sqrtP)
        qty1 = ceil(L_min * sqrtP / 2^96)
    """
    qty0 = mul_div_ceiling(min_liquidity, Q96, initial_sqrt_p)
    qty1 = mul_div_ceiling(min_liquidity, initial_sqrt_p, Q96)
    return qty0, qty1


def get_qty0_from_burn_r_tokens(sqrt_p: int, liquidity: int) -> int:
    return mul_div_floor(liquidity, Q96, sqrt_p)


def get_qty1_from_burn_r_tokens(sqrt_p: int, liquidity: int) -> int:
    return mul_div_floor(liquidity, sqrt_p, Q96)


def apply_liquidity_delta(liquidity: int, liquidity_delta: int, is_add: bool) -> int:
    """uint128 유동성에 변화량 적용

    Raises:
        Overflow: 결과가 uint128 최대값 초과
        InsufficientLiquidity: 결과가 음수
    """
    if is_add:
        result = liquidity + liquidity_delta
        if result > UINT128_MAX:
            raise Overflow(f"유동성이 uint128 범위를 벗어났습니다: {result}")
        return result

    if liquidity_delta > liquidity:
        raise InsufficientLiquidity(f"유동성 부족: {liquidity} < {liquidity_delta}")
    return liquidity - liquidity_delta
