"""
Swap Math - 스왑 스텝 계산

하나의 틱 구간 안에서 가격을 current → target 방향으로 움직이는 스텝 계산.
수수료는 입력 토큰에 부과되고 즉시 reinvestment 유동성(delta_l)으로 풀에 재투자된다.

References:
- KyberSwap Elastic: contracts/libraries/SwapMath.sol
- KyberSwap Elastic 백서: Reinvestment Curve

부호 규칙:
    specified_amount > 0: exact input, < 0: exact output
    used_amount 는 specified_amount 와 같은 부호
    returned_amount < 0: 출력(exact input), > 0: 필요한 입력(exact output)

핵심 공식 (p = √P, f = fee / FEE_UNITS):
    exact input token0:   Δx = 2 L (p_c - p_t) / (p_c (2 p_t - f p_c))
    exact input token1:   Δy = 2 L p_c (p_t - p_c) / (2 p_c - f p_t)
    exact output token0:  Δx = L (p_t - p_c)(2 p_c - f (p_t + p_c)) / (p_c p_t (2 p_c - f p_t))
    exact output token1:  Δy = L (p_c - p_t)(2 p_t - f (p_c + p_t)) / (2 p_t - f p_c)
    delta_l (token0 입력) = f Δx p_c / 2,  delta_l (token1 입력) = f Δy / (2 p_c)
"""

from typing import NamedTuple

from ..constants import (
    FEE_UNITS,
    MAX_SQRT_RATIO,
    MIN_SQRT_RATIO,
    Q96,
    TWO_FEE_UNITS,
)
from ..errors import InvalidPriceBounds, InvalidSwapQuantity
from .full_math import (
    get_smaller_root_of_quad_eqn,
    mul_div_ceiling,
    mul_div_floor,
)


class SwapStep(NamedTuple):
    """스왑 스텝 결과"""
    used_amount: int  # 소비한 지정 수량 (specified 와 같은 부호)
    returned_amount: int  # 반대 토큰 수량 (출력은 음수, 필요한 입력은 양수)
    delta_l: int  # 수수료로 재투자된 유동성
    next_sqrt_p: int  # 스텝 종료 sqrtP


def compute_swap_step(
    liquidity: int,
    current_sqrt_p: int,
    target_sqrt_p: int,
    fee_in_fee_units: int,
    specified_amount: int,
    is_exact_input: bool,
    is_token0: bool
) -> SwapStep:
    """현재 가격에서 목표 가격까지 한 스텝 스왑

    목표 가격까지 필요한 수량(reach)을 계산해서, 지정 수량이 reach 이상이면
    목표 가격까지 완전히 이동하고(used = reach), 아니면 지정 수량을 모두
    소비하는 중간 가격에서 멈춘다.

    Args:
        liquidity: 활성 유동성 (base + reinvest)
        current_sqrt_p: 시작 sqrtP
        target_sqrt_p: 목표 sqrtP (다음 틱 또는 가격 한도)
        fee_in_fee_units: 수수료 (FEE_UNITS 기준, 300 = 0.3%)
        specified_amount: 남은 지정 수량 (exact input 양수, exact output 음수)
        is_exact_input: exact input 여부
        is_token0: 지정 수량이 token0 기준인지 여부

    Returns:
        SwapStep(used_amount, returned_amount, delta_l, next_sqrt_p)

    Raises:
        InvalidPriceBounds: 시작 == 목표, 목표가 범위 밖, 방향 불일치
        InvalidSwapQuantity: 지정 수량 부호가 모드와 맞지 않음
    """
    if current_sqrt_p == target_sqrt_p:
        raise InvalidPriceBounds("시작 가격과 목표 가격이 같습니다")
    if target_sqrt_p < MIN_SQRT_RATIO or target_sqrt_p > MAX_SQRT_RATIO:
        raise InvalidPriceBounds(f"목표 가격이 유효 범위를 벗어났습니다: {target_sqrt_p}")

    will_up_tick = is_exact_input != is_token0
    if will_up_tick != (target_sqrt_p > current_sqrt_p):
        raise InvalidPriceBounds("목표 가격 방향이 스왑 방향과 맞지 않습니다")
    if specified_amount == 0 or (specified_amount > 0) != is_exact_input:
        raise InvalidSwapQuantity(f"지정 수량 부호가 잘못되었습니다: {specified_amount}")

    used_amount = calc_reach_amount(
        liquidity, current_sqrt_p, target_sqrt_p, fee_in_fee_units, is_exact_input, is_token0
    )

    if (is_exact_input and used_amount > specified_amount) or \
            (not is_exact_input and used_amount < specified_amount):
        # 목표 가격 전에 지정 수량이 소진됨
        used_amount = specified_amount
        delta_l = estimate_incremental_liquidity(
            abs(used_amount), liquidity, current_sqrt_p, fee_in_fee_units, is_exact_input, is_token0
        )
        next_sqrt_p = calc_final_price(
            abs(used_amount), liquidity, delta_l, current_sqrt_p, is_exact_input, is_token0
        )
        # 반올림으로 목표 가격을 넘지 않도록 고정
        if will_up_tick:
            next_sqrt_p = min(next_sqrt_p, target_sqrt_p)
        else:
            next_sqrt_p = max(next_sqrt_p, target_sqrt_p)
    else:
        # |specified| >= |reach|: 목표 가격까지 완전히 이동 (동률 포함)
        next_sqrt_p = target_sqrt_p
        delta_l = calc_incremental_liquidity(
            current_sqrt_p, target_sqrt_p, liquidity, abs(used_amount), is_exact_input, is_token0
        )

    returned_amount = calc_returned_amount(
        current_sqrt_p, next_sqrt_p, liquidity, delta_l, is_exact_input, is_token0
    )
    return SwapStep(used_amount, returned_amount, delta_l, next_sqrt_p)


def calc_reach_amount(
    liquidity: int,
    current_sqrt_p: int,
    target_sqrt_p: int,
    fee_in_fee_units: int,
    is_exact_input: bool,
    is_token0: bool
) -> int:
    """목표 가격까지 이동하는 데 필요한 지정 토큰 수량 (부호 포함)

    Returns:
        exact input 이면 필요한 입력(양수), exact output 이면 얻는 출력(음수)
    """
    abs_price_diff = abs(target_sqrt_p - current_sqrt_p)

    if is_exact_input:
        if is_token0:
            denominator = TWO_FEE_UNITS * target_sqrt_p - fee_in_fee_units * current_sqrt_p
            numerator = mul_div_floor(liquidity, TWO_FEE_UNITS * abs_price_diff, denominator)
            return mul_div_floor(numerator, Q96, current_sqrt_p)

        denominator = TWO_FEE_UNITS * current_sqrt_p - fee_in_fee_units * target_sqrt_p
        numerator = mul_div_floor(liquidity, TWO_FEE_UNITS * abs_price_diff, denominator)
        return mul_div_floor(numerator, current_sqrt_p, Q96)

    if is_token0:
        denominator = TWO_FEE_UNITS * current_sqrt_p - fee_in_fee_units * target_sqrt_p
        numerator = denominator - fee_in_fee_units * current_sqrt_p
        numerator = mul_div_floor(liquidity << 96, numerator, denominator)
        return -(mul_div_floor(numerator, abs_price_diff, current_sqrt_p) // target_sqrt_p)

    denominator = TWO_FEE_UNITS * target_sqrt_p - fee_in_fee_units * current_sqrt_p
    numerator = denominator - fee_in_fee_units * target_sqrt_p
    numerator = mul_div_floor(liquidity, numerator, denominator)
    return -mul_div_floor(numerator, abs_price_diff, Q96)


def estimate_incremental_liquidity(
    abs_delta: int,
    liquidity: int,
    current_sqrt_p: int,
    fee_in_fee_units: int,
    is_exact_input: bool,
    is_token0: bool
) -> int:
    """부분 스텝에서 수수료로 생기는 유동성 추정

    exact input 은 입력 수량에서 바로 계산하고, exact output 은
    fee * dL^2 - 2 b dL + c = 0 의 작은 근을 사용한다.
    """
    if is_exact_input:
        if is_token0:
            return mul_div_floor(current_sqrt_p, abs_delta * fee_in_fee_units, TWO_FEE_UNITS << 96)
        return mul_div_floor(Q96, abs_delta * fee_in_fee_units, TWO_FEE_UNITS * current_sqrt_p)

    if fee_in_fee_units == 0:
        return 0

    a = fee_in_fee_units
    b = (FEE_UNITS - fee_in_fee_units) * liquidity
    c = fee_in_fee_units * liquidity * abs_delta
    if is_token0:
        b -= mul_div_floor(FEE_UNITS * abs_delta, current_sqrt_p, Q96)
        c = mul_div_floor(c, current_sqrt_p, Q96)
    else:
        b -= mul_div_floor(FEE_UNITS * abs_delta, Q96, current_sqrt_p)
        c = mul_div_floor(c, Q96, current_sqrt_p)
    return get_smaller_root_of_quad_eqn(a, b, c)


def calc_incremental_liquidity(
    current_sqrt_p: int,
    next_sqrt_p: int,
    liquidity: int,
    abs_delta: int,
    is_exact_input: bool,
    is_token0: bool
) -> int:
    """가격 이동이 확정된 완전 스텝에서 수수료 유동성 계산

    token0: dL = p_n (L / p_c ± Δx) - L
    token1: dL = (L p_c ± Δy) / p_n - L
    """
    if is_token0:
        tmp1 = mul_div_floor(liquidity, Q96, current_sqrt_p)
        tmp2 = tmp1 + abs_delta if is_exact_input else tmp1 - abs_delta
        tmp3 = mul_div_floor(next_sqrt_p, tmp2, Q96)
    else:
        tmp1 = mul_div_floor(liquidity, current_sqrt_p, Q96)
        tmp2 = tmp1 + abs_delta if is_exact_input else tmp1 - abs_delta
        tmp3 = mul_div_floor(tmp2, Q96, next_sqrt_p)

    # 반올림 오차로 음수가 되는 경우는 0으로 처리
    return tmp3 - liquidity if tmp3 > liquidity else 0


def calc_final_price(
    abs_delta: int,
    liquidity: int,
    delta_l: int,
    current_sqrt_p: int,
    is_exact_input: bool,
    is_token0: bool
) -> int:
    """부분 스텝의 종료 sqrtP (풀에 유리한 방향으로 반올림)"""
    if is_token0:
        tmp = mul_div_floor(abs_delta, current_sqrt_p, Q96)
        if is_exact_input:
            return mul_div_ceiling(liquidity + delta_l, current_sqrt_p, liquidity + tmp)
        return mul_div_floor(liquidity + delta_l, current_sqrt_p, liquidity - tmp)

    tmp = mul_div_floor(abs_delta, Q96, current_sqrt_p)
    if is_exact_input:
        return mul_div_floor(liquidity + tmp, current_sqrt_p, liquidity + delta_l)
    return mul_div_ceiling(liquidity - tmp, current_sqrt_p, liquidity + delta_l)


def calc_returned_amount(
    current_sqrt_p: int,
    next_sqrt_p: int,
    liquidity: int,
    delta_l: int,
    is_exact_input: bool,
    is_token0: bool
) -> int:
    """반대 토큰 수량 (출력은 내림, 필요한 입력은 올림)"""
    if is_token0:
        if is_exact_input:
            returned_amount = mul_div_ceiling(delta_l, next_sqrt_p, Q96) - \
                mul_div_floor(liquidity, current_sqrt_p - next_sqrt_p, Q96)
        else:
            returned_amount = mul_div_ceiling(delta_l, next_sqrt_p, Q96) + \
                mul_div_ceiling(liquidity, next_sqrt_p - current_sqrt_p, Q96)
    else:
        returned_amount = mul_div_ceiling(liquidity + delta_l, Q96, next_sqrt_p) - \
            mul_div_floor(liquidity, Q96, current_sqrt_p)

    # 1 wei 출력은 반올림 오차로 간주
    if is_exact_input and returned_amount == 1:
        returned_amount = 0
    return returned_amount
