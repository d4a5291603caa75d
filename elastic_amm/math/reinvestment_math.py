"""
Reinvestment Math - 재투자 토큰(rToken) 발행량

스왑 수수료는 reinvestment 유동성(reinvest_l)으로 쌓인다. 마지막 동기화 이후
늘어난 reinvestment 유동성 중 범위 유동성 공급자(base_l)의 몫만큼 rToken을
새로 발행하고, 나머지는 기존 rToken 보유자의 가치로 남는다.

References:
- KyberSwap Elastic: contracts/libraries/ReinvestmentMath.sol

핵심 공식:
    lp_contribution = base_l * (reinvest_l - reinvest_l_last) / (base_l + reinvest_l)
    r_mint_qty      = r_total_supply * lp_contribution / reinvest_l_last
"""

from .full_math import mul_div_floor


def calc_r_mint_qty(
    reinvest_l: int,
    reinvest_l_last: int,
    base_l: int,
    r_total_supply: int
) -> int:
    """새로 발행할 rToken 수량

    Args:
        reinvest_l: 현재 reinvestment 유동성
        reinvest_l_last: 마지막 동기화 시점의 reinvestment 유동성
        base_l: 현재 범위 유동성
        r_total_supply: 현재 rToken 총 발행량

    Returns:
        발행량 (내림)
    """
    if reinvest_l <= reinvest_l_last or base_l == 0:
        return 0

    lp_contribution = mul_div_floor(base_l, reinvest_l - reinvest_l_last, base_l + reinvest_l)

    # 기존 발행량이 없으면 1:1 로 시작
    if r_total_supply == 0 or reinvest_l_last == 0:
        return lp_contribution
    return mul_div_floor(r_total_supply, lp_contribution, reinvest_l_last)
