"""
Sqrt Price Math - sqrtP 인코딩

Elastic 풀의 가격은 sqrtP 형식으로 저장됩니다.
sqrtP = sqrt(price) * 2^96, price = reserve1 / reserve0
"""

from ..constants import Q96
from .full_math import sqrt


def encode_price_sqrt(reserve1: int, reserve0: int) -> int:
    """두 reserve 비율에서 sqrtP 계산

    공식: sqrtP = floor(sqrt(reserve1 / reserve0) * 2^96)
               = floor(sqrt(reserve1 * 2^192 / reserve0))

    Args:
        reserve1: token1 수량
        reserve0: token0 수량

    Returns:
        sqrtP (Q64.96 형식)

    Example:
        >>> encode_price_sqrt(1, 1) == 2 ** 96
        True
    """
    if reserve0 <= 0 or reserve1 <= 0:
        raise ValueError("reserve는 양수여야 합니다")
    return sqrt((reserve1 << 192) // reserve0)


def sqrt_price_x96_to_price(
    sqrt_p: int,
    decimal0: int = 18,
    decimal1: int = 18
) -> float:
    """sqrtP를 human-readable 가격으로 변환

    가격 = (sqrtP / 2^96)^2 / 10^(decimal1 - decimal0)

    Args:
        sqrt_p: sqrtP 값
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수

    Returns:
        가격 (token1/token0 기준, human-readable)
    """
    # 정밀도를 위해 단계별 계산
    sqrt_price = sqrt_p / Q96
    price_raw = sqrt_price ** 2

    decimal_adjustment = 10 ** (decimal1 - decimal0)
    return price_raw / decimal_adjustment
