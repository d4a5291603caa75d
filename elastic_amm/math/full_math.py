"""
Full Math - 256비트 고정소수점 연산

Solidity FullMath / QuadMath 라이브러리와 동일한 의미의 정수 연산.
Python 정수는 임의 정밀도이므로 512비트 중간값이 자연스럽게 보존되고,
입력과 결과가 uint256 범위에 있는지만 검사한다.

References:
- KyberSwap Elastic: contracts/libraries/FullMath.sol
- KyberSwap Elastic: contracts/libraries/QuadMath.sol

핵심 공식:
    mul_div(a, b, d)           = floor(a * b / d)
    mul_div(a, b, d, True)     = ceil(a * b / d)
    smaller root of a x^2 - 2 b x + c = 0  →  (b - sqrt(b^2 - a c)) / a
"""

import math

from ..constants import UINT256_MAX
from ..errors import Overflow


def _check_uint256(value: int, name: str) -> None:
    if value < 0 or value > UINT256_MAX:
        raise Overflow(f"{name}이(가) uint256 범위를 벗어났습니다: {value}")


def mul_div(a: int, b: int, denominator: int, round_up: bool = False) -> int:
    """a * b / denominator 계산 (반올림 방향 지정)

    Args:
        a: 피승수 (uint256)
        b: 승수 (uint256)
        denominator: 제수 (uint256, 0 불가)
        round_up: True면 올림, False면 내림

    Returns:
        uint256 결과

    Raises:
        Overflow: 피연산자 또는 결과가 uint256 범위 밖이거나 제수가 0인 경우
    """
    _check_uint256(a, "a")
    _check_uint256(b, "b")
    _check_uint256(denominator, "denominator")
    if denominator == 0:
        raise Overflow("mul_div 제수가 0입니다")

    result, remainder = divmod(a * b, denominator)
    if round_up and remainder > 0:
        result += 1

    if result > UINT256_MAX:
        raise Overflow(f"mul_div 결과가 uint256 범위를 벗어났습니다: {a} * {b} / {denominator}")
    return result


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator)"""
    return mul_div(a, b, denominator, round_up=False)


def mul_div_ceiling(a: int, b: int, denominator: int) -> int:
    """ceil(a * b / denominator)"""
    return mul_div(a, b, denominator, round_up=True)


def div_rounding_up(numerator: int, denominator: int) -> int:
    """numerator / denominator 올림"""
    if denominator == 0:
        raise Overflow("div_rounding_up 제수가 0입니다")
    quotient, remainder = divmod(numerator, denominator)
    return quotient + (1 if remainder > 0 else 0)


def sqrt(x: int) -> int:
    """정수 제곱근 (내림)

    Raises:
        Overflow: 음수 입력
    """
    if x < 0:
        raise Overflow(f"음수의 제곱근은 표현할 수 없습니다: {x}")
    return math.isqrt(x)


def get_smaller_root_of_quad_eqn(a: int, b: int, c: int) -> int:
    """a x^2 - 2 b x + c = 0 의 작은 근 (내림)

    Args:
        a: 이차항 계수 (양수)
        b: 일차항 계수의 절반
        c: 상수항

    Returns:
        (b - sqrt(b^2 - a c)) / a
    """
    return (b - sqrt(b * b - a * c)) // a
