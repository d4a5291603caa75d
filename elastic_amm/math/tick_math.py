"""
Tick Math - Tick ↔ sqrtP 변환

Elastic 풀의 틱 수학 함수들. 온체인 컨트랙트와 동일한 정밀도로 구현.

References:
- KyberSwap Elastic: contracts/libraries/TickMath.sol
- Uniswap V3 Core: contracts/libraries/TickMath.sol (동일 알고리즘)

핵심 공식:
    price = 1.0001^tick
    tick = floor(log₁.₀₀₀₁(price))
    sqrtP = sqrt(price) * 2^96
"""

from ..constants import MIN_TICK, MAX_TICK, MIN_SQRT_RATIO, MAX_SQRT_RATIO
from ..errors import PriceOutOfRange, TickOutOfRange


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """틱에서 sqrtP 계산

    Solidity TickMath.getSqrtRatioAtTick()과 동일한 구현.
    온체인 수준의 정밀도를 위해 정수 연산만 사용.

    Args:
        tick: 틱 인덱스 (-887272 ~ 887272)

    Returns:
        sqrtP (Q64.96 형식)

    Raises:
        TickOutOfRange: 틱이 유효 범위를 벗어난 경우
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise TickOutOfRange(f"틱이 유효 범위를 벗어났습니다: {tick} (범위: {MIN_TICK} ~ {MAX_TICK})")

    abs_tick = abs(tick)

    # 매직 넘버를 사용한 비트 연산 (Solidity 구현과 동일)
    ratio = 0x100000000000000000000000000000000 if abs_tick & 0x1 == 0 \
        else 0xfffcb933bd6fad37aa2d162d1a594001

    if abs_tick & 0x2:
        ratio = (ratio * 0xfff97272373d413259a46990580e213a) >> 128
    if abs_tick & 0x4:
        ratio = (ratio * 0xfff2e50f5f656932ef12357cf3c7fdcc) >> 128
    if abs_tick & 0x8:
        ratio = (ratio * 0xffe5caca7e10e4e61c3624eaa0941cd0) >> 128
    if abs_tick & 0x10:
        ratio = (ratio * 0xffcb9843d60f6159c9db58835c926644) >> 128
    if abs_tick & 0x20:
        ratio = (ratio * 0xff973b41fa98c081472e6896dfb254c0) >> 128
    if abs_tick & 0x40:
        ratio = (ratio * 0xff2ea16466c96a3843ec78b326b52861) >> 128
    if abs_tick & 0x80:
        ratio = (ratio * 0xfe5dee046a99a2a811c461f1969c3053) >> 128
    if abs_tick & 0x100:
        ratio = (ratio * 0xfcbe86c7900a88aedcffc83b479aa3a4) >> 128
    if abs_tick & 0x200:
        ratio = (ratio * 0xf987a7253ac413176f2b074cf7815e54) >> 128
    if abs_tick & 0x400:
        ratio = (ratio * 0xf3392b0822b70005940c7a398e4b70f3) >> 128
    if abs_tick & 0x800:
        ratio = (ratio * 0xe7159475a2c29b7443b29c7fa6e889d9) >> 128
    if abs_tick & 0x1000:
        ratio = (ratio * 0xd097f3bdfd2022b8845ad8f792aa5825) >> 128
    if abs_tick & 0x2000:
        ratio = (ratio * 0xa9f746462d870fdf8a65dc1f90e061e5) >> 128
    if abs_tick & 0x4000:
        ratio = (ratio * 0x70d869a156d2a1b890bb3df62baf32f7) >> 128
    if abs_tick & 0x8000:
        ratio = (ratio * 0x31be135f97d08fd981231505542fcfa6) >> 128
    if abs_tick & 0x10000:
        ratio = (ratio * 0x9aa508b5b7a84e1c677de54f3e99bc9) >> 128
    if abs_tick & 0x20000:
        ratio = (ratio * 0x5d6af8dedb81196699c329225ee604) >> 128
    if abs_tick & 0x40000:
        ratio = (ratio * 0x2216e584f5fa1ea926041bedfe98) >> 128
    if abs_tick & 0x80000:
        ratio = (ratio * 0x48a170391f7dc42444e8fa2) >> 128

    if tick > 0:
        ratio = (2**256 - 1) // ratio

    # Q128.128 -> Q64.96 (올림)
    return (ratio >> 32) + (1 if ratio % (1 << 32) != 0 else 0)


def get_tick_at_sqrt_ratio(sqrt_p: int) -> int:
    """sqrtP에서 틱 계산

    get_sqrt_ratio_at_tick(tick) <= sqrt_p 를 만족하는 가장 큰 틱을 반환.

    Args:
        sqrt_p: sqrtP (Q64.96 형식)

    Returns:
        틱 인덱스

    Raises:
        PriceOutOfRange: sqrtP가 [MIN_SQRT_RATIO, MAX_SQRT_RATIO) 밖인 경우
    """
    if sqrt_p < MIN_SQRT_RATIO or sqrt_p >= MAX_SQRT_RATIO:
        raise PriceOutOfRange(f"sqrtP가 유효 범위를 벗어났습니다: {sqrt_p}")

    ratio = sqrt_p << 32

    r = ratio
    msb = 0

    # 최상위 비트 찾기
    f = (1 if r > 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF else 0) << 7
    msb |= f
    r >>= f

    f = (1 if r > 0xFFFFFFFFFFFFFFFF else 0) << 6
    msb |= f
    r >>= f

    f = (1 if r > 0xFFFFFFFF else 0) << 5
    msb |= f
    r >>= f

    f = (1 if r > 0xFFFF else 0) << 4
    msb |= f
    r >>= f

    f = (1 if r > 0xFF else 0) << 3
    msb |= f
    r >>= f

    f = (1 if r > 0xF else 0) << 2
    msb |= f
    r >>= f

    f = (1 if r > 0x3 else 0) << 1
    msb |= f
    r >>= f

    f = 1 if r > 0x1 else 0
    msb |= f

    if msb >= 128:
        r = ratio >> (msb - 127)
    else:
        r = ratio << (127 - msb)

    log_2 = (msb - 128) << 64

    # 로그 계산
    for i in range(14):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << (63 - i)
        r >>= f

    log_sqrt10001 = log_2 * 255738958999603826347141

    tick_low = (log_sqrt10001 - 3402992956809132418596140100660247210) >> 128
    tick_high = (log_sqrt10001 + 291339464771989622907027621153398088495) >> 128

    if tick_low == tick_high:
        return tick_low

    if get_sqrt_ratio_at_tick(tick_high) <= sqrt_p:
        return tick_high
    return tick_low


def get_min_tick(tick_distance: int) -> int:
    """tick distance에 정렬된 가장 작은 사용 가능 틱"""
    return -(MAX_TICK // tick_distance) * tick_distance


def get_max_tick(tick_distance: int) -> int:
    """tick distance에 정렬된 가장 큰 사용 가능 틱"""
    return (MAX_TICK // tick_distance) * tick_distance


def is_tick_aligned(tick: int, tick_distance: int) -> bool:
    return tick % tick_distance == 0


def get_nearest_spaced_tick(sqrt_p: int, tick_distance: int) -> int:
    """sqrtP가 속한 틱을 tick distance 배수로 내림

    Args:
        sqrt_p: sqrtP (Q64.96 형식)
        tick_distance: 틱 간격 (예: 60 for 0.3% fee)

    Returns:
        tick_distance 배수 중 현재 틱 이하인 가장 큰 틱
    """
    tick = get_tick_at_sqrt_ratio(sqrt_p)
    return (tick // tick_distance) * tick_distance
