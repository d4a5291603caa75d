"""
Elastic AMM 예외 정의

세 가지 계열로 나뉜다:
- PoolValidationError: 호출자 입력이 잘못됨 (ValueError 하위)
- PoolArithmeticError: 고정소수점 연산이 표현 범위를 벗어남 (ArithmeticError 하위)
- PoolStateError: 풀 상태상 연산 불가 (RuntimeError 하위)

모든 예외는 발견된 위치에서 발생하며 상태 변경 전에 검사된다.
"""


class ElasticPoolError(Exception):
    """Elastic AMM 예외의 최상위 클래스"""


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class PoolValidationError(ElasticPoolError, ValueError):
    """잘못된 입력"""


class InvalidTickRange(PoolValidationError):
    """tick_lower >= tick_upper 또는 틱 범위 밖"""


class TickNotAligned(PoolValidationError):
    """틱이 tick distance 배수가 아님"""


class StaleTickHint(PoolValidationError):
    """ticks_previous 힌트가 더 이상 유효하지 않음"""


class InvalidPriceLimit(PoolValidationError):
    """스왑 가격 한도가 방향과 맞지 않거나 범위 밖"""


class InvalidPriceBounds(PoolValidationError):
    """스왑 스텝의 시작/목표 가격이 잘못됨"""


class InvalidSwapQuantity(PoolValidationError):
    """스왑 수량이 0이거나 부호가 모드와 맞지 않음"""


class InvalidLiquidityAmount(PoolValidationError):
    """유동성 변화량이 0 이하"""


class InsufficientLiquidity(PoolValidationError):
    """보유 유동성보다 많이 제거하려 함"""


class TickLiquidityOverflow(PoolValidationError):
    """틱당 최대 유동성 초과"""


class PositionNotFound(PoolValidationError, KeyError):
    """존재하지 않는 포지션"""


class PositionNotEmpty(PoolValidationError):
    """유동성 또는 rToken이 남아 있는 포지션을 소각하려 함"""


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

class PoolArithmeticError(ElasticPoolError, ArithmeticError):
    """고정소수점 연산 오류"""


class Overflow(PoolArithmeticError):
    """결과가 표현 가능한 폭을 벗어남"""


class TickOutOfRange(PoolArithmeticError):
    """틱이 [MIN_TICK, MAX_TICK] 밖"""


class PriceOutOfRange(PoolArithmeticError):
    """sqrtP가 [MIN_SQRT_RATIO, MAX_SQRT_RATIO) 밖"""


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

class PoolStateError(ElasticPoolError, RuntimeError):
    """풀 상태상 수행할 수 없는 연산"""


class PoolLocked(PoolStateError):
    """풀이 초기화되지 않았거나 다른 연산이 진행 중"""


class PoolAlreadyUnlocked(PoolStateError):
    """이미 초기화된 풀을 다시 unlock"""


class NoLiquidity(PoolStateError):
    """활성 유동성이 없어 스왑할 수 없음"""
