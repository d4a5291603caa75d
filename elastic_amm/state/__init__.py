"""
State layer for Elastic AMM

- types: 풀/틱/포지션 상태 dataclass 및 결과 타입
- tick_ledger: 틱 레코드와 초기화된 틱 연결 리스트
"""

from .types import (
    TickInfo,
    TickLink,
    PoolState,
    PoolPosition,
    PositionKey,
    PoolStateSnapshot,
    LiquidityState,
    SecondsPerLiquidityData,
    SwapResult,
    MintResult,
    BurnResult,
)
from .tick_ledger import TickLedger, max_liquidity_per_tick
