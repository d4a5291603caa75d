"""
Elastic AMM - Concentrated Liquidity Engine

온체인 수준 정밀도로 집중화 유동성 풀을 시뮬레이션하는 라이브러리.
스왑 수수료를 reinvestment 유동성으로 자동 재투자하고,
포지션 수수료를 vesting period 동안 잠그는 anti-snipe 기능을 제공한다.
"""

__version__ = "0.1.0"

from .constants import Q96, FEE_UNITS, FEE_TIERS, TICK_DISTANCES, MIN_TICK, MAX_TICK
from .config import PoolConfig, settings
from .pool import Pool
from .periphery import (
    AntiSnipAttackPositionManager,
    BasePositionManager,
    TicksFeesReader,
    create_position_manager,
)
