"""
Periphery for Elastic AMM

- anti_snip: 포지션별 수수료 베스팅 (FeeVestingLedger)
- position_manager: opaque id 기반 포지션 관리
- ticks_reader: 틱 순회, 포지션 수수료 환산, 틱 테이블 (pandas)
"""

from .anti_snip import (
    FeeVestingLedger,
    FeeVestingRecord,
    Position,
    VestingUpdate,
    calc_fee_proportions,
)
from .position_manager import (
    AntiSnipAttackPositionManager,
    BasePositionManager,
    create_position_manager,
)
from .ticks_reader import TicksFeesReader
