"""
Position Manager - opaque id 기반 포지션 관리

풀 수준 포지션은 (owner, tick_lower, tick_upper) 로 묶이므로, 매니저는 하나의
owner 로 풀에 유동성을 넣고 개별 포지션을 token id 로 나누어 관리한다.
풀에서 받은 rToken 은 각 포지션의 fee growth 스냅샷으로 배분한다.

두 가지 변형이 있다:
- BasePositionManager: 수수료가 즉시 청구 가능 (vesting period 0)
- AntiSnipAttackPositionManager: FeeVestingLedger 로 수수료를 잠금

References:
- KyberSwap Elastic: contracts/periphery/BasePositionManager.sol
- KyberSwap Elastic: contracts/periphery/AntiSnipAttackPositionManager.sol
"""

import logging
from typing import Dict, Optional, Sequence, Tuple

from ..errors import InsufficientLiquidity, InvalidLiquidityAmount, PositionNotEmpty, PositionNotFound
from ..math.fee_math import calculate_fees_claimable
from ..pool import Pool
from .anti_snip import FeeVestingLedger, FeeVestingRecord, Position

logger = logging.getLogger(__name__)

DEFAULT_OWNER_ID: str = "position-manager"


class BasePositionManager:
    """수수료를 즉시 청구 가능하게 하는 포지션 매니저"""

    def __init__(self, pool: Pool, owner_id: str = DEFAULT_OWNER_ID):
        self.pool = pool
        self.owner_id = owner_id
        self._positions: Dict[int, Position] = {}
        self._next_token_id = 1

    def _get(self, token_id: int) -> Position:
        position = self._positions.get(token_id)
        if position is None:
            raise PositionNotFound(f"포지션이 없습니다: {token_id}")
        return position

    def positions(self, token_id: int) -> Position:
        position = self._get(token_id)
        return Position(position.tick_lower, position.tick_upper, position.liquidity,
                        position.r_token_owed, position.fee_growth_inside_last)

    # ------------------------------------------------------------------
    # Fee accounting hooks
    # ------------------------------------------------------------------

    def _on_position_opened(self, token_id: int) -> None:
        pass

    def _on_position_closed(self, token_id: int) -> None:
        pass

    def _update_fees(self, token_id: int, position: Position, fee_growth_inside: int,
                     liquidity_delta: int, is_add: bool) -> int:
        """새 fee growth 로 r_token_owed 갱신, 추가된 rToken 반환"""
        additional_r_token_owed = calculate_fees_claimable(
            position.liquidity, fee_growth_inside, position.fee_growth_inside_last
        )
        position.r_token_owed += additional_r_token_owed
        position.fee_growth_inside_last = fee_growth_inside
        return additional_r_token_owed

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def mint(
        self,
        tick_lower: int,
        tick_upper: int,
        ticks_previous: Sequence[int],
        liquidity: int
    ) -> Tuple[int, int, int]:
        """새 포지션 생성

        Returns:
            (token_id, qty0, qty1)
        """
        qty0, qty1, fee_growth_inside = self.pool.mint(
            self.owner_id, tick_lower, tick_upper, ticks_previous, liquidity
        )
        token_id = self._next_token_id
        self._next_token_id += 1
        self._positions[token_id] = Position(
            tick_lower=tick_lower,
            tick_upper=tick_upper,
            liquidity=liquidity,
            fee_growth_inside_last=fee_growth_inside,
        )
        self._on_position_opened(token_id)

        logger.debug("opened position %d [%d, %d) liquidity=%d", token_id, tick_lower, tick_upper, liquidity)
        return token_id, qty0, qty1

    def add_liquidity(
        self,
        token_id: int,
        ticks_previous: Sequence[int],
        liquidity: int
    ) -> Tuple[int, int, int]:
        """기존 포지션에 유동성 추가

        Returns:
            (qty0, qty1, 추가된 r_token_owed)
        """
        position = self._get(token_id)
        qty0, qty1, fee_growth_inside = self.pool.mint(
            self.owner_id, position.tick_lower, position.tick_upper, ticks_previous, liquidity
        )
        additional = self._update_fees(token_id, position, fee_growth_inside, liquidity, True)
        position.liquidity += liquidity
        return qty0, qty1, additional

    def remove_liquidity(self, token_id: int, liquidity: int) -> Tuple[int, int, int]:
        """포지션에서 유동성 제거

        Returns:
            (qty0, qty1, 추가된 r_token_owed)

        Raises:
            InsufficientLiquidity: 포지션 유동성보다 많이 제거
        """
        position = self._get(token_id)
        if liquidity <= 0:
            raise InvalidLiquidityAmount(f"유동성은 양수여야 합니다: {liquidity}")
        if liquidity > position.liquidity:
            raise InsufficientLiquidity(f"유동성 부족: {position.liquidity} < {liquidity}")

        qty0, qty1, fee_growth_inside = self.pool.burn(
            self.owner_id, position.tick_lower, position.tick_upper, liquidity
        )
        additional = self._update_fees(token_id, position, fee_growth_inside, liquidity, False)
        position.liquidity -= liquidity
        return qty0, qty1, additional

    def sync_fee_growth(self, token_id: int) -> int:
        """유동성 변경 없이 수수료 동기화

        Returns:
            추가된 r_token_owed
        """
        position = self._get(token_id)
        fee_growth_inside = self.pool.tweak_position_zero_liquidity(
            self.owner_id, position.tick_lower, position.tick_upper
        )
        return self._update_fees(token_id, position, fee_growth_inside, 0, True)

    def _burn_pool_r_tokens(self, r_token_qty: int, is_logical_burn: bool = False) -> Tuple[int, int]:
        """매니저의 풀 rToken 잔고 한도 안에서 소각

        포지션별로 내림한 적립량의 합은 풀이 매니저에 적립한 양보다 몇 단위
        클 수 있다. 모자라는 몫은 버린다.
        """
        balance = self.pool.r_token_balance(self.owner_id)
        qty = min(r_token_qty, balance)
        if qty < r_token_qty:
            logger.debug("rToken shortfall for %s: owed=%d balance=%d", self.owner_id, r_token_qty, balance)
        if qty == 0:
            return 0, 0
        return self.pool.burn_r_tokens(self.owner_id, qty, is_logical_burn=is_logical_burn)

    def burn_r_tokens(self, token_id: int) -> Tuple[int, int]:
        """포지션의 r_token_owed 전부를 토큰으로 정산

        Returns:
            지급할 (qty0, qty1)
        """
        position = self._get(token_id)
        if position.r_token_owed == 0:
            return 0, 0
        qty0, qty1 = self._burn_pool_r_tokens(position.r_token_owed)
        position.r_token_owed = 0
        return qty0, qty1

    def burn(self, token_id: int) -> None:
        """빈 포지션 삭제"""
        position = self._get(token_id)
        if position.liquidity > 0:
            raise PositionNotEmpty("유동성을 먼저 제거해야 합니다")
        if position.r_token_owed > 0:
            raise PositionNotEmpty("rToken 을 먼저 소각해야 합니다")
        del self._positions[token_id]
        self._on_position_closed(token_id)

    def get_total_r_tokens_owed(self, token_id: int) -> int:
        """아직 동기화되지 않은 수수료까지 포함한 포지션 rToken"""
        position = self._get(token_id)
        fee_growth_inside = self.pool.get_fee_growth_inside(position.tick_lower, position.tick_upper)
        return position.r_token_owed + calculate_fees_claimable(
            position.liquidity, fee_growth_inside, position.fee_growth_inside_last
        )


class AntiSnipAttackPositionManager(BasePositionManager):
    """수수료를 vesting period 동안 잠그는 포지션 매니저"""

    def __init__(self, pool: Pool, owner_id: str = DEFAULT_OWNER_ID):
        super().__init__(pool, owner_id)
        self.vesting = FeeVestingLedger(pool.vesting_period)

    def anti_snip_attack_data(self, token_id: int) -> FeeVestingRecord:
        self._get(token_id)
        return self.vesting.get(token_id)

    def _on_position_opened(self, token_id: int) -> None:
        self.vesting.open(token_id, self.pool.now())

    def _on_position_closed(self, token_id: int) -> None:
        self.vesting.close(token_id)

    def _update_fees(self, token_id: int, position: Position, fee_growth_inside: int,
                     liquidity_delta: int, is_add: bool) -> int:
        update = self.vesting.sync(
            token_id, position, fee_growth_inside, self.pool.now(),
            liquidity_delta=liquidity_delta, is_add_liquidity=is_add,
        )
        if update.fees_burnable > 0:
            self._burn_pool_r_tokens(update.fees_burnable, is_logical_burn=True)
        return update.fees_claimable

    def get_total_r_tokens_owed(self, token_id: int) -> int:
        """청구 가능 + 잠금 + 미동기화 rToken"""
        return super().get_total_r_tokens_owed(token_id) + self.vesting.get(token_id).fees_locked


def create_position_manager(pool: Pool, owner_id: Optional[str] = None) -> BasePositionManager:
    """풀의 vesting period 에 맞는 포지션 매니저 생성"""
    owner_id = owner_id or DEFAULT_OWNER_ID
    if pool.vesting_period > 0:
        return AntiSnipAttackPositionManager(pool, owner_id)
    return BasePositionManager(pool, owner_id)
