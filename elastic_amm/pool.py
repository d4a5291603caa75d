"""
Elastic Pool - 집중화 유동성 풀 상태 머신

가격(sqrtP), 현재 틱, base/reinvest 유동성, 전역 누적값과 틱 레코드를 소유한다.
스왑 루프는 틱 경계마다 SwapMath 스텝을 실행하고, 초기화된 틱을 지날 때
재투자 수수료를 rToken 으로 정산한 뒤 base 유동성을 갱신한다.

References:
- KyberSwap Elastic: contracts/Pool.sol
- KyberSwap Elastic: contracts/PoolTicksState.sol
- KyberSwap Elastic: contracts/periphery/TicksFeesReader.sol

모든 연산은 검증과 계산을 먼저 끝낸 뒤 한 번에 상태를 커밋한다.
실패한 연산은 상태를 바꾸지 않는다.
"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .config import PoolConfig
from .constants import (
    MAX_SQRT_RATIO,
    MAX_TICK,
    MAX_TICK_DISTANCE,
    MIN_SQRT_RATIO,
    MIN_TICK,
    Q96,
)
from .errors import (
    InsufficientLiquidity,
    InvalidLiquidityAmount,
    InvalidPriceLimit,
    InvalidSwapQuantity,
    InvalidTickRange,
    NoLiquidity,
    PoolAlreadyUnlocked,
    PoolLocked,
    TickNotAligned,
)
from .math.fee_math import (
    FEE_GROWTH_MODULUS,
    SECONDS_PER_LIQUIDITY_MODULUS,
    calculate_fees_claimable,
    fee_growth_inside,
)
from .math.full_math import mul_div_floor
from .math.liquidity_math import (
    apply_liquidity_delta,
    calc_required_qty0,
    calc_required_qty1,
    calc_unlock_qtys,
    get_qty0_from_burn_r_tokens,
    get_qty1_from_burn_r_tokens,
)
from .math.reinvestment_math import calc_r_mint_qty
from .math.swap_math import compute_swap_step
from .math.tick_math import get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio, is_tick_aligned
from .state.tick_ledger import TickLedger
from .state.types import (
    BurnResult,
    LiquidityState,
    MintResult,
    PoolPosition,
    PoolState,
    PoolStateSnapshot,
    PositionKey,
    SecondsPerLiquidityData,
    SwapResult,
    TickInfo,
    TickLink,
)

logger = logging.getLogger(__name__)

# 풀 자신이 보유한 rToken 계정 (잠금 유동성 + 미청구 수수료)
POOL_ACCOUNT: str = "__pool__"


class Pool:
    """Elastic 집중화 유동성 풀

    Args:
        config: 풀 파라미터 (수수료, tick distance, vesting period, 최소 유동성)
        clock: 현재 시각(초)을 반환하는 함수
    """

    def __init__(self, config: PoolConfig, clock: Callable[[], float] = time.time):
        self.config = config
        self._clock = clock
        self._state = PoolState()
        self._ticks = TickLedger(config.tick_distance)
        self._positions: Dict[PositionKey, PoolPosition] = {}
        self._r_balances: Dict[str, int] = {}
        self.r_total_supply: int = 0
        self._mutex = threading.Lock()

    @property
    def swap_fee_units(self) -> int:
        return self.config.swap_fee_units

    @property
    def tick_distance(self) -> int:
        return self.config.tick_distance

    @property
    def vesting_period(self) -> int:
        return self.config.vesting_period

    def now(self) -> int:
        return int(self._clock())

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------

    @contextmanager
    def _lock(self) -> Iterator[PoolState]:
        """풀 연산 직렬화

        다른 연산이 진행 중이거나(재진입 포함) 풀이 아직 unlock 되지 않았으면
        대기하지 않고 PoolLocked 를 발생시킨다.
        """
        if not self._mutex.acquire(blocking=False):
            raise PoolLocked("다른 연산이 진행 중입니다")
        try:
            if self._state.locked:
                raise PoolLocked("풀이 잠겨 있습니다")
            self._state.locked = True
            try:
                yield self._state
            finally:
                self._state.locked = False
        finally:
            self._mutex.release()

    def unlock_pool(self, initial_sqrt_p: int) -> Tuple[int, int]:
        """초기 가격 설정 및 풀 활성화

        min_liquidity 만큼의 reinvestment 유동성을 영구히 잠그고
        같은 양의 rToken 을 풀 계정에 발행한다.

        Args:
            initial_sqrt_p: 초기 sqrtP

        Returns:
            잠금 유동성에 필요한 (qty0, qty1)

        Raises:
            PoolAlreadyUnlocked: 이미 unlock 된 풀
            PriceOutOfRange: 가격이 범위 밖
        """
        if not self._mutex.acquire(blocking=False):
            raise PoolLocked("다른 연산이 진행 중입니다")
        try:
            state = self._state
            if state.sqrt_p != 0:
                raise PoolAlreadyUnlocked("이미 초기화된 풀입니다")

            current_tick = get_tick_at_sqrt_ratio(initial_sqrt_p)
            min_liquidity = self.config.min_liquidity
            qty0, qty1 = calc_unlock_qtys(initial_sqrt_p, min_liquidity)

            state.sqrt_p = initial_sqrt_p
            state.current_tick = current_tick
            state.nearest_current_tick = MIN_TICK
            state.reinvest_l = min_liquidity
            state.reinvest_l_last = min_liquidity
            state.seconds_per_liquidity_update_time = self.now()
            self.r_total_supply = min_liquidity
            self._r_balances[POOL_ACCOUNT] = min_liquidity
            state.locked = False
        finally:
            self._mutex.release()

        logger.info("pool unlocked at sqrtP=%d tick=%d (qty0=%d, qty1=%d)",
                    initial_sqrt_p, current_tick, qty0, qty1)
        return qty0, qty1

    # ------------------------------------------------------------------
    # Accumulators
    # ------------------------------------------------------------------

    def _sync_fee_growth(self, base_l: int, reinvest_l: int) -> Tuple[int, int]:
        """마지막 동기화 이후 재투자 성장분을 rToken 으로 환산

        Returns:
            (발행할 rToken, 새 fee_growth_global)
        """
        state = self._state
        r_mint_qty = calc_r_mint_qty(reinvest_l, state.reinvest_l_last, base_l, self.r_total_supply)
        fee_growth_global = state.fee_growth_global
        if r_mint_qty != 0:
            # r_mint_qty > 0 이면 base_l > 0
            fee_growth_global = (fee_growth_global + mul_div_floor(r_mint_qty, Q96, base_l)) \
                % FEE_GROWTH_MODULUS
        return r_mint_qty, fee_growth_global

    def _sync_seconds_per_liquidity(self, base_l: int, now: int) -> int:
        state = self._state
        seconds_per_liquidity = state.seconds_per_liquidity_global
        elapsed = now - state.seconds_per_liquidity_update_time
        if elapsed > 0 and base_l > 0:
            seconds_per_liquidity = (seconds_per_liquidity + (elapsed << 96) // base_l) \
                % SECONDS_PER_LIQUIDITY_MODULUS
        return seconds_per_liquidity

    def _commit_accumulators(self, r_mint_qty: int, fee_growth_global: int,
                             seconds_per_liquidity: int, now: int) -> None:
        state = self._state
        if r_mint_qty != 0:
            self.r_total_supply += r_mint_qty
            self._r_balances[POOL_ACCOUNT] = self._r_balances.get(POOL_ACCOUNT, 0) + r_mint_qty
            state.fee_growth_global = fee_growth_global
        state.seconds_per_liquidity_global = seconds_per_liquidity
        state.seconds_per_liquidity_update_time = max(now, state.seconds_per_liquidity_update_time)

    def _outside_values(self, tick: int, current_tick: int, fee_growth_global: int,
                        seconds_per_liquidity: int) -> Tuple[int, int]:
        """틱의 outside 값 (아직 초기화되지 않은 틱은 초기화될 때의 값)"""
        if self._ticks.is_initialized(tick):
            info = self._ticks.get_tick(tick)
            return info.fee_growth_outside, info.seconds_per_liquidity_outside
        if tick <= current_tick:
            return fee_growth_global, seconds_per_liquidity
        return 0, 0

    # ------------------------------------------------------------------
    # Swap
    # ------------------------------------------------------------------

    def swap(self, swap_qty: int, is_token0: bool, limit_sqrt_p: int) -> SwapResult:
        """스왑 실행

        Args:
            swap_qty: 지정 수량 (양수 = exact input, 음수 = exact output)
            is_token0: 지정 수량이 token0 기준인지 여부
            limit_sqrt_p: 가격 한도 (이 가격을 넘어서 이동하지 않음)

        Returns:
            SwapResult(delta_qty0, delta_qty1) - 풀 기준 부호

        Raises:
            InvalidSwapQuantity: swap_qty == 0
            InvalidPriceLimit: 한도가 현재 가격 반대편이거나 범위 밖
            NoLiquidity: 첫 스텝에서 활성 유동성이 0
            PoolLocked: 풀이 잠겨 있음
        """
        if swap_qty == 0:
            raise InvalidSwapQuantity("스왑 수량이 0입니다")

        with self._lock() as state:
            is_exact_input = swap_qty > 0
            will_up_tick = is_exact_input != is_token0

            if will_up_tick:
                if not state.sqrt_p < limit_sqrt_p < MAX_SQRT_RATIO:
                    raise InvalidPriceLimit(f"잘못된 가격 한도: {limit_sqrt_p}")
            elif not MIN_SQRT_RATIO < limit_sqrt_p < state.sqrt_p:
                raise InvalidPriceLimit(f"잘못된 가격 한도: {limit_sqrt_p}")

            fee = self.config.swap_fee_units
            specified_amount = swap_qty
            returned_amount = 0
            sqrt_p = state.sqrt_p
            current_tick = state.current_tick
            base_l = state.base_l
            reinvest_l = state.reinvest_l
            reinvest_l_last = state.reinvest_l_last
            fee_growth_global = state.fee_growth_global
            r_total_supply = self.r_total_supply
            lp_fee = 0
            now = self.now()
            seconds_per_liquidity = self._sync_seconds_per_liquidity(base_l, now)

            if will_up_tick:
                next_tick = self._ticks.next_tick(state.nearest_current_tick)
            else:
                next_tick = state.nearest_current_tick
            crossings: List[Tuple[int, int]] = []
            steps = 0

            while specified_amount != 0 and sqrt_p != limit_sqrt_p:
                # 한 스텝은 MAX_TICK_DISTANCE 틱을 넘지 않음
                temp_next_tick = next_tick
                if will_up_tick and next_tick > current_tick + MAX_TICK_DISTANCE:
                    temp_next_tick = current_tick + MAX_TICK_DISTANCE
                elif not will_up_tick and next_tick < current_tick - MAX_TICK_DISTANCE:
                    temp_next_tick = current_tick - MAX_TICK_DISTANCE

                next_sqrt_p = get_sqrt_ratio_at_tick(temp_next_tick)
                if will_up_tick:
                    target_sqrt_p = min(next_sqrt_p, limit_sqrt_p)
                else:
                    target_sqrt_p = max(next_sqrt_p, limit_sqrt_p)

                if sqrt_p != target_sqrt_p:
                    liquidity = base_l + reinvest_l
                    if liquidity == 0:
                        if steps == 0:
                            raise NoLiquidity("활성 유동성이 없습니다")
                        break
                    step = compute_swap_step(
                        liquidity, sqrt_p, target_sqrt_p, fee,
                        specified_amount, is_exact_input, is_token0
                    )
                    specified_amount -= step.used_amount
                    returned_amount += step.returned_amount
                    reinvest_l += step.delta_l
                    sqrt_p = step.next_sqrt_p
                    steps += 1

                # 다음 틱에 도달하지 못함: 한도 도달 또는 수량 소진
                if sqrt_p != next_sqrt_p:
                    if sqrt_p != state.sqrt_p:
                        current_tick = get_tick_at_sqrt_ratio(sqrt_p)
                    break

                current_tick = temp_next_tick if will_up_tick else temp_next_tick - 1

                # 초기화되지 않은 중간 지점
                if temp_next_tick != next_tick:
                    continue

                # 초기화된 틱 크로싱: 재투자 수수료 정산 후 base 유동성 갱신
                r_mint_qty = calc_r_mint_qty(reinvest_l, reinvest_l_last, base_l, r_total_supply)
                if r_mint_qty != 0:
                    r_total_supply += r_mint_qty
                    lp_fee += r_mint_qty
                    fee_growth_global = (fee_growth_global + mul_div_floor(r_mint_qty, Q96, base_l)) \
                        % FEE_GROWTH_MODULUS
                reinvest_l_last = reinvest_l

                liquidity_net = self._ticks.get_tick(next_tick).liquidity_net
                if not will_up_tick:
                    liquidity_net = -liquidity_net
                base_l = apply_liquidity_delta(base_l, abs(liquidity_net), liquidity_net >= 0)
                crossings.append((next_tick, fee_growth_global))

                if will_up_tick:
                    next_tick = self._ticks.next_tick(next_tick)
                else:
                    next_tick = self._ticks.previous_tick(next_tick)

            # ---- commit ----
            for tick, tick_fee_growth in crossings:
                self._ticks.cross(tick, tick_fee_growth, seconds_per_liquidity, will_up_tick)

            self._commit_accumulators(lp_fee, fee_growth_global, seconds_per_liquidity, now)
            state.reinvest_l_last = reinvest_l_last
            state.base_l = base_l
            state.reinvest_l = reinvest_l
            state.sqrt_p = sqrt_p
            state.current_tick = current_tick
            if next_tick > current_tick:
                state.nearest_current_tick = self._ticks.previous_tick(next_tick)
            else:
                state.nearest_current_tick = next_tick

        quantity_used = swap_qty - specified_amount
        if is_token0:
            result = SwapResult(delta_qty0=quantity_used, delta_qty1=returned_amount)
        else:
            result = SwapResult(delta_qty0=returned_amount, delta_qty1=quantity_used)

        logger.debug("swap qty=%d token0=%s -> deltas (%d, %d), tick %d, crossed %d ticks",
                     swap_qty, is_token0, result.delta_qty0, result.delta_qty1,
                     current_tick, len(crossings))
        return result

    # ------------------------------------------------------------------
    # Liquidity
    # ------------------------------------------------------------------

    def _check_ticks(self, tick_lower: int, tick_upper: int) -> None:
        if tick_lower >= tick_upper:
            raise InvalidTickRange(f"잘못된 틱 범위: {tick_lower} >= {tick_upper}")
        if tick_lower < MIN_TICK:
            raise InvalidTickRange(f"하한 틱이 범위를 벗어났습니다: {tick_lower}")
        if tick_upper > MAX_TICK:
            raise InvalidTickRange(f"상한 틱이 범위를 벗어났습니다: {tick_upper}")
        distance = self.config.tick_distance
        if not (is_tick_aligned(tick_lower, distance) and is_tick_aligned(tick_upper, distance)):
            raise TickNotAligned(f"틱이 tick distance({distance}) 배수가 아닙니다: "
                                 f"{tick_lower}, {tick_upper}")

    def mint(
        self,
        owner: str,
        tick_lower: int,
        tick_upper: int,
        ticks_previous: Sequence[int],
        qty: int
    ) -> MintResult:
        """범위 포지션에 유동성 추가

        Args:
            owner: 포지션 소유자
            tick_lower: 하한 틱
            tick_upper: 상한 틱
            ticks_previous: 새로 초기화될 (하한, 상한) 틱 바로 아래의 초기화 틱 힌트
            qty: 추가할 유동성

        Returns:
            MintResult(qty0, qty1, fee_growth_inside) - 풀이 받을 수량

        Raises:
            InvalidTickRange, TickNotAligned: 틱 범위 오류
            StaleTickHint: 힌트가 유효하지 않음
            InvalidLiquidityAmount: qty <= 0
        """
        if qty <= 0:
            raise InvalidLiquidityAmount(f"유동성은 양수여야 합니다: {qty}")
        self._check_ticks(tick_lower, tick_upper)

        with self._lock():
            qty0, qty1, inside = self._tweak_position(
                owner, tick_lower, tick_upper, ticks_previous, qty, is_add=True
            )

        logger.debug("mint %s [%d, %d) liquidity=%d -> (%d, %d)",
                     owner, tick_lower, tick_upper, qty, qty0, qty1)
        return MintResult(qty0, qty1, inside)

    def burn(self, owner: str, tick_lower: int, tick_upper: int, qty: int) -> BurnResult:
        """범위 포지션에서 유동성 제거

        Returns:
            BurnResult(qty0, qty1, fee_growth_inside) - 풀이 내줄 수량

        Raises:
            InsufficientLiquidity: 포지션 유동성보다 많이 제거
        """
        if qty <= 0:
            raise InvalidLiquidityAmount(f"유동성은 양수여야 합니다: {qty}")
        self._check_ticks(tick_lower, tick_upper)

        with self._lock():
            qty0, qty1, inside = self._tweak_position(
                owner, tick_lower, tick_upper, (MIN_TICK, MIN_TICK), qty, is_add=False
            )

        logger.debug("burn %s [%d, %d) liquidity=%d -> (%d, %d)",
                     owner, tick_lower, tick_upper, qty, -qty0, -qty1)
        return BurnResult(-qty0, -qty1, inside)

    def tweak_position_zero_liquidity(self, owner: str, tick_lower: int, tick_upper: int) -> int:
        """유동성 변경 없이 포지션 수수료 동기화

        Returns:
            현재 fee_growth_inside
        """
        self._check_ticks(tick_lower, tick_upper)
        with self._lock():
            _, _, inside = self._tweak_position(
                owner, tick_lower, tick_upper, (MIN_TICK, MIN_TICK), 0, is_add=True
            )
        return inside

    def _tweak_position(
        self,
        owner: str,
        tick_lower: int,
        tick_upper: int,
        ticks_previous: Sequence[int],
        liquidity_delta: int,
        is_add: bool
    ) -> Tuple[int, int, int]:
        state = self._state
        ticks = self._ticks
        key = PositionKey(owner, tick_lower, tick_upper)
        position = self._positions.get(key, PoolPosition())
        new_position_liquidity = apply_liquidity_delta(position.liquidity, liquidity_delta, is_add)

        # ---- validation ----
        lower_flips = upper_flips = False
        lower_previous: Optional[int] = None
        upper_previous: Optional[int] = None
        if liquidity_delta != 0:
            lower_flips = ticks.check_update(tick_lower, liquidity_delta, is_add)
            upper_flips = ticks.check_update(tick_upper, liquidity_delta, is_add)
        if is_add and lower_flips and not ticks.in_list(tick_lower):
            lower_previous = ticks.resolve_previous(tick_lower, ticks_previous[0])
        if is_add and upper_flips and not ticks.in_list(tick_upper):
            upper_hint = ticks_previous[1]
            if lower_previous is not None and upper_hint == tick_lower:
                upper_hint = lower_previous
            upper_previous = ticks.resolve_previous(tick_upper, upper_hint)
            if lower_previous is not None and upper_previous < tick_lower:
                upper_previous = tick_lower

        # ---- computation ----
        now = self.now()
        current_tick = state.current_tick
        r_mint_qty, fee_growth_global = self._sync_fee_growth(state.base_l, state.reinvest_l)
        seconds_per_liquidity = self._sync_seconds_per_liquidity(state.base_l, now)

        lower_outside, _ = self._outside_values(tick_lower, current_tick, fee_growth_global,
                                                seconds_per_liquidity)
        upper_outside, _ = self._outside_values(tick_upper, current_tick, fee_growth_global,
                                                seconds_per_liquidity)
        inside = fee_growth_inside(tick_lower, tick_upper, current_tick, fee_growth_global,
                                   lower_outside, upper_outside)
        fees_claimable = calculate_fees_claimable(position.liquidity, inside,
                                                  position.fee_growth_inside_last)

        qty0 = qty1 = 0
        base_l = state.base_l
        if liquidity_delta != 0:
            lower_sqrt_p = get_sqrt_ratio_at_tick(tick_lower)
            upper_sqrt_p = get_sqrt_ratio_at_tick(tick_upper)
            if current_tick < tick_lower:
                qty0 = calc_required_qty0(lower_sqrt_p, upper_sqrt_p, liquidity_delta, is_add)
            elif current_tick >= tick_upper:
                qty1 = calc_required_qty1(lower_sqrt_p, upper_sqrt_p, liquidity_delta, is_add)
            else:
                qty0 = calc_required_qty0(state.sqrt_p, upper_sqrt_p, liquidity_delta, is_add)
                qty1 = calc_required_qty1(lower_sqrt_p, state.sqrt_p, liquidity_delta, is_add)
                base_l = apply_liquidity_delta(base_l, liquidity_delta, is_add)

        # ---- commit ----
        self._commit_accumulators(r_mint_qty, fee_growth_global, seconds_per_liquidity, now)
        state.reinvest_l_last = state.reinvest_l

        if liquidity_delta != 0:
            for tick, is_lower, flips, previous in (
                (tick_lower, True, lower_flips, lower_previous),
                (tick_upper, False, upper_flips, upper_previous),
            ):
                ticks.update(tick, current_tick, liquidity_delta, is_add, is_lower,
                             fee_growth_global, seconds_per_liquidity)
                if not flips:
                    continue
                if is_add:
                    if previous is not None:
                        ticks.insert(tick, previous)
                    if state.nearest_current_tick < tick <= current_tick:
                        state.nearest_current_tick = tick
                elif tick not in (MIN_TICK, MAX_TICK):
                    nearest = ticks.remove(tick)
                    if tick == state.nearest_current_tick:
                        state.nearest_current_tick = nearest

        if new_position_liquidity == 0:
            self._positions.pop(key, None)
        else:
            self._positions[key] = PoolPosition(new_position_liquidity, inside)

        if fees_claimable != 0:
            self._r_balances[POOL_ACCOUNT] -= fees_claimable
            self._r_balances[owner] = self._r_balances.get(owner, 0) + fees_claimable

        state.base_l = base_l
        return qty0, qty1, inside

    # ------------------------------------------------------------------
    # Reinvestment tokens
    # ------------------------------------------------------------------

    def burn_r_tokens(self, owner: str, qty: int, is_logical_burn: bool = False) -> Tuple[int, int]:
        """rToken 을 소각하고 그 몫의 reinvestment 유동성을 토큰으로 정산

        논리적 소각(is_logical_burn)은 지급 없이 rToken 만 없앤다. 소각된 몫은
        남은 rToken 보유자의 가치로 돌아간다.

        Returns:
            지급할 (qty0, qty1)

        Raises:
            InvalidLiquidityAmount: qty <= 0
            InsufficientLiquidity: rToken 잔액 부족
        """
        if qty <= 0:
            raise InvalidLiquidityAmount(f"rToken 수량은 양수여야 합니다: {qty}")

        with self._lock() as state:
            balance = self._r_balances.get(owner, 0)
            if qty > balance:
                raise InsufficientLiquidity(f"rToken 잔액 부족: {balance} < {qty}")

            if is_logical_burn:
                self._r_balances[owner] = balance - qty
                self.r_total_supply -= qty
                logger.debug("logical burn of %d rTokens by %s", qty, owner)
                return 0, 0

            r_mint_qty, fee_growth_global = self._sync_fee_growth(state.base_l, state.reinvest_l)
            # 동기화 후, 소각 전 총 발행량 기준
            delta_l = mul_div_floor(qty, state.reinvest_l, self.r_total_supply + r_mint_qty)
            reinvest_l = state.reinvest_l - delta_l
            qty0 = get_qty0_from_burn_r_tokens(state.sqrt_p, delta_l)
            qty1 = get_qty1_from_burn_r_tokens(state.sqrt_p, delta_l)

            self._commit_accumulators(r_mint_qty, fee_growth_global,
                                      state.seconds_per_liquidity_global,
                                      state.seconds_per_liquidity_update_time)
            state.reinvest_l = reinvest_l
            state.reinvest_l_last = reinvest_l
            self._r_balances[owner] = balance - qty
            self.r_total_supply -= qty

        logger.debug("burnt %d rTokens for %s -> (%d, %d)", qty, owner, qty0, qty1)
        return qty0, qty1

    def r_token_balance(self, owner: str) -> int:
        return self._r_balances.get(owner, 0)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_pool_state(self) -> PoolStateSnapshot:
        state = self._state
        return PoolStateSnapshot(state.sqrt_p, state.current_tick,
                                 state.nearest_current_tick, state.locked)

    def get_liquidity_state(self) -> LiquidityState:
        state = self._state
        return LiquidityState(state.base_l, state.reinvest_l, state.reinvest_l_last)

    def get_fee_growth_global(self) -> int:
        return self._state.fee_growth_global

    def get_seconds_per_liquidity_data(self) -> SecondsPerLiquidityData:
        state = self._state
        return SecondsPerLiquidityData(state.seconds_per_liquidity_global,
                                       state.seconds_per_liquidity_update_time)

    def get_tick(self, tick: int) -> TickInfo:
        return self._ticks.get_tick(tick)

    def get_initialized_tick(self, tick: int) -> Optional[TickLink]:
        return self._ticks.get_link(tick)

    def get_initialized_ticks(self) -> List[int]:
        return self._ticks.initialized_ticks()

    def get_position(self, owner: str, tick_lower: int, tick_upper: int) -> PoolPosition:
        position = self._positions.get(PositionKey(owner, tick_lower, tick_upper))
        if position is None:
            return PoolPosition()
        return PoolPosition(position.liquidity, position.fee_growth_inside_last)

    def get_ticks_previous(self, tick_lower: int, tick_upper: int) -> Tuple[int, int]:
        """mint 에 넘길 (하한, 상한) 틱 힌트"""
        return (self._ticks.find_previous_initialized(tick_lower),
                self._ticks.find_previous_initialized(tick_upper))

    def get_fee_growth_inside(self, tick_lower: int, tick_upper: int) -> int:
        """아직 동기화되지 않은 재투자 수수료까지 반영한 범위 내 fee growth"""
        state = self._state
        _, fee_growth_global = self._sync_fee_growth(state.base_l, state.reinvest_l)
        lower = self._ticks.get_tick(tick_lower)
        upper = self._ticks.get_tick(tick_upper)
        return fee_growth_inside(tick_lower, tick_upper, state.current_tick, fee_growth_global,
                                 lower.fee_growth_outside, upper.fee_growth_outside)

    def get_seconds_per_liquidity_inside(self, tick_lower: int, tick_upper: int) -> int:
        """범위 내 누적 seconds / base 유동성 (Q96)"""
        self._check_ticks(tick_lower, tick_upper)
        state = self._state
        seconds_per_liquidity = self._sync_seconds_per_liquidity(state.base_l, self.now())
        lower = self._ticks.get_tick(tick_lower)
        upper = self._ticks.get_tick(tick_upper)
        return fee_growth_inside(
            tick_lower, tick_upper, state.current_tick, seconds_per_liquidity,
            lower.seconds_per_liquidity_outside, upper.seconds_per_liquidity_outside,
            modulus=SECONDS_PER_LIQUIDITY_MODULUS,
        )
