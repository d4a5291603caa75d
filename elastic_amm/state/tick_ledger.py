"""
Tick Ledger - 틱 상태와 초기화된 틱 연결 리스트

틱 레코드(TickInfo)는 tick index 를 키로 하는 dict 에 저장하고, 초기화된 틱은
previous/next 포인터를 가진 이중 연결 리스트로 관리한다. 리스트는
MIN_TICK <-> MAX_TICK 센티널로 시작하며 센티널은 제거되지 않는다.

호출자는 새로 초기화될 틱의 바로 아래 초기화 틱을 힌트(ticks_previous)로
넘긴다. 힌트에서 최대 MAX_TICK_TRAVEL 개까지 앞으로 탐색해 삽입 위치를 찾으므로
삽입은 O(1) 이다. 정렬된 인덱스(bisect)는 힌트 조회 같은 O(log n) 질의에만 쓴다.

References:
- KyberSwap Elastic: contracts/libraries/Linkedlist.sol
- KyberSwap Elastic: contracts/PoolTicksState.sol
"""

import bisect
import dataclasses
import logging
from typing import Dict, List, Optional

from ..constants import MAX_TICK, MAX_TICK_TRAVEL, MIN_TICK, UINT128_MAX
from ..errors import StaleTickHint, TickLiquidityOverflow
from ..math.fee_math import FEE_GROWTH_MODULUS, SECONDS_PER_LIQUIDITY_MODULUS
from ..math.liquidity_math import apply_liquidity_delta
from .types import TickInfo, TickLink

logger = logging.getLogger(__name__)


def max_liquidity_per_tick(tick_distance: int) -> int:
    """틱 하나가 가질 수 있는 최대 liquidity_gross

    모든 사용 가능 틱에 최대치가 쌓여도 활성 유동성이 uint128 을 넘지 않도록 나눈다.
    """
    num_ticks = (MAX_TICK // tick_distance) * 2 + 1
    return UINT128_MAX // num_ticks


class TickLedger:
    """틱 레코드와 초기화된 틱 연결 리스트"""

    def __init__(self, tick_distance: int):
        self.tick_distance = tick_distance
        self.max_tick_liquidity = max_liquidity_per_tick(tick_distance)
        self._ticks: Dict[int, TickInfo] = {}
        self._links: Dict[int, TickLink] = {
            MIN_TICK: TickLink(previous=MIN_TICK, next=MAX_TICK),
            MAX_TICK: TickLink(previous=MIN_TICK, next=MAX_TICK),
        }
        self._sorted: List[int] = [MIN_TICK, MAX_TICK]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_tick(self, tick: int) -> TickInfo:
        """틱 레코드 사본 (초기화되지 않은 틱은 빈 레코드)"""
        info = self._ticks.get(tick)
        return dataclasses.replace(info) if info is not None else TickInfo()

    def get_link(self, tick: int) -> Optional[TickLink]:
        link = self._links.get(tick)
        return dataclasses.replace(link) if link is not None else None

    def is_initialized(self, tick: int) -> bool:
        """liquidity_gross > 0 인 틱인지 여부"""
        return tick in self._ticks

    def in_list(self, tick: int) -> bool:
        """연결 리스트에 있는 틱인지 여부 (센티널 포함)"""
        return tick in self._links

    def next_tick(self, tick: int) -> int:
        return self._links[tick].next

    def previous_tick(self, tick: int) -> int:
        return self._links[tick].previous

    def initialized_ticks(self) -> List[int]:
        """센티널을 제외한 초기화 틱 목록 (오름차순)"""
        return [t for t in self._sorted if t in self._ticks]

    def find_previous_initialized(self, tick: int) -> int:
        """tick 보다 작은 가장 큰 리스트 틱 (힌트 계산용)"""
        index = bisect.bisect_left(self._sorted, tick)
        return self._sorted[max(index - 1, 0)]

    # ------------------------------------------------------------------
    # Linked list
    # ------------------------------------------------------------------

    def resolve_previous(self, tick: int, hint: int) -> int:
        """힌트를 검증하고 tick 바로 아래의 리스트 틱을 반환

        힌트는 리스트에 있고 tick 보다 작아야 한다. 힌트 이후에 다른 틱이
        삽입되었을 수 있으므로 최대 MAX_TICK_TRAVEL 개까지 앞으로 이동한다.

        Raises:
            StaleTickHint: 힌트가 제거되었거나, tick 이상이거나, 너무 멀리 있는 경우
        """
        if hint not in self._links:
            logger.warning("stale tick hint %d for tick %d: hint is not initialized", hint, tick)
            raise StaleTickHint(f"이전 틱이 제거되었습니다: {hint}")
        if hint >= tick:
            logger.warning("stale tick hint %d for tick %d: hint is not below tick", hint, tick)
            raise StaleTickHint(f"이전 틱 힌트가 틱보다 작지 않습니다: {hint} >= {tick}")

        previous = hint
        next_tick = self._links[previous].next
        iteration = 0
        while next_tick <= tick and iteration < MAX_TICK_TRAVEL:
            previous = next_tick
            next_tick = self._links[previous].next
            iteration += 1

        if not previous < tick < next_tick:
            logger.warning("stale tick hint %d for tick %d: too far below", hint, tick)
            raise StaleTickHint(f"이전 틱 힌트가 너무 멉니다: {hint} -> {tick}")
        return previous

    def insert(self, tick: int, previous: int) -> None:
        """previous 바로 다음에 tick 삽입 (previous 는 resolve_previous 결과)"""
        if tick in self._links:
            return
        next_tick = self._links[previous].next
        self._links[tick] = TickLink(previous=previous, next=next_tick)
        self._links[previous].next = tick
        self._links[next_tick].previous = tick
        bisect.insort(self._sorted, tick)

    def remove(self, tick: int) -> int:
        """리스트에서 tick 제거, 바로 아래 리스트 틱을 반환

        센티널은 제거하지 않는다.
        """
        if tick in (MIN_TICK, MAX_TICK):
            return tick if tick == MIN_TICK else self._links[tick].previous
        link = self._links.pop(tick)
        self._links[link.previous].next = link.next
        self._links[link.next].previous = link.previous
        self._sorted.remove(tick)
        return link.previous

    # ------------------------------------------------------------------
    # Tick records
    # ------------------------------------------------------------------

    def check_update(self, tick: int, liquidity_delta: int, is_add: bool) -> bool:
        """update() 를 미리 검증하고 초기화 상태가 바뀌는지 반환

        Raises:
            TickLiquidityOverflow: 틱당 최대 유동성 초과
            InsufficientLiquidity: 틱 유동성보다 많이 제거
        """
        gross_before = self._ticks[tick].liquidity_gross if tick in self._ticks else 0
        gross_after = apply_liquidity_delta(gross_before, liquidity_delta, is_add)
        if gross_after > self.max_tick_liquidity:
            raise TickLiquidityOverflow(
                f"틱 {tick} 유동성이 최대값을 초과합니다: {gross_after} > {self.max_tick_liquidity}"
            )
        return (gross_before > 0) != (gross_after > 0)

    def update(
        self,
        tick: int,
        current_tick: int,
        liquidity_delta: int,
        is_add: bool,
        is_lower: bool,
        fee_growth_global: int,
        seconds_per_liquidity_global: int
    ) -> bool:
        """포지션 경계 틱의 유동성 변경

        새로 초기화되는 틱이 현재 틱 이하이면, 그동안의 성장은 모두 틱 아래에서
        일어난 것으로 보고 outside 값을 전역 값으로 설정한다.

        Args:
            tick: 경계 틱
            current_tick: 풀의 현재 틱
            liquidity_delta: 유동성 변화량 (양수)
            is_add: 추가 여부
            is_lower: 하한 틱 여부 (liquidity_net 부호 결정)
            fee_growth_global: 전역 fee growth
            seconds_per_liquidity_global: 전역 seconds-per-liquidity

        Returns:
            초기화 상태가 바뀌었는지 여부 (연결 리스트 갱신 필요)
        """
        flipped = self.check_update(tick, liquidity_delta, is_add)
        info = self._ticks.get(tick)
        if info is None:
            info = TickInfo()
            if tick <= current_tick:
                info.fee_growth_outside = fee_growth_global
                info.seconds_per_liquidity_outside = seconds_per_liquidity_global
            self._ticks[tick] = info

        info.liquidity_gross = apply_liquidity_delta(info.liquidity_gross, liquidity_delta, is_add)
        signed_delta = liquidity_delta if is_add else -liquidity_delta
        info.liquidity_net += signed_delta if is_lower else -signed_delta

        if info.liquidity_gross == 0:
            del self._ticks[tick]
        return flipped

    def cross(
        self,
        tick: int,
        fee_growth_global: int,
        seconds_per_liquidity_global: int,
        will_up_tick: bool
    ) -> int:
        """틱 크로싱: outside 값을 뒤집고 base 유동성 변화량을 반환

        Returns:
            위로 크로싱하면 liquidity_net, 아래로 크로싱하면 -liquidity_net
        """
        info = self._ticks.get(tick)
        if info is None:
            return 0
        info.fee_growth_outside = (fee_growth_global - info.fee_growth_outside) % FEE_GROWTH_MODULUS
        info.seconds_per_liquidity_outside = (
            seconds_per_liquidity_global - info.seconds_per_liquidity_outside
        ) % SECONDS_PER_LIQUIDITY_MODULUS
        logger.debug("crossed tick %d (%s)", tick, "up" if will_up_tick else "down")
        return info.liquidity_net if will_up_tick else -info.liquidity_net
