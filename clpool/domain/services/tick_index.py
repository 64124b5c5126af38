from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from decimal import Decimal

from clpool.domain.entities.pool import Tick
from clpool.domain.services.price_tick import MAX_TICK, MIN_TICK


@dataclass(frozen=True)
class NextTick:
    tick: int
    found: bool


class TickIndex:
    """Snapshot ordenado dos ticks inicializados de uma pool.

    O tick de trabalho t representa o intervalo [t, t+1). Descendo, o proximo
    limite e o maior tick inicializado <= t; subindo, o menor tick > t.
    """

    def __init__(self, ticks: list[Tick]):
        initialized = sorted(
            (tick for tick in ticks if tick.initialized),
            key=lambda row: row.tick_index,
        )
        self._indexes = [tick.tick_index for tick in initialized]
        self._liquidity_net = {tick.tick_index: tick.liquidity_net for tick in initialized}

    def __len__(self) -> int:
        return len(self._indexes)

    def next_initialized_tick(self, from_tick: int, zero_for_one: bool) -> NextTick:
        if zero_for_one:
            idx = bisect_right(self._indexes, from_tick) - 1
            if idx < 0:
                return NextTick(tick=MIN_TICK, found=False)
            return NextTick(tick=self._indexes[idx], found=True)

        idx = bisect_left(self._indexes, from_tick + 1)
        if idx >= len(self._indexes):
            return NextTick(tick=MAX_TICK, found=False)
        return NextTick(tick=self._indexes[idx], found=True)

    def cross_tick(self, tick: int) -> Decimal:
        return self._liquidity_net.get(tick, Decimal("0"))
