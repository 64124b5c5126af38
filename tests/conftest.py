from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import pytest

from clpool.domain.entities.pool import Pool, Tick
from clpool.domain.services.liquidity import add_liquidity, get_liquidity_from_amounts
from clpool.domain.services.price_tick import PRICE_CONTEXT, price_to_sqrt_price, tick_to_sqrt_price


class FakePoolStore:
    """PoolPort + TickPort em memoria."""

    def __init__(self):
        self.pools: dict[int, Pool] = {}
        self.ticks: dict[int, dict[int, Decimal]] = {}
        self.tick_reads = 0

    def get_pool(self, *, pool_id: int) -> Pool | None:
        return self.pools.get(pool_id)

    def set_pool(self, *, pool: Pool) -> None:
        self.pools[pool.id] = pool

    def list_initialized_ticks(self, *, pool_id: int) -> list[Tick]:
        self.tick_reads += 1
        return [
            Tick(pool_id=pool_id, tick_index=tick_index, liquidity_net=liquidity_net)
            for tick_index, liquidity_net in sorted(self.ticks.get(pool_id, {}).items())
            if liquidity_net != 0
        ]

    def add_position(
        self,
        *,
        pool_id: int,
        lower_tick: int,
        upper_tick: int,
        amount0: Decimal,
        amount1: Decimal,
    ) -> Decimal:
        pool = self.pools[pool_id]
        liquidity = get_liquidity_from_amounts(
            sqrt_price=pool.sqrt_price,
            sqrt_price_a=tick_to_sqrt_price(lower_tick),
            sqrt_price_b=tick_to_sqrt_price(upper_tick),
            amount0=amount0,
            amount1=amount1,
        )
        ticks = self.ticks.setdefault(pool_id, {})
        ticks[lower_tick] = PRICE_CONTEXT.add(ticks.get(lower_tick, Decimal("0")), liquidity)
        ticks[upper_tick] = PRICE_CONTEXT.subtract(ticks.get(upper_tick, Decimal("0")), liquidity)
        if lower_tick <= pool.current_tick < upper_tick:
            self.pools[pool_id] = replace(pool, liquidity=add_liquidity(pool.liquidity, liquidity))
        return liquidity


@pytest.fixture
def pool_store() -> FakePoolStore:
    store = FakePoolStore()
    store.set_pool(
        pool=Pool.create(
            pool_id=1,
            token0="eth",
            token1="usdc",
            sqrt_price=price_to_sqrt_price(Decimal("5000")),
        )
    )
    return store


@pytest.fixture
def eth_usdc_store(pool_store: FakePoolStore) -> FakePoolStore:
    # faixa 4545-5500 com 1 milhao de eth e 5 bilhoes de usdc
    pool_store.add_position(
        pool_id=1,
        lower_tick=84222,
        upper_tick=86129,
        amount0=Decimal("1000000"),
        amount1=Decimal("5000000000"),
    )
    return pool_store
