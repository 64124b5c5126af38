from __future__ import annotations

from clpool.application.dto.pool import GetPoolInput, GetPoolOutput
from clpool.application.ports.pool_port import PoolPort
from clpool.application.ports.tick_port import TickPort
from clpool.domain.exceptions import PoolNotFoundError
from clpool.domain.services.price_tick import sqrt_price_to_price


class GetPoolUseCase:
    def __init__(self, *, pool_port: PoolPort, tick_port: TickPort):
        self._pool_port = pool_port
        self._tick_port = tick_port

    def execute(self, command: GetPoolInput) -> GetPoolOutput:
        pool = self._pool_port.get_pool(pool_id=command.pool_id)
        if pool is None:
            raise PoolNotFoundError("Pool not found.")
        ticks = self._tick_port.list_initialized_ticks(pool_id=pool.id)
        return GetPoolOutput(
            pool_id=pool.id,
            address=pool.address,
            token0=pool.token0,
            token1=pool.token1,
            sqrt_price=pool.sqrt_price,
            price=sqrt_price_to_price(pool.sqrt_price),
            current_tick=pool.current_tick,
            liquidity=pool.liquidity,
            initialized_ticks=sum(1 for tick in ticks if tick.initialized),
        )
