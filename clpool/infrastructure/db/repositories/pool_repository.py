from __future__ import annotations

from sqlalchemy import text

from clpool.application.ports.pool_port import PoolPort
from clpool.application.ports.tick_port import TickPort
from clpool.domain.entities.pool import Pool, Tick
from clpool.infrastructure.db.mappers.pool_mapper import map_pool_to_params, map_row_to_pool, map_row_to_tick


UPSERT_POOL_SQL = """
    INSERT INTO pools (id, address, token0, token1, sqrt_price, current_tick, liquidity)
    VALUES (:id, :address, :token0, :token1, :sqrt_price, :current_tick, :liquidity)
    ON CONFLICT (id)
    DO UPDATE SET
        sqrt_price = EXCLUDED.sqrt_price,
        current_tick = EXCLUDED.current_tick,
        liquidity = EXCLUDED.liquidity
"""


class SqlPoolRepository(PoolPort, TickPort):
    def __init__(self, engine):
        self._engine = engine

    def get_pool(self, *, pool_id: int) -> Pool | None:
        sql = """
            SELECT
                id,
                address,
                token0,
                token1,
                sqrt_price,
                current_tick,
                liquidity
            FROM pools
            WHERE id = :pool_id
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"pool_id": pool_id}).mappings().first()
        if not row:
            return None
        return map_row_to_pool(row)

    def set_pool(self, *, pool: Pool) -> None:
        with self._engine.begin() as conn:
            conn.execute(text(UPSERT_POOL_SQL), map_pool_to_params(pool))

    def list_initialized_ticks(self, *, pool_id: int) -> list[Tick]:
        sql = """
            SELECT
                pool_id,
                tick_index,
                liquidity_net
            FROM pool_ticks
            WHERE pool_id = :pool_id
            ORDER BY tick_index
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"pool_id": pool_id}).mappings().all()
        ticks = [map_row_to_tick(row) for row in rows]
        return [tick for tick in ticks if tick.initialized]

    def set_tick(self, *, tick: Tick) -> None:
        sql = """
            INSERT INTO pool_ticks (pool_id, tick_index, liquidity_net)
            VALUES (:pool_id, :tick_index, :liquidity_net)
            ON CONFLICT (pool_id, tick_index)
            DO UPDATE SET liquidity_net = EXCLUDED.liquidity_net
        """
        params = {
            "pool_id": tick.pool_id,
            "tick_index": tick.tick_index,
            "liquidity_net": str(tick.liquidity_net),
        }
        with self._engine.begin() as conn:
            conn.execute(text(sql), params)
