from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from clpool.domain.entities.pool import Pool, Tick


def map_row_to_pool(row: Mapping[str, Any]) -> Pool:
    return Pool(
        id=int(row["id"]),
        address=row["address"],
        token0=row["token0"],
        token1=row["token1"],
        sqrt_price=Decimal(str(row["sqrt_price"])),
        current_tick=int(row["current_tick"]),
        liquidity=Decimal(str(row["liquidity"])),
    )


def map_row_to_tick(row: Mapping[str, Any]) -> Tick:
    return Tick(
        pool_id=int(row["pool_id"]),
        tick_index=int(row["tick_index"]),
        liquidity_net=Decimal(str(row["liquidity_net"])),
    )


def map_pool_to_params(pool: Pool) -> dict[str, Any]:
    return {
        "id": pool.id,
        "address": pool.address,
        "token0": pool.token0,
        "token1": pool.token1,
        "sqrt_price": str(pool.sqrt_price),
        "current_tick": pool.current_tick,
        "liquidity": str(pool.liquidity),
    }
