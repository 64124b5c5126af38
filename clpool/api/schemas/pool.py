from __future__ import annotations

from pydantic import BaseModel


class PoolResponse(BaseModel):
    pool_id: int
    address: str
    token0: str
    token1: str
    sqrt_price: str
    price: str
    current_tick: int
    liquidity: str
    initialized_ticks: int
