from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class GetPoolInput:
    pool_id: int


@dataclass(frozen=True)
class GetPoolOutput:
    pool_id: int
    address: str
    token0: str
    token1: str
    sqrt_price: Decimal
    price: Decimal
    current_tick: int
    liquidity: Decimal
    initialized_ticks: int
