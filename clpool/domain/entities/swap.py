from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from clpool.domain.entities.pool import Coin


class SwapMode(str, Enum):
    EXACT_IN = "exact_in"
    EXACT_OUT = "exact_out"


@dataclass
class SwapState:
    """Estado transiente de um unico swap; nunca compartilhado nem persistido."""

    amount_specified_remaining: Decimal
    amount_calculated: Decimal
    sqrt_price: Decimal
    tick: int
    liquidity: Decimal


@dataclass(frozen=True)
class SwapStep:
    sqrt_price_next: Decimal
    amount_in: Decimal
    amount_out: Decimal


@dataclass(frozen=True)
class SwapEvent:
    sender: str
    pool_id: int
    token_in: Coin
    token_out: Coin
