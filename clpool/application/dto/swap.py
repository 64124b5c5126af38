from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from clpool.domain.entities.pool import Coin, Pool


@dataclass(frozen=True)
class CalcOutGivenInInput:
    pool_id: int
    token_in: Coin
    token_out_denom: str
    swap_fee: Decimal
    price_limit: Decimal | None = None


@dataclass(frozen=True)
class CalcInGivenOutInput:
    pool_id: int
    token_out: Coin
    token_in_denom: str
    swap_fee: Decimal
    min_price: Decimal | None = None
    max_price: Decimal | None = None


@dataclass(frozen=True)
class SwapQuote:
    pool_id: int
    token_in: Coin
    token_out: Coin
    current_tick: int
    liquidity: Decimal
    sqrt_price: Decimal
    filled: bool = True


@dataclass(frozen=True)
class SwapExactAmountInInput:
    sender: str
    pool_id: int
    token_in: Coin
    token_out_denom: str
    token_out_min_amount: Decimal
    swap_fee: Decimal
    price_limit: Decimal | None = None


@dataclass(frozen=True)
class SwapExactAmountInOutput:
    token_in: Coin
    token_out: Coin
    pool: Pool


@dataclass(frozen=True)
class SwapExactAmountOutInput:
    sender: str
    pool_id: int
    token_in_denom: str
    token_in_max_amount: Decimal
    token_out: Coin
    swap_fee: Decimal
    min_price: Decimal | None = None
    max_price: Decimal | None = None


@dataclass(frozen=True)
class SwapExactAmountOutOutput:
    token_in: Coin
    token_out: Coin
    pool: Pool
