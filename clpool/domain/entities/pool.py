from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from clpool.domain.exceptions import InvalidArgumentError
from clpool.domain.services.price_tick import sqrt_price_to_tick


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: Decimal


@dataclass(frozen=True)
class Pool:
    id: int
    address: str
    token0: str
    token1: str
    sqrt_price: Decimal
    current_tick: int
    liquidity: Decimal

    @classmethod
    def create(
        cls,
        *,
        pool_id: int,
        token0: str,
        token1: str,
        sqrt_price: Decimal,
        address: str | None = None,
    ) -> "Pool":
        if token0 == token1:
            raise InvalidArgumentError("token0 and token1 must be different denominations.")
        if token0 > token1:
            raise InvalidArgumentError(
                f"pool assets must be ordered: {token0} must sort before {token1}."
            )
        if sqrt_price <= 0:
            raise InvalidArgumentError("sqrt_price must be positive.")
        return cls(
            id=pool_id,
            address=address or f"pool{pool_id}",
            token0=token0,
            token1=token1,
            sqrt_price=sqrt_price,
            current_tick=sqrt_price_to_tick(sqrt_price),
            liquidity=Decimal("0"),
        )

    def has_denom(self, denom: str) -> bool:
        return denom in (self.token0, self.token1)

    def apply_swap(self, *, tick: int, liquidity: Decimal, sqrt_price: Decimal) -> "Pool":
        if liquidity < 0:
            raise InvalidArgumentError("liquidity cannot be negative.")
        if sqrt_price <= 0:
            raise InvalidArgumentError("sqrt_price must be positive.")
        return replace(self, current_tick=tick, liquidity=liquidity, sqrt_price=sqrt_price)


@dataclass(frozen=True)
class Tick:
    pool_id: int
    tick_index: int
    liquidity_net: Decimal

    @property
    def initialized(self) -> bool:
        return self.liquidity_net != 0
