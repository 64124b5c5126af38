from __future__ import annotations

from decimal import Decimal

import pytest

from clpool.domain.entities.pool import Pool, Tick
from clpool.domain.exceptions import InvalidArgumentError
from clpool.domain.services.price_tick import price_to_sqrt_price


def test_create_derives_tick_and_default_address():
    pool = Pool.create(pool_id=7, token0="eth", token1="usdc", sqrt_price=price_to_sqrt_price(Decimal("5000")))

    assert pool.current_tick == 85176
    assert pool.liquidity == 0
    assert pool.address == "pool7"
    assert pool.has_denom("eth") and pool.has_denom("usdc")
    assert not pool.has_denom("atom")


@pytest.mark.parametrize(
    "token0, token1, sqrt_price",
    [
        ("eth", "eth", "1"),
        ("usdc", "eth", "1"),
        ("eth", "usdc", "0"),
    ],
)
def test_create_rejects_invalid_pools(token0, token1, sqrt_price):
    with pytest.raises(InvalidArgumentError):
        Pool.create(pool_id=1, token0=token0, token1=token1, sqrt_price=Decimal(sqrt_price))


def test_apply_swap_returns_new_pool():
    pool = Pool.create(pool_id=1, token0="eth", token1="usdc", sqrt_price=Decimal("1"), address="osmo1pool")

    moved = pool.apply_swap(tick=199, liquidity=Decimal("1000"), sqrt_price=Decimal("1.01"))

    assert moved.current_tick == 199
    assert moved.address == "osmo1pool"
    assert pool.current_tick == 0


@pytest.mark.parametrize("liquidity, sqrt_price", [("-1", "1"), ("1", "0")])
def test_apply_swap_rejects_invalid_state(liquidity, sqrt_price):
    pool = Pool.create(pool_id=1, token0="eth", token1="usdc", sqrt_price=Decimal("1"))

    with pytest.raises(InvalidArgumentError):
        pool.apply_swap(tick=0, liquidity=Decimal(liquidity), sqrt_price=Decimal(sqrt_price))


def test_tick_initialized_flag():
    assert Tick(pool_id=1, tick_index=10, liquidity_net=Decimal("-3")).initialized
    assert not Tick(pool_id=1, tick_index=10, liquidity_net=Decimal("0")).initialized
