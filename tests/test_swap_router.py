from __future__ import annotations

from fastapi.testclient import TestClient

from clpool.api.deps import (
    get_calc_swap_use_case,
    get_pool_use_case,
    get_swap_exact_amount_in_use_case,
    get_swap_exact_amount_out_use_case,
)
from clpool.application.use_cases.calc_swap import CalcSwapUseCase
from clpool.application.use_cases.get_pool import GetPoolUseCase
from clpool.application.use_cases.swap_exact_amount_in import SwapExactAmountInUseCase
from clpool.application.use_cases.swap_exact_amount_out import SwapExactAmountOutUseCase
from clpool.domain.exceptions import TransferError
from clpool.main import app


class FakeSettlementPort:
    def __init__(self, store, *, fail: bool = False):
        self._store = store
        self._fail = fail

    def settle_swap(self, *, pool, sender, token_in, token_out) -> None:
        if self._fail:
            raise TransferError("insufficient funds.")
        self._store.set_pool(pool=pool)


class NullEventPort:
    def emit_swap(self, event) -> None:
        _ = event


def _override(store, *, settlement_fails: bool = False) -> TestClient:
    calc_swap = CalcSwapUseCase(pool_port=store, tick_port=store)
    settlement = FakeSettlementPort(store, fail=settlement_fails)
    app.dependency_overrides[get_pool_use_case] = lambda: GetPoolUseCase(pool_port=store, tick_port=store)
    app.dependency_overrides[get_calc_swap_use_case] = lambda: calc_swap
    app.dependency_overrides[get_swap_exact_amount_in_use_case] = lambda: SwapExactAmountInUseCase(
        calc_swap=calc_swap,
        pool_port=store,
        settlement_port=settlement,
        event_port=NullEventPort(),
    )
    app.dependency_overrides[get_swap_exact_amount_out_use_case] = lambda: SwapExactAmountOutUseCase(
        calc_swap=calc_swap,
        pool_port=store,
        settlement_port=settlement,
        event_port=NullEventPort(),
    )
    return TestClient(app)


def test_get_pool_returns_state(eth_usdc_store):
    client = _override(eth_usdc_store)

    response = client.get("/v1/pools/1")

    assert response.status_code == 200
    payload = response.json()
    assert payload["token0"] == "eth"
    assert payload["token1"] == "usdc"
    assert payload["current_tick"] == 85176
    assert payload["initialized_ticks"] == 2
    assert payload["address"] == "pool1"

    app.dependency_overrides.clear()


def test_get_pool_not_found(eth_usdc_store):
    client = _override(eth_usdc_store)

    response = client.get("/v1/pools/42")

    assert response.status_code == 404
    app.dependency_overrides.clear()


def test_quote_exact_in(eth_usdc_store):
    client = _override(eth_usdc_store)

    response = client.post(
        "/v1/pools/1/quote/exact-in",
        json={
            "token_in": {"denom": "usdc", "amount": "42000000"},
            "token_out_denom": "eth",
            "swap_fee": "0",
            "price_limit": "5004",
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["token_out"] == {"denom": "eth", "amount": "8396"}
    assert payload["current_tick"] == 85184
    assert payload["filled"] is True

    app.dependency_overrides.clear()


def test_quote_exact_out_with_band(eth_usdc_store):
    client = _override(eth_usdc_store)

    response = client.post(
        "/v1/pools/1/quote/exact-out",
        json={
            "token_out": {"denom": "eth", "amount": "10000"},
            "token_in_denom": "usdc",
            "max_price": "5004",
        },
    )

    assert response.status_code == 200
    assert response.json()["filled"] is False

    app.dependency_overrides.clear()


def test_quote_rejects_price_limit_on_wrong_side(eth_usdc_store):
    client = _override(eth_usdc_store)

    response = client.post(
        "/v1/pools/1/quote/exact-in",
        json={
            "token_in": {"denom": "usdc", "amount": "10"},
            "token_out_denom": "eth",
            "price_limit": "4000",
        },
    )

    assert response.status_code == 400
    app.dependency_overrides.clear()


def test_swap_exact_in_commits(eth_usdc_store):
    client = _override(eth_usdc_store)

    response = client.post(
        "/v1/pools/1/swap/exact-in",
        json={
            "sender": "trader",
            "token_in": {"denom": "usdc", "amount": "42000000"},
            "token_out_denom": "eth",
            "token_out_min_amount": "8000",
        },
    )

    assert response.status_code == 200
    assert response.json()["current_tick"] == 85184
    assert eth_usdc_store.get_pool(pool_id=1).current_tick == 85184

    app.dependency_overrides.clear()


def test_swap_exact_in_slippage_is_conflict(eth_usdc_store):
    client = _override(eth_usdc_store)

    response = client.post(
        "/v1/pools/1/swap/exact-in",
        json={
            "sender": "trader",
            "token_in": {"denom": "usdc", "amount": "42000000"},
            "token_out_denom": "eth",
            "token_out_min_amount": "9000",
        },
    )

    assert response.status_code == 409
    app.dependency_overrides.clear()


def test_swap_exact_out_transfer_failure_is_conflict(eth_usdc_store):
    client = _override(eth_usdc_store, settlement_fails=True)

    response = client.post(
        "/v1/pools/1/swap/exact-out",
        json={
            "sender": "trader",
            "token_out": {"denom": "eth", "amount": "8396"},
            "token_in_denom": "usdc",
            "token_in_max_amount": "43000000",
        },
    )

    assert response.status_code == 409
    assert eth_usdc_store.get_pool(pool_id=1).current_tick == 85176
    app.dependency_overrides.clear()


def test_swap_exact_out_beyond_reserves_is_conflict(eth_usdc_store):
    client = _override(eth_usdc_store)

    response = client.post(
        "/v1/pools/1/swap/exact-out",
        json={
            "sender": "trader",
            "token_out": {"denom": "eth", "amount": "2000000"},
            "token_in_denom": "usdc",
            "token_in_max_amount": "100000000000",
        },
    )

    assert response.status_code == 409
    app.dependency_overrides.clear()
