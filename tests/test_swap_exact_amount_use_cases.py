from __future__ import annotations

from decimal import Decimal

import pytest

from clpool.application.dto.swap import SwapExactAmountInInput, SwapExactAmountOutInput
from clpool.application.use_cases.calc_swap import CalcSwapUseCase
from clpool.application.use_cases.swap_exact_amount_in import SwapExactAmountInUseCase
from clpool.application.use_cases.swap_exact_amount_out import SwapExactAmountOutUseCase
from clpool.domain.entities.pool import Coin
from clpool.domain.entities.swap import SwapEvent
from clpool.domain.exceptions import (
    InvalidArgumentError,
    NoLiquidityError,
    SlippageExceededError,
    TransferError,
)


class FakeSettlementPort:
    def __init__(self, store, *, fail: bool = False):
        self._store = store
        self._fail = fail
        self.settlements: list[tuple[str, Coin, Coin]] = []

    def settle_swap(self, *, pool, sender: str, token_in: Coin, token_out: Coin) -> None:
        if self._fail:
            raise TransferError("insufficient funds.")
        self._store.set_pool(pool=pool)
        self.settlements.append((sender, token_in, token_out))


class FakeEventPort:
    def __init__(self):
        self.events: list[SwapEvent] = []

    def emit_swap(self, event: SwapEvent) -> None:
        self.events.append(event)


def _swap_in(store, settlement, events) -> SwapExactAmountInUseCase:
    return SwapExactAmountInUseCase(
        calc_swap=CalcSwapUseCase(pool_port=store, tick_port=store),
        pool_port=store,
        settlement_port=settlement,
        event_port=events,
    )


def _swap_out(store, settlement, events) -> SwapExactAmountOutUseCase:
    return SwapExactAmountOutUseCase(
        calc_swap=CalcSwapUseCase(pool_port=store, tick_port=store),
        pool_port=store,
        settlement_port=settlement,
        event_port=events,
    )


def _exact_in_command(min_out: str = "8000", denom_out: str = "eth") -> SwapExactAmountInInput:
    return SwapExactAmountInInput(
        sender="trader",
        pool_id=1,
        token_in=Coin(denom="usdc", amount=Decimal("42000000")),
        token_out_denom=denom_out,
        token_out_min_amount=Decimal(min_out),
        swap_fee=Decimal("0"),
    )


def _exact_out_command(max_in: str = "43000000", amount_out: str = "8396", max_price: str | None = None):
    return SwapExactAmountOutInput(
        sender="trader",
        pool_id=1,
        token_in_denom="usdc",
        token_in_max_amount=Decimal(max_in),
        token_out=Coin(denom="eth", amount=Decimal(amount_out)),
        swap_fee=Decimal("0"),
        max_price=Decimal(max_price) if max_price is not None else None,
    )


class TestSwapExactAmountIn:
    def test_applies_pool_state_and_emits_event(self, eth_usdc_store):
        settlement = FakeSettlementPort(eth_usdc_store)
        events = FakeEventPort()

        result = _swap_in(eth_usdc_store, settlement, events).execute(_exact_in_command())

        assert result.token_out == Coin(denom="eth", amount=Decimal("8396"))
        pool = eth_usdc_store.get_pool(pool_id=1)
        assert pool == result.pool
        assert pool.current_tick == 85184
        assert settlement.settlements == [("trader", result.token_in, result.token_out)]
        assert events.events == [
            SwapEvent(sender="trader", pool_id=1, token_in=result.token_in, token_out=result.token_out)
        ]

    def test_consecutive_swaps_continue_from_updated_pool(self, eth_usdc_store):
        use_case = _swap_in(eth_usdc_store, FakeSettlementPort(eth_usdc_store), FakeEventPort())

        first = use_case.execute(_exact_in_command())
        second = use_case.execute(_exact_in_command())

        assert second.token_out.amount < first.token_out.amount
        assert second.pool.current_tick > first.pool.current_tick

    def test_min_out_not_met_leaves_pool_untouched(self, eth_usdc_store):
        before = eth_usdc_store.get_pool(pool_id=1)
        settlement = FakeSettlementPort(eth_usdc_store)
        events = FakeEventPort()

        with pytest.raises(SlippageExceededError):
            _swap_in(eth_usdc_store, settlement, events).execute(_exact_in_command(min_out="9000"))

        assert eth_usdc_store.get_pool(pool_id=1) == before
        assert settlement.settlements == []
        assert events.events == []

    def test_transfer_failure_emits_nothing(self, eth_usdc_store):
        before = eth_usdc_store.get_pool(pool_id=1)
        events = FakeEventPort()

        with pytest.raises(TransferError):
            _swap_in(eth_usdc_store, FakeSettlementPort(eth_usdc_store, fail=True), events).execute(
                _exact_in_command()
            )

        assert eth_usdc_store.get_pool(pool_id=1) == before
        assert events.events == []

    def test_same_denom_is_rejected(self, eth_usdc_store):
        with pytest.raises(InvalidArgumentError):
            _swap_in(eth_usdc_store, FakeSettlementPort(eth_usdc_store), FakeEventPort()).execute(
                _exact_in_command(denom_out="usdc")
            )

    def test_fee_is_debited_from_sender(self, eth_usdc_store):
        settlement = FakeSettlementPort(eth_usdc_store)
        command = SwapExactAmountInInput(
            sender="trader",
            pool_id=1,
            token_in=Coin(denom="usdc", amount=Decimal("1000000")),
            token_out_denom="eth",
            token_out_min_amount=Decimal("1"),
            swap_fee=Decimal("0.1"),
        )

        result = _swap_in(eth_usdc_store, settlement, FakeEventPort()).execute(command)

        assert result.token_in == Coin(denom="usdc", amount=Decimal("1000000"))
        assert settlement.settlements == [("trader", result.token_in, result.token_out)]
        assert 0 < result.token_out.amount < Decimal("200")

    def test_fractional_token_in_is_rejected(self, eth_usdc_store):
        command = SwapExactAmountInInput(
            sender="trader",
            pool_id=1,
            token_in=Coin(denom="usdc", amount=Decimal("10.5")),
            token_out_denom="eth",
            token_out_min_amount=Decimal("0"),
            swap_fee=Decimal("0"),
        )
        settlement = FakeSettlementPort(eth_usdc_store)

        with pytest.raises(InvalidArgumentError):
            _swap_in(eth_usdc_store, settlement, FakeEventPort()).execute(command)
        assert settlement.settlements == []


class TestSwapExactAmountOut:
    def test_applies_pool_state_and_emits_event(self, eth_usdc_store):
        settlement = FakeSettlementPort(eth_usdc_store)
        events = FakeEventPort()

        result = _swap_out(eth_usdc_store, settlement, events).execute(_exact_out_command())

        assert result.token_out == Coin(denom="eth", amount=Decimal("8396"))
        assert result.token_in.denom == "usdc"
        assert result.token_in.amount <= Decimal("43000000")
        assert eth_usdc_store.get_pool(pool_id=1) == result.pool
        assert len(settlement.settlements) == 1
        assert len(events.events) == 1

    def test_max_in_exceeded(self, eth_usdc_store):
        events = FakeEventPort()

        with pytest.raises(SlippageExceededError):
            _swap_out(eth_usdc_store, FakeSettlementPort(eth_usdc_store), events).execute(
                _exact_out_command(max_in="40000000")
            )
        assert events.events == []

    def test_unfilled_output_is_rejected(self, eth_usdc_store):
        before = eth_usdc_store.get_pool(pool_id=1)

        with pytest.raises(NoLiquidityError):
            _swap_out(eth_usdc_store, FakeSettlementPort(eth_usdc_store), FakeEventPort()).execute(
                _exact_out_command(max_in="100000000", amount_out="10000", max_price="5004")
            )
        assert eth_usdc_store.get_pool(pool_id=1) == before

    def test_non_positive_max_in_is_invalid(self, eth_usdc_store):
        with pytest.raises(InvalidArgumentError):
            _swap_out(eth_usdc_store, FakeSettlementPort(eth_usdc_store), FakeEventPort()).execute(
                _exact_out_command(max_in="0")
            )
