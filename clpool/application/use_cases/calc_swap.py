from __future__ import annotations

import logging
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, localcontext

from clpool.application.dto.swap import CalcInGivenOutInput, CalcOutGivenInInput, SwapQuote
from clpool.application.ports.pool_port import PoolPort
from clpool.application.ports.tick_port import TickPort
from clpool.domain.entities.pool import Coin, Pool
from clpool.domain.entities.swap import SwapMode, SwapState
from clpool.domain.exceptions import InvalidArgumentError, PoolNotFoundError, PriceLimitViolationError
from clpool.domain.services.price_tick import (
    MAX_SQRT_RATIO,
    MIN_SQRT_RATIO,
    PRICE_CONTEXT,
    price_to_sqrt_price,
)
from clpool.domain.services.swap_traversal import DEFAULT_MAX_ITERATIONS, SWAP_EPSILON, traverse_swap
from clpool.domain.services.tick_index import TickIndex


logger = logging.getLogger(__name__)


class CalcSwapUseCase:
    """Cotacao de swaps sobre o estado atual da pool, sem persistir nada."""

    def __init__(
        self,
        *,
        pool_port: PoolPort,
        tick_port: TickPort,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ):
        self._pool_port = pool_port
        self._tick_port = tick_port
        self._max_iterations = max(1, max_iterations)

    def calc_out_given_in(self, command: CalcOutGivenInInput) -> SwapQuote:
        logger.info(
            "calc_swap: exact_in pool=%s token_in=%s amount=%s token_out=%s fee=%s price_limit=%s",
            command.pool_id,
            command.token_in.denom,
            command.token_in.amount,
            command.token_out_denom,
            command.swap_fee,
            command.price_limit,
        )
        pool = self._get_pool(command.pool_id)
        _validate_denoms(pool, token_in_denom=command.token_in.denom, token_out_denom=command.token_out_denom)
        _validate_amount(command.token_in.amount, field_name="token_in amount")
        _validate_fee(command.swap_fee)

        zero_for_one = command.token_in.denom == pool.token0
        sqrt_price_limit = _resolve_price_limit(pool, command.price_limit, zero_for_one)

        with localcontext(PRICE_CONTEXT):
            amount_after_fee = command.token_in.amount * (1 - command.swap_fee)

        state = self._traverse(
            pool=pool,
            amount_specified=amount_after_fee,
            sqrt_price_limit=sqrt_price_limit,
            zero_for_one=zero_for_one,
            mode=SwapMode.EXACT_IN,
        )

        # token_in cobrado inclui a taxa sobre a parte consumida
        with localcontext(PRICE_CONTEXT):
            amount_in = (
                (amount_after_fee - state.amount_specified_remaining) / (1 - command.swap_fee)
            ).to_integral_value(rounding=ROUND_CEILING)
            amount_in = min(amount_in, command.token_in.amount)
            amount_out = state.amount_calculated.to_integral_value(rounding=ROUND_FLOOR)

        logger.info(
            "calc_swap: exact_in done pool=%s amount_in=%s amount_out=%s tick=%s",
            pool.id,
            amount_in,
            amount_out,
            state.tick,
        )
        return SwapQuote(
            pool_id=pool.id,
            token_in=Coin(denom=command.token_in.denom, amount=amount_in),
            token_out=Coin(denom=command.token_out_denom, amount=amount_out),
            current_tick=state.tick,
            liquidity=state.liquidity,
            sqrt_price=state.sqrt_price,
        )

    def calc_in_given_out(self, command: CalcInGivenOutInput) -> SwapQuote:
        logger.info(
            "calc_swap: exact_out pool=%s token_out=%s amount=%s token_in=%s fee=%s band=[%s, %s]",
            command.pool_id,
            command.token_out.denom,
            command.token_out.amount,
            command.token_in_denom,
            command.swap_fee,
            command.min_price,
            command.max_price,
        )
        pool = self._get_pool(command.pool_id)
        _validate_denoms(pool, token_in_denom=command.token_in_denom, token_out_denom=command.token_out.denom)
        _validate_amount(command.token_out.amount, field_name="token_out amount")
        _validate_fee(command.swap_fee)

        zero_for_one = command.token_in_denom == pool.token0
        sqrt_price_limit = _resolve_price_band(pool, command.min_price, command.max_price, zero_for_one)

        state = self._traverse(
            pool=pool,
            amount_specified=command.token_out.amount,
            sqrt_price_limit=sqrt_price_limit,
            zero_for_one=zero_for_one,
            mode=SwapMode.EXACT_OUT,
        )

        filled = state.amount_specified_remaining <= SWAP_EPSILON
        with localcontext(PRICE_CONTEXT):
            amount_in = (state.amount_calculated / (1 - command.swap_fee)).to_integral_value(
                rounding=ROUND_CEILING
            )
            if filled:
                amount_out = command.token_out.amount
            else:
                amount_out = (command.token_out.amount - state.amount_specified_remaining).to_integral_value(
                    rounding=ROUND_FLOOR
                )

        logger.info(
            "calc_swap: exact_out done pool=%s amount_in=%s amount_out=%s tick=%s filled=%s",
            pool.id,
            amount_in,
            amount_out,
            state.tick,
            filled,
        )
        return SwapQuote(
            pool_id=pool.id,
            token_in=Coin(denom=command.token_in_denom, amount=amount_in),
            token_out=Coin(denom=command.token_out.denom, amount=amount_out),
            current_tick=state.tick,
            liquidity=state.liquidity,
            sqrt_price=state.sqrt_price,
            filled=filled,
        )

    def _get_pool(self, pool_id: int) -> Pool:
        pool = self._pool_port.get_pool(pool_id=pool_id)
        if pool is None:
            raise PoolNotFoundError("Pool not found.")
        return pool

    def _traverse(
        self,
        *,
        pool: Pool,
        amount_specified: Decimal,
        sqrt_price_limit: Decimal,
        zero_for_one: bool,
        mode: SwapMode,
    ) -> SwapState:
        state = SwapState(
            amount_specified_remaining=amount_specified,
            amount_calculated=Decimal("0"),
            sqrt_price=pool.sqrt_price,
            tick=pool.current_tick,
            liquidity=pool.liquidity,
        )
        if sqrt_price_limit == pool.sqrt_price:
            return state
        tick_index = TickIndex(self._tick_port.list_initialized_ticks(pool_id=pool.id))
        return traverse_swap(
            state=state,
            tick_index=tick_index,
            sqrt_price_limit=sqrt_price_limit,
            zero_for_one=zero_for_one,
            mode=mode,
            max_iterations=self._max_iterations,
        )


def _validate_denoms(pool: Pool, *, token_in_denom: str, token_out_denom: str) -> None:
    if token_in_denom == token_out_denom:
        raise InvalidArgumentError("token_in and token_out must be different denominations.")
    if not pool.has_denom(token_in_denom):
        raise InvalidArgumentError(f"denom {token_in_denom} does not belong to pool {pool.id}.")
    if not pool.has_denom(token_out_denom):
        raise InvalidArgumentError(f"denom {token_out_denom} does not belong to pool {pool.id}.")


def _validate_amount(amount: Decimal, *, field_name: str) -> None:
    if amount <= 0:
        raise InvalidArgumentError(f"{field_name} must be positive.")
    if amount != amount.to_integral_value():
        raise InvalidArgumentError(f"{field_name} must be a whole number.")


def _validate_fee(swap_fee: Decimal) -> None:
    if swap_fee < 0 or swap_fee >= 1:
        raise InvalidArgumentError("swap_fee must be in [0, 1).")


def _resolve_price_limit(pool: Pool, price_limit: Decimal | None, zero_for_one: bool) -> Decimal:
    if price_limit is None:
        return MIN_SQRT_RATIO if zero_for_one else MAX_SQRT_RATIO
    if price_limit <= 0:
        raise InvalidArgumentError("price_limit must be positive.")

    sqrt_price_limit = price_to_sqrt_price(price_limit)
    if sqrt_price_limit < MIN_SQRT_RATIO or sqrt_price_limit > MAX_SQRT_RATIO:
        raise PriceLimitViolationError(f"price_limit {price_limit} is outside the supported price range.")
    if zero_for_one and sqrt_price_limit > pool.sqrt_price:
        raise PriceLimitViolationError(
            f"price_limit {price_limit} must not be above the current price when selling {pool.token0}."
        )
    if not zero_for_one and sqrt_price_limit < pool.sqrt_price:
        raise PriceLimitViolationError(
            f"price_limit {price_limit} must not be below the current price when selling {pool.token1}."
        )
    return sqrt_price_limit


def _resolve_price_band(
    pool: Pool,
    min_price: Decimal | None,
    max_price: Decimal | None,
    zero_for_one: bool,
) -> Decimal:
    if min_price is not None and min_price < 0:
        raise InvalidArgumentError("min_price cannot be negative.")
    if max_price is not None and max_price <= 0:
        raise InvalidArgumentError("max_price must be positive.")

    sqrt_price_min = MIN_SQRT_RATIO
    if min_price:
        sqrt_price_min = max(price_to_sqrt_price(min_price), MIN_SQRT_RATIO)
    sqrt_price_max = MAX_SQRT_RATIO
    if max_price is not None:
        sqrt_price_max = min(price_to_sqrt_price(max_price), MAX_SQRT_RATIO)

    if not sqrt_price_min < pool.sqrt_price < sqrt_price_max:
        raise PriceLimitViolationError(
            f"price band [{min_price}, {max_price}] must strictly contain the current price."
        )
    return sqrt_price_min if zero_for_one else sqrt_price_max
