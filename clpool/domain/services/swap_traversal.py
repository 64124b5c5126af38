from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, localcontext

from clpool.domain.entities.swap import SwapMode, SwapState, SwapStep
from clpool.domain.exceptions import ComputationDivergenceError, NoLiquidityError
from clpool.domain.services.liquidity import add_liquidity
from clpool.domain.services.price_tick import PRICE_CONTEXT, sqrt_price_to_tick, tick_to_sqrt_price
from clpool.domain.services.swap_math import compute_swap_step
from clpool.domain.services.tick_index import TickIndex


# restos menores que isso nao movem o preco e encerram o loop
SWAP_EPSILON = Decimal("0.0000001")
DEFAULT_MAX_ITERATIONS = 10000
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapRule:
    exact_in: bool
    liquidity_sign: int
    tick_offset_after_cross: int
    crosses_empty_ranges: bool


SWAP_RULES: dict[tuple[SwapMode, bool], SwapRule] = {
    (SwapMode.EXACT_IN, True): SwapRule(
        exact_in=True, liquidity_sign=-1, tick_offset_after_cross=-1, crosses_empty_ranges=True
    ),
    (SwapMode.EXACT_IN, False): SwapRule(
        exact_in=True, liquidity_sign=1, tick_offset_after_cross=0, crosses_empty_ranges=True
    ),
    (SwapMode.EXACT_OUT, True): SwapRule(
        exact_in=False, liquidity_sign=-1, tick_offset_after_cross=-1, crosses_empty_ranges=False
    ),
    (SwapMode.EXACT_OUT, False): SwapRule(
        exact_in=False, liquidity_sign=1, tick_offset_after_cross=0, crosses_empty_ranges=False
    ),
}


def traverse_swap(
    *,
    state: SwapState,
    tick_index: TickIndex,
    sqrt_price_limit: Decimal,
    zero_for_one: bool,
    mode: SwapMode,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> SwapState:
    """Percorre a curva de tick em tick ate consumir o restante ou atingir o limite.

    Opera apenas sobre o SwapState recebido; nenhum estado da pool e alterado.
    """
    rule = SWAP_RULES[(mode, zero_for_one)]
    iterations = 0

    while state.amount_specified_remaining > SWAP_EPSILON and state.sqrt_price != sqrt_price_limit:
        iterations += 1
        if iterations > max_iterations:
            raise ComputationDivergenceError(
                f"swap did not converge after {max_iterations} iterations."
            )

        sqrt_price_start = state.sqrt_price
        next_tick = tick_index.next_initialized_tick(state.tick, zero_for_one)
        if not next_tick.found:
            raise NoLiquidityError("there are no more ticks initialized to fill the swap.")

        next_sqrt_price = tick_to_sqrt_price(next_tick.tick)
        if (zero_for_one and next_sqrt_price < sqrt_price_limit) or (
            not zero_for_one and next_sqrt_price > sqrt_price_limit
        ):
            sqrt_price_target = sqrt_price_limit
        else:
            sqrt_price_target = next_sqrt_price

        if state.liquidity > 0:
            step = compute_swap_step(
                state.sqrt_price,
                sqrt_price_target,
                state.liquidity,
                state.amount_specified_remaining,
                zero_for_one,
                exact_in=rule.exact_in,
            )
        elif rule.crosses_empty_ranges:
            step = SwapStep(sqrt_price_next=sqrt_price_target, amount_in=Decimal("0"), amount_out=Decimal("0"))
        else:
            raise NoLiquidityError("no liquidity available, cannot swap.")

        state.sqrt_price = step.sqrt_price_next
        with localcontext(PRICE_CONTEXT):
            if rule.exact_in:
                state.amount_specified_remaining -= step.amount_in
                state.amount_calculated += step.amount_out
            else:
                state.amount_specified_remaining -= step.amount_out
                state.amount_calculated += step.amount_in

        if step.sqrt_price_next == next_sqrt_price:
            liquidity_net = tick_index.cross_tick(next_tick.tick)
            with localcontext(PRICE_CONTEXT):
                liquidity_delta = liquidity_net * rule.liquidity_sign
            state.liquidity = add_liquidity(state.liquidity, liquidity_delta)
            if state.liquidity == 0 and not rule.crosses_empty_ranges:
                raise NoLiquidityError(f"crossing tick {next_tick.tick} leaves no liquidity.")
            state.tick = next_tick.tick + rule.tick_offset_after_cross
            logger.debug(
                "traverse_swap: crossed tick=%s liquidity_net=%s liquidity=%s",
                next_tick.tick,
                liquidity_net,
                state.liquidity,
            )
        elif step.sqrt_price_next != sqrt_price_start:
            state.tick = sqrt_price_to_tick(step.sqrt_price_next)

    return state
