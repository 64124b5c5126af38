from __future__ import annotations

from decimal import Decimal, localcontext

from clpool.domain.entities.swap import SwapStep
from clpool.domain.services.liquidity import (
    ROUND_DOWN_CONTEXT,
    ROUND_UP_CONTEXT,
    calc_amount0_delta,
    calc_amount1_delta,
)
from clpool.domain.exceptions import ComputationError


def compute_swap_step(
    sqrt_price_current: Decimal,
    sqrt_price_target: Decimal,
    liquidity: Decimal,
    amount_remaining: Decimal,
    zero_for_one: bool,
    exact_in: bool = True,
) -> SwapStep:
    """Avanca o preco dentro de um unico segmento de liquidez constante.

    amount_remaining e a entrada restante (exact_in) ou a saida restante
    (exact out). Quando o restante alcanca o alvo, sqrt_price_next == alvo;
    caso contrario o restante e consumido por completo e o preco para entre
    o atual e o alvo. Entradas arredondam para cima e saidas para baixo.
    """
    if liquidity <= 0:
        raise ValueError("compute_swap_step requires positive liquidity.")

    if exact_in:
        amount_in_max = _amount_in(liquidity, sqrt_price_target, sqrt_price_current, zero_for_one)
        if amount_remaining >= amount_in_max:
            sqrt_price_next = sqrt_price_target
            amount_in = amount_in_max
        else:
            sqrt_price_next = _next_sqrt_price_from_input(
                sqrt_price_current, liquidity, amount_remaining, zero_for_one
            )
            sqrt_price_next = _bounded(sqrt_price_next, sqrt_price_target, zero_for_one)
            amount_in = amount_remaining
        amount_out = _amount_out(liquidity, sqrt_price_next, sqrt_price_current, zero_for_one)
        return SwapStep(sqrt_price_next=sqrt_price_next, amount_in=amount_in, amount_out=amount_out)

    amount_out_max = _amount_out(liquidity, sqrt_price_target, sqrt_price_current, zero_for_one)
    if amount_remaining >= amount_out_max:
        sqrt_price_next = sqrt_price_target
        amount_out = amount_out_max
    else:
        sqrt_price_next = _next_sqrt_price_from_output(
            sqrt_price_current, liquidity, amount_remaining, zero_for_one
        )
        sqrt_price_next = _bounded(sqrt_price_next, sqrt_price_target, zero_for_one)
        amount_out = amount_remaining
    amount_in = _amount_in(liquidity, sqrt_price_next, sqrt_price_current, zero_for_one)
    return SwapStep(sqrt_price_next=sqrt_price_next, amount_in=amount_in, amount_out=amount_out)


def _amount_in(liquidity: Decimal, sqrt_price_a: Decimal, sqrt_price_b: Decimal, zero_for_one: bool) -> Decimal:
    if zero_for_one:
        return calc_amount0_delta(liquidity, sqrt_price_a, sqrt_price_b, round_up=True)
    return calc_amount1_delta(liquidity, sqrt_price_a, sqrt_price_b, round_up=True)


def _amount_out(liquidity: Decimal, sqrt_price_a: Decimal, sqrt_price_b: Decimal, zero_for_one: bool) -> Decimal:
    if zero_for_one:
        return calc_amount1_delta(liquidity, sqrt_price_a, sqrt_price_b, round_up=False)
    return calc_amount0_delta(liquidity, sqrt_price_a, sqrt_price_b, round_up=False)


def _next_sqrt_price_from_input(
    sqrt_price: Decimal,
    liquidity: Decimal,
    amount_in: Decimal,
    zero_for_one: bool,
) -> Decimal:
    if zero_for_one:
        # token0 entra, preco cai: L * sqrtP / (L + amount * sqrtP), arredondado para cima
        with localcontext(ROUND_DOWN_CONTEXT):
            denominator = liquidity + amount_in * sqrt_price
        with localcontext(ROUND_UP_CONTEXT):
            return liquidity * sqrt_price / denominator
    # token1 entra, preco sobe: sqrtP + amount / L, arredondado para baixo
    with localcontext(ROUND_DOWN_CONTEXT):
        return sqrt_price + amount_in / liquidity


def _next_sqrt_price_from_output(
    sqrt_price: Decimal,
    liquidity: Decimal,
    amount_out: Decimal,
    zero_for_one: bool,
) -> Decimal:
    if zero_for_one:
        # token1 sai, preco cai: sqrtP - amount / L, arredondado para baixo
        with localcontext(ROUND_UP_CONTEXT):
            quotient = amount_out / liquidity
        with localcontext(ROUND_DOWN_CONTEXT):
            result = sqrt_price - quotient
    else:
        # token0 sai, preco sobe: L * sqrtP / (L - amount * sqrtP), arredondado para cima
        with localcontext(ROUND_DOWN_CONTEXT):
            denominator = liquidity - amount_out * sqrt_price
        if denominator <= 0:
            raise ComputationError("output exceeds the token0 reserves of the segment.")
        with localcontext(ROUND_UP_CONTEXT):
            result = liquidity * sqrt_price / denominator
    if result <= 0:
        raise ComputationError("output exceeds the token1 reserves of the segment.")
    return result


def _bounded(sqrt_price_next: Decimal, sqrt_price_target: Decimal, zero_for_one: bool) -> Decimal:
    if zero_for_one:
        return max(sqrt_price_next, sqrt_price_target)
    return min(sqrt_price_next, sqrt_price_target)
