from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_FLOOR, Context, Decimal, localcontext

from clpool.domain.exceptions import NoLiquidityError
from clpool.domain.services.price_tick import PRICE_CONTEXT


ROUND_UP_CONTEXT = Context(prec=PRICE_CONTEXT.prec, rounding=ROUND_CEILING)
ROUND_DOWN_CONTEXT = Context(prec=PRICE_CONTEXT.prec, rounding=ROUND_FLOOR)
# liquidez em ponto fixo com 18 casas: somas e cruzamentos de tick ficam exatos
LIQUIDITY_QUANTUM = Decimal("1e-18")


def rounding_context(round_up: bool) -> Context:
    return ROUND_UP_CONTEXT if round_up else ROUND_DOWN_CONTEXT


def liquidity0(amount: Decimal, sqrt_price_a: Decimal, sqrt_price_b: Decimal) -> Decimal:
    """L = amount0 * sqrt_a * sqrt_b / (sqrt_b - sqrt_a)"""
    if sqrt_price_a > sqrt_price_b:
        sqrt_price_a, sqrt_price_b = sqrt_price_b, sqrt_price_a
    with localcontext(ROUND_DOWN_CONTEXT) as ctx:
        diff = sqrt_price_b - sqrt_price_a
        if diff <= 0:
            return Decimal("0")
        liquidity = Decimal(amount) * sqrt_price_a * sqrt_price_b / diff
        return liquidity.quantize(LIQUIDITY_QUANTUM, context=ctx)


def liquidity1(amount: Decimal, sqrt_price_a: Decimal, sqrt_price_b: Decimal) -> Decimal:
    """L = amount1 / (sqrt_b - sqrt_a)"""
    if sqrt_price_a > sqrt_price_b:
        sqrt_price_a, sqrt_price_b = sqrt_price_b, sqrt_price_a
    with localcontext(ROUND_DOWN_CONTEXT) as ctx:
        diff = sqrt_price_b - sqrt_price_a
        if diff <= 0:
            return Decimal("0")
        liquidity = Decimal(amount) / diff
        return liquidity.quantize(LIQUIDITY_QUANTUM, context=ctx)


def get_liquidity_from_amounts(
    *,
    sqrt_price: Decimal,
    sqrt_price_a: Decimal,
    sqrt_price_b: Decimal,
    amount0: Decimal,
    amount1: Decimal,
) -> Decimal:
    if sqrt_price_a > sqrt_price_b:
        sqrt_price_a, sqrt_price_b = sqrt_price_b, sqrt_price_a

    if sqrt_price <= sqrt_price_a:
        return liquidity0(amount0, sqrt_price_a, sqrt_price_b)
    if sqrt_price < sqrt_price_b:
        return min(
            liquidity0(amount0, sqrt_price, sqrt_price_b),
            liquidity1(amount1, sqrt_price_a, sqrt_price),
        )
    return liquidity1(amount1, sqrt_price_a, sqrt_price_b)


def calc_amount0_delta(
    liquidity: Decimal,
    sqrt_price_a: Decimal,
    sqrt_price_b: Decimal,
    round_up: bool,
) -> Decimal:
    """amount0 = L * (sqrt_b - sqrt_a) / (sqrt_a * sqrt_b)"""
    if sqrt_price_a > sqrt_price_b:
        sqrt_price_a, sqrt_price_b = sqrt_price_b, sqrt_price_a
    with localcontext(rounding_context(round_up)):
        return liquidity * (sqrt_price_b - sqrt_price_a) / sqrt_price_b / sqrt_price_a


def calc_amount1_delta(
    liquidity: Decimal,
    sqrt_price_a: Decimal,
    sqrt_price_b: Decimal,
    round_up: bool,
) -> Decimal:
    """amount1 = L * (sqrt_b - sqrt_a)"""
    if sqrt_price_a > sqrt_price_b:
        sqrt_price_a, sqrt_price_b = sqrt_price_b, sqrt_price_a
    with localcontext(rounding_context(round_up)):
        return liquidity * (sqrt_price_b - sqrt_price_a)


def add_liquidity(liquidity: Decimal, liquidity_delta: Decimal) -> Decimal:
    with localcontext(PRICE_CONTEXT):
        result = liquidity + liquidity_delta
    if result < 0:
        raise NoLiquidityError(
            f"liquidity would become negative ({liquidity} + {liquidity_delta})."
        )
    return result
