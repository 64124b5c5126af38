from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_EVEN, Context, Decimal, localcontext

from clpool.domain.exceptions import InvalidPriceError, TickOutOfBoundsError


TICK_BASE = Decimal("1.0001")
MIN_TICK = -887272
MAX_TICK = 887272
PRICE_CONTEXT = Context(prec=40, rounding=ROUND_HALF_EVEN)
_LN_TICK_BASE = TICK_BASE.ln(PRICE_CONTEXT)


def _check_tick(tick: int) -> None:
    if tick < MIN_TICK or tick > MAX_TICK:
        raise TickOutOfBoundsError(f"tick {tick} is outside [{MIN_TICK}, {MAX_TICK}].")


def tick_to_price(tick: int) -> Decimal:
    _check_tick(tick)
    with localcontext(PRICE_CONTEXT):
        return TICK_BASE ** tick


def tick_to_sqrt_price(tick: int) -> Decimal:
    return tick_to_price(tick).sqrt(PRICE_CONTEXT)


def price_to_sqrt_price(price: Decimal) -> Decimal:
    if price <= 0:
        raise InvalidPriceError(f"price must be positive, got {price}.")
    return Decimal(price).sqrt(PRICE_CONTEXT)


def sqrt_price_to_price(sqrt_price: Decimal) -> Decimal:
    with localcontext(PRICE_CONTEXT):
        return sqrt_price * sqrt_price


MIN_SQRT_RATIO = tick_to_sqrt_price(MIN_TICK)
MAX_SQRT_RATIO = tick_to_sqrt_price(MAX_TICK)


def sqrt_price_to_tick(sqrt_price: Decimal) -> int:
    """Maior tick cujo sqrt price e <= sqrt_price.

    O log da uma estimativa; o ajuste final compara contra tick_to_sqrt_price
    para que sqrt_price_to_tick(tick_to_sqrt_price(t)) == t.
    """
    if sqrt_price <= 0:
        raise InvalidPriceError(f"sqrt_price must be positive, got {sqrt_price}.")
    if sqrt_price < MIN_SQRT_RATIO or sqrt_price > MAX_SQRT_RATIO:
        raise TickOutOfBoundsError(f"sqrt_price {sqrt_price} is outside the representable range.")

    with localcontext(PRICE_CONTEXT):
        estimate = (2 * sqrt_price.ln() / _LN_TICK_BASE).to_integral_value(rounding=ROUND_FLOOR)
    tick = max(MIN_TICK, min(MAX_TICK, int(estimate)))

    while tick < MAX_TICK and tick_to_sqrt_price(tick + 1) <= sqrt_price:
        tick += 1
    while tick > MIN_TICK and tick_to_sqrt_price(tick) > sqrt_price:
        tick -= 1
    return tick


def price_to_tick(price: Decimal) -> int:
    return sqrt_price_to_tick(price_to_sqrt_price(price))
