from __future__ import annotations

from fastapi import APIRouter, Depends

from clpool.api.deps import (
    get_calc_swap_use_case,
    get_swap_exact_amount_in_use_case,
    get_swap_exact_amount_out_use_case,
)
from clpool.api.routers.errors import domain_http_exception
from clpool.api.schemas.swap import (
    CoinResponse,
    QuoteExactInRequest,
    QuoteExactOutRequest,
    QuoteResponse,
    SwapExactInRequest,
    SwapExactOutRequest,
    SwapResponse,
)
from clpool.application.dto.swap import (
    CalcInGivenOutInput,
    CalcOutGivenInInput,
    SwapExactAmountInInput,
    SwapExactAmountOutInput,
)
from clpool.application.use_cases.calc_swap import CalcSwapUseCase
from clpool.application.use_cases.swap_exact_amount_in import SwapExactAmountInUseCase
from clpool.application.use_cases.swap_exact_amount_out import SwapExactAmountOutUseCase
from clpool.domain.entities.pool import Coin
from clpool.domain.exceptions import DomainError

router = APIRouter()


def _coin_response(coin: Coin) -> CoinResponse:
    return CoinResponse(denom=coin.denom, amount=str(coin.amount))


@router.post("/v1/pools/{pool_id}/quote/exact-in", response_model=QuoteResponse)
def quote_exact_in(
    pool_id: int,
    req: QuoteExactInRequest,
    use_case: CalcSwapUseCase = Depends(get_calc_swap_use_case),
):
    try:
        quote = use_case.calc_out_given_in(
            CalcOutGivenInInput(
                pool_id=pool_id,
                token_in=Coin(denom=req.token_in.denom, amount=req.token_in.amount),
                token_out_denom=req.token_out_denom,
                swap_fee=req.swap_fee,
                price_limit=req.price_limit,
            )
        )
    except DomainError as exc:
        raise domain_http_exception(exc) from exc

    return QuoteResponse(
        pool_id=quote.pool_id,
        token_in=_coin_response(quote.token_in),
        token_out=_coin_response(quote.token_out),
        current_tick=quote.current_tick,
        liquidity=str(quote.liquidity),
        sqrt_price=str(quote.sqrt_price),
        filled=quote.filled,
    )


@router.post("/v1/pools/{pool_id}/quote/exact-out", response_model=QuoteResponse)
def quote_exact_out(
    pool_id: int,
    req: QuoteExactOutRequest,
    use_case: CalcSwapUseCase = Depends(get_calc_swap_use_case),
):
    try:
        quote = use_case.calc_in_given_out(
            CalcInGivenOutInput(
                pool_id=pool_id,
                token_out=Coin(denom=req.token_out.denom, amount=req.token_out.amount),
                token_in_denom=req.token_in_denom,
                swap_fee=req.swap_fee,
                min_price=req.min_price,
                max_price=req.max_price,
            )
        )
    except DomainError as exc:
        raise domain_http_exception(exc) from exc

    return QuoteResponse(
        pool_id=quote.pool_id,
        token_in=_coin_response(quote.token_in),
        token_out=_coin_response(quote.token_out),
        current_tick=quote.current_tick,
        liquidity=str(quote.liquidity),
        sqrt_price=str(quote.sqrt_price),
        filled=quote.filled,
    )


@router.post("/v1/pools/{pool_id}/swap/exact-in", response_model=SwapResponse)
def swap_exact_in(
    pool_id: int,
    req: SwapExactInRequest,
    use_case: SwapExactAmountInUseCase = Depends(get_swap_exact_amount_in_use_case),
):
    try:
        result = use_case.execute(
            SwapExactAmountInInput(
                sender=req.sender,
                pool_id=pool_id,
                token_in=Coin(denom=req.token_in.denom, amount=req.token_in.amount),
                token_out_denom=req.token_out_denom,
                token_out_min_amount=req.token_out_min_amount,
                swap_fee=req.swap_fee,
                price_limit=req.price_limit,
            )
        )
    except DomainError as exc:
        raise domain_http_exception(exc) from exc

    return SwapResponse(
        pool_id=result.pool.id,
        token_in=_coin_response(result.token_in),
        token_out=_coin_response(result.token_out),
        current_tick=result.pool.current_tick,
        liquidity=str(result.pool.liquidity),
        sqrt_price=str(result.pool.sqrt_price),
    )


@router.post("/v1/pools/{pool_id}/swap/exact-out", response_model=SwapResponse)
def swap_exact_out(
    pool_id: int,
    req: SwapExactOutRequest,
    use_case: SwapExactAmountOutUseCase = Depends(get_swap_exact_amount_out_use_case),
):
    try:
        result = use_case.execute(
            SwapExactAmountOutInput(
                sender=req.sender,
                pool_id=pool_id,
                token_in_denom=req.token_in_denom,
                token_in_max_amount=req.token_in_max_amount,
                token_out=Coin(denom=req.token_out.denom, amount=req.token_out.amount),
                swap_fee=req.swap_fee,
                min_price=req.min_price,
                max_price=req.max_price,
            )
        )
    except DomainError as exc:
        raise domain_http_exception(exc) from exc

    return SwapResponse(
        pool_id=result.pool.id,
        token_in=_coin_response(result.token_in),
        token_out=_coin_response(result.token_out),
        current_tick=result.pool.current_tick,
        liquidity=str(result.pool.liquidity),
        sqrt_price=str(result.pool.sqrt_price),
    )
