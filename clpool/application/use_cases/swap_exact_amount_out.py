from __future__ import annotations

import logging

from clpool.application.dto.swap import (
    CalcInGivenOutInput,
    SwapExactAmountOutInput,
    SwapExactAmountOutOutput,
)
from clpool.application.ports.pool_port import PoolPort
from clpool.application.ports.swap_event_port import SwapEventPort
from clpool.application.ports.swap_settlement_port import SwapSettlementPort
from clpool.application.use_cases.calc_swap import CalcSwapUseCase
from clpool.domain.entities.swap import SwapEvent
from clpool.domain.exceptions import (
    InvalidArgumentError,
    NoLiquidityError,
    PoolNotFoundError,
    SlippageExceededError,
)


logger = logging.getLogger(__name__)


class SwapExactAmountOutUseCase:
    def __init__(
        self,
        *,
        calc_swap: CalcSwapUseCase,
        pool_port: PoolPort,
        settlement_port: SwapSettlementPort,
        event_port: SwapEventPort,
    ):
        self._calc_swap = calc_swap
        self._pool_port = pool_port
        self._settlement_port = settlement_port
        self._event_port = event_port

    def execute(self, command: SwapExactAmountOutInput) -> SwapExactAmountOutOutput:
        logger.info(
            "swap_exact_amount_out: start pool=%s sender=%s token_out=%s amount=%s token_in=%s max_in=%s",
            command.pool_id,
            command.sender,
            command.token_out.denom,
            command.token_out.amount,
            command.token_in_denom,
            command.token_in_max_amount,
        )
        if command.token_in_denom == command.token_out.denom:
            raise InvalidArgumentError("cannot trade same denomination in and out.")
        if command.token_in_max_amount <= 0:
            raise InvalidArgumentError("token_in_max_amount must be positive.")

        quote = self._calc_swap.calc_in_given_out(
            CalcInGivenOutInput(
                pool_id=command.pool_id,
                token_out=command.token_out,
                token_in_denom=command.token_in_denom,
                swap_fee=command.swap_fee,
                min_price=command.min_price,
                max_price=command.max_price,
            )
        )

        if not quote.filled:
            logger.warning(
                "swap_exact_amount_out: rejected pool=%s reason=unfilled out=%s requested=%s",
                command.pool_id,
                quote.token_out.amount,
                command.token_out.amount,
            )
            raise NoLiquidityError(
                f"only {quote.token_out.amount} of {command.token_out.amount} {command.token_out.denom} "
                "can be filled inside the price band."
            )
        if quote.token_in.amount > command.token_in_max_amount:
            logger.warning(
                "swap_exact_amount_out: rejected pool=%s reason=max_in in=%s max_in=%s",
                command.pool_id,
                quote.token_in.amount,
                command.token_in_max_amount,
            )
            raise SlippageExceededError(
                f"token amount calculated ({quote.token_in.amount}) is greater than max amount "
                f"({command.token_in_max_amount})."
            )

        pool = self._pool_port.get_pool(pool_id=command.pool_id)
        if pool is None:
            raise PoolNotFoundError("Pool not found.")
        updated_pool = pool.apply_swap(
            tick=quote.current_tick,
            liquidity=quote.liquidity,
            sqrt_price=quote.sqrt_price,
        )
        self._settlement_port.settle_swap(
            pool=updated_pool,
            sender=command.sender,
            token_in=quote.token_in,
            token_out=quote.token_out,
        )
        self._event_port.emit_swap(
            SwapEvent(
                sender=command.sender,
                pool_id=updated_pool.id,
                token_in=quote.token_in,
                token_out=quote.token_out,
            )
        )

        logger.info(
            "swap_exact_amount_out: committed pool=%s token_in=%s token_out=%s tick=%s",
            updated_pool.id,
            quote.token_in.amount,
            quote.token_out.amount,
            updated_pool.current_tick,
        )
        return SwapExactAmountOutOutput(token_in=quote.token_in, token_out=quote.token_out, pool=updated_pool)
