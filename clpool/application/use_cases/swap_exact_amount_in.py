from __future__ import annotations

import logging

from clpool.application.dto.swap import (
    CalcOutGivenInInput,
    SwapExactAmountInInput,
    SwapExactAmountInOutput,
)
from clpool.application.ports.pool_port import PoolPort
from clpool.application.ports.swap_event_port import SwapEventPort
from clpool.application.ports.swap_settlement_port import SwapSettlementPort
from clpool.application.use_cases.calc_swap import CalcSwapUseCase
from clpool.domain.entities.swap import SwapEvent
from clpool.domain.exceptions import InvalidArgumentError, PoolNotFoundError, SlippageExceededError


logger = logging.getLogger(__name__)


class SwapExactAmountInUseCase:
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

    def execute(self, command: SwapExactAmountInInput) -> SwapExactAmountInOutput:
        logger.info(
            "swap_exact_amount_in: start pool=%s sender=%s token_in=%s amount=%s token_out=%s min_out=%s",
            command.pool_id,
            command.sender,
            command.token_in.denom,
            command.token_in.amount,
            command.token_out_denom,
            command.token_out_min_amount,
        )
        if command.token_in.denom == command.token_out_denom:
            raise InvalidArgumentError("cannot trade same denomination in and out.")
        if command.token_out_min_amount < 0:
            raise InvalidArgumentError("token_out_min_amount cannot be negative.")

        quote = self._calc_swap.calc_out_given_in(
            CalcOutGivenInInput(
                pool_id=command.pool_id,
                token_in=command.token_in,
                token_out_denom=command.token_out_denom,
                swap_fee=command.swap_fee,
                price_limit=command.price_limit,
            )
        )

        if quote.token_out.amount <= 0:
            logger.warning("swap_exact_amount_in: rejected pool=%s reason=zero_output", command.pool_id)
            raise SlippageExceededError("token amount out must be positive.")
        if quote.token_out.amount < command.token_out_min_amount:
            logger.warning(
                "swap_exact_amount_in: rejected pool=%s reason=min_out out=%s min_out=%s",
                command.pool_id,
                quote.token_out.amount,
                command.token_out_min_amount,
            )
            raise SlippageExceededError(
                f"token amount calculated ({quote.token_out.amount}) is lesser than min amount "
                f"({command.token_out_min_amount})."
            )
        if quote.token_in.amount > command.token_in.amount:
            logger.warning(
                "swap_exact_amount_in: rejected pool=%s reason=max_in in=%s supplied=%s",
                command.pool_id,
                quote.token_in.amount,
                command.token_in.amount,
            )
            raise SlippageExceededError(
                f"realized input ({quote.token_in.amount}) exceeds the supplied amount ({command.token_in.amount})."
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
            "swap_exact_amount_in: committed pool=%s token_in=%s token_out=%s tick=%s",
            updated_pool.id,
            quote.token_in.amount,
            quote.token_out.amount,
            updated_pool.current_tick,
        )
        return SwapExactAmountInOutput(token_in=quote.token_in, token_out=quote.token_out, pool=updated_pool)
