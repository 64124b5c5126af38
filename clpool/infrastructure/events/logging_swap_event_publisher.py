from __future__ import annotations

import logging

from clpool.application.ports.swap_event_port import SwapEventPort
from clpool.domain.entities.swap import SwapEvent


logger = logging.getLogger(__name__)


class LoggingSwapEventPublisher(SwapEventPort):
    def emit_swap(self, event: SwapEvent) -> None:
        logger.info(
            "swap_event: sender=%s pool=%s token_in=%s%s token_out=%s%s",
            event.sender,
            event.pool_id,
            event.token_in.amount,
            event.token_in.denom,
            event.token_out.amount,
            event.token_out.denom,
        )
