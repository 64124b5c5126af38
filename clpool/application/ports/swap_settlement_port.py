from __future__ import annotations

from typing import Protocol

from clpool.domain.entities.pool import Coin, Pool


class SwapSettlementPort(Protocol):
    def settle_swap(self, *, pool: Pool, sender: str, token_in: Coin, token_out: Coin) -> None:
        """Persiste a pool e move token_in (sender -> pool) e token_out (pool -> sender).

        Tudo ou nada: em TransferError nenhuma alteracao fica aplicada.
        """
        ...
