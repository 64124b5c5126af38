from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import text

from clpool.application.ports.swap_settlement_port import SwapSettlementPort
from clpool.domain.entities.pool import Coin, Pool
from clpool.domain.exceptions import TransferError
from clpool.domain.services.price_tick import PRICE_CONTEXT
from clpool.infrastructure.db.mappers.pool_mapper import map_pool_to_params
from clpool.infrastructure.db.repositories.pool_repository import UPSERT_POOL_SQL


logger = logging.getLogger(__name__)

_SELECT_BALANCE_SQL = """
    SELECT amount
    FROM balances
    WHERE address = :address AND denom = :denom
"""

_UPSERT_BALANCE_SQL = """
    INSERT INTO balances (address, denom, amount)
    VALUES (:address, :denom, :amount)
    ON CONFLICT (address, denom)
    DO UPDATE SET amount = EXCLUDED.amount
"""


class SqlSwapSettlementRepository(SwapSettlementPort):
    def __init__(self, engine):
        self._engine = engine

    def settle_swap(self, *, pool: Pool, sender: str, token_in: Coin, token_out: Coin) -> None:
        with self._engine.begin() as conn:
            conn.execute(text(UPSERT_POOL_SQL), map_pool_to_params(pool))
            self._transfer(conn, from_address=sender, to_address=pool.address, coin=token_in)
            self._transfer(conn, from_address=pool.address, to_address=sender, coin=token_out)
        logger.info(
            "swap_settlement: settled pool=%s sender=%s in=%s%s out=%s%s",
            pool.id,
            sender,
            token_in.amount,
            token_in.denom,
            token_out.amount,
            token_out.denom,
        )

    def get_balance(self, *, address: str, denom: str) -> Decimal:
        with self._engine.connect() as conn:
            return self._read_balance(conn, address=address, denom=denom)

    def set_balance(self, *, address: str, coin: Coin) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                text(_UPSERT_BALANCE_SQL),
                {"address": address, "denom": coin.denom, "amount": str(coin.amount)},
            )

    def _transfer(self, conn, *, from_address: str, to_address: str, coin: Coin) -> None:
        if from_address == to_address:
            raise TransferError(f"cannot transfer {coin.denom} from {from_address} to itself.")
        balance = self._read_balance(conn, address=from_address, denom=coin.denom)
        if balance < coin.amount:
            logger.warning(
                "swap_settlement: insufficient funds address=%s denom=%s balance=%s needed=%s",
                from_address,
                coin.denom,
                balance,
                coin.amount,
            )
            raise TransferError(
                f"insufficient funds: {from_address} has {balance}{coin.denom}, needs {coin.amount}{coin.denom}."
            )
        receiver_balance = self._read_balance(conn, address=to_address, denom=coin.denom)
        new_balance = PRICE_CONTEXT.subtract(balance, coin.amount)
        new_receiver_balance = PRICE_CONTEXT.add(receiver_balance, coin.amount)
        conn.execute(
            text(_UPSERT_BALANCE_SQL),
            {"address": from_address, "denom": coin.denom, "amount": str(new_balance)},
        )
        conn.execute(
            text(_UPSERT_BALANCE_SQL),
            {"address": to_address, "denom": coin.denom, "amount": str(new_receiver_balance)},
        )

    def _read_balance(self, conn, *, address: str, denom: str) -> Decimal:
        row = conn.execute(text(_SELECT_BALANCE_SQL), {"address": address, "denom": denom}).mappings().first()
        if not row:
            return Decimal("0")
        return Decimal(str(row["amount"]))
