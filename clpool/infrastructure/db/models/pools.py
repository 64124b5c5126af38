from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from clpool.infrastructure.db.engine import Base


# valores Decimal gravados como texto para nao perder precisao


class PoolModel(Base):
    __tablename__ = "pools"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    address: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    token0: Mapped[str] = mapped_column(Text, nullable=False)
    token1: Mapped[str] = mapped_column(Text, nullable=False)
    sqrt_price: Mapped[str] = mapped_column(Text, nullable=False)
    current_tick: Mapped[int] = mapped_column(Integer, nullable=False)
    liquidity: Mapped[str] = mapped_column(Text, nullable=False)


class TickModel(Base):
    __tablename__ = "pool_ticks"

    pool_id: Mapped[int] = mapped_column(Integer, ForeignKey("pools.id"), primary_key=True)
    tick_index: Mapped[int] = mapped_column(Integer, primary_key=True)
    liquidity_net: Mapped[str] = mapped_column(Text, nullable=False)


class BalanceModel(Base):
    __tablename__ = "balances"

    address: Mapped[str] = mapped_column(Text, primary_key=True)
    denom: Mapped[str] = mapped_column(Text, primary_key=True)
    amount: Mapped[str] = mapped_column(Text, nullable=False)
