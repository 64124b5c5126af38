from __future__ import annotations

from fastapi import HTTPException

from clpool.application.use_cases.calc_swap import CalcSwapUseCase
from clpool.application.use_cases.get_pool import GetPoolUseCase
from clpool.application.use_cases.swap_exact_amount_in import SwapExactAmountInUseCase
from clpool.application.use_cases.swap_exact_amount_out import SwapExactAmountOutUseCase
from clpool.infrastructure.db.engine import get_engine
from clpool.infrastructure.db.repositories.pool_repository import SqlPoolRepository
from clpool.infrastructure.db.repositories.swap_settlement_repository import SqlSwapSettlementRepository
from clpool.infrastructure.events.logging_swap_event_publisher import LoggingSwapEventPublisher
from clpool.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


def _build_calc_swap(pool_repository: SqlPoolRepository) -> CalcSwapUseCase:
    return CalcSwapUseCase(
        pool_port=pool_repository,
        tick_port=pool_repository,
        max_iterations=get_settings().swap_max_iterations,
    )


def get_pool_use_case() -> GetPoolUseCase:
    pool_repository = SqlPoolRepository(_get_db_engine())
    return GetPoolUseCase(pool_port=pool_repository, tick_port=pool_repository)


def get_calc_swap_use_case() -> CalcSwapUseCase:
    return _build_calc_swap(SqlPoolRepository(_get_db_engine()))


def get_swap_exact_amount_in_use_case() -> SwapExactAmountInUseCase:
    engine = _get_db_engine()
    pool_repository = SqlPoolRepository(engine)
    return SwapExactAmountInUseCase(
        calc_swap=_build_calc_swap(pool_repository),
        pool_port=pool_repository,
        settlement_port=SqlSwapSettlementRepository(engine),
        event_port=LoggingSwapEventPublisher(),
    )


def get_swap_exact_amount_out_use_case() -> SwapExactAmountOutUseCase:
    engine = _get_db_engine()
    pool_repository = SqlPoolRepository(engine)
    return SwapExactAmountOutUseCase(
        calc_swap=_build_calc_swap(pool_repository),
        pool_port=pool_repository,
        settlement_port=SqlSwapSettlementRepository(engine),
        event_port=LoggingSwapEventPublisher(),
    )
