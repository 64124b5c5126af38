from __future__ import annotations

from fastapi import APIRouter, Depends

from clpool.api.deps import get_pool_use_case
from clpool.api.routers.errors import domain_http_exception
from clpool.api.schemas.pool import PoolResponse
from clpool.application.dto.pool import GetPoolInput
from clpool.application.use_cases.get_pool import GetPoolUseCase
from clpool.domain.exceptions import DomainError

router = APIRouter()


@router.get("/v1/pools/{pool_id}", response_model=PoolResponse)
def get_pool(
    pool_id: int,
    use_case: GetPoolUseCase = Depends(get_pool_use_case),
):
    try:
        result = use_case.execute(GetPoolInput(pool_id=pool_id))
    except DomainError as exc:
        raise domain_http_exception(exc) from exc

    return PoolResponse(
        pool_id=result.pool_id,
        address=result.address,
        token0=result.token0,
        token1=result.token1,
        sqrt_price=str(result.sqrt_price),
        price=str(result.price),
        current_tick=result.current_tick,
        liquidity=str(result.liquidity),
        initialized_ticks=result.initialized_ticks,
    )
