from __future__ import annotations

from fastapi import HTTPException

from clpool.domain.exceptions import (
    ComputationError,
    DomainError,
    InvalidArgumentError,
    NoLiquidityError,
    PoolNotFoundError,
    PriceLimitViolationError,
    SlippageExceededError,
    TickOutOfBoundsError,
    TransferError,
)


_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (PoolNotFoundError, 404),
    (InvalidArgumentError, 400),
    (PriceLimitViolationError, 400),
    (TickOutOfBoundsError, 400),
    (SlippageExceededError, 409),
    (NoLiquidityError, 409),
    (TransferError, 409),
    (ComputationError, 422),
)


def domain_http_exception(exc: DomainError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))
