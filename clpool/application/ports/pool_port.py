from __future__ import annotations

from typing import Protocol

from clpool.domain.entities.pool import Pool


class PoolPort(Protocol):
    def get_pool(self, *, pool_id: int) -> Pool | None:
        ...

    def set_pool(self, *, pool: Pool) -> None:
        ...
