from __future__ import annotations

from typing import Protocol

from clpool.domain.entities.pool import Tick


class TickPort(Protocol):
    def list_initialized_ticks(self, *, pool_id: int) -> list[Tick]:
        ...
