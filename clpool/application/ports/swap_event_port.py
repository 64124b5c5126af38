from __future__ import annotations

from typing import Protocol

from clpool.domain.entities.swap import SwapEvent


class SwapEventPort(Protocol):
    def emit_swap(self, event: SwapEvent) -> None:
        ...
