from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clpool.api.routers.pools import router as pools_router
from clpool.api.routers.swaps import router as swaps_router


app = FastAPI(title="Concentrated Liquidity Pool API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(pools_router)
app.include_router(swaps_router)
