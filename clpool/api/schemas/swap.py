from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class CoinSchema(BaseModel):
    denom: str = Field(..., description="Token denomination.")
    amount: Decimal = Field(..., description="Integer amount in base units.")


class CoinResponse(BaseModel):
    denom: str
    amount: str


class QuoteExactInRequest(BaseModel):
    token_in: CoinSchema
    token_out_denom: str = Field(..., description="Denomination received.")
    swap_fee: Decimal = Field(Decimal("0"), description="Fee fraction in [0, 1).")
    price_limit: Decimal | None = Field(None, description="Price (token1 per token0) the swap must not cross.")


class QuoteExactOutRequest(BaseModel):
    token_out: CoinSchema
    token_in_denom: str = Field(..., description="Denomination paid.")
    swap_fee: Decimal = Field(Decimal("0"), description="Fee fraction in [0, 1).")
    min_price: Decimal | None = Field(None, description="Lower price bound (token1 per token0).")
    max_price: Decimal | None = Field(None, description="Upper price bound (token1 per token0).")


class SwapExactInRequest(QuoteExactInRequest):
    sender: str = Field(..., description="Trader account.")
    token_out_min_amount: Decimal = Field(Decimal("0"), description="Minimum acceptable output.")


class SwapExactOutRequest(QuoteExactOutRequest):
    sender: str = Field(..., description="Trader account.")
    token_in_max_amount: Decimal = Field(..., description="Maximum acceptable input.")


class QuoteResponse(BaseModel):
    pool_id: int
    token_in: CoinResponse
    token_out: CoinResponse
    current_tick: int
    liquidity: str
    sqrt_price: str
    filled: bool


class SwapResponse(BaseModel):
    pool_id: int
    token_in: CoinResponse
    token_out: CoinResponse
    current_tick: int
    liquidity: str
    sqrt_price: str
