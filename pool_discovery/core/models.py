from __future__ import annotations

from eth_utils import to_checksum_address
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pool_discovery.core.constants.base import FEE_DENOMINATOR
from pool_discovery.core.utils.uniswap_v3_math import narrow_tick


class _TokenBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    chain_id: int
    address: str
    decimals: int = Field(ge=0, le=255)
    symbol: str | None = None
    name: str | None = None

    @field_validator("address")
    @classmethod
    def _checksum_address(cls, value: str) -> str:
        return to_checksum_address(value)


class ERC20(_TokenBase):
    """Token as the rest of the SDK tracks it."""


class Token(_TokenBase):
    """Token as a pool sees it: comparable by address within one chain."""

    def sorts_before(self, other: Token) -> bool:
        if self.chain_id != other.chain_id:
            raise ValueError("Tokens are on different chains")
        if self.address == other.address:
            raise ValueError("Tokens have the same address")
        return int(self.address, 16) < int(other.address, 16)


ERC20Pair = tuple[ERC20, ERC20]


def erc20_to_token(erc20: ERC20) -> Token:
    return Token(
        chain_id=erc20.chain_id,
        address=erc20.address,
        decimals=erc20.decimals,
        symbol=erc20.symbol,
        name=erc20.name,
    )


class PoolCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    erc20_pair: ERC20Pair
    fee: int
    pool_address: str

    @field_validator("pool_address")
    @classmethod
    def _checksum_pool_address(cls, value: str) -> str:
        return to_checksum_address(value)


class Pool(BaseModel):
    """A pool that exists on-chain with a non-zero price and liquidity."""

    model_config = ConfigDict(frozen=True)

    token0: Token
    token1: Token
    fee: int = Field(ge=0, lt=FEE_DENOMINATOR)
    sqrt_price_x96: str
    liquidity: str
    tick: int

    @classmethod
    def from_tokens(
        cls,
        token_a: Token,
        token_b: Token,
        fee: int,
        sqrt_price_x96: int | str,
        liquidity: int | str,
        tick: int,
    ) -> Pool:
        token0, token1 = (
            (token_a, token_b) if token_a.sorts_before(token_b) else (token_b, token_a)
        )
        return cls(
            token0=token0,
            token1=token1,
            fee=fee,
            sqrt_price_x96=str(sqrt_price_x96),
            liquidity=str(liquidity),
            tick=tick,
        )

    @field_validator("sqrt_price_x96", "liquidity")
    @classmethod
    def _non_negative_integer_string(cls, value: str) -> str:
        if not value.isdigit():
            raise ValueError(f"expected a non-negative integer string, got {value!r}")
        return value

    @field_validator("tick")
    @classmethod
    def _tick_in_range(cls, value: int) -> int:
        return narrow_tick(value)

    @model_validator(mode="after")
    def _tokens_ordered(self) -> Pool:
        if not self.token0.sorts_before(self.token1):
            raise ValueError("token0 must sort before token1")
        return self

