from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

from eth_utils import to_checksum_address
from loguru import logger

from pool_discovery.adapters.multicall_adapter.adapter import (
    MulticallAdapter,
    MulticallCallResult,
)
from pool_discovery.core.adapters.BaseAdapter import BaseAdapter
from pool_discovery.core.adapters.decorators import status_tuple
from pool_discovery.core.config import get_multicall_address, get_v3_factory_address
from pool_discovery.core.constants.base import BLOCK_TAG_LATEST
from pool_discovery.core.constants.uniswap_v3_abi import UNISWAP_V3_POOL_ABI
from pool_discovery.core.models import (
    ERC20,
    ERC20Pair,
    Pool,
    PoolCandidate,
    erc20_to_token,
)
from pool_discovery.core.utils.abi import decode_function_result
from pool_discovery.core.utils.multicall import BlockTag, normalize_block_tag
from pool_discovery.core.utils.pools import generate_possible_pools_from_erc20_pair
from pool_discovery.core.utils.uniswap_v3_math import Slot0, narrow_tick, parse_slot0
from pool_discovery.core.utils.web3 import web3_from_chain_id

SLOT0_FUNCTION = "slot0"
LIQUIDITY_FUNCTION = "liquidity"

RawResult = MulticallCallResult | bytes


def _return_data(result: RawResult) -> bytes:
    if isinstance(result, MulticallCallResult):
        return result.return_data
    return bytes(result)


def decode_slot0(data: bytes) -> Slot0:
    return parse_slot0(decode_function_result(UNISWAP_V3_POOL_ABI, SLOT0_FUNCTION, data))


def decode_liquidity(data: bytes) -> int:
    (liquidity,) = decode_function_result(UNISWAP_V3_POOL_ABI, LIQUIDITY_FUNCTION, data)
    return int(liquidity)


def assemble_valid_pools(
    candidates: Sequence[PoolCandidate],
    slot0_results: Sequence[RawResult],
    liquidity_results: Sequence[RawResult],
) -> list[Pool]:
    """Turn positional ``slot0``/``liquidity`` results into usable pools.

    Index ``i`` of both result lists belongs to ``candidates[i]``. Candidates
    without data (not deployed) or with zero price or zero liquidity are left
    out; the rest keep their input order.
    """
    if not (len(candidates) == len(slot0_results) == len(liquidity_results)):
        raise ValueError(
            "Result lists must line up with candidates: "
            f"candidates={len(candidates)} slot0={len(slot0_results)} "
            f"liquidity={len(liquidity_results)}"
        )

    valid_pools: list[Pool] = []
    for candidate, slot0_result, liquidity_result in zip(
        candidates, slot0_results, liquidity_results, strict=True
    ):
        slot0_data = _return_data(slot0_result)
        liquidity_data = _return_data(liquidity_result)
        if not slot0_data or not liquidity_data:
            continue

        slot0 = decode_slot0(slot0_data)
        liquidity = decode_liquidity(liquidity_data)
        if slot0["sqrt_price_x96"] == 0 or liquidity == 0:
            continue

        token_a, token_b = candidate.erc20_pair
        valid_pools.append(
            Pool.from_tokens(
                erc20_to_token(token_a),
                erc20_to_token(token_b),
                candidate.fee,
                str(slot0["sqrt_price_x96"]),
                str(liquidity),
                narrow_tick(slot0["tick"]),
            )
        )
    return valid_pools


async def fetch_valid_pools(
    multicall: MulticallAdapter,
    erc20_pair: ERC20Pair,
    common_routing_erc20s: Sequence[ERC20],
    factory_address: str,
    block_tag: BlockTag,
) -> list[Pool]:
    """Find the pools between ``erc20_pair`` (directly or via routing tokens) that can be swapped through.

    Both reads are pinned to ``block_tag`` so price and liquidity come from one
    snapshot. A failed dispatch raises ``ProviderCallError`` and no pools are
    returned.
    """
    tag = normalize_block_tag(block_tag)
    if tag is None:
        raise ValueError("fetch_valid_pools requires a block tag")

    candidates = generate_possible_pools_from_erc20_pair(
        erc20_pair, common_routing_erc20s, factory_address
    )
    pool_addresses = [candidate.pool_address for candidate in candidates]

    # Results come back in the order of pool_addresses
    slot0_response, liquidity_response = await asyncio.gather(
        multicall.multicall_single_call_data_multiple_contracts(
            SLOT0_FUNCTION, pool_addresses, block_tag=tag
        ),
        multicall.multicall_single_call_data_multiple_contracts(
            LIQUIDITY_FUNCTION, pool_addresses, block_tag=tag
        ),
    )
    if slot0_response.block_number != liquidity_response.block_number:
        logger.warning(
            f"slot0 and liquidity read at different blocks: "
            f"{slot0_response.block_number} != {liquidity_response.block_number} (tag={tag})"
        )

    pools = assemble_valid_pools(
        candidates, slot0_response.return_data, liquidity_response.return_data
    )
    logger.debug(
        f"Found {len(pools)}/{len(candidates)} valid pools at block {slot0_response.block_number}"
    )
    return pools


class UniswapV3PoolAdapter(BaseAdapter):
    adapter_type = "UNISWAP_V3_POOLS"

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        web3: Any | None = None,
        multicall: MulticallAdapter | None = None,
    ) -> None:
        super().__init__("uniswap_v3_pool_adapter", config)

        chain_id = self.config.get("chain_id")
        if chain_id is None:
            raise ValueError("UniswapV3PoolAdapter requires chain_id in config")
        self.chain_id = int(chain_id)
        self.factory_address = to_checksum_address(
            self.config.get("factory_address") or get_v3_factory_address(self.chain_id)
        )
        self.multicall_address = to_checksum_address(
            self.config.get("multicall_address") or get_multicall_address(self.chain_id)
        )
        self.web3 = web3
        self._multicall = multicall

    @asynccontextmanager
    async def _multicall_adapter(self) -> AsyncIterator[MulticallAdapter]:
        if self._multicall is not None:
            yield self._multicall
            return
        if self.web3 is not None:
            yield self._build_multicall(self.web3)
            return
        async with web3_from_chain_id(self.chain_id) as w3:
            yield self._build_multicall(w3)

    def _build_multicall(self, web3: Any) -> MulticallAdapter:
        return MulticallAdapter(
            self.config,
            chain_id=self.chain_id,
            web3=web3,
            address=self.multicall_address,
        )

    def _check_chain(self, tokens: Sequence[ERC20]) -> None:
        for token in tokens:
            if token.chain_id != self.chain_id:
                raise ValueError(
                    f"Token {token.address} is on chain {token.chain_id}, "
                    f"adapter is on chain {self.chain_id}"
                )

    async def get_latest_block_tag(self) -> BlockTag:
        async with self._multicall_adapter() as multicall:
            return hex(await multicall.get_block_number())

    @status_tuple
    async def get_valid_pools(
        self,
        token_in: ERC20,
        token_out: ERC20,
        *,
        common_routing_tokens: Sequence[ERC20] = (),
        block_tag: int | str | None = None,
    ) -> list[Pool]:
        self._check_chain([token_in, token_out, *common_routing_tokens])
        async with self._multicall_adapter() as multicall:
            if block_tag is None or block_tag == BLOCK_TAG_LATEST:
                # Pin "latest" so both reads see the same block
                block_tag = hex(await multicall.get_block_number())
            return await fetch_valid_pools(
                multicall,
                (token_in, token_out),
                common_routing_tokens,
                self.factory_address,
                block_tag,
            )
