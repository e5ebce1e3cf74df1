"""Candidate Uniswap v3 pools for a token pair.

Pool addresses are derived offline with CREATE2, so candidates may point at
pools that were never deployed; existence is checked on-chain afterwards.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import eth_abi
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from hexbytes import HexBytes
from web3 import Web3

from pool_discovery.core.constants.base import FEE_TIERS
from pool_discovery.core.constants.contracts import POOL_INIT_CODE_HASH
from pool_discovery.core.models import ERC20, ERC20Pair, PoolCandidate


def compute_pool_address(
    factory_address: str,
    token_a: str,
    token_b: str,
    fee: int,
    init_code_hash: str = POOL_INIT_CODE_HASH,
) -> ChecksumAddress:
    """
    Generate the deterministic pool address from the token addresses and fee.

    Adapted from https://github.com/Uniswap/v3-periphery/blob/main/contracts/libraries/PoolAddress.sol
    """

    token0, token1 = sorted([token_a.lower(), token_b.lower()], key=lambda a: int(a, 16))
    if token0 == token1:
        raise ValueError(f"Cannot derive a pool for identical tokens {token0}")

    salt = Web3.keccak(
        eth_abi.encode(
            ["address", "address", "uint24"],
            [to_checksum_address(token0), to_checksum_address(token1), int(fee)],
        )
    )
    return to_checksum_address(
        Web3.keccak(
            HexBytes(0xFF) + HexBytes(factory_address) + salt + HexBytes(init_code_hash)
        )[-20:]  # last 20 bytes of the keccak hash becomes the pool address
    )


def _pair_key(token_a: ERC20, token_b: ERC20) -> frozenset[str]:
    return frozenset((token_a.address.lower(), token_b.address.lower()))


def generate_erc20_pairs(
    erc20_pair: ERC20Pair, common_routing_erc20s: Sequence[ERC20]
) -> list[ERC20Pair]:
    """All pairs a route between ``erc20_pair`` could hop through.

    The direct pair comes first, then each side against every routing token,
    then routing tokens against each other. Self pairs and duplicates (in either
    order) are dropped; the first occurrence wins.
    """
    token_a, token_b = erc20_pair
    candidates: list[ERC20Pair] = [(token_a, token_b)]
    candidates.extend((token_a, base) for base in common_routing_erc20s)
    candidates.extend((token_b, base) for base in common_routing_erc20s)
    candidates.extend(
        (base, other) for base in common_routing_erc20s for other in common_routing_erc20s
    )

    seen: set[frozenset[str]] = set()
    pairs: list[ERC20Pair] = []
    for first, second in candidates:
        key = _pair_key(first, second)
        if len(key) < 2 or key in seen:
            continue
        seen.add(key)
        pairs.append((first, second))
    return pairs


def generate_possible_pools_from_erc20_pair(
    erc20_pair: ERC20Pair,
    common_routing_erc20s: Sequence[ERC20],
    factory_address: str,
    fee_tiers: Iterable[int] = FEE_TIERS,
) -> list[PoolCandidate]:
    tiers = tuple(fee_tiers)
    candidates: list[PoolCandidate] = []
    for pair in generate_erc20_pairs(erc20_pair, common_routing_erc20s):
        for fee in tiers:
            candidates.append(
                PoolCandidate(
                    erc20_pair=pair,
                    fee=fee,
                    pool_address=compute_pool_address(
                        factory_address, pair[0].address, pair[1].address, fee
                    ),
                )
            )
    return candidates
