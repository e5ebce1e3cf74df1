from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from hexbytes import HexBytes
from loguru import logger

from pool_discovery.core.config import get_default_gas_quote
from pool_discovery.core.constants.base import BLOCK_TAG_LATEST, SINGLE_CALL_GAS_LIMIT
from pool_discovery.core.constants.uniswap_v3_abi import UNISWAP_V3_POOL_ABI
from pool_discovery.core.utils.abi import encode_function_call, find_function_abi

# "latest" or a 0x-prefixed hex block number
BlockTag = str


@dataclass(frozen=True)
class MulticallCall:
    target: str
    call_data: bytes
    gas_limit: int

    def as_tuple(self) -> tuple[str, int, bytes]:
        return self.target, self.gas_limit, self.call_data


def normalize_call_data(data: bytes | str) -> bytes:
    if isinstance(data, HexBytes):
        return bytes(data)
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        if data.startswith("0x"):
            return bytes.fromhex(data[2:])
        raise ValueError(f"Calldata string must be 0x-prefixed hex: {data!r}")
    raise TypeError("Unsupported calldata type")


def normalize_block_tag(block_tag: int | str | None) -> BlockTag | None:
    if block_tag is None:
        return None
    if isinstance(block_tag, bool):
        raise TypeError("block tag must be an int or str")
    if isinstance(block_tag, int):
        if block_tag < 0:
            raise ValueError(f"Negative block number: {block_tag}")
        return hex(block_tag)
    if isinstance(block_tag, str):
        tag = block_tag.strip()
        if tag == BLOCK_TAG_LATEST:
            return tag
        if tag.startswith("0x") and len(tag) > 2:
            try:
                int(tag, 16)
            except ValueError:
                pass
            else:
                return tag.lower()
    raise ValueError(f"Invalid block tag: {block_tag!r}")


def block_identifier_from_tag(block_tag: BlockTag) -> int | str:
    # web3 only accepts predefined tags, ints or block hashes here
    if block_tag == BLOCK_TAG_LATEST:
        return block_tag
    return int(block_tag, 16)


def get_call_data(
    function_name: str,
    abi: Sequence[dict[str, Any]],
    args: Sequence[Any] = (),
) -> bytes | None:
    """Encode a call to ``function_name``, or ``None`` if the ABI has no such function."""
    fn_abi = find_function_abi(abi, function_name)
    if fn_abi is None:
        return None
    return encode_function_call(fn_abi, args)


def build_calls_for_contracts(
    function_name: str,
    addresses: Sequence[str],
    *,
    abi: Sequence[dict[str, Any]] = UNISWAP_V3_POOL_ABI,
    gas_limit: int = SINGLE_CALL_GAS_LIMIT,
) -> list[MulticallCall]:
    """Same zero-argument call against every address.

    Empty addresses are skipped, so the output only lines up index-for-index
    with ``addresses`` when none of them are empty.
    """
    call_data = get_call_data(function_name, abi)
    if call_data is None:
        logger.warning(f"Function {function_name} not found in ABI; no calls built")
        return []

    calls: list[MulticallCall] = []
    for address in addresses:
        if not address:
            continue
        calls.append(
            MulticallCall(target=address, call_data=call_data, gas_limit=gas_limit)
        )
    return calls


def build_calls_for_call_data(
    call_data: Sequence[bytes | str],
    address: str,
    *,
    gas_required: int | None = None,
) -> list[MulticallCall]:
    gas_limit = int(gas_required) if gas_required is not None else get_default_gas_quote()
    return [
        MulticallCall(
            target=address, call_data=normalize_call_data(data), gas_limit=gas_limit
        )
        for data in call_data
    ]
