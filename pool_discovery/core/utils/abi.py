from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from eth_abi import decode, encode
from eth_utils import function_abi_to_4byte_selector
from eth_utils.abi import collapse_if_tuple

from pool_discovery.core.constants.base import NO_DATA_RESULT


class EmptyResultError(ValueError):
    """Raised when asked to decode the empty no-data result."""


def find_function_abi(
    abi: Sequence[dict[str, Any]], fn_name: str, *, inputs_len: int | None = None
) -> dict[str, Any] | None:
    for item in abi or []:
        if item.get("type") != "function":
            continue
        if item.get("name") != fn_name:
            continue
        if inputs_len is not None and len(item.get("inputs") or []) != inputs_len:
            continue
        return item
    return None


def _abi_types(params: Sequence[Any] | None) -> list[str]:
    return [collapse_if_tuple(p) for p in (params or []) if isinstance(p, dict)]


def encode_function_call(fn_abi: dict[str, Any], args: Sequence[Any] = ()) -> bytes:
    selector = function_abi_to_4byte_selector(fn_abi)
    input_types = _abi_types(fn_abi.get("inputs"))
    if len(input_types) != len(args):
        raise ValueError(
            f"{fn_abi.get('name')} expects {len(input_types)} args, got {len(args)}"
        )
    if not input_types:
        return bytes(selector)
    return bytes(selector) + encode(input_types, list(args))


def decode_function_result(
    abi: Sequence[dict[str, Any]], fn_name: str, data: bytes
) -> tuple[Any, ...]:
    """Decode the return payload of ``fn_name`` into a tuple of outputs.

    The empty result carries nothing to decode and is rejected with
    ``EmptyResultError``; callers check for it first. Malformed non-empty data
    raises the ``eth_abi`` decoding error unchanged.
    """
    if bytes(data) == NO_DATA_RESULT:
        raise EmptyResultError(f"No data to decode for {fn_name}")

    fn_abi = find_function_abi(abi, fn_name)
    if fn_abi is None:
        raise ValueError(f"Function ABI not found: {fn_name}")

    output_types = _abi_types(fn_abi.get("outputs"))
    if not output_types:
        return ()
    return tuple(decode(output_types, bytes(data)))
