from __future__ import annotations

import pytest
from eth_abi import encode
from eth_abi.exceptions import DecodingError

from pool_discovery.core.constants.base import NO_DATA_RESULT
from pool_discovery.core.constants.uniswap_v3_abi import UNISWAP_V3_POOL_ABI
from pool_discovery.core.utils.abi import (
    EmptyResultError,
    decode_function_result,
    encode_function_call,
    find_function_abi,
)

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


def test_find_function_abi():
    fn_abi = find_function_abi(UNISWAP_V3_POOL_ABI, "slot0")
    assert fn_abi is not None
    assert len(fn_abi["outputs"]) == 7


def test_find_function_abi_missing():
    assert find_function_abi(UNISWAP_V3_POOL_ABI, "swap") is None


def test_find_function_abi_filters_input_count():
    assert find_function_abi(UNISWAP_V3_POOL_ABI, "slot0", inputs_len=1) is None


def test_encode_zero_arg_call_is_selector_only():
    fn_abi = find_function_abi(UNISWAP_V3_POOL_ABI, "token0")
    assert encode_function_call(fn_abi) == bytes.fromhex("0dfe1681")


def test_decode_slot0_tuple():
    data = encode(
        ["uint160", "int24", "uint16", "uint16", "uint16", "uint8", "bool"],
        [2**96, -1, 0, 1, 1, 0, False],
    )
    assert decode_function_result(UNISWAP_V3_POOL_ABI, "slot0", data) == (
        2**96,
        -1,
        0,
        1,
        1,
        0,
        False,
    )


def test_decode_address_output():
    data = encode(["address"], [WETH])
    (token0,) = decode_function_result(UNISWAP_V3_POOL_ABI, "token0", data)
    assert token0.lower() == WETH.lower()


def test_decode_empty_result_is_guarded():
    with pytest.raises(EmptyResultError):
        decode_function_result(UNISWAP_V3_POOL_ABI, "liquidity", NO_DATA_RESULT)


def test_decode_unknown_function():
    with pytest.raises(ValueError, match="Function ABI not found"):
        decode_function_result(UNISWAP_V3_POOL_ABI, "observe", b"\x00" * 32)


def test_decode_truncated_payload_raises():
    with pytest.raises(DecodingError):
        decode_function_result(UNISWAP_V3_POOL_ABI, "slot0", b"\x00" * 64)
