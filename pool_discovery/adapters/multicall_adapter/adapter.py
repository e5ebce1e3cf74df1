from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from hexbytes import HexBytes

from pool_discovery.core.adapters.BaseAdapter import BaseAdapter
from pool_discovery.core.config import get_multicall_address
from pool_discovery.core.constants.base import NO_DATA_RESULT
from pool_discovery.core.constants.multicall_abi import UNISWAP_INTERFACE_MULTICALL_ABI
from pool_discovery.core.utils.multicall import (
    MulticallCall,
    block_identifier_from_tag,
    build_calls_for_call_data,
    build_calls_for_contracts,
    normalize_block_tag,
    normalize_call_data,
)


class ProviderCallError(RuntimeError):
    """The multicall request as a whole could not be completed."""


@dataclass(frozen=True)
class MulticallCallResult:
    success: bool
    gas_used: int
    return_data: bytes

    @property
    def has_data(self) -> bool:
        return self.return_data != NO_DATA_RESULT


@dataclass
class MulticallResponse:
    block_number: int
    return_data: Sequence[MulticallCallResult]


class MulticallAdapter(BaseAdapter):
    adapter_type = "MULTICALL"

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        chain_id: int | None = None,
        web3: Any | None = None,
        address: str | None = None,
        abi: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__("multicall_adapter", config)

        if web3 is None:
            raise ValueError("MulticallAdapter requires web3 instance")
        self.chain_id = int(chain_id) if chain_id is not None else None
        self.web3 = web3

        if address is None:
            if self.chain_id is None:
                raise ValueError("MulticallAdapter requires an address or chain_id")
            address = get_multicall_address(self.chain_id)
        checksum_address = self.web3.to_checksum_address(address)
        self.contract = self.web3.eth.contract(
            address=checksum_address, abi=abi or UNISWAP_INTERFACE_MULTICALL_ABI
        )

    async def multicall(
        self,
        calls: Iterable[MulticallCall],
        *,
        block_tag: int | str | None = None,
    ) -> MulticallResponse:
        """Run ``calls`` in one read-only request.

        Results come back in call order. A call that reverted or hit a non-contract
        address yields ``NO_DATA_RESULT``; only a failure of the request itself
        raises, as ``ProviderCallError``.
        """
        calls_list = list(calls)
        if not calls_list:
            return MulticallResponse(block_number=0, return_data=())

        encoded_calls = [self._coerce_call(call) for call in calls_list]
        tag = normalize_block_tag(block_tag)

        call_fn = self.contract.functions.multicall(encoded_calls).call
        self.logger.debug(f"Dispatching multicall calls={len(encoded_calls)} block={tag}")
        try:
            if tag is None:
                block_number, return_data = await call_fn()
            else:
                block_number, return_data = await call_fn(
                    block_identifier=block_identifier_from_tag(tag)
                )
        except Exception as exc:
            self.logger.error(f"Multicall of {len(encoded_calls)} calls failed: {exc}")
            raise ProviderCallError(f"failed multicall: {exc}") from exc

        if len(return_data) != len(encoded_calls):
            raise ProviderCallError(
                f"failed multicall: expected {len(encoded_calls)} results, got {len(return_data)}"
            )

        payload = tuple(self._to_call_result(r) for r in return_data)
        return MulticallResponse(block_number=int(block_number), return_data=payload)

    async def multicall_single_call_data_multiple_contracts(
        self,
        function_name: str,
        addresses: Sequence[str],
        *,
        block_tag: int | str | None = None,
    ) -> MulticallResponse:
        calls = build_calls_for_contracts(function_name, addresses)
        return await self.multicall(calls, block_tag=block_tag)

    async def multicall_multiple_call_data_single_contract(
        self,
        call_data: Sequence[bytes | str],
        address: str,
        *,
        gas_required: int | None = None,
        block_tag: int | str | None = None,
    ) -> MulticallResponse:
        calls = build_calls_for_call_data(call_data, address, gas_required=gas_required)
        return await self.multicall(calls, block_tag=block_tag)

    async def get_block_number(self) -> int:
        try:
            return int(await self.web3.eth.block_number)
        except Exception as exc:
            raise ProviderCallError(f"failed block number: {exc}") from exc

    def _coerce_call(self, call: MulticallCall) -> tuple[str, int, bytes]:
        target = self.web3.to_checksum_address(call.target)
        return target, int(call.gas_limit), normalize_call_data(call.call_data)

    @classmethod
    def _to_call_result(cls, raw: Sequence[Any]) -> MulticallCallResult:
        success, gas_used, data = raw[0], raw[1], raw[2]
        return_data = cls._ensure_bytes(data) if success else NO_DATA_RESULT
        return MulticallCallResult(
            success=bool(success), gas_used=int(gas_used), return_data=return_data
        )

    @staticmethod
    def _ensure_bytes(data: bytes | str | HexBytes) -> bytes:
        if isinstance(data, bytes):
            return bytes(data)
        if isinstance(data, str):
            if data.startswith("0x"):
                return bytes.fromhex(data[2:])
            raise TypeError(f"Return data string must be 0x-prefixed hex: {data!r}")
        raise TypeError("Unexpected return data type from multicall")
