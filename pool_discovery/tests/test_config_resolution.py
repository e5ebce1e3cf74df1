from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

import pool_discovery.core.config as config
from pool_discovery.core.constants.base import DEFAULT_GAS_QUOTE
from pool_discovery.core.constants.chains import CHAIN_ID_BASE, CHAIN_ID_ETHEREUM
from pool_discovery.core.constants.contracts import (
    UNISWAP_INTERFACE_MULTICALL,
    UNISWAP_V3_FACTORY,
)


@pytest.fixture
def restore_global_config() -> None:
    original = copy.deepcopy(config.CONFIG)
    yield
    config.set_config(original)


def test_resolve_config_path_defaults_to_repo_root(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("POOL_DISCOVERY_CONFIG_PATH", raising=False)
    monkeypatch.delenv("POOL_DISCOVERY_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)

    repo_root = Path(__file__).resolve().parents[2]
    assert config.resolve_config_path() == repo_root / "config.json"


def test_resolve_config_path_env_relative_is_repo_relative(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("POOL_DISCOVERY_CONFIG_PATH", "config.example.json")
    monkeypatch.chdir(tmp_path)

    repo_root = Path(__file__).resolve().parents[2]
    assert config.resolve_config_path() == repo_root / "config.example.json"


def test_load_config_json_supports_env_override(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("POOL_DISCOVERY_CONFIG_PATH", "config.example.json")
    monkeypatch.chdir(tmp_path)

    cfg = config.load_config_json()
    assert isinstance(cfg.get("rpc_urls"), dict)
    assert isinstance(cfg.get("contracts"), dict)


def test_load_config_missing_file(tmp_path: Path) -> None:
    assert config.load_config_json(tmp_path / "nope.json") == {}
    with pytest.raises(FileNotFoundError):
        config.load_config_json(tmp_path / "nope.json", require_exists=True)


def test_load_config_replaces_global(
    restore_global_config: None, tmp_path: Path
) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"rpc_urls": {"1": ["https://rpc.invalid"]}}))

    config.load_config(path)

    assert config.get_rpc_urls() == {"1": ["https://rpc.invalid"]}


def test_contract_addresses_default_per_chain(restore_global_config: None) -> None:
    config.set_config({})
    assert config.get_multicall_address(CHAIN_ID_BASE) == UNISWAP_INTERFACE_MULTICALL[CHAIN_ID_BASE]
    assert config.get_v3_factory_address(CHAIN_ID_ETHEREUM) == UNISWAP_V3_FACTORY[CHAIN_ID_ETHEREUM]
    assert config.get_default_gas_quote() == DEFAULT_GAS_QUOTE


def test_contract_addresses_overridable(restore_global_config: None) -> None:
    config.set_config(
        {
            "contracts": {
                "1": {
                    "multicall": "0x0000000000000000000000000000000000000001",
                    "uniswap_v3_factory": "0x0000000000000000000000000000000000000002",
                }
            }
        }
    )
    assert config.get_multicall_address(1) == "0x0000000000000000000000000000000000000001"
    assert config.get_v3_factory_address(1) == "0x0000000000000000000000000000000000000002"


def test_unknown_chain_raises(restore_global_config: None) -> None:
    config.set_config({})
    with pytest.raises(ValueError, match="No multicall address"):
        config.get_multicall_address(10)
    with pytest.raises(ValueError, match="No Uniswap V3 factory"):
        config.get_v3_factory_address(10)
