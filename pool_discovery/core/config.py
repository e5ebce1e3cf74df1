import json
import os
from pathlib import Path
from typing import Any

from pool_discovery.core.constants.base import DEFAULT_GAS_QUOTE
from pool_discovery.core.constants.contracts import (
    UNISWAP_INTERFACE_MULTICALL,
    UNISWAP_V3_FACTORY,
)

_CONFIG_ENV_KEYS = ("POOL_DISCOVERY_CONFIG_PATH", "POOL_DISCOVERY_CONFIG")
_DEFAULT_CONFIG_FILENAME = "config.json"


def _find_project_root(start: Path) -> Path | None:
    cur = start.resolve()
    for parent in [cur, *cur.parents]:
        if (parent / "pyproject.toml").exists():
            return parent
    return None


def _project_root() -> Path | None:
    return _find_project_root(Path.cwd()) or _find_project_root(Path(__file__).parent)


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()

    env_path = next(
        (os.getenv(k, "").strip() for k in _CONFIG_ENV_KEYS if os.getenv(k)), ""
    )
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_absolute():
            return p
        root = _project_root()
        return (root / p) if root else p

    root = _project_root()
    return (root / _DEFAULT_CONFIG_FILENAME) if root else Path(_DEFAULT_CONFIG_FILENAME)


def load_config_json(
    path: str | Path | None = None, *, require_exists: bool = False
) -> dict[str, Any]:
    cfg_path = resolve_config_path(path)
    if not cfg_path.exists():
        if require_exists:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return {}
    try:
        return json.loads(cfg_path.read_text())
    except Exception:
        return {}


CONFIG: dict[str, Any] = load_config_json()


def set_config(config: dict[str, Any]) -> None:
    """Replace the global CONFIG dict in-place.

    This allows code that imported CONFIG at module import time to see updates.
    """
    CONFIG.clear()
    CONFIG.update(config)


def load_config(
    path: str | Path | None = None, *, require_exists: bool = False
) -> None:
    """Load config from disk into the global CONFIG dict."""
    set_config(load_config_json(path, require_exists=require_exists))


def set_rpc_urls(rpc_urls):
    CONFIG["rpc_urls"] = rpc_urls


def get_rpc_urls() -> dict[str, Any]:
    return CONFIG.get("rpc_urls", {})


def _chain_contracts(chain_id: int) -> dict[str, Any]:
    contracts = CONFIG.get("contracts", {})
    entry = contracts.get(str(chain_id))
    if entry is None:
        entry = contracts.get(chain_id)  # allow int keys
    return entry or {}


def get_multicall_address(chain_id: int) -> str:
    override = _chain_contracts(chain_id).get("multicall")
    if override:
        return str(override).strip()
    address = UNISWAP_INTERFACE_MULTICALL.get(int(chain_id))
    if address is None:
        raise ValueError(f"No multicall address configured for chain ID {chain_id}")
    return address


def get_v3_factory_address(chain_id: int) -> str:
    override = _chain_contracts(chain_id).get("uniswap_v3_factory")
    if override:
        return str(override).strip()
    address = UNISWAP_V3_FACTORY.get(int(chain_id))
    if address is None:
        raise ValueError(
            f"No Uniswap V3 factory address configured for chain ID {chain_id}"
        )
    return address


def get_default_gas_quote() -> int:
    value = CONFIG.get("multicall", {}).get("default_gas_quote")
    if value is None:
        return DEFAULT_GAS_QUOTE
    return int(value)
