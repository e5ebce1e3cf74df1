import pytest

from pool_discovery.core.config import get_rpc_urls


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: mark test as integration")
    config.addinivalue_line(
        "markers", "requires_config: needs config.json with live RPC urls"
    )


def pytest_collection_modifyitems(config, items):
    if get_rpc_urls():
        return
    skip_live = pytest.mark.skip(reason="no rpc_urls configured in config.json")
    for item in items:
        if "requires_config" in item.keywords:
            item.add_marker(skip_live)
