__version__ = "0.1.0"

from pool_discovery.core import (
    ERC20,
    BaseAdapter,
    Pool,
    PoolCandidate,
    Token,
)

__all__ = [
    "__version__",
    "BaseAdapter",
    "ERC20",
    "Pool",
    "PoolCandidate",
    "Token",
]
