from pool_discovery.core.adapters.BaseAdapter import BaseAdapter
from pool_discovery.core.models import ERC20, Pool, PoolCandidate, Token

__all__ = [
    "BaseAdapter",
    "ERC20",
    "Pool",
    "PoolCandidate",
    "Token",
]
