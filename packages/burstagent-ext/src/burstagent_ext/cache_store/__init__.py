from ._memory_store import InMemoryCacheStore
from ._redis_store import RedisCacheStore
from .cache_store import CacheStore

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
]
