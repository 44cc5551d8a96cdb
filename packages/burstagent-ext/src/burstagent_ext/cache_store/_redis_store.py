from typing import Optional

from redis import Redis

from .cache_store import CacheStore


class RedisCacheStore(CacheStore[str]):
    """String store backed by redis. Expiry is delegated to redis (``SET ... EX``)."""

    def __init__(self, redis_instance: Redis, expire: Optional[int] = None) -> None:
        self._redis = redis_instance
        self._expire = expire

    @classmethod
    def from_url(cls, url: str, expire: Optional[int] = None) -> "RedisCacheStore":
        return cls(Redis.from_url(url, socket_connect_timeout=10, socket_timeout=10), expire=expire)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._redis.get(key)
        if value is None:
            return default
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str, expire: Optional[int] = None) -> None:
        self._redis.set(key, value, ex=expire if expire is not None else self._expire)

    def delete(self, key: str) -> None:
        self._redis.delete(key)
