import time
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar

from .cache_store import CacheStore

T = TypeVar("T")


class InMemoryCacheStore(CacheStore[T], Generic[T]):
    """Process-local store. Expired entries are dropped lazily on read."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, Tuple[T, Optional[float]]] = {}

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        entry = self._entries.get(key)
        if entry is None:
            return default
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return default
        return value

    def set(self, key: str, value: T, expire: Optional[int] = None) -> None:
        expires_at = self._clock() + expire if expire is not None else None
        self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
