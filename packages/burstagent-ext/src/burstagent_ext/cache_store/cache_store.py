from abc import abstractmethod
from typing import Optional, TypeVar

import autogen_core

T = TypeVar("T")


class CacheStore(autogen_core.CacheStore[T]):
    """autogen-core cache store with per-entry expiry and explicit deletion."""

    @abstractmethod
    def set(self, key: str, value: T, expire: Optional[int] = None) -> None:
        """Store ``value`` under ``key``; ``expire`` is a time-to-live in seconds."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None: ...
