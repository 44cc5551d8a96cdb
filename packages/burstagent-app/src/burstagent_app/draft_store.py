import logging
from typing import Optional

from burstagent_ext.cache_store import CacheStore
from pydantic import ValidationError

from ._constants import DRAFT_TTL_SECONDS, LOGGER_NAME
from .datamodel import BurstTokenDraft

logger = logging.getLogger(LOGGER_NAME)


class DraftStore:
    """Keeps one token draft per (agent, user) pair in a cache store, serialized as camelCase JSON."""

    def __init__(self, cache: CacheStore[str], ttl: int = DRAFT_TTL_SECONDS) -> None:
        self._cache = cache
        self._ttl = ttl

    @property
    def ttl(self) -> int:
        return self._ttl

    @staticmethod
    def cache_key(agent_id: str, user_id: str) -> str:
        return f"{agent_id}/{user_id}/burstTokenData"

    def get(self, agent_id: str, user_id: str) -> BurstTokenDraft:
        """Never raises: a missing, expired or unreadable entry yields a fresh draft."""
        key = self.cache_key(agent_id, user_id)
        try:
            raw = self._cache.get(key)
        except Exception as e:
            logger.error(f"Error reading draft {key}: {e}")
            return BurstTokenDraft()
        if raw is None:
            return BurstTokenDraft()
        try:
            return BurstTokenDraft.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding corrupt draft {key}: {e}")
            return BurstTokenDraft()

    def set(self, agent_id: str, user_id: str, draft: BurstTokenDraft, ttl: Optional[int] = None) -> None:
        self._cache.set(self.cache_key(agent_id, user_id), draft.to_json(), expire=self._ttl if ttl is None else ttl)

    def delete(self, agent_id: str, user_id: str) -> None:
        self._cache.delete(self.cache_key(agent_id, user_id))
