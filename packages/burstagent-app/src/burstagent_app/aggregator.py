"""Per-user conversation state machine for collecting and launching a burst token.

A user's draft moves EMPTY -> COLLECTING -> AWAITING_CONFIRMATION and ends
CONFIRMED (token launched, draft deleted) or CANCELLED (draft deleted). Every
turn reads the stored draft, applies the message and writes the draft back only
when something changed.
"""

import asyncio
import logging
import re
import time
import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from ._constants import LOGGER_NAME
from .burst_factory import BurstTokenLauncher
from .completeness import can_request_confirmation, missing_optional, missing_required
from .datamodel import BurstTokenDraft, DraftState, LaunchResult, optional_fields, required_fields, validate_field
from .draft_store import DraftStore
from .errors import BurstTokenError, ExternalServiceError, SubmissionFailed, TokenValidationError
from .metrics import draft_cancel_count, draft_store_failure_count, draft_update_count

logger = logging.getLogger(LOGGER_NAME)

_CREATION_VERBS = re.compile(r"\b(create|launch|make|deploy|mint|start|build|burst|issue)\b", re.IGNORECASE)
_TOKEN_WORD = re.compile(r"\btokens?\b", re.IGNORECASE)
_CANCEL = re.compile(r"\b(cancel|abort|start over|never\s?mind)\b", re.IGNORECASE)


class FieldExtractor(Protocol):
    async def extract(self, text: str) -> Dict[str, Any]: ...


class ConfirmationClassifier(Protocol):
    async def classify(self, text: str) -> Optional[bool]: ...


@dataclass
class TurnResult:
    state: DraftState
    draft: BurstTokenDraft
    missing_required: List[str] = field(default_factory=list)
    missing_optional: List[str] = field(default_factory=list)
    launch: Optional[LaunchResult] = None
    error: Optional[BurstTokenError] = None


def detect_creation_intent(text: str) -> bool:
    return bool(_CREATION_VERBS.search(text) and _TOKEN_WORD.search(text))


def is_cancel_request(text: str) -> bool:
    return bool(_CANCEL.search(text))


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == []


def check_updates(extracted: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """Splits the non-empty user fields of ``extracted`` into accepted values and rejection reasons.

    Control fields and unknown keys are neither accepted nor rejected.
    """
    user_fields = set(required_fields()) | set(optional_fields())
    accepted: Dict[str, Any] = {}
    rejected: Dict[str, str] = {}
    for name, value in extracted.items():
        if name not in user_fields or _is_empty(value):
            continue
        try:
            reason = validate_field(name, value)
        except (TypeError, AttributeError):
            reason = f"has an unusable value {value!r}"
        if reason:
            rejected[name] = reason
        else:
            accepted[name] = value
    return accepted, rejected


def merge_draft(draft: BurstTokenDraft, extracted: Dict[str, Any]) -> BurstTokenDraft:
    """New draft with every valid, non-empty user field of ``extracted`` written over ``draft``.

    Values that break a field rule are dropped, lists are replaced as a whole.
    """
    updates, _ = check_updates(extracted)
    if not updates:
        return draft
    return BurstTokenDraft.model_validate({**draft.model_dump(), **updates})


def draft_state(draft: BurstTokenDraft) -> DraftState:
    if not draft.received_token_request:
        return DraftState.EMPTY
    if draft.has_requested_confirmation:
        return DraftState.AWAITING_CONFIRMATION
    return DraftState.COLLECTING


class BurstTokenAggregator:
    def __init__(
        self,
        agent_id: str,
        store: DraftStore,
        extractor: FieldExtractor,
        classifier: ConfirmationClassifier,
        launcher: BurstTokenLauncher,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._agent_id = agent_id
        self._store = store
        self._extractor = extractor
        self._classifier = classifier
        self._launcher = launcher
        self._clock = clock
        # an entry lives as long as a turn of that user holds or waits for it
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    @property
    def store(self) -> DraftStore:
        return self._store

    @property
    def agent_id(self) -> str:
        return self._agent_id

    def get_draft(self, user_id: str) -> BurstTokenDraft:
        return self._store.get(self._agent_id, user_id)

    def cancel(self, user_id: str) -> TurnResult:
        self._delete(user_id)
        draft_cancel_count.inc()
        logger.info(f"user {user_id} cancelled token creation")
        return TurnResult(DraftState.CANCELLED, BurstTokenDraft())

    async def handle_turn(self, user_id: str, text: str) -> TurnResult:
        # turns of one user are applied one at a time
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        async with lock:
            return await self._handle_turn(user_id, text)

    async def _handle_turn(self, user_id: str, text: str) -> TurnResult:
        draft = self.get_draft(user_id)
        state = draft_state(draft)
        logger.info(f"user {user_id} in state {state.value}: {text}")

        if is_cancel_request(text):
            return self.cancel(user_id)

        if state == DraftState.AWAITING_CONFIRMATION:
            try:
                decision = await self._classifier.classify(text)
            except Exception as e:
                logger.error(f"Error classifying confirmation of {user_id}: {e}")
                decision = None
            if decision is True:
                return await self._launch(user_id, draft)
            if decision is False:
                return self.cancel(user_id)

        updated = draft
        if state == DraftState.EMPTY:
            if not detect_creation_intent(text):
                return self._result(state, draft)
            updated = draft.model_copy(update={"received_token_request": True})

        try:
            extracted = await self._extractor.extract(text)
        except Exception as e:
            logger.error(f"Error extracting token fields for {user_id}: {e}")
            error = e if isinstance(e, BurstTokenError) else ExternalServiceError("model", e)
            return self._result(state, draft, error=error)
        logger.info(f"extracted for {user_id}: {extracted}")

        accepted, rejected = check_updates(extracted)
        for name, reason in rejected.items():
            logger.warning(f"reject {name}={extracted[name]!r} for {user_id}: {reason}")
        updated = merge_draft(updated, accepted)
        if not updated.has_requested_confirmation and can_request_confirmation(updated):
            updated = updated.model_copy(update={"has_requested_confirmation": True})

        if updated != draft:
            updated = updated.model_copy(update={"last_updated": self._now_ms()})
            self._persist(user_id, updated)
        error = TokenValidationError(*next(iter(rejected.items()))) if rejected else None
        return self._result(draft_state(updated), updated, error=error)

    async def _launch(self, user_id: str, draft: BurstTokenDraft) -> TurnResult:
        confirmed = draft.model_copy(update={"is_confirmed": True, "last_updated": self._now_ms()})
        self._persist(user_id, confirmed)
        logger.info(f"user {user_id} confirmed, launching {confirmed.symbol}")

        error: Optional[BurstTokenError] = None
        try:
            launch = await self._launcher.launch(confirmed)
        except BurstTokenError as e:
            error = e
        except Exception as e:
            logger.exception(f"Unexpected error launching token for {user_id}")
            error = SubmissionFailed(f"unexpected error: {e}", cause=e)

        if error is not None:
            logger.error(f"Error creating burst token for {user_id}: {error}")
            retry = confirmed.model_copy(update={"is_confirmed": None, "last_updated": self._now_ms()})
            self._persist(user_id, retry)
            return self._result(DraftState.AWAITING_CONFIRMATION, retry, error=error)

        logger.info(f"Created token {launch.token_address} for {user_id} in {launch.tx_hash}")
        self._delete(user_id)
        return TurnResult(DraftState.CONFIRMED, confirmed, launch=launch)

    def _result(self, state: DraftState, draft: BurstTokenDraft, error: Optional[BurstTokenError] = None) -> TurnResult:
        return TurnResult(
            state=state,
            draft=draft,
            missing_required=missing_required(draft),
            missing_optional=missing_optional(draft),
            error=error,
        )

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _persist(self, user_id: str, draft: BurstTokenDraft) -> None:
        try:
            self._store.set(self._agent_id, user_id, draft)
            draft_update_count.inc()
        except Exception as e:
            draft_store_failure_count.inc()
            logger.error(f"Error saving draft of {user_id}: {e}")

    def _delete(self, user_id: str) -> None:
        try:
            self._store.delete(self._agent_id, user_id)
        except Exception as e:
            draft_store_failure_count.inc()
            logger.error(f"Error deleting draft of {user_id}: {e}")
