from typing import List, NamedTuple

from ._constants import TOTAL_ALLOCATION_BPS
from .datamodel import BurstTokenDraft, optional_fields, required_fields, validate_field


class MissingFields(NamedTuple):
    required: List[str]
    optional: List[str]

    @property
    def empty(self) -> bool:
        return not self.required and not self.optional


def _is_missing(value: object) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def missing_required(draft: BurstTokenDraft) -> List[str]:
    return [field for field in required_fields() if _is_missing(draft.value_of(field))]


def missing_optional(draft: BurstTokenDraft) -> List[str]:
    return [field for field in optional_fields() if _is_missing(draft.value_of(field))]


def missing_fields(draft: BurstTokenDraft) -> MissingFields:
    return MissingFields(missing_required(draft), missing_optional(draft))


def allocation_total(draft: BurstTokenDraft) -> int:
    if not draft.dex_allocations:
        return 0
    return sum(allocation.allocation for allocation in draft.dex_allocations)


def invalid_fields(draft: BurstTokenDraft) -> List[str]:
    """Set user fields whose value breaks its field rule."""
    return [
        field
        for field in required_fields() + optional_fields()
        if not _is_missing(draft.value_of(field)) and validate_field(field, draft.value_of(field))
    ]


def can_request_confirmation(draft: BurstTokenDraft) -> bool:
    """Every required field is set and valid, allocations add up to 100% and the reward DEX is one of them."""
    if missing_required(draft) or invalid_fields(draft) or not draft.dex_allocations:
        return False
    if any(allocation.dex is None for allocation in draft.dex_allocations):
        return False
    if allocation_total(draft) != TOTAL_ALLOCATION_BPS:
        return False
    return draft.reward_dex in {allocation.dex for allocation in draft.dex_allocations}


def is_complete(draft: BurstTokenDraft) -> bool:
    return missing_fields(draft).empty
