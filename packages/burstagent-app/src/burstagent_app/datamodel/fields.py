"""Catalog of the fields a user fills in to launch a burst token.

Each field carries the guidance shown to the user, a coercer that turns a raw
extracted value into the typed draft value, and an optional domain check that
reports why a typed value cannot be launched.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Union

from .._constants import (
    LOGGER_NAME,
    MAX_TRADING_FEE_BPS,
    MAX_WALLET_PERCENT_BPS,
    TOTAL_ALLOCATION_BPS,
)
from ..errors import UnknownFieldError
from .types import BurstDEX, DexAllocation

logger = logging.getLogger(LOGGER_NAME)

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")

_MULTIPLIERS: Dict[str, int] = {
    "": 1,
    "k": 10**3,
    "thousand": 10**3,
    "m": 10**6,
    "mm": 10**6,
    "million": 10**6,
    "b": 10**9,
    "bn": 10**9,
    "billion": 10**9,
}
_AMOUNT_PATTERN = re.compile(r"^([0-9][0-9,_]*(?:\.[0-9]+)?)\s*([a-z]*)$")


@dataclass(frozen=True)
class FieldGuidance:
    description: str
    valid_example: str
    invalid_example: str
    instructions: str


@dataclass(frozen=True)
class FieldSpec:
    name: str
    required: bool
    guidance: FieldGuidance
    coerce: Callable[[Any], Any]
    check: Optional[Callable[[Any], Optional[str]]] = None


def _decimal(raw: Any) -> Decimal:
    if isinstance(raw, bool):
        raise ValueError(f"not a number: {raw!r}")
    try:
        return Decimal(str(raw).strip().replace(",", "").replace("_", ""))
    except InvalidOperation as e:
        raise ValueError(f"not a number: {raw!r}") from e


def _to_text(raw: Any) -> str:
    if not isinstance(raw, (str, int, float)) or isinstance(raw, bool):
        raise ValueError(f"expected text, got {type(raw).__name__}")
    return str(raw).strip()


def _to_supply(raw: Any) -> int:
    """Accepts 1000000, "1,000,000", "314k", "1m", "100 billion"."""
    if isinstance(raw, str):
        match = _AMOUNT_PATTERN.match(raw.strip().lower())
        if not match or match.group(2) not in _MULTIPLIERS:
            raise ValueError(f"not a supply: {raw!r}")
        mantissa = _decimal(match.group(1))
        if mantissa != mantissa.to_integral_value():
            raise ValueError(f"supply must be a whole number: {raw!r}")
        return int(mantissa) * _MULTIPLIERS[match.group(2)]
    value = _decimal(raw)
    if value != value.to_integral_value():
        raise ValueError(f"supply must be a whole number: {raw!r}")
    return int(value)


def _to_amount(raw: Any) -> Union[int, float]:
    if isinstance(raw, str):
        raw = re.sub(r"avax$", "", raw.strip(), flags=re.IGNORECASE)
    value = _decimal(raw)
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _to_basis_points(raw: Any) -> int:
    """Numbers are basis points already, "2.5%" is converted (250)."""
    if isinstance(raw, str) and raw.strip().endswith("%"):
        value = _decimal(raw.strip()[:-1]) * 100
    else:
        value = _decimal(raw)
    if value != value.to_integral_value():
        raise ValueError(f"basis points must be a whole number: {raw!r}")
    return int(value)


def _to_dex(raw: Any) -> BurstDEX:
    return BurstDEX(raw)


def _to_allocations(raw: Any) -> List[DexAllocation]:
    if isinstance(raw, dict):
        raw = [{"dex": dex, "allocation": allocation} for dex, allocation in raw.items()]
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of allocations, got {type(raw).__name__}")
    allocations: List[DexAllocation] = []
    for entry in raw:
        if not isinstance(entry, dict):
            logger.warning(f"skip allocation {entry!r}")
            continue
        try:
            allocations.append(
                DexAllocation(dex=_to_dex(entry.get("dex")), allocation=_to_basis_points(entry.get("allocation")))
            )
        except ValueError as e:
            logger.warning(f"Invalid DEX allocation provided: {entry!r} ({e})")
    if not allocations:
        raise ValueError("no usable allocation")
    return allocations


def _length_between(low: int, high: int) -> Callable[[Any], Optional[str]]:
    def check(value: Any) -> Optional[str]:
        if not low <= len(value) <= high:
            return f"must be between {low} and {high} characters"
        return None

    return check


def _range_between(low: int, high: int) -> Callable[[Any], Optional[str]]:
    def check(value: Any) -> Optional[str]:
        if not low <= value <= high:
            return f"must be between {low} and {high}"
        return None

    return check


def _check_supply(value: int) -> Optional[str]:
    if value <= 0:
        return "must be a positive whole number"
    return None


def _check_allocations(value: List[DexAllocation]) -> Optional[str]:
    if not value:
        return "at least one DEX allocation is required"
    for allocation in value:
        if not 0 <= allocation.allocation <= TOTAL_ALLOCATION_BPS:
            return f"{allocation.dex.value} allocation must be between 0 and {TOTAL_ALLOCATION_BPS}"
    total = sum(allocation.allocation for allocation in value)
    if total != TOTAL_ALLOCATION_BPS:
        return f"allocations must sum to {TOTAL_ALLOCATION_BPS} (100%), got {total}"
    return None


def _check_address(value: str) -> Optional[str]:
    if not ADDRESS_PATTERN.match(value):
        return "must be 0x followed by 40 hex characters"
    return None


def _social(field: str, valid: str, invalid: str) -> FieldSpec:
    return FieldSpec(
        name=field,
        required=False,
        guidance=FieldGuidance(
            description=f"The {field} of the token",
            valid_example=valid,
            invalid_example=invalid,
            instructions=f"Extract the {field} of the token only when the user directly states it",
        ),
        coerce=_to_text,
    )


_CATALOG: List[FieldSpec] = [
    FieldSpec(
        "name",
        True,
        FieldGuidance(
            "The name of the token",
            "Apex DeFi, Bitcoin, Avax, sAVAX. Alphanumeric, no special characters",
            "names longer than 50 characters, or names with special characters",
            "Extract the name of the token only when the user directly states the token name",
        ),
        _to_text,
        _length_between(1, 50),
    ),
    FieldSpec(
        "symbol",
        True,
        FieldGuidance(
            "The symbol of the token",
            "APEX, BTC, AVAX, sAVAX. Alphanumeric, no special characters",
            "symbols longer than 10 characters, or symbols with special characters",
            "Extract the symbol of the token only when the user directly states the token symbol",
        ),
        lambda raw: _to_text(raw).lstrip("$"),
        _length_between(1, 10),
    ),
    FieldSpec(
        "total_supply",
        True,
        FieldGuidance(
            "The total supply of the token",
            "100, 1000000, 314k, 1m, 100 billion. Must be a positive integer",
            "-1, 100.5, 100.5k",
            "Extract the total supply only when the user directly states it",
        ),
        _to_supply,
        _check_supply,
    ),
    FieldSpec(
        "description",
        True,
        FieldGuidance(
            "The description of the token",
            "A short sentence about what the token is for",
            "A link or url to a website, twitter, telegram, discord, or other social media",
            "Extract the description only when the user directly states it",
        ),
        _to_text,
    ),
    FieldSpec(
        "burst_amount",
        True,
        FieldGuidance(
            "The amount of AVAX required for the token to burst",
            "50-2000 in increments of 5, e.g. 50, 55, 300, 2000",
            "4, 45, 2001, 3000, -1, 0, 45.5",
            "Extract the burst amount only when the user directly states it",
        ),
        _to_amount,
        _range_between(50, 2000),
    ),
    FieldSpec(
        "dex_allocations",
        True,
        FieldGuidance(
            "The DEX allocations for the token's liquidity",
            "APEX 50%, JOE 20%, PHARAOH 20%, PANGOLIN 10%. Only APEX, JOE, PHARAOH, PANGOLIN; total must be 100%",
            "APEX -1%, JOE 101%, UNISWAP, SUSHI",
            "Extract the DEX allocations only when the user directly states them, in basis points",
        ),
        _to_allocations,
        _check_allocations,
    ),
    FieldSpec(
        "reward_dex",
        True,
        FieldGuidance(
            "The DEX whose LP tokens are used as single sided staking rewards",
            "APEX, JOE, PHARAOH or PANGOLIN. Exactly one, and it must have an allocation",
            "UNISWAP, SUSHI, DEX",
            "Extract the reward DEX only when the user directly states it",
        ),
        _to_dex,
    ),
    FieldSpec(
        "creator_address",
        True,
        FieldGuidance(
            "The address of the creator of the token",
            "0x742d35Cc6634C0532925a3b844Bc454e4438f44e",
            "0x1234567890123456789012345678901234567890123456789012345678901234",
            "Extract the creator address only when the user directly states it",
        ),
        _to_text,
        _check_address,
    ),
    FieldSpec(
        "trading_fee",
        False,
        FieldGuidance(
            "The trading fee of the token in basis points",
            "0-5%, 1.25%, 4.1% (0-500 basis points)",
            "-1%, 6%, 100%",
            "Extract the trading fee only when the user directly states it",
        ),
        _to_basis_points,
        _range_between(0, MAX_TRADING_FEE_BPS),
    ),
    FieldSpec(
        "max_wallet_percent",
        False,
        FieldGuidance(
            "The max share of supply one wallet may hold, in basis points",
            "0-100%, 1.25%, 90% (0-10000 basis points, 0 means no limit)",
            "-1%, 101%",
            "Extract the max wallet percent only when the user directly states it",
        ),
        _to_basis_points,
        _range_between(0, MAX_WALLET_PERCENT_BPS),
    ),
    FieldSpec(
        "image_description",
        False,
        FieldGuidance(
            "A description of the token logo to generate",
            "a grumpy cat astronaut, neon colors",
            "an image url",
            "Extract the image description only when the user describes how the logo should look",
        ),
        _to_text,
    ),
    _social("website", "https://example.com, https://www.example.com/subpage", "example, www"),
    _social("twitter", "https://x.com/example, https://twitter.com/example, @example", "example, www.example"),
    _social("telegram", "https://t.me/example, @example", "example, www.example"),
    _social("discord", "https://discord.gg/example", "example, www.example"),
]

FIELD_CATALOG: Dict[str, FieldSpec] = {spec.name: spec for spec in _CATALOG}

CONTROL_FIELDS: FrozenSet[str] = frozenset(
    {"received_token_request", "has_requested_confirmation", "is_confirmed", "last_updated"}
)


def required_fields() -> List[str]:
    return [spec.name for spec in _CATALOG if spec.required]


def optional_fields() -> List[str]:
    return [spec.name for spec in _CATALOG if not spec.required]


def field_spec(field: str) -> FieldSpec:
    spec = FIELD_CATALOG.get(field)
    if spec is None:
        raise UnknownFieldError(field)
    return spec


def guidance(field: str) -> FieldGuidance:
    return field_spec(field).guidance


def coerce_field(field: str, raw: Any) -> Any:
    """Raises ValueError when ``raw`` cannot be turned into a value for ``field``."""
    return field_spec(field).coerce(raw)


def validate_field(field: str, value: Any) -> Optional[str]:
    """Reason ``value`` is not launchable, or None. Unset values are not checked here."""
    spec = field_spec(field)
    if value is None or spec.check is None:
        return None
    return spec.check(value)
