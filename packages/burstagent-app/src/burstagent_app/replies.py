"""Plain-text replies for each outcome of a conversation turn."""

from typing import List

from .aggregator import TurnResult
from .datamodel import BurstTokenDraft, DraftState, guidance
from .errors import SubmissionFailed, SubmissionRejected, TokenValidationError

APEX_BURST_URL = "https://apexdefi.xyz/burst"

_LABELS = {
    "name": "Name",
    "symbol": "Symbol",
    "total_supply": "Total Supply",
    "description": "Description",
    "burst_amount": "Burst Amount",
    "dex_allocations": "DEX Allocations",
    "reward_dex": "Reward DEX",
    "creator_address": "Creator Address",
    "trading_fee": "Trading Fee",
    "max_wallet_percent": "Max Wallet",
    "image_description": "Image Description",
    "website": "Website",
    "twitter": "Twitter",
    "telegram": "Telegram",
    "discord": "Discord",
}


def _percent(bps: int) -> str:
    return f"{bps / 100:g}%"


def format_value(field: str, draft: BurstTokenDraft) -> str:
    value = draft.value_of(field)
    if field == "dex_allocations":
        return ", ".join(f"{a.dex.value}({_percent(a.allocation)})" for a in value)
    if field in ("trading_fee", "max_wallet_percent"):
        return _percent(value)
    if field == "reward_dex":
        return value.value
    if field == "burst_amount":
        return f"{value} AVAX"
    return str(value)


def summarize(draft: BurstTokenDraft) -> List[str]:
    return [
        f"- {_LABELS[field]}: {format_value(field, draft)}"
        for field in _LABELS
        if draft.value_of(field) not in (None, "", [])
    ]


def _missing(fields: List[str]) -> List[str]:
    lines = []
    for field in fields:
        rule = guidance(field)
        lines.append(f"- {_LABELS[field]}: {rule.description} (e.g. {rule.valid_example})")
    return lines


def _error_text(result: TurnResult) -> str:
    error = result.error
    if isinstance(error, TokenValidationError):
        label = _LABELS.get(error.field, error.field)
        if result.state == DraftState.AWAITING_CONFIRMATION:
            return f"{label} {error.reason}. Please correct it and confirm again."
        return f"{label} {error.reason}. Please send a valid value."
    if isinstance(error, SubmissionRejected):
        return f"The factory rejected the token ({error.reason}). Please adjust the parameters or try again."
    if isinstance(error, SubmissionFailed) and error.tx_hash:
        return f"The transaction {error.tx_hash} did not complete ({error.reason}). Type 'confirm' to try again."
    return "Something went wrong while creating the token. Type 'confirm' to try again later."


def render_reply(result: TurnResult, explorer_url: str = "https://snowtrace.io") -> str:
    if result.state == DraftState.CANCELLED:
        return "Token creation cancelled. Tell me when you want to create a new token."

    if result.state == DraftState.CONFIRMED and result.launch is not None:
        launch = result.launch
        lines = [
            f"Created token for {launch.creator_address}",
            f"Name: {result.draft.name}",
            f"Symbol: {result.draft.symbol}",
        ]
        if launch.token_known:
            lines.append(f"CA: {explorer_url}/address/{launch.token_address}")
        lines.append(f"TX: {explorer_url}/tx/{launch.tx_hash}")
        if launch.token_known:
            lines.append(f"Link: {APEX_BURST_URL}/{launch.token_address}")
        return "\n".join(lines)

    if result.state == DraftState.EMPTY:
        if result.error is not None:
            return "I could not read that message, please try again."
        return "Tell me you want to create a token and I will guide you through the launch on Apex Burst."

    lines: List[str] = []
    if result.error is not None:
        lines += [_error_text(result), ""]

    summary = summarize(result.draft)
    if result.state == DraftState.AWAITING_CONFIRMATION:
        lines += ["Please confirm these token details:", *summary]
        if result.missing_optional:
            lines += ["", "Optional fields you can still set:", *_missing(result.missing_optional)]
        lines += ["", "Type 'confirm' to create the token or 'cancel' to start over."]
        return "\n".join(lines)

    if summary:
        lines += ["Current token details:", *summary, ""]
    lines += ["Please provide:", *_missing(result.missing_required)]
    if not result.missing_required:
        lines += ["- DEX allocations that add up to 100% and include the reward DEX"]
    return "\n".join(lines)
