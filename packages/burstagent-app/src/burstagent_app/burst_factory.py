"""Turns a confirmed draft into a ``burstTokenWithCreator`` transaction.

The launcher validates the draft one last time, pins the token metadata,
picks the bonding curve that matches the requested burst amount, dry-runs the
call, submits it and waits for it to be confirmed. Every failure leaves as a
``BurstTokenError`` subclass so the caller can report it and keep the draft.
"""

import logging
import math
from typing import Any, List, Optional, Protocol, Sequence, Tuple, Union

from web3 import Web3

from ._constants import (
    BURST_AMOUNT_STEP,
    DEFAULT_CONFIRMATIONS,
    DEFAULT_CURVE_INDEX,
    DEFAULT_CURVE_STYLE,
    DEFAULT_METADATA_IPFS_URI,
    LOGGER_NAME,
    ZERO_ADDRESS,
    ZERO_SALT,
)
from .completeness import missing_required
from .datamodel import BurstTokenDraft, CurveDetails, LaunchResult, TokenMetadata, validate_field
from .errors import BurstTokenError, ExternalServiceError, SubmissionFailed, SubmissionRejected, TokenValidationError
from .ledger import LedgerClient
from .metrics import launch_duration, launch_failure_count, launch_success_count
from .pinata_service import PinataService
from .token_image import TokenImageGenerator

logger = logging.getLogger(LOGGER_NAME)

LOGO_SIZE = (256, 256)
BANNER_SIZE = (1500, 500)


class ImagePromptWriter(Protocol):
    async def write(self, concept: str, style: str) -> Optional[str]: ...


def round_to_step(amount: Union[int, float], step: int = BURST_AMOUNT_STEP) -> int:
    """Nearest multiple of ``step``, halves round up (52.5 -> 55)."""
    return int(math.floor(amount / step + 0.5) * step)


class BurstTokenLauncher:
    def __init__(
        self,
        ledger: LedgerClient,
        pinata: Optional[PinataService] = None,
        image_generator: Optional[TokenImageGenerator] = None,
        prompt_writer: Optional[ImagePromptWriter] = None,
        confirmations: int = DEFAULT_CONFIRMATIONS,
        curve_style: int = DEFAULT_CURVE_STYLE,
        default_curve_index: int = DEFAULT_CURVE_INDEX,
        receipt_timeout: float = 180,
    ) -> None:
        self._ledger = ledger
        self._pinata = pinata
        self._image_generator = image_generator
        self._prompt_writer = prompt_writer
        self._confirmations = confirmations
        self._curve_style = curve_style
        self._default_curve_index = default_curve_index
        self._receipt_timeout = receipt_timeout

    def validate(self, draft: BurstTokenDraft, account_address: str) -> BurstTokenDraft:
        """Returns a copy ready for submission; a zero creator address becomes ``account_address``."""
        missing = missing_required(draft)
        if missing:
            raise TokenValidationError(missing[0], "is required")

        creator = draft.creator_address
        if creator.lower() == ZERO_ADDRESS:
            creator = account_address
        draft = draft.model_copy(update={"creator_address": creator})

        for field in (
            "name",
            "symbol",
            "burst_amount",
            "creator_address",
            "trading_fee",
            "max_wallet_percent",
            "dex_allocations",
        ):
            reason = validate_field(field, draft.value_of(field))
            if reason:
                raise TokenValidationError(field, reason)

        if draft.total_supply <= 0 or Web3.to_wei(draft.total_supply, "ether") == 0:
            raise TokenValidationError("total_supply", "must be greater than 0")

        if draft.reward_dex not in {allocation.dex for allocation in draft.dex_allocations}:
            raise TokenValidationError("reward_dex", f"{draft.reward_dex.value} has no DEX allocation")
        return draft

    def select_curve_index(
        self, burst_amount: Union[int, float], curves: Sequence[CurveDetails], style: Optional[int] = None
    ) -> int:
        style = self._curve_style if style is None else style
        target = round_to_step(burst_amount)
        for curve in curves:
            if not curve.avax_at_launch or curve.curve_style != style:
                continue
            if round_to_step(curve.avax_threshold) == target:
                return curve.index
        logger.info(f"no curve of style {style} for {burst_amount} AVAX, using curve {self._default_curve_index}")
        return self._default_curve_index

    def build_call_args(self, draft: BurstTokenDraft, metadata_uri: str, curve_index: int) -> List[Any]:
        allocations: List[Tuple[int, bool, int]] = [
            (allocation.dex.ordinal, allocation.dex == draft.reward_dex, allocation.allocation)
            for allocation in draft.dex_allocations
        ]
        return [
            draft.name,
            draft.symbol,
            Web3.to_wei(draft.total_supply, "ether"),
            draft.trading_fee or 0,
            draft.max_wallet_percent or 0,
            metadata_uri,
            curve_index,
            ZERO_SALT,
            allocations,
            Web3.to_checksum_address(draft.creator_address),
        ]

    async def launch(self, draft: BurstTokenDraft) -> LaunchResult:
        with launch_duration.time():
            try:
                result = await self._launch(draft)
            except BurstTokenError as e:
                launch_failure_count.labels(reason=type(e).__name__).inc()
                raise
        launch_success_count.inc()
        return result

    async def _launch(self, draft: BurstTokenDraft) -> LaunchResult:
        draft = self.validate(draft, self._ledger.account_address)
        metadata_uri = await self._pin_metadata(draft)
        logger.info(f"metadata for {draft.symbol}: {metadata_uri}")

        try:
            curves = await self._ledger.get_all_curves()
        except Exception as e:
            logger.error(f"Error reading bonding curves: {e}")
            raise ExternalServiceError("burst factory", e) from e
        curve_index = self.select_curve_index(draft.burst_amount, curves)

        args = self.build_call_args(draft, metadata_uri, curve_index)
        logger.info(f"burstTokenWithCreator params: {args}")

        try:
            simulated = await self._ledger.simulate_burst(args)
        except Exception as e:
            logger.error(f"Dry run failed: {e}")
            raise SubmissionRejected(f"dry run failed: {e}", cause=e) from e
        if not simulated:
            raise SubmissionRejected("dry run returned no token address")

        try:
            tx_hash = await self._ledger.send_burst(args)
        except Exception as e:
            logger.error(f"Error sending transaction: {e}")
            raise SubmissionFailed("transaction could not be sent", cause=e) from e
        logger.info(f"Transaction: {tx_hash}")

        try:
            receipt = await self._ledger.wait_for_receipt(tx_hash, self._confirmations, self._receipt_timeout)
        except Exception as e:
            logger.error(f"Error waiting for {tx_hash}: {e}")
            raise SubmissionFailed("transaction was not confirmed", tx_hash=tx_hash, cause=e) from e
        logger.debug(f"Receipt: {receipt}")
        if receipt["status"] == 0:
            raise SubmissionFailed("transaction reverted", tx_hash=tx_hash)

        token_address = self._token_address(receipt)
        return LaunchResult(
            tx_hash=tx_hash,
            token_address=token_address,
            curve_index=curve_index,
            metadata_uri=metadata_uri,
            creator_address=draft.creator_address,
        )

    def _token_address(self, receipt: Any) -> str:
        try:
            token_address = self._ledger.parse_token_created(receipt)
        except Exception as e:
            logger.warning(f"Error parsing TokenCreated event: {e}")
            token_address = None
        if not token_address:
            logger.warning("TokenCreated event not found in receipt")
            return ZERO_ADDRESS
        return token_address

    async def _pin_metadata(self, draft: BurstTokenDraft) -> str:
        if self._pinata is None:
            logger.warning("pinning is not configured, using default metadata")
            return DEFAULT_METADATA_IPFS_URI

        concept = f"{draft.name} ({draft.symbol}) token - {draft.image_description or draft.description}"
        logo = await self._pin_image(concept, "logo", LOGO_SIZE, f"{draft.symbol}_logo.png")
        banner = await self._pin_image(concept, "banner", BANNER_SIZE, f"{draft.symbol}_banner.png")
        metadata = TokenMetadata(
            name=draft.name,
            ticker=draft.symbol,
            description=draft.description or "",
            logo=logo,
            banner=banner,
            website=draft.website or "",
            x=draft.twitter or "",
            telegram=draft.telegram or "",
            discord=draft.discord or "",
        )
        return await self._pinata.upload_metadata(metadata)

    async def _pin_image(self, concept: str, style: str, size: Tuple[int, int], file_name: str) -> Optional[str]:
        if self._image_generator is None or self._pinata is None:
            return None
        prompt = await self._image_prompt(concept, style)
        image = await self._image_generator.generate(prompt, *size)
        if image is None:
            return None
        uri = await self._pinata.upload_image(image, file_name)
        logger.info(f"{file_name} uploaded to IPFS: {uri}")
        return uri

    async def _image_prompt(self, concept: str, style: str) -> str:
        fallback = f"image for {concept}" if style == "logo" else f"{style} style image for {concept}"
        if self._prompt_writer is None:
            return fallback
        try:
            prompt = await self._prompt_writer.write(concept, style)
        except Exception as e:
            logger.error(f"Error writing {style} image prompt: {e}")
            return fallback
        return prompt or fallback
