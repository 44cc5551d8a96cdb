# defines the token launch draft and the values exchanged with the burst factory contract

import enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .._constants import TOKEN_DECIMALS, ZERO_ADDRESS


class BurstDEX(str, enum.Enum):
    """Liquidity venues the factory can seed. Parsing is case-insensitive and accepts ordinals."""

    APEX = "APEX"
    JOE = "JOE"
    PHARAOH = "PHARAOH"
    PANGOLIN = "PANGOLIN"

    @classmethod
    def _missing_(cls, value: object) -> Optional["BurstDEX"]:
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        if isinstance(value, int) and not isinstance(value, bool):
            for dex, ordinal in DEX_ORDINALS.items():
                if ordinal == value:
                    return dex
        return None

    @property
    def ordinal(self) -> int:
        """The uint8 the factory contract expects for this venue."""
        return DEX_ORDINALS[self]


DEX_ORDINALS: Dict[BurstDEX, int] = {
    BurstDEX.APEX: 0,
    BurstDEX.JOE: 1,
    BurstDEX.PHARAOH: 2,
    BurstDEX.PANGOLIN: 3,
}


class DraftState(str, enum.Enum):
    EMPTY = "empty"
    COLLECTING = "collecting"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class DexAllocation(BaseModel):
    dex: BurstDEX
    # basis points, 2500 == 25%
    allocation: int


class BurstTokenDraft(BaseModel):
    """Token parameters gathered from one user over several turns.

    Every user supplied field starts out unset. The control fields are owned
    by the aggregator and are never copied from extraction output.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # required
    name: Optional[str] = None
    symbol: Optional[str] = None
    total_supply: Optional[int] = None
    description: Optional[str] = None
    burst_amount: Optional[Union[int, float]] = None
    dex_allocations: Optional[List[DexAllocation]] = None
    reward_dex: Optional[BurstDEX] = None
    creator_address: Optional[str] = None

    # optional
    trading_fee: Optional[int] = None
    max_wallet_percent: Optional[int] = None
    image_description: Optional[str] = None
    website: Optional[str] = None
    twitter: Optional[str] = None
    telegram: Optional[str] = None
    discord: Optional[str] = None

    # control
    received_token_request: bool = False
    has_requested_confirmation: bool = False
    is_confirmed: Optional[bool] = None
    last_updated: Optional[int] = None

    def value_of(self, field: str) -> Any:
        return getattr(self, field)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class CurveDetails(BaseModel):
    index: int
    curve_style: int
    # wei
    avax_at_launch: int
    base_price: int = 0
    percent_of_lp: int = 0
    distribution: List[int] = Field(default_factory=list)
    bin_step_scale_factor: List[int] = Field(default_factory=list)

    @property
    def avax_threshold(self) -> float:
        return self.avax_at_launch / 10**TOKEN_DECIMALS


class BurstAudio(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    ipfs_uri: Optional[str] = Field(default=None, alias="ipfsURI")


class TokenMetadata(BaseModel):
    """The JSON document pinned to IPFS and referenced by the token's metadata URI."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    ticker: str
    description: str = ""
    logo: Optional[str] = None
    banner: Optional[str] = None
    website: str = ""
    x: str = ""
    telegram: str = ""
    discord: str = ""
    decimals: int = TOKEN_DECIMALS
    burst_audio: BurstAudio = Field(default_factory=BurstAudio, alias="burstAudio")


class LaunchResult(BaseModel):
    tx_hash: str
    token_address: str
    curve_index: int
    metadata_uri: str
    creator_address: str

    @property
    def token_known(self) -> bool:
        """False when the receipt carried no TokenCreated event."""
        return self.token_address.lower() != ZERO_ADDRESS
