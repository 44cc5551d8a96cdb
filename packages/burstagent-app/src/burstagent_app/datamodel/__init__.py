from .fields import (
    CONTROL_FIELDS,
    FieldGuidance,
    coerce_field,
    guidance,
    optional_fields,
    required_fields,
    validate_field,
)
from .types import (
    DEX_ORDINALS,
    BurstDEX,
    BurstTokenDraft,
    CurveDetails,
    DexAllocation,
    DraftState,
    LaunchResult,
    TokenMetadata,
)

__all__ = [
    "BurstDEX",
    "DEX_ORDINALS",
    "BurstTokenDraft",
    "CurveDetails",
    "DexAllocation",
    "DraftState",
    "LaunchResult",
    "TokenMetadata",
    "CONTROL_FIELDS",
    "FieldGuidance",
    "coerce_field",
    "guidance",
    "optional_fields",
    "required_fields",
    "validate_field",
]
